# lexer.py - split one input line into shell tokens
"""
The lexer is a small state machine that walks the line one character at a
time. Outside quotes it splits on whitespace and on the `>` operator; inside
quotes everything is copied verbatim until the matching quote.

Digits directly in front of `>` (no space) name the file descriptor being
redirected, so `2> err.log` gives IO_NUMBER, REDIRECT_OUT, WORD while
`echo 2 > out` gives WORD, WORD, REDIRECT_OUT, WORD. Only the lexer can see
that adjacency, which is why the reclassification happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from errors import UnterminatedQuote


class TokenKind(Enum):
    WORD = "word"
    IO_NUMBER = "io_number"
    REDIRECT_OUT = ">"
    REDIRECT_APPEND = ">>"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


class LexState(Enum):
    NORMAL = "normal"
    ESCAPED = "escaped"
    IN_SINGLE_QUOTE = "in_single_quote"
    IN_DOUBLE_QUOTE = "in_double_quote"


_QUOTE_STATES = {
    "'": LexState.IN_SINGLE_QUOTE,
    '"': LexState.IN_DOUBLE_QUOTE,
}
_CLOSING_QUOTE = {state: quote for quote, state in _QUOTE_STATES.items()}


class _Lexer:
    def __init__(self):
        self.state = LexState.NORMAL
        self.tokens: List[Token] = []
        self.buf: List[str] = []
        # a word is open even when empty, e.g. after ''
        self.in_word = False
        # quoted or escaped characters never make an IO number
        self.literal = False
        self.operator = ""

    def feed(self, ch: str) -> None:
        if self.state is LexState.ESCAPED:
            self._append(ch, literal=True)
            self.state = LexState.NORMAL
        elif self.state in _CLOSING_QUOTE:
            if ch == _CLOSING_QUOTE[self.state]:
                self.state = LexState.NORMAL
            else:
                self.buf.append(ch)
        else:
            self._feed_normal(ch)

    def _feed_normal(self, ch: str) -> None:
        if ch == ">":
            if self.operator == ">":
                self.operator = ""
                self.tokens.append(Token(TokenKind.REDIRECT_APPEND, ">>"))
            else:
                self._flush_word(delim=ch)
                self.operator = ">"
            return

        self._flush_operator()
        if ch == "\\":
            self.state = LexState.ESCAPED
        elif ch in _QUOTE_STATES:
            self.in_word = True
            self.literal = True
            self.state = _QUOTE_STATES[ch]
        elif ch.isspace():
            self._flush_word(delim=ch)
        else:
            self._append(ch)

    def _append(self, ch: str, literal: bool = False) -> None:
        self.in_word = True
        self.literal = self.literal or literal
        self.buf.append(ch)

    def _flush_operator(self) -> None:
        if self.operator:
            self.tokens.append(Token(TokenKind.REDIRECT_OUT, self.operator))
            self.operator = ""

    def _flush_word(self, delim: str = "") -> None:
        if not self.in_word:
            return
        text = "".join(self.buf)
        kind = TokenKind.WORD
        if delim == ">" and not self.literal and _is_fd_number(text):
            kind = TokenKind.IO_NUMBER
        self.tokens.append(Token(kind, text))
        self.buf = []
        self.in_word = False
        self.literal = False

    def finish(self) -> List[Token]:
        if self.state in _CLOSING_QUOTE:
            raise UnterminatedQuote(_CLOSING_QUOTE[self.state])
        # a dangling backslash has nothing to escape and is dropped
        self._flush_operator()
        self._flush_word()
        return self.tokens


def _is_fd_number(text: str) -> bool:
    return text.isascii() and text.isdigit()


def tokenize(line: str) -> List[Token]:
    """Turn a raw line into tokens.

    Raises UnterminatedQuote if the line ends inside a quoted run.
    """
    lexer = _Lexer()
    for ch in line:
        lexer.feed(ch)
    return lexer.finish()
