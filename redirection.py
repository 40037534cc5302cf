# redirection.py - bind > and >> targets into a per-command environment

from __future__ import annotations

import os
import sys
from typing import List, Optional, TextIO

from errors import MissingTarget, RedirectOpenError, UnsupportedFd
from lexer import Token, TokenKind

FILE_MODE = 0o644

_OPEN_FLAGS = {
    TokenKind.REDIRECT_OUT: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    TokenKind.REDIRECT_APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}


class Environment:
    """Output sinks for a single command invocation.

    Starts out pointing at the shell's own stdout/stderr. Redirections swap
    in files; close() releases only the files this environment opened.
    """

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stdout: TextIO = stdout if stdout is not None else sys.stdout
        self.stderr: TextIO = stderr if stderr is not None else sys.stderr
        self._owned: List[TextIO] = []

    def bind(self, fd: int, sink: TextIO) -> None:
        if fd == 1:
            old, self.stdout = self.stdout, sink
        elif fd == 2:
            old, self.stderr = self.stderr, sink
        else:
            raise UnsupportedFd(fd)
        self._owned.append(sink)
        # `> a > b` leaves a created but only b is written
        if old in self._owned:
            self._owned.remove(old)
            old.close()

    def close(self) -> None:
        while self._owned:
            self._owned.pop().close()

    def __repr__(self):
        return f"Environment(stdout={self.stdout!r}, stderr={self.stderr!r})"


def open_target(path: str, kind: TokenKind) -> TextIO:
    try:
        fd = os.open(path, _OPEN_FLAGS[kind], FILE_MODE)
    except OSError as e:
        raise RedirectOpenError(path, e.strerror or str(e)) from e
    return os.fdopen(fd, "w", encoding="utf-8")


def apply_redirects(env: Environment, tokens: List[Token]) -> List[str]:
    """Bind every redirection in tokens into env and return the plain words.

    One left-to-right pass. An IO number sets the source fd for the next
    operator only; the fd goes back to 1 after each redirection. Any error
    stops the pass, and files already bound stay owned by env so the caller's
    env.close() releases them.
    """
    words: List[str] = []
    source_fd = 1
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok.kind is TokenKind.IO_NUMBER:
            try:
                source_fd = int(tok.text)
            except ValueError:
                raise UnsupportedFd(tok.text) from None
            i += 1
        elif tok.kind in _OPEN_FLAGS:
            if i + 1 >= len(tokens) or tokens[i + 1].kind is not TokenKind.WORD:
                raise MissingTarget()
            if source_fd not in (1, 2):
                raise UnsupportedFd(source_fd)
            env.bind(source_fd, open_target(tokens[i + 1].text, tok.kind))
            source_fd = 1
            i += 2
        else:
            words.append(tok.text)
            i += 1
    return words
