# errors.py - exception hierarchy for myshell
"""
Every failure that can happen while turning one line into a command and
running it is a ShellError. Repl.process_line is the only place that catches
them: it prints the message to stderr and moves on to the next line.

    ShellError
    ├── LexError
    │   └── UnterminatedQuote
    ├── RedirectError
    │   ├── MissingTarget
    │   ├── UnsupportedFd
    │   └── RedirectOpenError
    ├── ResolutionError
    │   └── CommandNotFound
    ├── ParseError
    │   ├── UsageError
    │   └── InvalidExitCode
    └── ExecutionError
"""

from __future__ import annotations


class ShellError(Exception):
    """Base class for all per-line shell errors."""

    status = 1


class LexError(ShellError):
    """Raised when a line cannot be split into tokens."""

    status = 2


class UnterminatedQuote(LexError):
    """Raised when a line ends inside a quoted run."""

    def __init__(self, quote: str):
        super().__init__(f"syntax error: unterminated {quote}")
        self.quote = quote


class RedirectError(ShellError):
    """Raised when a redirection cannot be applied."""


class MissingTarget(RedirectError):
    """Raised when a redirection operator is not followed by a word."""

    status = 2

    def __init__(self):
        super().__init__("syntax error: missing redirection target")


class UnsupportedFd(RedirectError):
    """Raised for a redirection source fd other than 1 or 2."""

    def __init__(self, fd: int | str):
        super().__init__(f"error: redirecting fd {fd} not supported")
        self.fd = fd


class RedirectOpenError(RedirectError):
    """Raised when the redirection target cannot be opened."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path


class ResolutionError(ShellError):
    """Raised when a command name cannot be resolved."""

    status = 127


class CommandNotFound(ResolutionError):
    def __init__(self, name: str):
        super().__init__(f"{name}: command not found")
        self.name = name


class ParseError(ShellError):
    """Raised when resolved words do not form a valid command."""

    status = 2


class UsageError(ParseError):
    """Wrong number of arguments for a builtin."""

    def __init__(self, usage: str):
        super().__init__(f"usage: {usage}")


class InvalidExitCode(ParseError):
    def __init__(self):
        super().__init__("exit: invalid code")


class ExecutionError(ShellError):
    """Raised when a command fails while running."""

    def __init__(self, message: str, status: int = 1):
        super().__init__(message)
        self.status = status
