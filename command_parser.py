# command_parser.py - turn resolved words into a typed Command

from __future__ import annotations

import os
import re
from typing import List

from commands import Cd, Command, Echo, Exit, External, Pwd, Type
from errors import CommandNotFound, InvalidExitCode, ParseError, UsageError
from resolver import CommandKind, resolve_command

_EXIT_CODE = re.compile(r"[+-]?[0-9]+")


def _one_arg(usage: str, suffix: List[str]) -> str:
    if len(suffix) != 1:
        raise UsageError(usage)
    return suffix[0]


def expand_home(path: str) -> str:
    # only a bare "~" is expanded
    if path == "~":
        return os.environ.get("HOME", "")
    return path


def parse(words: List[str]) -> Command:
    """Build a Command from the words left after redirection.

    words[0] is resolved against the builtins and $PATH; the rest are the
    arguments. Raises CommandNotFound or a ParseError subclass.
    """
    if not words:
        raise ParseError("syntax error: empty command")
    name, suffix = words[0], words[1:]
    info = resolve_command(name)

    if info.kind is CommandKind.UNRESOLVED:
        raise CommandNotFound(name)

    if info.kind is CommandKind.EXIT:
        arg = _one_arg("exit <code>", suffix)
        if not _EXIT_CODE.fullmatch(arg):
            raise InvalidExitCode()
        try:
            code = int(arg)
        except ValueError:
            # longer than the interpreter will convert
            raise InvalidExitCode() from None
        return Exit(code)

    if info.kind is CommandKind.ECHO:
        return Echo(tuple(suffix))

    if info.kind is CommandKind.TYPE:
        target = _one_arg("type <command>", suffix)
        found = resolve_command(target)
        return Type(target, found.kind, found.path)

    if info.kind is CommandKind.PWD:
        try:
            return Pwd(os.getcwd())
        except OSError as e:
            raise ParseError(f"pwd: {e.strerror}") from e

    if info.kind is CommandKind.CD:
        return Cd(expand_home(_one_arg("cd <path>", suffix)))

    return External(info.path, (name, *suffix))
