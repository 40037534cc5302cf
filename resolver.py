# resolver.py - classify a command name as builtin, external or unknown

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from external_runner import resolve_executable


class CommandKind(Enum):
    EXIT = "exit"
    ECHO = "echo"
    TYPE = "type"
    PWD = "pwd"
    CD = "cd"
    EXTERNAL = "external"
    UNRESOLVED = "unresolved"


# Builtins always shadow an executable of the same name on $PATH.
BUILTINS = {
    "exit": CommandKind.EXIT,
    "echo": CommandKind.ECHO,
    "type": CommandKind.TYPE,
    "pwd": CommandKind.PWD,
    "cd": CommandKind.CD,
}


@dataclass(frozen=True)
class CommandInfo:
    kind: CommandKind
    path: Optional[str] = None  # only set for EXTERNAL


def resolve_command(name: str) -> CommandInfo:
    """Classify name as a builtin, an executable on $PATH, or unresolved."""
    kind = BUILTINS.get(name)
    if kind is not None:
        return CommandInfo(kind)
    path = resolve_executable(name)
    if path is not None:
        return CommandInfo(CommandKind.EXTERNAL, path)
    return CommandInfo(CommandKind.UNRESOLVED)
