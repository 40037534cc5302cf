#!/usr/bin/env python3
# commands.py - command values and the executor for myshell

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import NoReturn, Optional, TextIO, Tuple, Union, assert_never

from errors import ExecutionError
from external_runner import run_external
from redirection import Environment
from resolver import CommandKind

# -----------------------
# Command values
# One frozen dataclass per builtin plus External; Command is the closed union.
# -----------------------
@dataclass(frozen=True)
class Exit:
    code: int


@dataclass(frozen=True)
class Echo:
    words: Tuple[str, ...]


@dataclass(frozen=True)
class Type:
    name: str
    resolved_kind: CommandKind
    resolved_path: Optional[str] = None  # only meaningful for EXTERNAL


@dataclass(frozen=True)
class Pwd:
    path: str  # captured when the line was parsed


@dataclass(frozen=True)
class Cd:
    target_path: str  # already tilde-expanded


@dataclass(frozen=True)
class External:
    path: str
    args: Tuple[str, ...]  # args[0] is the name as typed, not the path


Command = Union[Exit, Echo, Type, Pwd, Cd, External]

# -----------------------
# Simple helpers
# -----------------------
def _println(sink: TextIO, msg: str = "") -> None:
    sink.write(msg + "\n")
    sink.flush()

# -----------------------
# Builtin commands
# Each takes its command value and the environment, returns an exit status
# -----------------------
def exit_shell(cmd: Exit, env: Environment) -> NoReturn:
    # does not return; Repl closes redirected files on the way out
    sys.exit(cmd.code)


def echo(cmd: Echo, env: Environment) -> int:
    _println(env.stdout, " ".join(cmd.words))
    return 0


def type_builtin(cmd: Type, env: Environment) -> int:
    if cmd.resolved_kind is CommandKind.EXTERNAL:
        _println(env.stdout, f"{cmd.name} is {cmd.resolved_path}")
    elif cmd.resolved_kind is CommandKind.UNRESOLVED:
        _println(env.stdout, f"{cmd.name}: not found")
    else:
        _println(env.stdout, f"{cmd.name} is a shell builtin")
    return 0


def print_working_directory(cmd: Pwd, env: Environment) -> int:
    _println(env.stdout, cmd.path)
    return 0


def change_directory(cmd: Cd, env: Environment) -> int:
    try:
        os.chdir(cmd.target_path)
    except OSError:
        _println(env.stderr, f"cd: {cmd.target_path}: No such file or directory")
        return 1
    return 0


def run_command(cmd: External, env: Environment) -> int:
    try:
        return run_external(cmd.path, list(cmd.args), env.stdout, env.stderr)
    except ExecutionError as e:
        _println(env.stderr, str(e))
        return e.status

# -----------------------
# Executor
# -----------------------
def execute(cmd: Command, env: Environment) -> int:
    """Carry out cmd with the sinks in env and return its exit status.

    Exit never returns; it raises SystemExit with the requested code."""
    if isinstance(cmd, Exit):
        exit_shell(cmd, env)
    elif isinstance(cmd, Echo):
        return echo(cmd, env)
    elif isinstance(cmd, Type):
        return type_builtin(cmd, env)
    elif isinstance(cmd, Pwd):
        return print_working_directory(cmd, env)
    elif isinstance(cmd, Cd):
        return change_directory(cmd, env)
    elif isinstance(cmd, External):
        return run_command(cmd, env)
    else:
        assert_never(cmd)
