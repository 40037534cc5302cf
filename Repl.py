#!/usr/bin/env python3
# Repl.py - read-eval loop for myshell: interactive, piped stdin and script mode
import glob
import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory, InMemoryHistory

import argparser
import command_parser
import commands
import lexer
import redirection
from errors import ShellError
from external_runner import is_executable
from resolver import BUILTINS

# ------------------------------------------------------------
# Globals
# ------------------------------------------------------------
# --trace: echo each resolved command to stderr before running it
TRACE = False

# -----------------------
# Line processor
# -----------------------
def process_line(line: str, stdout=None, stderr=None) -> int:
    """Lex, redirect, parse and execute one line; return its exit status.

    Shell errors are printed to stderr and turned into a status. Files opened
    by redirection are closed on every path, including `exit`.
    """
    env = redirection.Environment(stdout, stderr)
    err = stderr if stderr is not None else sys.stderr
    try:
        tokens = lexer.tokenize(line)
        words = redirection.apply_redirects(env, tokens)
        if not words:
            return 0
        cmd = command_parser.parse(words)
        if TRACE:
            print(f"+ {cmd!r}", file=err)
        return commands.execute(cmd, env)
    except ShellError as e:
        print(e, file=err)
        return e.status
    finally:
        env.close()


def run_line(line: str) -> int:
    # one bad line must never take the shell down; SystemExit from `exit` passes
    try:
        return process_line(line)
    except Exception as e:
        print(f"myshell: {e}", file=sys.stderr)
        return 1

# -----------------------
# Completion
# -----------------------
def path_executables(prefix: str):
    found = set()
    for directory in os.environ.get("PATH", "").split(":"):
        try:
            names = os.listdir(directory or ".")
        except OSError:
            continue
        for name in names:
            if name.startswith(prefix) and is_executable(os.path.join(directory, name)):
                found.add(name)
    return found


class ShellCompleter(Completer):
    def __init__(self, builtins):
        self.builtins = set(builtins)

    def get_completions(self, document, complete_event):
        # The word the user is currently typing
        word_before_cursor = document.get_word_before_cursor(WORD=True)
        word_len = len(word_before_cursor)

        # 1. First word: builtins and executables on $PATH
        if document.text_before_cursor.lstrip() == word_before_cursor:
            names = {b for b in self.builtins if b.startswith(word_before_cursor)}
            if word_before_cursor and "/" not in word_before_cursor:
                names |= path_executables(word_before_cursor)
            for name in sorted(names):
                yield Completion(name, -word_len)
            if "/" not in word_before_cursor:
                return

        # 2. Everything else: file paths
        if word_before_cursor:
            for path in sorted(glob.glob(glob.escape(word_before_cursor) + "*")):
                display = path + os.sep if os.path.isdir(path) else path
                yield Completion(display, -word_len)

# -----------------------
# Readers
# -----------------------
def run_interactive(prompt_text: str, history_file=None) -> int:
    history = FileHistory(history_file) if history_file else InMemoryHistory()
    session = PromptSession(history=history, completer=ShellCompleter(BUILTINS))
    while True:
        try:
            line = session.prompt(prompt_text)
        except KeyboardInterrupt:
            continue
        except EOFError:
            break
        run_line(line)
    return 0


def run_piped(prompt_text: str, stream=None) -> int:
    stream = stream if stream is not None else sys.stdin
    while True:
        sys.stdout.write(prompt_text)
        sys.stdout.flush()
        line = stream.readline()
        if not line:
            break
        run_line(line.rstrip("\n"))
    return 0


def run_script(path: str) -> int:
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as e:
        print(f"myshell: {path}: {e.strerror}", file=sys.stderr)
        return 1
    with f:
        for line in f:
            line = line.rstrip("\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            run_line(line)
    return 0

# -----------------------
# Main
# -----------------------
def main(argv=None):
    global TRACE
    args = argparser.build_parser().parse_args(argv)
    TRACE = args.trace

    if args.script:
        return run_script(args.script)
    if sys.stdin.isatty():
        history_file = None if args.no_history else args.history_file
        return run_interactive(args.prompt, history_file)
    return run_piped(args.prompt)


if __name__ == "__main__":
    sys.exit(main())
