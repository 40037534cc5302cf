# external_runner.py
from __future__ import annotations
import os, stat, subprocess
from typing import List, Optional, TextIO

from errors import ExecutionError

NOT_FOUND = 127
NOT_EXEC  = 126

_ANY_EXEC = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def is_executable(path: str) -> bool:
    try:
        st = os.stat(path)
    except OSError:
        # doesn't matter what it is if we can't stat it
        return False
    return bool(st.st_mode & _ANY_EXEC)


def resolve_executable(cmd: str) -> Optional[str]:
    """Return the path of the executable for cmd, or None.

    If cmd contains '/', treat it as a direct path. Otherwise walk $PATH in
    order; the first entry with any execute bit set wins. Nothing is cached,
    PATH and the filesystem may change between lines."""
    if not cmd:
        return None
    if "/" in cmd:
        return cmd if is_executable(cmd) else None
    for directory in os.environ.get("PATH", "").split(":"):
        candidate = os.path.join(directory, cmd)
        if is_executable(candidate):
            return candidate
    return None


def _child_stream(sink: TextIO):
    """Hand the child the sink itself when it has a real fd, else a pipe."""
    try:
        sink.fileno()
    except (AttributeError, OSError, ValueError):
        return subprocess.PIPE
    # anything the shell already buffered must land before the child's output
    sink.flush()
    return sink


def _drain(data: Optional[bytes], sink: TextIO) -> None:
    if data:
        sink.write(data.decode("utf-8", errors="replace"))
        sink.flush()


def run_external(path: str, args: List[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run path with argv=args and block until it exits.

    stdin is inherited from the shell. Returns the child's exit code (negative
    if it died from a signal). Raises ExecutionError when the child cannot be
    started or waited on."""
    name = args[0] if args else path
    out_target = _child_stream(stdout)
    err_target = _child_stream(stderr)
    try:
        proc = subprocess.Popen(args, executable=path, cwd=os.getcwd(),
                                stdout=out_target, stderr=err_target)
    except PermissionError as e:
        raise ExecutionError(f"{name}: {e.strerror}", NOT_EXEC) from e
    except OSError as e:
        raise ExecutionError(f"{name}: {e.strerror or e}", NOT_FOUND) from e

    try:
        if out_target is subprocess.PIPE or err_target is subprocess.PIPE:
            out, err = proc.communicate()
            _drain(out, stdout)
            _drain(err, stderr)
            return proc.returncode
        return proc.wait()
    except OSError as e:
        proc.kill()
        proc.wait()
        raise ExecutionError(f"{name}: {e.strerror or e}") from e
