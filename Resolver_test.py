# Resolver_test.py
import os
import stat
import tempfile
import unittest
from unittest import mock

from resolver import BUILTINS, CommandInfo, CommandKind, resolve_command


def make_file(directory, name, mode):
    path = os.path.join(directory, name)
    with open(path, "w") as f:
        f.write("#!/bin/sh\nexit 0\n")
    os.chmod(path, mode)
    return path


class TestResolveCommand(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.first = os.path.join(self._tmp.name, "first")
        self.second = os.path.join(self._tmp.name, "second")
        os.mkdir(self.first)
        os.mkdir(self.second)
        path = f"{self.first}:{self.second}"
        self._env = mock.patch.dict(os.environ, {"PATH": path})
        self._env.start()

    def tearDown(self):
        self._env.stop()
        self._tmp.cleanup()

    def test_builtins(self):
        for name, kind in BUILTINS.items():
            self.assertEqual(resolve_command(name), CommandInfo(kind))

    def test_builtin_beats_path(self):
        make_file(self.first, "echo", 0o755)
        make_file(self.first, "cd", 0o755)
        self.assertEqual(resolve_command("echo").kind, CommandKind.ECHO)
        self.assertEqual(resolve_command("cd").kind, CommandKind.CD)

    def test_first_match_wins(self):
        make_file(self.second, "tool", 0o755)
        first = make_file(self.first, "tool", 0o755)
        self.assertEqual(resolve_command("tool"), CommandInfo(CommandKind.EXTERNAL, first))

    def test_non_executable_skipped(self):
        make_file(self.first, "tool", 0o644)
        second = make_file(self.second, "tool", 0o755)
        self.assertEqual(resolve_command("tool").path, second)

    def test_any_execute_bit_counts(self):
        path = make_file(self.first, "other-only", stat.S_IRUSR | stat.S_IWUSR | stat.S_IXOTH)
        self.assertEqual(resolve_command("other-only").path, path)

    def test_unresolved(self):
        info = resolve_command("nosuchcmd")
        self.assertEqual(info.kind, CommandKind.UNRESOLVED)
        self.assertIsNone(info.path)
        self.assertEqual(resolve_command("").kind, CommandKind.UNRESOLVED)

    def test_no_caching(self):
        self.assertEqual(resolve_command("late").kind, CommandKind.UNRESOLVED)
        path = make_file(self.second, "late", 0o755)
        self.assertEqual(resolve_command("late").path, path)
        os.chmod(path, 0o644)
        self.assertEqual(resolve_command("late").kind, CommandKind.UNRESOLVED)

    def test_path_change_between_calls(self):
        path = make_file(self.second, "tool", 0o755)
        self.assertEqual(resolve_command("tool").path, path)
        with mock.patch.dict(os.environ, {"PATH": self.first}):
            self.assertEqual(resolve_command("tool").kind, CommandKind.UNRESOLVED)

    def test_name_with_slash_not_searched(self):
        path = make_file(self.second, "direct", 0o755)
        self.assertEqual(resolve_command(path), CommandInfo(CommandKind.EXTERNAL, path))
        self.assertEqual(resolve_command("sub/direct").kind, CommandKind.UNRESOLVED)

    def test_empty_path(self):
        with mock.patch.dict(os.environ, {"PATH": ""}):
            self.assertEqual(resolve_command("sh").kind, CommandKind.UNRESOLVED)


if __name__ == "__main__":
    unittest.main(verbosity=2)
