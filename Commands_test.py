# Commands_test.py
import io
import os
import shutil
import tempfile
import unittest

from commands import Cd, Echo, Exit, External, Pwd, Type, execute
from external_runner import NOT_EXEC, NOT_FOUND
from redirection import Environment
from resolver import CommandKind

SH = shutil.which("sh") or "/bin/sh"


class ExecutorTestCase(unittest.TestCase):
    def setUp(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.env = Environment(self.out, self.err)


class TestBuiltins(ExecutorTestCase):
    def test_echo(self):
        self.assertEqual(execute(Echo(("hello", "world")), self.env), 0)
        self.assertEqual(self.out.getvalue(), "hello world\n")

    def test_echo_no_words(self):
        execute(Echo(()), self.env)
        self.assertEqual(self.out.getvalue(), "\n")

    def test_pwd(self):
        execute(Pwd("/some/where"), self.env)
        self.assertEqual(self.out.getvalue(), "/some/where\n")

    def test_type_builtin(self):
        execute(Type("cd", CommandKind.CD), self.env)
        self.assertEqual(self.out.getvalue(), "cd is a shell builtin\n")

    def test_type_external(self):
        execute(Type("ls", CommandKind.EXTERNAL, "/bin/ls"), self.env)
        self.assertEqual(self.out.getvalue(), "ls is /bin/ls\n")

    def test_type_not_found(self):
        execute(Type("nope", CommandKind.UNRESOLVED), self.env)
        self.assertEqual(self.out.getvalue(), "nope: not found\n")
        self.assertEqual(self.err.getvalue(), "")

    def test_exit_raises_system_exit(self):
        with self.assertRaises(SystemExit) as ctx:
            execute(Exit(42), self.env)
        self.assertEqual(ctx.exception.code, 42)


class TestCd(ExecutorTestCase):
    def setUp(self):
        super().setUp()
        self.cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        os.chdir(self.cwd)
        self._tmp.cleanup()

    def test_cd_changes_directory(self):
        self.assertEqual(execute(Cd(self._tmp.name), self.env), 0)
        self.assertEqual(os.path.realpath(os.getcwd()), os.path.realpath(self._tmp.name))
        self.assertEqual(self.err.getvalue(), "")

    def test_cd_missing_leaves_cwd(self):
        target = os.path.join(self._tmp.name, "missing")
        self.assertEqual(execute(Cd(target), self.env), 1)
        self.assertEqual(os.getcwd(), self.cwd)
        self.assertEqual(self.err.getvalue(), f"cd: {target}: No such file or directory\n")
        self.assertEqual(self.err.getvalue().count("\n"), 1)
        self.assertEqual(self.out.getvalue(), "")


class TestExternal(ExecutorTestCase):
    def test_output_into_memory_sinks(self):
        cmd = External(SH, ("sh", "-c", "echo out; echo err >&2"))
        self.assertEqual(execute(cmd, self.env), 0)
        self.assertEqual(self.out.getvalue(), "out\n")
        self.assertEqual(self.err.getvalue(), "err\n")

    def test_argv0_is_passed_through(self):
        execute(External(SH, ("custom-name", "-c", 'echo "$0"')), self.env)
        self.assertEqual(self.out.getvalue(), "custom-name\n")

    def test_exit_status(self):
        self.assertEqual(execute(External(SH, ("sh", "-c", "exit 3")), self.env), 3)

    def test_runs_in_current_directory(self):
        cwd = os.getcwd()
        with tempfile.TemporaryDirectory() as tmp:
            os.chdir(tmp)
            try:
                execute(External(SH, ("sh", "-c", "pwd")), self.env)
            finally:
                os.chdir(cwd)
            self.assertEqual(os.path.realpath(self.out.getvalue().strip()), os.path.realpath(tmp))

    def test_output_into_file_sink(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.txt")
            with open(path, "w") as f:
                env = Environment(f, self.err)
                execute(External(SH, ("sh", "-c", "echo to-file")), env)
            with open(path) as f:
                self.assertEqual(f.read(), "to-file\n")
        self.assertEqual(self.out.getvalue(), "")

    def test_spawn_failure_not_executable(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "plain")
            with open(path, "w") as f:
                f.write("not a program\n")
            os.chmod(path, 0o644)
            status = execute(External(path, ("plain",)), self.env)
        self.assertEqual(status, NOT_EXEC)
        self.assertTrue(self.err.getvalue().startswith("plain: "))

    def test_spawn_failure_missing(self):
        status = execute(External("/definitely/not/here", ("ghost",)), self.env)
        self.assertEqual(status, NOT_FOUND)
        self.assertTrue(self.err.getvalue().startswith("ghost: "))


if __name__ == "__main__":
    unittest.main(verbosity=2)
