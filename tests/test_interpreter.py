from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
import io
import tempfile
import unittest
from unittest import mock

import rainfuck.interpreter as interpreter_module
from rainfuck import (
    Interpreter,
    MemoryOverflow,
    ParseCodeError,
    PointerOverflow,
    SourcePathError,
    run,
)
from rainfuck.cli import main as cli_main

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


class InterpreterTests(unittest.TestCase):
    def test_hello_world(self) -> None:
        self.assertEqual(run(HELLO_WORLD), "Hello World!\n")

    def test_echo_input(self) -> None:
        self.assertEqual(run(",[.,]", input_data=b"abc"), "abc")

    def test_comments_are_ignored(self) -> None:
        source = "add two: ++ print it: ."
        self.assertEqual(run(source), chr(2))

    def test_round_trip_state(self) -> None:
        output = io.StringIO()
        interpreter = Interpreter(input_stream=io.BytesIO(), output=output)
        interpreter.interpret("++>+++++[<+>-]<.")
        self.assertEqual(interpreter.state.tape[0], 7)
        self.assertEqual(output.getvalue(), chr(7))

    def test_strict_mode_rejects_unbalanced_brackets(self) -> None:
        output = io.StringIO()
        interpreter = Interpreter(input_stream=io.BytesIO(), output=output)
        with self.assertRaises(ParseCodeError) as ctx:
            interpreter.interpret("+.]+[.")
        self.assertEqual(output.getvalue(), "")
        self.assertEqual([d.position for d in ctx.exception.diagnostics], [2, 4])
        self.assertIn("loop ending at #2 has no start", str(ctx.exception))
        self.assertIn("loop starting at #4 has no end", str(ctx.exception))

    def test_lenient_mode_runs_parsed_subset(self) -> None:
        with self.assertLogs("rainfuck.interpreter", level="WARNING"):
            output = run("+.]+.[+", strict=False)
        self.assertEqual(output, chr(1) + chr(2))

    def test_strict_mode_does_not_log_diagnostics(self) -> None:
        interpreter = Interpreter(input_stream=io.BytesIO(), output=io.StringIO())
        with mock.patch.object(interpreter_module.logger, "warning") as warning:
            with self.assertRaises(ParseCodeError):
                interpreter.interpret("[")
        warning.assert_not_called()

    def test_deeply_nested_program(self) -> None:
        depth = 5000
        self.assertEqual(run("[" * depth + "]" * depth), "")
        self.assertEqual(run("+" * 65 + "[" * depth + "." + "-" * 65 + "]" * depth), "A")

    def test_runtime_errors_propagate(self) -> None:
        with self.assertRaises(PointerOverflow):
            run("<")
        with self.assertRaises(MemoryOverflow):
            run("-")

    def test_custom_tape_length(self) -> None:
        with self.assertRaises(PointerOverflow):
            run(">>>", tape_length=3)

    def test_instance_runs_once(self) -> None:
        interpreter = Interpreter(input_stream=io.BytesIO(), output=io.StringIO())
        interpreter.interpret("+")
        with self.assertRaises(RuntimeError):
            interpreter.interpret("+")

    def test_parse_helper_reports_diagnostics(self) -> None:
        result = Interpreter().parse("[+")
        self.assertEqual(result.operations, [])
        self.assertFalse(result.ok)


class CliTests(unittest.TestCase):
    def _run_cli(self, source: str, *extra: str):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "program.bf"
            path.write_text(source, encoding="utf-8")
            stdout = io.StringIO()
            stderr = io.StringIO()
            with redirect_stdout(stdout), redirect_stderr(stderr):
                exit_code = cli_main([str(path), *extra])
        return exit_code, stdout.getvalue(), stderr.getvalue()

    def test_runs_program(self) -> None:
        exit_code, stdout, _ = self._run_cli(HELLO_WORLD)
        self.assertEqual(exit_code, 0)
        self.assertEqual(stdout, "Hello World!\n")

    def test_missing_file(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            exit_code = cli_main(["does/not/exist.bf"])
        self.assertEqual(exit_code, 1)
        self.assertIn("Could not read source code from does/not/exist.bf", stderr.getvalue())

    def test_runtime_error_exit_code(self) -> None:
        exit_code, _, stderr = self._run_cli("<")
        self.assertEqual(exit_code, 1)
        self.assertIn("Error: Pointer overflow", stderr)

    def test_unbalanced_source_fails_by_default(self) -> None:
        exit_code, stdout, stderr = self._run_cli("+.[")
        self.assertEqual(exit_code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("has no end", stderr)

    def test_unbalanced_source_reported_once(self) -> None:
        exit_code, _, stderr = self._run_cli("]")
        self.assertEqual(exit_code, 1)
        self.assertEqual(stderr.count("has no start"), 1)

    def test_deeply_nested_source(self) -> None:
        depth = 5000
        exit_code, stdout, stderr = self._run_cli("[" * depth + "]" * depth)
        self.assertEqual(exit_code, 0, stderr)
        self.assertEqual(stdout, "")

    def test_lenient_flag(self) -> None:
        exit_code, stdout, _ = self._run_cli("+.[", "--lenient")
        self.assertEqual(exit_code, 0)
        self.assertEqual(stdout, chr(1))

    def test_max_steps_flag(self) -> None:
        exit_code, _, stderr = self._run_cli("+[]", "--max-steps", "100")
        self.assertEqual(exit_code, 1)
        self.assertIn("step count", stderr)

    def test_source_path_error_type(self) -> None:
        from rainfuck.cli import _read_source

        with self.assertRaises(SourcePathError):
            _read_source("does/not/exist.bf")


if __name__ == "__main__":
    unittest.main()
