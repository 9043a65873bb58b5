#!/usr/bin/env python3
import argparse
import io
import os
import sys
from dataclasses import dataclass
from typing import Optional

from bf_errors import BrainfuckError, SourceIOError
from bf_interpreter import EOF_POLICIES, EOF_ZERO, TAPE_SIZE, Interpreter

EXIT_OK = 0
EXIT_SOURCE_ERROR = 1
EXIT_PROGRAM_ERROR = 3
EXIT_INTERRUPTED = 130


@dataclass
class ExecutionResult:
    output: bytes
    error: Optional[BrainfuckError]
    steps: int
    pointer: int

    @property
    def ok(self):
        return self.error is None


def run_bf(code, input_data=b"", tape_size=TAPE_SIZE, eof=EOF_ZERO, max_steps=None):
    """Run a program on in-memory streams; engine errors come back in the result."""
    if isinstance(input_data, str):
        input_data = input_data.encode('latin-1')

    out = io.BytesIO()
    itp = Interpreter(tape_size, stdin=io.BytesIO(input_data), stdout=out,
                      eof=eof, max_steps=max_steps)
    error = None
    try:
        itp.run(code)
    except BrainfuckError as e:
        error = e
    return ExecutionResult(out.getvalue(), error, itp.step_count, itp.ptr)


def load_source(path):
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError as e:
        raise SourceIOError(path, e.strerror or e) from e


def load_input(path):
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise SourceIOError(path, e.strerror or e) from e


def positive_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def non_negative_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def build_parser():
    # String defaults go through type= as well, so bad environment values
    # become usage errors.
    tape_size = os.environ.get("BF_TAPE_SIZE", str(TAPE_SIZE))
    max_steps = os.environ.get("BF_MAX_STEPS", "0")

    parser = argparse.ArgumentParser(prog="bf_runner.py", description="Run a Brainfuck program.")
    parser.add_argument("file", help="path to the program source")
    parser.add_argument("--tape-size", type=positive_int, default=tape_size,
                        help=f"number of cells (default {tape_size}, env BF_TAPE_SIZE)")
    parser.add_argument("--eof", choices=EOF_POLICIES, default=EOF_ZERO,
                        help="what ',' does at end of input")
    parser.add_argument("--max-steps", type=non_negative_int, default=max_steps,
                        help="stop after this many instructions (0 = no limit, env BF_MAX_STEPS)")
    parser.add_argument("--input", metavar="FILE",
                        help="read program input from FILE instead of stdin (required for input in --debug)")
    parser.add_argument("--debug", action="store_true", help="start the interactive debugger")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    max_steps = args.max_steps if args.max_steps > 0 else None

    try:
        code = load_source(args.file)
        input_data = load_input(args.input) if args.input is not None else None
    except SourceIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SOURCE_ERROR

    if args.debug:
        from debugger import Debugger
        dbg = Debugger(code, tape_size=args.tape_size, input_data=input_data or b"",
                       eof=args.eof, max_steps=max_steps)
        dbg.run()
        return EXIT_PROGRAM_ERROR if dbg.error is not None else EXIT_OK

    stdin = io.BytesIO(input_data) if input_data is not None else None
    itp = Interpreter(args.tape_size, stdin=stdin, eof=args.eof, max_steps=max_steps)
    try:
        itp.run(code)
    except BrainfuckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PROGRAM_ERROR
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return EXIT_INTERRUPTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
