import sys

from bf_errors import (
    InputExhausted,
    PointerOutOfRange,
    StepLimitExceeded,
    UnmatchedLoopEnd,
    UnmatchedLoopStart,
)
from bf_lexer import Instruction, lex

TAPE_SIZE = 32768

EOF_ZERO = 'zero'
EOF_UNCHANGED = 'unchanged'
EOF_ERROR = 'error'
EOF_POLICIES = (EOF_ZERO, EOF_UNCHANGED, EOF_ERROR)


class Interpreter:
    """
    Tape machine for the eight-instruction language.

    The tape and data pointer live as long as the instance; each load()
    starts a fresh program with an empty control stack.

    stdin/stdout are binary streams (default: the process's own).
    eof picks what ',' does at end of input: store 0, keep the cell,
    or raise InputExhausted.
    max_steps bounds the number of dispatched instructions (None = no bound).
    """

    def __init__(self, tape_size=TAPE_SIZE, stdin=None, stdout=None,
                 eof=EOF_ZERO, max_steps=None):
        if tape_size < 1:
            raise ValueError(f"tape_size must be positive, got {tape_size}")
        if eof not in EOF_POLICIES:
            raise ValueError(f"eof must be one of {EOF_POLICIES}, got {eof!r}")

        self.tape = [0] * tape_size
        self.ptr = 0
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.eof = eof
        self.max_steps = max_steps

        self.ops = []
        self.pc = 0
        self.stack = []
        self.step_count = 0

    @property
    def finished(self):
        return self.pc >= len(self.ops)

    def load(self, instructions):
        self.ops = list(instructions)
        self.pc = 0
        self.stack = []
        self.step_count = 0

    def reset(self):
        self.tape = [0] * len(self.tape)
        self.ptr = 0
        self.load([])

    def run_step(self):
        if self.pc >= len(self.ops):
            return False

        if self.max_steps is not None and self.step_count >= self.max_steps:
            raise StepLimitExceeded(self.max_steps, self.pc)

        op = self.ops[self.pc]
        self.step_count += 1

        if op is Instruction.INCREMENT:
            self.tape[self.ptr] = (self.tape[self.ptr] + 1) % 256
        elif op is Instruction.DECREMENT:
            self.tape[self.ptr] = (self.tape[self.ptr] - 1) % 256
        elif op is Instruction.MOVE_RIGHT:
            if self.ptr + 1 >= len(self.tape):
                raise PointerOutOfRange(self.ptr + 1, len(self.tape), self.pc)
            self.ptr += 1
        elif op is Instruction.MOVE_LEFT:
            if self.ptr == 0:
                raise PointerOutOfRange(-1, len(self.tape), self.pc)
            self.ptr -= 1
        elif op is Instruction.OUTPUT:
            self.stdout.write(bytes((self.tape[self.ptr],)))
            self.stdout.flush()
        elif op is Instruction.INPUT:
            self._read_cell()
        elif op is Instruction.LOOP_START:
            if self.tape[self.ptr] != 0:
                self.stack.append(self.pc)
            else:
                self.pc = self._matching_loop_end(self.pc)
        elif op is Instruction.LOOP_END:
            if not self.stack:
                raise UnmatchedLoopEnd(self.pc)
            # The advance below lands back on the '[' so it re-tests the cell.
            self.pc = self.stack.pop() - 1

        self.pc += 1
        return True

    def _read_cell(self):
        data = self.stdin.read(1)
        if data:
            self.tape[self.ptr] = data[0]
        elif self.eof == EOF_ZERO:
            self.tape[self.ptr] = 0
        elif self.eof == EOF_ERROR:
            raise InputExhausted(self.pc)

    def _matching_loop_end(self, start):
        depth = 0
        i = start + 1
        while i < len(self.ops):
            op = self.ops[i]
            if op is Instruction.LOOP_START:
                depth += 1
            elif op is Instruction.LOOP_END:
                if depth == 0:
                    return i
                depth -= 1
            i += 1
        raise UnmatchedLoopStart(start)

    def execute(self, instructions):
        self.load(instructions)
        while self.run_step():
            pass

    def run(self, source):
        self.execute(lex(source))
