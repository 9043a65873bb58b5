from enum import Enum


class Instruction(Enum):
    INCREMENT = '+'
    DECREMENT = '-'
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'

    @classmethod
    def parse(cls, char):
        """Map one source character to its instruction, or None for comments."""
        return _BY_CHAR.get(char)

    def __str__(self):
        return self.value


_BY_CHAR = {op.value: op for op in Instruction}


def iter_instructions(source):
    for c in source:
        op = _BY_CHAR.get(c)
        if op is not None:
            yield op


def lex(source):
    """
    Filter source text down to its instruction sequence.
    Anything that is not one of the eight operators is a comment and dropped;
    bracket balance is not checked here.
    """
    return list(iter_instructions(source))


def render(instructions):
    return ''.join(op.value for op in instructions)
