from bf_lexer import Instruction, iter_instructions, lex, render


def test_every_operator_maps():
    assert lex("+-><.,[]") == [
        Instruction.INCREMENT,
        Instruction.DECREMENT,
        Instruction.MOVE_RIGHT,
        Instruction.MOVE_LEFT,
        Instruction.OUTPUT,
        Instruction.INPUT,
        Instruction.LOOP_START,
        Instruction.LOOP_END,
    ]


def test_comments_dropped_and_order_kept():
    src = "add two: ++ then\n move > and print .  # done"
    assert render(lex(src)) == "++>."


def test_no_operators_gives_empty_sequence():
    assert lex("") == []
    assert lex("hello world") == []


def test_brackets_not_validated():
    assert render(lex("]]][")) == "]]]["


def test_parse_single_character():
    assert Instruction.parse('[') is Instruction.LOOP_START
    assert Instruction.parse('x') is None


def test_iter_instructions_is_lazy():
    it = iter_instructions("a+b-")
    assert next(it) is Instruction.INCREMENT
    assert next(it) is Instruction.DECREMENT
