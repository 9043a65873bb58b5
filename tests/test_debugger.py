from debugger import Debugger


def test_step_and_state(capsys):
    dbg = Debugger("++>+")
    assert dbg.run_step()
    assert dbg.run_step()
    assert dbg.pc == 2
    assert dbg.itp.tape[0] == 2
    dbg.print_state()
    out = capsys.readouterr().out
    assert "PC: 2 / 4" in out
    assert "Ptr: 0" in out


def test_step_count_command():
    dbg = Debugger("+++++")
    dbg.handle("s 3")
    assert dbg.itp.tape[0] == 3
    dbg.handle("s 10")
    assert dbg.itp.finished


def test_breakpoint_stops_continue(capsys):
    dbg = Debugger("+++[-]>+")
    dbg.handle("b 4")
    assert 4 in dbg.breakpoints
    dbg.handle("c")
    assert dbg.pc == 4
    assert "Breakpoint hit at 4" in capsys.readouterr().out

    dbg.handle("b 4")
    assert not dbg.breakpoints
    dbg.handle("c")
    assert dbg.itp.finished
    assert dbg.itp.tape[:2] == [0, 1]


def test_memory_dump(capsys):
    dbg = Debugger("+++>++")
    dbg.handle("c")
    capsys.readouterr()
    dbg.handle("m 0 2")
    out = capsys.readouterr().out
    assert "[0000]: 3" in out
    assert "[0001]: 2" in out


def test_bad_commands_print_usage(capsys):
    dbg = Debugger("+")
    assert dbg.handle("b")
    assert dbg.handle("m x")
    assert dbg.handle("z")
    out = capsys.readouterr().out
    assert "Usage: b <pc>" in out
    assert "Usage: m [addr] [count]" in out
    assert "Unknown command: z" in out
    assert not dbg.handle("q")


def test_program_error_stops_session(capsys):
    dbg = Debugger("+]")
    dbg.handle("c")
    assert dbg.error is not None
    assert "Unmatched ']'" in capsys.readouterr().out
    assert not dbg.run_step()


def test_output_and_input_are_captured():
    dbg = Debugger(",+.", input_data=b"a")
    dbg.handle("c")
    assert dbg.output.getvalue() == b"b"


def test_run_loop_with_scripted_input(monkeypatch, capsys):
    commands = iter(["s", "", "c"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))
    dbg = Debugger("+++.")
    dbg.run()
    assert dbg.itp.finished
    assert dbg.output.getvalue() == b"\x03"
    assert "Execution finished." in capsys.readouterr().out


def test_state_shows_source_window(capsys):
    dbg = Debugger("comment ++[-]")
    dbg.handle("s 2")
    dbg.print_state()
    out = capsys.readouterr().out
    assert "Src: ++[-]" in out
    assert "       ^" in out
