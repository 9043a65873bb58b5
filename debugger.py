import io

from bf_errors import BrainfuckError
from bf_interpreter import EOF_ZERO, TAPE_SIZE, Interpreter
from bf_lexer import lex, render


class Colors:
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    REVERSE = '\033[7m'


class Debugger:
    def __init__(self, code, tape_size=TAPE_SIZE, input_data=b"", eof=EOF_ZERO, max_steps=None):
        self.output = io.BytesIO()
        self.itp = Interpreter(tape_size, stdin=io.BytesIO(input_data),
                               stdout=self.output, eof=eof, max_steps=max_steps)
        self.itp.load(lex(code))
        self.breakpoints = set()
        self.error = None

    @property
    def pc(self):
        return self.itp.pc

    @property
    def ops(self):
        return self.itp.ops

    def run_step(self):
        """Execute one instruction. Returns False once the program is done or has failed."""
        if self.error is not None:
            return False
        try:
            return self.itp.run_step()
        except BrainfuckError as e:
            self.error = e
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            return False

    def run_continue(self):
        while self.run_step():
            if self.pc in self.breakpoints:
                print(f"Breakpoint hit at {self.pc}")
                return True
        return False

    def toggle_breakpoint(self, pc):
        if pc in self.breakpoints:
            self.breakpoints.remove(pc)
            print(f"Breakpoint removed at {pc}")
        else:
            self.breakpoints.add(pc)
            print(f"Breakpoint set at {pc}")

    def dump_memory(self, addr, count):
        tape = self.itp.tape
        print("Memory Dump:")
        for i in range(max(0, addr), min(len(tape), addr + count)):
            print(f"[{i:04}]: {tape[i]}")

    def print_state(self):
        itp = self.itp
        print(f"\n{Colors.BOLD}--- Step {itp.step_count} ---{Colors.ENDC}")
        print(f"PC: {itp.pc} / {len(itp.ops)}")
        print(f"Ptr: {itp.ptr}")
        print(f"Loops: {itp.stack}")

        # Tape window around ptr
        window = 8
        start = max(0, itp.ptr - window)
        end = min(len(itp.tape), itp.ptr + window + 1)

        tape_str = ""
        for i in range(start, end):
            val = f"{itp.tape[i]:03}"
            if i == itp.ptr:
                tape_str += f"{Colors.REVERSE}[{val}]{Colors.ENDC} "
            else:
                tape_str += f" {val}  "
        print(f"Loc: {tape_str}")

        context_window = 2
        start_op = max(0, itp.pc - context_window)
        end_op = min(len(itp.ops), itp.pc + context_window + 1)

        for i in range(start_op, end_op):
            if i == itp.pc:
                print(f"{Colors.GREEN}-> {i:04}: {itp.ops[i]}{Colors.ENDC}")
            else:
                print(f"   {i:04}: {itp.ops[i]}")

        # Wider source view, cursor marked with '^'
        code_window = 20
        start_src = max(0, itp.pc - code_window)
        before = render(itp.ops[start_src:itp.pc])
        print(f"Src: {before}{render(itp.ops[itp.pc:itp.pc + code_window + 1])}")
        print(f"     {' ' * len(before)}^")

        self.print_output()

    def print_output(self):
        out = self.output.getvalue()
        if out:
            print(f"{Colors.CYAN}Out: {out.decode('latin-1')!r}{Colors.ENDC}")

    def handle(self, cmd):
        """Run one debugger command. Returns False when the session should end."""
        if cmd.startswith('s'):
            parts = cmd.split()
            try:
                n = int(parts[1]) if len(parts) > 1 else 1
            except ValueError:
                print("Usage: s [count]")
                return True
            for _ in range(n):
                if not self.run_step():
                    break
        elif cmd.startswith('c'):
            self.run_continue()
        elif cmd.startswith('q'):
            return False
        elif cmd.startswith('m'):
            parts = cmd.split()
            try:
                addr = int(parts[1]) if len(parts) > 1 else self.itp.ptr
                count = int(parts[2]) if len(parts) > 2 else 20
            except ValueError:
                print("Usage: m [addr] [count]")
                return True
            self.dump_memory(addr, count)
        elif cmd.startswith('b'):
            try:
                self.toggle_breakpoint(int(cmd.split()[1]))
            except (IndexError, ValueError):
                print("Usage: b <pc>")
        else:
            print(f"Unknown command: {cmd}")
        return True

    def run(self):
        print("BF Debugger started. Commands: (s)tep [n], (c)ontinue, (q)uit, (m)em dump [addr] [count], (b)reakpoint <pc>, enter to repeat last")
        last_cmd = 's'
        while not self.itp.finished and self.error is None:
            self.print_state()
            try:
                cmd = input(f"{Colors.BLUE}(bf-dbg){Colors.ENDC} ").strip()
            except EOFError:
                break

            if cmd == '':
                cmd = last_cmd
            last_cmd = cmd

            if not self.handle(cmd):
                break

        self.print_output()
        print("Execution finished.")
