class BrainfuckError(Exception):
    """Base class for everything the engine or runner can report."""

    def __init__(self, message, pc=None):
        super().__init__(message)
        self.message = message
        self.pc = pc

    def __str__(self):
        if self.pc is None:
            return self.message
        return f"{self.message} (at instruction {self.pc})"


class SourceIOError(BrainfuckError):
    def __init__(self, path, reason):
        super().__init__(f"Could not read {path}: {reason}")
        self.path = path


class UnmatchedLoopEnd(BrainfuckError):
    def __init__(self, pc):
        super().__init__("Unmatched ']'", pc)


class UnmatchedLoopStart(BrainfuckError):
    def __init__(self, pc):
        super().__init__("Unmatched '['", pc)


class PointerOutOfRange(BrainfuckError):
    def __init__(self, pointer, tape_size, pc):
        super().__init__(
            f"Tape bounds exceeded: pointer {pointer} cannot move outside [0, {tape_size})",
            pc,
        )
        self.pointer = pointer


class InputExhausted(BrainfuckError):
    def __init__(self, pc):
        super().__init__("Input exhausted", pc)


class StepLimitExceeded(BrainfuckError):
    def __init__(self, limit, pc):
        super().__init__(f"Step limit of {limit} exceeded", pc)
        self.limit = limit
