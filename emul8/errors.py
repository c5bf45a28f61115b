"""CHIP-8 machine faults."""

from typing import Optional


class Chip8Error(Exception):
    """Base class for every fault raised by the machine."""


class OutOfBounds(Chip8Error):
    """Memory access past the end of the 4 KiB address space."""

    def __init__(self, address: int, message: Optional[str] = None):
        super().__init__(message or f"Memory access out of bounds at 0x{address:04X}")
        self.address = address


class InvalidRegister(Chip8Error):
    """General register index outside V0-VF."""

    def __init__(self, index: int):
        super().__init__(f"Invalid register V{index} (expected 0-15)")
        self.index = index


class InvalidKey(Chip8Error):
    """Key index outside the 16-key hex keypad."""

    def __init__(self, key: int):
        super().__init__(f"Invalid key {key} (expected 0-15)")
        self.key = key


class StackOverflow(Chip8Error):
    """Subroutine call with every stack frame in use."""

    def __init__(self, depth: int):
        super().__init__(f"Stack overflow (capacity {depth} frames)")
        self.depth = depth


class StackUnderflow(Chip8Error):
    """Return with an empty call stack."""

    def __init__(self):
        super().__init__("Stack underflow (return with empty stack)")


class RomTooLarge(OutOfBounds):
    """Program does not fit between the load origin and the end of memory.

    ``address`` is the first byte the program would need past the end.
    """

    def __init__(self, size: int, capacity: int, address: int):
        super().__init__(address, f"ROM of {size} bytes exceeds {capacity} bytes of program memory")
        self.size = size
        self.capacity = capacity


class UnknownOpcode(Chip8Error):
    """Instruction word that does not decode to a supported instruction."""

    def __init__(self, opcode: int, address: Optional[int] = None):
        location = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unknown opcode 0x{opcode:04X}{location}")
        self.opcode = opcode
        self.address = address


class MachineNotLoaded(Chip8Error):
    """Cycle requested before any program was loaded."""

    def __init__(self):
        super().__init__("No program loaded")
