"""CHIP-8 system instructions (0x0xxx)."""

from emul8.state import EmulatorState
from emul8.decode import DecodedInstruction
from emul8.display import clear
from emul8.registers import set_pc
from emul8.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return set_pc(state.replace(stack=stack), address)
