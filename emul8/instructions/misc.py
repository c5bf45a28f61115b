"""CHIP-8 miscellaneous instructions (Fxxx)."""

from emul8.constants import FONT_GLYPH_SIZE, FONT_START, WORD_MASK
from emul8.state import EmulatorState, RunState
from emul8.decode import DecodedInstruction
from emul8.memory import read_block, write_block
from emul8.registers import set_index
from emul8 import keypad, timers


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(timers.get_delay(state)))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return timers.set_delay(state, int(state.V[instruction.x]))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return timers.set_sound(state, int(state.V[instruction.x]))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register. VF is unaffected."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & WORD_MASK
    return set_index(state, new_i)


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Suspends the machine in the WAITING state. Keys already down do not
    count; the next cycle after a key goes down stores it in VX and resumes.
    """
    state = keypad.hold_current_keys(state)
    return state.replace(status=RunState.WAITING, waiting_register=instruction.x)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + digit * FONT_GLYPH_SIZE
    return set_index(state, font_address)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_block(state.memory, int(state.I), digits))


def _advance_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    if not state.config.load_store_increments_index:
        return state
    new_i = (int(state.I) + instruction.x + 1) & WORD_MASK
    return set_index(state, new_i)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    new_memory = write_block(state.memory, int(state.I), state.V[:instruction.x + 1])
    return _advance_index(state.replace(memory=new_memory), instruction)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    values = read_block(state.memory, int(state.I), instruction.x + 1)
    new_V = state.V.at[:instruction.x + 1].set(values)
    return _advance_index(state.replace(V=new_V), instruction)
