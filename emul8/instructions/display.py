"""CHIP-8 display operations."""

from emul8.constants import FLAG_REGISTER
from emul8.state import EmulatorState
from emul8.decode import DecodedInstruction
from emul8.display import draw_sprite
from emul8.memory import read_block


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw the N-row sprite at I to (VX, VY); VF = collision."""
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])
    sprite = read_block(state.memory, int(state.I), instruction.n)

    display, collision = draw_sprite(state.display, sprite_x, sprite_y, sprite)
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(int(collision))
    )
