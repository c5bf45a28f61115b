"""Register file accessors.

VF (register 15) is an ordinary data register; the arithmetic, shift and
draw instructions overwrite it with their carry/borrow/collision flag.
"""

import jax.numpy as jnp

from emul8.constants import BYTE_MASK, MEMORY_SIZE, NUM_REGISTERS, WORD_MASK
from emul8.errors import InvalidRegister, OutOfBounds
from emul8.state import EmulatorState


def _check_register(index: int) -> None:
    if not 0 <= index < NUM_REGISTERS:
        raise InvalidRegister(index)


def get_register(state: EmulatorState, index: int) -> int:
    _check_register(index)
    return int(state.V[index])


def set_register(state: EmulatorState, index: int, value: int) -> EmulatorState:
    _check_register(index)
    return state.replace(V=state.V.at[index].set(value & BYTE_MASK))


def get_index(state: EmulatorState) -> int:
    return int(state.I)


def set_index(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(I=jnp.asarray(value & WORD_MASK, dtype=jnp.uint16))


def get_pc(state: EmulatorState) -> int:
    return int(state.pc)


def set_pc(state: EmulatorState, address: int) -> EmulatorState:
    """Set the program counter. The target must lie inside memory."""
    if not 0 <= address < MEMORY_SIZE:
        raise OutOfBounds(address)
    return state.replace(pc=jnp.asarray(address, dtype=jnp.uint16))
