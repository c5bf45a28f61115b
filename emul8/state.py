"""CHIP-8 emulator state structures."""

import enum
from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from emul8.config import MachineConfig
from emul8.constants import MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS
from emul8.errors import Chip8Error
from emul8.display import create_display
from emul8.memory import load_font


class RunState(enum.Enum):
    """Execution state inspected by the scheduler before each cycle."""
    RUNNING = "running"
    WAITING = "waiting"  # blocked on FX0A until a key goes down
    HALTED = "halted"    # fault encountered, terminal


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls. Capacity is ``data.shape[0]``."""
    data: jnp.ndarray
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The display is row-major, ``bool[SCREEN_HEIGHT, SCREEN_WIDTH]`` indexed
    ``[y, x]``.
    """
    rng: jax.Array
    memory: jnp.ndarray
    pc: jnp.ndarray
    display: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keypad: jnp.ndarray
    held_keys: jnp.ndarray  # keys already down when FX0A began and not yet released
    V: jnp.ndarray
    I: jnp.ndarray
    config: MachineConfig = field(pytree_node=False, default=MachineConfig())
    status: RunState = field(pytree_node=False, default=RunState.RUNNING)
    waiting_register: int = field(pytree_node=False, default=0)
    fault: Optional[Chip8Error] = field(pytree_node=False, default=None)


def create_state(
    config: Optional[MachineConfig] = None,
    rng: Optional[jax.Array] = None,
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if config is None:
        config = MachineConfig()
    if rng is None:
        rng = jax.random.PRNGKey(0)

    state = EmulatorState(
        rng=rng,
        memory=jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8),
        pc=jnp.asarray(config.program_start, dtype=jnp.uint16),
        display=create_display(),
        stack=StackState(data=jnp.zeros(config.stack_depth, dtype=jnp.uint16)),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        held_keys=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
        config=config,
    )
    return state.replace(memory=load_font(state.memory))
