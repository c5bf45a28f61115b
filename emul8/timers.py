"""Delay and sound timers.

Both timers count down toward zero once per timer tick, independently of
how many instructions run between ticks.
"""

import jax.numpy as jnp

from emul8.constants import BYTE_MASK
from emul8.state import EmulatorState


def _decrement(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, timer).astype(jnp.uint8)


def tick(state: EmulatorState) -> EmulatorState:
    """Decrement each nonzero timer by one."""
    return state.replace(
        delay_timer=_decrement(state.delay_timer),
        sound_timer=_decrement(state.sound_timer),
    )


def set_delay(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(delay_timer=jnp.asarray(value & BYTE_MASK, dtype=jnp.uint8))


def set_sound(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(sound_timer=jnp.asarray(value & BYTE_MASK, dtype=jnp.uint8))


def get_delay(state: EmulatorState) -> int:
    return int(state.delay_timer)


def get_sound(state: EmulatorState) -> int:
    return int(state.sound_timer)


def sound_active(state: EmulatorState) -> bool:
    """True while the sound timer is nonzero."""
    return int(state.sound_timer) > 0
