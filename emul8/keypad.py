"""Hex keypad input state."""

from typing import Dict, Optional

import jax.numpy as jnp

from emul8.constants import NUM_KEYS
from emul8.errors import InvalidKey
from emul8.state import EmulatorState

# Conventional QWERTY layout for the COSMAC VIP keypad:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  <-  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
DEFAULT_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


def _check_key(key: int) -> None:
    if not 0 <= key < NUM_KEYS:
        raise InvalidKey(key)


def set_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Record a key press or release.

    Releasing a key also drops it from ``held_keys``, so pressing it again
    counts as a new press for a pending FX0A.
    """
    _check_key(key)
    held_keys = state.held_keys if pressed else state.held_keys.at[key].set(False)
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)), held_keys=held_keys)


def is_key_down(state: EmulatorState, key: int) -> bool:
    _check_key(key)
    return bool(state.keypad[key])


def any_key_down(state: EmulatorState) -> Optional[int]:
    """Lowest-numbered pressed key, or None when no key is down."""
    if not jnp.any(state.keypad):
        return None
    return int(jnp.argmax(state.keypad))


def hold_current_keys(state: EmulatorState) -> EmulatorState:
    """Mark every key that is down now as not yet released."""
    return state.replace(held_keys=state.keypad)


def newly_pressed_key(state: EmulatorState) -> Optional[int]:
    """Lowest key pressed since ``hold_current_keys``, or None.

    A key held through the call only counts after it is released and
    pressed again.
    """
    fresh = state.keypad & ~state.held_keys
    if not jnp.any(fresh):
        return None
    return int(jnp.argmax(fresh))
