"""Stateful facade over the functional emulator core."""

from typing import Optional

import jax
import numpy as np

from emul8 import keypad, timers
from emul8.config import MachineConfig
from emul8.emulator import load_rom, step
from emul8.errors import Chip8Error, MachineNotLoaded
from emul8.logging import get_logger
from emul8.state import EmulatorState, RunState, create_state

logger = get_logger()


class Machine:
    """A CHIP-8 machine owning one emulator state.

    All mutation goes through this object, which swaps in a new immutable
    state on every call. Hosts that deliver input from another thread should
    hand the whole Machine between threads rather than share it.
    """

    def __init__(self, config: Optional[MachineConfig] = None, seed: int = 0, trace: bool = False):
        """Create an empty machine.

        Args:
            config: Interpreter quirks and scheduling defaults
            seed: Seed for the random instruction's PRNG key
            trace: Log every executed instruction at DEBUG level
        """
        self.config = config if config is not None else MachineConfig()
        self.seed = seed
        self.trace = trace
        self._rom: Optional[bytes] = None
        self._state = self._fresh_state()

    def _fresh_state(self) -> EmulatorState:
        return create_state(self.config, jax.random.PRNGKey(self.seed))

    def _require_loaded(self):
        if self._rom is None:
            raise MachineNotLoaded()

    @property
    def state(self) -> EmulatorState:
        return self._state

    @property
    def loaded(self) -> bool:
        return self._rom is not None

    @property
    def status(self) -> RunState:
        return self._state.status

    @property
    def fault(self) -> Optional[Chip8Error]:
        return self._state.fault

    @property
    def sound_active(self) -> bool:
        return timers.sound_active(self._state)

    def load(self, rom: bytes):
        """Initialize memory with the font and the given program.

        Raises:
            RomTooLarge: The program does not fit; the machine is left untouched
        """
        rom = bytes(rom)
        state = load_rom(self._fresh_state(), rom)
        self._rom = rom
        self._state = state
        logger.info(f"Loaded {len(rom)} byte ROM at 0x{self.config.program_start:03X}")

    def reset(self):
        """Reinitialize all state and reload the last program, if any."""
        self._state = self._fresh_state()
        if self._rom is not None:
            self._state = load_rom(self._state, self._rom)
        logger.info("Machine reset")

    def step(self) -> RunState:
        """Run one cycle and return the resulting run state."""
        self._require_loaded()
        self._state = step(self._state, trace=self.trace)
        return self._state.status

    def tick_timers(self):
        """Apply one timer tick."""
        self._state = timers.tick(self._state)

    def set_key(self, key: int, pressed: bool):
        self._state = keypad.set_key(self._state, key, pressed)

    def is_key_down(self, key: int) -> bool:
        return keypad.is_key_down(self._state, key)

    def pressed_key(self, since_wait: bool = False) -> Optional[int]:
        """Lowest key down, or with ``since_wait`` the lowest pressed since FX0A began."""
        if since_wait:
            return keypad.newly_pressed_key(self._state)
        return keypad.any_key_down(self._state)

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the display, ``bool[32, 64]`` indexed ``[y, x]``."""
        pixels = np.array(self._state.display, dtype=np.bool_)
        pixels.setflags(write=False)
        return pixels
