"""Timer-tick driven cycle scheduler."""

import time
from typing import Callable, Iterator, Optional

import numpy as np
from flax.struct import dataclass, field

from emul8.errors import Chip8Error, MachineNotLoaded
from emul8.logging import build_progress_bar, get_logger
from emul8.machine import Machine
from emul8.state import RunState

logger = get_logger()


@dataclass(frozen=True)
class Frame:
    """What the host sees after a timer tick.

    Attributes:
        pixels: Read-only display snapshot, ``bool[32, 64]`` indexed ``[y, x]``
        sound_active: Whether the buzzer should sound during this tick
        status: Machine run state after the tick
        fault: Error that halted the machine, if any
        tick: One-based index of the timer tick
    """
    pixels: np.ndarray
    sound_active: bool = field(pytree_node=False)
    status: RunState = field(pytree_node=False)
    fault: Optional[Chip8Error] = field(pytree_node=False, default=None)
    tick: int = field(pytree_node=False, default=0)

    @property
    def halted(self) -> bool:
        return self.status is RunState.HALTED


class ManualClock:
    """Clock that never sleeps; for tests and headless runs."""

    def __init__(self):
        self.ticks = 0

    def wait(self):
        self.ticks += 1


class RealTimeClock:
    """Clock holding a fixed wall-clock tick rate."""

    def __init__(self, hz: int = 60):
        self.period = 1.0 / hz
        self._deadline: Optional[float] = None

    def wait(self):
        now = time.perf_counter()
        if self._deadline is None:
            self._deadline = now
        elif now < self._deadline:
            time.sleep(self._deadline - now)
        else:
            # Behind schedule, restart the cadence from now
            self._deadline = now
        self._deadline += self.period


class Scheduler:
    """Drives a machine: one timer tick, then a batch of cycles, per frame."""

    def __init__(self, machine: Machine, clock=None, cycles_per_tick: Optional[int] = None):
        """
        Args:
            machine: Loaded machine to drive
            clock: Object with a ``wait()`` method called before every tick
            cycles_per_tick: Overrides the machine config's batch size
        """
        self.machine = machine
        self.clock = clock if clock is not None else ManualClock()
        self.cycles_per_tick = (
            cycles_per_tick if cycles_per_tick is not None else machine.config.cycles_per_tick
        )
        if self.cycles_per_tick < 1:
            raise ValueError(f"cycles_per_tick must be positive, got {self.cycles_per_tick}")
        self.ticks = 0

    @classmethod
    def realtime(cls, machine: Machine, cycles_per_tick: Optional[int] = None) -> "Scheduler":
        """Scheduler paced by a wall clock at the machine's configured timer rate."""
        return cls(machine, RealTimeClock(machine.config.timer_hz), cycles_per_tick)

    def tick(self) -> Frame:
        """Tick the timers once, then run up to ``cycles_per_tick`` cycles.

        The batch ends early when the machine halts or is waiting for a key
        that is not down.
        """
        machine = self.machine
        if not machine.loaded:
            raise MachineNotLoaded()

        if machine.status is not RunState.HALTED or machine.config.tick_timers_when_halted:
            machine.tick_timers()

        for _ in range(self.cycles_per_tick):
            if machine.status is RunState.HALTED:
                break
            if machine.status is RunState.WAITING and machine.pressed_key(since_wait=True) is None:
                break
            machine.step()

        self.ticks += 1
        return Frame(
            pixels=machine.snapshot(),
            sound_active=machine.sound_active,
            status=machine.status,
            fault=machine.fault,
            tick=self.ticks,
        )

    def frames(self, max_ticks: Optional[int] = None) -> Iterator[Frame]:
        """Yield one frame per clock tick, ending with the frame that reports a halt."""
        count = 0
        while max_ticks is None or count < max_ticks:
            self.clock.wait()
            frame = self.tick()
            count += 1
            yield frame
            if frame.halted:
                return

    def run(
        self,
        ticks: int,
        on_frame: Optional[Callable[[Frame], None]] = None,
        progress: bool = False,
    ) -> Optional[Frame]:
        """Run for a number of timer ticks, stopping early on a halt.

        Args:
            ticks: Number of timer ticks to run
            on_frame: Renderer/audio callback receiving each frame
            progress: Show a tqdm progress bar

        Returns:
            The last frame produced, or None if ticks is 0
        """
        progress_bar = build_progress_bar(ticks) if progress else None
        last_frame = None
        try:
            for frame in self.frames(ticks):
                if on_frame is not None:
                    on_frame(frame)
                if progress_bar is not None:
                    progress_bar.update(1)
                last_frame = frame
        finally:
            if progress_bar is not None:
                progress_bar.close()

        if last_frame is not None and last_frame.halted:
            logger.warning(f"Stopped after {last_frame.tick} ticks: {last_frame.fault}")
        return last_frame
