"""Interpreter quirk configuration.

Historical CHIP-8 interpreters disagree on a handful of instruction
behaviours. Each divergence is a field of :class:`MachineConfig`, an
immutable value handed to the machine at construction time.
"""

import enum
from typing import Any, Dict, Mapping

from flax import struct

from emul8.constants import (
    DEFAULT_CYCLES_PER_TICK,
    ETI_PROGRAM_START,
    LEGACY_STACK_SIZE,
    PROGRAM_START,
    STACK_SIZE,
    TIMER_HZ,
)


class ShiftSource(enum.Enum):
    """Register shifted by 8XY6/8XYE."""
    VX = "vx"  # CHIP-48 / SUPER-CHIP
    VY = "vy"  # COSMAC VIP: VX = VY shifted


class JumpOffset(enum.Enum):
    """Register added to the target of BNNN."""
    V0 = "v0"  # BNNN: jump to NNN + V0
    VX = "vx"  # BXNN: jump to XNN + VX


SUPPORTED_STACK_DEPTHS = (LEGACY_STACK_SIZE, STACK_SIZE)
SUPPORTED_PROGRAM_STARTS = (PROGRAM_START, ETI_PROGRAM_START)


@struct.dataclass
class MachineConfig:
    """Immutable interpreter configuration.

    Attributes:
        shift_quirk: Source register for the shift instructions
        load_store_increments_index: Whether FX55/FX65 leave I at I + X + 1
        stack_depth: Call stack capacity (12 or 16 frames)
        jump_offset_quirk: Register added by the jump-with-offset instruction
        logic_resets_vf: Whether 8XY1/8XY2/8XY3 clear VF
        program_start: Load origin (0x200, or 0x600 for the ETI 660)
        cycles_per_tick: Instructions executed per timer tick
        timer_hz: Timer tick rate
        tick_timers_when_halted: Keep decrementing timers after a fault
    """
    shift_quirk: ShiftSource = struct.field(pytree_node=False, default=ShiftSource.VX)
    load_store_increments_index: bool = struct.field(pytree_node=False, default=False)
    stack_depth: int = struct.field(pytree_node=False, default=STACK_SIZE)
    jump_offset_quirk: JumpOffset = struct.field(pytree_node=False, default=JumpOffset.V0)
    logic_resets_vf: bool = struct.field(pytree_node=False, default=False)
    program_start: int = struct.field(pytree_node=False, default=PROGRAM_START)
    cycles_per_tick: int = struct.field(pytree_node=False, default=DEFAULT_CYCLES_PER_TICK)
    timer_hz: int = struct.field(pytree_node=False, default=TIMER_HZ)
    tick_timers_when_halted: bool = struct.field(pytree_node=False, default=False)

    def __post_init__(self):
        if not isinstance(self.shift_quirk, ShiftSource):
            raise ValueError(f"shift_quirk must be a ShiftSource, got {self.shift_quirk!r}")
        if not isinstance(self.jump_offset_quirk, JumpOffset):
            raise ValueError(f"jump_offset_quirk must be a JumpOffset, got {self.jump_offset_quirk!r}")
        if self.stack_depth not in SUPPORTED_STACK_DEPTHS:
            raise ValueError(
                f"stack_depth must be one of {SUPPORTED_STACK_DEPTHS}, got {self.stack_depth}"
            )
        if self.program_start not in SUPPORTED_PROGRAM_STARTS:
            raise ValueError(
                f"program_start must be one of "
                f"{[hex(start) for start in SUPPORTED_PROGRAM_STARTS]}, got {self.program_start:#x}"
            )
        if self.cycles_per_tick < 1:
            raise ValueError(f"cycles_per_tick must be positive, got {self.cycles_per_tick}")
        if self.timer_hz < 1:
            raise ValueError(f"timer_hz must be positive, got {self.timer_hz}")
        for name in _BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a bool, got {getattr(self, name)!r}")

    @classmethod
    def from_profile(cls, name: str, **overrides: Any) -> "MachineConfig":
        """Build a config from a named quirk profile.

        Args:
            name: Profile name ("modern", "cosmac-vip", "chip-48")
            **overrides: Fields replacing the profile's values

        Returns:
            The resulting configuration
        """
        if name not in PROFILES:
            raise ValueError(
                f"Unknown quirk profile '{name}'. Available: {list(PROFILES.keys())}"
            )
        return cls(**{**PROFILES[name], **overrides})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MachineConfig":
        """Build a config from plain data, e.g. a parsed settings file.

        Enum fields accept either members or their names/values as strings.
        Boolean fields accept bools or "true", "false", "1", "0".
        A ``profile`` key selects the base profile the other keys override.
        """
        data = dict(data)
        profile = data.pop("profile", "modern")
        unknown = set(data) - _FIELD_NAMES
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        if "shift_quirk" in data:
            data["shift_quirk"] = _parse_enum(ShiftSource, data["shift_quirk"])
        if "jump_offset_quirk" in data:
            data["jump_offset_quirk"] = _parse_enum(JumpOffset, data["jump_offset_quirk"])
        for key in ("stack_depth", "program_start", "cycles_per_tick", "timer_hz"):
            if key in data:
                data[key] = _parse_int(data[key])
        for key in _BOOL_FIELDS:
            if key in data:
                data[key] = _parse_bool(data[key])
        return cls.from_profile(profile, **data)


def _parse_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if value.lower() in (member.name.lower(), member.value):
                return member
    raise ValueError(f"Invalid {enum_cls.__name__} value: {value!r}")


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.strip().lower()]
    raise ValueError(f"Invalid boolean: {value!r}")


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer format: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 0)
    raise ValueError(f"Invalid integer format: {value!r}")


_BOOL_FIELDS = ("load_store_increments_index", "logic_resets_vf", "tick_timers_when_halted")
_BOOL_STRINGS = {"true": True, "false": False, "1": True, "0": False}


PROFILES: Dict[str, Dict[str, Any]] = {
    "modern": {},
    "cosmac-vip": {
        "shift_quirk": ShiftSource.VY,
        "load_store_increments_index": True,
        "stack_depth": LEGACY_STACK_SIZE,
        "logic_resets_vf": True,
    },
    "chip-48": {
        "shift_quirk": ShiftSource.VX,
        "jump_offset_quirk": JumpOffset.VX,
    },
}

_FIELD_NAMES = {
    "shift_quirk",
    "load_store_increments_index",
    "stack_depth",
    "jump_offset_quirk",
    "logic_resets_vf",
    "program_start",
    "cycles_per_tick",
    "timer_hz",
    "tick_timers_when_halted",
}
