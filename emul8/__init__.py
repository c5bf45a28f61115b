"""CHIP-8 emulator package."""

from emul8.constants import *
from emul8.config import MachineConfig, ShiftSource, JumpOffset
from emul8.errors import (
    Chip8Error, OutOfBounds, InvalidRegister, InvalidKey, StackOverflow,
    StackUnderflow, RomTooLarge, UnknownOpcode, MachineNotLoaded
)
from emul8.state import EmulatorState, RunState, create_state
from emul8.decode import DecodedInstruction, Op, decode, mnemonic
from emul8.emulator import execute, fetch, load_rom, step
from emul8.machine import Machine
from emul8.scheduler import Frame, ManualClock, RealTimeClock, Scheduler
from emul8.rendering import display_to_rgb, create_color_scheme

__all__ = [
    "MachineConfig",
    "ShiftSource",
    "JumpOffset",
    "Chip8Error",
    "OutOfBounds",
    "InvalidRegister",
    "InvalidKey",
    "StackOverflow",
    "StackUnderflow",
    "RomTooLarge",
    "UnknownOpcode",
    "MachineNotLoaded",
    "EmulatorState",
    "RunState",
    "create_state",
    "DecodedInstruction",
    "Op",
    "decode",
    "mnemonic",
    "execute",
    "fetch",
    "load_rom",
    "step",
    "Machine",
    "Frame",
    "ManualClock",
    "RealTimeClock",
    "Scheduler",
    "display_to_rgb",
    "create_color_scheme",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
