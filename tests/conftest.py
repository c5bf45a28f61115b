"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from emul8 import Machine, MachineConfig, create_state
from emul8.logging import set_log_level


@pytest.fixture(autouse=True)
def quiet_logging():
    """Silence emulator logging during tests."""
    set_log_level("CRITICAL")


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state with the modern quirk profile."""
    return create_state(MachineConfig.from_profile("modern"))


@pytest.fixture
def legacy_state():
    """Provide a fresh state with the COSMAC VIP quirk profile."""
    return create_state(MachineConfig.from_profile("cosmac-vip"))


@pytest.fixture
def make_machine():
    """Factory for machines loaded with a list of 16-bit instructions."""
    def _make(instructions, config=None, seed=0):
        machine = Machine(config=config, seed=seed)
        machine.load(assemble(instructions))
        return machine
    return _make


def assemble(instructions):
    """Pack 16-bit instruction words into big-endian ROM bytes."""
    rom = bytearray()
    for word in instructions:
        rom += bytes([(word >> 8) & 0xFF, word & 0xFF])
    return bytes(rom)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
