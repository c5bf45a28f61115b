"""CHIP-8 memory operations.

Memory is a flat ``uint8[4096]`` array. Reads return plain ints, writes
return a new array; every access is bounds-checked.
"""

from typing import Sequence

import jax.numpy as jnp

from emul8.constants import FONT_DATA, FONT_START, MEMORY_SIZE, PROGRAM_START, BYTE_MASK
from emul8.errors import OutOfBounds, RomTooLarge


def _check_address(address: int) -> None:
    if not 0 <= address < MEMORY_SIZE:
        raise OutOfBounds(address)


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into a big-endian word."""
    return (high << 8) | low


def load_font(memory: jnp.ndarray) -> jnp.ndarray:
    """Write the 16 hex digit glyphs at FONT_START."""
    return memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)


def load_program(memory: jnp.ndarray, rom: bytes, origin: int = PROGRAM_START) -> jnp.ndarray:
    """Copy ROM bytes into memory starting at origin.

    Raises:
        RomTooLarge: If the ROM does not fit between origin and the end of memory
    """
    capacity = MEMORY_SIZE - origin
    if len(rom) > capacity:
        raise RomTooLarge(len(rom), capacity, origin + capacity)
    if not rom:
        return memory
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    return memory.at[origin:origin + len(rom)].set(rom_array)


def read_byte(memory: jnp.ndarray, address: int) -> int:
    _check_address(address)
    return int(memory[address])


def write_byte(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    _check_address(address)
    return memory.at[address].set(value & BYTE_MASK)


def read_word(memory: jnp.ndarray, address: int) -> int:
    """Fetch the big-endian 16-bit word at address and address + 1."""
    if address < 0 or address + 1 >= MEMORY_SIZE:
        raise OutOfBounds(address)
    return _pack_u16(int(memory[address]), int(memory[address + 1]))


def read_block(memory: jnp.ndarray, address: int, count: int) -> jnp.ndarray:
    """Read count consecutive bytes starting at address."""
    if count == 0:
        return memory[:0]
    _check_address(address)
    _check_address(address + count - 1)
    return memory[address:address + count]


def write_block(memory: jnp.ndarray, address: int, values: Sequence[int]) -> jnp.ndarray:
    """Write consecutive bytes starting at address."""
    values = jnp.asarray(values, dtype=jnp.uint8)
    if values.shape[0] == 0:
        return memory
    _check_address(address)
    _check_address(address + values.shape[0] - 1)
    return memory.at[address:address + values.shape[0]].set(values)
