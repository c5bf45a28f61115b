"""Monochrome 64x32 display buffer.

The buffer is a row-major ``bool[SCREEN_HEIGHT, SCREEN_WIDTH]`` array.
Sprites are XOR-blitted and wrap around both edges of the screen.
"""

from typing import Sequence, Tuple, Union

import jax.numpy as jnp

from emul8.constants import MAX_SPRITE_HEIGHT, SCREEN_HEIGHT, SCREEN_WIDTH, SPRITE_WIDTH

# Bit 7 of a sprite row is its leftmost pixel
_COLUMN_SHIFTS = jnp.arange(SPRITE_WIDTH - 1, -1, -1, dtype=jnp.uint8)


def create_display() -> jnp.ndarray:
    return jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """Turn every pixel off."""
    return jnp.zeros_like(display)


def sprite_mask(x: int, y: int, sprite: Union[Sequence[int], jnp.ndarray]) -> jnp.ndarray:
    """Screen-sized mask of the pixels a sprite drawn at (x, y) toggles."""
    rows = jnp.asarray(sprite, dtype=jnp.uint8).reshape(-1)
    height = rows.shape[0]
    if height > MAX_SPRITE_HEIGHT:
        raise ValueError(f"Sprite height {height} exceeds {MAX_SPRITE_HEIGHT} rows")

    bits = ((rows[:, None] >> _COLUMN_SHIFTS[None, :]) & 1).astype(jnp.bool_)
    ys = (y + jnp.arange(height)) % SCREEN_HEIGHT
    xs = (x + jnp.arange(SPRITE_WIDTH)) % SCREEN_WIDTH
    # height <= 15 and width 8 never wrap onto themselves, so indices are unique
    return jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_).at[ys[:, None], xs[None, :]].set(bits)


def draw_sprite(
    display: jnp.ndarray,
    x: int,
    y: int,
    sprite: Union[Sequence[int], jnp.ndarray],
) -> Tuple[jnp.ndarray, bool]:
    """XOR a sprite onto the display.

    Args:
        display: Current display buffer
        x: Column of the sprite's left edge, wrapped modulo 64
        y: Row of the sprite's top edge, wrapped modulo 32
        sprite: One byte per row, at most 15 rows

    Returns:
        The new display and whether any lit pixel was turned off
    """
    if len(sprite) == 0:
        return display, False
    mask = sprite_mask(x, y, sprite)
    collision = bool(jnp.any(display & mask))
    return display ^ mask, collision
