"""Block processing: grid geometry, extraction with padding, insertion with clamping."""

import numpy as np
from typing import Iterator, Tuple

from utils.constants import BLOCK_SIZE, LEVEL_SHIFT


def block_grid(width: int, height: int, block_size: int = BLOCK_SIZE) -> Tuple[int, int]:
    """Number of blocks across and down, ceil(width/B) x ceil(height/B)."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    return (width + block_size - 1) // block_size, (height + block_size - 1) // block_size


def iter_blocks(blocks_x: int, blocks_y: int) -> Iterator[Tuple[int, int, int]]:
    """Yield (block_index, block_x, block_y) in row-major order."""
    for by in range(blocks_y):
        for bx in range(blocks_x):
            yield by * blocks_x + bx, bx, by


def _as_plane(channel: np.ndarray, width: int, height: int) -> np.ndarray:
    if channel.size != width * height:
        raise ValueError(
            f"Channel has {channel.size} samples, expected {width}x{height}={width * height}"
        )
    return channel.reshape(height, width)


def extract_block(
    channel: np.ndarray,
    width: int,
    height: int,
    block_x: int,
    block_y: int
) -> np.ndarray:
    """
    Level-shifted 8x8 block indexed [x, y].

    Samples past the right or bottom edge are zero (after the shift).
    """
    plane = _as_plane(channel, width, height)
    x0, y0 = block_x * BLOCK_SIZE, block_y * BLOCK_SIZE
    tile = plane[y0:y0 + BLOCK_SIZE, x0:x0 + BLOCK_SIZE].astype(np.float64) - LEVEL_SHIFT
    block = np.zeros((BLOCK_SIZE, BLOCK_SIZE), dtype=np.float64)
    block[:tile.shape[1], :tile.shape[0]] = tile.T
    return block


def insert_block(
    channel: np.ndarray,
    width: int,
    height: int,
    block_x: int,
    block_y: int,
    block: np.ndarray
) -> None:
    """
    Undo the level shift, clamp to [0,255] and write the in-bounds part of block.

    Samples are rounded half-up, so 128.7 is stored as 129. A plain integer
    cast would truncate it to 128 and turn transform noise such as 99.9999
    into 99.
    """
    if not channel.flags.c_contiguous:
        raise ValueError("Channel must be a contiguous array to be written in place")
    plane = _as_plane(channel, width, height)
    x0, y0 = block_x * BLOCK_SIZE, block_y * BLOCK_SIZE
    x1, y1 = min(x0 + BLOCK_SIZE, width), min(y0 + BLOCK_SIZE, height)
    values = np.clip(block[:x1 - x0, :y1 - y0] + LEVEL_SHIFT, 0.0, 255.0)
    plane[y0:y1, x0:x1] = np.floor(values + 0.5).T.astype(channel.dtype)


def extract_all_blocks(channel: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Every level-shifted block of a channel, shape (blocks, 8, 8), indexed [b, x, y].

    Same values as extract_block() for each grid cell, in row-major block order.
    """
    plane = _as_plane(channel, width, height)
    blocks_x, blocks_y = block_grid(width, height)
    padded = np.zeros((blocks_y * BLOCK_SIZE, blocks_x * BLOCK_SIZE), dtype=np.float64)
    padded[:height, :width] = plane.astype(np.float64) - LEVEL_SHIFT
    tiles = padded.reshape(blocks_y, BLOCK_SIZE, blocks_x, BLOCK_SIZE)
    return tiles.transpose(0, 2, 3, 1).reshape(-1, BLOCK_SIZE, BLOCK_SIZE)


def insert_all_blocks(channel: np.ndarray, width: int, height: int, blocks: np.ndarray) -> None:
    """Write a full row-major stack of blocks, as insert_block() would one at a time."""
    if not channel.flags.c_contiguous:
        raise ValueError("Channel must be a contiguous array to be written in place")
    plane = _as_plane(channel, width, height)
    blocks_x, blocks_y = block_grid(width, height)
    if blocks.shape != (blocks_x * blocks_y, BLOCK_SIZE, BLOCK_SIZE):
        raise ValueError(
            f"Expected {blocks_x * blocks_y} blocks of {BLOCK_SIZE}x{BLOCK_SIZE}, got {blocks.shape}"
        )
    tiles = blocks.reshape(blocks_y, blocks_x, BLOCK_SIZE, BLOCK_SIZE).transpose(0, 3, 1, 2)
    full = tiles.reshape(blocks_y * BLOCK_SIZE, blocks_x * BLOCK_SIZE)[:height, :width]
    values = np.clip(full + LEVEL_SHIFT, 0.0, 255.0)
    plane[:, :] = np.floor(values + 0.5).astype(channel.dtype)
