"""Tests for block grid, extraction and insertion."""

import numpy as np
import pytest
from engines.block_processor import (
    block_grid, iter_blocks, extract_block, insert_block, extract_all_blocks, insert_all_blocks
)


@pytest.mark.parametrize('size,grid', [
    ((16, 16), (2, 2)),
    ((17, 9), (3, 2)),
    ((352, 288), (44, 36)),
    ((1, 1), (1, 1)),
])
def test_block_grid(size, grid):
    assert block_grid(*size) == grid


def test_block_grid_rejects_empty_image():
    with pytest.raises(ValueError):
        block_grid(0, 8)


def test_iter_blocks_row_major():
    assert list(iter_blocks(3, 2)) == [
        (0, 0, 0), (1, 1, 0), (2, 2, 0), (3, 0, 1), (4, 1, 1), (5, 2, 1)
    ]


def test_extract_block_layout_and_shift():
    """block[x, y] holds the sample at column x, row y, minus 128."""
    width, height = 10, 9
    channel = np.arange(width * height, dtype=np.uint8)
    block = extract_block(channel, width, height, 0, 0)
    for x in range(8):
        for y in range(8):
            assert block[x, y] == channel[y * width + x] - 128.0


def test_extract_block_zero_pads_past_edges():
    width, height = 10, 9
    channel = np.full(width * height, 200, dtype=np.uint8)
    block = extract_block(channel, width, height, 1, 1)
    assert np.all(block[:2, :1] == 72.0)
    assert np.all(block[2:, :] == 0.0)
    assert np.all(block[:, 1:] == 0.0)


def test_insert_block_writes_only_in_bounds():
    width, height = 10, 9
    channel = np.zeros(width * height, dtype=np.uint8)
    insert_block(channel, width, height, 1, 1, np.full((8, 8), 10.0))
    plane = channel.reshape(height, width)
    assert np.all(plane[8, 8:] == 138)
    assert np.all(plane[:8, :] == 0)
    assert np.all(plane[:, :8] == 0)


def test_insert_block_clamps():
    channel = np.zeros(64, dtype=np.uint8)
    block = np.full((8, 8), 500.0)
    block[:, 4:] = -500.0
    insert_block(channel, 8, 8, 0, 0, block)
    plane = channel.reshape(8, 8)
    # block[x, y]: y is the row
    assert np.all(plane[:4, :] == 255)
    assert np.all(plane[4:, :] == 0)


def test_insert_block_rounds_half_up():
    channel = np.zeros(64, dtype=np.uint8)
    block = np.full((8, 8), 0.7)
    block[0, 0] = 0.4
    block[1, 0] = -28.0000001
    insert_block(channel, 8, 8, 0, 0, block)
    plane = channel.reshape(8, 8)
    assert plane[0, 0] == 128
    assert plane[0, 1] == 100
    assert plane[7, 7] == 129


def test_extract_insert_roundtrip():
    width, height = 21, 13
    channel = np.random.randint(0, 256, width * height).astype(np.uint8)
    out = np.zeros_like(channel)
    for _, bx, by in iter_blocks(*block_grid(width, height)):
        insert_block(out, width, height, bx, by, extract_block(channel, width, height, bx, by))
    assert np.array_equal(out, channel)


def test_extract_all_matches_single_blocks():
    width, height = 21, 13
    channel = np.random.randint(0, 256, width * height).astype(np.uint8)
    blocks = extract_all_blocks(channel, width, height)
    assert blocks.shape == (6, 8, 8)
    for index, bx, by in iter_blocks(*block_grid(width, height)):
        assert np.array_equal(blocks[index], extract_block(channel, width, height, bx, by))


def test_insert_all_matches_single_blocks():
    width, height = 21, 13
    blocks = np.random.rand(6, 8, 8) * 300 - 150
    expected = np.zeros(width * height, dtype=np.uint8)
    for index, bx, by in iter_blocks(*block_grid(width, height)):
        insert_block(expected, width, height, bx, by, blocks[index])
    actual = np.zeros(width * height, dtype=np.uint8)
    insert_all_blocks(actual, width, height, blocks)
    assert np.array_equal(actual, expected)


def test_channel_length_checked():
    with pytest.raises(ValueError):
        extract_block(np.zeros(10, dtype=np.uint8), 4, 4, 0, 0)
