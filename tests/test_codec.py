"""Tests for whole-image encoding and coefficient storage."""

import dataclasses
import numpy as np
import pytest
from engines.codec import encode_image, encode_block, decode_block
from engines.block_processor import extract_block
from engines.progressive_decoder import ProgressiveDecoder
from models.codec_params import DeliveryMode
from models.coefficient_set import CoefficientSet, EncodedImage
from utils.test_images import generate_solid, to_buffer


def test_solid_gray_encodes_to_zero():
    """16x16 gray at N=0: four all-zero blocks per channel, decoded back exactly."""
    rgb = to_buffer(generate_solid(16, 16, (128, 128, 128)))
    encoded = encode_image(rgb, 16, 16, 0)
    for coeffs in encoded.channels:
        assert coeffs.block_count == 4
        assert coeffs.shape == (2, 2)
        assert np.all(coeffs.data == 0)

    decoder = ProgressiveDecoder.from_encoded(encoded, DeliveryMode.BASELINE)
    out = decoder.new_frame()
    while decoder.decode_step(out):
        pass
    assert np.array_equal(out, rgb)


def test_dc_coefficient_of_solid_image():
    rgb = to_buffer(generate_solid(8, 8, (200, 128, 0)))
    encoded = encode_image(rgb, 8, 8, 0)
    assert encoded.red.coefficient(0, 0) == 576
    assert encoded.green.coefficient(0, 0) == 0
    assert encoded.blue.coefficient(0, 0) == -1024
    assert encoded.red.nonzero_count() == 1

    coarse = encode_image(rgb, 8, 8, 3)
    assert coarse.red.coefficient(0, 0) == 72


def test_grid_covers_partial_blocks():
    rgb = np.random.randint(0, 256, 17 * 9 * 3).astype(np.uint8)
    encoded = encode_image(rgb, 17, 9, 2)
    assert encoded.red.shape == (3, 2)
    assert encoded.red.data.size == 6 * 64
    assert encoded.total_count() == 3 * 6 * 64


def test_blocks_match_single_block_encoding():
    width, height = 20, 12
    rgb = np.random.randint(0, 256, width * height * 3).astype(np.uint8)
    encoded = encode_image(rgb, width, height, 1)
    green = rgb[1::3].copy()
    block = extract_block(green, width, height, 2, 1)
    expected = encode_block(block, 1).ravel()
    assert np.array_equal(encoded.green.block(1 * 3 + 2), expected)


def test_decode_block_inverts_encode_block_at_level_zero():
    block = np.random.rand(8, 8) * 255 - 128
    restored = decode_block(encode_block(block, 0), 0)
    assert np.max(np.abs(restored - block)) < 2.0


def test_coefficients_are_read_only():
    encoded = encode_image(np.zeros(8 * 8 * 3, dtype=np.uint8), 8, 8, 0)
    assert not encoded.red.data.flags.writeable
    with pytest.raises(ValueError):
        encoded.red.data[0] = 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        encoded.red.blocks_x = 2


def test_coefficient_set_copies_input():
    source = np.zeros(64, dtype=np.int32)
    coeffs = CoefficientSet(source, 1, 1)
    source[0] = 5
    assert coeffs.coefficient(0, 0) == 0


def test_coefficient_set_validates_size():
    with pytest.raises(ValueError):
        CoefficientSet(np.zeros(63), 1, 1)
    coeffs = CoefficientSet(np.zeros(128), 2, 1)
    with pytest.raises(IndexError):
        coeffs.block(2)
    with pytest.raises(IndexError):
        coeffs.coefficient(0, 64)


def test_encoded_image_requires_matching_grids():
    one = CoefficientSet(np.zeros(64), 1, 1)
    two = CoefficientSet(np.zeros(128), 2, 1)
    with pytest.raises(ValueError):
        EncodedImage(one, one, two, 8, 8, 0)
    with pytest.raises(ValueError):
        EncodedImage(one, one, one, 16, 8, 0)


def test_buffer_length_checked():
    with pytest.raises(ValueError):
        encode_image(np.zeros(10, dtype=np.uint8), 2, 2, 0)


def test_invalid_quant_level_rejected():
    with pytest.raises(ValueError):
        encode_image(np.zeros(12, dtype=np.uint8), 2, 2, -1)
