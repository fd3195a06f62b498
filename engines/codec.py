"""Whole-image block DCT encoding and per-block decode helpers."""

import numpy as np

from models.coefficient_set import CoefficientSet, EncodedImage
from engines.block_processor import block_grid, extract_all_blocks
from engines.color_space import split_channels
from engines.dct_engine import dct2, idct2
from engines.quantizer import quantize, dequantize, check_quant_level


def encode_block(block: np.ndarray, quant_level: int) -> np.ndarray:
    """Level-shifted block (or stack of blocks) to quantized coefficients."""
    return quantize(dct2(block), quant_level)


def decode_block(quantized: np.ndarray, quant_level: int) -> np.ndarray:
    """Quantized coefficients back to level-shifted spatial samples (no clamping)."""
    return idct2(dequantize(quantized, quant_level))


def encode_channel(channel: np.ndarray, width: int, height: int, quant_level: int) -> CoefficientSet:
    """Extract, transform and quantize every 8x8 cell of one channel."""
    blocks_x, blocks_y = block_grid(width, height)
    blocks = extract_all_blocks(channel, width, height)
    return CoefficientSet.from_blocks(encode_block(blocks, quant_level), blocks_x, blocks_y)


def encode_image(rgb: np.ndarray, width: int, height: int, quant_level: int) -> EncodedImage:
    """Encode an interleaved RGB buffer into one coefficient set per channel."""
    check_quant_level(quant_level)
    rgb = np.asarray(rgb, dtype=np.uint8).ravel()
    if rgb.size != width * height * 3:
        raise ValueError(
            f"Buffer has {rgb.size} bytes, expected {width}x{height}x3={width * height * 3}"
        )
    R, G, B = split_channels(rgb)
    return EncodedImage(
        red=encode_channel(R, width, height, quant_level),
        green=encode_channel(G, width, height, quant_level),
        blue=encode_channel(B, width, height, quant_level),
        width=width,
        height=height,
        quant_level=quant_level,
    )
