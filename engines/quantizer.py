"""Uniform scalar quantization and power-of-two coefficient quantization."""

import numpy as np
from typing import Tuple

from utils.constants import MAX_QUANT_LEVEL


def check_bits(bits: int) -> int:
    """Validate a quantizer bit depth and return the level count 2^bits."""
    if isinstance(bits, bool) or not isinstance(bits, (int, np.integer)) or not (1 <= bits <= 8):
        raise ValueError(f"Bit depth must be an integer in 1-8, got {bits!r}")
    return 1 << int(bits)


def quantize_uniform(
    samples: np.ndarray,
    bits: int,
    min_val: float,
    max_val: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Uniform quantization of float samples over [min_val, max_val].

    bits == 8 is a passthrough that returns the input and no centers.
    """
    levels = check_bits(bits)
    samples = np.asarray(samples, dtype=np.float64).ravel()
    if bits == 8:
        return samples.copy(), np.array([], dtype=np.float64)

    if max_val == min_val:
        centers = np.full(levels, min_val, dtype=np.float64)
        return np.full(samples.shape, min_val, dtype=np.float64), centers

    step = (max_val - min_val) / levels
    centers = min_val + (np.arange(levels) + 0.5) * step
    idx = np.floor((samples - min_val) / step).astype(np.int64)
    idx = np.clip(idx, 0, levels - 1)
    return centers[idx], centers


def quantize_uniform_bytes(samples: np.ndarray, bits: int) -> Tuple[np.ndarray, np.ndarray]:
    """Uniform quantization specialized to the [0,255] byte domain."""
    levels = check_bits(bits)
    samples = np.asarray(samples, dtype=np.uint8).ravel()
    if bits == 8:
        return samples.copy(), np.array([], dtype=np.int64)

    step = 256.0 / levels
    k = np.arange(levels)
    centers = np.floor(step * k + step / 2 + 0.5).astype(np.int64)
    centers = np.clip(centers, 0, 255)
    idx = np.minimum((samples / step).astype(np.int64), levels - 1)
    return centers[idx].astype(np.uint8), centers


def check_quant_level(quant_level: int) -> float:
    """Validate N and return the divisor 2^N."""
    if isinstance(quant_level, bool) or not isinstance(quant_level, (int, np.integer)):
        raise ValueError(f"Quantization level must be an integer, got {quant_level!r}")
    if not (0 <= quant_level <= MAX_QUANT_LEVEL):
        raise ValueError(f"Quantization level must be 0-{MAX_QUANT_LEVEL}, got {quant_level}")
    return float(1 << int(quant_level))


def round_half_away(values: np.ndarray) -> np.ndarray:
    """Round to nearest integer, halves away from zero (C round())."""
    values = np.asarray(values, dtype=np.float64)
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def quantize(dct_coeffs: np.ndarray, quant_level: int) -> np.ndarray:
    """Quantize DCT coefficients by 2^N."""
    divisor = check_quant_level(quant_level)
    return round_half_away(dct_coeffs / divisor).astype(np.int32)


def dequantize(quantized: np.ndarray, quant_level: int) -> np.ndarray:
    """Dequantize coefficients."""
    multiplier = check_quant_level(quant_level)
    return quantized.astype(np.float64) * multiplier
