"""Metrics: MSE, PSNR, absolute error, SSIM, runtime."""

import math
import time
import numpy as np
from skimage.metrics import mean_squared_error, structural_similarity

from utils.constants import PSNR_SENTINEL, PEAK_VALUE


def _paired(a: np.ndarray, b: np.ndarray):
    a, b = np.ravel(a), np.ravel(b)
    if a.size != b.size:
        raise ValueError(f"Buffer lengths differ: {a.size} vs {b.size}")
    if a.size == 0:
        raise ValueError("Cannot compare empty buffers")
    return a, b


def mse_bytes(a: np.ndarray, b: np.ndarray) -> float:
    """Mean squared difference per byte of two buffers."""
    a, b = _paired(a, b)
    return float(mean_squared_error(a.astype(np.float64), b.astype(np.float64)))


def mse_channel(a: np.ndarray, b: np.ndarray, channel: int) -> float:
    """MSE restricted to one channel (0=R, 1=G, 2=B) of interleaved RGB buffers."""
    if channel not in (0, 1, 2):
        raise ValueError(f"Channel must be 0, 1 or 2, got {channel}")
    a, b = _paired(a, b)
    if a.size % 3 != 0:
        raise ValueError(f"Interleaved buffer length must be a multiple of 3, got {a.size}")
    return mse_bytes(a[channel::3], b[channel::3])


def mse_float(a: np.ndarray, b: np.ndarray) -> float:
    """MSE of two float component arrays."""
    a, b = _paired(a, b)
    return float(mean_squared_error(a.astype(np.float64), b.astype(np.float64)))


def psnr_from_mse(mse: float) -> float:
    """10*log10(255^2/MSE); identical inputs give PSNR_SENTINEL instead of infinity."""
    if mse == 0:
        return PSNR_SENTINEL
    return 10.0 * math.log10((PEAK_VALUE * PEAK_VALUE) / mse)


def abs_error(a: np.ndarray, b: np.ndarray) -> int:
    """Sum of |a-b| over paired bytes."""
    a, b = _paired(a, b)
    return int(np.abs(a.astype(np.int64) - b.astype(np.int64)).sum())


def ssim_rgb(a: np.ndarray, b: np.ndarray, width: int, height: int) -> float:
    """SSIM of two interleaved RGB buffers."""
    a, b = _paired(a, b)
    img_a = a.reshape(height, width, 3)
    img_b = b.reshape(height, width, 3)
    # skimage window must be odd and fit inside the image
    win = min(7, width, height)
    if win < 3:
        return 1.0 if np.array_equal(img_a, img_b) else 0.0
    if win % 2 == 0:
        win -= 1
    return float(structural_similarity(img_a, img_b, channel_axis=2, data_range=255, win_size=win))


class Timer:
    """Simple timer for encode/decode runtime."""

    def __init__(self):
        self.encode_time_ms = 0.0
        self.decode_time_ms = 0.0

    def measure_encode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.encode_time_ms = (time.perf_counter() - start) * 1000.0
        return result

    def measure_decode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.decode_time_ms = (time.perf_counter() - start) * 1000.0
        return result
