"""Histogram-seeded, Lloyd-refined scalar quantization ("smart" mode)."""

import numpy as np
from typing import Tuple

from engines.quantizer import check_bits
from utils.constants import HISTOGRAM_BINS, DEFAULT_MAX_ITER, CONVERGENCE_THRESHOLD


def build_histogram(samples: np.ndarray, min_val: float, value_range: float) -> np.ndarray:
    """Population of each of the HISTOGRAM_BINS bins spanning [min, min+range]."""
    bins = np.floor((samples - min_val) / value_range * (HISTOGRAM_BINS - 1)).astype(np.int64)
    bins = np.clip(bins, 0, HISTOGRAM_BINS - 1)
    return np.bincount(bins, minlength=HISTOGRAM_BINS)


def bin_midpoints(min_val: float, value_range: float) -> np.ndarray:
    return min_val + value_range * (np.arange(HISTOGRAM_BINS) + 0.5) / HISTOGRAM_BINS


def seed_centers(
    hist: np.ndarray,
    midpoints: np.ndarray,
    levels: int,
    min_val: float,
    value_range: float
) -> np.ndarray:
    """
    Place initial centers at equal-population quantiles of the histogram.

    A bin seeds at most one center. Centers left over because the mass is
    concentrated in few bins fall back to evenly spaced values.
    """
    centers = np.zeros(levels, dtype=np.float64)
    target = hist.sum() / levels
    running = 0
    k = 0
    for b in range(HISTOGRAM_BINS):
        if k >= levels:
            break
        running += hist[b]
        if running >= (k + 0.5) * target:
            centers[k] = midpoints[b]
            k += 1
    remaining = np.arange(k, levels)
    centers[k:] = min_val + value_range * (remaining + 0.5) / levels
    return centers


def refine_centers(
    hist: np.ndarray,
    midpoints: np.ndarray,
    centers: np.ndarray,
    max_iter: int = DEFAULT_MAX_ITER
) -> np.ndarray:
    """Lloyd iterations over the histogram until no center moves more than the threshold."""
    occupied = hist > 0
    values = midpoints[occupied]
    weights = hist[occupied].astype(np.float64)
    levels = centers.size

    for _ in range(max_iter):
        # argmin keeps the lowest index on ties
        nearest = np.argmin(np.abs(values[:, None] - centers[None, :]), axis=1)
        sums = np.bincount(nearest, weights=values * weights, minlength=levels)
        counts = np.bincount(nearest, weights=weights, minlength=levels)

        updated = centers.copy()
        populated = counts > 0
        updated[populated] = sums[populated] / counts[populated]

        changed = bool(np.any(np.abs(updated - centers) > CONVERGENCE_THRESHOLD))
        centers = np.sort(updated)
        if not changed:
            break

    # Seeds can be out of order when max_iter is 0
    return np.sort(centers)


def assign_to_centers(samples: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Map each sample to the first center whose upper midpoint boundary it does not exceed."""
    boundaries = (centers[:-1] + centers[1:]) * 0.5
    idx = np.searchsorted(boundaries, samples, side='left')
    return centers[idx]


def quantize_smart(
    samples: np.ndarray,
    bits: int,
    max_iter: int = DEFAULT_MAX_ITER
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Quantize float samples to 2^bits levels fitted to their distribution.

    Returns the quantized samples and the ascending center list. bits == 8
    passes the input through with no centers; a constant input collapses
    every center onto that value.
    """
    levels = check_bits(bits)
    samples = np.asarray(samples, dtype=np.float64).ravel()
    if bits == 8:
        return samples.copy(), np.array([], dtype=np.float64)
    if samples.size == 0:
        raise ValueError("Cannot quantize an empty channel")
    if max_iter < 0:
        raise ValueError(f"max_iter must be non-negative, got {max_iter}")

    min_val = float(samples.min())
    max_val = float(samples.max())
    if min_val == max_val:
        return np.full(samples.shape, min_val), np.full(levels, min_val)

    value_range = max_val - min_val
    hist = build_histogram(samples, min_val, value_range)
    midpoints = bin_midpoints(min_val, value_range)

    centers = seed_centers(hist, midpoints, levels, min_val, value_range)
    centers = refine_centers(hist, midpoints, centers, max_iter)
    return assign_to_centers(samples, centers), centers
