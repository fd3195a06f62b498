"""Color space conversion and channel layout helpers."""

import numpy as np
from typing import Tuple

from utils.constants import RGB_TO_YUV, YUV_TO_RGB


def split_channels(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Interleaved RGB buffer to three planar channels."""
    rgb = np.asarray(rgb).ravel()
    if rgb.size % 3 != 0:
        raise ValueError(f"Interleaved buffer length must be a multiple of 3, got {rgb.size}")
    return rgb[0::3].copy(), rgb[1::3].copy(), rgb[2::3].copy()


def merge_channels(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Three planar channels to an interleaved buffer."""
    r, g, b = np.ravel(r), np.ravel(g), np.ravel(b)
    if not (r.size == g.size == b.size):
        raise ValueError(f"Channel lengths differ: {r.size}, {g.size}, {b.size}")
    out = np.empty(r.size * 3, dtype=np.result_type(r, g, b))
    out[0::3] = r
    out[1::3] = g
    out[2::3] = b
    return out


def round_to_bytes(values: np.ndarray) -> np.ndarray:
    """Clamp to [0,255] and round half-up."""
    clipped = np.clip(np.asarray(values, dtype=np.float64), 0.0, 255.0)
    return np.floor(clipped + 0.5).astype(np.uint8)


def rgb_to_yuv(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Interleaved RGB buffer to float Y, U, V components (no clamping)."""
    R, G, B = (c.astype(np.float64) for c in split_channels(rgb))
    (yr, yg, yb), (ur, ug, ub), (vr, vg, vb) = RGB_TO_YUV
    Y = yr * R + yg * G + yb * B
    U = ur * R + ug * G + ub * B
    V = vr * R + vg * G + vb * B
    return Y, U, V


def yuv_to_rgb(Y: np.ndarray, U: np.ndarray, V: np.ndarray) -> np.ndarray:
    """Y, U, V components back to an interleaved uint8 RGB buffer."""
    Y = np.ravel(Y).astype(np.float64)
    U = np.ravel(U).astype(np.float64)
    V = np.ravel(V).astype(np.float64)
    if not (Y.size == U.size == V.size):
        raise ValueError(f"Component lengths differ: {Y.size}, {U.size}, {V.size}")
    (_, _, rv), (_, gu, gv), (_, bu, _) = YUV_TO_RGB
    R = Y + rv * V
    G = Y + gu * U + gv * V
    B = Y + bu * U
    return merge_channels(round_to_bytes(R), round_to_bytes(G), round_to_bytes(B))
