"""DCT/IDCT operations on 8x8 blocks."""

import numpy as np
from scipy.fft import dctn, idctn

from utils.constants import BLOCK_SIZE


def dct2(block: np.ndarray, axes=(-2, -1)) -> np.ndarray:
    """
    2D DCT-II with orthonormal normalization (0.25*Cu*Cv scaling for 8x8).

    Transforms the last two axes, so a stack of blocks (n, 8, 8) works too.
    """
    return dctn(block, type=2, norm='ortho', axes=axes)


def idct2(coeffs: np.ndarray, axes=(-2, -1)) -> np.ndarray:
    """2D inverse DCT (Type-III)."""
    return idctn(coeffs, type=2, norm='ortho', axes=axes)


def _basis(n: int = BLOCK_SIZE) -> np.ndarray:
    """basis[u, x] = C(u) * cos((2x+1) u pi / 2n)"""
    u = np.arange(n)[:, None]
    x = np.arange(n)[None, :]
    scale = np.where(u == 0, 1.0 / np.sqrt(2.0), 1.0)
    return scale * np.cos((2 * x + 1) * u * np.pi / (2 * n))


def dct2_direct(block: np.ndarray) -> np.ndarray:
    """
    Direct evaluation of the 8x8 DCT-II sum.

    D[u,v] = 0.25 * Cu * Cv * sum_{x,y} block[x,y] cos((2x+1)u pi/16) cos((2y+1)v pi/16)

    O(n^4); kept as the reference definition that dct2() must match.
    """
    basis = _basis(block.shape[0])
    out = np.empty(block.shape, dtype=np.float64)
    for u in range(block.shape[0]):
        for v in range(block.shape[1]):
            out[u, v] = 0.25 * np.sum(block * np.outer(basis[u], basis[v]))
    return out


def idct2_direct(coeffs: np.ndarray) -> np.ndarray:
    """Direct evaluation of the matching synthesis sum."""
    basis = _basis(coeffs.shape[0])
    out = np.empty(coeffs.shape, dtype=np.float64)
    for x in range(coeffs.shape[0]):
        for y in range(coeffs.shape[1]):
            out[x, y] = 0.25 * np.sum(coeffs * np.outer(basis[:, x], basis[:, y]))
    return out
