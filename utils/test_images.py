"""Synthetic test images."""

import numpy as np


def to_buffer(img: np.ndarray) -> np.ndarray:
    """HxWx3 image to a flat interleaved uint8 buffer."""
    return np.ascontiguousarray(img, dtype=np.uint8).reshape(-1)


def generate_solid(width: int, height: int, color=(128, 128, 128)) -> np.ndarray:
    img = np.empty((height, width, 3), dtype=np.uint8)
    img[:, :] = color
    return img


def generate_colored_checkerboard(size: int = 512, block_size: int = 32) -> np.ndarray:
    """High-contrast checkerboard - shows blocking and ringing."""
    img = np.zeros((size, size, 3), dtype=np.uint8)

    for i in range(0, size, block_size):
        for j in range(0, size, block_size):
            if (i // block_size + j // block_size) % 2 == 0:
                img[i:i+block_size, j:j+block_size] = [30, 30, 30]
            else:
                img[i:i+block_size, j:j+block_size] = [220, 220, 220]

    return img


def generate_gradient(width: int = 512, height: int = 512) -> np.ndarray:
    """Smooth diagonal gradient - reveals banding from quantization."""
    i = np.arange(height)[:, None]
    j = np.arange(width)[None, :]
    t = (i + j) / max(width + height - 2, 1)
    img = np.stack([40 + t * 180, 60 + t * 140, 120 + t * 100], axis=-1)
    return np.clip(img, 0, 255).astype(np.uint8)
