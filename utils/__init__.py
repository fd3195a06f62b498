"""Shared utilities."""

from .constants import BLOCK_SIZE, PSNR_SENTINEL
from .metrics import mse_bytes, mse_channel, mse_float, psnr_from_mse, abs_error, Timer
from .test_images import generate_colored_checkerboard, generate_gradient, to_buffer
from .image_io import load_image, load_planar_rgb, infer_size

__all__ = [
    'BLOCK_SIZE',
    'PSNR_SENTINEL',
    'mse_bytes',
    'mse_channel',
    'mse_float',
    'psnr_from_mse',
    'abs_error',
    'Timer',
    'generate_colored_checkerboard',
    'generate_gradient',
    'to_buffer',
    'load_image',
    'load_planar_rgb',
    'infer_size',
]
