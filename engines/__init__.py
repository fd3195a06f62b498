"""DSP engines - pure computation, no I/O."""

from .color_space import rgb_to_yuv, yuv_to_rgb, split_channels, merge_channels
from .block_processor import block_grid, extract_block, insert_block
from .dct_engine import dct2, idct2
from .quantizer import quantize_uniform, quantize_uniform_bytes, quantize, dequantize
from .adaptive_quantizer import quantize_smart
from .codec import encode_image
from .progressive_decoder import ProgressiveDecoder
from .pipeline import quantize_image, bit_allocation_sweep, encode_decode

__all__ = [
    'rgb_to_yuv',
    'yuv_to_rgb',
    'split_channels',
    'merge_channels',
    'block_grid',
    'extract_block',
    'insert_block',
    'dct2',
    'idct2',
    'quantize_uniform',
    'quantize_uniform_bytes',
    'quantize',
    'dequantize',
    'quantize_smart',
    'encode_image',
    'ProgressiveDecoder',
    'quantize_image',
    'bit_allocation_sweep',
    'encode_decode',
]
