"""Quantization and transform codec pipelines over interleaved RGB buffers."""

import csv
import itertools
import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from models.codec_params import CodecParams
from models.quantization_params import QuantizationParams
from models.compression_result import QuantizationResult, CodecResult
from engines.color_space import split_channels, merge_channels, round_to_bytes, rgb_to_yuv, yuv_to_rgb
from engines.quantizer import quantize_uniform, quantize_uniform_bytes
from engines.adaptive_quantizer import quantize_smart
from engines.codec import encode_image
from engines.progressive_decoder import ProgressiveDecoder
from utils.metrics import (
    mse_bytes, mse_channel, mse_float, psnr_from_mse, abs_error, ssim_rgb, Timer
)

RGB_NAMES = ('R', 'G', 'B')
YUV_NAMES = ('Y', 'U', 'V')


def _check_buffer(rgb: np.ndarray, width: int, height: int) -> np.ndarray:
    rgb = np.asarray(rgb, dtype=np.uint8).ravel()
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if rgb.size != width * height * 3:
        raise ValueError(
            f"Buffer has {rgb.size} bytes, expected {width}x{height}x3={width * height * 3}"
        )
    return rgb


def _quantize_rgb(rgb: np.ndarray, params: QuantizationParams):
    quantized, centers = [], []
    for channel, bits in zip(split_channels(rgb), params.bits):
        if params.quant_mode == 'uniform':
            out, ctr = quantize_uniform_bytes(channel, bits)
        else:
            out, ctr = quantize_smart(channel.astype(np.float64), bits, params.max_iter)
            out = round_to_bytes(out)
        quantized.append(out)
        centers.append(ctr)
    return quantized, centers


def _quantize_yuv(components: Sequence[np.ndarray], params: QuantizationParams):
    quantized, centers = [], []
    for comp, bits in zip(components, params.bits):
        if params.quant_mode == 'uniform':
            out, ctr = quantize_uniform(comp, bits, float(comp.min()), float(comp.max()))
        else:
            out, ctr = quantize_smart(comp, bits, params.max_iter)
        quantized.append(out)
        centers.append(ctr)
    return quantized, centers


def quantize_image(
    rgb: np.ndarray,
    width: int,
    height: int,
    params: QuantizationParams
) -> QuantizationResult:
    """Quantize each channel (RGB) or component (YUV) and rebuild the RGB buffer."""
    rgb = _check_buffer(rgb, width, height)
    timer = Timer()

    if params.color_mode == 'rgb':
        quantized, centers = timer.measure_encode(_quantize_rgb, rgb, params)
        processed = timer.measure_decode(merge_channels, *quantized)
        names = RGB_NAMES
        channel_mse = {name: mse_channel(rgb, processed, i) for i, name in enumerate(names)}
    else:
        components = rgb_to_yuv(rgb)
        quantized, centers = timer.measure_encode(_quantize_yuv, components, params)
        processed = timer.measure_decode(yuv_to_rgb, *quantized)
        names = YUV_NAMES
        channel_mse = {
            name: mse_float(comp, q) for name, comp, q in zip(names, components, quantized)
        }

    mse = mse_bytes(rgb, processed)
    return QuantizationResult(
        original=rgb,
        processed=processed,
        width=width,
        height=height,
        mse=mse,
        psnr=psnr_from_mse(mse),
        abs_error=abs_error(rgb, processed),
        channel_mse=channel_mse,
        centers=dict(zip(names, centers)),
        elapsed_ms=timer.encode_time_ms + timer.decode_time_ms,
    )


def color_roundtrip(rgb: np.ndarray) -> Tuple[float, float]:
    """MSE and PSNR of RGB -> YUV -> RGB without any quantization."""
    restored = yuv_to_rgb(*rgb_to_yuv(rgb))
    mse = mse_bytes(rgb, restored)
    return mse, psnr_from_mse(mse)


def component_ranges(rgb: np.ndarray) -> Dict[str, Tuple[float, float]]:
    """(min, max) of each YUV component."""
    return {
        name: (float(comp.min()), float(comp.max()))
        for name, comp in zip(YUV_NAMES, rgb_to_yuv(rgb))
    }


@dataclass(frozen=True)
class SweepRow:
    """One configuration of a bit allocation sweep."""

    total_bits: int
    color_mode: str
    quant_mode: str
    bits: Tuple[int, int, int]
    abs_error: int


def bit_partitions(total: int) -> List[Tuple[int, int, int]]:
    """All (q1, q2, q3) with each qi in 1-8 and q1+q2+q3 == total."""
    return [
        q for q in itertools.product(range(1, 9), repeat=3)
        if sum(q) == total
    ]


def bit_allocation_sweep(
    rgb: np.ndarray,
    width: int,
    height: int,
    totals: Iterable[int] = (4, 6, 8)
) -> List[SweepRow]:
    """Absolute error of every color mode, quantizer and bit split for each bit total."""
    rgb = _check_buffer(rgb, width, height)
    rows = []
    for total in totals:
        for color_mode in ('rgb', 'yuv'):
            for quant_mode in ('uniform', 'smart'):
                for bits in bit_partitions(total):
                    params = QuantizationParams(color_mode=color_mode, quant_mode=quant_mode, bits=bits)
                    result = quantize_image(rgb, width, height, params)
                    rows.append(SweepRow(total, color_mode, quant_mode, bits, result.abs_error))
    return rows


def write_sweep_csv(rows: Iterable[SweepRow], path: str) -> None:
    """Write sweep rows as N,"<C,M,Q1,Q2,Q3>",Error with C/M as 1 (rgb/uniform) or 2."""
    with open(path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['N', '<C,M,Q1,Q2,Q3>', 'Error'])
        for row in rows:
            c = 1 if row.color_mode == 'rgb' else 2
            m = 1 if row.quant_mode == 'uniform' else 2
            q1, q2, q3 = row.bits
            writer.writerow([row.total_bits, f"<{c},{m},{q1},{q2},{q3}>", row.abs_error])


def encode_decode(
    rgb: np.ndarray,
    width: int,
    height: int,
    params: CodecParams
) -> CodecResult:
    """Encode an image and run a progressive decoder to completion."""
    rgb = _check_buffer(rgb, width, height)
    timer = Timer()

    encoded = timer.measure_encode(encode_image, rgb, width, height, params.quant_level)
    decoder = ProgressiveDecoder.from_encoded(encoded, params.delivery_mode)
    frame = decoder.new_frame()
    steps = timer.measure_decode(decoder.decode_all, frame)

    mse = mse_bytes(rgb, frame)
    return CodecResult(
        original=rgb,
        reconstructed=frame,
        width=width,
        height=height,
        quant_level=params.quant_level,
        delivery_mode=params.delivery_mode,
        mse=mse,
        psnr=psnr_from_mse(mse),
        ssim=ssim_rgb(rgb, frame, width, height),
        blocks=encoded.red.shape,
        nonzero_coeffs=encoded.nonzero_count(),
        total_coeffs=encoded.total_count(),
        steps=steps,
        encode_time_ms=timer.encode_time_ms,
        decode_time_ms=timer.decode_time_ms,
    )
