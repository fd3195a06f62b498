"""Results of the quantization and transform codec pipelines."""

from dataclasses import dataclass, field
from typing import Dict, Tuple
import numpy as np

from models.codec_params import DeliveryMode


@dataclass
class QuantizationResult:
    """Outcome of a per-channel scalar quantization run."""

    original: np.ndarray
    processed: np.ndarray
    width: int
    height: int

    # Quality metrics
    mse: float
    psnr: float
    abs_error: int
    # R/G/B byte MSE in rgb mode, Y/U/V component MSE in yuv mode
    channel_mse: Dict[str, float] = field(default_factory=dict)

    # Reconstruction levels per channel (empty for 8-bit passthrough)
    centers: Dict[str, np.ndarray] = field(default_factory=dict)

    elapsed_ms: float = 0.0


@dataclass
class CodecResult:
    """Outcome of encoding an image and decoding it to completion."""

    original: np.ndarray
    reconstructed: np.ndarray
    width: int
    height: int
    quant_level: int
    delivery_mode: DeliveryMode

    # Quality metrics
    mse: float
    psnr: float
    ssim: float

    # Coefficient stats
    blocks: Tuple[int, int]
    nonzero_coeffs: int
    total_coeffs: int
    steps: int

    # Runtime
    encode_time_ms: float
    decode_time_ms: float
