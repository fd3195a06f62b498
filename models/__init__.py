"""Data models for codec parameters, coefficients and results."""

from .codec_params import CodecParams, DeliveryMode
from .quantization_params import QuantizationParams
from .coefficient_set import CoefficientSet, EncodedImage
from .decoder_state import DecoderState
from .compression_result import QuantizationResult, CodecResult

__all__ = [
    'CodecParams',
    'DeliveryMode',
    'QuantizationParams',
    'CoefficientSet',
    'EncodedImage',
    'DecoderState',
    'QuantizationResult',
    'CodecResult',
]
