"""Scalar quantization experiment parameters."""

from dataclasses import dataclass
from typing import Literal, Tuple

from utils.constants import DEFAULT_MAX_ITER

_COLOR_ALIASES = {'1': 'rgb', 'rgb': 'rgb', '2': 'yuv', 'yuv': 'yuv'}
_QUANT_ALIASES = {
    '1': 'uniform', 'uniform': 'uniform', 'u': 'uniform',
    '2': 'smart', 'smart': 'smart', 's': 'smart',
}


@dataclass
class QuantizationParams:
    """Per-channel bit depths plus color and quantizer choice."""

    color_mode: Literal['rgb', 'yuv'] = 'rgb'
    quant_mode: Literal['uniform', 'smart'] = 'uniform'
    bits: Tuple[int, int, int] = (8, 8, 8)
    max_iter: int = DEFAULT_MAX_ITER

    def __post_init__(self):
        if self.color_mode not in ('rgb', 'yuv'):
            raise ValueError(f"Color mode must be 'rgb' or 'yuv', got {self.color_mode}")
        if self.quant_mode not in ('uniform', 'smart'):
            raise ValueError(f"Quant mode must be 'uniform' or 'smart', got {self.quant_mode}")
        self.bits = tuple(self.bits)
        if len(self.bits) != 3:
            raise ValueError(f"Need one bit depth per channel, got {len(self.bits)}")
        for q in self.bits:
            if not isinstance(q, int) or not (1 <= q <= 8):
                raise ValueError(f"Bit depths must be 1-8, got {self.bits}")
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be non-negative, got {self.max_iter}")

    @classmethod
    def from_strings(cls, color: str, quant: str, q1: str, q2: str, q3: str) -> 'QuantizationParams':
        """Build from command-line style tokens ('1'|'rgb'|'yuv', '2'|'smart'|'s', ...)."""
        color_mode = _COLOR_ALIASES.get(str(color).strip().lower())
        if color_mode is None:
            raise ValueError(f"Unrecognized color mode (use 1|rgb or 2|yuv): {color}")
        quant_mode = _QUANT_ALIASES.get(str(quant).strip().lower())
        if quant_mode is None:
            raise ValueError(f"Unrecognized quant mode (use 1|uniform or 2|smart): {quant}")
        try:
            bits = tuple(int(q) for q in (q1, q2, q3))
        except ValueError:
            raise ValueError(f"Bit depths must be integers, got {q1} {q2} {q3}") from None
        return cls(color_mode=color_mode, quant_mode=quant_mode, bits=bits)

    @property
    def total_bits(self) -> int:
        return sum(self.bits)
