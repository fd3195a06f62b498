"""Transform codec parameters."""

import numpy as np
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from utils.constants import MAX_CLI_QUANT_LEVEL


class DeliveryMode(IntEnum):
    """Progressive delivery discipline of the decoder."""

    BASELINE = 1            # one block per step, row-major
    SPECTRAL_SELECTION = 2  # first k+1 coefficients of every block
    SUCCESSIVE_BIT = 3      # top k+1 magnitude bits of every coefficient

    @classmethod
    def parse(cls, value: Union[int, str, 'DeliveryMode']) -> 'DeliveryMode':
        """Accept an enum member, its integer value, or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                value = int(text)
            else:
                try:
                    return cls[text.upper().replace('-', '_')]
                except KeyError:
                    raise ValueError(f"Unknown delivery mode: {value}") from None
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Delivery mode must be 1, 2, or 3, got {value}") from None


@dataclass
class CodecParams:
    """Block DCT codec parameters."""

    quant_level: int = 0
    delivery_mode: DeliveryMode = DeliveryMode.BASELINE

    def __post_init__(self):
        level = self.quant_level
        if isinstance(level, bool) or not isinstance(level, (int, np.integer)) \
                or not (0 <= level <= MAX_CLI_QUANT_LEVEL):
            raise ValueError(
                f"Quantization level must be 0-{MAX_CLI_QUANT_LEVEL}, got {self.quant_level}"
            )
        self.quant_level = int(level)
        self.delivery_mode = DeliveryMode.parse(self.delivery_mode)

    @property
    def divisor(self) -> int:
        return 1 << self.quant_level
