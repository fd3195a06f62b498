"""Progressive reconstruction from stored DCT coefficients."""

import numpy as np
from typing import Iterator, Union

from models.codec_params import DeliveryMode
from models.coefficient_set import CoefficientSet, EncodedImage
from models.decoder_state import DecoderState
from engines.block_processor import block_grid, iter_blocks, insert_block, insert_all_blocks
from engines.codec import decode_block
from engines.quantizer import check_quant_level
from engines.color_space import split_channels
from utils.constants import COEFFS_PER_BLOCK, BLOCK_SIZE, SPECTRAL_SELECTION_STEPS, SUCCESSIVE_BIT_STEPS


def mask_spectral(blocks: np.ndarray, num_coeffs: int) -> np.ndarray:
    """Keep the first num_coeffs coefficients (row-major u*8+v) of each block, zero the rest."""
    keep = (np.arange(COEFFS_PER_BLOCK) < num_coeffs).reshape(BLOCK_SIZE, BLOCK_SIZE)
    return np.where(keep, blocks, 0)


def mask_magnitude_bits(coeffs: np.ndarray, num_bits: int) -> np.ndarray:
    """
    Keep the num_bits most significant magnitude bits of each coefficient.

    Bits are counted from each coefficient's own highest set bit; the sign
    is preserved and zero stays zero.
    """
    coeffs = np.asarray(coeffs, dtype=np.int64)
    magnitude = np.abs(coeffs)
    # frexp exponent of a positive integer is its bit length; 0 for 0
    _, bit_length = np.frexp(magnitude.astype(np.float64))
    shift = np.maximum(bit_length.astype(np.int64) - num_bits, 0)
    return np.sign(coeffs) * ((magnitude >> shift) << shift)


class ProgressiveDecoder:
    """
    Step machine that rebuilds an image from three channel coefficient sets.

    BASELINE decodes one block per step into a persistent frame.
    SPECTRAL_SELECTION and SUCCESSIVE_BIT re-render the whole frame every
    step from a growing subset of the coefficient data.

    Not safe for concurrent stepping; callers serialize decode_step()/reset().
    """

    def __init__(
        self,
        red: CoefficientSet,
        green: CoefficientSet,
        blue: CoefficientSet,
        width: int,
        height: int,
        quant_level: int,
        mode: Union[DeliveryMode, int, str]
    ):
        check_quant_level(quant_level)
        self._encoded = EncodedImage(red, green, blue, width, height, quant_level)
        self._mode = DeliveryMode.parse(mode)
        self._current_step = 0
        self._block_order = list(iter_blocks(*block_grid(width, height)))

        if self._mode == DeliveryMode.BASELINE:
            self._total_steps = len(self._block_order)
        elif self._mode == DeliveryMode.SPECTRAL_SELECTION:
            self._total_steps = SPECTRAL_SELECTION_STEPS
        else:
            self._total_steps = SUCCESSIVE_BIT_STEPS

    @classmethod
    def from_encoded(cls, encoded: EncodedImage, mode: Union[DeliveryMode, int, str]) -> 'ProgressiveDecoder':
        return cls(
            encoded.red, encoded.green, encoded.blue,
            encoded.width, encoded.height, encoded.quant_level, mode
        )

    @property
    def mode(self) -> DeliveryMode:
        return self._mode

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def total_steps(self) -> int:
        return self._total_steps

    @property
    def width(self) -> int:
        return self._encoded.width

    @property
    def height(self) -> int:
        return self._encoded.height

    @property
    def state(self) -> DecoderState:
        return DecoderState(self._mode, self._current_step, self._total_steps)

    def new_frame(self) -> np.ndarray:
        """Zeroed interleaved buffer sized for this decoder."""
        return np.zeros(self.width * self.height * 3, dtype=np.uint8)

    def reset(self) -> None:
        self._current_step = 0

    def decode_step(self, output: np.ndarray) -> bool:
        """
        Advance one step and write the resulting frame into output.

        Returns True while further steps remain. Once all steps are done the
        call leaves output untouched and returns False.
        """
        if self._current_step >= self._total_steps:
            return False
        frame = self._frame_view(output)

        if self._mode == DeliveryMode.BASELINE:
            self._decode_baseline(frame)
        elif self._mode == DeliveryMode.SPECTRAL_SELECTION:
            self._render(frame, lambda blocks: mask_spectral(blocks, self._current_step + 1))
        else:
            self._render(frame, lambda blocks: mask_magnitude_bits(blocks, self._current_step + 1))

        self._current_step += 1
        return self._current_step < self._total_steps

    def decode_all(self, output: np.ndarray) -> int:
        """Step to completion; returns the number of steps taken."""
        steps = 0
        while self._current_step < self._total_steps:
            self.decode_step(output)
            steps += 1
        return steps

    def frames(self) -> Iterator[np.ndarray]:
        """Yield a copy of the frame after each remaining step."""
        frame = self.new_frame()
        while self._current_step < self._total_steps:
            self.decode_step(frame)
            yield frame.copy()

    def _frame_view(self, output: np.ndarray) -> np.ndarray:
        expected = self.width * self.height * 3
        if not isinstance(output, np.ndarray) or output.dtype != np.uint8:
            raise ValueError("Output must be a numpy uint8 array")
        if output.size != expected:
            raise ValueError(f"Output has {output.size} bytes, expected {expected}")
        if not output.flags.c_contiguous or not output.flags.writeable:
            raise ValueError("Output must be a contiguous, writable array")
        return output.reshape(-1)

    def _decode_baseline(self, frame: np.ndarray) -> None:
        block_index, bx, by = self._block_order[self._current_step]

        if self._current_step == 0:
            frame[:] = 0

        for ch, (channel, coeffs) in enumerate(zip(split_channels(frame), self._encoded.channels)):
            quantized = coeffs.block(block_index).reshape(BLOCK_SIZE, BLOCK_SIZE)
            spatial = decode_block(quantized, self._encoded.quant_level)
            insert_block(channel, self.width, self.height, bx, by, spatial)
            frame[ch::3] = channel

    def _render(self, frame: np.ndarray, select) -> None:
        for ch, coeffs in enumerate(self._encoded.channels):
            spatial = decode_block(select(coeffs.as_blocks()), self._encoded.quant_level)
            channel = np.zeros(self.width * self.height, dtype=np.uint8)
            insert_all_blocks(channel, self.width, self.height, spatial)
            frame[ch::3] = channel
