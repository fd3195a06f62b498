"""Quantized DCT coefficients of one channel."""

from dataclasses import dataclass
import numpy as np

from utils.constants import COEFFS_PER_BLOCK, BLOCK_SIZE


@dataclass(frozen=True)
class CoefficientSet:
    """
    Flat, read-only store of quantized coefficients for one channel.

    Block b occupies data[b*64:(b+1)*64], coefficients in row-major (u, v)
    order (index u*8+v, not zig-zag). Blocks are ordered row-major over the
    grid: b = block_y * blocks_x + block_x.
    """

    data: np.ndarray
    blocks_x: int
    blocks_y: int

    def __post_init__(self):
        if self.blocks_x <= 0 or self.blocks_y <= 0:
            raise ValueError(f"Block grid must be positive, got {self.blocks_x}x{self.blocks_y}")
        data = np.array(self.data, dtype=np.int32).ravel()
        expected = self.blocks_x * self.blocks_y * COEFFS_PER_BLOCK
        if data.size != expected:
            raise ValueError(f"Expected {expected} coefficients, got {data.size}")
        data.setflags(write=False)
        object.__setattr__(self, 'data', data)

    @classmethod
    def from_blocks(cls, blocks: np.ndarray, blocks_x: int, blocks_y: int) -> 'CoefficientSet':
        """Build from an array of shape (n, 8, 8) or (n, 64)."""
        return cls(np.asarray(blocks).reshape(-1), blocks_x, blocks_y)

    @property
    def block_count(self) -> int:
        return self.blocks_x * self.blocks_y

    @property
    def shape(self) -> tuple:
        return self.blocks_x, self.blocks_y

    def block(self, block_index: int) -> np.ndarray:
        """The 64 coefficients of one block as a read-only view."""
        if not (0 <= block_index < self.block_count):
            raise IndexError(f"Block index {block_index} out of range 0-{self.block_count - 1}")
        start = block_index * COEFFS_PER_BLOCK
        return self.data[start:start + COEFFS_PER_BLOCK]

    def coefficient(self, block_index: int, coef_index: int) -> int:
        if not (0 <= coef_index < COEFFS_PER_BLOCK):
            raise IndexError(f"Coefficient index {coef_index} out of range 0-63")
        return int(self.block(block_index)[coef_index])

    def as_blocks(self) -> np.ndarray:
        """Read-only view of shape (block_count, 8, 8), indexed [block, u, v]."""
        return self.data.reshape(self.block_count, BLOCK_SIZE, BLOCK_SIZE)

    def nonzero_count(self) -> int:
        return int(np.count_nonzero(self.data))


@dataclass(frozen=True)
class EncodedImage:
    """The three channel coefficient sets produced by one encode pass."""

    red: CoefficientSet
    green: CoefficientSet
    blue: CoefficientSet
    width: int
    height: int
    quant_level: int

    def __post_init__(self):
        if not (self.red.shape == self.green.shape == self.blue.shape):
            raise ValueError(
                f"Channel grids differ: {self.red.shape}, {self.green.shape}, {self.blue.shape}"
            )
        expected = ((self.width + BLOCK_SIZE - 1) // BLOCK_SIZE,
                    (self.height + BLOCK_SIZE - 1) // BLOCK_SIZE)
        if self.red.shape != expected:
            raise ValueError(
                f"Grid {self.red.shape} does not cover a {self.width}x{self.height} image"
            )

    @property
    def channels(self) -> tuple:
        return self.red, self.green, self.blue

    @property
    def block_count(self) -> int:
        return self.red.block_count

    def nonzero_count(self) -> int:
        return sum(c.nonzero_count() for c in self.channels)

    def total_count(self) -> int:
        return sum(c.data.size for c in self.channels)
