"""Shared constants for the block transform codec and scalar quantizers."""

BLOCK_SIZE = 8
COEFFS_PER_BLOCK = BLOCK_SIZE * BLOCK_SIZE
LEVEL_SHIFT = 128.0

# Smart quantizer
HISTOGRAM_BINS = 256
DEFAULT_MAX_ITER = 30
CONVERGENCE_THRESHOLD = 0.25

# Largest quantization level N accepted by the codec (divisor 2^N)
MAX_QUANT_LEVEL = 15
MAX_CLI_QUANT_LEVEL = 7

SPECTRAL_SELECTION_STEPS = COEFFS_PER_BLOCK
# Coefficient magnitudes are treated as 16-bit values
SUCCESSIVE_BIT_STEPS = 16

# Returned by psnr_from_mse() for identical inputs
PSNR_SENTINEL = 1e9
PEAK_VALUE = 255.0

# BT.601 analog YUV
RGB_TO_YUV = (
    (0.299, 0.587, 0.114),
    (-0.147, -0.289, 0.436),
    (0.615, -0.515, -0.100),
)
YUV_TO_RGB = (
    (1.0, 0.0, 1.1398),
    (1.0, -0.3946, -0.5806),
    (1.0, 2.0321, 0.0),
)

# Raw .rgb sizes probed when the file name carries no WxH suffix
KNOWN_RAW_SIZES = (
    (512, 512),
    (352, 288),
    (640, 480),
    (256, 256),
    (320, 240),
    (384, 288),
)
