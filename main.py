"""
Block Transform Codec Studio
Scalar quantization experiments and progressive 8x8 DCT decoding
"""

import sys
import warnings

warnings.filterwarnings('ignore', category=RuntimeWarning)

USAGE = """\
Usage: python main.py quantize <image|--synthetic> <1|rgb|2|yuv> <1|uniform|2|smart> Q1 Q2 Q3
       python main.py codec <image|--synthetic> <N 0-7> <1|baseline|2|spectral_selection|3|successive_bit>
       python main.py sweep <image|--synthetic> [analysis.csv]"""


def _load(source: str):
    from utils.image_io import load_image
    from utils.test_images import generate_gradient, to_buffer

    if source == '--synthetic':
        print("Generating test image...")
        return to_buffer(generate_gradient(352, 288)), 352, 288
    print(f"Loading: {source}")
    return load_image(source)


def _format_centers(centers) -> str:
    return ' '.join(f"{c:.2f}" for c in centers)


def run_quantize(args):
    from models.quantization_params import QuantizationParams
    from engines.pipeline import quantize_image, color_roundtrip, component_ranges

    if len(args) != 6:
        print(USAGE)
        sys.exit(1)
    params = QuantizationParams.from_strings(*args[1:6])
    rgb, width, height = _load(args[0])
    print(f"Image: {width}x{height}")

    ranges = component_ranges(rgb)
    print(' '.join(f"{name}:[{lo:.2f},{hi:.2f}]" for name, (lo, hi) in ranges.items()))
    rt_mse, rt_psnr = color_roundtrip(rgb)
    print(f"Roundtrip MSE={rt_mse:.4f} PSNR={rt_psnr:.2f}")

    result = quantize_image(rgb, width, height, params)

    if params.quant_mode == 'smart':
        for name, centers in result.centers.items():
            if 0 < len(centers) <= 16:
                print(f"{name} centers: {_format_centers(centers)}")
    label = "Channel" if params.color_mode == 'rgb' else "Component"
    print(f"{label} MSE " + ' '.join(f"{k}={v:.4f}" for k, v in result.channel_mse.items()))

    print("\n=== Results ===")
    print(f"MSE:       {result.mse:.4f}")
    print(f"PSNR:      {result.psnr:.2f} dB")
    print(f"Abs error: {result.abs_error}")
    print(f"Time:      {result.elapsed_ms:.2f} ms")


def run_codec(args):
    from models.codec_params import CodecParams, DeliveryMode
    from engines.pipeline import encode_decode

    if len(args) != 3:
        print(USAGE)
        sys.exit(1)
    params = CodecParams(quant_level=int(args[1]), delivery_mode=DeliveryMode.parse(args[2]))
    rgb, width, height = _load(args[0])
    print(f"Image: {width}x{height}")
    print(f"Quantization level: {params.quant_level} (2^{params.quant_level})")
    print(f"Delivery mode: {params.delivery_mode.name.replace('_', ' ').title()}")

    result = encode_decode(rgb, width, height, params)

    print("\n=== Results ===")
    print(f"Blocks:    {result.blocks[0]}x{result.blocks[1]} per channel")
    print(f"Steps:     {result.steps}")
    print(f"Nonzero:   {result.nonzero_coeffs}/{result.total_coeffs}")
    print(f"PSNR:      {result.psnr:.2f} dB")
    print(f"SSIM:      {result.ssim:.4f}")
    print(f"Time:      {result.encode_time_ms + result.decode_time_ms:.2f} ms")


def run_sweep(args):
    from engines.pipeline import bit_allocation_sweep, write_sweep_csv

    if not args:
        print(USAGE)
        sys.exit(1)
    out_path = args[1] if len(args) > 1 else 'analysis.csv'
    rgb, width, height = _load(args[0])
    rows = bit_allocation_sweep(rgb, width, height)
    write_sweep_csv(rows, out_path)
    print(f"\nSaved: {out_path} ({len(rows)} rows)")


def main():
    commands = {'quantize': run_quantize, 'codec': run_codec, 'sweep': run_sweep}
    if len(sys.argv) < 2 or sys.argv[1] not in commands:
        print(USAGE)
        sys.exit(0 if len(sys.argv) < 2 or sys.argv[1] == '--help' else 1)
    try:
        commands[sys.argv[1]](sys.argv[2:])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
