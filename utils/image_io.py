"""Image loading into interleaved RGB buffers."""

import os
import re
import cv2
import numpy as np
from typing import Tuple

from utils.constants import KNOWN_RAW_SIZES

_SIZE_SUFFIX = re.compile(r'.*_(\d+)x(\d+)\.rgb$', re.IGNORECASE)


def infer_size(path: str) -> Tuple[int, int]:
    """Width and height of a raw .rgb file from a *_WxH.rgb name or its byte count."""
    file_size = os.path.getsize(path)
    match = _SIZE_SUFFIX.match(os.path.basename(path))
    if match:
        width, height = int(match.group(1)), int(match.group(2))
    else:
        for width, height in KNOWN_RAW_SIZES:
            if file_size == width * height * 3:
                break
        else:
            raise ValueError(f"Cannot infer WxH for {path}; name it *_WxH.rgb")
    if file_size != width * height * 3:
        raise ValueError(f"Size mismatch: {file_size} bytes != {width}x{height}x3")
    return width, height


def load_planar_rgb(path: str, width: int, height: int) -> np.ndarray:
    """Read a raw planar file (all R, then all G, then all B) as an interleaved buffer."""
    plane = width * height
    data = np.fromfile(path, dtype=np.uint8, count=plane * 3)
    if data.size != plane * 3:
        raise ValueError(f"Could not read {plane * 3} bytes from {path}, got {data.size}")
    return data.reshape(3, plane).T.reshape(-1).copy()


def load_image(path: str) -> Tuple[np.ndarray, int, int]:
    """Load any image as (interleaved RGB buffer, width, height); raw .rgb files included."""
    if path.lower().endswith('.rgb'):
        width, height = infer_size(path)
        return load_planar_rgb(path, width, height), width, height
    img = cv2.imread(path)
    if img is None:
        raise ValueError(f"Could not load image from {path}")
    rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    height, width = rgb.shape[:2]
    return np.ascontiguousarray(rgb).reshape(-1), width, height
