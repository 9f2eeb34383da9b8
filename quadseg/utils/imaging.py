"""Image I/O — grayscale decode, power-of-two resize, encode and save.

Everything here is Pillow plus numpy; the engine itself only sees 2D arrays.
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError


def to_grayscale(array: NDArray) -> NDArray[np.uint8]:
    """Convert a 2D, RGB or RGBA array to an 8-bit grayscale array.

    Color input goes through Pillow's ``convert("L")`` (ITU-R 601-2 luma);
    alpha is dropped.
    """
    arr = np.asarray(array)
    if arr.ndim == 2:
        return _clip_uint8(arr)
    if arr.ndim == 3 and arr.shape[2] in (3, 4):
        rgb = _clip_uint8(arr[:, :, :3])
        return np.array(Image.fromarray(np.ascontiguousarray(rgb)).convert("L"))
    raise ValueError(f"expected a 2D, RGB or RGBA array, got shape {arr.shape}")


def decode_image(data: bytes) -> NDArray[np.uint8]:
    """Decode encoded image bytes (PNG, JPEG, ...) to grayscale."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return np.array(img.convert("L"))
    except UnidentifiedImageError as e:
        raise ValueError(f"cannot decode image data: {e}") from e


def load_grayscale(path: str | Path) -> NDArray[np.uint8]:
    """Read an image file as 8-bit grayscale."""
    try:
        with Image.open(path) as img:
            return np.array(img.convert("L"))
    except UnidentifiedImageError as e:
        raise ValueError(f"{path}: not a readable image") from e


def power_of_two_side(height: int, width: int) -> int:
    """Largest power of two not exceeding the shorter side."""
    shortest = min(height, width)
    if shortest < 1:
        raise ValueError(f"cannot size an empty {width}x{height} image")
    return 1 << (shortest.bit_length() - 1)


def resize_to_power_of_two(image: NDArray) -> NDArray[np.uint8]:
    """Resize to an s×s square where s = ``power_of_two_side``.

    The quadtree then halves evenly all the way down. Aspect ratio is not
    preserved.
    """
    gray = to_grayscale(image)
    side = power_of_two_side(*gray.shape)
    if gray.shape == (side, side):
        return gray
    resized = Image.fromarray(np.ascontiguousarray(gray)).resize((side, side), Image.Resampling.BILINEAR)
    return np.array(resized)


def encode_png(array: NDArray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(_clip_uint8(array))).save(buf, format="PNG")
    return buf.getvalue()


def save_image(array: NDArray, path: str | Path) -> Path:
    """Write a 2D array as an 8-bit grayscale image; format from the suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(_clip_uint8(array))).save(path)
    return path


def _clip_uint8(array: NDArray) -> NDArray[np.uint8]:
    arr = np.asarray(array)
    if arr.dtype == np.uint8:
        return arr
    return np.clip(np.rint(arr.astype(np.float64)), 0, 255).astype(np.uint8)
