"""ARGB packing and conversions between RGB, HSV, XYZ and CIELAB."""

from __future__ import annotations

import math

__all__ = [
    "THRESHOLD",
    "argb32",
    "get_a",
    "get_r",
    "get_g",
    "get_b",
    "lab_f",
    "lab_inv_f",
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_xyz",
    "xyz_to_lab",
    "lab_to_xyz",
    "squeeze01",
    "rgb_to_argb",
    "hsv_to_argb",
    "xyz_to_argb",
    "lab_to_argb",
]

THRESHOLD = 1e-10
_SIXTY_DEGREES = math.radians(60.0)


def argb32(r: int, g: int, b: int, a: int = 255) -> int:
    """Pack four 8-bit channels into one 32-bit ARGB value."""
    return ((int(a) & 0xFF) << 24) | ((int(r) & 0xFF) << 16) | ((int(g) & 0xFF) << 8) | (int(b) & 0xFF)


def get_a(argb: int) -> int:
    """Alpha channel of an ARGB value."""
    return (argb >> 24) & 0xFF


def get_r(argb: int) -> int:
    """Red channel of an ARGB value."""
    return (argb & 0x00FF0000) >> 16


def get_g(argb: int) -> int:
    """Green channel of an ARGB value."""
    return (argb & 0x0000FF00) >> 8


def get_b(argb: int) -> int:
    """Blue channel of an ARGB value."""
    return argb & 0x000000FF


def lab_f(t: float) -> float:
    """The CIELAB companding function."""
    if t > 0.008856:
        return t ** (1.0 / 3.0)
    return 7.787 * t + 16.0 / 116.0


def lab_inv_f(t: float) -> float:
    """Inverse of :func:`lab_f`."""
    if t > 0.008856 ** (1.0 / 3.0):
        return t * t * t
    return (t - 16.0 / 116.0) / 7.787


def rgb_to_hsv(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB in [0, 1] to HSV, hue normalised to [0, 1]."""
    k = 0.0
    if g < b:
        g, b = b, g
        k = -1.0
    if r < g:
        r, g = g, r
        k = -2.0 / 6.0 - k
    chroma = r - min(g, b)
    h = abs(k + (g - b) / (6.0 * chroma + THRESHOLD))
    s = chroma / (r + THRESHOLD)
    return h, s, r


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """Convert HSV with hue in radians to RGB."""
    c = v * s
    sector = int(h / _SIXTY_DEGREES)
    remainder = int(math.fmod(sector, 2))
    x = c * (1 - abs(remainder - 1))
    m = v - c
    if h < math.radians(60):
        return c + m, x + m, m
    if h < math.radians(120):
        return x + m, c + m, m
    if h < math.radians(180):
        return m, c + m, x + m
    if h < math.radians(240):
        return m, x + m, c + m
    if h < math.radians(300):
        return x + m, m, c + m
    return c + m, m, x + m


def rgb_to_xyz(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert linear RGB to CIE XYZ."""
    x = 0.412453 * r + 0.357580 * g + 0.180423 * b
    y = 0.212671 * r + 0.715160 * g + 0.072169 * b
    z = 0.019334 * r + 0.119193 * g + 0.950227 * b
    return x, y, z


def xyz_to_lab(x: float, y: float, z: float) -> tuple[float, float, float]:
    """Convert CIE XYZ to the lightness/opponent space used for matching."""
    fx = lab_f(x / 0.9504)
    fy = lab_f(y / 1.0)
    fz = lab_f(z / 1.0888)
    return 116.0 * fx - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


def lab_to_xyz(l: float, a: float, b: float) -> tuple[float, float, float]:
    """Inverse of :func:`xyz_to_lab`."""
    fx = 0.008620689655172 * (l + 16.0)
    fy = fx - 0.002 * a
    fz = fy - 0.005 * b
    return lab_inv_f(fx) * 0.9504, lab_inv_f(fy) * 1.0, lab_inv_f(fz) * 1.0888


def squeeze01(t: float) -> float:
    """Clamp a value to [0, 1]."""
    if t < 0.0:
        return 0.0
    if t > 1.0:
        return 1.0
    return t


def rgb_to_argb(r: float, g: float, b: float) -> int:
    """Pack RGB in [0, 1] into an opaque ARGB value, clamping each channel."""
    return argb32(int(255 * squeeze01(r)), int(255 * squeeze01(g)), int(255 * squeeze01(b)))


def xyz_to_argb(x: float, y: float, z: float) -> int:
    """Convert CIE XYZ to an opaque ARGB value."""
    return rgb_to_argb(
        3.2404814 * x - 1.5371516 * y - 0.4985363 * z,
        -0.9692550 * x + 1.8759900 * y + 0.0415559 * z,
        0.0556466 * x - 0.2040413 * y + 1.0573111 * z,
    )


def lab_to_argb(l: float, a: float, b: float) -> int:
    """Convert a Lab triple to an opaque ARGB value."""
    return xyz_to_argb(*lab_to_xyz(l, a, b))


def hsv_to_argb(h: float, s: float, v: float) -> int:
    """Convert HSV (hue in radians) to an opaque ARGB value."""
    return rgb_to_argb(*hsv_to_rgb(h, s, v))