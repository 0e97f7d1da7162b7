"""Packed 32-bit RGBA colours and conversions between RGB, HSV and HSL.

A packed colour holds four 8-bit channels, most significant first:
``0xRRGGBBAA``.  HSV and HSL values are packed the same way, with hue,
saturation and value or lightness in place of red, green and blue.

The float conversions truncate toward zero when storing a channel and keep
only its low 8 bits, as the 32-bit target does for in-range results.
"""

from __future__ import annotations

_U32 = 0xFFFFFFFF


def _to_u32(value: float) -> int:
    return int(value) & _U32


def rgba_pack(r: float, g: float, b: float, a: float) -> int:
    """Pack four channels into ``0xRRGGBBAA``, keeping the low 8 bits of each."""
    return (
        ((_to_u32(r) << 24)
         | ((_to_u32(g) & 0xFF) << 16)
         | ((_to_u32(b) & 0xFF) << 8)
         | (_to_u32(a) & 0xFF))
        & _U32
    )


def rgba_unpack(color: int) -> tuple[int, int, int, int]:
    """Split ``0xRRGGBBAA`` into its four channels."""
    color &= _U32
    return (color >> 24) & 0xFF, (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _alpha(color: int) -> int:
    return color & 0xFF


def rgb_to_hsv(color: int) -> int:
    """Convert a packed RGB colour to packed HSV.

    The channels are taken from the packed value divided by 255, and the
    saturation test that picks the hue always sees zero, so the hue is
    always the one given for a grey input.
    """
    color &= _U32
    r, g, b, _ = rgba_unpack(color // 0xFF)
    maximum = max(r, g, b)
    minimum = min(r, g, b)
    delta = maximum - minimum

    # The hue is chosen while saturation is still zero: always the grey case.
    hue = -1.0 * 60
    if hue < 0:
        hue /= 360

    saturation = delta / maximum if maximum != 0 else 0.0
    value = maximum
    return rgba_pack(hue * 0xFF, saturation * 0xFF, value * 0xFF, _alpha(color))


def hsv_to_rgb(color: int) -> int:
    """Convert a packed HSV colour to packed RGB.

    The channels are taken from the packed value divided by 255.
    """
    color &= _U32
    h, s, v, _ = rgba_unpack(color // 0xFF)

    if s == 0:
        r = g = b = float(v)
    else:
        var_h = int(h * 6)
        if var_h == 6:
            var_h = 0
        var_i = var_h
        var_1 = v * (1 - s)
        var_2 = v * (1 - s * (var_h - var_i))
        var_3 = v * (1 - s * (1 - (var_h - var_i)))
        if var_i == 0:
            r, g, b = v, var_3, var_1
        elif var_i == 1:
            r, g, b = var_2, v, var_1
        elif var_i == 2:
            r, g, b = var_1, v, var_3
        elif var_i == 3:
            r, g, b = var_1, var_2, v
        elif var_i == 4:
            r, g, b = var_3, var_1, v
        else:
            r, g, b = v, var_1, var_2

    return rgba_pack(r * 0xFF, g * 0xFF, b * 0xFF, _alpha(color))


def rgb_to_hsl(color: int) -> int:
    """Convert a packed RGB colour to packed HSL, each component scaled to 0-255."""
    color &= _U32
    red, green, blue, _ = rgba_unpack(color)
    r = red / 0xFF
    g = green / 0xFF
    b = blue / 0xFF

    maximum = max(r, g, b)
    minimum = min(r, g, b)
    delta = maximum - minimum

    h = 0.0
    s = 0.0
    lightness = (maximum + minimum) / 2

    if delta != 0:
        if lightness < 0.5:
            s = delta / (maximum + minimum)
        else:
            s = delta / (2.0 - maximum - minimum)

        del_r = (((maximum - r) / 6.0) + (delta / 2.0)) / delta
        del_g = (((maximum - g) / 6.0) + (delta / 2.0)) / delta
        del_b = (((maximum - b) / 6.0) + (delta / 2.0)) / delta
        if r == maximum:
            h = del_b - del_g
        elif g == maximum:
            h = (1.0 / 3.0) + del_r - del_b
        elif b == maximum:
            h = (2.0 / 3.0) + del_g - del_r

        if h < 0.0:
            h += 1.0
        if h > 1.0:
            h -= 1.0

    return rgba_pack(h * 0xFF, s * 0xFF, lightness * 0xFF, _alpha(color))


def hue_to_rgb(v1: float, v2: float, vh: float) -> float:
    """Return one RGB channel for hue ``vh`` between the levels ``v1`` and ``v2``."""
    if vh < 0:
        vh += 1.0
    if vh > 1:
        vh -= 1.0
    if 6.0 * vh < 1:
        return v1 + (v2 - v1) * 6.0 * vh
    if 2.0 * vh < 1:
        return v2
    if 3.0 * vh < 2:
        return v1 + (v2 - v1) * ((2.0 / 3.0) - vh) * 6.0
    return v1


def hsl_to_rgb(color: int) -> int:
    """Convert a packed HSL colour to packed RGB."""
    color &= _U32
    hue, sat, light, _ = rgba_unpack(color)
    h = hue / 0xFF
    s = sat / 0xFF
    lightness = light / 0xFF

    if s == 0:
        r = g = b = lightness
    else:
        if lightness < 0.5:
            var_2 = lightness * (1.0 + s)
        else:
            var_2 = (lightness + s) - (s * lightness)
        var_1 = 2.0 * lightness - var_2

        r = hue_to_rgb(var_1, var_2, h + (1.0 / 3.0))
        g = hue_to_rgb(var_1, var_2, h)
        b = hue_to_rgb(var_1, var_2, h - (1.0 / 3.0))

    return rgba_pack(r * 0xFF, g * 0xFF, b * 0xFF, _alpha(color))


def _check_byte(name: str, value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in the range 0-255, got {value}")
    return value


def _c_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def hsv8_to_rgb(h: int, s: int, v: int) -> tuple[int, int, int]:
    """Convert 8-bit HSV components to an ``(r, g, b)`` triple using integer maths."""
    h = _check_byte("h", h)
    s = _check_byte("s", s)
    v = _check_byte("v", v)

    if s == 0:
        return v, v, v

    region = h // 43
    remainder = ((h - region * 43) * 6) & 0xFF

    p = ((v * (255 - s)) >> 8) & 0xFF
    q = ((v * (255 - ((s * remainder) >> 8))) >> 8) & 0xFF
    t = ((v * (255 - ((s * (255 - remainder)) >> 8))) >> 8) & 0xFF

    if region == 0:
        return v, t, p
    if region == 1:
        return q, v, p
    if region == 2:
        return p, v, t
    if region == 3:
        return p, q, v
    if region == 4:
        return t, p, v
    return v, p, q


def rgb_to_hsv8(r: int, g: int, b: int) -> tuple[int, int, int]:
    """Convert 8-bit RGB components to an ``(h, s, v)`` triple using integer maths."""
    r = _check_byte("r", r)
    g = _check_byte("g", g)
    b = _check_byte("b", b)

    rgb_min = min(r, g, b)
    rgb_max = max(r, g, b)

    v = rgb_max
    if v == 0:
        return 0, 0, v

    s = (255 * (rgb_max - rgb_min) // v) & 0xFF
    if s == 0:
        return 0, s, v

    spread = rgb_max - rgb_min
    if rgb_max == r:
        h = 0 + _c_div(43 * (g - b), spread)
    elif rgb_max == g:
        h = 85 + _c_div(43 * (b - r), spread)
    else:
        h = 171 + _c_div(43 * (r - g), spread)

    return h & 0xFF, s, v