"""Screen geometry for drawing the game and the menu: quads, viewports, filters."""

from __future__ import annotations

from dataclasses import dataclass

_GLSL_VERSIONS = {
    "2.0": 110,
    "2.1": 120,
    "3.0": 130,
    "3.1": 140,
    "3.2": 150,
    "4.1": 410,
    "4.2": 420,
}
_DEFAULT_GLSL_VERSION = 150

_FILTERS = {
    "linear": ("linear", "default"),
    "sharp-bilinear": ("linear", "sharp-bilinear"),
    "zfast-crt": ("linear", "zfast-crt"),
    "nearest": ("nearest", "default"),
}
_DEFAULT_FILTER = ("nearest", "default")


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components between 0 and 1."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


def xywh_to_4points(
    x: float, y: float, w: float, h: float, fbh: float
) -> tuple[float, float, float, float, float, float, float, float]:
    """Convert a top-left based rectangle to its four corners, bottom-left based.

    The corners come as (x1, y1, x2, y2, x3, y3, x4, y4): left-bottom,
    left-top, right-bottom, right-top.
    """
    bottom = fbh - (y + h)
    top = fbh - y
    return x, bottom, x, top, x + w, bottom, x + w, top


def vertex_array(
    x: float, y: float, w: float, h: float, scale: float, fb_width: float, fb_height: float
) -> list[float]:
    """Return the X, Y, U, V triangle strip of a scaled rectangle in clip space."""
    fbw = float(fb_width)
    fbh = float(fb_height)
    x1, y1, x2, y2, x3, y3, x4, y4 = xywh_to_4points(x, y, w * scale, h * scale, fbh)
    corners = ((x1, y1, 0.0, 1.0), (x2, y2, 0.0, 0.0), (x3, y3, 1.0, 1.0), (x4, y4, 1.0, 0.0))
    return [
        value
        for px, py, u, v in corners
        for value in (px / fbw * 2 - 1, py / fbh * 2 - 1, u, v)
    ]


def core_ratio_viewport(
    fb_width: float,
    fb_height: float,
    aspect_ratio: float,
    base_width: float,
    base_height: float,
) -> tuple[float, float, float, float]:
    """Return the (x, y, w, h) of the largest centred area keeping the game's ratio.

    When ``aspect_ratio`` is zero the ratio of the base dimensions is used.
    Raises ValueError when no ratio can be determined.
    """
    fbw = float(fb_width)
    fbh = float(fb_height)
    ratio = float(aspect_ratio)
    if ratio == 0:
        if base_height == 0:
            raise ValueError("cannot determine the aspect ratio of the game")
        ratio = base_width / base_height
    if ratio <= 0:
        raise ValueError(f"invalid aspect ratio {ratio}")

    h = fbh
    w = fbh * ratio
    if w > fbw:
        h = fbw / ratio
        w = fbw
    return (fbw - w) / 2, (fbh - h) / 2, w, h


def glsl_version(gl_version: str) -> int:
    """Return the GLSL version matching an OpenGL version; 150 when unknown."""
    return _GLSL_VERSIONS.get(gl_version, _DEFAULT_GLSL_VERSION)


def filter_mode(name: str) -> tuple[str, str]:
    """Return the (texture filter, shader program) pair of a video filter name.

    Unknown names fall back to nearest filtering with the default shader.
    """
    return _FILTERS.get(name, _DEFAULT_FILTER)