"""
Drawing surface (Pillow).

A `Surface` has a logical size (the units all projection and layout math uses)
and a device pixel ratio. The raster behind it is `logical * dpr` pixels.

Every primitive takes logical units and multiplies by the ratio on the way to
Pillow. The ratio is read from the surface each time, never folded into some
accumulated transform, so repeated renders cannot compound the scale.

Each primitive also appends a `DrawOp` to `operations`, tagged with the layer it
belongs to. `reset()` clears both the raster and the log, so after a render the
log describes exactly what that render drew.
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Literal

from PIL import Image, ImageDraw, ImageFont

from carelocator.render.styles import hex_to_rgba

logger = logging.getLogger(__name__)

TextAlign = Literal["left", "center"]

# Pillow text anchors: horizontal (l/m) + vertical baseline (s), matching canvas fillText.
_ANCHORS: dict[str, str] = {"left": "ls", "center": "ms"}


@dataclass(frozen=True)
class DrawOp:
    layer: str
    kind: str
    label: str | None = None


@lru_cache(maxsize=32)
def _get_font(size_px: int, bold: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Get a cached font instance at a raster pixel size."""
    names = ["DejaVuSans-Bold.ttf", "Arial Bold.ttf"] if bold else []
    names += ["DejaVuSans.ttf", "Arial.ttf"]
    for name in names:
        try:
            return ImageFont.truetype(name, size_px)
        except OSError:
            continue
    logger.debug("No TrueType font found; using Pillow default font at %dpx", size_px)
    return ImageFont.load_default(size=size_px)


def dash_segments(
    x0: float, y0: float, x1: float, y1: float, pattern: tuple[float, float]
) -> Iterator[tuple[float, float, float, float]]:
    """Split a line into the "on" pieces of an (on, off) dash pattern."""
    on, off = pattern
    length = math.hypot(x1 - x0, y1 - y0)
    if length == 0 or on <= 0:
        return
    ux = (x1 - x0) / length
    uy = (y1 - y0) / length
    pos = 0.0
    while pos < length:
        end = min(pos + on, length)
        yield (x0 + ux * pos, y0 + uy * pos, x0 + ux * end, y0 + uy * end)
        pos = end + off


class Surface:
    """A DPR-aware raster plus a log of what was drawn on it."""

    def __init__(self, width: float, height: float, *, device_pixel_ratio: float = 1.0):
        if float(width) <= 0 or float(height) <= 0:
            raise ValueError("surface width and height must be > 0")
        if float(device_pixel_ratio) <= 0:
            raise ValueError("device_pixel_ratio must be > 0")
        self.width = float(width)
        self.height = float(height)
        self.device_pixel_ratio = float(device_pixel_ratio)
        self.operations: list[DrawOp] = []
        self.image: Image.Image = Image.new("RGB", self.raster_size, "white")
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    @property
    def raster_size(self) -> tuple[int, int]:
        dpr = self.device_pixel_ratio
        return (max(1, round(self.width * dpr)), max(1, round(self.height * dpr)))

    def reset(self) -> None:
        """Start from a blank raster sized for the current logical size and ratio."""
        self.image = Image.new("RGB", self.raster_size, "white")
        # "RGBA" draw mode on an RGB image blends translucent fills onto what is below.
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self.operations = []

    def _px(self, value: float) -> float:
        return value * self.device_pixel_ratio

    def _record(self, layer: str, kind: str, label: str | None = None) -> None:
        self.operations.append(DrawOp(layer=layer, kind=kind, label=label))

    def ops(self, layer: str, kind: str | None = None) -> list[DrawOp]:
        """Draw operations from the last render on `layer` (optionally of one kind)."""
        return [op for op in self.operations if op.layer == layer and (kind is None or op.kind == kind)]

    # Primitives (all arguments in logical units).

    def fill_rect(self, x0: float, y0: float, x1: float, y1: float, color: str, *, layer: str) -> None:
        left, top = self._px(x0), self._px(y0)
        # A sub-pixel surface still covers its single raster pixel.
        right = max(left, self._px(x1) - 1)
        bottom = max(top, self._px(y1) - 1)
        self._draw.rectangle([left, top, right, bottom], fill=hex_to_rgba(color))
        self._record(layer, "rect")

    def line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: str,
        *,
        layer: str,
        width: float = 1,
        alpha: int = 255,
        dash: tuple[float, float] | None = None,
    ) -> None:
        fill = hex_to_rgba(color, alpha)
        px_width = max(1, round(self._px(width)))
        pieces = [(x0, y0, x1, y1)] if dash is None else list(dash_segments(x0, y0, x1, y1, dash))
        for a, b, c, d in pieces:
            self._draw.line(
                [(self._px(a), self._px(b)), (self._px(c), self._px(d))],
                fill=fill,
                width=px_width,
            )
        self._record(layer, "dashed_line" if dash else "line")

    def fill_circle(self, cx: float, cy: float, radius: float, color: str, *, layer: str) -> None:
        self._draw.ellipse(self._circle_box(cx, cy, radius), fill=hex_to_rgba(color))
        self._record(layer, "circle")

    def stroke_circle(
        self, cx: float, cy: float, radius: float, color: str, *, layer: str, width: float = 1
    ) -> None:
        self._draw.ellipse(
            self._circle_box(cx, cy, radius),
            outline=hex_to_rgba(color),
            width=max(1, round(self._px(width))),
        )
        self._record(layer, "ring")

    def text(
        self,
        x: float,
        y: float,
        text: str,
        color: str,
        *,
        layer: str,
        size: float = 12,
        bold: bool = False,
        align: TextAlign = "center",
    ) -> None:
        """Draw `text` with its baseline at `y`; `x` is the left edge or the center."""
        font = _get_font(max(1, round(self._px(size))), bold)
        self._draw.text(
            (self._px(x), self._px(y)),
            text,
            fill=hex_to_rgba(color),
            font=font,
            anchor=_ANCHORS[align],
        )
        self._record(layer, "text", text)

    def _circle_box(self, cx: float, cy: float, radius: float) -> list[float]:
        x, y, r = self._px(cx), self._px(cy), self._px(radius)
        return [x - r, y - r, x + r, y + r]

    # Export.

    def to_png_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(out, format="PNG")
        return out
