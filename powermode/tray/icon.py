"""Tray icon rendering for the power mode tile."""

from __future__ import annotations

from functools import lru_cache

from PIL import Image, ImageDraw

from powermode.core.system_power import PowerMode

from .tile import MODE_TILE_INFO, Tile, TileState


_ICON_SIZE = (64, 64)
_INACTIVE_FACTOR = 0.55


def _scale_rgb(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    f = float(max(0.0, min(1.0, factor)))
    r, g, b = color
    return (int(round(r * f)), int(round(g * f)), int(round(b * f)))


def _draw_bolt(draw: ImageDraw.ImageDraw, color: tuple[int, int, int]) -> None:
    draw.polygon([(36, 6), (16, 36), (30, 36), (26, 58), (48, 26), (34, 26)], fill=color)


def _draw_battery(draw: ImageDraw.ImageDraw, color: tuple[int, int, int]) -> None:
    draw.rectangle([18, 14, 46, 58], outline=color, width=4)
    draw.rectangle([26, 6, 38, 14], fill=color)
    # plus
    draw.rectangle([30, 24, 34, 48], fill=color)
    draw.rectangle([20, 34, 44, 38], fill=color)


def _draw_gauge(draw: ImageDraw.ImageDraw, color: tuple[int, int, int]) -> None:
    draw.arc([6, 12, 58, 64], start=180, end=360, fill=color, width=6)
    draw.line([(32, 38), (48, 20)], fill=color, width=5)
    draw.ellipse([27, 33, 37, 43], fill=color)


def _draw_flame(draw: ImageDraw.ImageDraw, color: tuple[int, int, int]) -> None:
    draw.polygon([(32, 4), (50, 32), (46, 52), (32, 60), (18, 52), (14, 32), (24, 20), (28, 32)], fill=color)


def _draw_power(draw: ImageDraw.ImageDraw, color: tuple[int, int, int]) -> None:
    draw.arc([10, 12, 54, 56], start=-60, end=240, fill=color, width=6)
    draw.rectangle([29, 4, 35, 32], fill=color)


_GLYPHS = {
    "ic_power_default": _draw_power,
    "ic_battery_plus": _draw_battery,
    "ic_performance_mode": _draw_gauge,
    "ic_fire": _draw_flame,
}


@lru_cache(maxsize=32)
def create_icon(icon: str, color: tuple[int, int, int]) -> Image.Image:
    """Draw a 64x64 RGBA glyph for *icon* in *color*."""

    img = Image.new("RGBA", _ICON_SIZE, color=(0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    _GLYPHS.get(icon, _draw_power)(draw, color)
    return img


def tile_icon_color(tile: Tile, mode: PowerMode) -> tuple[int, int, int]:
    color = MODE_TILE_INFO[mode].color
    if tile.state is not TileState.ACTIVE:
        return _scale_rgb(color, _INACTIVE_FACTOR)
    return color


def icon_for_tile(tile: Tile, mode: PowerMode) -> Image.Image:
    return create_icon(tile.icon or MODE_TILE_INFO[mode].icon, tile_icon_color(tile, mode))
