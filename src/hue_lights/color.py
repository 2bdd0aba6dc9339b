"""Color values accepted by the light color operations."""

import colorsys
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


class HSLColor(BaseModel):
    """Hue, saturation and lightness, each in the range 0.0-1.0."""

    model_config = ConfigDict(frozen=True)

    h: float = Field(ge=0.0, le=1.0, description="Hue as a fraction of a full turn")
    s: float = Field(ge=0.0, le=1.0, description="Saturation")
    l: float = Field(ge=0.0, le=1.0, description="Lightness")  # noqa: E741

    def to_hsl(self) -> "HSLColor":
        return self

    def with_lightness(self, lightness: float) -> "HSLColor":
        """Return a copy of this color with a different lightness."""
        return HSLColor(h=self.h, s=self.s, l=lightness)


class RGBColor(BaseModel):
    """An 8-bit per channel RGB color."""

    model_config = ConfigDict(frozen=True)

    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)

    @classmethod
    def from_hex(cls, value: str) -> "RGBColor":
        """Parse ``#rrggbb`` (leading ``#`` optional)."""
        match = _HEX_COLOR.match(value.strip())
        if not match:
            raise ValueError(f"Invalid hex color: {value!r}")
        red, green, blue = (int(part, 16) for part in match.groups())
        return cls(red=red, green=green, blue=blue)

    def to_hsl(self) -> HSLColor:
        h, l, s = colorsys.rgb_to_hls(
            self.red / 255.0, self.green / 255.0, self.blue / 255.0
        )
        return HSLColor(h=h, s=s, l=l)


def as_hsl(color: Any) -> HSLColor:
    """Convert any object implementing ``to_hsl()`` into an ``HSLColor``."""
    if isinstance(color, HSLColor):
        return color
    to_hsl = getattr(color, "to_hsl", None)
    if to_hsl is None:
        raise TypeError(f"Expected a color with to_hsl(), got {type(color).__name__}")
    hsl = to_hsl()
    if isinstance(hsl, HSLColor):
        return hsl
    return HSLColor(h=hsl.h, s=hsl.s, l=hsl.l)


RED = RGBColor(red=255, green=0, blue=0)
GREEN = RGBColor(red=0, green=255, blue=0)
BLUE = RGBColor(red=0, green=0, blue=255)
WHITE = RGBColor(red=255, green=255, blue=255)
YELLOW = RGBColor(red=255, green=255, blue=0)
CYAN = RGBColor(red=0, green=255, blue=255)
MAGENTA = RGBColor(red=255, green=0, blue=255)
ORANGE = RGBColor(red=255, green=165, blue=0)
PURPLE = RGBColor(red=128, green=0, blue=128)

NAMED_COLORS = {
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "white": WHITE,
    "yellow": YELLOW,
    "cyan": CYAN,
    "magenta": MAGENTA,
    "orange": ORANGE,
    "purple": PURPLE,
}
