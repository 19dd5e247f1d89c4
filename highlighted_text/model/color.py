"""
Color value type used for foreground and background attributes.

Colors are platform-neutral RGBA values. Parsing of textual color
specifications is delegated to Pillow's ``ImageColor`` so hosts can configure
colors as ``"#ff0000"``, ``"#ff000080"``, ``"crimson"``, ``"rgb(255, 0, 0)"``
or ``"hsl(0, 100%, 50%)"``.
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Final

from PIL import ImageColor

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Color:
    """
    Immutable RGBA color with 8-bit channels.

    Example:
        >>> Color.parse("red")
        Color(red=255, green=0, blue=0, alpha=255)
        >>> Color(0, 128, 255).to_hex()
        '#0080ff'
    """

    red: int
    green: int
    blue: int
    alpha: int = 255

    LABEL: ClassVar["Color"]
    SECONDARY_LABEL: ClassVar["Color"]

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Color.{name} must be int, got {type(value).__name__}")
            if not 0 <= value <= 255:
                raise ValueError(f"Color.{name} out of range 0..255: {value}")

    @classmethod
    def parse(cls, spec: "str | Color") -> "Color":
        """Build a color from any specification Pillow understands."""
        if isinstance(spec, Color):
            return spec
        if not isinstance(spec, str):
            raise TypeError(f"Color specification must be str, got {type(spec).__name__}")
        try:
            red, green, blue, alpha = ImageColor.getcolor(spec.strip(), "RGBA")
        except ValueError as exc:
            logger.error("Cannot parse color %r: %s", spec, exc)
            raise ValueError(f"Unknown color specification: {spec!r}") from exc
        return cls(red, green, blue, alpha)

    def with_alpha(self, alpha: int) -> "Color":
        return Color(self.red, self.green, self.blue, alpha)

    def to_hex(self, include_alpha: bool = False) -> str:
        value = f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        if include_alpha or self.alpha != 255:
            value += f"{self.alpha:02x}"
        return value

    def to_dict(self) -> dict[str, int]:
        return {"red": self.red, "green": self.green, "blue": self.blue, "alpha": self.alpha}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Color":
        return Color(
            red=int(data["red"]),
            green=int(data["green"]),
            blue=int(data["blue"]),
            alpha=int(data.get("alpha", 255)),
        )

    def __str__(self) -> str:
        return self.to_hex()


Color.LABEL = Color(0, 0, 0)
Color.SECONDARY_LABEL = Color(128, 128, 128)
