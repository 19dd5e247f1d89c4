"""
Platform-neutral font descriptor.

A FontDescriptor names a family, a point size and a set of symbolic traits.
Trait composition is a set union, so applying a trait that is already present
returns an equal descriptor.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Final

from .enums import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, FontTrait

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FontDescriptor:
    """
    Immutable font value: family, size and symbolic traits.

    Attributes:
        family: Font family name as understood by the host renderer.
        size: Point size, strictly positive.
        traits: Symbolic traits (bold, italic, ...), a FontTrait flag.

    Example:
        >>> body = FontDescriptor("Menlo", 12.0)
        >>> bold = body.with_traits(FontTrait.BOLD)
        >>> bold.with_traits(FontTrait.BOLD) == bold
        True
    """

    family: str = DEFAULT_FONT_FAMILY
    size: float = DEFAULT_FONT_SIZE
    traits: FontTrait = FontTrait(0)

    def __post_init__(self) -> None:
        if not isinstance(self.family, str) or not self.family:
            raise ValueError("Font family must be a non-empty str")
        if isinstance(self.size, bool) or not isinstance(self.size, (int, float)):
            raise TypeError(f"Font size must be a number, got {type(self.size).__name__}")
        if self.size <= 0:
            raise ValueError(f"Font size must be positive, got {self.size}")
        if not isinstance(self.traits, FontTrait):
            raise TypeError(f"traits must be FontTrait, got {type(self.traits).__name__}")
        object.__setattr__(self, "size", float(self.size))

    @classmethod
    def system(cls, size: float = DEFAULT_FONT_SIZE) -> "FontDescriptor":
        return cls(DEFAULT_FONT_FAMILY, size)

    def with_traits(self, traits: FontTrait) -> "FontDescriptor":
        """Return a copy whose traits are the union of the current ones and ``traits``."""
        merged = self.traits | traits
        if merged == self.traits:
            return self
        return replace(self, traits=merged)

    def without_traits(self, traits: FontTrait) -> "FontDescriptor":
        return replace(self, traits=self.traits & ~traits)

    def with_size(self, size: float) -> "FontDescriptor":
        return replace(self, size=size)

    def with_family(self, family: str) -> "FontDescriptor":
        return replace(self, family=family)

    def has_traits(self, traits: FontTrait) -> bool:
        return (self.traits & traits) == traits

    @property
    def is_bold(self) -> bool:
        return FontTrait.BOLD in self.traits

    @property
    def is_italic(self) -> bool:
        return FontTrait.ITALIC in self.traits

    def to_dict(self) -> dict[str, Any]:
        return {"family": self.family, "size": self.size, "traits": self.traits.names()}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "FontDescriptor":
        return FontDescriptor(
            family=data.get("family", DEFAULT_FONT_FAMILY),
            size=float(data.get("size", DEFAULT_FONT_SIZE)),
            traits=FontTrait.from_names(data.get("traits", [])),
        )

    def __str__(self) -> str:
        return f"{self.family} {self.size:g}pt [{self.traits.localized_name()}]"
