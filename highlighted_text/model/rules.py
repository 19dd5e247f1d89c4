"""
Highlighting configuration: text defaults, formatting rules and highlight rules.

All configuration objects are frozen. They are built once by the host and can
be shared between any number of highlighting calls.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Final, Iterable, Mapping, Optional, Union

from ..exceptions import InvalidPatternError, RuleConfigurationError
from .attributed_text import TextRange
from .color import Color
from .enums import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    AttributeKey,
    FontTrait,
    normalize_key,
)
from .font import FontDescriptor

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextDefaults:
    """Baseline attributes applied to the whole text before any rule runs."""

    font: FontDescriptor = field(default_factory=FontDescriptor.system)
    text_color: Color = Color.LABEL

    def __post_init__(self) -> None:
        if not isinstance(self.font, FontDescriptor):
            raise TypeError(f"font must be FontDescriptor, got {type(self.font).__name__}")
        if not isinstance(self.text_color, Color):
            raise TypeError(f"text_color must be Color, got {type(self.text_color).__name__}")

    @staticmethod
    def from_config(config: Mapping[str, Any]) -> "TextDefaults":
        """
        Build defaults from a configuration mapping (see ``load_config``).

        Recognized keys: ``default_font_family``, ``default_font_size``,
        ``default_text_color``. Missing keys fall back to the built-in defaults.
        """
        font = FontDescriptor(
            family=config.get("default_font_family", DEFAULT_FONT_FAMILY),
            size=float(config.get("default_font_size", DEFAULT_FONT_SIZE)),
        )
        color = Color.parse(config.get("default_text_color", DEFAULT_TEXT_COLOR))
        return TextDefaults(font=font, text_color=color)


AttributeCallback = Callable[[str, TextDefaults, TextRange], Any]


@dataclass(frozen=True, slots=True)
class TextFormattingRule:
    """
    One formatting action applied to every match of a highlight rule.

    A rule may set one named attribute (with a value computed by
    ``calculate_value``), add font traits, or both.

    Attributes:
        key: Attribute key to write, or None for a traits-only rule.
        calculate_value: Callback ``(matched_text, defaults, match_range) -> value``.
        font_traits: Traits unioned into the font over the match.

    Example:
        >>> TextFormattingRule.with_value(AttributeKey.FOREGROUND_COLOR, Color.parse("red"))
        >>> TextFormattingRule.computed("numericValue", lambda s, d, r: int(s))
        >>> TextFormattingRule.with_traits(FontTrait.BOLD | FontTrait.ITALIC)
    """

    key: Optional[str] = None
    calculate_value: Optional[AttributeCallback] = None
    font_traits: FontTrait = FontTrait(0)

    def __post_init__(self) -> None:
        if self.key is not None:
            object.__setattr__(self, "key", normalize_key(self.key))
        if (self.key is None) != (self.calculate_value is None):
            raise RuleConfigurationError(
                "A formatting rule needs both a key and a value callback, or neither"
            )
        if self.calculate_value is not None and not callable(self.calculate_value):
            raise RuleConfigurationError("calculate_value must be callable")
        if not isinstance(self.font_traits, FontTrait):
            raise TypeError(
                f"font_traits must be FontTrait, got {type(self.font_traits).__name__}"
            )

    @classmethod
    def with_value(
        cls, key: Union[str, AttributeKey], value: Any, font_traits: FontTrait = FontTrait(0)
    ) -> "TextFormattingRule":
        return cls(
            key=key,
            calculate_value=lambda _text, _defaults, _range: value,
            font_traits=font_traits,
        )

    @classmethod
    def computed(
        cls,
        key: Union[str, AttributeKey],
        calculate_value: AttributeCallback,
        font_traits: FontTrait = FontTrait(0),
    ) -> "TextFormattingRule":
        return cls(key=key, calculate_value=calculate_value, font_traits=font_traits)

    @classmethod
    def with_traits(cls, font_traits: FontTrait) -> "TextFormattingRule":
        return cls(font_traits=font_traits)

    @property
    def has_attribute(self) -> bool:
        return self.key is not None

    @property
    def has_traits(self) -> bool:
        return bool(self.font_traits)


PatternLike = Union[str, "re.Pattern[str]"]


@dataclass(frozen=True, slots=True, init=False)
class HighlightRule:
    """
    A pattern plus the ordered formatting rules applied to each of its matches.

    ``pattern`` may be a string, compiled with ``flags``, or an already compiled
    ``re.Pattern``. Invalid expressions fail here, not at highlight time.
    """

    pattern: "re.Pattern[str]"
    formatting_rules: tuple[TextFormattingRule, ...] = ()

    def __init__(
        self,
        pattern: PatternLike,
        formatting_rules: Iterable[TextFormattingRule] = (),
        flags: Union[int, re.RegexFlag] = 0,
    ) -> None:
        object.__setattr__(self, "pattern", _compile(pattern, flags))
        rules = tuple(formatting_rules)
        for i, rule in enumerate(rules):
            if not isinstance(rule, TextFormattingRule):
                raise TypeError(f"formatting_rules[{i}] must be TextFormattingRule")
        object.__setattr__(self, "formatting_rules", rules)

    @classmethod
    def single(
        cls, pattern: PatternLike, formatting_rule: TextFormattingRule, flags: int = 0
    ) -> "HighlightRule":
        return cls(pattern, (formatting_rule,), flags)

    def __repr__(self) -> str:
        return (
            f"HighlightRule(pattern={self.pattern.pattern!r}, "
            f"rules={len(self.formatting_rules)})"
        )


def _compile(pattern: PatternLike, flags: Union[int, re.RegexFlag]) -> "re.Pattern[str]":
    if isinstance(pattern, re.Pattern):
        if flags:
            raise RuleConfigurationError("flags cannot be combined with a compiled pattern")
        if not isinstance(pattern.pattern, str):
            raise RuleConfigurationError("Highlight patterns must match str, not bytes")
        return pattern
    if not isinstance(pattern, str):
        raise TypeError(f"pattern must be str or re.Pattern, got {type(pattern).__name__}")
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        logger.error("Invalid highlight pattern %r: %s", pattern, exc)
        raise InvalidPatternError(
            pattern, f"Invalid pattern {pattern!r}: {exc}", cause=exc
        ) from exc


__all__ = [
    "TextDefaults",
    "TextFormattingRule",
    "HighlightRule",
    "AttributeCallback",
]
