"""
Highlight engine: turns plain text plus an ordered rule list into AttributedText.

The engine is a pure function of its inputs. Iteration order is fixed:
highlight rules in list order, then matches left to right, then formatting
rules in declared order. Later writes win per attribute key; font traits
accumulate into the font already present on the match.

Module: highlighted_text/engine.py
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Final, Iterable, Optional, Sequence

from .exceptions import AttributeComputationError, InvalidRangeError
from .model.attributed_text import AttributedText, TextRange
from .model.enums import AttributeKey
from .model.font import FontDescriptor
from .model.rules import AttributeCallback, HighlightRule, TextDefaults, TextFormattingRule

logger: Final = logging.getLogger(__name__)

_FONT: Final[str] = AttributeKey.FONT.value
_COLOR: Final[str] = AttributeKey.FOREGROUND_COLOR.value


def compute_highlighted_text(
    text: str,
    defaults: TextDefaults,
    highlight_rules: Sequence[HighlightRule],
) -> AttributedText:
    """
    Apply ``highlight_rules`` to ``text`` and return the attributed result.

    Args:
        text: Source text. Offsets are character offsets.
        defaults: Font and color applied to the whole text first.
        highlight_rules: Ordered rules; later rules override earlier ones per key.

    Returns:
        A new AttributedText owned by the caller.

    Raises:
        InvalidRangeError: If a match range falls outside the text.
        AttributeComputationError: If a formatting rule's value callback fails.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")

    result = AttributedText(text, {_FONT: defaults.font, _COLOR: defaults.text_color})
    length = len(text)

    for rule_index, rule in enumerate(highlight_rules):
        matches = 0
        for match in rule.pattern.finditer(text):
            matches += 1
            match_range = _checked_range(match.start(), match.end(), length)
            matched_text = text[match_range.start : match_range.end]
            for formatting_rule in rule.formatting_rules:
                _apply_formatting(result, formatting_rule, matched_text, match_range, defaults)
        logger.debug(
            "Rule #%d %r: %d match(es), %d formatting rule(s)",
            rule_index,
            rule.pattern.pattern,
            matches,
            len(rule.formatting_rules),
        )

    logger.debug("Highlighted %d chars into %d run(s)", length, len(result.runs))
    return result


def _checked_range(start: int, end: int, length: int) -> TextRange:
    if not (0 <= start <= end <= length):
        logger.error("Match range [%d:%d] outside text of length %d", start, end, length)
        raise InvalidRangeError(start, end, length)
    return TextRange(start, end)


def _apply_formatting(
    result: AttributedText,
    formatting_rule: TextFormattingRule,
    matched_text: str,
    match_range: TextRange,
    defaults: TextDefaults,
) -> None:
    if formatting_rule.font_traits:
        base_font = _first_font(result, match_range, defaults)
        result.add_attribute(_FONT, base_font.with_traits(formatting_rule.font_traits), match_range)

    if formatting_rule.key is None or formatting_rule.calculate_value is None:
        return

    value = _calculate(
        formatting_rule.key, formatting_rule.calculate_value, matched_text, match_range, defaults
    )
    if formatting_rule.key == _FONT and not isinstance(value, FontDescriptor):
        logger.error(
            "Value for key %r on %s is %s, not FontDescriptor",
            _FONT,
            match_range,
            type(value).__name__,
        )
        raise AttributeComputationError(
            f"Value for {_FONT!r} must be FontDescriptor, got {type(value).__name__}",
            key=_FONT,
            matched_text=matched_text,
            match_range=match_range,
        )
    result.add_attribute(formatting_rule.key, value, match_range)


def _first_font(
    result: AttributedText, match_range: TextRange, defaults: TextDefaults
) -> FontDescriptor:
    # Mixed fonts inside the match resolve to the leftmost one.
    for attributes, _ in result.enumerate_attributes(match_range):
        font = attributes.get(_FONT)
        if font is not None:
            return font
    return defaults.font


def _calculate(
    key: str,
    calculate_value: AttributeCallback,
    matched_text: str,
    match_range: TextRange,
    defaults: TextDefaults,
) -> Any:
    try:
        return calculate_value(matched_text, defaults, match_range)
    except AttributeComputationError:
        raise
    except Exception as exc:
        logger.error(
            "Value callback for key %r failed on %r at %s: %s",
            key,
            matched_text[:50],
            match_range,
            exc,
        )
        raise AttributeComputationError(
            f"Cannot compute {key!r} for match {match_range}: {exc}",
            key=key,
            matched_text=matched_text,
            match_range=match_range,
            cause=exc,
        ) from exc


@dataclass(frozen=True, slots=True)
class HighlightEngine:
    """
    Immutable bundle of defaults and rules, reusable across texts and threads.

    Example:
        >>> engine = HighlightEngine(
        ...     rules=(HighlightRule.single("TODO", TextFormattingRule.with_traits(FontTrait.BOLD)),)
        ... )
        >>> engine.highlight("TODO: fix").attribute("font", 0).is_bold
        True
    """

    rules: tuple[HighlightRule, ...] = ()
    defaults: TextDefaults = field(default_factory=TextDefaults)

    def __post_init__(self) -> None:
        rules = tuple(self.rules)
        for i, rule in enumerate(rules):
            if not isinstance(rule, HighlightRule):
                raise TypeError(f"rules[{i}] must be HighlightRule, got {type(rule).__name__}")
        object.__setattr__(self, "rules", rules)

    def highlight(self, text: str) -> AttributedText:
        return compute_highlighted_text(text, self.defaults, self.rules)

    def with_rules(self, *rules: HighlightRule) -> "HighlightEngine":
        return replace(self, rules=self.rules + tuple(rules))

    def with_defaults(self, defaults: TextDefaults) -> "HighlightEngine":
        return replace(self, defaults=defaults)

    @classmethod
    def from_config(
        cls, config: dict[str, Any], rules: Optional[Iterable[HighlightRule]] = None
    ) -> "HighlightEngine":
        return cls(rules=tuple(rules or ()), defaults=TextDefaults.from_config(config))


__all__ = ["compute_highlighted_text", "HighlightEngine"]
