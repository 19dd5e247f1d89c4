"""
Attributed text model: plain text plus ordered attribute runs.

The run list always tiles ``[0, len(text))`` without gaps or overlaps. Writes
split runs at the range boundaries, update the named key on every run inside
the range and coalesce neighbours whose attribute sets became equal, so two
attributed texts built through different write sequences compare equal when
every character carries the same attributes.

Module: highlighted_text/model/attributed_text.py
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final, Iterator, Mapping, Optional

from ..exceptions import InvalidRangeError
from .enums import AttributeKey, normalize_key

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open interval ``[start, end)`` of character offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"TextRange.{name} must be int, got {type(value).__name__}")
        if self.start < 0 or self.end < self.start:
            raise InvalidRangeError(self.start, self.end)

    @classmethod
    def from_match(cls, match: "re.Match[str]") -> "TextRange":
        start, end = match.span()
        return cls(start, end)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, index: int) -> bool:
        return self.start <= index < self.end

    def overlaps(self, other: "TextRange") -> bool:
        return self.start < other.end and other.start < self.end

    def intersection(self, other: "TextRange") -> Optional["TextRange"]:
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start > end:
            return None
        return TextRange(start, end)

    def validate_within(self, length: int) -> None:
        """
        Check that the range fits a text of ``length`` characters.

        Raises:
            InvalidRangeError: If ``end`` exceeds ``length``.
        """
        if self.end > length:
            raise InvalidRangeError(self.start, self.end, length)

    def to_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}

    def __str__(self) -> str:
        return f"[{self.start}:{self.end})"


@dataclass(frozen=True, slots=True)
class AttributeRun:
    """A maximal range whose characters share one attribute set."""

    range: TextRange
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def start(self) -> int:
        return self.range.start

    @property
    def end(self) -> int:
        return self.range.end

    def get(self, key: "str | AttributeKey", default: Any = None) -> Any:
        return self.attributes.get(normalize_key(key), default)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeRun):
            return NotImplemented
        return self.range == other.range and dict(self.attributes) == dict(other.attributes)

    def __repr__(self) -> str:
        keys = ", ".join(self.attributes)
        return f"AttributeRun({self.range}, keys=[{keys}])"


def _serialize_value(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, AttributeKey):
        return value.value
    return value


def _same_values(left: Mapping[str, Any], right: Mapping[str, Any]) -> bool:
    # 1, 1.0 and True compare equal but are distinct attribute values.
    if left.keys() != right.keys():
        return False
    return all(type(left[k]) is type(right[k]) and left[k] == right[k] for k in left)


class AttributedText:
    """
    Text annotated with attribute runs.

    Example:
        >>> text = AttributedText("hello world")
        >>> text.add_attribute("color", "red", TextRange(6, 11))
        >>> text.attribute("color", 7)
        'red'
        >>> [r.range.to_tuple() for r in text.runs]
        [(0, 6), (6, 11)]
    """

    __slots__ = ("_text", "_runs")

    def __init__(self, text: str, attributes: Optional[Mapping[str, Any]] = None) -> None:
        if not isinstance(text, str):
            raise TypeError(f"AttributedText text must be str, got {type(text).__name__}")
        self._text = text
        self._runs: list[AttributeRun] = []
        if text:
            initial = {normalize_key(k): v for k, v in (attributes or {}).items()}
            self._runs.append(AttributeRun(TextRange(0, len(text)), initial))

    # ------------------------------------------------------------------ queries

    @property
    def text(self) -> str:
        return self._text

    @property
    def runs(self) -> tuple[AttributeRun, ...]:
        return tuple(self._runs)

    @property
    def full_range(self) -> TextRange:
        return TextRange(0, len(self._text))

    def __len__(self) -> int:
        return len(self._text)

    def _run_index_at(self, index: int) -> int:
        lo, hi = 0, len(self._runs)
        while lo < hi:
            mid = (lo + hi) // 2
            if self._runs[mid].end <= index:
                lo = mid + 1
            else:
                hi = mid
        return lo

    def attributes_at(self, index: int) -> tuple[Mapping[str, Any], TextRange]:
        """
        Return the attributes of the character at ``index`` and the range of the run holding it.

        Raises:
            InvalidRangeError: If ``index`` is not a character position.
        """
        if not 0 <= index < len(self._text):
            raise InvalidRangeError(index, index + 1, len(self._text))
        run = self._runs[self._run_index_at(index)]
        return run.attributes, run.range

    def attribute(self, key: "str | AttributeKey", index: int) -> Any:
        attributes, _ = self.attributes_at(index)
        return attributes.get(normalize_key(key))

    def enumerate_attributes(
        self, text_range: Optional[TextRange] = None
    ) -> Iterator[tuple[Mapping[str, Any], TextRange]]:
        """Yield ``(attributes, range)`` for each run inside ``text_range``, left to right."""
        if text_range is None:
            text_range = self.full_range
        text_range.validate_within(len(self._text))
        if text_range.is_empty:
            return
        for i in range(self._run_index_at(text_range.start), len(self._runs)):
            run = self._runs[i]
            if run.start >= text_range.end:
                break
            clipped = run.range.intersection(text_range)
            if clipped is not None and not clipped.is_empty:
                yield run.attributes, clipped

    def ranges_with(self, key: "str | AttributeKey") -> list[tuple[TextRange, Any]]:
        """All runs carrying ``key``, with the value each one holds."""
        name = normalize_key(key)
        return [(run.range, run.attributes[name]) for run in self._runs if name in run.attributes]

    def substring(self, text_range: TextRange) -> str:
        text_range.validate_within(len(self._text))
        return self._text[text_range.start : text_range.end]

    # ------------------------------------------------------------------ writes

    def add_attribute(self, key: "str | AttributeKey", value: Any, text_range: TextRange) -> None:
        """Set ``key`` to ``value`` over ``text_range``, leaving other keys untouched."""
        self.add_attributes({key: value}, text_range)

    def add_attributes(self, attributes: Mapping[Any, Any], text_range: TextRange) -> None:
        text_range.validate_within(len(self._text))
        if text_range.is_empty or not attributes:
            return
        updates = {normalize_key(k): v for k, v in attributes.items()}

        self._split_at(text_range.start)
        self._split_at(text_range.end)

        updated: list[AttributeRun] = []
        for run in self._runs:
            if text_range.start <= run.start and run.end <= text_range.end:
                merged = dict(run.attributes)
                merged.update(updates)
                run = AttributeRun(run.range, merged)
            updated.append(run)
        self._runs = self._coalesce(updated)

    def _split_at(self, index: int) -> None:
        if index <= 0 or index >= len(self._text):
            return
        i = self._run_index_at(index)
        run = self._runs[i]
        if run.start == index:
            return
        self._runs[i : i + 1] = [
            AttributeRun(TextRange(run.start, index), run.attributes),
            AttributeRun(TextRange(index, run.end), run.attributes),
        ]

    @staticmethod
    def _coalesce(runs: list[AttributeRun]) -> list[AttributeRun]:
        result: list[AttributeRun] = []
        for run in runs:
            if result and _same_values(result[-1].attributes, run.attributes):
                previous = result.pop()
                run = AttributeRun(TextRange(previous.start, run.end), run.attributes)
            result.append(run)
        return result

    # ------------------------------------------------------------------ misc

    def copy(self) -> "AttributedText":
        clone = AttributedText(self._text)
        clone._runs = list(self._runs)
        return clone

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self._text,
            "runs": [
                {
                    **run.range.to_dict(),
                    "attributes": {k: _serialize_value(v) for k, v in run.attributes.items()},
                }
                for run in self._runs
            ],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributedText):
            return NotImplemented
        return self._text == other._text and self._runs == other._runs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        preview = self._text[:20]
        return f"AttributedText(len={len(self._text)}, runs={len(self._runs)}, text={preview!r})"


__all__ = ["TextRange", "AttributeRun", "AttributedText"]
