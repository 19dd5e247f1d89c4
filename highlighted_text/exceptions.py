# -*- coding: utf-8 -*-
"""
Exception hierarchy for the highlighting engine.

Guidelines:
- Engine failures abort the whole call; no partially attributed text is returned.
- Configuration mistakes (bad patterns, incomplete rules) surface when the rule
  is built, not when text is highlighted.
- Keep messages short and operational: what failed and where.
"""

from __future__ import annotations

from typing import Any, Optional


class HighlightError(Exception):
    """Base exception for all highlighting failures."""

    def __init__(self, message: str = "", *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


class InvalidRangeError(HighlightError, ValueError):
    """Raised when a range falls outside ``[0, len(text)]`` or is reversed."""

    def __init__(
        self,
        start: int,
        end: int,
        length: Optional[int] = None,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        if length is None:
            message = f"Invalid range [{start}:{end}]"
        else:
            message = f"Invalid range [{start}:{end}] for text length {length}"
        super().__init__(message, cause=cause)
        self.start = start
        self.end = end
        self.length = length


class AttributeComputationError(HighlightError):
    """Raised when a formatting rule's value callback fails."""

    def __init__(
        self,
        message: str = "",
        *,
        key: Optional[str] = None,
        matched_text: Optional[str] = None,
        match_range: Any = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.key = key
        self.matched_text = matched_text
        self.match_range = match_range


class RuleConfigurationError(HighlightError, ValueError):
    """Raised when a formatting or highlight rule is built from inconsistent parts."""


class InvalidPatternError(RuleConfigurationError):
    """Raised when a highlight pattern is not a valid regular expression."""

    def __init__(
        self, pattern: str, message: str = "", *, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message or f"Invalid pattern {pattern!r}", cause=cause)
        self.pattern = pattern


__all__ = [
    "HighlightError",
    "InvalidRangeError",
    "AttributeComputationError",
    "RuleConfigurationError",
    "InvalidPatternError",
]
