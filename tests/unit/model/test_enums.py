import pytest

from highlighted_text.model.enums import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    AttributeKey,
    FontTrait,
    LineStyle,
    normalize_key,
)


def test_font_trait_union_is_idempotent() -> None:
    traits = FontTrait.BOLD | FontTrait.ITALIC
    assert traits | FontTrait.BOLD == traits
    assert FontTrait.BOLD in traits
    assert FontTrait.MONO_SPACE not in traits


def test_font_trait_none_and_combine() -> None:
    assert FontTrait.none() == FontTrait(0)
    assert not FontTrait.none()
    assert FontTrait.combine([FontTrait.BOLD, FontTrait.CONDENSED]) == (
        FontTrait.BOLD | FontTrait.CONDENSED
    )
    assert FontTrait.combine([]) == FontTrait(0)


def test_font_trait_names_round_trip() -> None:
    traits = FontTrait.ITALIC | FontTrait.BOLD
    assert traits.names() == ["BOLD", "ITALIC"]
    assert FontTrait.from_names(["bold", " Italic "]) == traits
    assert FontTrait(0).names() == []


def test_font_trait_unknown_name() -> None:
    with pytest.raises(ValueError):
        FontTrait.from_names(["heavy"])


def test_font_trait_localized_name() -> None:
    assert FontTrait(0).localized_name() == "none"
    assert FontTrait.BOLD.localized_name() == "BOLD"


def test_attribute_key_values_are_plain_strings() -> None:
    assert AttributeKey.FONT == "font"
    assert AttributeKey.FOREGROUND_COLOR == "color"
    assert str(AttributeKey.LINK) == "link"
    assert {"color": 1}[AttributeKey.FOREGROUND_COLOR] == 1
    assert AttributeKey.FONT.is_font
    assert not AttributeKey.LINK.is_font


@pytest.mark.parametrize(
    "key, expected",
    [
        (AttributeKey.BACKGROUND_COLOR, "background_color"),
        ("numericValue", "numericValue"),
        ("color", "color"),
    ],
)
def test_normalize_key(key: str, expected: str) -> None:
    normalized = normalize_key(key)
    assert normalized == expected
    assert type(normalized) is str


def test_normalize_key_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        normalize_key("")
    with pytest.raises(TypeError):
        normalize_key(42)  # type: ignore[arg-type]


def test_line_style_and_defaults() -> None:
    assert LineStyle.SINGLE == 1
    assert LineStyle.NONE == 0
    assert DEFAULT_FONT_FAMILY == "system-ui"
    assert DEFAULT_FONT_SIZE == 13.0
    assert DEFAULT_TEXT_COLOR == "#000000"
