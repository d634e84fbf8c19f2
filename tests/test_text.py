"""Text normalization tests.

Invariants:
    - None becomes ""
    - output is lowercase, diacritic-free, single-spaced and trimmed
    - normalizing twice equals normalizing once
"""

import pytest

from zscanner.domain.text import as_text, normalize_string


def test_none_is_empty():
    assert normalize_string(None) == ""


def test_accents_case_and_spacing():
    assert normalize_string("  Héllo   Wörld ") == "hello world"


def test_all_whitespace_kinds_collapse():
    assert normalize_string("a\t\n\r b c") == "a b c"


def test_strips_combining_marks():
    assert normalize_string("ÀÉÎÕÜ ČŘŽ") == "aeiou crz"


def test_dotted_capital_i():
    assert normalize_string("İSTANBUL") == "istanbul"


def test_non_text_values_are_coerced():
    assert normalize_string(42) == "42"
    assert normalize_string(True) == "true"
    assert normalize_string(b"Caf\xc3\xa9") == "cafe"


def test_as_text_dispatch():
    assert as_text(None) == ""
    assert as_text("Já") == "Já"
    assert as_text(bytearray(b"ok")) == "ok"
    assert as_text(b"\xff") == "\ufffd"
    assert as_text(3.5) == "3.5"


def test_value_with_failing_str_still_normalizes():
    class BrokenTag:
        def __str__(self):
            raise RuntimeError("no text form")

    out = normalize_string(BrokenTag())
    assert out.startswith("<")
    assert "brokentag object at 0x" in out


def test_mark_between_spaces_leaves_no_double_space():
    assert normalize_string("a \u0301 b") == "a b"
    assert normalize_string(" \u0301 ") == ""


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "plain",
        "  Héllo   Wörld ",
        "Žluťoučký kůň úpěl ďábelské ódy",
        "\u0130 \u0307 i",
        "x \u0300\u0301  y",
        "ǄEMAL\tŒuvre",
        "한국어 텍스트",
        "Straße",
    ],
)
def test_idempotent(raw):
    once = normalize_string(raw)
    assert normalize_string(once) == once
