import pytest

from engine.operators import DISPLAY_GLYPHS, Operator, from_glyph, operators_used


def test_display_glyphs():
    assert [op.glyph for op in Operator] == ["+", "-", "×", "÷"]
    assert DISPLAY_GLYPHS == ("+", "-", "×", "÷")
    assert Operator.MULTIPLICATION.value == "*"
    assert Operator.DIVISION.value == "/"


def test_precedence_tiers():
    assert Operator.MULTIPLICATION.is_high_precedence
    assert Operator.DIVISION.is_high_precedence
    assert not Operator.ADDITION.is_high_precedence
    assert not Operator.SUBTRACTION.is_high_precedence


def test_apply_uses_floor_division():
    assert Operator.DIVISION.apply(17, 5) == 3
    assert Operator.DIVISION.apply(-7, 3) == -3
    assert Operator.SUBTRACTION.apply(3, 10) == -7


def test_from_glyph():
    assert from_glyph("×") is Operator.MULTIPLICATION
    with pytest.raises(ValueError):
        from_glyph("*")


def test_operators_used():
    assert operators_used("45 + 12 × 3 = ?") == {"+", "×"}
    assert operators_used("(120 ÷ 4) - 7 = ?") == {"÷", "-"}
    assert operators_used("12 = ?") == set()
