from __future__ import annotations

import pytest

from ordtree.element import Int, Rune


def test_int_orders_by_value() -> None:
    assert Int(1) < Int(2)
    assert not Int(2) < Int(1)
    assert Int(3) == Int(3)
    assert str(Int(-12)) == "-12"


def test_rune_orders_by_code_point() -> None:
    assert Rune("a") < Rune("b")
    assert Rune("Z") < Rune("a")
    assert str(Rune("q")) == "q"


def test_int_rejects_non_integer_payloads() -> None:
    with pytest.raises(TypeError):
        Int("1")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Int(True)


def test_rune_rejects_multi_character_payloads() -> None:
    with pytest.raises(TypeError):
        Rune("ab")
    with pytest.raises(TypeError):
        Rune("")


def test_mixed_element_kinds_cannot_be_ordered() -> None:
    with pytest.raises(TypeError):
        Int(1) < Rune("a")  # type: ignore[operator]
