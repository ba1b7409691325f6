from __future__ import annotations

import pytest

from imagealter.args import NONE, ArgKind, Argument
from imagealter.errors import ArgumentTypeError


def test_from_json_scalars() -> None:
    assert Argument.from_json(None) is NONE
    assert Argument.from_json(90) == Argument(ArgKind.INTEGER, 90)
    assert Argument.from_json(0.5) == Argument(ArgKind.DOUBLE, 0.5)
    assert Argument.from_json("x") == Argument(ArgKind.STRING, "x")


def test_from_json_nested_list_and_map() -> None:
    arg = Argument.from_json({"maxwidth": 100, "extra": [0.25, "a"]})

    assert arg.kind is ArgKind.MAP
    assert arg.value["maxwidth"] == Argument(ArgKind.INTEGER, 100)
    inner = arg.value["extra"]
    assert inner.kind is ArgKind.LIST
    assert [item.kind for item in inner.value] == [ArgKind.DOUBLE, ArgKind.STRING]
    assert arg.to_json() == {"maxwidth": 100, "extra": [0.25, "a"]}


def test_map_argument_is_read_only() -> None:
    arg = Argument.from_json({"maxwidth": 100})
    with pytest.raises(TypeError):
        arg.value["maxwidth"] = Argument.from_json(5)  # type: ignore[index]


def test_from_json_rejects_booleans_and_unknown_types() -> None:
    with pytest.raises(ArgumentTypeError):
        Argument.from_json(True)
    with pytest.raises(ArgumentTypeError):
        Argument.from_json({1: "a"})
    with pytest.raises(ArgumentTypeError):
        Argument.from_json(object())


def test_as_float_coerces_integers_only_for_numbers() -> None:
    assert Argument.from_json(3).as_float() == 3.0
    with pytest.raises(ArgumentTypeError):
        Argument.from_json("3").as_float()


def test_as_float_rejects_integers_beyond_float_range() -> None:
    with pytest.raises(ArgumentTypeError):
        Argument.from_json(10**400).as_float()
