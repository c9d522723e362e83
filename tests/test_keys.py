from collections import namedtuple

from pwt.indifferent.indifferent_dict import IndifferentDict
from pwt.indifferent.keys import (
    deep_stringify_keys,
    deep_symbolize_keys,
    deep_transform_keys,
    stringify_keys,
    symbolize_keys,
    to_plain,
    transform_keys,
)
from pwt.indifferent.symbol import Symbol


def test_transform_keys_shallow():
    data = {"a": {"b": 1}}
    out = transform_keys(data, str.upper)
    assert out == {"A": {"b": 1}}
    assert out["A"] is data["a"]


def test_deep_transform_keys_recurses_into_sequences():
    data = {"a": [{"b": 1}, ({"c": 2},)]}
    out = deep_transform_keys(data, str.upper)
    assert out == {"A": [{"B": 1}, ({"C": 2},)]}
    assert isinstance(out["A"][1], tuple)


def test_deep_transform_keys_leaves_namedtuple():
    Point = namedtuple("Point", "x y")
    point = Point({"a": 1}, 2)
    assert deep_transform_keys([point], str.upper)[0] is point


def test_stringify_keys_converts_every_key():
    assert stringify_keys({Symbol("a"): 1, 2: "b"}) == {"a": 1, "2": "b"}


def test_symbolize_keys_only_strings():
    assert symbolize_keys({"a": 1, 2: "b"}) == {Symbol("a"): 1, 2: "b"}


def test_deep_stringify_keys_from_indifferent():
    data = IndifferentDict({Symbol("a"): [{Symbol("b"): 1}]})
    out = deep_stringify_keys(data)
    assert out == {"a": [{"b": 1}]}
    assert type(out) is dict
    assert type(out["a"][0]) is dict


def test_deep_symbolize_keys_leaves_original_untouched():
    data = {"a": {"b": 1}}
    out = deep_symbolize_keys(data)
    assert out == {Symbol("a"): {Symbol("b"): 1}}
    assert data == {"a": {"b": 1}}


def test_to_plain():
    assert to_plain(Symbol("x")) == "x"
    assert to_plain((1, {Symbol("k"): [Symbol("v")]})) == [1, {"k": ["v"]}]
    assert to_plain(IndifferentDict({Symbol("a"): {2: Symbol("b")}})) == {"a": {"2": "b"}}
    assert to_plain(3) == 3
