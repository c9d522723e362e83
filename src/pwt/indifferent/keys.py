"""
keys
====

对普通映射做键变换的通用工具, 无差别访问字典在需要退出
无差别访问模式(例如转换为 Symbol 键)时委托给这里.

主要特性:
- 浅变换: 只处理最外层映射的键.
- 深变换: 递归处理嵌套映射, 以及 list / tuple 中的映射.
- 结果总是普通 dict, 原对象不被修改.
- to_plain: 连同 Symbol 值一起转换为可 JSON 序列化的普通数据.
- 基于 functools.singledispatch, 可扩展自定义容器类型的递归逻辑.

示例:
    >>> symbolize_keys({"a": 1, 2: "b"})
    {Symbol('a'): 1, 2: 'b'}
    >>> deep_stringify_keys({Symbol("a"): [{Symbol("b"): 1}]})
    {'a': [{'b': 1}]}
"""

from collections.abc import Callable, Mapping
from functools import singledispatch
from typing import Any

from pwt.indifferent.symbol import Symbol

KeyFunc = Callable[[Any], Any]


def transform_keys(mapping: Mapping[Any, Any], func: KeyFunc) -> dict[Any, Any]:
    """
    返回键经过 func 变换后的新字典(仅最外层).

    若变换后出现重复键, 按原映射的遍历顺序后写入者为准.
    """
    return {func(key): value for key, value in mapping.items()}


def deep_transform_keys(value: Any, func: KeyFunc) -> Any:
    """
    递归变换所有嵌套映射的键.

    Args:
        value: 映射/列表/元组或其它任意值.
        func: 键变换函数.

    Returns:
        映射转为普通 dict, list 转为新 list, tuple 仍为 tuple, 其它值原样返回.
    """
    return _deep(value, func)


@singledispatch
def _deep(value: Any, func: KeyFunc) -> Any:
    return value


@_deep.register(Mapping)
def _(value: Mapping, func: KeyFunc) -> Any:
    return {func(k): _deep(v, func) for k, v in value.items()}


@_deep.register(list)
def _(value: list, func: KeyFunc) -> Any:
    return [_deep(v, func) for v in value]


@_deep.register(tuple)
def _(value: tuple, func: KeyFunc) -> Any:
    if hasattr(value, "_fields"):
        return value
    return tuple(_deep(v, func) for v in value)


def _symbolize(key: Any) -> Any:
    if isinstance(key, str):
        return Symbol(key)
    return key


def stringify_keys(mapping: Mapping[Any, Any]) -> dict[Any, Any]:
    """所有键转为 str(Symbol 转为其名称)."""
    return transform_keys(mapping, str)


def deep_stringify_keys(value: Any) -> Any:
    return deep_transform_keys(value, str)


def symbolize_keys(mapping: Mapping[Any, Any]) -> dict[Any, Any]:
    """str 键转为 Symbol, 其它键保持原样."""
    return transform_keys(mapping, _symbolize)


def deep_symbolize_keys(value: Any) -> Any:
    return deep_transform_keys(value, _symbolize)


def to_plain(value: Any) -> Any:
    """
    转换为可 JSON 序列化的普通数据.

    - Symbol 转为其名称;
    - 映射(含 IndifferentDict)转为键为 str 的 dict, 递归处理;
    - list/tuple 转为 list, 递归处理;
    - 其它值原样返回.
    """
    if isinstance(value, Symbol):
        return str(value)
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value
