"""
从位置参数列表末尾取出"选项映射".

适用于 `def f(*args)` 形式的接口: 调用方可以在参数末尾附加一个选项映射,
被调方用 extract_options 把它取出来, 剩余部分仍是普通位置参数.

可被取出的对象:
- 精确类型为 dict 的对象(dict 的子类不算, 例如 OrderedDict/defaultdict);
- 实现了 `extractable_options()` 且返回 True 的对象, 例如 IndifferentDict.

示例:
    >>> args = [1, 2, {"verbose": True}]
    >>> extract_options(args)
    {'verbose': True}
    >>> args
    [1, 2]
    >>> extract_options(args)
    {}
"""

from collections.abc import Mapping
from typing import Any


def is_extractable(obj: Any) -> bool:
    if type(obj) is dict:
        return True
    marker = getattr(obj, "extractable_options", None)
    return callable(marker) and bool(marker())


def extract_options(args: list[Any]) -> Mapping[Any, Any]:
    """
    若 args 最后一个元素可被取出, 则将其弹出并返回; 否则返回新的空 dict.

    Args:
        args: 位置参数列表, 会被原地修改.

    Returns:
        取出的选项映射.
    """
    if args and is_extractable(args[-1]):
        return args.pop()
    return {}
