"""
提供一个驻留(interned)的符号类型 Symbol.

设计目标:
- 同名 Symbol 全局唯一, `Symbol("a") is Symbol("a")`.
- Symbol 与 str 是两种不同的键: `Symbol("a") != "a"`, 在普通 dict 中互不覆盖.
- `str(Symbol("a"))` 得到其文本形式 "a", 供无差别访问字典归一化键使用.
- 不可变; copy/deepcopy/pickle 后仍是同一实例.

示例:
    >>> black = Symbol("black")
    >>> black is Symbol("black")
    True
    >>> str(black)
    'black'
    >>> normalize_key(black)
    'black'
    >>> normalize_key(42)
    42
"""

from __future__ import annotations

import threading
from typing import Any, ClassVar


class Symbol:
    """
    驻留的原子符号.

    内部结构:
    - Symbol._table: {名称: 实例}, 创建时加锁, 读取不加锁.
    """

    __slots__ = ("name",)

    _table: ClassVar[dict[str, Symbol]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    name: str

    def __new__(cls, name: str | Symbol) -> Symbol:
        if isinstance(name, Symbol):
            return name
        if not isinstance(name, str):
            raise TypeError(f"Symbol name must be str, not {type(name).__name__}")

        symbol = cls._table.get(name)
        if symbol is None:
            with cls._lock:
                symbol = cls._table.get(name)
                if symbol is None:
                    symbol = super().__new__(cls)
                    object.__setattr__(symbol, "name", name)
                    cls._table[name] = symbol
        return symbol

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.name < other.name

    def __copy__(self) -> Symbol:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Symbol:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        # 反序列化时重新走驻留表
        return (Symbol, (self.name,))


def normalize_key(key: Any) -> Any:
    """Symbol 转为文本形式, 其它键原样返回."""
    if isinstance(key, Symbol):
        return key.name
    return key
