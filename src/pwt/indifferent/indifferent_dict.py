"""
提供一个对 Symbol 键与 str 键"无差别访问"的字典实现.

设计目标:
- `Symbol("foo")` 与 `"foo"` 视为同一个键; 存储时一律归一化为文本形式.
- 写入的值递归归一化: 映射转换为 IndifferentDict, list 中的元素逐个转换.
- 支持缺失键兜底值(default)或兜底函数(default_factory), 兜底函数看到的总是文本键.
- 复制/合并/反向合并后的结果仍然是 IndifferentDict, 并保留兜底设置.
- 基于 collections.abc.MutableMapping, 可替代普通的有序字典使用.

主要组件:
- IndifferentDict: 无差别访问字典
- convert_value: 值归一化(基于 functools.singledispatch, 可扩展)
- with_indifferent_access: 将任意映射转换为 IndifferentDict

示例:
    >>> from pwt.indifferent.symbol import Symbol
    >>> rgb = IndifferentDict()
    >>> rgb[Symbol("black")] = "#000000"
    >>> rgb["black"]
    '#000000'
    >>> rgb["white"] = "#FFFFFF"
    >>> rgb[Symbol("white")]
    '#FFFFFF'
    >>> list(rgb.keys())
    ['black', 'white']

    # 非 Symbol / str 键也可以使用, 但不享受无差别访问
    >>> rgb[0] = 0
    >>> rgb
    IndifferentDict({'black': '#000000', 'white': '#FFFFFF', 0: 0})
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from functools import singledispatch
from typing import Any, Self

from pwt.indifferent import keys as key_utils
from pwt.indifferent.errors import KeyNotFoundError, UnsupportedOperationError
from pwt.indifferent.log import log_helpers
from pwt.indifferent.symbol import normalize_key

logger = log_helpers.get_logger_adapter(__name__)

DefaultFactory = Callable[["IndifferentDict", Any], Any]


class DefaultValueDict(dict[Any, Any]):
    """缺失键时返回固定兜底值的普通字典, 读取不会写入新键."""

    def __init__(self, default: Any, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.default = default

    def __missing__(self, key: Any) -> Any:
        return self.default

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.default!r}, {super().__repr__()})"


class IndifferentDict(MutableMapping[Any, Any]):
    """
    Symbol 键与 str 键无差别访问的字典.

    内部结构:
    - self._data: {归一化键: 归一化值}, 保持插入顺序.
    - self._default: 缺失键时的兜底值, 未设置时为 `...`.
    - self._default_factory: 缺失键时的兜底函数 `(mapping, key) -> value`.
      兜底值与兜底函数互斥, 设置其一会清除另一个.

    构造:
    - `IndifferentDict()`: 空字典.
    - `IndifferentDict(mapping)`: 逐项经归一化写入.
    - `IndifferentDict(value)`: value 不是映射时, 作为兜底值.
    - 关键字参数 `default` / `default_factory` 显式设置兜底; 其余关键字参数作为条目写入.
      因此名为 "default" 或 "default_factory" 的条目不能经关键字参数写入, 需改用映射.

    读取:
    - `d[key]`: 缺失时使用兜底; 没有设置兜底时抛 KeyError(与 dict 一致).
    - `d.get(key, default)`: 缺失时使用兜底; 没有设置兜底时返回参数 default.
    - `d.fetch(key, ...)`: 不使用兜底; 缺失且未提供替代值时抛 KeyNotFoundError.
    - `d.values_at(*keys)`: 不使用兜底; 缺失的键对应 None.
    """

    def __init__(
        self,
        constructor: Any = ...,
        /,
        *,
        default: Any = ...,
        default_factory: DefaultFactory | None = None,
        **kwargs: Any,
    ) -> None:
        self._data: dict[Any, Any] = {}
        self._default: Any = ...
        self._default_factory: DefaultFactory | None = None

        if isinstance(constructor, Mapping):
            self.update(constructor)
        elif constructor is not ...:
            self._default = constructor

        if default is not ...:
            self.default = default
        if default_factory is not None:
            self.default_factory = default_factory
        if kwargs:
            self.update(kwargs)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Any, Any]]) -> Self:
        """由 (key, value) 序列构造."""
        return cls().update(pairs)

    @classmethod
    def from_mapping_copying_default(cls, mapping: Mapping[Any, Any]) -> Self:
        """
        由映射构造, 同时沿用其兜底设置.

        来源是 IndifferentDict 时复制 default / default_factory;
        来源是 collections.defaultdict 时沿用其 default_factory.
        """
        new = cls(mapping)
        new._copy_default_from(mapping)
        return new

    # ===========================================================================

    @property
    def default(self) -> Any:
        """缺失键时返回的兜底值, 未设置时为 None."""
        return None if self._default is ... else self._default

    @default.setter
    def default(self, value: Any) -> None:
        self._default = value
        self._default_factory = None

    @property
    def default_factory(self) -> DefaultFactory | None:
        """缺失键时调用的兜底函数, 以 (mapping, 文本键) 调用."""
        return self._default_factory

    @default_factory.setter
    def default_factory(self, factory: DefaultFactory | None) -> None:
        self._default_factory = factory
        if factory is not None:
            self._default = ...

    def _has_fallback(self) -> bool:
        return self._default_factory is not None or self._default is not ...

    def _copy_default_from(self, source: Any) -> None:
        if isinstance(source, IndifferentDict):
            self._default = source._default
            self._default_factory = source._default_factory
        elif isinstance(source, defaultdict) and source.default_factory is not None:
            factory = source.default_factory
            self._default = ...
            # defaultdict 取缺失键时会写入; 这里同样写入
            self._default_factory = lambda mapping, key: mapping.setdefault(
                key, factory()
            )
        else:
            self._default = ...
            self._default_factory = None

    # ===========================================================================

    def __setitem__(self, key: Any, value: Any) -> None:
        self._data[normalize_key(key)] = convert_value(value)

    def __getitem__(self, key: Any) -> Any:
        key = normalize_key(key)
        if key in self._data:
            return self._data[key]
        return self.__missing__(key)

    def __missing__(self, key: Any) -> Any:
        if self._default_factory is not None:
            return self._default_factory(self, key)
        if self._default is not ...:
            return self._default
        raise KeyError(key)

    def __delitem__(self, key: Any) -> None:
        del self._data[normalize_key(key)]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: Any) -> bool:
        return normalize_key(key) in self._data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def __copy__(self) -> Self:
        return self.copy()

    def __or__(self, other: Any) -> Any:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.merge(other)

    def __ror__(self, other: Any) -> Any:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.reverse_merge(other)

    def __ior__(self, other: Any) -> Self:
        return self.update(other)

    # ===========================================================================

    def get(self, key: Any, default: Any = None) -> Any:
        key = normalize_key(key)
        if key in self._data:
            return self._data[key]
        if self._has_fallback():
            return self.__missing__(key)
        return default

    def fetch(
        self,
        key: Any,
        default: Any = ...,
        *,
        default_factory: Callable[[Any], Any] | None = None,
    ) -> Any:
        """
        取值, 缺失时使用调用方提供的替代值.

        Args:
            key: Symbol 或 str 键.
            default: 缺失时返回的值.
            default_factory: 缺失时以文本键调用, 优先于 default.

        Raises:
            KeyNotFoundError: 键不存在且未提供替代值.
        """
        key = normalize_key(key)
        if key in self._data:
            return self._data[key]
        if default_factory is not None:
            return default_factory(key)
        if default is not ...:
            return default
        raise KeyNotFoundError(key)

    def values_at(self, *keys: Any) -> list[Any]:
        """按顺序返回各键的值, 缺失的键为 None(不使用兜底)."""
        return [self._data.get(normalize_key(key)) for key in keys]

    def update(self, other: Any = (), /, **kwargs: Any) -> Self:  # type: ignore[override]
        """
        原地合并, 返回自身以便链式调用.

        other 为 IndifferentDict 时直接复制其条目(键值均已归一化);
        否则逐项经归一化写入. 普通映射中同时存在 "key" 与 Symbol("key") 时,
        按其遍历顺序后写入者为准.
        """
        if isinstance(other, IndifferentDict):
            self._data.update(other._data)
        else:
            self._write_pairs(other.items() if isinstance(other, Mapping) else other)
        if kwargs:
            self._write_pairs(kwargs.items())
        return self

    def _write_pairs(self, pairs: Iterable[tuple[Any, Any]]) -> None:
        seen = set()
        for key, value in pairs:
            norm_key = normalize_key(key)
            if norm_key in seen:
                logger.debug("Duplicate key %r in update source, last value wins", norm_key)
            seen.add(norm_key)
            self._data[norm_key] = convert_value(value)

    def copy(self) -> Self:
        """浅复制: 顶层独立, 嵌套容器共享引用; 兜底设置一并复制."""
        return type(self).from_mapping_copying_default(self)

    def merge(self, other: Any = (), /, **kwargs: Any) -> Self:
        """与 update 语义相同, 但不修改自身, 返回新字典."""
        return self.copy().update(other, **kwargs)

    def reverse_merge(self, other: Mapping[Any, Any]) -> Self:
        """
        反向合并: 以 other 为底, 用自身条目覆盖, 返回新字典.

        冲突时自身的值优先; 结果沿用 other 的兜底设置.

            >>> d = IndifferentDict({"a": None})
            >>> d.reverse_merge({"a": 0, "b": 1})
            IndifferentDict({'a': None, 'b': 1})
        """
        return type(self).from_mapping_copying_default(other).update(self)

    def reverse_update(self, other: Mapping[Any, Any]) -> Self:
        """reverse_merge 的原地版本."""
        return self.replace(self.reverse_merge(other))

    def replace(self, other: Mapping[Any, Any]) -> Self:
        """用 other 的条目与兜底设置替换自身的全部内容."""
        if other is self:
            return self
        self._data.clear()
        self.update(other)
        self._copy_default_from(other)
        return self

    def delete(self, key: Any) -> Any:
        """删除键并返回其值; 键不存在时返回 None."""
        return self._data.pop(normalize_key(key), None)

    def pop(self, key: Any, default: Any = ...) -> Any:
        key = normalize_key(key)
        if default is ...:
            return self._data.pop(key)
        return self._data.pop(key, default)

    def popitem(self) -> tuple[Any, Any]:
        return self._data.popitem()

    def setdefault(self, key: Any, default: Any = None) -> Any:
        key = normalize_key(key)
        if key not in self._data:
            self._data[key] = convert_value(default)
        return self._data[key]

    def clear(self) -> None:
        self._data.clear()

    def to_dict(self) -> dict[Any, Any]:
        """
        转换为普通字典(仅最外层, 嵌套的 IndifferentDict 保持不变).

        设置了兜底值时返回 DefaultValueDict: 缺失键返回兜底值, 但不写入.
        """
        if self._default is not ...:
            return DefaultValueDict(self._default, self._data)
        return dict(self._data)

    # ===========================================================================
    # 键形态转换: 键已是文本形式, 转 str 为空操作; 原地转 Symbol 被禁用.

    def stringify_keys(self, inplace: bool = False) -> Self:
        return self if inplace else self.copy()

    def deep_stringify_keys(self, inplace: bool = False) -> Self:
        return self if inplace else self.copy()

    def symbolize_keys(self, inplace: bool = False) -> dict[Any, Any]:
        if inplace:
            raise UnsupportedOperationError("symbolize_keys(inplace=True)")
        return key_utils.symbolize_keys(self.to_dict())

    def deep_symbolize_keys(self, inplace: bool = False) -> dict[Any, Any]:
        if inplace:
            raise UnsupportedOperationError("deep_symbolize_keys(inplace=True)")
        return key_utils.deep_symbolize_keys(self.to_dict())

    def to_options(self, inplace: bool = False) -> Mapping[Any, Any]:
        return self if inplace else self.symbolize_keys()

    def with_indifferent_access(self) -> Self:
        return self.copy()

    def nested_under_indifferent_access(self) -> Self:
        """已经是无差别访问字典, 返回自身而不是重新包装."""
        return self

    def extractable_options(self) -> bool:
        """标记: 允许 options.extract_options 从参数列表末尾取出本对象."""
        return True


@singledispatch
def convert_value(value: Any) -> Any:
    """
    值归一化. 对同一个值重复调用的结果与调用一次相同.

    - IndifferentDict: 返回自身;
    - 其它映射: 转换为 IndifferentDict;
    - list: 原地逐个转换元素, 返回同一个 list;
    - tuple(只读序列): 返回元素已转换的新 list, namedtuple 原样返回;
    - 其它值原样返回.
    """
    return value


@convert_value.register(Mapping)
def _(value: Mapping) -> Any:
    return IndifferentDict(value)


@convert_value.register(IndifferentDict)
def _(value: IndifferentDict) -> Any:
    return value.nested_under_indifferent_access()


@convert_value.register(list)
def _(value: list) -> Any:
    for i, item in enumerate(value):
        value[i] = convert_value(item)
    return value


@convert_value.register(tuple)
def _(value: tuple) -> Any:
    if hasattr(value, "_fields"):
        return value
    return [convert_value(item) for item in value]


def with_indifferent_access(mapping: Mapping[Any, Any]) -> IndifferentDict:
    """
    将映射转换为 IndifferentDict, 沿用其兜底设置.

    传入 IndifferentDict 时返回其副本.
    """
    if isinstance(mapping, IndifferentDict):
        return mapping.with_indifferent_access()
    return IndifferentDict.from_mapping_copying_default(mapping)
