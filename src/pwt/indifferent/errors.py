"""
定义无差别访问字典使用的异常体系.

异常层级结构如下:
    - IndifferentAccessError: 所有异常的统一基类, 支持错误链追踪.
        - KeyNotFoundError: fetch 找不到键且未提供兜底值(同时是 KeyError).
        - UnsupportedOperationError: 调用被禁用的操作(同时是 NotImplementedError).

主要用途:
    - 调用方既可以按本包的异常类型捕获, 也可以按内建异常类型捕获;
    - 保留出错的(归一化后的)键或操作名, 便于定位.
"""

from __future__ import annotations

from typing import Any


class IndifferentAccessError(Exception):
    """
    所有 pwt.indifferent 异常的基类,具备错误链追踪能力.

    参数:
    - `*args`: 异常消息内容;
    - `cause`: 可选的原始异常,用于记录异常链(自动赋值给 `__cause__`).
    """

    def __init__(self, *args: Any, cause: Exception | None = None) -> None:
        super().__init__(*args)
        self.cause: Exception | None = cause
        self.__cause__ = cause


class KeyNotFoundError(IndifferentAccessError, KeyError):
    """
    查找的键不存在, 且未提供兜底值.

    说明:
    - `key` 为归一化后的键, Symbol 键在这里已是文本形式;
    - 继承 KeyError, 兼容 `except KeyError`;
    - KeyError 默认的 str() 会对消息再做一次 repr, 此处改为直接输出消息.
    """

    def __init__(self, key: Any, *, cause: Exception | None = None) -> None:
        super().__init__(f"key not found: {key!r}", cause=cause)
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])


class UnsupportedOperationError(IndifferentAccessError, NotImplementedError):
    """
    调用了在无差别访问字典上被禁用的操作.

    例如原地把全部键转换为 Symbol: 这会让字典脱离无差别访问模式.
    """

    def __init__(self, operation: str, *, cause: Exception | None = None) -> None:
        super().__init__(
            f"{operation} is not supported by indifferent mappings", cause=cause
        )
        self.operation = operation
