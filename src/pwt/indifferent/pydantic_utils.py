"""
在 Pydantic v2 模型中使用无差别访问字典.

提供:
- IndifferentDictField: 字段类型, 映射输入(含 Symbol 键)转换为 IndifferentDict,
  序列化时输出键为 str 的普通数据
- IndifferentModel: 扩展 BaseModel, 模型输入本身也可以使用 Symbol 键或 IndifferentDict

示例:
    >>> from pwt.indifferent.symbol import Symbol
    >>> class Request(IndifferentModel):
    ...     params: IndifferentDictField
    >>> request = Request.model_validate({Symbol("params"): {Symbol("id"): 1}})
    >>> request.params["id"]
    1
    >>> request.model_dump()
    {'params': {'id': 1}}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PlainSerializer,
    model_validator,
)
from pydantic_core import PydanticCustomError

from pwt.indifferent import keys
from pwt.indifferent.indifferent_dict import IndifferentDict


def to_indifferent_dict(data: Any) -> IndifferentDict:
    """IndifferentDict 原样返回, 其它映射经归一化转换; 非映射输入校验失败."""
    if isinstance(data, IndifferentDict):
        return data
    if isinstance(data, Mapping):
        return IndifferentDict(data)
    raise PydanticCustomError(
        "indifferent_dict_type",
        "Input should be a mapping, got {type_name}",
        {"type_name": type(data).__name__},
    )


IndifferentDictField = Annotated[
    IndifferentDict,
    BeforeValidator(to_indifferent_dict),
    PlainSerializer(keys.to_plain),
]


class IndifferentModel(BaseModel):
    """
    扩展版 BaseModel.

    - 输入为映射时, 先把最外层的键转换为 str, 因此 Symbol 键与 IndifferentDict
      都可以直接作为模型输入; 嵌套模型同样继承本类即可
    - 允许 IndifferentDictField 这类非 pydantic 原生类型的字段
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def stringify_input_keys(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return keys.stringify_keys(data)
        return data
