"""
Pydantic 集成单元测试

覆盖:
- IndifferentDictField 的校验与序列化
- IndifferentModel 接受 Symbol 键与 IndifferentDict 作为输入
"""

import pytest
from pydantic import ValidationError

from pwt.indifferent.indifferent_dict import IndifferentDict
from pwt.indifferent.pydantic_utils import IndifferentDictField, IndifferentModel
from pwt.indifferent.symbol import Symbol


class Request(IndifferentModel):
    name: str = "anonymous"
    params: IndifferentDictField


class Envelope(IndifferentModel):
    request: Request


class TestIndifferentDictField:
    """测试字段类型"""

    def test_mapping_converted(self):
        request = Request(params={Symbol("id"): 1, "tags": [{Symbol("k"): "v"}]})
        assert isinstance(request.params, IndifferentDict)
        assert request.params["id"] == 1
        assert request.params[Symbol("tags")][0]["k"] == "v"

    def test_indifferent_dict_kept(self):
        params = IndifferentDict({"id": 1})
        assert Request(params=params).params is params

    def test_non_mapping_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Request(params=[1, 2])
        error = exc_info.value.errors()[0]
        assert error["type"] == "indifferent_dict_type"
        assert error["loc"] == ("params",)
        assert "list" in error["msg"]

    def test_dump_yields_plain_data(self):
        request = Request(params={Symbol("id"): Symbol("x"), "nested": {Symbol("a"): 1}})
        dumped = request.model_dump()
        assert dumped == {"name": "anonymous", "params": {"id": "x", "nested": {"a": 1}}}
        assert type(dumped["params"]) is dict
        assert type(dumped["params"]["nested"]) is dict
        assert request.model_dump_json() == (
            '{"name":"anonymous","params":{"id":"x","nested":{"a":1}}}'
        )


class TestIndifferentModel:
    """测试模型输入"""

    def test_symbol_keyed_input(self):
        request = Request.model_validate({Symbol("name"): "sym", Symbol("params"): {}})
        assert request.name == "sym"
        assert request.params == {}

    def test_indifferent_dict_input(self):
        source = IndifferentDict({Symbol("params"): {Symbol("id"): 2}})
        assert Request.model_validate(source).params["id"] == 2

    def test_nested_model_input(self):
        envelope = Envelope.model_validate(
            {Symbol("request"): {Symbol("params"): {Symbol("id"): 3}}}
        )
        assert envelope.request.params["id"] == 3
        assert envelope.request.name == "anonymous"
