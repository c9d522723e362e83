from __future__ import annotations

import json
import logging
import traceback
from typing import Any, Literal

from pwt.indifferent.keys import to_plain


def get_logger_adapter(name: str | None = None, **extra: Any) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name), **extra)


class EnhancedFormatter(logging.Formatter):
    """
    日志格式化器, 默认使用 `{}` 风格, 支持 text / json 两种输出.

    - 按记录上的 `_style` 渲染消息, 使 `logf` 系列的 `{}` 占位符生效;
    - json 输出中, 扩展字段经 `to_plain` 转换, Symbol 与 IndifferentDict 可直接记录.
    """

    # fmt: off
    RESERVED_FIELDS = {
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module',
        'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName', 'created', 'msecs',
        'relativeCreated', 'thread', 'threadName', 'processName', 'process', 'taskName',
        'message', 'asctime', 'stacklevel', 'logger'
    }
    # fmt: on

    def __init__(
        self,
        textfmt: str | None = None,
        datefmt: str | None = None,
        *,
        output_format: Literal["text", "json"] = "text",
    ) -> None:
        super().__init__(textfmt or "{asctime} {levelname}: {message}", datefmt, "{")
        self.output_format = output_format

    def format(self, record: logging.LogRecord) -> str:
        record.message = self.getMessage(record)
        record.asctime = self.formatTime(record, self.datefmt)

        if self.output_format == "text":
            return self.formatMessage(record)
        return self.formatJson(record)

    def getMessage(self, record: logging.LogRecord) -> str:
        style = getattr(record, "_style", "%")
        try:
            if style == "{":
                return str(record.msg).format(*(record.args or ()), **vars(record))
            return record.getMessage()
        except Exception:
            return str(record.msg)

    def formatJson(self, record: logging.LogRecord) -> str:
        json_dict: dict[str, Any] = {
            "timestamp": record.asctime,
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
            "location": {
                "module": record.module,
                "function": record.funcName,
                "line": record.lineno,
            },
        }
        if record.exc_info:
            typ, value, tb = record.exc_info
            json_dict["exception"] = {
                "$type": f"{typ.__module__}.{typ.__name__}" if typ else None,
                "message": str(value) if value else None,
                "traceback": traceback.format_exception(typ, value, tb),
            }
        # 扩展字段
        for key, value in vars(record).items():
            if key not in self.RESERVED_FIELDS and not key.startswith("_"):
                json_dict[key] = to_plain(value)

        return json.dumps(json_dict, ensure_ascii=False, default=str)


class LoggerAdapter:
    """
    日志适配器, 封装标准库 `logging.Logger`

    提供两种日志格式化风格:
    - `log`: `%` 占位符格式(默认 logging 行为)
    - `logf`: `{}` 格式化(`str.format` 风格), 关键字参数即格式化字段

    通过构造函数传入的 `extra` 字段会自动合并到每条日志记录的 `extra` 中,
    并在 `extra` 中注入 `_style` 字段供格式化器使用.

    记录中的调用位置(funcName / lineno)指向调用适配器的代码,
    无论调用的是 `info` 这类级别方法还是 `log` / `logf` 本身.
    """

    def __init__(self, logger: logging.Logger, **extra: Any) -> None:
        self.logger = logger
        self.extra = extra

    def process(
        self,
        msg: str,
        style: Literal["%", "{"],
        kwargs: dict[str, Any],
    ) -> tuple[str, dict[str, Any]]:
        """
        预处理日志调用参数, 统一合并 `extra` 字段.

        - `%` 风格: 在现有 `extra` 基础上合并适配器实例的 `extra`.
        - `{` 风格: 除 logging 自身的关键字参数外, 其余关键字参数并入 `extra`.
        """
        if style == "{":
            native = {
                k: kwargs.pop(k)
                for k in ("exc_info", "stack_info", "stacklevel", "extra")
                if k in kwargs
            }
            kwargs = {**native, "extra": {**native.get("extra", {}), **kwargs}}
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {}), "_style": style}
        return msg, kwargs

    # 级别方法多经过一层调用, stacklevel 相应加一

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(logging.ERROR, msg, *args, **kwargs)

    def log(
        self, level: int, msg: str, *args: Any, stacklevel: int = 1, **kwargs: Any
    ) -> None:
        msg, kwargs = self.process(msg, "%", kwargs)
        self.logger.log(level, msg, *args, stacklevel=stacklevel + 1, **kwargs)

    def debugf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.logf(logging.DEBUG, msg, *args, **kwargs)

    def infof(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.logf(logging.INFO, msg, *args, **kwargs)

    def warningf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.logf(logging.WARNING, msg, *args, **kwargs)

    def errorf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.logf(logging.ERROR, msg, *args, **kwargs)

    def logf(
        self, level: int, msg: str, *args: Any, stacklevel: int = 1, **kwargs: Any
    ) -> None:
        msg, kwargs = self.process(msg, "{", kwargs)
        self.logger.log(level, msg, *args, stacklevel=stacklevel + 1, **kwargs)
