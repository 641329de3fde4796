from __future__ import annotations

from typing import Any

import typing_singletonenum as core


class SingletonEnumMeta(core.SingletonEnumMeta):
    """
    Package metaclass: the core SingletonEnum behavior plus conversions.

    - HttpStatus.enum()          -> an equivalent stdlib ``enum.Enum``
    - HttpStatus.json_schema()   -> a JSON Schema ``enum`` schema of the values
    - HttpStatus.base_model()    -> a pydantic model with one HttpStatus field
    """

    def enum(cls):
        from .compatibility_extensions import enum
        return enum(cls)

    def json_schema(cls, **kwargs: Any) -> "JsonSchema":
        from .compatibility_extensions import json_schema
        return json_schema(cls, **kwargs)

    def base_model(cls, **kwargs: Any) -> type["BaseModel"]:
        from .compatibility_extensions import base_model
        return base_model(cls, **kwargs)


class SingletonEnum(core.SingletonEnum, metaclass=SingletonEnumMeta):
    """Base class for singleton enums, usable directly as a pydantic field type."""

    __slots__ = ()

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from .pydantic import singleton_enum_core_schema
        return singleton_enum_core_schema(cls)

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> Any:
        from .json_schema import singleton_enum_schema
        return singleton_enum_schema(cls)
