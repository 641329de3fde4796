from __future__ import annotations

from typing import Any

from pydantic_core import core_schema


def singleton_enum_core_schema(enum_cls: Any) -> core_schema.CoreSchema:
    """
    pydantic-core schema for a SingletonEnum field.

    Input may be a member of enum_cls or a raw value (matched strictly, first
    declared name wins); output, in python and JSON mode, is the raw value.
    """

    def _validate(value: Any) -> Any:
        return enum_cls.validate(value)

    return core_schema.no_info_plain_validator_function(
        _validate,
        serialization=core_schema.plain_serializer_function_ser_schema(
            lambda member: member.to_json(),
        ),
    )
