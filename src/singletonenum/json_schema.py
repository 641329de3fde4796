from __future__ import annotations

from typing import Any, Dict, List

from typing_singletonenum import strict_equal

JsonSchema = Dict[str, Any]


def _json_type(v: Any) -> str:
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "boolean"
    if isinstance(v, int):
        return "integer"
    if isinstance(v, float):
        return "number"
    if isinstance(v, str):
        return "string"
    if isinstance(v, list):
        return "array"
    if isinstance(v, dict):
        return "object"
    raise TypeError(f"Unsupported SingletonEnum value {v!r} (type {type(v).__name__})")


def _unique(values: tuple[Any, ...]) -> List[Any]:
    # Aliases repeat a value; the schema lists it once.
    unique: List[Any] = []
    for v in values:
        if not any(strict_equal(v, seen) for seen in unique):
            unique.append(v)
    return unique


def singleton_enum_schema(
    enum_cls: type,
    *,
    title: str | None = None,
    description: str | None = None,
    nullable: bool | None = None,
    openapi: bool = False,
) -> JsonSchema:
    """
    Build a JSON Schema (or OpenAPI-friendly) schema for a SingletonEnumMeta class.

    The schema describes the serialized form of a member, i.e. its raw value.
    Values of a single JSON type give ``{"type": ..., "enum": [...]}``; mixed
    types give a ``oneOf`` with one alternative per type.

    Params:
      - nullable:
          * None (default): inferred from presence of None in values
          * True/False: force nullable behavior
      - openapi:
          * If True: emits OpenAPI 3.0-friendly shape (uses nullable: true)
          * If False: emits JSON Schema 2020-12-friendly shape (uses type: "null" or oneOf)
    """
    # values() returns copies, so the schema owns its enum entries.
    values = _unique(enum_cls.values())
    if not values:
        raise ValueError(f"{enum_cls!r} has no members")

    types = [_json_type(v) for v in values]
    if nullable is None:
        nullable = "null" in types

    non_null = [(v, t) for v, t in zip(values, types) if t != "null"]
    non_null_types = sorted({t for _, t in non_null})

    schema: JsonSchema = {"title": title or enum_cls.__name__}
    if description:
        schema["description"] = description

    if len(non_null_types) <= 1:
        if non_null_types:
            schema["type"] = non_null_types[0]
        schema["enum"] = [v for v, _ in non_null]
    else:
        schema["oneOf"] = [
            {"type": t, "enum": [v for v, tt in non_null if tt == t]}
            for t in non_null_types
        ]

    if nullable:
        schema = _apply_nullable(schema, openapi=openapi)
    return schema


def _apply_nullable(schema: JsonSchema, *, openapi: bool) -> JsonSchema:
    if openapi:
        schema["nullable"] = True
        if "enum" in schema:
            schema["enum"].append(None)
        return schema
    if "oneOf" in schema:
        schema["oneOf"].append({"type": "null"})
        return schema
    t = schema.get("type")
    schema["type"] = [t, "null"] if t else "null"
    schema["enum"].append(None)
    return schema
