from __future__ import annotations

from .singleton_enum import SingletonEnum, SingletonEnumMeta
from .json_codec import EnumJSONEncoder, dumps, json_default

import typing_singletonenum as core
from typing_singletonenum import UnknownMemberError, member_by_name, search_member

__all__ = [
    "SingletonEnum", "SingletonEnumMeta",
    "UnknownMemberError", "member_by_name", "search_member",
    "EnumJSONEncoder", "dumps", "json_default",
    "compatibility_extensions",
    "core",
]


def __getattr__(name: str):
    if name == "compatibility_extensions":
        from . import compatibility_extensions
        return compatibility_extensions
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
