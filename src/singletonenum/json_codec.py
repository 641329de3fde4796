from __future__ import annotations

import json
from typing import Any

import typing_singletonenum as core


def json_default(obj: Any) -> Any:
    """``default=`` hook for ``json.dumps``: members serialize as their value.

        json.dumps({"city": City.PILSEN}, default=json_default)
        # '{"city": true}'
    """
    if isinstance(obj, core.SingletonEnum):
        return obj.to_json()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class EnumJSONEncoder(json.JSONEncoder):
    """JSON encoder that emits each SingletonEnum member as its raw value."""

    def default(self, o: Any) -> Any:
        if isinstance(o, core.SingletonEnum):
            return o.to_json()
        return super().default(o)


def dumps(obj: Any, **kwargs: Any) -> str:
    """``json.dumps`` with :class:`EnumJSONEncoder` unless ``cls`` is given."""
    kwargs.setdefault("cls", EnumJSONEncoder)
    return json.dumps(obj, **kwargs)
