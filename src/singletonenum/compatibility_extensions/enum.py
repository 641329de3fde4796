from enum import Enum

import typing_singletonenum as core


def enum(cls: core.SingletonEnumMeta) -> type[Enum]:
    """Build a stdlib ``Enum`` with the same names and values.

    Note that stdlib ``Enum`` compares values with ``==``: a ``True`` member
    and a ``1`` member become aliases there.
    """
    return Enum(cls.__name__, cls.as_dict())
