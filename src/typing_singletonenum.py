"""
SingletonEnum: named constants wrapped in per-member singleton objects.

A ``SingletonEnum`` subclass declares a closed, ordered set of named values.
Each name is reachable as a lazily created wrapper object that is unique for
the lifetime of the process, so members compare by identity::

    class Hash(SingletonEnum):
        MD5 = "md5"
        SHA1 = "sha1"

    Hash.MD5 is Hash.MD5          # True
    Hash.MD5 == Hash.SHA1         # False
    Hash.MD5.value                # "md5"
    Hash.search("sha1")           # <Hash.SHA1: 'sha1'>
    Hash.keys()                   # ("MD5", "SHA1")
    str(Hash.MD5)                 # "md5"

Member values may be any JSON-representable value: ``bool``, ``int``,
finite ``float``, ``str``, ``None``, or ``list`` / ``dict`` (string keys)
nesting the same.  Two members of different classes are never equal, even
when they wrap the same value.
"""

from __future__ import annotations

import copy
import inspect
import json
import logging
import math
import threading
from types import MappingProxyType
from typing import Any, Iterator, Mapping, NoReturn, TypeVar

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Allowed value types: exactly the types ``json`` round-trips.  Subclasses
# (``IntEnum`` members, ``str`` subclasses, ...) are rejected so that strict
# comparison by type stays meaningful.
# ---------------------------------------------------------------------------
_SCALAR_TYPES: tuple[type, ...] = (str, int, float, bool, type(None))
_COMPOUND_TYPES: tuple[type, ...] = (list, dict)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_json_value(value: object) -> bool:
    """Return ``True`` if *value* is a JSON-representable member value.

    Floats must be finite; ``dict`` keys must be ``str``.  Containers are
    checked recursively.
    """
    kind = type(value)
    if kind is float:
        return math.isfinite(value)  # type: ignore[arg-type]
    if kind in _SCALAR_TYPES:
        return True
    if kind is list:
        return all(_is_json_value(v) for v in value)  # type: ignore[attr-defined]
    if kind is dict:
        return all(
            type(k) is str and _is_json_value(v)
            for k, v in value.items()  # type: ignore[attr-defined]
        )
    return False


def strict_equal(a: object, b: object) -> bool:
    """Compare two member values without type coercion.

    Python considers ``True == 1`` and ``1 == 1.0``.  Here both operands
    must have the same exact type, and containers are compared element by
    element under the same rule::

        strict_equal(True, 1)          # False
        strict_equal(1, 1.0)           # False
        strict_equal({"a": [1]}, {"a": [1]})   # True
        strict_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})   # True, key order ignored
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(  # type: ignore[attr-defined]
            strict_equal(v, b[k]) for k, v in a.items()  # type: ignore[index]
        )
    if isinstance(a, list):
        return len(a) == len(b) and all(  # type: ignore[arg-type]
            strict_equal(x, y) for x, y in zip(a, b)  # type: ignore[call-overload]
        )
    return a == b


def _detach(value: Any) -> Any:
    """Return a private copy of a compound value; scalars are returned as is."""
    if isinstance(value, _COMPOUND_TYPES):
        return copy.deepcopy(value)
    return value


def _to_text(value: Any) -> str:
    """Render a member value as text.

    Compound values become compact JSON (``{"foo":["bar"]}``), ``None``
    becomes the empty string, and scalars use ``str()``.
    """
    if isinstance(value, _COMPOUND_TYPES):
        return json.dumps(value, separators=(",", ":"))
    if value is None:
        return ""
    return str(value)


def _is_descriptor(obj: object) -> bool:
    """Return ``True`` if *obj* is class infrastructure rather than a member.

    Functions, method descriptors, ``property``, ``classmethod``,
    ``staticmethod``, nested classes and anything with ``__get__`` are
    skipped during member collection.
    """
    return (
        inspect.isfunction(obj)
        or inspect.ismethoddescriptor(obj)
        or isinstance(obj, type)
        or hasattr(obj, "__get__")
    )


def _parse_ignore(ns: Mapping[str, Any]) -> set[str]:
    """Parse an optional ``_ignore_`` directive from the class namespace.

    Accepts a whitespace- or comma-separated string, a sequence of names,
    or ``None``.

    Raises:
        TypeError: If ``_ignore_`` is present but not a recognized format.
    """
    ignore = ns.get("_ignore_", ())
    if ignore is None:
        return set()
    if isinstance(ignore, str):
        return {name for name in ignore.replace(",", " ").split() if name}
    if isinstance(ignore, (list, tuple, set, frozenset)):
        return {str(x) for x in ignore}
    raise TypeError("_ignore_ must be a str or a sequence of names")


def _reserved_names(mcls: type, bases: tuple[type, ...]) -> set[str]:
    """Names a member may not use because class attribute lookup would
    resolve them before reaching the member accessor."""
    reserved: set[str] = set()
    for klass in mcls.__mro__:
        reserved.update(vars(klass))
    for base in bases:
        for klass in base.__mro__:
            reserved.update(vars(klass))
    return reserved


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class UnknownMemberError(AttributeError, KeyError):
    """Raised when a name is looked up that the enum does not declare.

    It is both an ``AttributeError`` (so ``getattr(Hash, "X", None)`` and
    ``hasattr`` behave) and a ``KeyError`` (so ``Hash["X"]`` behaves like a
    mapping miss).

    Attributes:
        enum_cls: The ``SingletonEnum`` subclass that was searched.
        name:     The offending member name.
    """

    def __init__(self, enum_cls: type, name: str) -> None:
        self.message = (
            f"Unknown member: {enum_cls.__module__}.{enum_cls.__qualname__}::{name}"
        )
        super().__init__(self.message)
        self.enum_cls = enum_cls
        self.name = name
        self.obj = enum_cls

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Singleton cache
#
# One instance per (class, member name) for the lifetime of the process.
# Entries are only ever added, under ``_lock``; reads of a published entry
# need no lock because instances are immutable.
# ---------------------------------------------------------------------------

_singletons: dict[tuple[type, str], SingletonEnum] = {}
_lock = threading.Lock()


def _materialize(cls: SingletonEnumMeta, name: str) -> Any:
    """Return the singleton for *name* on *cls*, creating it on first use."""
    slot = (cls, name)
    instance = _singletons.get(slot)
    if instance is not None:
        return instance

    if name not in cls._members_:
        raise UnknownMemberError(cls, name)

    with _lock:
        instance = _singletons.get(slot)
        if instance is None:
            instance = object.__new__(cls)
            object.__setattr__(instance, "_key", name)
            object.__setattr__(instance, "_value", cls._members_[name])
            _singletons[slot] = instance
            logger.debug("Materialized %s.%s", cls.__qualname__, name)
    return instance


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

SE = TypeVar("SE", bound="SingletonEnum")
_MISSING = object()


def member_by_name(enum_cls: type[SE], name: str) -> SE:
    """Return the singleton member of *enum_cls* called *name*.

    Repeated calls return the identical object::

        member_by_name(Hash, "MD5") is Hash.MD5   # True

    Raises:
        UnknownMemberError: If *enum_cls* declares no member *name*.
        TypeError: If *enum_cls* is not a ``SingletonEnum`` subclass.
    """
    if not isinstance(enum_cls, SingletonEnumMeta):
        raise TypeError(f"{enum_cls!r} is not a SingletonEnum subclass")
    return _materialize(enum_cls, name)


def search_member(enum_cls: type[SE], value: object) -> SE | None:
    """Return the first member of *enum_cls* whose value strictly equals
    *value*, or ``None``.

    Declaration order decides between aliases.  See :func:`strict_equal`
    for the comparison rule.
    """
    if not isinstance(enum_cls, SingletonEnumMeta):
        raise TypeError(f"{enum_cls!r} is not a SingletonEnum subclass")
    for key, candidate in enum_cls._members_.items():
        if strict_equal(candidate, value):
            return _materialize(enum_cls, key)
    return None


# ---------------------------------------------------------------------------
# Metaclass
# ---------------------------------------------------------------------------

class SingletonEnumMeta(type):
    """Metaclass that powers ``SingletonEnum``.

    Responsibilities:

    1. **Member collection**: during ``__new__``, records the public,
       non-descriptor attributes of the class body as ordered
       ``(name, value)`` pairs and removes them from the class namespace.
    2. **Member access**: ``Hash.MD5``, ``Hash["MD5"]`` and
       ``Hash.member("MD5")`` all resolve through the process-wide
       singleton cache.
    3. **Class-level operations**: ``keys()``, ``values()``,
       ``as_dict()``, ``search()`` and the container protocol operate on
       the *class itself*.
    """

    # ---- Internal attributes set on every SingletonEnum subclass ----
    #
    # _members_:          dict[str, Any]             : name -> value, declaration order (aliases included)
    #                                                  values are private copies, never handed out
    # _allow_aliases_:    bool                       : whether duplicate values are permitted
    # _call_to_validate_: bool                       : whether __call__ validates instead of raising

    def __new__(
        mcls,
        name: str,
        bases: tuple[type, ...],
        ns: dict[str, Any],
        *,
        extend: bool = False,
        allow_aliases: bool | None = None,
        call_to_validate: bool | None = None,
        **kwds: Any,
    ) -> SingletonEnumMeta:
        """Create a new SingletonEnum class, collecting its members.

        Args:
            name:  The class name.
            bases: Base classes.
            ns:    The class body namespace.
            extend: If ``True``, allow subclassing a populated SingletonEnum
                and inherit its members.  Defaults to ``False``.
            allow_aliases: If ``False``, raise ``TypeError`` when two names
                carry the same value.  ``None`` inherits the parent's
                setting, or ``True`` at the root.
            call_to_validate: If ``True``, ``Hash("md5")`` returns the
                member holding that value instead of raising ``TypeError``.
                ``None`` inherits the parent's setting, or ``False`` at the
                root.

        Raises:
            TypeError: On multiple SingletonEnum bases, unsupported member
                values, names shadowing class attributes, name conflicts
                during extension, duplicate values when
                ``allow_aliases=False``, or subclassing without
                ``extend=True``.
        """
        enum_bases: list[type] = [b for b in bases if isinstance(b, SingletonEnumMeta)]

        # The root SingletonEnum class itself has no members.
        if not enum_bases:
            cls = super().__new__(mcls, name, bases, ns)
            cls._members_ = {}
            cls._allow_aliases_ = True if allow_aliases is None else allow_aliases
            cls._call_to_validate_ = False if call_to_validate is None else call_to_validate
            return cls

        if len(enum_bases) > 1:
            raise TypeError(
                f"{name} may not inherit from multiple SingletonEnum bases "
                f"({', '.join(b.__name__ for b in enum_bases)})."
            )

        base: Any = enum_bases[0]

        if not extend and base._members_:
            raise TypeError(
                f"{name} inherits from {base.__name__}; use "
                f"`class {name}({base.__name__}, extend=True): ...` "
                "to inherit and extend members. "
                "Subclassing without extend=True is not allowed."
            )

        if allow_aliases is None:
            allow_aliases = base._allow_aliases_
        if call_to_validate is None:
            call_to_validate = base._call_to_validate_

        members: dict[str, Any] = dict(base._members_) if extend else {}
        ignore: set[str] = _parse_ignore(ns)
        reserved: set[str] = _reserved_names(mcls, bases)

        for k, v in ns.items():
            if k in ignore or k.startswith("_") or _is_descriptor(v):
                continue

            if type(v) is float and not math.isfinite(v):
                raise TypeError(
                    f"Member '{name}.{k}' is {v!r}; non-finite floats are not "
                    "permitted in SingletonEnum."
                )
            if not _is_json_value(v):
                raise TypeError(
                    f"Member '{name}.{k}' has value {v!r} (type {type(v).__name__}), "
                    "not a supported JSON value."
                )
            if k in members:
                raise TypeError(
                    f"Member name '{name}.{k}' conflicts with inherited member "
                    f"'{base.__name__}.{k}'."
                )
            if k in reserved:
                raise TypeError(
                    f"Member name '{name}.{k}' shadows an attribute of "
                    f"{base.__name__}; choose another name."
                )
            if not allow_aliases:
                for other, existing in members.items():
                    if strict_equal(existing, v):
                        raise TypeError(
                            f"Duplicate value {v!r} in '{name}': "
                            f"'{k}' conflicts with member '{other}'. "
                            f"Use allow_aliases=True to permit aliases."
                        )

            members[k] = _detach(v)

        # Members live only in _members_; attribute access falls through to
        # __getattr__ and the singleton cache.
        body = {k: v for k, v in ns.items() if k not in members}
        cls = super().__new__(mcls, name, bases, body)

        cls._members_ = members
        cls._allow_aliases_ = allow_aliases
        cls._call_to_validate_ = call_to_validate
        logger.debug("Collected %d member(s) for %s", len(members), cls.__qualname__)
        return cls

    # ---- Member access ----

    def __getattr__(cls, name: str) -> Any:
        """Resolve ``Hash.MD5`` to the singleton member.

        Only reached when normal attribute lookup fails, which is always the
        case for member names because they are removed from the class body.
        """
        if name.startswith("_"):
            raise AttributeError(
                f"type object {cls.__name__!r} has no attribute {name!r}"
            )
        return _materialize(cls, name)

    def __getitem__(cls, name: str) -> Any:
        """Look up a member by name: ``Hash["MD5"]``.

        Raises:
            UnknownMemberError: If *name* is not a member name.
        """
        return _materialize(cls, name)

    def member(cls, name: str) -> Any:
        """Return the singleton member called *name*.

        Raises:
            UnknownMemberError: If *name* is not a member name.
        """
        return _materialize(cls, name)

    def search(cls, value: object) -> Any:
        """Return the first member holding *value*, or ``None``.

        Uses strict comparison: ``Hash.search("1")`` does not find a member
        whose value is ``1``, and ``True`` does not find ``1``.
        """
        return search_member(cls, value)

    # ---- Introspection (no instances are created) ----

    #
    # Compound values are copied on the way out: mutating a returned dict or
    # list never reaches the definition.

    @property
    def mapping(cls) -> Mapping[str, Any]:
        """A read-only ``{name: value}`` mapping in declaration order."""
        return MappingProxyType(cls.as_dict())

    @property
    def __members__(cls) -> Mapping[str, Any]:
        return cls.mapping

    def keys(cls) -> tuple[str, ...]:
        """Return all member names in declaration order (aliases included)."""
        return tuple(cls._members_)

    def values(cls) -> tuple[Any, ...]:
        """Return all member values in declaration order, one per name."""
        return tuple(_detach(v) for v in cls._members_.values())

    def items(cls) -> tuple[tuple[str, Any], ...]:
        """Return ``(name, value)`` pairs in declaration order."""
        return tuple((k, _detach(v)) for k, v in cls._members_.items())

    def as_dict(cls) -> dict[str, Any]:
        """Return a new ``{name: value}`` dict in declaration order."""
        return {k: _detach(v) for k, v in cls._members_.items()}

    # ---- Alias introspection ----

    def names(cls, value: object) -> tuple[str, ...]:
        """Return every name declared with *value*, in declaration order.

        The first element is the name ``search()`` resolves to::

            class Method(SingletonEnum):
                GET = "GET"
                FETCH = "GET"     # alias

            Method.names("GET")   # ("GET", "FETCH")

        Raises:
            KeyError: If no member holds *value*.
        """
        found = tuple(k for k, v in cls._members_.items() if strict_equal(v, value))
        if not found:
            raise KeyError(f"{value!r} is not a member value of {cls.__name__}")
        return found

    def canonical_name(cls, value: object) -> str:
        """Return the first-declared name for *value*.

        Raises:
            KeyError: If no member holds *value*.
        """
        return cls.names(value)[0]

    # ---- Container protocol (operates on the *class*, not instances) ----

    def __iter__(cls) -> Iterator[Any]:
        """Iterate over the member singletons in declaration order."""
        return iter([_materialize(cls, k) for k in cls._members_])

    def __reversed__(cls) -> Iterator[Any]:
        return iter([_materialize(cls, k) for k in reversed(cls._members_)])

    def __len__(cls) -> int:
        """Return the number of declared names (aliases counted)."""
        return len(cls._members_)

    def __bool__(cls) -> bool:
        """A SingletonEnum class is truthy if it declares any member."""
        return bool(cls._members_)

    def __contains__(cls, value: object) -> bool:
        """Test membership.

        A ``SingletonEnum`` instance is contained only if it is one of this
        exact class's singletons.  Any other object is treated as a raw
        value and searched for strictly::

            Hash.MD5 in Hash      # True
            "md5" in Hash         # True
            Hash.MD5 in Other     # False, even if Other has MD5 = "md5"
        """
        if isinstance(value, SingletonEnum):
            return type(value) is cls and _singletons.get((cls, value._key)) is value
        return search_member(cls, value) is not None

    def __dir__(cls) -> list[str]:
        return sorted(set(super().__dir__()) | set(cls._members_))

    def __repr__(cls) -> str:
        """Return a readable representation of the SingletonEnum class.

        Example::

            repr(Hash)
            # "<SingletonEnum 'Hash' [MD5='md5', SHA1='sha1']>"
        """
        if not cls._members_:
            return f"<SingletonEnum '{cls.__name__}'>"
        members: str = ", ".join(f"{k}={v!r}" for k, v in cls._members_.items())
        return f"<SingletonEnum '{cls.__name__}' [{members}]>"

    # ---- Mutation prevention ----

    def __setattr__(cls, name: str, value: Any) -> None:
        if name in cls.__dict__.get("_members_", ()):
            raise AttributeError(f"Cannot reassign '{cls.__name__}.{name}'")
        super().__setattr__(name, value)

    def __delattr__(cls, name: str) -> None:
        if name in cls.__dict__.get("_members_", ()):
            raise AttributeError(f"Cannot delete '{cls.__name__}.{name}'")
        super().__delattr__(name)

    # ---- Validation ----

    def __call__(cls, value: Any = _MISSING) -> Any:
        """Call the class to look a member up by value.

        Behavior depends on ``call_to_validate``:

        * ``False`` (default): raises ``TypeError``; members are only
          obtainable through the class.
        * ``True``: equivalent to ``cls.validate(value)``::

            class Hash(SingletonEnum, call_to_validate=True):
                MD5 = "md5"

            Hash("md5")    # <Hash.MD5: 'md5'>
            Hash("crc")    # ValueError
        """
        if cls._call_to_validate_ and value is not _MISSING:
            return cls.validate(value)
        raise TypeError(
            f"{cls.__name__} is not instantiable; "
            f"use {cls.__name__}.<NAME>, {cls.__name__}.member(name) "
            f"or {cls.__name__}.search(value)"
        )

    def is_valid(cls, x: object) -> bool:
        """Return ``True`` if *x* is one of this class's members or a value
        one of them holds."""
        return x in cls

    def validate(cls, x: object) -> Any:
        """Return the member for *x*, or raise ``ValueError``.

        *x* may be a member of this class (returned unchanged) or a raw
        value (resolved with :meth:`search`).
        """
        if isinstance(x, SingletonEnum):
            if x in cls:
                return x
        else:
            found = search_member(cls, x)
            if found is not None:
                return found
        raise ValueError(f"{x!r} is not a valid {cls.__name__}")


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------

class SingletonEnum(metaclass=SingletonEnumMeta):
    """Base class for enums whose members are identity-comparable singletons.

    Subclass ``SingletonEnum`` and assign values as class attributes::

        class City(SingletonEnum):
            PILSEN = True
            MUNICH = {"foo": ["bar"]}
            NEW_YORK = 42

    At runtime:

    * ``City.PILSEN`` is a ``City`` instance, created on first access and
      then reused; ``City.PILSEN is City.PILSEN``.
    * ``City.PILSEN.key == "PILSEN"`` and ``City.PILSEN.value is True``.
    * ``City.search(42)`` returns ``City.NEW_YORK``.
    * ``str(City.MUNICH) == '{"foo":["bar"]}'``.

    ``SingletonEnum`` is **not instantiable**; members come from the class.

    To extend an existing SingletonEnum, pass ``extend=True``::

        class BigCity(City, extend=True):
            TAMPA = 1 / 3
    """

    __slots__ = ("_key", "_value")

    def __init_subclass__(
            cls,
            *,
            extend: bool = False,
            call_to_validate: bool | None = None,
            allow_aliases: bool | None = None,
            **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)

    def __new__(cls, value: Any) -> NoReturn:
        """Signal to type checkers that SingletonEnum is not instantiable.

        At runtime, the metaclass ``__call__`` intercepts before this is
        reached.
        """
        raise TypeError(f"{cls.__name__} is not instantiable")

    # ---- Accessors ----

    @property
    def key(self) -> str:
        """The member name."""
        return self._key

    @property
    def value(self) -> Any:
        """The member value (a fresh copy when it is a ``dict`` or ``list``)."""
        return _detach(self._value)

    def get_key(self) -> str:
        return self._key

    def get_value(self) -> Any:
        return _detach(self._value)

    def equals(self, other: object) -> bool:
        """Return ``True`` if *other* is this very member."""
        return self is other

    def to_json(self) -> Any:
        """Return the value to emit when serializing this member to JSON."""
        return _detach(self._value)

    # ---- Identity preservation ----

    def __reduce__(self) -> tuple[Any, ...]:
        return member_by_name, (type(self), self._key)

    def __copy__(self) -> SingletonEnum:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> SingletonEnum:
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} members are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} members are immutable")

    # ---- Text ----

    def __str__(self) -> str:
        return _to_text(self._value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}.{self._key}: {self._value!r}>"
