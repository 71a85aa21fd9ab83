import enum
import functools
import re
from collections.abc import Sequence
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    intent
    - used by the internal API to distinguish "not provided" from a user‑supplied
      value (including None, which is a legal option default).
    - although this class is importable, it is intended for internal use only.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process‑wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    - final: subclassing is forbidden to preserve semantics (see __init_subclass__).
    """

    def __or__(self, other, /):
        """
        support UnsetType | T in annotations (internal convenience only).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        support T | UnsetType in annotations (internal convenience only).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        return the singleton instance (process‑wide).
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        """
        disallow subclassing to keep sentinel semantics stable.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
internal singleton instance of UnsetType.
"""


def nullify(object, default=None, /):
    """
    internal helper: return `default` when `object` is Unset; otherwise return `object`.
    """
    return default if object is Unset else object


def stringify(object, /):
    """
    render a live option value the way it is shown to users.

    rules
    - None        → "null"
    - bool        → "true" / "false" (accepted back by the boolean coercer)
    - Enum member → member name
    - re.Pattern  → the source pattern
    - sequences   → "[a, b]" with every element stringified (str is not a sequence here)
    - other       → str(object)
    """
    if object is None:
        return "null"
    if isinstance(object, bool):
        return "true" if object else "false"
    if isinstance(object, enum.Enum):
        return object.name
    if isinstance(object, re.Pattern):
        return object.pattern
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return "[%s]" % ", ".join(map(stringify, object))
    return str(object)


def hyphenate(name, /):
    """
    long-name display form: underscores become hyphens.
    """
    return name.replace("_", "-")


__all__ = (
    "UnsetType",
    "Unset",
    "nullify",
    "stringify",
    "hyphenate",
)
