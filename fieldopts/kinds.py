"""
Value kinds and the value coercer.

A ValueKind is the tagged variant that decides how the text of an option is
turned into a Python value. It is fixed once, when a declaration becomes a
descriptor, from the static type of the bound storage:

    bool                 → BOOLEAN
    byte / short         → BYTE / SHORT      (8 / 16-bit signed)
    integer / long / int → INT / LONG / LONG (32 / 64 / 64-bit signed)
    char                 → CHAR              (exactly one character)
    single / float       → FLOAT / DOUBLE
    enum.Enum subclass   → ENUM(type)
    re.Pattern           → PATTERN           (compiled with re.compile)
    list[T]              → LIST(kind of T)   (T may not itself be a list)
    anything callable    → CONSTRUCTIBLE(type), called with the text

byte, short, integer, long, char and single are typing.NewType markers; they
only exist to pick a width in declarations and behave as int/str/float at run
time.
"""
import enum
import math
import re
import struct
from typing import NamedTuple, NewType, Any

from .faults import InvalidValueError

byte = NewType("byte", int)
short = NewType("short", int)
integer = NewType("integer", int)
long = NewType("long", int)
char = NewType("char", str)
single = NewType("single", float)


class Kind(enum.Enum):
    BOOLEAN = "boolean"
    BYTE = "byte"
    CHAR = "char"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    ENUM = "enum"
    CONSTRUCTIBLE = "constructible"
    PATTERN = "pattern"
    LIST = "list"


_BITS = {
    Kind.BYTE: 8,
    Kind.SHORT: 16,
    Kind.INT: 32,
    Kind.LONG: 64,
}

_NOUNS = {
    Kind.BOOLEAN: "a boolean",
    Kind.BYTE: "a byte",
    Kind.CHAR: "a single character",
    Kind.SHORT: "a short integer",
    Kind.INT: "an integer",
    Kind.LONG: "a long integer",
    Kind.FLOAT: "a float",
    Kind.DOUBLE: "a double",
}

_DIGITS = {
    16: re.compile(r"[0-9a-fA-F]+"),
    8: re.compile(r"[0-7]+"),
    10: re.compile(r"[0-9]+"),
}


class ValueKind(NamedTuple):
    """
    tagged variant: tag plus the payload the tag needs.

    - type: the enum class (ENUM) or the constructor (CONSTRUCTIBLE).
    - element: the element kind (LIST only; never a LIST itself).
    """
    tag: Kind
    type: Any = None
    element: "ValueKind | None" = None

    @property
    def is_list(self):
        return self.tag is Kind.LIST

    @property
    def scalar(self):
        """
        the kind a single value is coerced with (the element kind for lists).
        """
        return self.element if self.tag is Kind.LIST else self

    @property
    def requires_value(self):
        """
        every kind but BOOLEAN consumes a value when none is given inline.
        """
        return self.tag is not Kind.BOOLEAN


def decode(text, /):
    """
    radix-sensing integer decode.

    grammar
    - optional sign ('+' or '-')
    - '0x', '0X' or '#' → hexadecimal digits follow
    - '0' followed by more digits → octal
    - otherwise decimal

    no whitespace, no underscores. raises ValueError on anything else.
    """
    body = text
    sign = 1
    if body[:1] in ("-", "+"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body[:2] in ("0x", "0X"):
        radix, digits = 16, body[2:]
    elif body[:1] == "#":
        radix, digits = 16, body[1:]
    elif body[:1] == "0" and len(body) > 1:
        radix, digits = 8, body[1:]
    else:
        radix, digits = 10, body
    if not _DIGITS[radix].fullmatch(digits):
        raise ValueError("invalid literal %r" % text)
    return sign * int(digits, radix)


def _float32(value):
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _enum(type, text, option):
    wanted = text.replace("-", "_").casefold()
    for name, member in type.__members__.items():
        if name.casefold() == wanted:
            return member
    raise InvalidValueError(
        "no constant %r in enum %s for option %s" % (text, type.__qualname__, option),
        option=option,
        value=text,
        hint="use one of: %s" % ", ".join(name.lower().replace("_", "-") for name in type.__members__),
    )


def coerce(kind, text, /, *, option=""):
    """
    convert one piece of command-line text into a value of the given kind.

    parameters
    - kind: ValueKind (a LIST kind coerces one element)
    - text: str, the raw text
    - option: the option name as typed, used in messages

    returns
    - the converted value (never appended or assigned here; see the parser).

    raises
    - InvalidValueError naming the option and the raw text.
    """
    kind = kind.scalar
    tag = kind.tag

    def failure(noun=None, **options):
        return InvalidValueError(
            "value %r for option %s is not %s" % (text, option, noun or _NOUNS[tag]),
            option=option,
            value=text,
            **options
        )

    match tag:
        case Kind.BOOLEAN:
            lowered = text.lower()
            if lowered in ("true", "t"):
                return True
            if lowered in ("false", "f"):
                return False
            raise failure(hint="use true, t, false or f")
        case Kind.BYTE | Kind.SHORT | Kind.INT | Kind.LONG:
            try:
                value = decode(text)
            except ValueError:
                raise failure(hint="use a decimal, 0x-hexadecimal or 0-octal literal") from None
            bits = _BITS[tag]
            if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
                raise failure(hint="the value must fit in %d signed bits" % bits)
            return value
        case Kind.CHAR:
            if len(text) != 1:
                raise failure()
            return text
        case Kind.FLOAT | Kind.DOUBLE:
            if "_" in text:
                raise failure(hint="digit separators are not accepted")
            try:
                value = float(text)
            except ValueError:
                raise failure() from None
            return _float32(value) if tag is Kind.FLOAT else value
        case Kind.ENUM:
            return _enum(kind.type, text, option)
        case Kind.PATTERN | Kind.CONSTRUCTIBLE:
            factory = re.compile if tag is Kind.PATTERN else kind.type
            try:
                return factory(text)
            except Exception:
                raise InvalidValueError(
                    "invalid argument %r for option %s" % (text, option),
                    option=option,
                    value=text,
                ) from None
        case _:
            raise TypeError("cannot coerce to %s" % tag)


def pieces(text, /, *, space_separated=False):
    """
    split the text given to a list option into the elements to append.

    with space_separated, runs of whitespace separate elements (text made only
    of whitespace still yields itself as one element); otherwise the whole text
    is one element.
    """
    if space_separated:
        return text.split() or [text]
    return [text]


__all__ = (
    "byte",
    "short",
    "integer",
    "long",
    "char",
    "single",
    "Kind",
    "ValueKind",
    "decode",
    "coerce",
    "pieces",
)
