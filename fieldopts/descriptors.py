"""
Descriptor builder: turn one Declaration into an immutable OptionDescriptor.

Everything the parser and the formatter need is decided here, once:
- names: the long name (identifier, hyphenated when use_dashes), the optional
  short name taken from the doc, and the aliases.
- kind: the ValueKind fixed from the static type of the storage.
- texts: description, type name and the snapshot of the default value.

Doc grammar
    [-<c> ][<<type>> ]<description>

    "-o <filename> the output file"  → short 'o', type 'filename', "the output file"
    "<n> how many"                   → no short name, type 'n', "how many"
    "set the temperature"            → description only
"""
import enum
import inspect
import pathlib
import re
import types
import typing
from collections.abc import MutableSequence
from typing import NamedTuple, Any

from .declarations import Binding
from .faults import MalformedDocError, UnsupportedTypeError
from .kinds import Kind, ValueKind, byte, short, integer, long, char, single
from .utils import Unset, stringify, hyphenate

_WIDTHS = {
    byte: Kind.BYTE,
    short: Kind.SHORT,
    integer: Kind.INT,
    long: Kind.LONG,
    char: Kind.CHAR,
    single: Kind.FLOAT,
    bool: Kind.BOOLEAN,
    int: Kind.LONG,
    float: Kind.DOUBLE,
}

_NAMES = {
    bool: "boolean",
    str: "string",
    pathlib.Path: "filename",
    re.Pattern: "regex",
}


class OptionDescriptor(NamedTuple):
    """
    everything known about one option once the registry is built.

    - identifier / source: the declaring field and unit, for diagnostics.
    - long_name: display form of the identifier (no dash prefix).
    - short_name: one character or None.
    - aliases: extra names, dash prefix included.
    - group: group title or None.
    - kind: how values are coerced (see fieldopts.kinds).
    - default_text: snapshot of the initial value, None when there is nothing to show.
    - binding: where values are written; never owned by the descriptor.
    """
    identifier: str
    long_name: str
    short_name: str | None
    aliases: tuple[str, ...]
    group: str | None
    kind: ValueKind
    default_text: str | None
    unpublicized: bool
    description: str
    type_name: str
    binding: Binding
    source: str = ""

    @property
    def is_list(self):
        return self.kind.is_list

    @property
    def qualname(self):
        return "%s.%s" % (self.source, self.identifier) if self.source else self.identifier


def parse_doc(doc, /, *, identifier=""):
    """
    split an option doc into (short_name, type_name, description).

    short_name and type_name are None when the doc does not provide them.
    raises MalformedDocError when a doc starting with '-' is not '-<c> <rest>'.
    """
    short_name = None
    description = doc
    if doc.startswith("-"):
        if len(doc) < 4 or doc[2] != " ":
            raise MalformedDocError(
                "malformed option doc %r of %s: a doc starting with '-' needs a short name, a space and a description" % (doc, identifier or "option"),
                identifier=identifier,
                doc=doc,
            )
        short_name = doc[1]
        description = doc[3:]

    type_name = None
    if description.startswith("<"):
        type_name = re.sub(r">.*", "", description[1:], count=1, flags=re.DOTALL)
        description = re.sub(r"<.*> ", "", description, count=1, flags=re.DOTALL)
    return short_name, type_name, description


def _optional(hint):
    # Optional[T] and T | None both unwrap to T
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        arguments = [argument for argument in typing.get_args(hint) if argument is not type(None)]
        if len(arguments) == 1:
            return arguments[0]
    return hint


def _constructible(hint):
    try:
        signature = inspect.signature(hint)
    except (ValueError, TypeError):
        # builtins without introspectable signatures (str, decimal.Decimal, ...)
        return True
    try:
        signature.bind("")
    except TypeError:
        return False
    return True


def resolve_kind(hint, /, *, identifier=""):
    """
    fix the ValueKind of an option from the static type of its storage.

    raises UnsupportedTypeError for missing types, tuples, nested lists, generic
    types other than list[T], and types that cannot be built from one string.
    """
    def unsupported(message):
        return UnsupportedTypeError(message % (identifier or "option"), identifier=identifier, type=hint)

    hint = _optional(hint)
    if hint is Unset or hint is None:
        raise unsupported("cannot determine the type of %s: annotate it or give it a non-None default")
    if hint is list:
        raise unsupported("list option %s needs an element type (for example list[str])")
    if hint is tuple or typing.get_origin(hint) is tuple:
        raise unsupported("%s has a tuple type; use list[T] for repeatable options")

    if typing.get_origin(hint) is list:
        (element,) = typing.get_args(hint) or (Unset,)
        element = _optional(element)
        if element is list or typing.get_origin(element) is list:
            raise unsupported("list option %s cannot hold lists")
        return ValueKind(Kind.LIST, element=resolve_kind(element, identifier=identifier))

    if hint is re.Pattern or typing.get_origin(hint) is re.Pattern:
        return ValueKind(Kind.PATTERN)
    if typing.get_origin(hint) is not None:
        raise unsupported("%s has a generic type; only list[T] is supported")
    if hint in _WIDTHS:
        return ValueKind(_WIDTHS[hint])
    if isinstance(hint, type) and issubclass(hint, enum.Enum):
        return ValueKind(Kind.ENUM, type=hint)
    if callable(hint) and _constructible(hint):
        return ValueKind(Kind.CONSTRUCTIBLE, type=hint)
    raise unsupported("the type of %s cannot be built from a single string")


def type_name(hint, /):
    """
    short name of a storage type, as shown between angle brackets in usage.
    """
    hint = _optional(hint)
    if typing.get_origin(hint) is list:
        return type_name(typing.get_args(hint)[0])
    if typing.get_origin(hint) is re.Pattern:
        hint = re.Pattern
    if isinstance(hint, typing.NewType):
        return hint.__name__
    if hint in _NAMES:
        return _NAMES[hint]
    if isinstance(hint, type) and issubclass(hint, enum.Enum):
        return "enum"
    return getattr(hint, "__name__", str(hint)).lower()


def build_descriptor(declaration, config, /, *, group=None):
    """
    build the descriptor of one declaration under the given config.

    side effects
    - a list option whose storage holds None receives a fresh empty list through
      its binding.
    - a plain bool option whose storage holds None is set to False
      (Optional[bool] storage keeps its None).
    """
    identifier = declaration.identifier
    short_name, override, description = parse_doc(declaration.doc, identifier=identifier)
    kind = resolve_kind(declaration.type, identifier=identifier)

    for alias in declaration.aliases:
        if not isinstance(alias, str) or not alias.startswith("-") or len(alias) < 2 or re.search(r"[=\s]", alias):
            raise MalformedDocError(
                "alias %r of %s must start with '-' and contain neither '=' nor whitespace" % (alias, identifier),
                identifier=identifier,
                alias=alias,
            )

    value = declaration.binding.get()
    if kind.is_list:
        if value is None:
            value = []
            declaration.binding.set(value)
        elif not isinstance(value, MutableSequence):
            raise UnsupportedTypeError(
                "list option %s must start with a list, not %s" % (identifier, type(value).__name__),
                identifier=identifier,
                type=declaration.type,
            )
    elif value is None and declaration.type is bool:
        value = False
        declaration.binding.set(value)

    if value is None or (kind.is_list and not value):
        default_text = None
    else:
        default_text = stringify(value)

    return OptionDescriptor(
        identifier=identifier,
        long_name=hyphenate(identifier) if config.use_dashes else identifier,
        short_name=short_name,
        aliases=tuple(declaration.aliases),
        group=group,
        kind=kind,
        default_text=default_text,
        unpublicized=declaration.unpublicized,
        description=description,
        type_name=override if override is not None else type_name(declaration.type),
        binding=declaration.binding,
        source=declaration.source,
    )


__all__ = (
    "OptionDescriptor",
    "parse_doc",
    "resolve_kind",
    "type_name",
    "build_descriptor",
)
