"""
fieldopts declarations: how a program says "this field is an option".

Overview
- Option: a marker assigned to a class attribute. Its doc string follows the
  option grammar ("-o <filename> the output file"); the attribute name becomes
  the long option name; its default becomes the field's initial value.
- Group: names the group that starts at the option carrying it (all later
  options of the same source join it until the next Group).
- Binding: the capability to read, assign and append to the storage behind one
  option. AttributeBinding writes an attribute, ItemBinding writes a mapping key.
- Declaration: the normalized record handed to the registry. Anything able to
  produce Declarations (the scan() below, or hand-written lists) can feed it.
- scan(): discover the Option markers of a class (static storage: the class
  attributes are written) or of an instance (the instance attributes are written).

Quick example:
    >>> import pathlib
    >>> from fieldopts import Options, Option
    >>> class Program:
    ...     outfile: pathlib.Path = Option("-o <filename> the output file", default=pathlib.Path("/tmp/out"))
    ...     ignore_case: bool = Option("-i ignore case")
    ...     temperature: float = Option("set the initial temperature", default=75.0)
    ...
    >>> options = Options(Program, synopsis="program [options] infile")
    >>> options.parse(["-i", "--temperature=60", "data.txt"])
    ['data.txt']
"""
import copy
import inspect
from collections.abc import MutableSequence
from typing import NamedTuple, Any

from .utils import Unset, UnsetType


class Group(NamedTuple):
    """
    marker for the first option of a named group.

    - name: group title shown in usage (unique across a registry).
    - unpublicized: hide the whole group from the default usage message.
    """
    name: str
    unpublicized: bool = False


class Option:
    """
    Marker declaring a class attribute as a command-line option.

    Parameters
    - doc: str (positional-only)
      "[-<c> ][<type> ]description": an optional one-character short name, an
      optional type name override between angle brackets, then the description.
    - type: the storage type. When omitted it is taken from the attribute's
      annotation, then from the type of the default.
    - default: the initial value of the field (None means "no value").
    - aliases: extra names, each starting with '-' or '--'.
    - unpublicized: parse normally but leave out of the default usage message.
    - group: str | Group, opens a new option group at this attribute.

    Notes
    - the attribute name is captured through __set_name__ (representation only;
      scan() reads names from the class namespace).
    - list defaults are copied when bound to instances, so instances never share
      their lists.
    """
    __slots__ = ("doc", "type", "default", "aliases", "unpublicized", "group", "name")

    def __init__(self, doc, /, type=Unset, default=None, *, aliases=(), unpublicized=False, group=Unset):
        if not isinstance(doc, str):
            raise TypeError("option doc must be a string")
        if isinstance(aliases, str):
            raise TypeError("option aliases must be an iterable of strings, not a string")
        if isinstance(group, str):
            group = Group(group)
        elif not isinstance(group, Group | UnsetType | None):
            raise TypeError("option group must be a string or a Group")
        self.doc = doc
        self.type = type
        self.default = default
        self.aliases = tuple(aliases)
        self.unpublicized = bool(unpublicized)
        self.group = group or None
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name

    def __repr__(self):
        return "Option(%r, name=%r)" % (self.doc, self.name)


class Binding:
    """
    read/write capability over the storage of one option.

    the registry and the parser only ever hold bindings; the storage stays owned
    by the declaring program.
    """
    __slots__ = ()

    def get(self):
        raise NotImplementedError

    def set(self, value, /):
        raise NotImplementedError

    def append(self, value, /):
        """
        add one element to list-shaped storage.
        """
        storage = self.get()
        if not isinstance(storage, MutableSequence):
            raise TypeError("cannot append to %s storage" % type(storage).__name__)
        storage.append(value)


class AttributeBinding(Binding):
    __slots__ = ("target", "name")

    def __init__(self, target, name, /):
        self.target = target
        self.name = name

    def get(self):
        return getattr(self.target, self.name)

    def set(self, value, /):
        setattr(self.target, self.name, value)

    def __repr__(self):
        return "AttributeBinding(%s.%s)" % (_label(self.target), self.name)


class ItemBinding(Binding):
    __slots__ = ("mapping", "key")

    def __init__(self, mapping, key, /):
        self.mapping = mapping
        self.key = key

    def get(self):
        return self.mapping.get(self.key)

    def set(self, value, /):
        self.mapping[self.key] = value

    def __repr__(self):
        return "ItemBinding(%r)" % (self.key,)


class Declaration(NamedTuple):
    """
    normalized description of one declared option, as supplied to the registry.
    """
    identifier: str
    doc: str
    type: Any
    binding: Binding
    aliases: tuple[str, ...] = ()
    unpublicized: bool = False
    group: Group | None = None
    source: str = ""
    public: bool = True


def _label(target):
    return target.__qualname__ if isinstance(target, type) else type(target).__qualname__


def _markers(cls):
    """
    the Option markers of a class, in declaration order.

    a class scanned as a static source has its markers replaced by their
    defaults; the markers are kept under __options__ so it can be scanned again.
    """
    try:
        return cls.__dict__["__options__"]
    except KeyError:
        return tuple((name, value) for name, value in vars(cls).items() if isinstance(value, Option))


def _annotations(cls):
    return inspect.get_annotations(cls, eval_str=True)


def scan(source, /):
    """
    discover the options declared by a class or an instance.

    parameters
    - source: type | object
      • a class: its own class attributes are the storage (static options).
      • an instance: attributes of the instance are the storage; markers are
        read from its class. A value already present on the instance (set in
        __init__, for example) is kept as the initial value.

    returns
    - list[Declaration] in declaration order.

    side effects
    - storage is initialized with each marker's default (lists are copied for
      instances so every instance owns its lists).
    """
    static = isinstance(source, type)
    cls = source if static else type(source)
    markers = _markers(cls)
    annotations = _annotations(cls) if markers else {}

    declarations = []
    for name, marker in markers:
        if static:
            if "__options__" not in cls.__dict__:
                setattr(cls, name, marker.default)
        elif name not in getattr(source, "__dict__", {}):
            default = marker.default
            setattr(source, name, copy.copy(default) if isinstance(default, MutableSequence) else default)

        declared = marker.type
        if declared is Unset:
            declared = annotations.get(name, Unset)
        if declared is Unset and marker.default is not None:
            declared = type(marker.default)

        declarations.append(Declaration(
            identifier=name,
            doc=marker.doc,
            type=declared,
            binding=AttributeBinding(source, name),
            aliases=marker.aliases,
            unpublicized=marker.unpublicized,
            group=marker.group,
            source=cls.__qualname__,
            public=not name.startswith("_"),
        ))

    if static and "__options__" not in cls.__dict__:
        cls.__options__ = markers
    return declarations


__all__ = (
    "Group",
    "Option",
    "Binding",
    "AttributeBinding",
    "ItemBinding",
    "Declaration",
    "scan",
)
