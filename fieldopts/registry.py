"""
Option registry: the descriptors of a program, their names and their groups.

A registry is built once from declaration units (one unit per declaring class
or instance, in the order given) and never changes afterwards. Construction
either succeeds completely or raises a DeclarationError; there is no partially
built registry.

Invariants
- every name (short, long in both spellings, aliases) resolves to exactly one
  descriptor.
- grouping is all-or-nothing: the first declaration decides. When grouped, the
  first declaration of every unit opens a group and group names are unique.
"""
import logging
from types import MappingProxyType
from typing import NamedTuple

from .declarations import scan
from .descriptors import build_descriptor
from .faults import AccessError, GroupingError, NameCollisionError

logger = logging.getLogger(__name__)


class GroupInfo(NamedTuple):
    """
    one named group and its descriptors, in declaration order.
    """
    name: str
    unpublicized: bool
    descriptors: tuple

    @property
    def publicized(self):
        """
        whether the group shows up in the default usage message.
        """
        return not self.unpublicized and any(not descriptor.unpublicized for descriptor in self.descriptors)


class Registry:
    """
    Indexed, immutable collection of option descriptors.

    Parameters
    - units: sequence of declaration sequences, one per declaring unit.
    - config: Config (dash style and long-name display).
    """
    __slots__ = ("config", "_descriptors", "_names", "_groups")

    def __init__(self, units, config, /):
        self.config = config
        descriptors = []
        groups = {}
        grouped = None

        for unit in units:
            current = None
            for index, declaration in enumerate(unit):
                logger.debug("considering %s.%s (%r)", declaration.source, declaration.identifier, declaration.doc)
                if not declaration.public:
                    raise AccessError(
                        "option field %s.%s is not public" % (declaration.source, declaration.identifier),
                        identifier=declaration.identifier,
                        source=declaration.source,
                    )

                marker = declaration.group
                if grouped is None:
                    grouped = marker is not None
                if not grouped:
                    if marker is not None:
                        raise GroupingError(
                            "group %r opened at %s.%s, but the first option %s is not in a group" % (
                                marker.name,
                                declaration.source,
                                declaration.identifier,
                                descriptors[0].qualname,
                            ),
                            identifier=declaration.identifier,
                            group=marker.name,
                        )
                else:
                    if index == 0 and marker is None:
                        raise GroupingError(
                            "options are grouped, but the first option of %s (%s) does not open a group" % (
                                declaration.source or "its unit",
                                declaration.identifier,
                            ),
                            identifier=declaration.identifier,
                            source=declaration.source,
                        )
                    if marker is not None:
                        if marker.name in groups:
                            raise GroupingError(
                                "group %r is declared twice (again at %s.%s)" % (
                                    marker.name,
                                    declaration.source,
                                    declaration.identifier,
                                ),
                                identifier=declaration.identifier,
                                group=marker.name,
                            )
                        current = groups[marker.name] = (marker, [])

                descriptor = build_descriptor(declaration, config, group=current[0].name if grouped else None)
                descriptors.append(descriptor)
                if grouped:
                    current[1].append(descriptor)

        self._descriptors = tuple(descriptors)
        self._groups = MappingProxyType({
            name: GroupInfo(name, marker.unpublicized, tuple(members))
            for name, (marker, members) in groups.items()
        })
        self._names = MappingProxyType(self._index())
        logger.debug("registry built: %d option(s), %d group(s)", len(self._descriptors), len(self._groups))

    def _index(self):
        names = {}
        prefix = self.config.prefix
        for descriptor in self._descriptors:
            # the hyphen and underscore spellings coincide for single-word identifiers
            spellings = list(dict.fromkeys((prefix + descriptor.identifier.replace("_", "-"), prefix + descriptor.identifier)))
            if descriptor.short_name is not None:
                spellings.insert(0, "-" + descriptor.short_name)
            spellings.extend(descriptor.aliases)
            for name in spellings:
                if (other := names.get(name)) is descriptor:
                    raise NameCollisionError(
                        "option name %s appears twice in %s" % (name, descriptor.qualname),
                        name=name,
                        identifier=descriptor.identifier,
                        other=descriptor.identifier,
                    )
                if other is not None:
                    raise NameCollisionError(
                        "option name %s of %s is already used by %s" % (name, descriptor.qualname, other.qualname),
                        name=name,
                        identifier=descriptor.identifier,
                        other=other.identifier,
                    )
                names[name] = descriptor
        return names

    @classmethod
    def build(cls, *sources, config):
        """
        scan every source (class or instance) in order and build the registry.
        """
        return cls([scan(source) for source in sources], config)

    def lookup(self, name, /):
        """
        the descriptor registered under name (dash prefix included), or None.
        """
        return self._names.get(name)

    @property
    def descriptors(self):
        return self._descriptors

    @property
    def groups(self):
        return self._groups

    @property
    def grouped(self):
        return bool(self._groups)

    @property
    def names(self):
        return self._names

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self):
        return len(self._descriptors)

    def __contains__(self, name):
        return name in self._names

    def __repr__(self):
        return "Registry(%d option(s), grouped=%s)" % (len(self._descriptors), self.grouped)


__all__ = (
    "GroupInfo",
    "Registry",
)
