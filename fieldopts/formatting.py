"""
Usage and settings text.

usage()        aligned option synopses, one block per group when grouped.
settings()     the live value of every option, one per line.
command_line() the live values as a command line the parser reads back.
describe()     one diagnostic line per option (names, field, declaring unit).

Every function reads the registry and the live bindings; none of them writes.
"""
from .faults import GroupSelectionError
from .tokens import render_option
from .utils import stringify

LIST_HELP = "[+] marked option can be specified multiple times"


def synopsis(descriptor, config, /):
    """
    '-s --long=<type>' (short part only when declared) plus ' [+]' for lists.
    """
    text = "%s%s=<%s>" % (config.prefix, descriptor.long_name, descriptor.type_name)
    if descriptor.short_name is not None:
        text = "-%s %s" % (descriptor.short_name, text)
    if descriptor.is_list:
        text += " [+]"
    return text


def _visible(descriptors, show_unpublicized):
    return [descriptor for descriptor in descriptors if show_unpublicized or not descriptor.unpublicized]


def _select(registry, names, show_unpublicized):
    if not registry.grouped:
        if names:
            raise GroupSelectionError("this registry does not have any option groups defined")
        return None
    if not names:
        return [
            group for group in registry.groups.values()
            if show_unpublicized or group.publicized
        ]
    selected = []
    for name in names:
        if (group := registry.groups.get(name)) is None:
            raise GroupSelectionError("invalid option group: %s" % name)
        if not show_unpublicized and not any(not descriptor.unpublicized for descriptor in group.descriptors):
            raise GroupSelectionError("group does not contain any publicized options: %s" % name)
        selected.append(group)
    return selected


def _lines(descriptors, config, width):
    for descriptor in descriptors:
        default = " [default %s]" % descriptor.default_text if descriptor.default_text else ""
        yield "  %-*s - %s%s" % (width, synopsis(descriptor, config), descriptor.description, default)


def usage(registry, /, *groups, show_unpublicized=False):
    """
    the usage message of a registry.

    parameters
    - groups: names of the groups to render (grouped registries only); none
      means every group that is not unpublicized and has a publicized option.
    - show_unpublicized: include unpublicized options and groups.

    returns
    - str, lines joined with '\\n'; '' when nothing is selected.

    raises
    - GroupSelectionError for group names on an ungrouped registry, unknown
      names, and groups without any publicized option.
    """
    config = registry.config
    selected = _select(registry, groups, show_unpublicized)
    if selected is None:
        blocks = [(None, _visible(registry.descriptors, show_unpublicized))]
    else:
        blocks = [(group.name, _visible(group.descriptors, show_unpublicized)) for group in selected]

    rendered = [descriptor for _, descriptors in blocks for descriptor in descriptors]
    if not blocks:
        return ""
    width = max((len(synopsis(descriptor, config)) for descriptor in rendered), default=0)

    lines = []
    for name, descriptors in blocks:
        if name is not None:
            lines.append("\n%s:" % name)
        lines.extend(_lines(descriptors, config, width))

    text = "\n".join(lines)
    if any(descriptor.is_list for descriptor in rendered):
        text += "\n\n" + LIST_HELP
    return text


def settings(registry, /, *, show_unpublicized=False):
    """
    '<long name> = <current value>' for every option, names padded to one column.
    """
    descriptors = _visible(registry.descriptors, show_unpublicized)
    width = max((len(descriptor.long_name) for descriptor in descriptors), default=0)
    return "\n".join(
        "%-*s = %s" % (width, descriptor.long_name, stringify(descriptor.binding.get()))
        for descriptor in descriptors
    )


def command_line(registry, /, *, show_unpublicized=False):
    """
    the current values as one command line ('--name=value' per value, list
    elements repeated, unset values left out).

    parsing the result (after tokenize()) into fresh storage reproduces the
    current values, as long as they contain neither whitespace nor quote
    characters. a value with whitespace is rendered quoted (--name='a b') and,
    since tokenize() keeps quote characters, it is read back as 'a b' with
    the quotes.
    """
    prefix = registry.config.prefix
    tokens = []
    for descriptor in _visible(registry.descriptors, show_unpublicized):
        value = descriptor.binding.get()
        name = prefix + descriptor.long_name
        for element in value if descriptor.is_list else (value,):
            if element is not None:
                tokens.append(render_option(name, stringify(element)))
    return " ".join(tokens)


def describe(registry, /):
    """
    one line per option: '[-s ]<prefix><long> field <source>.<identifier>'.
    """
    lines = []
    for descriptor in registry.descriptors:
        names = "%s%s" % (registry.config.prefix, descriptor.long_name)
        if descriptor.short_name is not None:
            names = "-%s %s" % (descriptor.short_name, names)
        lines.append("%s field %s" % (names, descriptor.qualname))
    return "\n".join(lines)


__all__ = (
    "LIST_HELP",
    "synopsis",
    "usage",
    "settings",
    "command_line",
    "describe",
)
