"""
Command-line parser: walk argv, resolve option names, coerce and store values.

Token classification
- '--'                       → ends option processing (discarded).
- '-…' while options are on  → an option: '<name>[=<value>]'.
- anything else              → a positional, returned in order.

Value extraction
- an inline '=value' is used as-is (it may be empty).
- boolean options without an inline value are set to true; '--no-<name>'
  sets them to false.
- every other option takes the next token as its value, whatever it looks like.

',-' inside an option token separates two options ('--a=1,--b=2'); a ','
at the very start of a token is dropped.

The first fault aborts the parse. Values written before it stay written.
"""
import collections
import difflib
import logging

from .faults import MissingValueError, NegatedAssignmentError, UnknownOptionError
from .kinds import Kind, coerce, pieces
from .tokens import render_option

logger = logging.getLogger(__name__)


class Parser:
    """
    Stateless per call except for the options string, which accumulates every
    option applied by this parser (see options_string).

    Parameters
    - registry: Registry to resolve names against.
    - config: Config (dash style, parse_after_arg, space_separated_lists);
      defaults to the registry's own.
    """
    __slots__ = ("registry", "config", "_applied")

    def __init__(self, registry, config=None, /):
        self.registry = registry
        self.config = config or registry.config
        self._applied = []

    @property
    def options_string(self):
        """
        every applied option so far, as it would be typed ('name[=value]', space separated).
        """
        return " ".join(self._applied)

    def parse(self, argv, /):
        """
        apply argv to the registry's bindings and return the positionals.

        raises
        - UnknownOptionError, MissingValueError, InvalidValueError,
          NegatedAssignmentError, QuotingError.
        """
        pending = collections.deque(argv)
        positionals = []
        ignore = False

        while pending:
            token = pending.popleft()
            if token == "--":
                logger.debug("'--': options are no longer recognized")
                ignore = True
                continue
            if not ignore and token.startswith(",-"):
                token = token[1:]
            if ignore or not token.startswith("-"):
                logger.debug("positional %r", token)
                positionals.append(token)
                if not self.config.parse_after_arg:
                    ignore = True
                continue

            if (split := token.find(",-", 1)) > 0:
                pending.appendleft(token[split + 1:])
                token = token[:split]

            name, equals, value = token.partition("=")
            self._apply(name, value if equals else None, token, pending)

        return positionals

    def _apply(self, name, value, token, pending):
        descriptor = self.registry.lookup(name)
        negated = False
        if descriptor is None:
            descriptor = self._negation(name)
            if descriptor is None:
                raise self._unknown(name, token)
            if value is not None:
                raise NegatedAssignmentError(
                    "negated option %s cannot take a value (got %r)" % (name, value),
                    option=name,
                    value=value,
                    hint="use %s%s=%s instead" % (self.config.prefix, descriptor.long_name, value),
                )
            negated = True

        self._applied.append(render_option(name, value))

        if negated:
            value = "false"
        elif value is None:
            if descriptor.kind.requires_value:
                if not pending:
                    raise MissingValueError(
                        "option %s requires an argument" % token,
                        option=name,
                        hint="give it a value: %s=<%s> or %s <%s>" % (name, descriptor.type_name, name, descriptor.type_name),
                    )
                value = pending.popleft()
                self._applied[-1] = render_option(name, value)
            else:
                value = "true"

        if descriptor.is_list:
            for piece in pieces(value, space_separated=self.config.space_separated_lists):
                element = coerce(descriptor.kind, piece, option=name)
                logger.debug("%s: append %r", descriptor.qualname, element)
                descriptor.binding.append(element)
        else:
            converted = coerce(descriptor.kind, value, option=name)
            logger.debug("%s: set %r", descriptor.qualname, converted)
            descriptor.binding.set(converted)

    def _negation(self, name):
        negative = self.config.prefix + "no-"
        if not name.startswith(negative):
            return None
        descriptor = self.registry.lookup(self.config.prefix + name[len(negative):])
        if descriptor is None or descriptor.kind.tag is not Kind.BOOLEAN:
            return None
        # a boolean named "long" has no negated form
        if descriptor.identifier == "long":
            return None
        return descriptor

    def _unknown(self, name, token):
        suggestions = difflib.get_close_matches(name, self.registry.names.keys(), 5)
        if suggestions:
            hint = "did you mean %r?" % suggestions[0]
        else:
            hint = "see the usage message for the known options"
        return UnknownOptionError(
            "unknown option name %r in arg %r" % (name, token),
            option=name,
            suggestions=tuple(suggestions),
            hint=hint,
        )


def parse(registry, argv, /):
    """
    parse argv against a registry with a throwaway parser.
    """
    return Parser(registry).parse(argv)


__all__ = (
    "Parser",
    "parse",
)
