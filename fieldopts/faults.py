"""
fieldopts faults (construction errors and parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the package
  raises. Codes are grouped by domain so logs and searches stay predictable.
- DeclarationError: construction-time faults. They signal a programming mistake
  in the declaring program (bad doc grammar, unsupported type, name collision,
  inconsistent grouping, private field) and are never recovered from.
- ArgError: parse-time faults. They signal a bad command line and are meant to
  be reported to the user; each one knows how to render itself with rich.
- trigger(): central entry point to surface a parse fault (raise it, or print it
  and terminate, depending on shell mode).

UX goals
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - declarations (211xx)
      • MALFORMED_DOC, UNSUPPORTED_TYPE, NAME_COLLISION, GROUPING, ACCESS
    - parsing (221xx)
      • UNKNOWN_OPTION, MISSING_VALUE, INVALID_VALUE, NEGATED_ASSIGNMENT, QUOTING
    - rendering (231xx)
      • GROUP_SELECTION

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- declaration errors (21xxx) ---
    MALFORMED_DOC      = 21101
    UNSUPPORTED_TYPE   = 21102
    NAME_COLLISION     = 21103
    GROUPING           = 21104
    ACCESS             = 21105

    # --- parse errors (22xxx) ---
    UNKNOWN_OPTION     = 22101
    MISSING_VALUE      = 22102
    INVALID_VALUE      = 22103
    NEGATED_ASSIGNMENT = 22104
    QUOTING            = 22111

    # --- rendering errors (23xxx) ---
    GROUP_SELECTION    = 23101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class DeclarationError(Exception):
    """
    a declaration cannot be turned into an option.

    raised while the registry is being built; no partially built registry is
    ever returned. the options mapping carries whatever context the raiser had
    (identifier, source, name, ...).
    """
    code = FaultCode.MALFORMED_DOC

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)


class MalformedDocError(DeclarationError):
    code = FaultCode.MALFORMED_DOC
class UnsupportedTypeError(DeclarationError):
    code = FaultCode.UNSUPPORTED_TYPE
class NameCollisionError(DeclarationError):
    code = FaultCode.NAME_COLLISION
class GroupingError(DeclarationError):
    code = FaultCode.GROUPING
class AccessError(DeclarationError):
    code = FaultCode.ACCESS


class GroupSelectionError(ValueError):
    """
    a usage request named a group that cannot be rendered.
    """
    code = FaultCode.GROUP_SELECTION


class ArgError(Exception):
    """
    a command line cannot be applied to the declared options.

    options recognized by the renderer
    - option: the option name as typed by the user (e.g., '--threads').
    - value: the raw text that failed, when there is one.
    - title: short lowercase title shown in the header.
    - hint: one actionable sentence.
    - shell, colorful, fancy: presentation switches (see trigger()).
    - epilog: text printed after the fault (custom message or usage).
    - console: where to print in shell mode (defaults to stderr).
    """
    code = FaultCode.INVALID_VALUE
    title = "invalid command line"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message or "")
        self.message = message or ""
        self.options = MappingProxyType(options)

    @property
    def option(self):
        return self.options.get("option")

    @property
    def value(self):
        return self.options.get("value")

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "epilog": "#737373",  # dim footer gray
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        prog = getattr(main, "__prog__", None) or os.path.basename(sys.argv[0]) or "fieldopts"

        header = Text.assemble(
            "[ ",
            text(prog, styler("prog-name")),
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.options.get("title", self.title).title(), styler("error-title")),
            " ]"
        )
        parts = [text(self.message, styler("error-message"))]
        if hint := self.hint:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            body = Panel(Group(*parts), title=header, title_align="left")
        else:
            body = Group(header, *parts)

        if epilog := self.options.get("epilog"):
            return Group(body, Text(""), text(epilog, styler("epilog")))
        return body

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ArgError):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"
class MissingValueError(ArgError):
    code = FaultCode.MISSING_VALUE
    title = "missing value"
class InvalidValueError(ArgError):
    code = FaultCode.INVALID_VALUE
    title = "invalid value"
class NegatedAssignmentError(ArgError):
    code = FaultCode.NEGATED_ASSIGNMENT
    title = "negated option with a value"
class QuotingError(ArgError):
    code = FaultCode.QUOTING
    title = "unquotable value"


def trigger(fault, /, **options):
    """
    surface a parse fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgError).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode the fault is rendered on the console and the process exits
      with status 1; otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "DeclarationError",
    "MalformedDocError",
    "UnsupportedTypeError",
    "NameCollisionError",
    "GroupingError",
    "AccessError",
    "GroupSelectionError",
    "ArgError",
    "UnknownOptionError",
    "MissingValueError",
    "InvalidValueError",
    "NegatedAssignmentError",
    "QuotingError",
    "trigger",
)
