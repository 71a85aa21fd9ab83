"""
fieldopts facade: declare, parse, report.

Options ties the pieces together for one program:
- scans the declaring classes/instances once (see fieldopts.declarations),
- builds the registry under a Config,
- parses command lines (argv lists, raw strings or sys.argv),
- renders usage, settings, command lines and descriptions,
- offers parse_or_exit() for programs that just want to print and quit.

Quick example
    >>> from fieldopts import Options, Option
    >>> class Program:
    ...     verbose: bool = Option("-v print progress")
    ...     jobs: int = Option("-j <n> parallel jobs", default=1)
    ...
    >>> options = Options(Program, synopsis="program [options] files...")
    >>> options.parse("-v --jobs=4 a.txt b.txt")
    ['a.txt', 'b.txt']
    >>> Program.jobs
    4
"""
import sys

from rich.console import Console
from rich.text import Text

from . import formatting
from .config import Config
from .declarations import scan
from .faults import ArgError, trigger
from .logs import enable_debug_logging
from .parser import Parser
from .registry import Registry
from .tokens import tokenize
from .utils import Unset, nullify


class Options:
    """
    Command-line options of one program.

    Parameters
    - *sources: classes (static options) and/or instances, scanned in order.
    - synopsis: str, shown as 'Usage: <synopsis>' above the usage message.
    - config: Config; the remaining keywords override its fields
      (single_dash, parse_after_arg, space_separated_lists, use_dashes,
      shell, colorful, fancy).

    Raises
    - DeclarationError (and subclasses) when a declaration cannot become an option.
    """

    def __init__(self, *sources, synopsis=Unset, config=Unset, **policy):
        config = nullify(config, Config()).replace(**policy)
        self.synopsis = nullify(synopsis)
        self._units = tuple(scan(source) for source in sources)
        self._build(config)

    def _build(self, config):
        self._registry = Registry(self._units, config)
        self._parser = Parser(self._registry)

    @property
    def config(self):
        return self._registry.config

    @property
    def registry(self):
        return self._registry

    def configure(self, **changes):
        """
        replace config fields and rebuild the registry under the new config.

        the option names may change (single_dash, use_dashes); default texts are
        snapshotted again from the current values. returns the new Config.
        """
        config = self.config.replace(**changes)
        self._build(config)
        return config

    def set_parse_after_arg(self, value, /):
        return self.configure(parse_after_arg=bool(value))

    def set_single_dash(self, value, /):
        return self.configure(single_dash=bool(value))

    @property
    def options_string(self):
        """
        every option applied so far, as typed ('name[=value]', space separated).
        """
        return self._parser.options_string

    def parse(self, args=Unset, /):
        """
        apply a command line to the declared options.

        parameters
        - args: list of tokens, a raw string (split with tokenize()), or omitted
          for sys.argv[1:].

        returns
        - list[str] of the positional arguments, in order.

        raises
        - ArgError (and subclasses) on the first bad token.
        """
        if args is Unset:
            args = sys.argv[1:]
        elif isinstance(args, str):
            args = tokenize(args)
        else:
            args = list(args)
            if not all(isinstance(arg, str) for arg in args):
                raise TypeError("parse() arguments must be strings")
        return self._parser.parse(args)

    def parse_or_exit(self, args=Unset, /, *, message=Unset, console=Unset):
        """
        parse(), but a bad command line is printed and ends the process.

        the fault is followed by message when given, otherwise by the usage
        message. exit status is 1. with config.shell disabled the fault is raised
        instead (carrying the same epilog).
        """
        try:
            return self.parse(args)
        except ArgError as fault:
            epilog = self._usage_text() if message is Unset else message
            options = dict(
                shell=self.config.shell,
                colorful=self.config.colorful,
                fancy=self.config.fancy,
                epilog=epilog,
            )
            if console is not Unset:
                options["console"] = console
            trigger(fault, **options)

    def usage(self, *groups, show_unpublicized=False):
        return formatting.usage(self._registry, *groups, show_unpublicized=show_unpublicized)

    def _usage_text(self, show_unpublicized=False):
        text = self.usage(show_unpublicized=show_unpublicized)
        if self.synopsis is not None:
            text = "Usage: %s\n%s" % (self.synopsis, text)
        return text

    def print_usage(self, file=Unset, /, *, show_unpublicized=False):
        """
        print 'Usage: <synopsis>' (when there is one) and the usage message.

        file may be a rich Console or a text stream; stdout by default.
        """
        if isinstance(file, Console):
            console = file
        else:
            console = Console(file=nullify(file), highlight=False)
        console.print(Text(self._usage_text(show_unpublicized)), soft_wrap=True)

    def settings(self, *, show_unpublicized=False):
        return formatting.settings(self._registry, show_unpublicized=show_unpublicized)

    def command_line(self, *, show_unpublicized=False):
        return formatting.command_line(self._registry, show_unpublicized=show_unpublicized)

    def describe(self):
        return formatting.describe(self._registry)

    enable_debug_logging = staticmethod(enable_debug_logging)

    def __str__(self):
        return self.describe()

    def __repr__(self):
        return "Options(%d option(s), synopsis=%r)" % (len(self._registry), self.synopsis)


__all__ = (
    "Options",
)
