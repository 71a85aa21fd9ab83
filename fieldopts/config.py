"""
Parsing and presentation policy for one Options instance.

Every switch that changes how a command line is read or how text is rendered
lives here, scoped to the registry it was built with; nothing is process-wide.

Parsing
- single_dash: long options take the form '-name' instead of '--name'.
- parse_after_arg: keep looking for options after the first positional
  argument (when False, the first positional ends option processing).
- space_separated_lists: a value given to a list option is split on whitespace
  and every piece is appended.
- use_dashes: usage text advertises 'multi-word' instead of 'multi_word'
  (both spellings are always accepted on the command line).

Presentation (terminating entry points only)
- shell: print faults and exit instead of raising them.
- colorful: style faults with the palette (see __styles__ in faults).
- fancy: wrap faults in a rich panel.
"""
from typing import NamedTuple


class Config(NamedTuple):
    single_dash: bool = False
    parse_after_arg: bool = True
    space_separated_lists: bool = False
    use_dashes: bool = True
    shell: bool = True
    colorful: bool = True
    fancy: bool = False

    @property
    def prefix(self):
        """
        dash prefix of long names under this policy.
        """
        return "-" if self.single_dash else "--"

    def replace(self, **changes):
        unknown = changes.keys() - set(self._fields)
        if unknown:
            raise TypeError("unknown config field(s): %s" % ", ".join(sorted(unknown)))
        return self._replace(**changes)


__all__ = (
    "Config",
)
