"""
Command-line tokenizer for when only a flat string is available.

tokenize() splits on whitespace, keeping quoted spans together. Unlike
shlex.split, quote characters stay in the token and nothing is escaped: the
output is meant to be handed to the parser exactly as a shell would have
passed argv to a program that echoes its own quoting.

    >>> tokenize("a 'b c' d")
    ['a', "'b c'", 'd']
"""

from .faults import QuotingError

_QUOTES = ("'", '"')


def tokenize(raw, /):
    """
    split a raw command line into argv-style tokens.

    rules
    - leading and trailing whitespace is ignored; inner runs of whitespace
      separate tokens and collapse.
    - a ' or " opens a span copied verbatim (quotes included) until the same
      quote character appears again; an unterminated span is closed at the end
      of the input.
    - no escape processing anywhere.
    - empty (or blank) input yields [].
    """
    if not isinstance(raw, str):
        raise TypeError("tokenize() argument must be a string")

    text = raw.strip()
    tokens = []
    token = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            close = text.find(char, index + 1)
            if close < 0:
                token.append(text[index:])
                token.append(char)
                index = length
                continue
            token.append(text[index:close + 1])
            index = close + 1
        elif char.isspace():
            tokens.append("".join(token))
            token.clear()
            while index < length and text[index].isspace():
                index += 1
        else:
            token.append(char)
            index += 1
    if token:
        tokens.append("".join(token))
    return tokens


def render_option(name, value=None, /):
    """
    render one applied option as a token tokenize() reads back unchanged.

    - no value: the name alone.
    - a value without spaces is attached as-is ('name=value').
    - otherwise the value is wrapped in single quotes, or in double quotes when
      it holds a single quote.

    raises QuotingError when the value holds a space and both quote characters.
    """
    if value is None:
        return name
    if " " not in value:
        return "%s=%s" % (name, value)
    for quote in _QUOTES:
        if quote not in value:
            return "%s=%s%s%s" % (name, quote, value, quote)
    raise QuotingError(
        "cannot quote the value %r of option %s" % (value, name),
        option=name,
        value=value,
        hint="avoid mixing spaces with both ' and \" in one value",
    )


__all__ = (
    "tokenize",
    "render_option",
)
