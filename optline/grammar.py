r"""
Option description grammar.

Every accepted option is declared with one compact description line:

    [!][*][config_key]:long_name[,short_name][=type[,default]|?type,default][:help]

- '!' marks the option as required, '*' lets it be given several times (the
  values accumulate into a list). Both may appear, in any order.
- config_key is the key written into the configuration mapping. When omitted,
  the long name is used.
- '=type' declares a mandatory argument, '?type,default' an optional one. The
  default is mandatory for optional arguments and may be given for mandatory
  ones (it is then used when the option is absent).
- type is one of: int, bool, string.
- the help text follows the first ':' (or '|') after the names and the
  argument; it is kept verbatim.
- inside the default value, '\' escapes the next character, so defaults may
  contain ',', ':' or '|'.

Examples
    ":help|display this help and exit"
    ":recursive,r|equivalent to --directories=recurse"
    ":max-count,m=int|stop after NUM matches"
    "*:include,I=string|include path"
    "!output:out,o=string,a.out:where to write"

compile(description) turns one line into the fields of a Descriptor, or raises
OptionSyntaxError carrying the line and a diagnostic.
"""
import re
from enum import IntFlag

from . import validators
from .faults import FaultCode, OptionSyntaxError, getdoc

SYNTAX = "[!][*][config_key]:long_name[,short_name][=type[,default]|?type,default][:help]"


class ArgumentKind(IntFlag):
    """
    Argument flags of a descriptor.

    At most one of INTEGER, BOOLEAN and STRING is set; NONE means the option
    takes no argument at all. OPTIONAL always comes with DEFAULT.
    """
    NONE = 0            # no argument
    OPTIONAL = 1        # the argument may be omitted
    INTEGER = 2         # the argument is an integer
    BOOLEAN = 4         # the argument is 0, 1, false or true
    STRING = 8          # the argument is a string
    DEFAULT = 16        # there is a default value for this argument

    @property
    def typename(self):
        """
        The grammar token of the type bit ("int", "bool", "string"), or None.
        """
        for typename, kind in _types.items():
            if self & kind:
                return typename
        return None


_types = {
    "int": ArgumentKind.INTEGER,
    "bool": ArgumentKind.BOOLEAN,
    "string": ArgumentKind.STRING,
}


def _split(text, separators, /):
    """
    Split `text` on the first unescaped character found in `separators`.

    Returns (head, separator, tail); separator is "" and tail is "" when no
    unescaped separator exists. Escapes are left in place.
    """
    index = 0
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char in separators:
            return text[:index], char, text[index + 1:]
        index += 1
    return text, "", ""


def _unescape(text, /):
    return re.sub(r"\\(.)", r"\1", text, flags=re.DOTALL)


def compile(description, /):
    """
    Compile one description line into descriptor fields.

    Returns
    - dict with keys: source, config_key, long_name, short_name, help_text,
      argument_kind, is_multiple, is_required, default_value.

    Raises
    - TypeError: when description is not a string.
    - OptionSyntaxError: when the line does not follow the grammar.
    """
    if not isinstance(description, str):
        raise TypeError("compile() argument must be a string")

    def fault(message, hint="expected %r" % SYNTAX):
        return OptionSyntaxError(
            message,
            source=description,
            title="malformed option description",
            code=FaultCode.MALFORMED_DESCRIPTION,
            hint=hint,
            docs=getdoc(FaultCode.MALFORMED_DESCRIPTION),
        )

    # Leading modifiers: '!' (required) and '*' (multiple), in any order.
    required = multiple = False
    index = 0
    while index < len(description) and description[index] in "!*":
        if description[index] == "!":
            if required:
                raise fault("modifier '!' given twice in %r" % description)
            required = True
        else:
            if multiple:
                raise fault("modifier '*' given twice in %r" % description)
            multiple = True
        index += 1

    key, separator, rest = description[index:].partition(":")
    if not separator:
        raise fault(
            "missing ':' before the long name in %r" % description,
            hint="write ':name' when the config key is the long name itself"
        )

    rest, separator, help = _split(rest, ":|")
    names, marker, argument = _split(rest, "=?")

    long, alias, short = names.partition(",")
    if "," in short:
        raise fault("too many names in %r" % description, hint="give one long name and at most one short name")
    if not long:
        raise fault("missing long name in %r" % description)
    if not re.fullmatch(r"\w[\w.-]*", long):
        raise fault("invalid long name %r" % long, hint="use letters, digits, '-', '_' or '.' (without leading dashes)")
    if alias and not re.fullmatch(r"\w", short):
        raise fault("invalid short name %r, a single character is expected" % short)

    kind = ArgumentKind.NONE
    default = None
    if marker:
        typename, comma, default = _split(argument, ",")
        if set(typename) & set("=?"):
            raise fault(
                "argument declared twice in %r" % description,
                hint="use either '=type[,default]' or '?type,default'"
            )
        try:
            kind = _types[typename]
        except KeyError:
            raise fault("unknown argument type %r" % typename, hint="use one of int, bool or string") from None

        if comma:
            default = _unescape(default)
            kind |= ArgumentKind.DEFAULT
            if not validators.check(default, typename):
                raise fault("default value %r is not a valid %s" % (default, typename))
        else:
            default = None

        if marker == "?":
            if not comma:
                raise fault(
                    "optional argument of %r has no default value" % long,
                    hint="write '?%s,<default>'" % typename
                )
            kind |= ArgumentKind.OPTIONAL

    return {
        "source": description,
        "config_key": key or long,
        "long_name": long,
        "short_name": short or None,
        "help_text": help or None,
        "argument_kind": kind,
        "is_multiple": multiple,
        "is_required": required,
        "default_value": default,
    }


__all__ = (
    "SYNTAX",
    "ArgumentKind",
    "compile",
)
