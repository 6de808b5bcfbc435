"""
Argument value validators.

Each validator is a pure predicate over the raw string taken from argv:
- integer: the whole string is a base-10 signed integer ("42", "-7", "+3").
- boolean: one of "0", "1", "true", "false" (case-insensitive).
- string: anything goes.

check(value, typename) dispatches on the grammar's type token ("int", "bool",
"string"); a missing type (None) means the option takes no value, which
trivially conforms.
"""
import re


def integer(value, /):
    # re.ASCII keeps non-ASCII digits out; int() would accept them.
    return re.fullmatch(r"[+-]?\d+", value, re.ASCII) is not None


def boolean(value, /):
    return value.lower() in ("0", "1", "true", "false")


def string(value, /):
    return True


_validators = {
    "int": integer,
    "bool": boolean,
    "string": string,
    None: string,
}


def check(value, typename=None, /):
    """
    Tell whether `value` conforms to the declared argument type.

    Parameters
    - value: str
      Raw argument string, exactly as found on the command line.
    - typename: "int" | "bool" | "string" | None
      Type token of the option grammar.

    Raises
    - TypeError: when value is not a string.
    - ValueError: when typename is not a known type token.
    """
    if not isinstance(value, str):
        raise TypeError("check() first argument must be a string")
    try:
        validator = _validators[typename]
    except KeyError:
        raise ValueError("check() unknown argument type %r" % typename) from None
    return validator(value)


__all__ = (
    "integer",
    "boolean",
    "string",
    "check",
)
