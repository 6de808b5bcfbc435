"""
optline faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- OptionFault / OptionWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased way.
- Two error families:
  • OptionSyntaxError: a description line does not follow the option grammar.
    Raised while the command line is built, before any parsing happens.
  • CommandLineError: the user-provided argv does not match the descriptors.
    Raised (or rendered, in shell mode) while parsing.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Integration
- CommandLine.parse() builds faults and calls CommandLine.trigger(fault, **ctx).
- In non-shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, they are rendered via rich on stderr.
"""
import copy
import inspect
import sys
import warnings
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
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - grammar (101xx)
      • MALFORMED_DESCRIPTION, DUPLICATED_OPTION
    - parsing (111xx)
      • UNKNOWN_OPTION, FLAG_ASSIGNMENT, MISSING_ARGUMENT,
        INVALID_ARGUMENT, MISSING_OPTION
    - warnings (121xx)
      • EMPTY_INLINE_VALUE, OVERRIDDEN_OPTION
    """
    # --- grammar errors (10xxx) ---
    MALFORMED_DESCRIPTION       = 10101
    DUPLICATED_OPTION           = 10102

    # --- parse errors (11xxx) ---
    UNKNOWN_OPTION              = 11112
    FLAG_ASSIGNMENT             = 11113
    MISSING_ARGUMENT            = 11117
    INVALID_ARGUMENT            = 11124
    MISSING_OPTION              = 11125

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE          = 12111
    OVERRIDDEN_OPTION           = 12113

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette):
    """
    Shared rich rendering for errors and warnings.

    Layout: "[ prog — code | title ]", then the message, then a hint arrow.
    Every option is looked up leniently so that faults raised outside a
    command line (no tool, no title) still render.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", options.get("prog") or "optline"), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if code is not None else "-", styler("code")),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))
    hint = Text.assemble(text(" → ", styler("hint-arrow")), text(options.get("hint"), styler("hint")))

    if fancy:
        return Panel(Group(message, hint), title=header, title_align="left", width=console.width - 4)

    return Group(header, message, hint)


class OptionFault(Exception):
    """
    Base of every error raised by optline.

    The message is the human-readable diagnostic; `options` is a read-only
    bag of rendering/context data (code, title, hint, shell, colorful, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class OptionSyntaxError(OptionFault, ValueError):
    """
    A description line does not follow the option grammar.

    Attributes
    - source: the offending description line, verbatim.
    - error: the diagnostic message (same as `message`).
    """

    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **options)
        self.source = options.get("source")
        self.error = message


class DuplicatedOptionError(OptionSyntaxError): ...


class CommandLineError(OptionFault):
    """
    The argv given to CommandLine.parse() does not match the declared options.
    """


class UnknownOptionError(CommandLineError): ...
class FlagAssignmentError(CommandLineError): ...
class MissingArgumentError(CommandLineError): ...
class InvalidArgumentError(CommandLineError): ...
class MissingOptionError(CommandLineError): ...


class OptionWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self):
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(OptionWarning): ...
class OverriddenOptionWarning(OptionWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised and warnings are emitted through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "OptionFault",
    "OptionSyntaxError",
    "DuplicatedOptionError",
    "CommandLineError",
    "UnknownOptionError",
    "FlagAssignmentError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "MissingOptionError",
    "OptionWarning",
    "EmptyInlineValueWarning",
    "OverriddenOptionWarning",
    "trigger",
    "getdoc",
)
