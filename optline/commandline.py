"""
optline command line: match argv against compiled option descriptors.

What this module provides
- CommandLine: owns an ordered set of Descriptors (compiled from description
  lines) and parses argv-like token lists into a configuration mapping:
  • options are written under their config key (True for presence-only
    options, the validated string otherwise, a list for '*' options);
  • every other token is kept, in order, as a remaining argument;
  • required options and defaults are settled once all tokens are consumed.

Quick start
    import sys
    from optline import CommandLine

    commandline = CommandLine([
        ":help,h|display this help and exit",
        ":max-count,m=int|stop after NUM matches",
        "*:include,I=string|include path",
        ":mode?string,fast|scan mode",
    ], banner="usage: grep [OPTIONS] PATTERN [FILE...]")

    config = commandline.parse(sys.argv)
    if config.get("help"):
        commandline.usage()
    files = commandline.remaining

Token rules
- '--' ends option processing: every later token is a remaining argument.
- '-' alone, and tokens not starting with '-', are remaining arguments.
- '--name', '-name', '--x' and '-x' are all looked up by long or short name;
  '--name=value' attaches a value to the option.
- no bundling: '-abc' is the option named 'abc', not '-a -b -c'.

Failure model
- the first problem aborts the parse (raised, or rendered and exited in shell
  mode). Writes are staged and only reach the configuration mapping when the
  whole argv has been accepted, so a failed parse leaves it untouched.
"""
import copy
import difflib
import os.path
import sys
from collections import deque
from collections.abc import Iterable, MutableMapping

from rich.console import Console

from . import usage
from .descriptors import Descriptor
from .faults import *
from .utils import *


class CommandLine:
    """
    Option matching engine.

    Parameters
    - descriptions: Iterable[str | Descriptor]
      One description line (or already compiled Descriptor) per option.
      Insertion order is kept for help output.
    - banner: Unset | str
      First line of the usage text.
    - offset: int
      Index of the first token to scan; 1 skips the program name in argv[0].
    - shell: bool
      When True, parse errors are rendered on stderr (after the usage text)
      and the process exits with status 1; otherwise they are raised.
    - colorful: bool
      Enable colors in rendered faults and usage text.
    - fancy: bool
      Render faults inside a panel.

    Raises
    - OptionSyntaxError: a description line is malformed.
    - DuplicatedOptionError: two options share a long or short name.
    """

    descriptors = mirror("descriptors")
    offset = mirror("offset")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(
            self,
            descriptions,
            /,
            *,
            banner=Unset,
            offset=1,
            shell=False,
            colorful=True,
            fancy=False
    ):
        if isinstance(descriptions, str) or not isinstance(descriptions, Iterable):
            raise TypeError("CommandLine() argument must be an iterable of description lines")
        if not isinstance(offset, int) or isinstance(offset, bool):
            raise TypeError("CommandLine() 'offset' must be an integer")
        if offset < 0:
            raise ValueError("CommandLine() 'offset' cannot be negative")

        self._descriptors = []
        self._switches = {}
        for description in descriptions:
            descriptor = Descriptor(description)
            for name in filter(None, (descriptor.long_name, descriptor.short_name)):
                if name in self._switches:
                    raise DuplicatedOptionError(
                        "option name %r of %r is already used by %r" % (
                            name, descriptor.source, self._switches[name].source
                        ),
                        source=descriptor.source,
                        title="duplicated option",
                        code=FaultCode.DUPLICATED_OPTION,
                        hint="give every option its own long and short names",
                        docs=getdoc(FaultCode.DUPLICATED_OPTION),
                    )
                self._switches[name] = descriptor
            self._descriptors.append(descriptor)
        self._descriptors = tuple(self._descriptors)

        self._offset = offset
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._prog = None
        self._remaining = []

        self.banner = banner

    @property
    def banner(self):
        """
        First line of the usage text, or None.
        """
        return self._banner

    @banner.setter
    def banner(self, banner):
        if not isinstance(banner, str | UnsetType | None):
            raise TypeError("banner must be a string")
        self._banner = coalesce(banner) or None

    @property
    def remaining(self):
        """
        Non-option tokens of the last successful parse, in argv order.
        """
        return list(self._remaining)

    def __len__(self):
        return len(self._descriptors)

    def __iter__(self):
        return iter(self._descriptors)

    def __getitem__(self, name, /):
        """
        Look a descriptor up by long or short name ("--name", "-n", "name" or "n").
        """
        if not isinstance(name, str):
            raise TypeError("option names must be strings")
        return self._switches[name[2:] if name.startswith("--") else name.removeprefix("-")]

    def __repr__(self):
        return "command-line(descriptors=%r, banner=%r)" % (self._descriptors, self._banner)

    def __rich_repr__(self):
        yield "descriptors", self._descriptors
        yield "banner", self._banner

    def __rich__(self):
        return usage.render(self, colorful=self._colorful)

    def __str__(self):
        return self.format_usage()

    def format_usage(self):
        """
        Return the usage text as plain (uncolored) text.
        """
        return usage.render(self, colorful=False).plain

    def usage(self, file=Unset):
        """
        Print the usage text to `file` (stdout by default).
        """
        console = Console(file=coalesce(file, sys.stdout), no_color=not self._colorful, highlight=False)
        console.print(usage.render(self, colorful=self._colorful), soft_wrap=True)

    def trigger(self, fault, /, **options):
        """
        Surface a parse fault with this command line's runtime options.

        In shell mode, errors are preceded by the usage text on stderr.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        if self._shell and isinstance(fault, OptionFault):
            self.usage(sys.stderr)
        trigger(
            fault,
            **options,
            tool=self,
            prog=self._prog,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful
        )

    def _resolve_token(self, token, position):
        """
        Split an option token into (descriptor, spelled name, attached value).

        - '--name=value' → (descriptor, '--name', 'value')
        - '-x'           → (descriptor, '-x', None)
        - the attached value is '' when '=' is given with nothing after it.
        """
        input, equal, value = token.partition("=")
        name = input[2:] if input.startswith("--") else input[1:]

        try:
            descriptor = self._switches[name]
        except KeyError:
            suggestions = difflib.get_close_matches(name, self._switches.keys(), 5)
            try:
                hint = "did you mean %r?" % ("-" * (1 + (len(suggestions[0]) > 1)) + suggestions[0])
            except IndexError:
                hint = "see the usage text for all available options"
            return self.trigger(UnknownOptionError(
                "unknown option %r at %s position" % (input, ordinal(position)),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                input=name,
                token=token,
                index=position,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_OPTION)
            ))

        return descriptor, input, value if equal else None

    def _getvalue(self, descriptor, input, value, tokens, position):
        """
        Decide the value of one matched option, consuming argv if needed.

        Returns (value, consumed) where consumed tells whether the following
        token was taken as the argument.
        """
        consumed = False

        # presence-only option: its value is True and nothing may be attached
        if not descriptor.has_argument:
            if value is not None:
                self.trigger(FlagAssignmentError(
                    "option %r at %s position does not take a value" % (input, ordinal(position)),
                    title="option cannot take a value",
                    code=FaultCode.FLAG_ASSIGNMENT,
                    input=descriptor.long_name,
                    index=position,
                    value=value,
                    hint="remove everything from '=' (for example: %s)" % input,
                    docs=getdoc(FaultCode.FLAG_ASSIGNMENT)
                ))
            return True, consumed

        if value is None:
            if descriptor.is_argument_optional:
                # optional argument: only the attached form is recognized
                return descriptor.default_value, consumed
            if not tokens:
                self.trigger(MissingArgumentError(
                    "option %r at %s position requires an argument of type %s" % (
                        input, ordinal(position), descriptor.typename
                    ),
                    title="missing argument",
                    code=FaultCode.MISSING_ARGUMENT,
                    input=descriptor.long_name,
                    index=position,
                    hint="pass it after a space or after '=' (for example: %s=<%s>)" % (input, descriptor.typename),
                    docs=getdoc(FaultCode.MISSING_ARGUMENT)
                ))
            value = tokens.popleft()
            consumed = True
        elif not value:
            self.trigger(EmptyInlineValueWarning(
                "empty inline value for option %r at %s position" % (input, ordinal(position)),
                title="empty inline value",
                code=FaultCode.EMPTY_INLINE_VALUE,
                input=descriptor.long_name,
                index=position,
                hint="add a value after '=' (for example: %s=<%s>)" % (input, descriptor.typename),
                docs=getdoc(FaultCode.EMPTY_INLINE_VALUE)
            ))

        if not descriptor.check(value):
            self.trigger(InvalidArgumentError(
                "invalid %s value %r for option %r at %s position" % (
                    descriptor.typename, value, input, ordinal(position)
                ),
                title="invalid argument",
                code=FaultCode.INVALID_ARGUMENT,
                input=descriptor.long_name,
                index=position,
                value=value,
                hint={
                    "int": "use a base-10 integer such as 42 or -7",
                    "bool": "use one of 0, 1, true or false",
                }.get(descriptor.typename, "check the usage text"),
                docs=getdoc(FaultCode.INVALID_ARGUMENT)
            ))

        return value, consumed

    def parse(self, argv, config=Unset, /):
        """
        Parse `argv` and write the option values into `config`.

        Parameters
        - argv: Sequence[str]
          Tokens to parse; scanning starts at index `offset` (1 by default,
          skipping the program name).
        - config: MutableMapping (default: a new dict)
          Receives one entry per matched or defaulted option.

        Returns
        - config, updated.

        Raises (non-shell mode)
        - UnknownOptionError, FlagAssignmentError, MissingArgumentError,
          InvalidArgumentError, MissingOptionError.

        Notes
        - remaining arguments are available through `remaining` afterwards.
        - the same CommandLine may parse many times, but not concurrently.
        """
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("parse() first argument must be a sequence of strings")
        argv = list(argv)
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("parse() first argument must be a sequence of strings")
        config = coalesce(config, {})
        if not isinstance(config, MutableMapping):
            raise TypeError("parse() second argument must be a mutable mapping")

        self._prog = os.path.basename(argv[0]) if self._offset and argv else None

        tokens = deque(argv[self._offset:])
        position = 0
        remaining = []
        values = {}
        given = set()

        while tokens:
            token = tokens.popleft()
            position += 1

            # end of options: everything after '--' is an operand
            if token == "--":
                remaining.extend(tokens)
                break

            if not token.startswith("-") or token == "-":
                remaining.append(token)
                continue

            descriptor, input, value = self._resolve_token(token, position)
            value, consumed = self._getvalue(descriptor, input, value, tokens, position)

            key = descriptor.config_key
            if descriptor.is_multiple:
                if not isinstance(values.get(key), list):
                    values[key] = []
                values[key].append(value)
            else:
                if descriptor in given:
                    self.trigger(OverriddenOptionWarning(
                        "option %r at %s position overrides its previous value" % (input, ordinal(position)),
                        title="option given twice",
                        code=FaultCode.OVERRIDDEN_OPTION,
                        input=descriptor.long_name,
                        index=position,
                        hint="the last occurrence wins; use '*' in the description to keep every value",
                        docs=getdoc(FaultCode.OVERRIDDEN_OPTION)
                    ))
                values[key] = value
            given.add(descriptor)

            position += consumed

        # settle absent options: defaults first come, required ones fail
        for descriptor in self._descriptors:
            if descriptor in given:
                continue
            if descriptor.has_default:
                if descriptor.config_key not in values:
                    default = descriptor.default_value
                    values[descriptor.config_key] = [default] if descriptor.is_multiple else default
            elif descriptor.is_required:
                self.trigger(MissingOptionError(
                    "missing required option %r" % descriptor.names[0],
                    title="missing required option",
                    code=FaultCode.MISSING_OPTION,
                    input=descriptor.long_name,
                    hint="add %s to the command line" % " or ".join(descriptor.names),
                    docs=getdoc(FaultCode.MISSING_OPTION)
                ))

        for key, value in values.items():
            config[key] = copy.copy(value)
        self._remaining = remaining
        return config


__all__ = (
    "CommandLine",
)
