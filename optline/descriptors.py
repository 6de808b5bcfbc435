"""
Option descriptors.

A Descriptor is the compiled, immutable form of one option description line
(see optline.grammar for the syntax):

    >>> from optline.descriptors import Descriptor
    >>> descriptor = Descriptor("*:include,I=string|include path")
    >>> descriptor.config_key, descriptor.short_name, descriptor.is_multiple
    ('include', 'I', True)

Introspection & representation
- DescriptorType metaclass provides stable __repr__/__rich_repr__ and exposes
  the fields listed in __introspectable__ as read-only properties.
- Descriptors compare equal (and hash equal) when all their observable fields
  are equal, so compiling the same line twice gives equal descriptors.
"""
import functools
import operator
import re

from . import grammar, validators
from .grammar import ArgumentKind
from .utils import *


class DescriptorType(type):
    """
    Metaclass that turns descriptor classes into sealed, introspectable types.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the "_{name}" attribute (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Seal the resulting class against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - descriptor(config_key='include', long_name='include', short_name='I', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


class Descriptor(metaclass=DescriptorType):
    """
    Compiled description of one command-line option.

    Properties
    - config_key: str — key written into the configuration mapping (the long
      name when the description omits it).
    - long_name: str — matched as --long_name (or -long_name).
    - short_name: str | None — single character, matched as -x.
    - help_text: str | None — verbatim help from the description.
    - argument_kind: ArgumentKind — argument flags.
    - is_multiple: bool — repeated occurrences accumulate into a list.
    - is_required: bool — absence is an error unless a default exists.
    - default_value: str | None — set only when ArgumentKind.DEFAULT is.
    """

    __introspectable__ = (
        "config_key",
        "long_name",
        "short_name",
        "help_text",
        "argument_kind",
        "is_multiple",
        "is_required",
        "default_value",
    )

    def __new__(cls, description, /):
        """
        Compile `description` into a descriptor.

        Passing a Descriptor returns it unchanged (descriptors are immutable).

        Raises
        - TypeError: description is neither a string nor a Descriptor.
        - OptionSyntaxError: description does not follow the grammar.
        """
        if isinstance(description, Descriptor):
            return description

        metadata = grammar.compile(description)

        self = super().__new__(cls)
        # Bypass the immutability guard while filling the backing fields.
        for name, value in metadata.items():
            object.__setattr__(self, "_" + name, value)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError("%s objects are immutable" % type(self).__typename__)

    def __delattr__(self, name, /):
        raise AttributeError("%s objects are immutable" % type(self).__typename__)

    def __eq__(self, other, /):
        if not isinstance(other, Descriptor):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash(tuple(self.__rich_repr__()))

    @property
    def source(self):
        """The description line this descriptor was compiled from."""
        return self._source

    @property
    def has_argument(self):
        return bool(self._argument_kind & (ArgumentKind.INTEGER | ArgumentKind.BOOLEAN | ArgumentKind.STRING))

    @property
    def is_argument_optional(self):
        return bool(self._argument_kind & ArgumentKind.OPTIONAL)

    @property
    def has_default(self):
        return bool(self._argument_kind & ArgumentKind.DEFAULT)

    @property
    def typename(self):
        return self._argument_kind.typename

    @property
    def names(self):
        """
        Spelled names, long first: ("--long", "-s") or ("--long",).
        """
        if self._short_name is None:
            return ("--" + self._long_name,)
        return "--" + self._long_name, "-" + self._short_name

    def matches(self, name, /):
        """
        Tell whether a dash-stripped option name designates this descriptor.
        """
        return name == self._long_name or (self._short_name is not None and name == self._short_name)

    def check(self, value, /):
        """
        Tell whether `value` is an acceptable argument for this option.
        """
        return validators.check(value, self.typename)


__all__ = (
    "ArgumentKind",
    "Descriptor",
)

# Keep the metaclass out of star-imports; it is not part of the public API.
del DescriptorType
