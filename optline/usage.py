"""
Usage text rendering.

render(commandline) builds a rich Text made of the optional banner followed
by one line per option, in declaration order:

    usage: grep [OPTIONS] PATTERN [FILE...]
      -h, --help              display this help and exit
      -m, --max-count=<int>   stop after NUM matches
      -I, --include=<string>  include path (multiple)
      --mode[=<string>]       scan mode (default: fast)

Palette keys
- banner, option-name, flag-name, metavar, help, annotation

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.text import Text


def render(commandline, /, *, colorful=True):
    styles = defaultdict(str, {
        "banner": "bold #00E6FF",  # CYAN → signature info color
        "option-name": "bold #00E6FF",  # CYAN for options with an argument
        "flag-name": "bold #22C55E",  # GREEN for presence-only options
        "metavar": "bold #FFD600",  # AMBER for argument placeholders
        "help": "#9CA3AF",  # Muted gray
        "annotation": "italic #737373",  # Dim gray for (default: ...) and friends
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def names(descriptor):
        style = styler("option-name" if descriptor.has_argument else "flag-name")
        # short name first, as in "-m, --max-count"
        return Text(", ").join(Text(name, style) for name in reversed(descriptor.names))

    def metavar(descriptor):
        if not descriptor.has_argument:
            return Text()
        placeholder = Text.assemble("=", ("<%s>" % descriptor.typename, styler("metavar")))
        if descriptor.is_argument_optional:
            return Text.assemble("[", placeholder, "]")
        return placeholder

    def annotations(descriptor):
        notes = []
        if descriptor.has_default:
            notes.append("(default: %s)" % descriptor.default_value)
        if descriptor.is_required:
            notes.append("(required)")
        if descriptor.is_multiple:
            notes.append("(multiple)")
        return Text(" ".join(notes), styler("annotation"))

    output = Text()
    if commandline.banner:
        output.append(commandline.banner, styler("banner"))

    padding = 2  # Leading spaces before the names column
    columns = [(Text.assemble(names(descriptor), metavar(descriptor)), descriptor) for descriptor in commandline]
    width = max((len(column) for column, _ in columns), default=0) + 2

    for column, descriptor in columns:
        line = Text(" " * padding).append(column)

        description = Text(" ").join(filter(None, (
            Text(descriptor.help_text or "", styler("help")),
            annotations(descriptor),
        )))
        if description:
            line.append(" " * (width - len(column))).append(description)

        if output:
            output.append("\n")
        output.append(line)

    return output


__all__ = (
    "render",
)
