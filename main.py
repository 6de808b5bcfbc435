import sys

from rich.pretty import pprint

from optline import *

commandline = CommandLine(
    [
        ":help,h|display this help and exit",
        ":recursive,r|equivalent to --directories=recurse",
        ":max-count,m=int|stop after NUM matches",
        "*:include,I=string|search only files that match the pattern",
        ":color?bool,true|use markers to highlight the matching strings",
    ],
    banner="usage: grep [OPTIONS] PATTERN [FILE...]",
    shell=True,
)


if __name__ == '__main__':
    config = commandline.parse(sys.argv)
    if config.get("help"):
        commandline.usage()
    else:
        pprint(config)
        pprint(commandline.remaining)
