"""Command-line options of the compass daemon and its exit codes."""

from __future__ import annotations

import enum
import getopt
from dataclasses import dataclass
from typing import Sequence

from akcompass.vector import CompassError, Layout

_SPACE = " \t\n\v\f\r"


class ExitCode(enum.IntEnum):
    """Values the daemon returns when it stops."""

    OK = 0
    INITDEVICE = -1
    OPTPARSE = -2
    SELF_TEST = -3
    READ_FUSE = -4
    INIT = -5
    GETOPEN_STAT = -6
    STARTCLONE = -7
    GETCLOSE_STAT = -8


@dataclass(frozen=True)
class Options:
    """Settings taken from the command line."""

    layout: Layout
    console: bool = False
    dbgzone: int = 0


def _strtol(text: str) -> int:
    """Parse a leading integer with automatic base; 0 when nothing parses."""
    s = text.lstrip(_SPACE)
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]

    if s[:2].lower() == "0x" and s[2:3] and s[2] in "0123456789abcdefABCDEF":
        base, digits, s = 16, "0123456789abcdef", s[2:]
    elif s[:1] == "0":
        base, digits = 8, "01234567"
    else:
        base, digits = 10, "0123456789"

    value = 0
    for char in s:
        index = digits.find(char.lower())
        if index < 0:
            break
        value = value * base + index
    return sign * value


def _layout_from(value: int) -> Layout | None:
    if Layout.PAT1 <= value <= Layout.PAT8:
        return Layout(value)
    return None


def parse_options(argv: Sequence[str], driver_layout: int | None = None) -> Options:
    """Parse the daemon's arguments (without the program name).

    ``-m N`` selects the layout pattern (only the first character counts and
    values outside 1..8 are ignored), ``-s`` enables console mode and ``-z N``
    sets the debug zone.  When no valid layout is given, ``driver_layout`` is
    used if it is a valid pattern; otherwise :class:`CompassError` is raised.
    """
    try:
        opts, _ = getopt.getopt(list(argv), "sm:z:")
    except getopt.GetoptError as exc:
        raise CompassError(f"Invalid argument: {exc}") from exc

    layout: Layout | None = None
    console = False
    dbgzone = 0
    for opt, arg in opts:
        if opt == "-m":
            if arg:
                chosen = _layout_from(ord(arg[0]) - ord("0"))
                if chosen is not None:
                    layout = chosen
        elif opt == "-s":
            console = True
        elif opt == "-z":
            dbgzone = _strtol(arg)

    if layout is None and driver_layout is not None:
        layout = _layout_from(driver_layout)
    if layout is None:
        raise CompassError("No layout is specified.")
    return Options(layout=layout, console=console, dbgzone=dbgzone)