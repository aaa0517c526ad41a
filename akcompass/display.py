"""Console messages, result formatting and the interactive main menu."""

from __future__ import annotations

import enum
import logging
import sys
from typing import Sequence, TextIO

from akcompass.ak8963 import YPR_DATA_SIZE
from akcompass.vector import CompassError

_log = logging.getLogger(__name__)

VERSION_MESSAGE = "AK8963 Daemon for Open Source v20120329."
DEBUG_ENABLED = True
DEBUG_LEVEL = 2

MENU_TEXT = (
    " --------------------  AK8963 Console Application -------------------- \n"
    "   1. Start measurement. \n"
    "   2. Self-test. \n"
    "   Q. Quit application. \n"
    " --------------------------------------------------------------------- \n"
    " Please select a number.\n"
    "   ---> "
)


class MenuMode(enum.IntEnum):
    """Operation selected from the main menu."""

    ERROR = 0
    MEASURE = 1
    SELF_TEST = 2
    QUIT = 3


def _revert_acc(value: int) -> float:
    return value * 9.8 / 720.0


def _revert_mag(value: int) -> float:
    return value * 0.06


def _revert_ori(value: int) -> float:
    return value / 64.0


def start_message() -> list[str]:
    """Log and return the startup banner lines."""
    lines = [
        VERSION_MESSAGE,
        f"Debug: {'ON' if DEBUG_ENABLED else 'OFF'}",
        f"Debug level: {DEBUG_LEVEL}",
    ]
    for line in lines:
        _log.info(line)
    return lines


def end_message(ret: int) -> str:
    """Log and return the closing message carrying the exit value ``ret``."""
    message = f"AK8963 for Android end ({ret})."
    _log.info(message)
    return message


def format_result(buf: Sequence[int]) -> str:
    """Render a packed result buffer as human-readable console lines.

    The orientation line shows the magnetometer status, as the packed buffer
    carries no separate orientation status.
    """
    if len(buf) != YPR_DATA_SIZE:
        raise CompassError(f"expected {YPR_DATA_SIZE} values, got {len(buf)}")
    acc = ", ".join(f"{_revert_acc(v):8.2f}" for v in buf[1:4])
    mag = ", ".join(f"{_revert_mag(v):8.2f}" for v in buf[5:8])
    ori = ", ".join(f"{_revert_ori(v):8.2f}" for v in buf[9:12])
    return (
        f"Flag={buf[0]}\n"
        f"Acc({buf[4]}):{acc}\n"
        f"Mag({buf[8]}):{mag}\n"
        f"Ori({buf[8]})={ori}\n"
    )


def parse_menu_choice(text: str) -> MenuMode:
    """Map a menu answer to a mode; only the first character is examined."""
    first = text[:1]
    if first == "1":
        return MenuMode.MEASURE
    if first == "2":
        return MenuMode.SELF_TEST
    if first in ("Q", "q"):
        return MenuMode.QUIT
    return MenuMode.ERROR


def menu_main(stdin: TextIO | None = None, stdout: TextIO | None = None) -> MenuMode:
    """Show the main menu on ``stdout`` and read the selection from ``stdin``."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stdout.write(MENU_TEXT)
    stdout.flush()
    answer = stdin.readline(9)
    stdout.write("\n")
    return parse_menu_choice(answer)