"""Loading and saving of the magnetometer offset setting file."""

from __future__ import annotations

import os
import re
from typing import Union

from akcompass.vector import CompassError, Vec3

PathLike = Union[str, "os.PathLike[str]"]

_NAMES = ("HO.x", "HO.y", "HO.z")

_NAME = re.compile(r"\s*(\S{1,63})")
_EQUALS = re.compile(r"\s*=")
_NUMBER = re.compile(
    r"\s*([-+]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _parse_entry(text: str, pos: int) -> tuple[str, float, int]:
    name_match = _NAME.match(text, pos)
    if name_match is None:
        raise CompassError("missing parameter name")
    eq_match = _EQUALS.match(text, name_match.end())
    if eq_match is None:
        raise CompassError(f"missing '=' after {name_match.group(1)!r}")
    num_match = _NUMBER.match(text, eq_match.end())
    if num_match is None:
        raise CompassError(f"missing value for {name_match.group(1)!r}")
    return name_match.group(1), float(num_match.group(1)), num_match.end()


def load_parameters(path: PathLike) -> Vec3:
    """Read the magnetic offset; entries must appear as HO.x, HO.y, HO.z."""
    try:
        with open(path, encoding="utf-8") as stream:
            text = stream.read()
    except OSError as exc:
        raise CompassError(f"cannot read {os.fspath(path)!r}: {exc}") from exc

    values = []
    pos = 0
    for expected in _NAMES:
        name, value, pos = _parse_entry(text, pos)
        if name != expected:
            raise CompassError(f"expected {expected!r}, found {name!r}")
        values.append(value)
    return Vec3(*values)


def save_parameters(path: PathLike, offset: Vec3) -> None:
    """Write the magnetic offset in the format read by :func:`load_parameters`."""
    content = "".join(
        f"{name} = {value:f}\n" for name, value in zip(_NAMES, offset)
    )
    try:
        with open(path, "w", encoding="utf-8") as stream:
            stream.write(content)
    except OSError as exc:
        raise CompassError(f"cannot write {os.fspath(path)!r}: {exc}") from exc