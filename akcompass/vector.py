"""Three-component vectors, sensor layouts and fixed-size vector buffers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Iterator, MutableSequence

# Single precision limits; the maximum value marks an unset buffer entry.
FMAX = 3.4028234663852886e38
FMIN = 1.1754943508222875e-38
EPSILON = 1.1920928955078125e-07
INIT_VALUE = FMAX

PI = 3.141592654

HDATA_SIZE = 32
ADATA_SIZE = 32

# Number of magnetic/acceleration samples averaged for direction and vectors.
HNAVE_D = 4
ANAVE_D = 4
HNAVE_V = 8
ANAVE_V = 8

SETTING_FILE = "/data/misc/akmdfs.txt"


class CompassError(Exception):
    """Raised when a compass computation cannot be carried out."""


@dataclass(slots=True)
class Vec3:
    """A mutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def copy(self) -> Vec3:
        return replace(self)

    def is_initial(self) -> bool:
        """Whether any component still holds the initial marker value."""
        return any(component >= FMAX for component in self)

    @classmethod
    def initial(cls) -> Vec3:
        return cls(INIT_VALUE, INIT_VALUE, INIT_VALUE)


class Layout(enum.IntEnum):
    """Mounting pattern of the sensor chip on the board."""

    PAT_INVALID = 0
    PAT1 = 1  # obverse: 1st pin is right down
    PAT2 = 2  # obverse: 1st pin is left down
    PAT3 = 3  # obverse: 1st pin is left top
    PAT4 = 4  # obverse: 1st pin is right top
    PAT5 = 5  # reverse: 1st pin is left down (from top view)
    PAT6 = 6  # reverse: 1st pin is left top (from top view)
    PAT7 = 7  # reverse: 1st pin is right top (from top view)
    PAT8 = 8  # reverse: 1st pin is right down (from top view)


def init_buffer(size: int) -> list[Vec3]:
    """Return a buffer of ``size`` vectors, all set to the initial marker."""
    if size <= 0:
        raise CompassError(f"buffer size must be positive, got {size}")
    return [Vec3.initial() for _ in range(size)]


def buf_shift(buffer: MutableSequence[Vec3], shift: int) -> None:
    """Shift the buffer contents ``shift`` places towards the end, in place.

    The first ``shift`` entries keep their previous values.
    """
    length = len(buffer)
    if shift < 1 or length < shift:
        raise CompassError(f"invalid shift {shift} for buffer of length {length}")
    buffer[shift:] = [vec.copy() for vec in buffer[: length - shift]]


def rotate(layout: Layout | int, vec: Vec3) -> Vec3:
    """Return ``vec`` transformed from the chip layout to the device frame."""
    try:
        pattern = Layout(layout)
    except ValueError:
        raise CompassError(f"unknown layout {layout!r}") from None

    x, y, z = vec
    match pattern:
        case Layout.PAT1:
            return Vec3(x, y, z)
        case Layout.PAT2:
            return Vec3(y, -x, z)
        case Layout.PAT3:
            return Vec3(-x, -y, z)
        case Layout.PAT4:
            return Vec3(-y, x, z)
        case Layout.PAT5:
            return Vec3(-x, y, -z)
        case Layout.PAT6:
            return Vec3(y, x, -z)
        case Layout.PAT7:
            return Vec3(x, -y, -z)
        case Layout.PAT8:
            return Vec3(-y, -x, -z)
    raise CompassError(f"unknown layout {layout!r}")