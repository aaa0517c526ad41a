"""Azimuth, pitch and roll from magnetic and acceleration vector buffers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from akcompass.vector import PI, CompassError, Vec3
from akcompass.vnorm import buffer_average


@dataclass(frozen=True, slots=True)
class Orientation:
    """Device orientation in degrees.

    Azimuth is rotation around Z in [0, 360); pitch is rotation around X and
    roll is rotation around Y.
    """

    azimuth: float
    pitch: float
    roll: float


def _rad2deg(rad: float) -> float:
    return rad * 180.0 / PI


def _asin(value: float) -> float:
    if math.isnan(value):
        return math.nan
    return math.asin(max(-1.0, min(1.0, value)))


def _angle(avec: Vec3) -> tuple[float, float]:
    """Pitch and roll in radians from an acceleration vector."""
    size = math.sqrt(avec.x * avec.x + avec.y * avec.y + avec.z * avec.z)
    if size == 0.0:
        return math.nan, math.nan
    return _asin(-avec.y / size), _asin(avec.x / size)


def _azimuth(hvec: Vec3, pitch: float, roll: float) -> float:
    """Azimuth in radians from a magnetic vector and tilt angles."""
    sin_p = math.sin(pitch)
    cos_p = math.cos(pitch)
    sin_r = math.sin(roll)
    cos_r = math.cos(roll)

    yh = -hvec.x * cos_r + hvec.z * sin_r
    xh = hvec.x * sin_p * sin_r + hvec.y * cos_p + hvec.z * sin_p * cos_r
    return math.atan2(yh, xh)


def direction(
    hvec: Sequence[Vec3], hnave: int, avec: Sequence[Vec3], anave: int
) -> Orientation:
    """Average the newest vectors of each buffer and compute the orientation."""
    nhvec = len(hvec)
    navec = len(avec)
    if nhvec <= 0 or navec <= 0 or hnave <= 0 or anave <= 0:
        raise CompassError("buffer sizes and average counts must be positive")
    if nhvec < hnave or navec < anave:
        raise CompassError("average count exceeds buffer size")

    have = buffer_average(hvec, hnave)
    aave = buffer_average(avec, anave)

    pitch_rad, roll_rad = _angle(aave)
    azimuth_rad = _azimuth(have, pitch_rad, roll_rad)

    azimuth = _rad2deg(azimuth_rad)
    if azimuth < 0:
        azimuth += 360.0
    return Orientation(azimuth, _rad2deg(pitch_rad), _rad2deg(roll_rad))