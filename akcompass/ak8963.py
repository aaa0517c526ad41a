"""Constants and raw-data decoding for the AK8963 magnetometer."""

from __future__ import annotations

import enum
from typing import MutableSequence, Sequence

from akcompass.vector import CompassError, Vec3, buf_shift

I2C_NAME = "akm8963"

SENSOR_DATA_SIZE = 8
YPR_DATA_SIZE = 12
RWBUF_SIZE = 16
NUM_SENSORS = 3
BDATA_SIZE = 8

MEASUREMENT_TIME_US = 10000

HSENSE_DEFAULT = 1
HSENSE_TARGET = 0.6
ASENSE_DEFAULT = 1
ASENSE_TARGET = 1


class Mode(enum.IntEnum):
    """Operation modes of the chip."""

    POWERDOWN = 0x00
    SNG_MEASURE = 0x01
    SELF_TEST = 0x08
    FUSE_ACCESS = 0x0F


class Register(enum.IntEnum):
    """Register and fuse-ROM addresses of the chip."""

    WIA = 0x00
    INFO = 0x01
    ST1 = 0x02
    HXL = 0x03
    HXH = 0x04
    HYL = 0x05
    HYH = 0x06
    HZL = 0x07
    HZH = 0x08
    ST2 = 0x09
    CNTL1 = 0x0A
    CNTL2 = 0x0B
    ASTC = 0x0C
    TS1 = 0x0D
    TS2 = 0x0E
    I2CDIS = 0x0F
    FUSE_ASAX = 0x10
    FUSE_ASAY = 0x11
    FUSE_ASAZ = 0x12


class SensorFlag(enum.IntFlag):
    """Which sensor outputs are enabled or ready."""

    NONE = 0
    ACC = 1 << 0
    MAG = 1 << 1
    ORI = 1 << 2


def status_error(status: int) -> bool:
    """Whether the combined ST1/ST2 status reports no valid data or overflow."""
    return (status & 0x09) != 0x01


def _asa_factor(asa: int) -> float:
    return asa / 256.0 + 0.5


def convert_raw(hi: int, low: int, asa: int) -> float:
    """Combine a high and low byte into a signed reading and apply the ASA."""
    value = (((hi & 0xFFFF) << 8) + (low & 0xFFFF)) & 0xFFFF
    if value >= 0x8000:
        value -= 0x10000
    return value * _asa_factor(asa)


def decompose(
    mag: Sequence[int],
    status: int,
    asa: Sequence[int],
    buffer: MutableSequence[Vec3],
) -> None:
    """Push a sensitivity-adjusted magnetic sample onto the front of ``buffer``."""
    if status_error(status):
        raise CompassError(f"magnetometer status error: 0x{status:02X}")
    buf_shift(buffer, 1)
    buffer[0] = Vec3(
        mag[0] * _asa_factor(asa[0]),
        mag[1] * _asa_factor(asa[1]),
        mag[2] * _asa_factor(asa[2]),
    )