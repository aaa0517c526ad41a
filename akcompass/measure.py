"""Measurement helpers: loop timing, sensor intervals, result packing and self-test."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from akcompass.ak8963 import NUM_SENSORS, SENSOR_DATA_SIZE, YPR_DATA_SIZE, SensorFlag, convert_raw
from akcompass.vector import CompassError, Vec3

SELFTEST_MIN_X = -100
SELFTEST_MAX_X = 100
SELFTEST_MIN_Y = -100
SELFTEST_MAX_Y = 100
SELFTEST_MIN_Z = -1000
SELFTEST_MAX_Z = -300

# Value written to the ASTC register to enable the self-test field.
SELFTEST_ASTC = 0x40

_NS_PER_SEC = 1_000_000_000


@dataclass(slots=True)
class SensorData:
    """One sensor output: three components and an accuracy status."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    status: int = 0


def _convert_acc(value: float) -> int:
    return int(value * 1)


def _convert_mag(value: float) -> int:
    return int(value * 100)


def _convert_ori(value: float) -> int:
    return int(value * 64)


def calc_sleep(end_ns: int, start_ns: int, minimum_ns: int) -> int:
    """Nanoseconds left to sleep so one loop lasts ``minimum_ns``; never negative."""
    return max(0, minimum_ns - (end_ns - start_ns))


def get_interval(delays: Sequence[int]) -> tuple[SensorFlag, int]:
    """Enabled sensors and the shortest loop period from per-sensor delays.

    ``delays`` holds the accelerometer, magnetometer and orientation delays in
    nanoseconds; a negative delay means the sensor is disabled.  The period
    never exceeds one second.
    """
    if len(delays) != NUM_SENSORS:
        raise CompassError(f"expected {NUM_SENSORS} delays, got {len(delays)}")
    flag = SensorFlag.NONE
    minimum = _NS_PER_SEC
    for index, delay in enumerate(delays):
        if delay >= 0:
            flag |= SensorFlag(1 << index)
            minimum = min(minimum, delay)
    return flag, minimum


def output_buffer(
    flag: int, acc: SensorData, mag: SensorData, ori: SensorData
) -> list[int]:
    """Pack the sensor outputs into the integer layout handed to the driver."""
    buf = [
        int(flag),
        _convert_acc(acc.x),
        _convert_acc(acc.y),
        _convert_acc(acc.z),
        int(acc.status),
        _convert_mag(mag.x),
        _convert_mag(mag.y),
        _convert_mag(mag.z),
        int(mag.status),
        _convert_ori(ori.x),
        _convert_ori(ori.y),
        _convert_ori(ori.z),
    ]
    assert len(buf) == YPR_DATA_SIZE
    return buf


def _signed16(hi: int, low: int) -> int:
    value = ((hi << 8) + low) & 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


def raw_to_magnetic(data: Sequence[int]) -> tuple[tuple[int, int, int], int]:
    """Decode the ST1..ST2 register block into signed readings and a status.

    The status is ST1 combined with ST2 by bitwise or.
    """
    if len(data) < SENSOR_DATA_SIZE:
        raise CompassError(
            f"expected {SENSOR_DATA_SIZE} bytes of sensor data, got {len(data)}"
        )
    mag = (
        _signed16(data[2], data[1]),
        _signed16(data[4], data[3]),
        _signed16(data[6], data[5]),
    )
    return mag, data[0] | data[7]


def evaluate_self_test(data: Sequence[int], asa: Sequence[int]) -> Vec3:
    """Check a self-test measurement against the chip's limits.

    Returns the adjusted reading when every axis is in range and raises
    :class:`CompassError` otherwise.
    """
    if len(data) < SENSOR_DATA_SIZE:
        raise CompassError(
            f"expected {SENSOR_DATA_SIZE} bytes of sensor data, got {len(data)}"
        )
    if len(asa) < 3:
        raise CompassError(f"expected 3 sensitivity values, got {len(asa)}")

    hdata = Vec3(
        convert_raw(data[2], data[1], asa[0]),
        convert_raw(data[4], data[3], asa[1]),
        convert_raw(data[6], data[5], asa[2]),
    )
    limits = (
        (hdata.x, SELFTEST_MIN_X, SELFTEST_MAX_X),
        (hdata.y, SELFTEST_MIN_Y, SELFTEST_MAX_Y),
        (hdata.z, SELFTEST_MIN_Z, SELFTEST_MAX_Z),
    )
    if any(value < low or high < value for value, low, high in limits):
        raise CompassError(
            f"self-test failed: {hdata.x:8.2f}, {hdata.y:8.2f}, {hdata.z:8.2f}"
        )
    return hdata