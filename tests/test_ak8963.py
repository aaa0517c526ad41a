import struct

import pytest

from akcompass.ak8963 import (
    convert_raw,
    decompose,
    status_error,
)
from akcompass.vector import CompassError, Vec3, init_buffer


@pytest.mark.parametrize("status, expected", [(0x01, False), (0x03, False), (0x00, True), (0x09, True), (0x08, True)])
def test_status_error(status, expected):
    assert status_error(status) is expected


@pytest.mark.parametrize("hi, low", [(0x00, 0x10), (0xFF, 0xFF), (0x80, 0x00), (0x7F, 0xFF), (0x12, 0x34)])
def test_convert_raw_unit_asa_matches_little_endian_int16(hi, low):
    expected = struct.unpack("<h", bytes([low, hi]))[0]
    assert convert_raw(hi, low, 128) == expected


def test_convert_raw_scales_with_asa():
    base = convert_raw(0x01, 0x00, 128)
    assert convert_raw(0x01, 0x00, 0) == base * 0.5
    assert convert_raw(0x01, 0x00, 256) == base * 1.5


def test_decompose_pushes_adjusted_sample():
    buf = init_buffer(3)
    decompose([10, -20, 30], 0x01, (128, 128, 128), buf)
    assert buf[0] == Vec3(10, -20, 30)
    assert buf[1].is_initial()


def test_decompose_shifts_previous_samples():
    buf = init_buffer(3)
    decompose([1, 2, 3], 0x01, (128, 128, 128), buf)
    decompose([4, 5, 6], 0x01, (128, 128, 128), buf)
    assert buf[0] == Vec3(4, 5, 6)
    assert buf[1] == Vec3(1, 2, 3)
    assert buf[2].is_initial()


def test_decompose_applies_asa_per_axis():
    buf = init_buffer(2)
    decompose([100, 100, 100], 0x01, (0, 128, 256), buf)
    assert buf[0].x == 100 * 0.5
    assert buf[0].y == 100 * 1.0
    assert buf[0].z == 100 * 1.5


@pytest.mark.parametrize("status", [0x00, 0x09])
def test_decompose_rejects_error_status(status):
    buf = init_buffer(2)
    with pytest.raises(CompassError):
        decompose([1, 2, 3], status, (128, 128, 128), buf)
    assert buf[0].is_initial()