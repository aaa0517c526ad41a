import math

import pytest

from akcompass.vector import (
    FMAX,
    CompassError,
    Layout,
    Vec3,
    buf_shift,
    init_buffer,
    rotate,
)


def test_init_buffer_all_initial():
    buf = init_buffer(5)
    assert len(buf) == 5
    assert all(v.is_initial() for v in buf)
    assert all(tuple(v) == (FMAX, FMAX, FMAX) for v in buf)


def test_init_buffer_entries_independent():
    buf = init_buffer(3)
    buf[0].x = 1.0
    assert buf[1].x == FMAX


@pytest.mark.parametrize("size", [0, -1])
def test_init_buffer_rejects_nonpositive(size):
    with pytest.raises(CompassError):
        init_buffer(size)


def test_is_initial_partial():
    assert Vec3(1.0, FMAX, 2.0).is_initial()
    assert not Vec3(1.0, 2.0, 3.0).is_initial()


def test_buf_shift_moves_towards_end():
    buf = [Vec3(i, i, i) for i in range(5)]
    buf_shift(buf, 2)
    assert [v.x for v in buf] == [0, 1, 0, 1, 2]
    assert len(buf) == 5


def test_buf_shift_does_not_alias():
    buf = [Vec3(i, 0, 0) for i in range(3)]
    buf_shift(buf, 1)
    buf[0].x = 99.0
    assert buf[1].x == 0


def test_buf_shift_full_length():
    buf = [Vec3(i, 0, 0) for i in range(3)]
    buf_shift(buf, 3)
    assert [v.x for v in buf] == [0, 1, 2]


@pytest.mark.parametrize("shift", [0, -1, 4])
def test_buf_shift_rejects_bad_shift(shift):
    buf = [Vec3() for _ in range(3)]
    with pytest.raises(CompassError):
        buf_shift(buf, shift)


def test_rotate_pat1_is_identity():
    v = Vec3(1.5, -2.0, 3.25)
    assert rotate(Layout.PAT1, v) == v


def test_rotate_pat2_follows_definition():
    v = Vec3(1.0, 2.0, 3.0)
    assert rotate(Layout.PAT2, v) == Vec3(v.y, -v.x, v.z)


@pytest.mark.parametrize(
    "layout", [Layout.PAT3, Layout.PAT5, Layout.PAT6, Layout.PAT7, Layout.PAT8]
)
def test_rotate_involutions(layout):
    v = Vec3(1.0, -2.0, 3.0)
    assert rotate(layout, rotate(layout, v)) == v


def test_rotate_pat2_and_pat4_are_inverse():
    v = Vec3(4.0, 5.0, -6.0)
    assert rotate(Layout.PAT4, rotate(Layout.PAT2, v)) == v


def test_rotate_pat2_four_times_identity():
    v = Vec3(4.0, 5.0, -6.0)
    out = v
    for _ in range(4):
        out = rotate(Layout.PAT2, out)
    assert out == v


@pytest.mark.parametrize("layout", list(Layout)[1:])
def test_rotate_preserves_norm(layout):
    v = Vec3(3.0, -4.0, 12.0)
    r = rotate(layout, v)
    assert math.isclose(math.hypot(*r), math.hypot(*v))


def test_rotate_accepts_int_and_does_not_mutate():
    v = Vec3(1.0, 2.0, 3.0)
    assert rotate(3, v) == rotate(Layout.PAT3, v)
    assert v == Vec3(1.0, 2.0, 3.0)


@pytest.mark.parametrize("layout", [Layout.PAT_INVALID, 9, -1])
def test_rotate_rejects_invalid(layout):
    with pytest.raises(CompassError):
        rotate(layout, Vec3(1.0, 2.0, 3.0))