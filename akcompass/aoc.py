"""Automatic estimation of the magnetometer offset from collected samples."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from akcompass.vector import EPSILON, Vec3, buf_shift, init_buffer

HBUF_SIZE = 20
HOBUF_SIZE = 4
HR_TH = 10
HO_TH = 0.15

_Triple = tuple[float, float, float]


def _sub(a: Vec3, b: Vec3) -> _Triple:
    return (a.x - b.x, a.y - b.y, a.z - b.z)


def _cross(a: _Triple, b: _Triple) -> _Triple:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a: _Triple, b: _Triple) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _distance(a: Vec3, b: Vec3) -> float:
    return math.sqrt(_dot(_sub(a, b), _sub(a, b)))


def _four_points(vectors: Sequence[Vec3]) -> list[Vec3]:
    """Pick four widely spread points out of ``vectors``."""
    first = vectors[0]
    rest = vectors[1:]

    second = first
    best = 0.0
    for vec in rest:
        dist = _distance(vec, first)
        if best < dist:
            best = dist
            second = vec

    base = _sub(second, first)
    diffs = [_sub(vec, first) for vec in rest]

    third = first
    normal: _Triple = (0.0, 0.0, 0.0)
    best = 0.0
    for vec, diff in zip(rest, diffs):
        cross = _cross(base, diff)
        size = _dot(cross, cross)
        if best < size:
            best = size
            third = vec
            normal = cross

    fourth = first
    best = 0.0
    for vec, diff in zip(rest, diffs):
        height = abs(_dot(diff, normal))
        if best < height:
            best = height
            fourth = vec

    return [first, second, third, fourth]


def _sphere(points: Sequence[Vec3]) -> tuple[Vec3, float] | None:
    """Centre and radius of the sphere through four points, if well defined."""
    last = points[3]
    dif = [_sub(p, last) for p in points[:3]]
    r2 = [
        0.5 * sum(a * a - b * b for a, b in zip(p, last))
        for p in points[:3]
    ]

    a = dif[0][0] * dif[2][2] - dif[0][2] * dif[2][0]
    b = dif[0][1] * dif[2][0] - dif[0][0] * dif[2][1]
    c = dif[0][0] * dif[2][1] - dif[0][1] * dif[2][0]
    d = dif[0][0] * r2[2] - dif[2][0] * r2[0]
    e = dif[0][0] * dif[1][1] - dif[0][1] * dif[1][0]
    f = dif[1][0] * dif[0][2] - dif[0][0] * dif[1][2]
    g = dif[0][0] * r2[1] - dif[1][0] * r2[0]

    denominator = c * f + a * e
    if abs(denominator) < EPSILON:
        return None
    cz = (d * e + b * g) / denominator

    if abs(e) < EPSILON:
        return None
    cy = (f * cz + g) / e

    if abs(dif[0][0]) < EPSILON:
        return None
    cx = (r2[0] - dif[0][1] * cy - dif[0][2] * cz) / dif[0][0]

    center = Vec3(cx, cy, cz)
    return center, _distance(points[0], center)


def _mean_var(vectors: Sequence[Vec3]) -> tuple[Vec3, Vec3]:
    """Mid-range and spread of each component."""
    columns = list(zip(*vectors))
    mean = [(max(col) + min(col)) / 2.0 for col in columns]
    var = [max(col) - min(col) for col in columns]
    return Vec3(*mean), Vec3(*var)


@dataclass
class AocState:
    """Sample history and offset estimates of the automatic offset estimator."""

    hbuf: list[Vec3] = field(default_factory=lambda: init_buffer(HBUF_SIZE))
    hobuf: list[Vec3] = field(default_factory=lambda: init_buffer(HOBUF_SIZE))
    hraoc: float = 0.0

    def reset(self) -> None:
        """Forget all samples and estimates."""
        self.hbuf = init_buffer(HBUF_SIZE)
        self.hobuf = init_buffer(HOBUF_SIZE)
        self.hraoc = 0.0

    def update(self, hdata: Vec3) -> Vec3 | None:
        """Add a magnetic sample; return a new offset once it is reliable."""
        buf_shift(self.hbuf, 1)
        self.hbuf[0] = hdata.copy()

        num = next(
            (i for i in range(HBUF_SIZE, 3, -1) if not self.hbuf[i - 1].is_initial()),
            0,
        )
        if num < 4:
            return None

        points = _four_points(self.hbuf[:num])
        sphere = _sphere(points)
        if sphere is None:
            return None
        center, self.hraoc = sphere

        for i, p in enumerate(points):
            for q in points[i + 1 :]:
                dist = _distance(p, q)
                if dist < self.hraoc or dist < HR_TH:
                    return None

        buf_shift(self.hobuf, 1)
        self.hobuf[0] = center

        for i in range(HBUF_SIZE // 2, HBUF_SIZE):
            self.hbuf[i] = Vec3.initial()

        if self.hobuf[HOBUF_SIZE - 1].is_initial():
            return None

        limit = self.hraoc * HO_TH
        mean, var = _mean_var(self.hobuf)
        if var.x >= limit or var.y >= limit or var.z >= limit:
            return None
        return mean