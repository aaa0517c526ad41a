"""Normalisation and averaging of vector buffers."""

from __future__ import annotations

from typing import MutableSequence, Sequence

from akcompass.vector import EPSILON, INIT_VALUE, CompassError, Vec3, buf_shift


def normalize_into(
    raw: Sequence[Vec3],
    nbuf: int,
    offset: Vec3,
    sensitivity: Vec3,
    target: float,
    buffer: MutableSequence[Vec3],
) -> None:
    """Normalise the newest ``nbuf`` raw vectors into the front of ``buffer``.

    Older entries of ``buffer`` are shifted back by ``nbuf`` places first.
    """
    ndata = len(raw)
    nvec = len(buffer)
    if ndata <= 0 or nvec <= 0 or nbuf <= 0:
        raise CompassError("buffer sizes must be positive")
    if ndata < nbuf or nvec < nbuf:
        raise CompassError(f"cannot buffer {nbuf} vectors")
    if (
        sensitivity.x <= EPSILON
        or sensitivity.y <= EPSILON
        or sensitivity.z <= EPSILON
        or target <= 0
    ):
        raise CompassError("sensitivity and target must be positive")

    buf_shift(buffer, nbuf)
    for i, vec in enumerate(raw[:nbuf]):
        buffer[i] = Vec3(
            (vec.x - offset.x) / sensitivity.x * target,
            (vec.y - offset.y) / sensitivity.y * target,
            (vec.z - offset.z) / sensitivity.z * target,
        )


def buffer_average(buffer: Sequence[Vec3], nave: int) -> Vec3:
    """Average the first ``nave`` entries, stopping at the first unset one.

    Returns a zero vector when the first entry is unset.
    """
    nvec = len(buffer)
    if nave <= 0 or nvec <= 0 or nvec < nave:
        raise CompassError(f"cannot average {nave} of {nvec} vectors")

    total = Vec3()
    count = 0
    for vec in buffer[:nave]:
        if INIT_VALUE in (vec.x, vec.y, vec.z):
            break
        total.x += vec.x
        total.y += vec.y
        total.z += vec.z
        count += 1

    if count == 0:
        return Vec3()
    return Vec3(total.x / count, total.y / count, total.z / count)