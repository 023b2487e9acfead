"""Dataset records plus helpers for turning sample series into chartd inputs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Tuple

import numpy as np
import pandas as pd

from .base62 import base62_encode
from .color import Color


@dataclass(frozen=True, slots=True)
class Dataset:
    """One plotted series.

    ``data`` is sent verbatim, so it may be the output of ``base62_encode`` or
    any string the caller already prepared.
    """

    data: str
    stroke: Color | None = None
    fill: Color | None = None

    @classmethod
    def from_samples(
        cls,
        samples: Iterable[float],
        *,
        minimum: float | None = None,
        maximum: float | None = None,
        stroke: Color | None = None,
        fill: Color | None = None,
    ) -> "Dataset":
        """Quantize ``samples`` into a dataset; missing bounds come from the samples themselves."""
        values = np.fromiter((float(value) for value in samples), dtype=np.float64)
        finite = values[np.isfinite(values)]
        if minimum is None:
            minimum = float(finite.min()) if finite.size else 0.0
        if maximum is None:
            maximum = float(finite.max()) if finite.size else 0.0
        return cls(data=base62_encode(values, minimum, maximum), stroke=stroke, fill=fill)


def epoch_seconds(value: float | int | datetime | pd.Timestamp) -> float:
    """Return Unix seconds for a timestamp; naive datetimes are read as UTC.

    Raises ``ValueError`` for NaN or infinite numbers.
    """

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    seconds = float(value)
    if not math.isfinite(seconds):
        raise ValueError(f"timestamp must be a finite number, got {value!r}")
    return seconds


def x_bounds(index: pd.DatetimeIndex | Iterable[datetime]) -> Tuple[float, float]:
    """Return ``(xmin, xmax)`` Unix seconds spanning a time index."""

    stamps = pd.DatetimeIndex(index)
    if stamps.empty:
        raise ValueError("cannot derive x bounds from an empty index")
    if stamps.tz is None:
        stamps = stamps.tz_localize("UTC")
    return float(stamps.min().timestamp()), float(stamps.max().timestamp())


__all__ = ["Dataset", "epoch_seconds", "x_bounds"]
