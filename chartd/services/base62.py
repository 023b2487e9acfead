"""Base62 quantizer that packs numeric samples into chartd data strings."""

from __future__ import annotations

from typing import Iterable

import numpy as np

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
_TOP_INDEX = len(ALPHABET) - 1


def base62_encode(samples: Iterable[float], minimum: float, maximum: float) -> str:
    """Quantize ``samples`` into one alphabet symbol per value.

    Each value is placed on a 0..61 scale between ``minimum`` and ``maximum``
    (truncating, never rounding). Values outside the range, non-finite values
    and every value of a zero-width range map to ``"A"``.
    """

    values = np.fromiter((float(value) for value in samples), dtype=np.float64)
    if values.size == 0:
        return ""

    span = float(maximum) - float(minimum)
    if span == 0:
        return ALPHABET[0] * values.size

    with np.errstate(invalid="ignore", over="ignore", divide="ignore"):
        scaled = np.trunc(_TOP_INDEX * (values - float(minimum)) / span)
    in_range = np.isfinite(scaled) & (scaled >= 0) & (scaled <= _TOP_INDEX)
    indexes = np.where(in_range, scaled, 0).astype(np.int64)
    return "".join(ALPHABET[index] for index in indexes)


__all__ = ["ALPHABET", "base62_encode"]
