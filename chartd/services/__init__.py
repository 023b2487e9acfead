"""chartd URL assembly services."""

from .base62 import ALPHABET, base62_encode
from .color import Color, StrokeStyle, encode_color
from .dataset import Dataset, epoch_seconds, x_bounds
from .chart_url import (
    CHARTD_BASE_URL,
    MAX_DATASETS,
    ChartURLBuilder,
    ImageType,
    TooManyDatasets,
    build_chart_url,
)

__all__ = [
    "ALPHABET",
    "CHARTD_BASE_URL",
    "MAX_DATASETS",
    "ChartURLBuilder",
    "Color",
    "Dataset",
    "ImageType",
    "StrokeStyle",
    "TooManyDatasets",
    "base62_encode",
    "build_chart_url",
    "encode_color",
    "epoch_seconds",
    "x_bounds",
]
