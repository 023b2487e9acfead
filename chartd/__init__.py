"""Build chartd.co chart image URLs from numeric series."""

from .services import (
    ALPHABET,
    CHARTD_BASE_URL,
    MAX_DATASETS,
    ChartURLBuilder,
    Color,
    Dataset,
    ImageType,
    StrokeStyle,
    TooManyDatasets,
    base62_encode,
    build_chart_url,
    encode_color,
    x_bounds,
)

__version__ = "0.1.0"

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
    "x_bounds",
]
