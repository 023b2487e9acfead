"""Builder that assembles chartd.co image URLs from chart settings and datasets."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Sequence, Tuple
from urllib.parse import quote, urlencode

from ..telemetry import record_build, record_color_dropped
from .dataset import Dataset, epoch_seconds, x_bounds

logger = logging.getLogger(__name__)

CHARTD_BASE_URL = "https://chartd.co"
MAX_DATASETS = 5


class ImageType(str, Enum):
    """Image format rendered by chartd."""

    SVG = "svg"
    PNG = "png"

    @property
    def file_name(self) -> str:
        return f"a.{self.value}"


class TooManyDatasets(ValueError):
    """Raised when more than five datasets are handed to the builder."""

    def __init__(self, count: int) -> None:
        super().__init__(f"chartd accepts at most {MAX_DATASETS} datasets, got {count}")
        self.count = count


def _format_float(value: float) -> str:
    return repr(float(value))


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _format_timestamp(value: float) -> str:
    return str(int(value))


class ChartURLBuilder:
    """Collects chart settings and turns them into a chartd URL.

    Width, height and between one and five datasets are required; every other
    setting is optional and only emitted once it has been set. Setters return
    the builder so calls can be chained::

        url = (
            ChartURLBuilder()
            .set_height(200)
            .set_width(400)
            .set_datasets([Dataset("98851"), Dataset.from_samples([0.1, 0.0, 0.8, 0.9], minimum=0.0, maximum=1.0)])
            .build()
        )

    ``build`` leaves the builder untouched, so it can be called again after
    further changes. Instances are not thread-safe.
    """

    def __init__(self, *, base_url: str = CHARTD_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")
        self.width: int | None = None
        self.height: int | None = None
        self.datasets: List[Dataset] = []
        self.y_minimum: float | None = None
        self.y_maximum: float | None = None
        self.x_minimum: float | None = None
        self.x_maximum: float | None = None
        self.timezone: str | None = None
        self.title: str | None = None
        self.step: bool | None = None
        self.highlight_last_point: bool | None = None
        self.only_left_y_axis: bool | None = None
        self.only_right_y_axis: bool | None = None

    def set_width(self, width: int) -> "ChartURLBuilder":
        self.width = int(width)
        return self

    def set_height(self, height: int) -> "ChartURLBuilder":
        self.height = int(height)
        return self

    def set_datasets(self, datasets: Sequence[Dataset]) -> "ChartURLBuilder":
        """Replace the plotted datasets.

        Raises ``TooManyDatasets`` for more than five entries. An empty list is
        accepted here but will not produce a URL.
        """
        datasets = list(datasets)
        if len(datasets) > MAX_DATASETS:
            raise TooManyDatasets(len(datasets))
        self.datasets = datasets
        return self

    def set_y_minimum(self, y_minimum: float) -> "ChartURLBuilder":
        self.y_minimum = float(y_minimum)
        return self

    def set_y_maximum(self, y_maximum: float) -> "ChartURLBuilder":
        self.y_maximum = float(y_maximum)
        return self

    def set_x_minimum(self, x_minimum: float | datetime) -> "ChartURLBuilder":
        """Set the earliest time on the x axis (Unix seconds or a datetime)."""
        self.x_minimum = epoch_seconds(x_minimum)
        return self

    def set_x_maximum(self, x_maximum: float | datetime) -> "ChartURLBuilder":
        """Set the latest time on the x axis (Unix seconds or a datetime)."""
        self.x_maximum = epoch_seconds(x_maximum)
        return self

    def set_x_range_from_index(self, index: Iterable[datetime]) -> "ChartURLBuilder":
        x_minimum, x_maximum = x_bounds(index)
        self.x_minimum = x_minimum
        self.x_maximum = x_maximum
        return self

    def set_timezone(self, timezone: str) -> "ChartURLBuilder":
        """Set the IANA zone (e.g. ``America/New_York``) used for x axis labels."""
        self.timezone = timezone
        return self

    def set_title(self, title: str) -> "ChartURLBuilder":
        self.title = title
        return self

    def set_step(self, step: bool) -> "ChartURLBuilder":
        self.step = bool(step)
        return self

    def set_highlight_last_point(self, highlight_last_point: bool) -> "ChartURLBuilder":
        self.highlight_last_point = bool(highlight_last_point)
        return self

    def set_only_left_y_axis(self, only_left_y_axis: bool) -> "ChartURLBuilder":
        """Show the y axis on the left only. chartd favours the left axis when both flags are true."""
        self.only_left_y_axis = bool(only_left_y_axis)
        return self

    def set_only_right_y_axis(self, only_right_y_axis: bool) -> "ChartURLBuilder":
        self.only_right_y_axis = bool(only_right_y_axis)
        return self

    def missing_fields(self) -> List[str]:
        """Return the required settings that keep ``build`` from producing a URL."""
        missing: List[str] = []
        if self.height is None:
            missing.append("height")
        if self.width is None:
            missing.append("width")
        if not 1 <= len(self.datasets) <= MAX_DATASETS:
            missing.append("datasets")
        return missing

    def _dataset_params(self) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        for idx, dataset in enumerate(self.datasets):
            params.append((f"d{idx}", dataset.data))
            for prefix, role, color in (("f", "fill", dataset.fill), ("s", "stroke", dataset.stroke)):
                if color is None:
                    continue
                encoded = color.encoded()
                if encoded is None:
                    logger.debug(
                        "dropping malformed dataset color",
                        extra={"dataset": idx, "role": role, "code": color.code},
                    )
                    record_color_dropped(role)
                    continue
                params.append((f"{prefix}{idx}", encoded))
        return params

    def _option_params(self) -> List[Tuple[str, str]]:
        options = (
            ("ymin", self.y_minimum, _format_float),
            ("ymax", self.y_maximum, _format_float),
            ("xmin", self.x_minimum, _format_timestamp),
            ("xmax", self.x_maximum, _format_timestamp),
            ("tz", self.timezone, str),
            ("t", self.title, str),
            ("step", self.step, _format_bool),
            ("hl", self.highlight_last_point, _format_bool),
            ("ol", self.only_left_y_axis, _format_bool),
            ("or", self.only_right_y_axis, _format_bool),
        )
        return [(key, formatter(value)) for key, value, formatter in options if value is not None]

    def build(self, image_type: ImageType | str = ImageType.SVG) -> str | None:
        """Return the chartd URL, or ``None`` when width, height or datasets are missing."""

        missing = self.missing_fields()
        if missing:
            logger.debug("chart settings incomplete; no URL built", extra={"missing": missing})
            record_build("incomplete")
            return None

        image_type = ImageType(image_type)
        params: List[Tuple[str, str]] = [("h", str(self.height)), ("w", str(self.width))]
        params.extend(self._dataset_params())
        params.extend(self._option_params())

        query = urlencode(params, safe="/:", quote_via=quote)
        record_build("built")
        return f"{self.base_url}/{image_type.file_name}?{query}"


def build_chart_url(
    *,
    width: int,
    height: int,
    datasets: Sequence[Dataset],
    image_type: ImageType | str = ImageType.SVG,
    base_url: str = CHARTD_BASE_URL,
    **options: object,
) -> str | None:
    """One-shot helper: ``options`` are builder setter names without the ``set_`` prefix."""

    builder = ChartURLBuilder(base_url=base_url).set_width(width).set_height(height).set_datasets(datasets)
    for name, value in options.items():
        if value is None:
            continue
        setter = getattr(builder, f"set_{name}", None)
        if setter is None:
            raise TypeError(f"unknown chart option '{name}'")
        setter(value)
    return builder.build(image_type)


__all__ = [
    "CHARTD_BASE_URL",
    "ChartURLBuilder",
    "Dataset",
    "ImageType",
    "MAX_DATASETS",
    "TooManyDatasets",
    "build_chart_url",
]
