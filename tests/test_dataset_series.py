import math
from datetime import datetime, timezone

import pandas as pd
import pytest

from chartd.services.chart_url import ChartURLBuilder
from chartd.services.color import Color
from chartd.services.dataset import Dataset, epoch_seconds, x_bounds


def test_from_samples_with_explicit_bounds():
    dataset = Dataset.from_samples([1.0, 0.99, 0.9869, 0.95, 0.88], minimum=0.0, maximum=1.0)

    assert dataset.data == "98851"
    assert dataset.stroke is None and dataset.fill is None


def test_from_samples_derives_missing_bounds():
    assert Dataset.from_samples([0.0, 5.0, 10.0]).data == "Ae9"
    assert Dataset.from_samples([0.0, 5.0, 10.0], maximum=20.0).data == "APe"


def test_from_samples_ignores_nan_when_deriving_bounds():
    series = pd.Series([0.0, math.nan, 10.0])

    assert Dataset.from_samples(series).data == "AA9"


def test_from_samples_keeps_colors():
    stroke = Color("FF0000FF")

    dataset = Dataset.from_samples([1.0, 2.0], stroke=stroke)

    assert dataset.stroke == stroke


def test_from_samples_flat_series_is_degenerate():
    assert Dataset.from_samples([4.0, 4.0, 4.0]).data == "AAA"
    assert Dataset.from_samples([]).data == ""


def test_epoch_seconds_treats_naive_datetimes_as_utc():
    assert epoch_seconds(datetime(2024, 1, 1)) == 1704067200.0
    assert epoch_seconds(datetime(2024, 1, 1, tzinfo=timezone.utc)) == 1704067200.0
    assert epoch_seconds(1704067200) == 1704067200.0


def test_x_bounds_from_naive_index():
    index = pd.date_range("2024-01-01", periods=3, freq="h")

    assert x_bounds(index) == (1704067200.0, 1704074400.0)


def test_x_bounds_from_aware_index():
    index = pd.date_range("2024-01-01", periods=2, freq="D", tz="America/New_York")

    assert x_bounds(index) == (1704085200.0, 1704171600.0)


def test_x_bounds_rejects_empty_index():
    with pytest.raises(ValueError):
        x_bounds(pd.DatetimeIndex([]))


def test_builder_sets_x_range_from_series_index():
    series = pd.Series([1.0, 3.0, 2.0], index=pd.date_range("2024-01-01", periods=3, freq="h"))

    url = (
        ChartURLBuilder()
        .set_width(400)
        .set_height(200)
        .set_datasets([Dataset.from_samples(series)])
        .set_x_range_from_index(series.index)
        .build()
    )

    assert url == "https://chartd.co/a.svg?h=200&w=400&d0=A9e&xmin=1704067200&xmax=1704074400"


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_epoch_seconds_rejects_non_finite_numbers(value: float) -> None:
    with pytest.raises(ValueError):
        epoch_seconds(value)
