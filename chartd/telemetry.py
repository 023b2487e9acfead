"""Prometheus metrics for chartd URL assembly."""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest


URL_BUILDS_TOTAL = Counter(
    "chartd_url_builds_total",
    "Chart URL build attempts broken out by outcome.",
    labelnames=("outcome",),
)

COLORS_DROPPED_TOTAL = Counter(
    "chartd_colors_dropped_total",
    "Dataset colors left out of a chart URL because their code was malformed.",
    labelnames=("role",),
)


def record_build(outcome: str) -> None:
    URL_BUILDS_TOTAL.labels(outcome=outcome or "unknown").inc()


def record_color_dropped(role: str) -> None:
    COLORS_DROPPED_TOTAL.labels(role=role or "unknown").inc()


def prometheus_response() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "COLORS_DROPPED_TOTAL",
    "URL_BUILDS_TOTAL",
    "prometheus_response",
    "record_build",
    "record_color_dropped",
]
