"""HTTP endpoints that hand out chartd URLs."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Literal

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import get_settings
from .logging_setup import setup_logging
from .middleware import RequestIdMiddleware
from .services import (
    ChartURLBuilder,
    Color,
    Dataset,
    ImageType,
    TooManyDatasets,
    base62_encode,
)
from .telemetry import prometheus_response

logger = logging.getLogger(__name__)

class ColorParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str
    style: Literal["dotted", "dashed"] | None = None

    def to_color(self) -> Color:
        return Color(code=self.code, style=self.style)


class DatasetParams(BaseModel):
    """A dataset given either as a pre-encoded ``data`` string or as raw ``samples``."""

    model_config = ConfigDict(extra="forbid")

    data: str | None = None
    samples: List[float] | None = None
    minimum: float | None = None
    maximum: float | None = None
    stroke: ColorParams | None = None
    fill: ColorParams | None = None

    @model_validator(mode="after")
    def _require_series(self) -> "DatasetParams":
        if self.data is None and self.samples is None:
            raise ValueError("dataset needs either data or samples")
        return self

    def to_dataset(self) -> Dataset:
        stroke = self.stroke.to_color() if self.stroke else None
        fill = self.fill.to_color() if self.fill else None
        if self.data is not None:
            return Dataset(data=self.data, stroke=stroke, fill=fill)
        return Dataset.from_samples(
            self.samples or [],
            minimum=self.minimum,
            maximum=self.maximum,
            stroke=stroke,
            fill=fill,
        )


class ChartRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    width: int | None = None
    height: int | None = None
    datasets: List[DatasetParams] = Field(default_factory=list)
    y_minimum: float | None = None
    y_maximum: float | None = None
    x_minimum: float | None = Field(default=None, allow_inf_nan=False)
    x_maximum: float | None = Field(default=None, allow_inf_nan=False)
    timezone: str | None = None
    title: str | None = None
    step: bool | None = None
    highlight_last_point: bool | None = None
    only_left_y_axis: bool | None = None
    only_right_y_axis: bool | None = None
    image_type: Literal["svg", "png"] | None = None


class ChartURLResponse(BaseModel):
    url: str


class EncodeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    samples: List[float]
    minimum: float
    maximum: float


class EncodeResponse(BaseModel):
    data: str


_OPTIONAL_SETTERS = (
    "y_minimum",
    "y_maximum",
    "x_minimum",
    "x_maximum",
    "timezone",
    "title",
    "step",
    "highlight_last_point",
    "only_left_y_axis",
    "only_right_y_axis",
)


def builder_from_request(payload: ChartRequest, *, base_url: str) -> ChartURLBuilder:
    """Replay a request body onto a fresh builder, calling only the setters whose field was sent."""

    builder = ChartURLBuilder(base_url=base_url)
    if payload.width is not None:
        builder.set_width(payload.width)
    if payload.height is not None:
        builder.set_height(payload.height)
    builder.set_datasets([item.to_dataset() for item in payload.datasets])
    for name in _OPTIONAL_SETTERS:
        value = getattr(payload, name)
        if value is not None:
            getattr(builder, f"set_{name}")(value)
    return builder


router = APIRouter(prefix="/charts", tags=["charts"])


@router.post("/chartd-url", summary="Build a chartd.co image URL", response_model=ChartURLResponse)
async def chartd_url(payload: ChartRequest) -> ChartURLResponse:
    settings = get_settings()
    try:
        builder = builder_from_request(payload, base_url=settings.chartd_base_url)
    except TooManyDatasets as exc:
        raise HTTPException(status_code=400, detail={"error": "too_many_datasets", "message": str(exc)}) from exc

    url = builder.build(ImageType(payload.image_type or settings.default_image_type))
    if url is None:
        missing = builder.missing_fields()
        logger.info("chartd url request incomplete", extra={"missing": missing})
        raise HTTPException(status_code=422, detail={"error": "incomplete_chart", "missing": missing})
    return ChartURLResponse(url=url)


@router.post("/encode", summary="Base62-encode samples for a chartd dataset", response_model=EncodeResponse)
async def encode_samples(payload: EncodeRequest) -> EncodeResponse:
    return EncodeResponse(data=base62_encode(payload.samples, payload.minimum, payload.maximum))


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    setup_logging(get_settings().log_level)
    yield


def create_app() -> FastAPI:
    """Build the ASGI app; JSON logging is installed when the app starts, not on import."""
    application = FastAPI(
        title="chartd URL service",
        description="Builds chartd.co chart image URLs from numeric series.",
        version="0.1.0",
        lifespan=_lifespan,
    )
    application.add_middleware(RequestIdMiddleware)
    application.include_router(router)

    @application.get("/healthz", summary="Readiness probe")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @application.get("/metrics", include_in_schema=False)
    async def metrics_endpoint() -> Response:
        payload, content_type = prometheus_response()
        return Response(content=payload, media_type=content_type)

    return application


app = create_app()

__all__ = ["ChartRequest", "DatasetParams", "ColorParams", "app", "builder_from_request", "create_app", "router"]
