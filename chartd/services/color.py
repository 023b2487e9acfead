"""Stroke and fill colors for chartd datasets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

COLOR_CODE_LENGTH = 8


class StrokeStyle(str, Enum):
    """Line pattern suffix appended to an encoded color."""

    DOTTED = "."
    DASHED = "-"

    @classmethod
    def resolve(cls, style: "StrokeStyle | str") -> "StrokeStyle":
        """Accept a member, its suffix (``"."``) or its name (``"dotted"``)."""
        if isinstance(style, cls):
            return style
        token = str(style).strip()
        try:
            return cls(token)
        except ValueError:
            pass
        try:
            return cls[token.upper()]
        except KeyError:
            raise ValueError(f"unknown stroke style {style!r}; expected dotted or dashed") from None


@dataclass(frozen=True, slots=True)
class Color:
    """An ``RRGGBBAA`` hex code with an optional stroke style.

    The style only changes how a stroke is drawn; chartd ignores it on fills.
    An unknown style raises ``ValueError`` here, while a malformed code only
    shows up as ``encoded()`` returning ``None``.
    """

    code: str
    style: StrokeStyle | None = None

    def __post_init__(self) -> None:
        if self.style is not None:
            object.__setattr__(self, "style", StrokeStyle.resolve(self.style))

    def encoded(self) -> str | None:
        """Return the query value for this color, or ``None`` if the code is not 8 characters."""
        if len(self.code) != COLOR_CODE_LENGTH:
            return None
        if self.style is None:
            return self.code
        return self.code + self.style.value


def encode_color(color: Color | None) -> str | None:
    if color is None:
        return None
    return color.encoded()


__all__ = ["COLOR_CODE_LENGTH", "Color", "StrokeStyle", "encode_color"]
