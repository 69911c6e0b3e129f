"""Pydantic schemas for résumé API endpoints."""

from __future__ import annotations

import base64
from typing import Annotated, Literal

from pydantic import BaseModel, Field, HttpUrl, model_validator

from career_craft.config import get_settings
from career_craft.layout.models import (
    DocumentLayout,
    DrawCommand,
    ImageCommand,
    LineCommand,
    RectCommand,
    TextCommand,
)

Color = tuple[int, int, int]


def _default_language() -> str:
    return get_settings().default_language


class ResumeRenderRequest(BaseModel):
    """Request schema for laying out or rendering a generated résumé."""

    resume_text: str = Field(..., min_length=1, description="Generated résumé, name on the first line")
    language: str = Field(
        default_factory=_default_language,
        description="Language of the section titles (en/es, English/Spanish)",
    )
    photo_data_uri: str | None = Field(
        None, description="Optional candidate photo as data:<mime>;base64,<data>"
    )


class ResumeTailorRequest(BaseModel):
    """Request schema for tailoring a résumé to a job offer.

    Either ``job_description`` or ``job_offer_url`` must be given, and either
    ``resume_text`` or ``resume_file_data_uri``.
    """

    job_description: str | None = Field(None, description="Job offer text")
    job_offer_url: HttpUrl | None = Field(None, description="Used when no job description is given")
    resume_text: str | None = Field(None, description="Current résumé as text")
    resume_file_data_uri: str | None = Field(
        None, description="Current résumé as data:application/pdf;base64,<data>"
    )
    language: str = Field(
        default_factory=_default_language, description="Output language (en/es, English/Spanish)"
    )

    @model_validator(mode="after")
    def _check_sources(self) -> ResumeTailorRequest:
        if not (self.job_description and self.job_description.strip()) and self.job_offer_url is None:
            raise ValueError("Either job_description or job_offer_url must be provided.")
        if not (self.resume_text and self.resume_text.strip()) and not self.resume_file_data_uri:
            raise ValueError("Either resume_text or resume_file_data_uri must be provided.")
        return self


class ResumeTailorResponse(BaseModel):
    tailored_resume: str
    explanation: str


# ---------------------------------------------------------------------------
# Layout response
# ---------------------------------------------------------------------------


class TextCommandSchema(BaseModel):
    kind: Literal["text"] = "text"
    page: int
    x: float
    y: float
    text: str
    font_weight: str
    font_size: float
    color: Color


class ImageCommandSchema(BaseModel):
    kind: Literal["image"] = "image"
    page: int
    x: float
    y: float
    width: float
    height: float
    image_format: str
    data: str = Field(..., description="Base64 encoded image bytes")


class RectCommandSchema(BaseModel):
    kind: Literal["rect"] = "rect"
    page: int
    x: float
    y: float
    width: float
    height: float
    color: Color


class LineCommandSchema(BaseModel):
    kind: Literal["line"] = "line"
    page: int
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color


DrawCommandSchema = Annotated[
    TextCommandSchema | ImageCommandSchema | RectCommandSchema | LineCommandSchema,
    Field(discriminator="kind"),
]


class PageSchema(BaseModel):
    page_index: int
    commands: list[DrawCommandSchema]


class ResumeLayoutResponse(BaseModel):
    """Response schema for a laid out résumé."""

    page_width: float
    page_height: float
    margin: float
    left_column_width: float
    page_count: int
    pages: list[PageSchema]

    @classmethod
    def from_layout(cls, layout: DocumentLayout) -> ResumeLayoutResponse:
        return cls(
            page_width=layout.page_width,
            page_height=layout.page_height,
            margin=layout.margin,
            left_column_width=layout.left_column_width,
            page_count=layout.page_count,
            pages=[
                PageSchema(
                    page_index=page.page_index,
                    commands=[_command_schema(command) for command in page.commands],
                )
                for page in layout.pages
            ],
        )


def _command_schema(
    command: DrawCommand,
) -> TextCommandSchema | ImageCommandSchema | RectCommandSchema | LineCommandSchema:
    if isinstance(command, TextCommand):
        return TextCommandSchema(
            page=command.page,
            x=command.x,
            y=command.y,
            text=command.text,
            font_weight=command.font_weight.value,
            font_size=command.font_size,
            color=command.color,
        )
    if isinstance(command, ImageCommand):
        return ImageCommandSchema(
            page=command.page,
            x=command.x,
            y=command.y,
            width=command.width,
            height=command.height,
            image_format=command.image_format,
            data=base64.b64encode(command.data).decode("ascii"),
        )
    if isinstance(command, RectCommand):
        return RectCommandSchema(
            page=command.page,
            x=command.x,
            y=command.y,
            width=command.width,
            height=command.height,
            color=command.color,
        )
    if isinstance(command, LineCommand):
        return LineCommandSchema(
            page=command.page,
            x1=command.x1,
            y1=command.y1,
            x2=command.x2,
            y2=command.y2,
            color=command.color,
        )
    raise TypeError(f"Unknown draw command: {command!r}")
