"""Pydantic schemas for extracted slides and presentations."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pageslides.settings import DEFAULT_PRESENTATION_TITLE


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class SourceType(str, Enum):
    """Origin of a document, which decides the extraction strategy."""

    NOTION = "notion"
    MARKDOWN = "markdown"  # .md URL: rendered or raw decided at extraction time
    RENDERED_MARKDOWN = "rendered-markdown"
    RAW_MARKDOWN = "raw-markdown"
    UNKNOWN = "unknown"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Slide
# ---------------------------------------------------------------------------

class Slide(BaseModel):
    """One slide: a title, a Markdown body and at most one level of subslides.

    Slides are immutable once built; transformations such as normalization
    return new instances via :meth:`model_copy`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    content: str = ""
    source_type: SourceType = Field(default=SourceType.UNKNOWN, alias="sourceType")
    metadata: dict[str, Any] = Field(default_factory=dict)
    subslides: tuple[Slide, ...] = ()

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, v: Any) -> Any:
        return v or ""

    @field_validator("source_type", mode="before")
    @classmethod
    def coerce_source_type(cls, v: Any) -> Any:
        if v is None or v == "":
            return SourceType.UNKNOWN
        return v

    @field_validator("subslides")
    @classmethod
    def single_nesting_level(cls, v: tuple[Slide, ...]) -> tuple[Slide, ...]:
        for sub in v:
            if sub.subslides:
                raise ValueError(
                    f"subslide {sub.title!r} has its own subslides; "
                    "only one nesting level is allowed",
                )
        return v

    def is_valid(self) -> bool:
        """A slide needs a non-blank title to be presentable."""
        return bool(self.title.strip())

    def has_subslides(self) -> bool:
        return len(self.subslides) > 0

    def to_markdown(self) -> str:
        """Render the slide back to Markdown: ``#`` title, ``##`` subslides."""
        markdown = f"# {self.title}\n\n"
        if self.content:
            markdown += self.content
        if self.has_subslides():
            markdown += "\n\n"
            for sub in self.subslides:
                markdown += f"## {sub.title}\n\n{sub.content}\n\n"
        return markdown

    def to_dict(self) -> dict[str, Any]:
        """Plain storage form (camelCase keys, JSON-safe values)."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Slide:
        return cls.model_validate(data)


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------

class PresentationMetadata(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    created_at: str = Field(default_factory=_now_iso, alias="createdAt")
    updated_at: str = Field(default_factory=_now_iso, alias="updatedAt")


class Presentation(BaseModel):
    """An ordered collection of slides with creation/update timestamps."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    slides: list[Slide] = Field(default_factory=list)
    source_type: SourceType = Field(default=SourceType.UNKNOWN, alias="sourceType")
    metadata: PresentationMetadata = Field(default_factory=PresentationMetadata)

    @model_validator(mode="before")
    @classmethod
    def default_title(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("title"):
            return data
        title = ""
        slides = data.get("slides") or []
        if slides:
            first = slides[0]
            title = first.title if isinstance(first, Slide) else str(first.get("title") or "")
        return {**data, "title": title.strip() or DEFAULT_PRESENTATION_TITLE}

    @property
    def slide_count(self) -> int:
        return len(self.slides)

    def _touch(self) -> None:
        self.metadata.updated_at = _now_iso()

    def add_slide(self, slide: Slide | dict[str, Any]) -> int:
        """Append *slide* if it is valid; return the resulting slide count."""
        candidate = slide if isinstance(slide, Slide) else Slide.model_validate(slide)
        if candidate.is_valid():
            self.slides.append(candidate)
            self._touch()
        return self.slide_count

    def remove_slide(self, index: int) -> Slide | None:
        if 0 <= index < len(self.slides):
            removed = self.slides.pop(index)
            self._touch()
            return removed
        return None

    def get_slide(self, index: int) -> Slide | None:
        if 0 <= index < len(self.slides):
            return self.slides[index]
        return None

    def to_markdown(self) -> str:
        """Whole deck as one Markdown document, slides separated by ``---``."""
        return "\n---\n\n".join(s.to_markdown().rstrip() + "\n" for s in self.slides)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_slides(
        cls,
        slides: list[Slide] | list[dict[str, Any]],
        source_type: SourceType | str = SourceType.UNKNOWN,
    ) -> Presentation:
        """Wrap extracted *slides*, taking the deck title from the first one."""
        return cls(slides=list(slides), source_type=source_type)


# ---------------------------------------------------------------------------
# Extraction result
# ---------------------------------------------------------------------------

class ExtractionResult(BaseModel):
    """Outcome of one ``extract()`` call: either slides or an error message."""

    slides: list[Slide] = Field(default_factory=list)
    error: str | None = None
    source_type: SourceType | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_response(self) -> dict[str, Any]:
        """Host-facing form: ``{"slides": [...]}`` or ``{"error": "..."}``."""
        if self.error is not None:
            return {"error": self.error}
        return {"slides": [s.to_dict() for s in self.slides]}

    def to_presentation(self) -> Presentation:
        return Presentation.from_slides(
            self.slides, source_type=self.source_type or SourceType.UNKNOWN,
        )
