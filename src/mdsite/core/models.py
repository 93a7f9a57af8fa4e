"""Data models for parsed documents, the derived index, and build results"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_string_set(value: Any) -> Any:
    """Accept a single string or a list of strings; drop blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [v.strip() if isinstance(v, str) else v for v in value]
        return [v for v in items if v != ""]
    return value


class Frontmatter(BaseModel):
    """Validation schema for the YAML header; unknown keys are kept as extras."""
    model_config = ConfigDict(extra="allow")

    title:      str = Field(min_length=1)
    date:       datetime
    slug:       Optional[str] = None
    categories: frozenset[str] = frozenset()
    tags:       frozenset[str] = frozenset()
    draft:      bool = False

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_datetime(cls, v):
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime(v.year, v.month, v.day)
        return v

    @field_validator("date")
    @classmethod
    def _naive_utc(cls, v: datetime) -> datetime:
        # mixed aware/naive datetimes cannot be compared when sorting
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @field_validator("categories", "tags", mode="before")
    @classmethod
    def _string_sets(cls, v):
        return _as_string_set(v)


class Document(BaseModel):
    """A parsed article. Immutable once read."""
    model_config = ConfigDict(frozen=True)

    slug:       str
    path:       str                 # posix path relative to the content root
    title:      str
    date:       datetime
    categories: frozenset[str] = frozenset()
    tags:       frozenset[str] = frozenset()
    draft:      bool = False
    body:       str                 # markdown without frontmatter
    extra:      dict[str, Any] = {}


class Index(BaseModel):
    """Navigation index: ordered slugs overall and per tag/category. Drafts excluded."""
    model_config = ConfigDict(frozen=True)

    posts:      tuple[str, ...] = ()
    tags:       dict[str, tuple[str, ...]] = {}
    categories: dict[str, tuple[str, ...]] = {}


@dataclass(frozen=True)
class SkippedDoc:
    path:   str
    reason: str


@dataclass
class BuildReport:
    """Outcome of a build or check run."""
    documents: list[Document] = field(default_factory=list)
    skipped:   list[SkippedDoc] = field(default_factory=list)
    index:     Index = field(default_factory=Index)
    written:   list[Path] = field(default_factory=list)
    pruned:    list[Path] = field(default_factory=list)

    @property
    def drafts(self) -> list[Document]:
        return [d for d in self.documents if d.draft]
