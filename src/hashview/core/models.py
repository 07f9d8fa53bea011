"""Closed data model for fetched artifacts, media variants, fragment and view states"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class MediaVariant(str, Enum):
    """Restrict renderers to a predefined set of presentations"""
    image = "image"
    video = "video"
    pdf = "pdf"
    markdown = "markdown"
    code = "code"
    unknown = "unknown"


# Variants whose body is read as text; the rest are rendered by reference URL.
TEXT_VARIANTS = frozenset({MediaVariant.markdown, MediaVariant.code, MediaVariant.unknown})


@dataclass(frozen=True)
class Classification:
    variant:  MediaVariant
    language: Optional[str] = None  # display language; set for code only


@dataclass(frozen=True)
class RetrievedArtifact:
    """Result of a single fetch; immutable once handed to the controller."""
    media_type: str
    filename:   Optional[str]
    url:        str             # reference URL the artifact was fetched from
    text:       Optional[str]   # decoded body for text variants, else None


# --- fragment states ---

@dataclass(frozen=True)
class SeekTime:
    offset: str


@dataclass(frozen=True)
class PageNumber:
    number: int


@dataclass(frozen=True)
class LineRange:
    start: int
    end:   int


@dataclass(frozen=True)
class NoFragment:
    pass


ViewFragmentState = Union[SeekTime, PageNumber, LineRange, NoFragment]


@dataclass(frozen=True)
class ParsedMarkdown:
    frontmatter: dict[str, Any]
    body:        str


@dataclass(frozen=True)
class ViewContent:
    """Everything a renderer may look at. Never carries the identifier."""
    url:          str
    filename:     Optional[str] = None
    text:         Optional[str] = None
    frontmatter:  dict[str, Any] = field(default_factory=dict)
    body:         str = ""
    raw_fragment: str = ""


# --- view states ---

@dataclass(frozen=True)
class Loading:
    identifier: Optional[str]


@dataclass(frozen=True)
class Error:
    identifier: Optional[str]
    message:    str


@dataclass(frozen=True)
class Ready:
    identifier:     str
    classification: Classification
    fragment:       ViewFragmentState
    html:           str
    filename:       Optional[str] = None


ViewState = Union[Loading, Error, Ready]
