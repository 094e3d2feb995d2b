"""Data models for Semantic Scholar payloads and analyst reports."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# (name, count) pairs, highest count first.
CollaboratorTally = List[Tuple[str, int]]


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class CoAuthor(_UpstreamModel):
    author_id: Optional[str] = Field(default=None, alias="authorId")
    name: Optional[str] = None


class Paper(_UpstreamModel):
    title: Optional[str] = None
    year: Optional[int] = None
    venue: Optional[str] = None
    citation_count: Optional[int] = Field(default=None, alias="citationCount")
    fields_of_study: List[str] = Field(default_factory=list, alias="fieldsOfStudy")
    authors: List[CoAuthor] = Field(default_factory=list)
    url: Optional[str] = None

    @field_validator("fields_of_study", "authors", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Author(_UpstreamModel):
    author_id: Optional[str] = Field(default=None, alias="authorId")
    name: Optional[str] = None
    affiliations: List[str] = Field(default_factory=list)
    citation_count: Optional[int] = Field(default=None, alias="citationCount")
    h_index: Optional[int] = Field(default=None, alias="hIndex")
    paper_count: Optional[int] = Field(default=None, alias="paperCount")
    url: Optional[str] = None
    papers: List[Paper] = Field(default_factory=list)

    @field_validator("affiliations", "papers", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], author_id: Optional[str] = None) -> "Author":
        """Build an author from a Semantic Scholar response body."""
        author = cls.model_validate(payload)
        if author.author_id is None and author_id:
            author = author.model_copy(update={"author_id": author_id})
        return author

    @property
    def primary_affiliation(self) -> str:
        return self.affiliations[0] if self.affiliations else "Unknown"


class AnalysisResult(BaseModel):
    """Shape of the JSON report returned by the analyst model."""
    model_config = ConfigDict(extra="allow", strict=True)

    full_report: str
    match_score: int = Field(ge=0, le=100)
    match_reason: str
    key_technologies: List[str] = Field(max_length=5)
