"""
Author intelligence pipeline.

Reduces an author's publication record to a compact text dump, tallies their
most frequent collaborators, asks the analyst model for a profile and match
score, and validates the JSON it sends back.
"""

from __future__ import annotations

import json
import logging
import textwrap
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Protocol

from pydantic import ValidationError

from research_radar.models import AnalysisResult, Author, CollaboratorTally, Paper

logger = logging.getLogger(__name__)

TOP_PAPERS_LIMIT = 60
TOP_COLLABORATORS_LIMIT = 8
CO_AUTHORS_PER_LINE = 2
DEFAULT_DESCRIPTION = "General Assessment (No specific field provided)"
CODE_FENCE_MARKERS = ("```json", "```")

PROMPT_TEMPLATE = textwrap.dedent("""\
    Act as a Senior Scientific Intelligence Officer.
    TARGET: {name} ({affiliation}).
    STATS: H-Index: {h_index}, Citations: {citations}.
    FREQUENT COLLABORATORS: {collaborators}.
    DATA DUMP (Top {paper_limit} Papers):
    {papers}

    TASK 1: COMPREHENSIVE PROFILE
    - Analyze their career trajectory (Early vs. Current focus).
    - Identify their "Signature Contribution" to science.
    - Analyze their collaboration network (Who do they work with most?).

    TASK 2: RELEVANCE MATCHING
    User's Target Description/Field: "{description}".

    Based on the User's Description:
    - Calculate a "Match Score" (0 to 100) reflecting how well this researcher fits the description.
    - Provide a "Gap Analysis" (What is missing? or Why is it a perfect match?).

    OUTPUT FORMAT: JSON ONLY (No Markdown).
    Do not wrap the answer in ``` code fences. Return exactly one JSON object with this shape:
    {{
        "full_report": "Write a detailed, 3-paragraph professional report. Use formatting like <b>Bold</b> for key terms. Paragraph 1: Career Arc. Paragraph 2: Technical Deep Dive. Paragraph 3: Impact & Network.",
        "match_score": 85,
        "match_reason": "One sentence explaining the score.",
        "key_technologies": ["Tech1", "Tech2", "Tech3", "Tech4", "Tech5"]
    }}
    "match_score" must be an integer from 0 to 100 and "key_technologies" must list exactly 5 strings.
    """)


class IntelligenceError(Exception):
    """Base class for failures while producing an analysis."""


class ScholarUnavailableError(IntelligenceError):
    """The author record could not be fetched or understood."""


class AnalystUnavailableError(IntelligenceError):
    """The analyst model call failed."""


class AnalysisFormatError(IntelligenceError):
    """The analyst answer was not valid JSON."""


class AnalysisSchemaError(IntelligenceError):
    """The analyst answer was JSON but not the requested report shape."""


class AuthorSource(Protocol):
    def fetch_author(self, author_id: str) -> Optional[Dict[str, Any]]: ...


class Analyst(Protocol):
    def generate(self, prompt: str) -> str: ...


def rank_papers(papers: Iterable[Paper], limit: int = TOP_PAPERS_LIMIT) -> List[Paper]:
    """Return the most cited papers first; the input is left untouched."""
    ranked = sorted(papers, key=lambda paper: paper.citation_count or 0, reverse=True)
    return ranked[:limit]


def describe_paper(paper: Paper) -> str:
    co_authors = ", ".join(author.name or "" for author in paper.authors[:CO_AUTHORS_PER_LINE])
    return (
        f'[{paper.year}] "{paper.title}" '
        f"(Citations: {paper.citation_count}, Venue: {paper.venue}, Co-authors: {co_authors})"
    )


def summarize_papers(papers: Iterable[Paper], limit: int = TOP_PAPERS_LIMIT) -> str:
    """Render the top cited papers as one descriptor line each."""
    return "\n".join(describe_paper(paper) for paper in rank_papers(papers, limit))


def tally_collaborators(
    papers: Iterable[Paper],
    author_id: Optional[str],
    limit: int = TOP_COLLABORATORS_LIMIT,
) -> CollaboratorTally:
    """Count co-author appearances across papers, excluding the target author.

    Ties on count are broken by name so the ranking is reproducible.
    """
    counts: Counter[str] = Counter()
    for paper in papers:
        for co_author in paper.authors:
            if co_author.author_id == author_id or not co_author.name:
                continue
            counts[co_author.name] += 1

    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


def format_collaborators(collaborators: Optional[CollaboratorTally]) -> str:
    if not collaborators:
        return "None recorded"
    return ", ".join(f"{name} ({count} papers)" for name, count in collaborators)


def build_prompt(
    author: Author,
    summary: str,
    user_description: Optional[str] = None,
    collaborators: Optional[CollaboratorTally] = None,
) -> str:
    """Compose the analyst instruction, including the JSON schema to answer with."""
    description = user_description or DEFAULT_DESCRIPTION
    return PROMPT_TEMPLATE.format(
        name=author.name,
        affiliation=author.primary_affiliation,
        h_index=author.h_index,
        citations=author.citation_count,
        collaborators=format_collaborators(collaborators),
        paper_limit=TOP_PAPERS_LIMIT,
        papers=summary,
        description=description,
    )


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fence markers a model may add around its JSON."""
    for marker in CODE_FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def parse_analysis(raw_text: str) -> Dict[str, Any]:
    """Decode and validate the analyst answer, returning the JSON object."""
    text = strip_code_fences(raw_text or "")
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise AnalysisFormatError(f"analyst answer is not JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise AnalysisSchemaError(f"expected a JSON object, got {type(data).__name__}")
    try:
        AnalysisResult.model_validate(data)
    except ValidationError as exc:
        raise AnalysisSchemaError(str(exc)) from exc
    return data


def analyze_author(
    author_id: str,
    user_description: Optional[str],
    *,
    source: AuthorSource,
    analyst: Analyst,
) -> Dict[str, Any]:
    """Run the full analysis for one author and assemble the response body."""
    payload = source.fetch_author(author_id)
    if payload is None:
        raise ScholarUnavailableError(f"author {author_id} could not be fetched")
    try:
        author = Author.from_payload(payload, author_id)
    except ValidationError as exc:
        raise ScholarUnavailableError(f"author {author_id} payload is malformed: {exc}") from exc

    summary = summarize_papers(author.papers)
    collaborators = tally_collaborators(author.papers, author_id)
    prompt = build_prompt(author, summary, user_description, collaborators)
    logger.info(
        "Analyzing %s: %d papers, %d collaborators, prompt %d chars",
        author_id,
        len(author.papers),
        len(collaborators),
        len(prompt),
    )

    try:
        raw_text = analyst.generate(prompt)
    except Exception as exc:
        raise AnalystUnavailableError(f"analyst call failed: {exc}") from exc

    analysis = parse_analysis(raw_text)
    return {"author": payload, "analysis": analysis, "collaborators": collaborators}
