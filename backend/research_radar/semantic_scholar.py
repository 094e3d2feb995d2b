"""Thin client for the Semantic Scholar graph API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from research_radar.settings import DEFAULT_S2_BASE_URL

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 15
SEARCH_FIELDS = "authorId,name,affiliations,hIndex,paperCount,citationCount"
AUTHOR_FIELDS = ",".join([
    "name",
    "affiliations",
    "citationCount",
    "hIndex",
    "paperCount",
    "url",
    "papers.title",
    "papers.year",
    "papers.venue",
    "papers.citationCount",
    "papers.fieldsOfStudy",
    "papers.authors",
    "papers.url",
])


class SemanticScholarClient:
    """Issue GET requests against the graph API and decode the JSON body.

    Every failure (network error, timeout, non-2xx status, undecodable body)
    is logged here and reported to the caller as ``None``.
    """

    def __init__(
        self,
        api_key: str = "",
        *,
        base_url: str = DEFAULT_S2_BASE_URL,
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "x-api-key": api_key or "",
            "Accept": "application/json",
        }

    def fetch(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict]:
        """Call the graph API and return JSON data."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = requests.get(url, params=params or {}, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            detail = getattr(exc, "response", None)
            extra = ""
            if detail is not None:
                extra = f" | status={detail.status_code} body={detail.text}"
            logger.error("Semantic Scholar request failed: %s%s", exc, extra)
            return None
        except ValueError as exc:
            logger.error("Semantic Scholar returned an undecodable body for %s: %s", url, exc)
            return None

        if not isinstance(data, dict):
            logger.error("Semantic Scholar returned %s instead of an object for %s", type(data).__name__, url)
            return None
        return data

    def search_authors(self, query: str, *, limit: int = SEARCH_LIMIT) -> Optional[List[Dict[str, Any]]]:
        """Search authors by name; ``None`` signals an upstream failure."""
        params = {
            "query": query,
            "limit": limit,
            "fields": SEARCH_FIELDS,
        }
        payload = self.fetch("/author/search", params)
        if payload is None:
            return None
        return payload.get("data") or []

    def fetch_author(self, author_id: str) -> Optional[Dict[str, Any]]:
        """Fetch an author record with the per-paper fields used for analysis."""
        endpoint = f"/author/{quote(author_id, safe='')}"
        return self.fetch(endpoint, {"fields": AUTHOR_FIELDS})
