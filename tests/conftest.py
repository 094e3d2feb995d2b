"""Shared fixtures: sample Semantic Scholar payloads and stand-in upstream clients."""

import copy
import json

import pytest

from research_radar.app import create_app
from research_radar.settings import Settings

TARGET_ID = "1741101"

AUTHOR_PAYLOAD = {
    "authorId": TARGET_ID,
    "name": "Ada Lovelace",
    "affiliations": ["University of London"],
    "citationCount": 5120,
    "hIndex": 31,
    "paperCount": 4,
    "url": "https://www.semanticscholar.org/author/1741101",
    "papers": [
        {
            "paperId": "p1",
            "title": "Notes on the Analytical Engine",
            "year": 1843,
            "venue": "Scientific Memoirs",
            "citationCount": 900,
            "fieldsOfStudy": ["Computer Science"],
            "authors": [
                {"authorId": TARGET_ID, "name": "Ada Lovelace"},
                {"authorId": "200", "name": "Charles Babbage"},
                {"authorId": "300", "name": "Luigi Menabrea"},
            ],
            "url": "https://www.semanticscholar.org/paper/p1",
        },
        {
            "paperId": "p2",
            "title": "Bernoulli Numbers by Machine",
            "year": 1842,
            "venue": "",
            "citationCount": None,
            "fieldsOfStudy": None,
            "authors": [
                {"authorId": "200", "name": "Charles Babbage"},
                {"authorId": TARGET_ID, "name": "Ada Lovelace"},
            ],
            "url": None,
        },
        {
            "paperId": "p3",
            "title": "Poetical Science",
            "year": None,
            "venue": "Letters",
            "citationCount": 4200,
            "fieldsOfStudy": ["Mathematics"],
            "authors": [
                {"authorId": TARGET_ID, "name": "Ada Lovelace"},
                {"authorId": "400", "name": "Augustus De Morgan"},
                {"authorId": None, "name": None},
            ],
            "url": None,
        },
        {
            "paperId": "p4",
            "title": "Correspondence",
            "year": 1844,
            "venue": "Letters",
            "citationCount": 20,
            "fieldsOfStudy": [],
            "authors": None,
            "url": None,
        },
    ],
}

SEARCH_RESULTS = [
    {
        "authorId": TARGET_ID,
        "name": "Ada Lovelace",
        "affiliations": ["University of London"],
        "hIndex": 31,
        "paperCount": 4,
        "citationCount": 5120,
    },
]

ANALYSIS = {
    "full_report": "<b>Career Arc</b> ...\n\nTechnical ...\n\nImpact ...",
    "match_score": 88,
    "match_reason": "Pioneering work on programmable computation.",
    "key_technologies": ["Analytical Engine", "Algorithms", "Punched Cards", "Mathematics", "Notation"],
}


class FakeScholar:
    """Replays canned payloads; ``None`` mimics an upstream failure."""

    def __init__(self, author=None, search_results=None):
        self.author = author
        self.search_results = search_results
        self.search_calls = []
        self.fetch_calls = []

    def search_authors(self, query):
        self.search_calls.append(query)
        return self.search_results

    def fetch_author(self, author_id):
        self.fetch_calls.append(author_id)
        return self.author


class FakeAnalyst:
    """Returns a fixed answer and records prompts."""

    def __init__(self, answer="", error=None):
        self.answer = answer
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def author_payload():
    return copy.deepcopy(AUTHOR_PAYLOAD)


@pytest.fixture
def analysis_json():
    return json.dumps(ANALYSIS)


@pytest.fixture
def settings(tmp_path):
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html>radar</html>", encoding="utf-8")
    return Settings(static_dir=str(static_dir), gemini_api_key="test-key")


@pytest.fixture
def make_client(settings):
    def _make(scholar, analyst):
        app = create_app(settings, scholar=scholar, analyst=analyst)
        app.config["TESTING"] = True
        return app.test_client()
    return _make
