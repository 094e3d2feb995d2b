"""
Flask backend for the Research Radar web application.

This backend exposes REST endpoints that wrap the Semantic Scholar graph API
for author search and pass an author's publication record to a Gemini model
for an intelligence profile and match score. The endpoints are designed to be
consumed by the static front-end served from the `public` directory.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from research_radar.gemini_analyst import GeminiAnalyst
from research_radar.intelligence import (
    AnalysisSchemaError,
    Analyst,
    IntelligenceError,
    analyze_author,
)
from research_radar.semantic_scholar import SemanticScholarClient
from research_radar.settings import Settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def create_app(
    settings: Optional[Settings] = None,
    *,
    scholar: Optional[SemanticScholarClient] = None,
    analyst: Optional[Analyst] = None,
) -> Flask:
    """Build the Flask application with its upstream clients."""
    settings = settings or Settings.from_env()
    static_dir = os.path.abspath(settings.static_dir)
    app = Flask(__name__, static_folder=static_dir, static_url_path="")
    # Enable CORS so the front-end can call this API from a different port.
    CORS(app)

    if scholar is None:
        scholar = SemanticScholarClient(
            settings.s2_api_key,
            base_url=settings.s2_base_url,
            timeout=settings.scholar_timeout,
        )
    if analyst is None:
        analyst = GeminiAnalyst(
            settings.gemini_api_key,
            model_name=settings.gemini_model,
            timeout=settings.gemini_timeout,
        )

    app.config["SETTINGS"] = settings
    app.extensions["scholar"] = scholar
    app.extensions["analyst"] = analyst

    register_routes(app)
    return app


def register_routes(app: Flask) -> None:
    scholar: SemanticScholarClient = app.extensions["scholar"]
    analyst: Analyst = app.extensions["analyst"]

    @app.route("/")
    def index():
        """Serve the front-end entry page."""
        return app.send_static_file("index.html")

    @app.route("/api/health")
    def health_check():
        """Return a simple status message for health checks."""
        return jsonify({"status": "ok"})

    @app.route("/api/search")
    def search_authors():
        """Search for authors by name."""
        query = (request.args.get("q") or "").strip()
        if not query:
            return jsonify({"error": "Query required"}), 400

        authors = scholar.search_authors(query)
        if authors is None:
            return jsonify({"error": "Search Malfunction"}), 500
        return jsonify(authors)

    @app.route("/api/analyze", methods=["POST"])
    def post_analyze():
        """Profile an author and score them against the user's description."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        author_id = payload.get("authorId")
        if not author_id:
            return jsonify({"error": "Target ID Required"}), 400

        try:
            result = analyze_author(
                str(author_id),
                payload.get("userDescription"),
                source=scholar,
                analyst=analyst,
            )
        except AnalysisSchemaError as exc:
            app.logger.error("Analysis report rejected for %s: %s", author_id, exc)
            return jsonify({"error": "Intelligence Report Malformed"}), 502
        except IntelligenceError as exc:
            app.logger.error("Analysis Error for %s: %s", author_id, exc)
            return jsonify({"error": "Intelligence System Failure"}), 500
        return jsonify(result)


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    app = create_app(settings)
    app.logger.info("[RADAR ONLINE] http://localhost:%s", settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
