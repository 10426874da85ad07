# backend/app.py
# ------------------------------------------------------------
# AyurLink remedy search
# Flow: Exact  ➜  Substring  ➜  Fuzzy token overlap  ➜  "no remedies" notice
# - Page: GET /?q=<text>  (the search box submits on Enter)
# - API:  POST /search with JSON {"query": "<free text>"}
# - Output: matched symptoms with their remedies, plus the tier used
# ------------------------------------------------------------

from __future__ import annotations

import os
import logging
from typing import Any, Dict, List, Optional, Sequence

from dotenv import load_dotenv
from flask import Flask, current_app, request, jsonify, render_template
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .remedy_matcher import match_with_tier
from .remedy_table import RemedyTable, default_table, load_table

load_dotenv()

# ============================
# Settings & logging
# ============================
# Basic console logging; level can be set with APP_LOG_LEVEL=DEBUG/INFO/...
APP_LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, APP_LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

# Optional JSON file replacing the built-in remedy table
REMEDY_TABLE_PATH = os.getenv("REMEDY_TABLE_PATH", "")

# Order used in the "try searching for" hint for the built-in table
DEFAULT_SUGGESTIONS = ("headache", "cough", "fever", "indigestion", "stress")

DISCLAIMER = (
    "These traditional remedies are for informational purposes. "
    "Please consult with a qualified healthcare practitioner for persistent or serious symptoms."
)

# ============================
# Small helpers
# ============================
def committed_text(value: Any) -> str:
    """The query exactly as the user sent it; non-strings count as empty."""
    return value if isinstance(value, str) else ""

def _parse_origins(val: str) -> List[str]:
    """Turn a comma-separated env string into a list of allowed origins."""
    return [o.strip() for o in (val or "").split(",") if o.strip()]

def make_hint(symptoms: Sequence[str]) -> str:
    """'Try searching for: a, b, or c.' built from the known symptom keys."""
    names = list(symptoms)
    if not names:
        return ""
    if len(names) == 1:
        listed = names[0]
    elif len(names) == 2:
        listed = f"{names[0]} or {names[1]}"
    else:
        listed = ", ".join(names[:-1]) + f", or {names[-1]}"
    return f"Try searching for: {listed}."

def _suggestions_for(table: RemedyTable) -> Sequence[str]:
    if set(table) == set(DEFAULT_SUGGESTIONS):
        return DEFAULT_SUGGESTIONS
    return table.symptoms

ALLOWED_ORIGINS = _parse_origins(
    os.getenv(
        "ALLOWED_ORIGINS",
        "http://127.0.0.1:5500,http://localhost:5500,"
        "http://127.0.0.1:5173,http://localhost:5173"
    )
)

# ============================
# Flask app factory
# ============================
def create_app(table: Optional[RemedyTable] = None) -> Flask:
    """Build the app around a remedy table (built-in one if none given)."""
    if table is None:
        table = load_table(REMEDY_TABLE_PATH) if REMEDY_TABLE_PATH else default_table()

    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config["REMEDY_TABLE"] = table
    app.config["SEARCH_HINT"] = make_hint(_suggestions_for(table))
    # Hard cap: we only accept a few KB per request
    app.config["MAX_CONTENT_LENGTH"] = 4 * 1024

    # Allow only local dev origins for the /search API
    CORS(
        app,
        resources={
            r"/search": {
                "origins": ALLOWED_ORIGINS,
                "methods": ["POST", "OPTIONS"],
                "allow_headers": ["Content-Type"],
            }
        },
    )

    # ============================
    # Error handling (catch-all)
    # ============================
    @app.errorhandler(Exception)
    def _any_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error: %s", e)
        return jsonify(error="internal_error"), 500

    # ============================
    # Health checks
    # ============================
    @app.route("/healthz")
    def healthz():
        return jsonify(status="ok"), 200

    @app.route("/health")
    def health():
        return jsonify(status="ok"), 200

    # ============================
    # Search page
    # ============================
    @app.route("/")
    def home():
        # Only a submitted form (Enter) sets q; typing alone never reaches us
        submitted = committed_text(request.args.get("q", ""))
        method, results = match_with_tier(submitted, current_app.config["REMEDY_TABLE"])
        if submitted:
            logger.info("Page search q=%r method=%s hits=%d", submitted, method, len(results))
        return render_template(
            "index.html",
            submitted=submitted,
            results=results,
            hint=current_app.config["SEARCH_HINT"],
            disclaimer=DISCLAIMER,
        )

    # ============================
    # JSON API
    # ============================
    @app.route("/symptoms")
    def symptoms():
        return jsonify(symptoms=list(current_app.config["REMEDY_TABLE"].symptoms)), 200

    @app.route("/search", methods=["POST"])
    def search():
        # Expect JSON {"query": "..."}; anything else counts as an empty query
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            data = {}
        query = committed_text(data.get("query"))
        method, results = match_with_tier(query, current_app.config["REMEDY_TABLE"])
        logger.info("API search q=%r method=%s hits=%d", query, method, len(results))

        body: Dict[str, Any] = {
            "query": query,
            "method": method,
            "results": [m.to_dict() for m in results],
            "count": len(results),
        }
        if not results:
            body["hint"] = current_app.config["SEARCH_HINT"]
        return jsonify(body), 200

    return app


app = create_app()

# ============================
# Entrypoint for local dev
# ============================
if __name__ == "__main__":
    logger.info("Allowed CORS origins: %s", ALLOWED_ORIGINS)
    logger.info("Remedy table: %s", list(app.config["REMEDY_TABLE"].symptoms))
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        debug=False,
        use_reloader=False,
    )
