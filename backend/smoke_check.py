# backend/smoke_check.py
# Posts a few queries to a running server and prints what came back.
# Start the server first:  python -m backend.app
import argparse
import json

import requests

DEFAULT_URL = "http://127.0.0.1:8000/search"

CASES = [
    ("EMPTY", ""),
    ("EXACT: headache", "headache"),
    ("EXACT: mixed case + spaces", "  Fever  "),
    ("SUBSTRING: head", "head"),
    ("SUBSTRING: ress", "ress"),
    ("FUZZY: cold cough", "cold cough"),
    ("FUZZY: stress and headache", "stress headache"),
    ("NONE: xyz123", "xyz123"),
]


def run(url: str) -> None:
    for label, text in CASES:
        r = requests.post(url, json={"query": text}, timeout=10)
        try:
            j = r.json()
        except ValueError:
            j = {"_error": r.text}
        print(f"\n=== {label} ===")
        print("INPUT:", repr(text))
        print("STATUS:", r.status_code)
        print(json.dumps(j, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Smoke-test the /search endpoint.")
    ap.add_argument("--url", default=DEFAULT_URL)
    run(ap.parse_args().url)
