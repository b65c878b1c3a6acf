"""Utilities for robustly decoding WordPress REST response bodies.

WordPress normally answers with JSON, but error pages can be HTML and some
plugins print PHP notices in front of the JSON document. `parse_body` handles:
- Empty bodies (returns None)
- Normal JSON (json.loads)
- Text with a JSON value somewhere after leading noise (json.JSONDecoder().raw_decode)
- Falls back to returning the original text if parsing fails
"""
from __future__ import annotations

import json
from typing import Any

import httpx


def is_html(response: httpx.Response) -> bool:
    return "text/html" in response.headers.get("content-type", "")


def robust_parse_text(text: str) -> Any:
    """Parse text as JSON, else the first JSON object/array found in it, else return the raw text."""
    try:
        return json.loads(text)
    except ValueError:
        pass

    decoder = json.JSONDecoder()
    for start, ch in enumerate(text):
        if ch not in "{[":
            continue
        try:
            obj, _ = decoder.raw_decode(text, start)
            return obj
        except ValueError:
            continue

    return text


def parse_body(response: httpx.Response) -> Any:
    text = response.text
    if not text.strip():
        return None
    if is_html(response):
        return text
    return robust_parse_text(text)
