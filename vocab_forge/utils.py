"""Utility functions for text normalisation, JSON extraction and word-file loading."""

import hashlib
import json
import re
from pathlib import Path
from typing import Any, List

import structlog

log = structlog.get_logger()

# Example values: "your-api-key", "paste-key-here", "sk-xxxxxxxx..."
PLACEHOLDER_PATTERN = re.compile(r"^your[-_]|[-_]here$|x{8}", re.IGNORECASE)


def load_words_from_file(file_path: Path) -> List[str]:
    """Load words from a text file, one word per line."""
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    words = []
    with open(file_path, 'r', encoding='utf-8') as f:
        for line in f:
            word = line.strip()
            if word and not word.startswith('#'):
                words.append(word)

    log.info("Loaded words from file", count=len(words), file=str(file_path))
    return words


def normalize(text: str) -> str:
    return text.strip().lower()


def has_credential(value) -> bool:
    """True if ``value`` looks like a real key rather than an unset or example value."""
    if not value or not str(value).strip():
        return False
    return not PLACEHOLDER_PATTERN.search(str(value).strip())


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```) if present."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_json_array(text: str) -> List[Any]:
    """Parse a model response that should contain a JSON array.

    Falls back to the outermost ``[...]`` span when the model wrapped the array
    in prose. Raises ``ValueError`` when no array can be recovered.
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        start, end = cleaned.find("["), cleaned.rfind("]")
        if start == -1 or end <= start:
            raise ValueError(f"Invalid JSON response: {cleaned[:200]}")
        try:
            data = json.loads(cleaned[start:end + 1])
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON response: {e}") from e
    if not isinstance(data, list):
        raise ValueError("Response is not a JSON array")
    return data


def stable_seed(*parts: str) -> int:
    """Deterministic 32-bit seed from text, stable across processes."""
    digest = hashlib.sha256("|".join(parts).encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big")
