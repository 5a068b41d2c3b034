"""Pull a JSON object out of free-form model output."""

import json
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

_FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n?\s*```", re.DOTALL)
_BRACE_SPAN = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class ParsedJson:
    value: dict[str, Any]


@dataclass(frozen=True)
class ParseFailure:
    reason: str


ParseResult = ParsedJson | ParseFailure


def _fenced_block(text: str) -> str | None:
    match = _FENCED_JSON.search(text)
    return match.group(1).strip() if match else None


def _brace_span(text: str) -> str | None:
    match = _BRACE_SPAN.search(text)
    return match.group(0) if match else None


def _raw_text(text: str) -> str | None:
    return text.strip() or None


# Tried in order; the first candidate that decodes to an object wins.
STRATEGIES: tuple[tuple[str, Callable[[str], str | None]], ...] = (
    ("fenced block", _fenced_block),
    ("brace span", _brace_span),
    ("raw text", _raw_text),
)


def extract_json(text: str) -> ParseResult:
    """Return the first JSON object found by the ordered strategies, or why none was."""
    reasons: list[str] = []
    for name, strategy in STRATEGIES:
        candidate = strategy(text)
        if candidate is None:
            reasons.append(f"{name}: nothing found")
            continue
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError as exc:
            reasons.append(f"{name}: {exc.msg} at position {exc.pos}")
            continue
        if not isinstance(value, dict):
            reasons.append(f"{name}: expected an object, got {type(value).__name__}")
            continue
        return ParsedJson(value)
    return ParseFailure("; ".join(reasons))
