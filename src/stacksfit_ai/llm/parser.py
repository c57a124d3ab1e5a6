# src/stacksfit_ai/llm/parser.py
"""
Strict JSON parsing of provider output.

Providers are told to return only a JSON object. Anything else (markdown
fences, commentary, a bare list) fails the attempt; there is no recovery.
NaN, Infinity and numbers that overflow a float are not JSON and are rejected
too, since the HTTP layer cannot serialize them back out.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ParseResult:
    ok: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {literal}")
    return value


def parse_plan(text: Optional[str]) -> ParseResult:
    if text is None or not text.strip():
        return ParseResult(ok=False, error="empty response")
    try:
        parsed = json.loads(text.strip(), parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError as e:
        return ParseResult(ok=False, error=f"invalid JSON: {e}")
    if not isinstance(parsed, dict):
        return ParseResult(ok=False, error=f"expected a JSON object, got {type(parsed).__name__}")
    return ParseResult(ok=True, data=parsed)
