"""Normalization of free-form AI output into nutrition estimates."""

import json
import logging
import math
import re
from dataclasses import dataclass

from food_insight.domain.nutrition import (
    FALLBACK_CANDIDATE,
    NUMERIC_DEFAULTS,
    TEXT_DEFAULTS,
    NutritionEstimate,
)

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)
_PERCENT_MAX = 100.0

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing model output: either a record or an error."""

    record: dict[str, object] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when a record was parsed."""
        return self.record is not None


def extract_json_text(raw_text: str) -> str:
    """Return the greedy ``{...}`` span of the text, or the text itself."""
    match = _JSON_OBJECT_RE.search(raw_text)
    return match.group(0) if match else raw_text


def try_parse(raw_text: str) -> ParseResult:
    """Strictly parse the JSON object embedded in model output."""
    text = extract_json_text(raw_text)
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        return ParseResult(error=str(exc))
    if not isinstance(parsed, dict):
        kind = type(parsed).__name__
        return ParseResult(error=f"expected a JSON object, got {kind}")
    return ParseResult(record=parsed)


def normalize(raw_text: str) -> NutritionEstimate:
    """Turn raw model text into a fully populated nutrition estimate."""
    result = try_parse(raw_text)
    if result.record is None:
        _logger.warning("Unparseable model output, using fallback: %s", result.error)
        candidate = FALLBACK_CANDIDATE
    else:
        candidate = result.record
    return sanitize(candidate)


def sanitize(candidate: dict[str, object]) -> NutritionEstimate:
    """Coerce every field of a candidate record, substituting defaults."""
    return NutritionEstimate(
        food_name=_text(candidate, "foodName"),
        calories=_number(candidate, "calories"),
        protein=_number(candidate, "protein"),
        carbs=_number(candidate, "carbs"),
        fat=_number(candidate, "fat"),
        fiber=_number(candidate, "fiber"),
        portion_size=_text(candidate, "portionSize"),
        description=_text(candidate, "description"),
        confidence=_confidence(_number(candidate, "confidence")),
    )


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant {name}")


def _number(candidate: dict[str, object], key: str) -> float:
    value = _coerce_float(candidate.get(key))
    if value is None or value == 0:
        return NUMERIC_DEFAULTS[key]
    return value


def _coerce_float(value: object) -> float | None:
    """Convert JSON scalars to a finite float, or None."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            number = float(stripped)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _text(candidate: dict[str, object], key: str) -> str:
    value = candidate.get(key)
    if isinstance(value, str) and value:
        return value
    if isinstance(value, int | float) and not isinstance(value, bool) and value:
        return str(value)
    return TEXT_DEFAULTS[key]


def _confidence(value: float) -> float:
    # Models sometimes report confidence as a percentage.
    if 1.0 < value <= _PERCENT_MAX:
        value = value / _PERCENT_MAX
    return min(max(value, 0.0), 1.0)
