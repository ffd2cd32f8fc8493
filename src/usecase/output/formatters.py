"""Human/JSON output helpers.

The CLI renders an Outcome for humans (one status line plus indented
detail) or machines (--json). Arbitrary payloads are made JSON-safe with
pydantic-core; anything it cannot encode falls back to ``str()``.
"""

from __future__ import annotations

import json as _json
from typing import Any

from pydantic_core import to_jsonable_python

from usecase.services.outcome import Failed, Outcome, PreConditionFailed, Success


def _jsonable(value: Any) -> Any:
    return to_jsonable_python(value, fallback=str)


def _error_map(errors: Any) -> Any:
    if callable(getattr(errors, "errors", None)):
        return {k: list(v) for k, v in errors.errors().items()}
    return errors


def outcome_payload(outcome: Outcome) -> dict[str, Any]:
    """Convert *outcome* to a JSON-safe dict keyed by ``outcome`` kind."""
    payload: dict[str, Any] = {"outcome": outcome.kind}
    if isinstance(outcome, Success):
        payload["result"] = _jsonable(outcome.result)
    elif isinstance(outcome, Failed):
        payload["errors"] = _jsonable(_error_map(outcome.errors))
        payload["preceding_input"] = _jsonable(outcome.preceding_input)
    elif isinstance(outcome, PreConditionFailed):
        payload["tag"] = outcome.tag
        payload["cause_type"] = type(outcome.cause).__name__
        payload["cause"] = str(outcome.cause)
    if outcome.meta:
        payload["meta"] = _jsonable(outcome.meta)
    return payload


def _format_human(payload: dict[str, Any]) -> str:
    kind = payload["outcome"]
    if kind == "success":
        return f"OK: {_json.dumps(payload['result'], separators=(',', ':'))}"
    if kind == "failed":
        lines = ["FAILED: validation"]
        errors = payload["errors"]
        if isinstance(errors, dict):
            for key, messages in errors.items():
                lines.append(f"  {key}: {', '.join(str(m) for m in messages)}")
        else:
            lines.append(f"  {errors}")
        return "\n".join(lines)
    if kind == "pre_condition_failed":
        return f"PRE-CONDITION FAILED: {payload['tag']} ({payload['cause_type']}: {payload['cause']})"
    return "NEUTRAL"


def format_outcome(outcome: Outcome, *, json_output: bool = False) -> str:
    """Format an Outcome for display.

    Args:
        outcome: The outcome to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    payload = outcome_payload(outcome)
    if json_output:
        return _json.dumps(payload, indent=2)
    return _format_human(payload)
