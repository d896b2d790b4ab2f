"""Serialization for inputs, results and shareable input tokens."""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
from dataclasses import asdict
from typing import Any

from truewage.config.defaults import default_inputs
from truewage.config.schema import CalculationInputs, parse_inputs
from truewage.core.engine import CalculationResults
from truewage.utils.exceptions import InvalidInputError

# Short keys keep share tokens compact enough for a URL query string
SHARE_KEYS: dict[str, str] = {
    "s": "salary",
    "r": "tax_region",
    "sl": "student_loan",
    "p": "pension_percent",
    "ch": "contract_hours",
    "cm": "commute_minutes",
    "ub": "unpaid_break_minutes",
    "pt": "prep_minutes",
    "wd": "work_days",
    "hd": "holiday_days",
    "cc": "commute_cost",
    "wc": "work_clothes",
    "st": "stress_tax",
}


def compute_inputs_hash(inputs: CalculationInputs) -> str:
    """Compute a deterministic SHA-256 hash of the inputs.

    Uses canonical JSON (sorted keys, no whitespace) so the same
    logical inputs always produce the same hash.
    """
    canonical = json.dumps(inputs.model_dump(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


def dump_inputs(inputs: CalculationInputs) -> str:
    """Serialize inputs to a JSON string."""
    return json.dumps({"inputs": inputs.model_dump()}, indent=2)


def load_inputs(json_str: str) -> CalculationInputs:
    """Deserialize inputs from a JSON string.

    Accepts either ``{"inputs": {...}}`` or a bare mapping of fields.

    Raises:
        InvalidInputError: If the JSON is malformed or a field is invalid.
    """
    try:
        data: Any = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise InvalidInputError("inputs", f"invalid JSON: {exc.msg}") from exc
    if isinstance(data, dict) and "inputs" in data:
        data = data["inputs"]
    if not isinstance(data, dict):
        raise InvalidInputError("inputs", "expected a JSON object")
    return parse_inputs(data)


def results_to_dict(results: CalculationResults) -> dict[str, Any]:
    """Plain-dict view of a result, nested breakdowns included."""
    return asdict(results)


def dump_results_summary(results: CalculationResults, inputs: CalculationInputs) -> str:
    """Serialize a computed result and the inputs that produced it to JSON."""
    data = {
        "inputs_hash": compute_inputs_hash(inputs),
        "inputs": inputs.model_dump(),
        "results": results_to_dict(results),
    }
    return json.dumps(data, indent=2)


def encode_share_token(inputs: CalculationInputs) -> str:
    """Encode inputs as a URL-safe base64 token of short-key JSON."""
    values = inputs.model_dump()
    payload = {short: values[name] for short, name in SHARE_KEYS.items()}
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def decode_share_token(token: str) -> CalculationInputs:
    """Decode a share token back into validated inputs.

    Keys missing from the token fall back to ``default_inputs()``.

    Raises:
        InvalidInputError: If the token is not valid base64 JSON, or a
            decoded value fails validation.
    """
    padded = token + "=" * (-len(token) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(padded.encode()))
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError("token", "not a valid share token") from exc
    if not isinstance(payload, dict):
        raise InvalidInputError("token", "not a valid share token")

    values = default_inputs().model_dump()
    for short, name in SHARE_KEYS.items():
        if short in payload:
            values[name] = payload[short]
    return parse_inputs(values)
