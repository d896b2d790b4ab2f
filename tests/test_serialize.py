"""Tests for JSON serialization and share tokens."""

from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from truewage.config.defaults import default_inputs, default_tax_schedule, graduate_inputs
from truewage.core.engine import compute
from truewage.io.serialize import (
    SHARE_KEYS,
    compute_inputs_hash,
    decode_share_token,
    dump_inputs,
    dump_results_summary,
    encode_share_token,
    load_inputs,
)
from truewage.utils.exceptions import InvalidInputError

GOLDEN = Path(__file__).parent / "golden" / "basic_inputs.json"


class TestInputsJson:
    def test_round_trip(self) -> None:
        inputs = graduate_inputs()
        assert load_inputs(dump_inputs(inputs)) == inputs

    def test_golden_file_loads(self) -> None:
        inputs = load_inputs(GOLDEN.read_text())
        assert inputs == default_inputs()

    def test_bare_mapping(self) -> None:
        inputs = load_inputs(json.dumps({"salary": 50_000, "contract_hours": 40}))
        assert inputs.salary == 50_000
        assert inputs.tax_region == "england"

    def test_invalid_json(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            load_inputs("{not json")
        assert exc_info.value.field == "inputs"

    def test_invalid_field(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            load_inputs(json.dumps({"salary": 30_000, "contract_hours": 0}))
        assert exc_info.value.field == "contract_hours"

    def test_not_an_object(self) -> None:
        with pytest.raises(InvalidInputError):
            load_inputs("[1, 2, 3]")


class TestHash:
    def test_deterministic(self) -> None:
        h1 = compute_inputs_hash(default_inputs())
        h2 = compute_inputs_hash(default_inputs())
        assert h1 == h2
        assert len(h1) == 64  # SHA-256 hex digest

    def test_changes_with_inputs(self) -> None:
        inputs = default_inputs()
        other = inputs.model_copy(update={"salary": 36_000})
        assert compute_inputs_hash(inputs) != compute_inputs_hash(other)


class TestResultsSummary:
    def test_keys(self) -> None:
        inputs = default_inputs()
        results = compute(inputs, default_tax_schedule())
        data = json.loads(dump_results_summary(results, inputs))
        assert data["inputs_hash"] == compute_inputs_hash(inputs)
        assert data["inputs"]["salary"] == 35_000
        assert data["results"]["true_hourly_rate"] == pytest.approx(results.true_hourly_rate)
        assert data["results"]["tax_breakdown"]["net_salary"] == pytest.approx(27_459.60)
        assert data["results"]["tax_year"] == "2025/26"


class TestShareToken:
    def test_round_trip(self) -> None:
        inputs = graduate_inputs().model_copy(update={"stress_tax": 1_500, "work_days": 4})
        assert decode_share_token(encode_share_token(inputs)) == inputs

    def test_url_safe(self) -> None:
        token = encode_share_token(default_inputs())
        assert "=" not in token
        assert "+" not in token
        assert "/" not in token

    def test_uses_short_keys(self) -> None:
        token = encode_share_token(default_inputs())
        payload = json.loads(base64.urlsafe_b64decode(token + "=" * (-len(token) % 4)))
        assert set(payload) == set(SHARE_KEYS)

    def test_missing_keys_use_defaults(self) -> None:
        token = base64.urlsafe_b64encode(b'{"s":80000,"r":"scotland"}').decode()
        inputs = decode_share_token(token)
        assert inputs.salary == 80_000
        assert inputs.tax_region == "scotland"
        assert inputs.contract_hours == default_inputs().contract_hours

    def test_zero_values_are_kept(self) -> None:
        token = base64.urlsafe_b64encode(b'{"cm":0,"p":0}').decode()
        inputs = decode_share_token(token)
        assert inputs.commute_minutes == 0
        assert inputs.pension_percent == 0

    def test_garbage_token(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            decode_share_token("@@@@")
        assert exc_info.value.field == "token"

    def test_non_object_payload(self) -> None:
        token = base64.urlsafe_b64encode(b"[1,2]").decode()
        with pytest.raises(InvalidInputError):
            decode_share_token(token)

    def test_invalid_value(self) -> None:
        token = base64.urlsafe_b64encode(b'{"p":150}').decode()
        with pytest.raises(InvalidInputError) as exc_info:
            decode_share_token(token)
        assert exc_info.value.field == "pension_percent"
