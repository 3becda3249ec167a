import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from domain.errors import LLMNotConfiguredError, LLMResponseError
from infra.llm import client as llm
from infra.llm.client import (
    ApplicantEvaluation,
    AuditionEvaluationPayload,
    _validate_llm_list,
    _validate_llm_response,
    extract_json,
)


def test_extract_json_strips_code_fences():
    raw = "Here you go:\n```json\n[{\"a\": 1}]\n```\nThanks"
    assert extract_json(raw, "array") == '[{"a": 1}]'


def test_extract_json_takes_outermost_object():
    raw = 'Sure! {"outer": {"inner": 1}} hope that helps'
    assert extract_json(raw) == '{"outer": {"inner": 1}}'


def test_extract_json_without_json_raises():
    with pytest.raises(LLMResponseError):
        extract_json("I cannot help with that", "array")


def test_applicant_list_accepts_camel_case_and_scalar_lists():
    raw = '[{"applicationId": "app_1", "matchScore": 82.5, "strengths": "Tall", "recommendation": "Yes"}]'
    [ev] = _validate_llm_list(raw, ApplicantEvaluation)
    assert ev.application_id == "app_1"
    assert ev.match_score == 82.5
    assert ev.strengths == ["Tall"]
    assert ev.concerns == []


def test_out_of_range_score_is_rejected():
    raw = '[{"applicationId": "app_1", "matchScore": 120}]'
    with pytest.raises(LLMResponseError):
        _validate_llm_list(raw, ApplicantEvaluation)


def test_audition_payload_normalizes_recommendation_and_clamps_emotions():
    raw = ('{"overall_match_score": 71, "recommendation": "Probably Not", '
           '"emotions_detected": {"happy": 1.4, "sad": -0.2}}')
    payload = _validate_llm_response(raw, AuditionEvaluationPayload)
    assert payload.recommendation == "probably_not"
    assert payload.emotions_detected == {"happy": 1.0, "sad": 0.0}


def test_no_provider_configured_raises():
    with pytest.raises(LLMNotConfiguredError):
        asyncio.run(llm._choose_and_call([{"role": "user", "content": "hi"}]))


def test_match_talent_llm_returns_snake_case():
    reply = '{"matchScore": 77, "strengths": ["a"], "concerns": [], "recommendation": "ok"}'
    with patch("infra.llm.client._choose_and_call", new=AsyncMock(return_value=reply)):
        result = asyncio.run(llm.match_talent_llm("talent", "role"))
    assert result == {"match_score": 77, "strengths": ["a"], "concerns": [], "recommendation": "ok"}
