import asyncio
import logging
import re
from typing import Any, Dict, List, Literal, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from app.settings import settings
from domain.errors import LLMNotConfiguredError, LLMResponseError
from infra.llm.prompts import (
    AUDITION_EVAL_PROMPT,
    PROFILE_ANALYSIS_PROMPT,
    RECOMMEND_CANDIDATES_PROMPT,
    SHORTLIST_PROMPT,
    TALENT_MATCH_PROMPT,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def _as_str_list(value):
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    raise ValueError("expected a string or list of strings")


class _CamelPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ApplicantEvaluation(_CamelPayload):
    application_id: str = Field(..., alias="applicationId")
    match_score: float = Field(..., alias="matchScore", ge=0, le=100)
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    recommendation: str = ""

    @field_validator("strengths", "concerns", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        return _as_str_list(value)


class TalentMatchPayload(_CamelPayload):
    match_score: float = Field(..., alias="matchScore", ge=0, le=100)
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    recommendation: str = ""

    @field_validator("strengths", "concerns", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        return _as_str_list(value)


class ProfileAnalysisPayload(_CamelPayload):
    overall_score: float = Field(..., alias="overallScore", ge=0, le=100)
    completeness: float = Field(..., ge=0, le=100)
    marketability: float = Field(..., ge=0, le=100)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    priority_actions: List[str] = Field(default_factory=list, alias="priorityActions")
    summary: str = Field(..., min_length=1)

    @field_validator("strengths", "improvements", "priority_actions", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        return _as_str_list(value)


class CandidateRecommendation(_CamelPayload):
    talent_id: str = Field(..., alias="talentId")
    match_score: float = Field(..., alias="matchScore", ge=0, le=100)
    reasoning: str = ""
    key_strengths: List[str] = Field(default_factory=list, alias="keyStrengths")

    @field_validator("key_strengths", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        return _as_str_list(value)


class CandidateRecommendationsPayload(_CamelPayload):
    recommendations: List[CandidateRecommendation] = Field(default_factory=list)


class AuditionEvaluationPayload(BaseModel):
    overall_match_score: float = Field(..., ge=0, le=100)
    recommendation: Literal["strong_yes", "yes", "maybe", "probably_not", "no"]
    emotions_detected: Dict[str, float] = Field(default_factory=dict)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    technical_notes: List[str] = Field(default_factory=list)
    detailed_analysis: Optional[Dict[str, Any]] = None

    @field_validator("recommendation", mode="before")
    @classmethod
    def _normalize_recommendation(cls, value):
        if isinstance(value, str):
            return value.strip().lower().replace(" ", "_")
        return value

    @field_validator("emotions_detected")
    @classmethod
    def _clamp_emotions(cls, value):
        return {k: min(1.0, max(0.0, float(v))) for k, v in value.items()}

    @field_validator("strengths", "improvements", "technical_notes", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        return _as_str_list(value)


async def _post_with_retries(
    url: str,
    headers: Dict[str, str],
    payload: Dict,
    *,
    timeout: Optional[int] = None,
    max_attempts: Optional[int] = None,
) -> Dict:
    timeout = timeout or settings.LLM_TIMEOUT
    max_attempts = max_attempts or settings.LLM_MAX_ATTEMPTS
    backoff = 1.0
    for attempt in range(1, max_attempts + 1):
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(url, headers=headers, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            retriable = status >= 500 or status in {408, 429}
            if not retriable or attempt == max_attempts:
                raise
            logger.warning("AI gateway returned %s (attempt %d/%d)", status, attempt, max_attempts)
        except httpx.RequestError as exc:
            if attempt == max_attempts:
                raise
            logger.warning("AI gateway unreachable: %s (attempt %d/%d)", exc, attempt, max_attempts)
        await asyncio.sleep(backoff)
        backoff *= 2
    raise RuntimeError("Unexpected retry exhaustion")


async def _chat(url: str, headers: Dict[str, str], model: str, messages, max_tokens: Optional[int]) -> str:
    payload = {"model": model, "messages": messages, "temperature": settings.LLM_TEMPERATURE}
    if max_tokens:
        payload["max_tokens"] = max_tokens
    data = await _post_with_retries(url, headers, payload)
    try:
        return data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as exc:
        raise LLMResponseError("AI gateway reply had no message content") from exc


async def _choose_and_call(messages, *, vision: bool = False, max_tokens: Optional[int] = None) -> str:
    if settings.AI_GATEWAY_API_KEY:
        model = settings.AI_GATEWAY_VISION_MODEL if vision else settings.AI_GATEWAY_MODEL
        headers = {"Authorization": f"Bearer {settings.AI_GATEWAY_API_KEY}"}
        return await _chat(settings.AI_GATEWAY_URL, headers, model, messages, max_tokens)
    if settings.OPENAI_API_KEY:
        model = settings.OPENAI_VISION_MODEL if vision else settings.OPENAI_MODEL
        headers = {"Authorization": f"Bearer {settings.OPENAI_API_KEY}"}
        return await _chat("https://api.openai.com/v1/chat/completions", headers, model, messages, max_tokens)
    if settings.OPENROUTER_API_KEY:
        headers = {
            "Authorization": f"Bearer {settings.OPENROUTER_API_KEY}",
            "HTTP-Referer": "http://localhost",
            "X-Title": settings.APP_NAME,
        }
        return await _chat("https://openrouter.ai/api/v1/chat/completions", headers,
                           settings.OPENROUTER_MODEL, messages, max_tokens)
    raise LLMNotConfiguredError("No AI provider configured")


def extract_json(raw_text: str, expect: str = "object") -> str:
    """Pull the JSON object (or array) out of a model reply that may carry prose or code fences."""
    text = (raw_text or "").strip()
    fenced = _FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1)
    opener, closer = ("[", "]") if expect == "array" else ("{", "}")
    start, end = text.find(opener), text.rfind(closer)
    if start == -1 or end <= start:
        raise LLMResponseError(f"No JSON {expect} found in AI response")
    return text[start:end + 1]


def _validate_llm_response(raw_text: str, model: Type[T]) -> T:
    try:
        return model.model_validate_json(extract_json(raw_text, "object"))
    except ValidationError as exc:
        raise LLMResponseError(f"AI response failed validation: {exc}") from exc


def _validate_llm_list(raw_text: str, model: Type[T]) -> List[T]:
    try:
        return TypeAdapter(List[model]).validate_json(extract_json(raw_text, "array"))
    except ValidationError as exc:
        raise LLMResponseError(f"AI response failed validation: {exc}") from exc


def _messages(system: str, user_content) -> List[Dict]:
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user_content},
    ]


async def score_applicants_llm(project_brief: str, applicants_brief: str) -> List[Dict]:
    content = SHORTLIST_PROMPT.format(project=project_brief, applicants=applicants_brief)
    resp = await _choose_and_call(
        _messages("You are a professional casting director. Return only valid JSON.", content))
    logger.debug("Shortlist reply: %s", resp)
    return [e.model_dump() for e in _validate_llm_list(resp, ApplicantEvaluation)]


async def match_talent_llm(talent_brief: str, role_brief: str) -> Dict:
    content = TALENT_MATCH_PROMPT.format(talent=talent_brief, role=role_brief)
    resp = await _choose_and_call(_messages(
        "You are a professional casting AI assistant. Always respond with valid JSON only.", content))
    return _validate_llm_response(resp, TalentMatchPayload).model_dump()


async def analyze_profile_llm(profile_brief: str) -> Dict:
    content = PROFILE_ANALYSIS_PROMPT.format(profile=profile_brief)
    resp = await _choose_and_call(_messages(
        "You are a professional talent agent AI. Always respond with valid JSON only.", content))
    return _validate_llm_response(resp, ProfileAnalysisPayload).model_dump()


async def recommend_candidates_llm(role_brief: str, pool_brief: str, pool_size: int, limit: int) -> List[Dict]:
    content = RECOMMEND_CANDIDATES_PROMPT.format(
        role=role_brief, pool=pool_brief, pool_size=pool_size, limit=limit)
    resp = await _choose_and_call(_messages(
        "You are a professional casting director AI. Always respond with valid JSON only.", content))
    parsed = _validate_llm_response(resp, CandidateRecommendationsPayload)
    return [r.model_dump() for r in parsed.recommendations]


async def evaluate_audition_llm(role_description: str, emotional_keywords: List[str], media_url: str) -> Dict:
    text = AUDITION_EVAL_PROMPT.format(
        role_description=role_description,
        keywords=", ".join(emotional_keywords) if emotional_keywords else "none specified",
    )
    messages = [{
        "role": "user",
        "content": [
            {"type": "text", "text": text},
            {"type": "image_url", "image_url": {"url": media_url}},
        ],
    }]
    resp = await _choose_and_call(messages, vision=True, max_tokens=2000)
    logger.debug("Audition reply: %s", resp)
    return _validate_llm_response(resp, AuditionEvaluationPayload).model_dump()
