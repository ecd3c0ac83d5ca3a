import logging
import re
from dataclasses import dataclass
from typing import Callable
from urllib.parse import quote

import httpx

from quizgen.exceptions import EmptyResponseError, MissingCredentialError, ProviderHTTPError
from quizgen.schemas.ai import AIProvider, AISettings, GenerationOutcome, GenerationRequest, default_model_for
from quizgen.services import prompt_builder
from quizgen.services.providers.base import post_json, resolve_endpoint, resolve_model
from quizgen.services.response_parser import extract_gemini_text, extract_gemini_usage, parse_questions

logger = logging.getLogger(__name__)

PROVIDER_NAME = "Gemini"
API_BASE = "https://generativelanguage.googleapis.com"


def generate_content_url(model: str, version: str = "v1") -> str:
    return f"{API_BASE}/{version}/models/{quote(model, safe='')}:generateContent"


def strip_latest_suffix(model: str) -> str:
    """v1beta 폴백용 모델명 정규화 (-latest 제거)"""
    return re.sub(r"-latest$", "", model)


@dataclass(frozen=True)
class GeminiAttempt:
    """Gemini 호출 시도 1회 (이전 실패 status 목록으로 실행 여부 결정)"""
    label: str
    url: str
    body: dict
    should_run: Callable[[list[int]], bool]


def _request_body(prompt: str, temperature: float, with_mime: bool) -> dict:
    generation_config: dict = {"temperature": temperature}
    if with_mime:
        generation_config["responseMimeType"] = "application/json"
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }


def build_attempts(ai_settings: AISettings, request: GenerationRequest, strict: bool) -> list[GeminiAttempt]:
    """시도 순서: 원본 → (400) MIME 힌트 제거 재시도 → (404) v1beta 폴백"""
    model = resolve_model(ai_settings, default_model_for(AIProvider.GEMINI))
    endpoint = resolve_endpoint(ai_settings, generate_content_url(model))
    prompt = prompt_builder.prompt_for(request, strict)
    temperature = prompt_builder.temperature_for(strict)

    return [
        GeminiAttempt(
            label=f"{PROVIDER_NAME} error",
            url=endpoint,
            body=_request_body(prompt, temperature, with_mime=True),
            should_run=lambda statuses: True,
        ),
        # 일부 배포 환경은 responseMimeType을 400으로 거부
        GeminiAttempt(
            label="Retry error",
            url=endpoint,
            body=_request_body(prompt, temperature, with_mime=False),
            should_run=lambda statuses: statuses[-1] == 400,
        ),
        # 일부 모델은 v1beta에서만 동작
        GeminiAttempt(
            label="Fallback error",
            url=generate_content_url(strip_latest_suffix(model), version="v1beta"),
            body=_request_body(prompt, temperature, with_mime=False),
            should_run=lambda statuses: 404 in statuses,
        ),
    ]


async def run_attempts(client: httpx.AsyncClient, api_key: str, attempts: list[GeminiAttempt]) -> dict:
    """조건에 맞는 시도를 순서대로 실행, 모두 실패하면 기록된 에러를 합쳐서 예외 발생"""
    failures: list[tuple[GeminiAttempt, ProviderHTTPError]] = []
    for attempt in attempts:
        if failures and not attempt.should_run([e.status for _, e in failures]):
            continue
        try:
            return await post_json(client, PROVIDER_NAME, attempt.url, attempt.body, params={"key": api_key})
        except ProviderHTTPError as e:
            logger.warning(f"Gemini API 시도 실패: {attempt.label} (status_code={e.status})")
            failures.append((attempt, e))

    last = failures[-1][1]
    message = " | ".join(f"{attempt.label} ({e.status}): {e.body}" for attempt, e in failures)
    raise ProviderHTTPError(PROVIDER_NAME, last.status, last.body, message=message)


async def generate(
    client: httpx.AsyncClient,
    ai_settings: AISettings,
    request: GenerationRequest,
    strict: bool = False,
) -> GenerationOutcome:
    """Gemini generateContent API로 문제 생성 (API 키는 쿼리 파라미터)"""
    if not ai_settings.api_key:
        raise MissingCredentialError(PROVIDER_NAME)

    logger.debug(f"Gemini API 요청 시작: model={ai_settings.model}, strict={strict}")
    data = await run_attempts(client, ai_settings.api_key, build_attempts(ai_settings, request, strict))

    text = extract_gemini_text(data)
    if not text:
        raise EmptyResponseError(PROVIDER_NAME)

    return GenerationOutcome(questions=parse_questions(text), usage=extract_gemini_usage(data))
