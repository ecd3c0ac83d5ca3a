import logging
from typing import Any, Awaitable, Callable

import httpx

from quizgen.exceptions import ProviderHTTPError
from quizgen.schemas.ai import AISettings, GenerationOutcome, GenerationRequest

logger = logging.getLogger(__name__)

# 어댑터 공통 시그니처: (client, settings, request, strict) -> GenerationOutcome
ProviderAdapter = Callable[
    [httpx.AsyncClient, AISettings, GenerationRequest, bool],
    Awaitable[GenerationOutcome],
]


def error_body(response: httpx.Response) -> str:
    """에러 응답 본문 (비어있으면 reason phrase)"""
    return response.text or response.reason_phrase


def response_json(response: httpx.Response, provider: str) -> Any:
    """2xx 응답 JSON 디코딩 (실패 시 빈 dict → 이후 EmptyResponseError)"""
    try:
        return response.json()
    except ValueError:
        logger.warning(f"{provider} 응답이 JSON이 아닙니다: status_code={response.status_code}")
        return {}


async def post_json(
    client: httpx.AsyncClient,
    provider: str,
    url: str,
    body: dict,
    headers: dict | None = None,
    params: dict | None = None,
) -> Any:
    """JSON POST 요청 후 응답 JSON 반환, 2xx가 아니면 ProviderHTTPError"""
    response = await client.post(url, json=body, headers=headers, params=params)
    if not response.is_success:
        logger.warning(f"{provider} API 에러 응답: status_code={response.status_code}")
        raise ProviderHTTPError(provider, response.status_code, error_body(response))
    logger.debug(f"{provider} API 응답 수신: status_code={response.status_code}")
    return response_json(response, provider)


def resolve_endpoint(ai_settings: AISettings, default: str) -> str:
    return (ai_settings.endpoint or "").strip() or default


def resolve_model(ai_settings: AISettings, default: str) -> str:
    return (ai_settings.model or "").strip() or default
