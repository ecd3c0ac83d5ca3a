"""provider별 사용 가능한 모델 목록 조회 (설정 화면 검증용)"""
import logging

import httpx

from quizgen.exceptions import MissingCredentialError, ProviderHTTPError
from quizgen.schemas.ai import AIProvider, AISettings
from quizgen.services.providers.base import error_body, resolve_endpoint, response_json
from quizgen.services.providers.claude import claude_headers
from quizgen.services.providers.gemini import API_BASE as GEMINI_API_BASE

logger = logging.getLogger(__name__)

OPENAI_MODELS_ENDPOINT = "https://api.openai.com/v1/models"
CLAUDE_MODELS_ENDPOINT = "https://api.anthropic.com/v1/models"

# Claude 모델 목록 조회 실패 시 사용하는 정적 목록
CLAUDE_FALLBACK_MODELS = sorted([
    "claude-3-haiku-20240307",
    "claude-3-sonnet-20240229",
    "claude-3-opus-20240229",
    "claude-3-5-sonnet-20240620",
])


async def _get_json(client: httpx.AsyncClient, provider: str, url: str, **kwargs) -> dict:
    response = await client.get(url, **kwargs)
    if not response.is_success:
        raise ProviderHTTPError(
            provider,
            response.status_code,
            error_body(response),
            message=f"{provider} list models error ({response.status_code}): {error_body(response)}",
        )
    data = response_json(response, provider)
    return data if isinstance(data, dict) else {}


def _model_ids(data: dict) -> list[str]:
    items = data.get("data")
    if not isinstance(items, list):
        return []
    return sorted(str(m["id"]) for m in items if isinstance(m, dict) and m.get("id"))


async def list_openai_models(client: httpx.AsyncClient, ai_settings: AISettings) -> list[str]:
    url = resolve_endpoint(ai_settings, OPENAI_MODELS_ENDPOINT)
    data = await _get_json(client, "OpenAI", url, headers={"Authorization": f"Bearer {ai_settings.api_key}"})
    return _model_ids(data)


async def list_gemini_models(client: httpx.AsyncClient, ai_settings: AISettings) -> list[str]:
    """v1 조회 실패 시 v1beta로 재시도, generateContent 지원 모델만 반환"""
    params = {"key": ai_settings.api_key}
    try:
        data = await _get_json(client, "Gemini", f"{GEMINI_API_BASE}/v1/models", params=params)
    except ProviderHTTPError as e:
        logger.info(f"Gemini v1 모델 목록 조회 실패 (status_code={e.status}), v1beta로 재시도")
        data = await _get_json(client, "Gemini", f"{GEMINI_API_BASE}/v1beta/models", params=params)

    models = data.get("models")
    if not isinstance(models, list):
        return []

    names = set()
    for m in models:
        if not isinstance(m, dict):
            continue
        methods = m.get("supportedGenerationMethods")
        if isinstance(methods, list) and "generateContent" not in methods:
            continue
        name = str(m.get("name") or "")
        if name.startswith("models/"):
            names.add(name.removeprefix("models/"))
    return sorted(names)


async def list_claude_models(client: httpx.AsyncClient, ai_settings: AISettings) -> list[str]:
    """조회 실패 또는 빈 목록이면 정적 목록 반환"""
    url = resolve_endpoint(ai_settings, CLAUDE_MODELS_ENDPOINT)
    try:
        data = await _get_json(client, "Claude", url, headers=claude_headers(ai_settings.api_key))
    except (ProviderHTTPError, httpx.HTTPError) as e:
        logger.warning(f"Claude 모델 목록 조회 실패, 정적 목록 사용: error_type={type(e).__name__}")
        return list(CLAUDE_FALLBACK_MODELS)

    ids = _model_ids(data)
    return ids or list(CLAUDE_FALLBACK_MODELS)


async def list_models(client: httpx.AsyncClient, ai_settings: AISettings) -> list[str]:
    """현재 provider의 모델 목록"""
    if not ai_settings.api_key:
        raise MissingCredentialError(ai_settings.provider.value)

    if ai_settings.provider == AIProvider.OPENAI:
        return await list_openai_models(client, ai_settings)
    if ai_settings.provider == AIProvider.GEMINI:
        return await list_gemini_models(client, ai_settings)
    return await list_claude_models(client, ai_settings)
