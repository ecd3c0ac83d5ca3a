import logging

import httpx

from quizgen.exceptions import EmptyResponseError, MissingCredentialError
from quizgen.schemas.ai import AIProvider, AISettings, GenerationOutcome, GenerationRequest, default_model_for
from quizgen.services import prompt_builder
from quizgen.services.providers.base import post_json, resolve_endpoint, resolve_model
from quizgen.services.response_parser import extract_openai_text, extract_openai_usage, parse_questions

logger = logging.getLogger(__name__)

PROVIDER_NAME = "OpenAI"
DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"


async def generate(
    client: httpx.AsyncClient,
    ai_settings: AISettings,
    request: GenerationRequest,
    strict: bool = False,
) -> GenerationOutcome:
    """OpenAI Chat Completions API로 문제 생성"""
    if not ai_settings.api_key:
        raise MissingCredentialError(PROVIDER_NAME)

    endpoint = resolve_endpoint(ai_settings, DEFAULT_ENDPOINT)
    model = resolve_model(ai_settings, default_model_for(AIProvider.OPENAI))

    body = {
        "model": model,
        "temperature": prompt_builder.temperature_for(strict),
        "messages": [
            {"role": "system", "content": prompt_builder.SYSTEM_INSTRUCTION},
            {"role": "user", "content": prompt_builder.prompt_for(request, strict)},
        ],
        # JSON 모드 (지원하지 않는 호환 서버는 무시)
        "response_format": {"type": "json_object"},
    }

    logger.debug(f"OpenAI API 요청 시작: model={model}, strict={strict}")
    data = await post_json(
        client,
        PROVIDER_NAME,
        endpoint,
        body,
        headers={"Authorization": f"Bearer {ai_settings.api_key}"},
    )

    text = extract_openai_text(data)
    if not text:
        raise EmptyResponseError(PROVIDER_NAME)

    return GenerationOutcome(questions=parse_questions(text), usage=extract_openai_usage(data))
