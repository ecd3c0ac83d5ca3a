import logging

import httpx

from quizgen.core.config import settings
from quizgen.exceptions import EmptyResponseError, MissingCredentialError
from quizgen.schemas.ai import AIProvider, AISettings, GenerationOutcome, GenerationRequest, default_model_for
from quizgen.services import prompt_builder
from quizgen.services.providers.base import post_json, resolve_endpoint, resolve_model
from quizgen.services.response_parser import extract_claude_text, extract_claude_usage, parse_questions

logger = logging.getLogger(__name__)

PROVIDER_NAME = "Claude"
DEFAULT_ENDPOINT = "https://api.anthropic.com/v1/messages"


def claude_headers(api_key: str) -> dict:
    return {
        "x-api-key": api_key,
        "anthropic-version": settings.anthropic_version,
    }


async def generate(
    client: httpx.AsyncClient,
    ai_settings: AISettings,
    request: GenerationRequest,
    strict: bool = False,
) -> GenerationOutcome:
    """Anthropic Messages API로 문제 생성"""
    if not ai_settings.api_key:
        raise MissingCredentialError(PROVIDER_NAME)

    endpoint = resolve_endpoint(ai_settings, DEFAULT_ENDPOINT)
    model = resolve_model(ai_settings, default_model_for(AIProvider.CLAUDE))

    body = {
        "model": model,
        "max_tokens": settings.claude_max_tokens,
        "temperature": prompt_builder.temperature_for(strict),
        "system": prompt_builder.SYSTEM_INSTRUCTION,
        "messages": [
            {"role": "user", "content": prompt_builder.prompt_for(request, strict)},
        ],
    }

    logger.debug(f"Claude API 요청 시작: model={model}, strict={strict}")
    data = await post_json(client, PROVIDER_NAME, endpoint, body, headers=claude_headers(ai_settings.api_key))

    text = extract_claude_text(data)
    if not text:
        raise EmptyResponseError(PROVIDER_NAME)

    return GenerationOutcome(questions=parse_questions(text), usage=extract_claude_usage(data))
