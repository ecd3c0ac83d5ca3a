"""Model Catalog 테스트"""
import httpx
import pytest

from factories import RecordingTransport
from quizgen.exceptions import MissingCredentialError, ProviderHTTPError
from quizgen.schemas.ai import AIProvider, AISettings
from quizgen.services import model_catalog


@pytest.mark.asyncio
async def test_list_models_requires_api_key():
    transport = RecordingTransport()

    async with transport.client() as client:
        with pytest.raises(MissingCredentialError):
            await model_catalog.list_models(client, AISettings())

    assert transport.requests == []


@pytest.mark.asyncio
async def test_list_openai_models_sorted():
    transport = RecordingTransport(
        httpx.Response(200, json={"data": [{"id": "gpt-4o"}, {"id": "gpt-3.5-turbo"}, {"object": "model"}]})
    )

    async with transport.client() as client:
        models = await model_catalog.list_models(client, AISettings(api_key="sk-abc"))

    assert models == ["gpt-3.5-turbo", "gpt-4o"]
    assert transport.requests[0].headers["Authorization"] == "Bearer sk-abc"
    assert str(transport.requests[0].url) == model_catalog.OPENAI_MODELS_ENDPOINT


@pytest.mark.asyncio
async def test_list_openai_models_error():
    transport = RecordingTransport(httpx.Response(401, text="unauthorized"))

    async with transport.client() as client:
        with pytest.raises(ProviderHTTPError) as exc_info:
            await model_catalog.list_models(client, AISettings(api_key="sk-bad"))

    assert exc_info.value.message == "OpenAI list models error (401): unauthorized"


@pytest.mark.asyncio
async def test_list_gemini_models_falls_back_to_v1beta():
    """v1 실패 → v1beta, generateContent 지원 모델만, models/ 접두어 제거 + 중복 제거"""
    transport = RecordingTransport(
        httpx.Response(404, text="not found"),
        httpx.Response(
            200,
            json={
                "models": [
                    {"name": "models/gemini-2.0-flash", "supportedGenerationMethods": ["generateContent"]},
                    {"name": "models/text-embedding-004", "supportedGenerationMethods": ["embedContent"]},
                    {"name": "models/gemini-1.5-pro"},
                    {"name": "models/gemini-2.0-flash", "supportedGenerationMethods": ["generateContent"]},
                    {"name": "tunedModels/custom"},
                ]
            },
        ),
    )
    ai_settings = AISettings(provider=AIProvider.GEMINI, api_key="g-key")

    async with transport.client() as client:
        models = await model_catalog.list_models(client, ai_settings)

    assert models == ["gemini-1.5-pro", "gemini-2.0-flash"]
    assert transport.requests[0].url.path == "/v1/models"
    assert transport.requests[1].url.path == "/v1beta/models"
    assert transport.requests[1].url.params["key"] == "g-key"


@pytest.mark.asyncio
async def test_list_claude_models_static_fallback():
    """Claude 조회 실패 시 정적 목록"""
    transport = RecordingTransport(httpx.Response(500, text="error"))
    ai_settings = AISettings(provider=AIProvider.CLAUDE, api_key="ant-key")

    async with transport.client() as client:
        models = await model_catalog.list_models(client, ai_settings)

    assert models == model_catalog.CLAUDE_FALLBACK_MODELS
    assert "claude-3-haiku-20240307" in models


@pytest.mark.asyncio
async def test_list_claude_models_success():
    transport = RecordingTransport(
        httpx.Response(200, json={"data": [{"id": "claude-3-5-sonnet-20241022"}, {"id": "claude-3-5-haiku-20241022"}]})
    )
    ai_settings = AISettings(provider=AIProvider.CLAUDE, api_key="ant-key")

    async with transport.client() as client:
        models = await model_catalog.list_models(client, ai_settings)

    assert models == ["claude-3-5-haiku-20241022", "claude-3-5-sonnet-20241022"]
    assert transport.requests[0].headers["x-api-key"] == "ant-key"
