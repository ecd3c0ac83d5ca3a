"""AI API 통합 테스트"""
from unittest.mock import AsyncMock, patch

from factories import make_payload
from quizgen.exceptions import MissingCredentialError, ProviderHTTPError
from quizgen.schemas.ai import GenerationOutcome, TokenUsage
from quizgen.services.response_parser import parse_questions


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_get_settings_masks_api_key(client):
    """설정 조회 시 API 키 원문은 노출하지 않음"""
    response = client.get("/api/v1/ai/settings")

    assert response.status_code == 200
    data = response.json()
    assert data["provider"] == "openai"
    assert data["model"] == "gpt-4o-mini"
    assert data["has_api_key"] is True
    assert "api_key_preview" not in data
    assert "sk-test-1234567890" not in response.text
    assert "7890" not in response.text


def test_update_settings(client):
    """provider 변경 시 모델 기본값으로 초기화, 저장소에도 반영"""
    response = client.put(
        "/api/v1/ai/settings",
        json={"provider": "gemini", "apiKey": "g-key-0000", "endpoint": "  "},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["provider"] == "gemini"
    assert data["model"] == "gemini-1.5-flash-latest"
    assert data["endpoint"] is None
    assert client.service.settings.api_key == "g-key-0000"


def test_update_settings_invalid_provider(client):
    response = client.put("/api/v1/ai/settings", json={"provider": "llama"})

    assert response.status_code == 422


def test_validate_settings_endpoint(client):
    client.put("/api/v1/ai/settings", json={"apiKey": ""})

    response = client.get("/api/v1/ai/settings/validate")

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert "API 키" in data["reason"]


def test_generate_success(client):
    """문제 생성 성공: camelCase 필드로 응답"""
    questions = parse_questions(make_payload(3))
    with patch.object(
        client.service,
        "adapters",
        {provider: AsyncMock(return_value=GenerationOutcome(questions=questions)) for provider in client.service.adapters},
    ):
        response = client.post(
            "/api/v1/ai/generate",
            json={"count": 3, "category": "science", "difficulty": "mixed", "language": "en"},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["error"] is None
    assert [q["id"] for q in data["questions"]] == [1, 2, 3]
    assert "correctAnswer" in data["questions"][0]


def test_generate_failure_returns_error(client):
    """두 번 모두 실패해도 200 + 빈 리스트 + error"""
    failing = AsyncMock(side_effect=ProviderHTTPError("OpenAI", 429, "rate limited"))
    with patch.object(client.service, "adapters", {provider: failing for provider in client.service.adapters}):
        response = client.post("/api/v1/ai/generate", json={"count": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["questions"] == []
    assert data["total"] == 0
    assert "rate limited" in data["error"]

    status_response = client.get("/api/v1/ai/status")
    assert status_response.json()["last_result"] == "failed"
    assert status_response.json()["status"] == "idle"


def test_generate_failure_has_no_usage_from_previous_call(client):
    """성공 후 실패한 생성 요청은 이전 토큰 사용량을 돌려주지 않음"""
    questions = parse_questions(make_payload(1))
    succeeding = AsyncMock(
        return_value=GenerationOutcome(
            questions=questions, usage=TokenUsage(prompt_tokens=111, completion_tokens=222)
        )
    )
    with patch.object(client.service, "adapters", {provider: succeeding for provider in client.service.adapters}):
        first = client.post("/api/v1/ai/generate", json={"count": 1})
    assert first.json()["usage"] == {"prompt_tokens": 111, "completion_tokens": 222}

    client.put("/api/v1/ai/settings", json={"apiKey": ""})
    response = client.post("/api/v1/ai/generate", json={"count": 1})

    data = response.json()
    assert data["questions"] == []
    assert data["error"] == "API 키가 필요합니다"
    assert data["usage"] == {"prompt_tokens": None, "completion_tokens": None}

    status_data = client.get("/api/v1/ai/status").json()
    assert status_data["last_request_tokens"] is None
    assert status_data["last_response_tokens"] is None


def test_generate_invalid_request(client):
    response = client.post("/api/v1/ai/generate", json={"count": 0})

    assert response.status_code == 422


def test_list_models_without_api_key(client):
    """API 키 없이 모델 목록 조회 시 400"""
    client.put("/api/v1/ai/settings", json={"apiKey": ""})

    response = client.get("/api/v1/ai/models")

    assert response.status_code == 400
    assert "API 키" in response.json()["detail"]


def test_list_models(client):
    with patch.object(client.service, "list_models", AsyncMock(return_value=["gpt-4o", "gpt-4o-mini"])):
        response = client.get("/api/v1/ai/models")

    assert response.status_code == 200
    assert response.json() == {"provider": "openai", "models": ["gpt-4o", "gpt-4o-mini"], "total": 2}


def test_list_models_provider_error(client):
    error = ProviderHTTPError("OpenAI", 401, "bad key", message="OpenAI list models error (401): bad key")
    with patch.object(client.service, "list_models", AsyncMock(side_effect=error)):
        response = client.get("/api/v1/ai/models")

    assert response.status_code == 502
    assert response.json()["detail"] == "OpenAI list models error (401): bad key"


def test_reset_errors(client):
    client.service.last_error = "boom"

    response = client.delete("/api/v1/ai/errors")

    assert response.status_code == 204
    assert client.service.last_error is None


def test_missing_credential_error_status():
    assert MissingCredentialError("OpenAI").status_code == 400
