import pytest
from fastapi.testclient import TestClient

from quizgen.api.deps import get_ai_service
from quizgen.main import app
from quizgen.services.ai_service import AIGenerationService
from quizgen.services.settings_store import LocalStorage, SettingsStore


@pytest.fixture
def storage(tmp_path):
    """임시 파일 기반 로컬 저장소"""
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def store(storage):
    """API 키가 설정된 OpenAI 설정 보관소"""
    settings_store = SettingsStore(storage)
    settings_store.set_api_key("sk-test-1234567890")
    return settings_store


@pytest.fixture
def client(store):
    """AI 서비스 의존성을 테스트용으로 교체한 TestClient"""
    service = AIGenerationService(store)
    app.dependency_overrides[get_ai_service] = lambda: service
    with TestClient(app) as test_client:
        test_client.service = service
        yield test_client
    app.dependency_overrides.clear()
