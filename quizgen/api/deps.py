from functools import lru_cache

from quizgen.core.config import settings
from quizgen.services.ai_service import AIGenerationService
from quizgen.services.settings_store import LocalStorage, SettingsStore


@lru_cache
def get_ai_service() -> AIGenerationService:
    """로컬 단일 사용자용 AI 생성 서비스 싱글톤"""
    store = SettingsStore(LocalStorage(settings.settings_file))
    return AIGenerationService(store)
