import json
import logging
from pathlib import Path

from pydantic import ValidationError

from quizgen.exceptions import InvalidSettingsError
from quizgen.schemas.ai import AIProvider, AISettings, default_model_for

logger = logging.getLogger(__name__)

STORAGE_KEY = "ai-settings.v1"


def _to_provider(value: AIProvider | str) -> AIProvider:
    try:
        return AIProvider(value)
    except ValueError:
        raise InvalidSettingsError(f"지원하지 않는 provider입니다: {value}")


class LocalStorage:
    """JSON 파일 기반 key-value 저장소 (브라우저 localStorage 대체)

    읽기/쓰기 실패는 로그만 남기고 무시한다 (설정 저장은 편의 기능).
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"로컬 저장소 읽기 실패: path={self.path}, error_type={type(e).__name__}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)

    def _write_all(self, data: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8", newline="\n") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.warning(f"로컬 저장소 쓰기 실패: path={self.path}, error_type={type(e).__name__}")


class SettingsStore:
    """AI 설정 보관소: 생성 시 저장소에서 복원하고, 변경될 때마다 다시 저장"""

    def __init__(self, storage: LocalStorage | None = None):
        self.storage = storage
        self.settings = self._load()

    def _load(self) -> AISettings:
        if self.storage is None:
            return AISettings()
        raw = self.storage.get_item(STORAGE_KEY)
        if not raw:
            return AISettings()
        try:
            return AISettings.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"저장된 AI 설정이 올바르지 않아 기본값 사용: errors={e.error_count()}")
            return AISettings()

    def _save(self) -> None:
        if self.storage is None:
            return
        self.storage.set_item(STORAGE_KEY, json.dumps(self.settings.to_storage(), ensure_ascii=False))

    def _replace(self, **changes) -> AISettings:
        data = self.settings.model_dump()
        data.update(changes)
        self.settings = AISettings.model_validate(data)
        self._save()
        return self.settings

    def set_provider(self, provider: AIProvider | str) -> AISettings:
        """provider 변경 (모델은 해당 provider 기본값으로 초기화)"""
        provider = _to_provider(provider)
        logger.info(f"AI provider 변경: {provider.value}")
        return self._replace(provider=provider, model=default_model_for(provider))

    def set_api_key(self, api_key: str) -> AISettings:
        return self._replace(api_key=api_key.strip())

    def set_model(self, model: str) -> AISettings:
        return self._replace(model=model.strip())

    def set_endpoint(self, endpoint: str | None) -> AISettings:
        return self._replace(endpoint=(endpoint or "").strip() or None)

    def update(
        self,
        provider: AIProvider | str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        endpoint: str | None = None,
    ) -> AISettings:
        """여러 필드를 한 번에 변경하고 한 번만 저장"""
        changes: dict = {}
        if provider is not None:
            changes["provider"] = _to_provider(provider)
            changes["model"] = default_model_for(changes["provider"])
        if api_key is not None:
            changes["api_key"] = api_key.strip()
        if model is not None:
            changes["model"] = model.strip()
        if endpoint is not None:
            changes["endpoint"] = (endpoint or "").strip() or None
        if not changes:
            return self.settings
        return self._replace(**changes)
