from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from quizgen.schemas.quiz import CanonicalQuestion, QuizCategory, RequestedDifficulty


class AIProvider(str, Enum):
    """지원하는 AI 제공자"""
    OPENAI = "openai"
    GEMINI = "gemini"
    CLAUDE = "claude"


DEFAULT_MODELS: dict[AIProvider, str] = {
    AIProvider.OPENAI: "gpt-4o-mini",
    # -latest 별칭은 v1beta 폴백 시 제거됨
    AIProvider.GEMINI: "gemini-1.5-flash-latest",
    AIProvider.CLAUDE: "claude-3-haiku-20240307",
}


def default_model_for(provider: AIProvider) -> str:
    """provider별 기본 모델"""
    return DEFAULT_MODELS[AIProvider(provider)]


class GenerationStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    SUCCESS = "success"
    FAILED = "failed"


class AISettings(BaseModel):
    """AI 제공자 설정 (로컬 저장소에는 camelCase로 저장)"""
    model_config = ConfigDict(populate_by_name=True)

    provider: AIProvider = Field(AIProvider.OPENAI, description="AI 제공자")
    api_key: str = Field("", alias="apiKey", repr=False, description="API 키 (로그 출력 금지)")
    model: str = Field("", description="모델 ID")
    endpoint: str | None = Field(None, description="사용자 지정 엔드포인트")

    @model_validator(mode="before")
    @classmethod
    def fill_default_model(cls, data: Any) -> Any:
        """model이 없으면 provider 기본 모델로 채움"""
        if isinstance(data, dict) and data.get("model") is None:
            data = dict(data)
            try:
                provider = AIProvider(data.get("provider") or AIProvider.OPENAI)
            except ValueError:
                # 잘못된 provider는 필드 검증에서 에러 처리
                return data
            data["model"] = default_model_for(provider)
        return data

    def to_storage(self) -> dict:
        """로컬 저장소 직렬화 형식"""
        return self.model_dump(mode="json", by_alias=True)


class GenerationRequest(BaseModel):
    """AI 문제 생성 요청 (생성 후 변경 불가)"""
    model_config = ConfigDict(frozen=True)

    count: int = Field(..., ge=1, description="생성할 문제 개수")
    category: QuizCategory | None = Field(None, description="카테고리 (없으면 제한 없음)")
    difficulty: RequestedDifficulty = Field("mixed", description="난이도 (mixed면 섞어서)")
    language: str = Field("en", min_length=1, description="출력 언어 코드 (예: en, ko)")


class TokenUsage(BaseModel):
    """토큰 사용량 (provider가 제공하지 않으면 None)"""
    prompt_tokens: int | None = None
    completion_tokens: int | None = None


class GenerationOutcome(BaseModel):
    """provider 어댑터 1회 호출 결과"""
    questions: list[CanonicalQuestion] = Field(default_factory=list)
    usage: TokenUsage = Field(default_factory=TokenUsage)


class SettingsValidation(BaseModel):
    """설정 검증 결과"""
    valid: bool
    reason: str | None = None


class AISettingsUpdateRequest(BaseModel):
    """설정 변경 요청 스키마 (보낸 필드만 반영)"""
    model_config = ConfigDict(populate_by_name=True)

    provider: AIProvider | None = None
    api_key: str | None = Field(None, alias="apiKey")
    model: str | None = None
    endpoint: str | None = None


class AISettingsResponse(BaseModel):
    """설정 응답 스키마 (API 키는 설정 여부만 노출)"""
    provider: AIProvider
    model: str
    endpoint: str | None
    has_api_key: bool

    @classmethod
    def from_settings(cls, ai_settings: AISettings) -> "AISettingsResponse":
        return cls(
            provider=ai_settings.provider,
            model=ai_settings.model,
            endpoint=ai_settings.endpoint,
            has_api_key=bool(ai_settings.api_key),
        )


class GenerateQuestionsResponse(BaseModel):
    """문제 생성 응답 스키마 (실패 시 빈 리스트 + error)"""
    questions: list[CanonicalQuestion]
    total: int
    error: str | None = None
    usage: TokenUsage


class ModelListResponse(BaseModel):
    """모델 목록 응답 스키마"""
    provider: AIProvider
    models: list[str]
    total: int


class GenerationStatusResponse(BaseModel):
    """생성 상태 응답 스키마"""
    status: GenerationStatus
    last_result: GenerationStatus | None = Field(None, description="마지막 생성 결과 (success | failed)")
    is_generating: bool
    last_error: str | None
    last_request_tokens: int | None
    last_response_tokens: int | None
