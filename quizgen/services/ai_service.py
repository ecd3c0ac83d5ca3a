import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

import httpx

from quizgen.core.config import settings
from quizgen.exceptions import BaseAppError, MissingCredentialError
from quizgen.schemas.ai import (
    AIProvider,
    AISettings,
    GenerationOutcome,
    GenerationRequest,
    GenerationStatus,
    SettingsValidation,
)
from quizgen.schemas.quiz import CanonicalQuestion
from quizgen.services import model_catalog
from quizgen.services.providers import PROVIDER_ADAPTERS, ProviderAdapter
from quizgen.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)


def _error_message(error: Exception) -> str:
    if isinstance(error, BaseAppError):
        return error.message
    return str(error) or type(error).__name__


class AIGenerationService:
    """AI 문제 생성 오케스트레이터

    설정 검증 → provider 어댑터 선택 → 1차 시도(normal) → 필요 시 2차 시도(strict).
    호출자에게 예외를 전파하지 않고, 실패 시 빈 리스트와 last_error를 남긴다.
    한 인스턴스에서 동시에 하나의 생성만 진행한다고 가정 (락 없음).
    """

    def __init__(
        self,
        store: SettingsStore,
        client: httpx.AsyncClient | None = None,
        adapters: dict[AIProvider, ProviderAdapter] | None = None,
    ):
        self.store = store
        self.client = client
        self.adapters = adapters if adapters is not None else PROVIDER_ADAPTERS
        self.is_generating = False
        self.last_result: GenerationStatus | None = None
        self.last_error: str | None = None
        self.last_request_tokens: int | None = None
        self.last_response_tokens: int | None = None

    @property
    def settings(self) -> AISettings:
        return self.store.settings

    @property
    def status(self) -> GenerationStatus:
        return GenerationStatus.GENERATING if self.is_generating else GenerationStatus.IDLE

    @asynccontextmanager
    async def _http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """주입된 클라이언트가 있으면 재사용, 없으면 호출 단위로 생성"""
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            yield client

    def set_provider(self, provider: AIProvider | str) -> AISettings:
        return self.store.set_provider(provider)

    def set_api_key(self, api_key: str) -> AISettings:
        return self.store.set_api_key(api_key)

    def set_model(self, model: str) -> AISettings:
        return self.store.set_model(model)

    def set_endpoint(self, endpoint: str | None) -> AISettings:
        return self.store.set_endpoint(endpoint)

    def validate_settings(self) -> SettingsValidation:
        """provider → API 키 → model 순서로 검증"""
        current = self.store.settings
        if not current.provider:
            return SettingsValidation(valid=False, reason="provider 설정이 필요합니다")
        if not current.api_key:
            return SettingsValidation(valid=False, reason="API 키가 필요합니다")
        if not current.model:
            return SettingsValidation(valid=False, reason="모델 설정이 필요합니다")
        return SettingsValidation(valid=True)

    def reset_errors(self) -> None:
        self.last_error = None
        self.last_request_tokens = None
        self.last_response_tokens = None

    def _record(self, outcome: GenerationOutcome) -> list[CanonicalQuestion]:
        self.last_request_tokens = outcome.usage.prompt_tokens
        self.last_response_tokens = outcome.usage.completion_tokens
        self.last_result = GenerationStatus.SUCCESS if outcome.questions else GenerationStatus.FAILED
        return outcome.questions

    async def generate_questions(self, request: GenerationRequest) -> list[CanonicalQuestion]:
        """AI로 문제 생성 (실패 시 빈 리스트, 사유는 last_error)"""
        # 토큰 사용량은 호출 단위, 실패 시 None
        self.reset_errors()
        validation = self.validate_settings()
        if not validation.valid:
            self.last_error = validation.reason
            self.last_result = GenerationStatus.FAILED
            logger.info(f"AI 설정이 올바르지 않아 문제 생성 생략: {validation.reason}")
            return []

        ai_settings = self.store.settings
        adapter = self.adapters[ai_settings.provider]
        self.is_generating = True
        logger.info(
            f"AI 문제 생성 시작: provider={ai_settings.provider.value}, model={ai_settings.model}, "
            f"count={request.count}, category={request.category}, difficulty={request.difficulty}"
        )

        try:
            async with self._http_client() as client:
                first_error: Exception | None = None
                try:
                    outcome = await adapter(client, ai_settings, request, False)
                    if outcome.questions:
                        logger.info(f"AI 문제 생성 성공: {len(outcome.questions)}개")
                        return self._record(outcome)
                    logger.warning("1차 시도 결과가 비어있음, strict 모드로 재시도")
                except Exception as e:
                    first_error = e
                    logger.warning(
                        f"1차 시도 실패, strict 모드로 재시도: error_type={type(e).__name__}, "
                        f"error_message={_error_message(e)[:200]}"
                    )

                try:
                    outcome = await adapter(client, ai_settings, request, True)
                except Exception as e:
                    message = _error_message(e)
                    if first_error is not None:
                        message = f"{message} (initial error: {_error_message(first_error)})"
                    self.last_error = message
                    self.last_result = GenerationStatus.FAILED
                    logger.error(
                        f"AI 문제 생성 실패 (2회 시도): error_type={type(e).__name__}, "
                        f"error_message={message[:300]}"
                    )
                    return []

                logger.info(f"strict 모드 재시도 완료: {len(outcome.questions)}개")
                return self._record(outcome)
        finally:
            self.is_generating = False

    async def generate_or_fallback(
        self,
        request: GenerationRequest,
        fallback: Callable[[GenerationRequest], list[CanonicalQuestion]],
    ) -> list[CanonicalQuestion]:
        """AI 생성 결과가 없으면 내장 문제 은행(fallback)으로 대체"""
        questions = await self.generate_questions(request)
        if questions:
            return questions
        logger.info(f"AI 생성 결과가 없어 내장 문제 사용 (last_error={self.last_error})")
        return fallback(request)

    async def list_models(self) -> list[str]:
        """현재 provider의 모델 목록 (API 키 필요)"""
        current = self.store.settings
        if not current.api_key:
            raise MissingCredentialError(current.provider.value)
        async with self._http_client() as client:
            return await model_catalog.list_models(client, current)
