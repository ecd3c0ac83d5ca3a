from fastapi import APIRouter, Depends, status

from quizgen.api.deps import get_ai_service
from quizgen.schemas.ai import (
    AISettingsResponse,
    AISettingsUpdateRequest,
    GenerateQuestionsResponse,
    GenerationRequest,
    GenerationStatusResponse,
    ModelListResponse,
    SettingsValidation,
    TokenUsage,
)
from quizgen.services.ai_service import AIGenerationService

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/settings", response_model=AISettingsResponse)
async def get_settings(service: AIGenerationService = Depends(get_ai_service)):
    """AI 설정 조회 API (API 키는 마스킹)"""
    return AISettingsResponse.from_settings(service.settings)


@router.put("/settings", response_model=AISettingsResponse)
async def update_settings(
    request: AISettingsUpdateRequest,
    service: AIGenerationService = Depends(get_ai_service),
):
    """AI 설정 변경 API (보낸 필드만 반영, provider 변경 시 모델 기본값으로 초기화)"""
    updated = service.store.update(
        provider=request.provider,
        api_key=request.api_key,
        model=request.model,
        endpoint=request.endpoint,
    )
    return AISettingsResponse.from_settings(updated)


@router.get("/settings/validate", response_model=SettingsValidation)
async def validate_settings(service: AIGenerationService = Depends(get_ai_service)):
    """AI 설정 검증 API"""
    return service.validate_settings()


@router.get("/models", response_model=ModelListResponse)
async def list_models(service: AIGenerationService = Depends(get_ai_service)):
    """현재 provider 모델 목록 조회 API"""
    models = await service.list_models()
    return ModelListResponse(provider=service.settings.provider, models=models, total=len(models))


@router.post("/generate", response_model=GenerateQuestionsResponse, status_code=status.HTTP_200_OK)
async def generate_questions(
    request: GenerationRequest,
    service: AIGenerationService = Depends(get_ai_service),
):
    """AI 문제 생성 API (실패해도 200, questions가 비어있으면 error 확인)"""
    questions = await service.generate_questions(request)
    return GenerateQuestionsResponse(
        questions=questions,
        total=len(questions),
        error=service.last_error,
        usage=TokenUsage(
            prompt_tokens=service.last_request_tokens,
            completion_tokens=service.last_response_tokens,
        ),
    )


@router.get("/status", response_model=GenerationStatusResponse)
async def get_status(service: AIGenerationService = Depends(get_ai_service)):
    """생성 상태 조회 API"""
    return GenerationStatusResponse(
        status=service.status,
        last_result=service.last_result,
        is_generating=service.is_generating,
        last_error=service.last_error,
        last_request_tokens=service.last_request_tokens,
        last_response_tokens=service.last_response_tokens,
    )


@router.delete("/errors", status_code=status.HTTP_204_NO_CONTENT)
async def reset_errors(service: AIGenerationService = Depends(get_ai_service)):
    """마지막 에러/토큰 사용량 초기화 API"""
    service.reset_errors()
