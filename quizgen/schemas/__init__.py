from quizgen.schemas.ai import (
    AIProvider,
    AISettings,
    AISettingsResponse,
    AISettingsUpdateRequest,
    GenerateQuestionsResponse,
    GenerationOutcome,
    GenerationRequest,
    GenerationStatus,
    GenerationStatusResponse,
    ModelListResponse,
    SettingsValidation,
    TokenUsage,
    default_model_for,
)
from quizgen.schemas.quiz import (
    DEFAULT_CATEGORY,
    DEFAULT_DIFFICULTY,
    QUIZ_CATEGORIES,
    CanonicalQuestion,
    Difficulty,
    QuizCategory,
    RequestedDifficulty,
)

__all__ = [
    "AIProvider",
    "AISettings",
    "AISettingsResponse",
    "AISettingsUpdateRequest",
    "GenerateQuestionsResponse",
    "GenerationOutcome",
    "GenerationRequest",
    "GenerationStatus",
    "GenerationStatusResponse",
    "ModelListResponse",
    "SettingsValidation",
    "TokenUsage",
    "default_model_for",
    "CanonicalQuestion",
    "QuizCategory",
    "Difficulty",
    "RequestedDifficulty",
    "QUIZ_CATEGORIES",
    "DEFAULT_CATEGORY",
    "DEFAULT_DIFFICULTY",
]
