from quizgen.services.prompt_builder import build_prompt, build_strict_prompt
from quizgen.services.response_parser import parse_questions, strip_code_fences
from quizgen.services.settings_store import LocalStorage, SettingsStore
from quizgen.services.ai_service import AIGenerationService

__all__ = [
    "build_prompt",
    "build_strict_prompt",
    "parse_questions",
    "strip_code_fences",
    "LocalStorage",
    "SettingsStore",
    "AIGenerationService",
]
