from quizgen.schemas.ai import AIProvider
from quizgen.services.providers import claude, gemini, openai
from quizgen.services.providers.base import ProviderAdapter

# provider는 고정된 3종류이므로 enum → 어댑터 매핑으로 분기
PROVIDER_ADAPTERS: dict[AIProvider, ProviderAdapter] = {
    AIProvider.OPENAI: openai.generate,
    AIProvider.GEMINI: gemini.generate,
    AIProvider.CLAUDE: claude.generate,
}


def get_adapter(provider: AIProvider) -> ProviderAdapter:
    return PROVIDER_ADAPTERS[AIProvider(provider)]


__all__ = [
    "PROVIDER_ADAPTERS",
    "ProviderAdapter",
    "get_adapter",
]
