"""Prompt Builder 테스트"""
from quizgen.schemas.ai import GenerationRequest
from quizgen.services import prompt_builder


def test_build_prompt_contents():
    """개수, 언어, 카테고리, 난이도, 스키마 필드명 포함"""
    request = GenerationRequest(count=5, category="history", difficulty="hard", language="ko")

    prompt = prompt_builder.build_prompt(request)

    assert "Generate 5 high-quality multiple-choice quiz questions" in prompt
    assert "Language: ko" in prompt
    assert "Category: history" in prompt
    assert "Difficulty: hard" in prompt
    for field in ('"questions"', '"question"', '"options"', '"correctAnswer"', '"category"', '"difficulty"', '"explanation"'):
        assert field in prompt
    assert "STRICT MODE" not in prompt


def test_build_prompt_mixed_without_category():
    """mixed 난이도 지시, 카테고리 미지정 시 Category 줄 없음"""
    prompt = prompt_builder.build_prompt(GenerationRequest(count=2))

    assert "Difficulty: mixed" in prompt
    assert "Category:" not in prompt
    assert "Language: en" in prompt


def test_build_strict_prompt_appends_rules():
    """strict 프롬프트 = 기본 프롬프트 + 번호 매긴 규칙"""
    request = GenerationRequest(count=3, category="math")

    strict = prompt_builder.build_strict_prompt(request)

    assert strict.startswith(prompt_builder.build_prompt(request))
    assert "STRICT MODE:" in strict
    assert "1. Return ONLY a valid JSON object" in strict
    assert 'empty "questions" array' in strict
    assert "Do NOT wrap JSON in code fences." in strict
    assert "UTF-8" in strict


def test_prompt_and_temperature_for_mode():
    request = GenerationRequest(count=1)

    assert prompt_builder.prompt_for(request, strict=False) == prompt_builder.build_prompt(request)
    assert prompt_builder.prompt_for(request, strict=True) == prompt_builder.build_strict_prompt(request)
    assert prompt_builder.temperature_for(False) == 0.7
    assert prompt_builder.temperature_for(True) == 0.2
