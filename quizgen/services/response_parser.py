"""AI 응답 정규화: provider 응답에서 텍스트 추출 → JSON 파싱 → 문제 검증"""
import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from quizgen.exceptions import InvalidJSONError, MalformedOutputError, MissingFieldError
from quizgen.schemas.ai import TokenUsage
from quizgen.schemas.quiz import (
    DEFAULT_CATEGORY,
    DEFAULT_DIFFICULTY,
    DIFFICULTIES,
    QUIZ_CATEGORIES,
    CanonicalQuestion,
)

logger = logging.getLogger(__name__)

# ```json ... ``` 또는 ``` ... ```
_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """마크다운 코드 블록 제거 (없으면 그대로 반환)"""
    if _FENCE_RE.search(text):
        return _FENCE_RE.sub(r"\1", text)
    return text


def normalize_category(category: Any) -> str:
    """카테고리를 소문자로 정규화, 알 수 없는 값은 기본 카테고리로 보정"""
    lower = str(category or "").strip().lower()
    if lower in QUIZ_CATEGORIES:
        return lower
    return DEFAULT_CATEGORY


def normalize_difficulty(difficulty: Any) -> str:
    lower = str(difficulty or "").strip().lower()
    if lower in DIFFICULTIES:
        return lower
    return DEFAULT_DIFFICULTY


def _parse_correct_answer(value: Any) -> int:
    # bool은 int의 하위 타입이므로 별도 제외
    if isinstance(value, bool):
        raise MalformedOutputError('Invalid "correctAnswer": must be an integer 0..3')
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not 0 <= value <= 3:
        raise MalformedOutputError('Invalid "correctAnswer": must be an integer 0..3')
    return value


def _parse_entry(entry: Any, question_id: int) -> CanonicalQuestion:
    if not isinstance(entry, dict):
        raise MalformedOutputError("Invalid question entry: must be an object")

    question = entry.get("question")
    if not isinstance(question, str) or not question.strip():
        raise MalformedOutputError('Invalid question entry: missing "question"')

    options = entry.get("options")
    if not isinstance(options, list) or len(options) != 4:
        raise MalformedOutputError(
            'Invalid question entry: "options" must be an array of exactly 4 strings'
        )
    options = [str(option) for option in options]
    if len(set(options)) != 4:
        raise MalformedOutputError('Invalid question entry: "options" must be distinct')

    correct_answer = _parse_correct_answer(entry.get("correctAnswer"))

    explanation = entry.get("explanation")
    try:
        return CanonicalQuestion(
            id=question_id,
            question=question.strip(),
            options=options,
            correct_answer=correct_answer,
            category=normalize_category(entry.get("category")),
            difficulty=normalize_difficulty(entry.get("difficulty")),
            explanation=str(explanation).strip() if explanation is not None else "",
        )
    except ValidationError as e:
        raise MalformedOutputError(f"Invalid question entry: {e.errors()[0]['msg']}")


def parse_questions(text: str) -> list[CanonicalQuestion]:
    """모델 출력 텍스트를 검증된 문제 리스트로 변환

    항목 하나라도 검증에 실패하면 전체를 거부한다 (부분 성공 없음).
    id는 provider가 준 값과 무관하게 1부터 순서대로 부여.
    """
    cleaned = strip_code_fences(text).strip()
    try:
        parsed = json.loads(cleaned)
    except ValueError as e:
        raise InvalidJSONError(str(e))

    if not isinstance(parsed, dict) or not isinstance(parsed.get("questions"), list):
        raise MissingFieldError("questions")

    questions = [
        _parse_entry(entry, question_id)
        for question_id, entry in enumerate(parsed["questions"], start=1)
    ]
    logger.debug(f"AI 응답 파싱 완료: {len(questions)}개 문제")
    return questions


def _dig(data: Any, *path: str | int) -> Any:
    """중첩된 dict/list에서 값 조회 (경로가 없으면 None)"""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[key] if isinstance(key, int) else current.get(key)
        if current is None:
            return None
    return current


def _first_text(data: Any, paths: list[tuple]) -> str:
    for path in paths:
        value = _dig(data, *path)
        if isinstance(value, str) and value:
            return value
    return ""


def extract_openai_text(data: Any) -> str:
    return _first_text(data, [
        ("choices", 0, "message", "content"),
        ("choices", 0, "delta", "content"),
    ])


def extract_gemini_text(data: Any) -> str:
    """Gemini 응답 텍스트 추출 (알려진 여러 응답 형태 지원)"""
    return _first_text(data, [
        ("candidates", 0, "content", "parts", 0, "text"),
        ("candidates", 0, "content", 0, "text"),
        ("candidates", 0, "content", 0, "string_value"),
        ("candidates", 0, "content", "text"),
        ("text",),
    ])


def extract_claude_text(data: Any) -> str:
    # Messages API: content 블록 배열의 첫 번째 text
    return _first_text(data, [
        ("content", 0, "text"),
        ("content", "text"),
    ])


def _token_count(data: Any, *path: str) -> int | None:
    value = _dig(data, *path)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def extract_openai_usage(data: Any) -> TokenUsage:
    return TokenUsage(
        prompt_tokens=_token_count(data, "usage", "prompt_tokens"),
        completion_tokens=_token_count(data, "usage", "completion_tokens"),
    )


def extract_gemini_usage(data: Any) -> TokenUsage:
    return TokenUsage(
        prompt_tokens=_token_count(data, "usageMetadata", "promptTokenCount"),
        completion_tokens=_token_count(data, "usageMetadata", "candidatesTokenCount"),
    )


def extract_claude_usage(data: Any) -> TokenUsage:
    return TokenUsage(
        prompt_tokens=_token_count(data, "usage", "input_tokens"),
        completion_tokens=_token_count(data, "usage", "output_tokens"),
    )
