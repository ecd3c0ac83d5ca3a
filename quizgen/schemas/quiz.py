from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

QuizCategory = Literal["history", "math", "science", "geography", "literature", "sports"]
Difficulty = Literal["easy", "medium", "hard"]
RequestedDifficulty = Literal["easy", "medium", "hard", "mixed"]

QUIZ_CATEGORIES: tuple[str, ...] = get_args(QuizCategory)
DIFFICULTIES: tuple[str, ...] = get_args(Difficulty)

# 알 수 없는 카테고리/난이도는 아래 기본값으로 보정
DEFAULT_CATEGORY: QuizCategory = "science"
DEFAULT_DIFFICULTY: Difficulty = "easy"


class CanonicalQuestion(BaseModel):
    """검증이 끝난 앱 내부 문제 스키마 (provider 응답 형식과 무관)"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(..., ge=1, description="파싱 시점에 부여되는 순번 (1부터)")
    question: str = Field(..., min_length=1, description="문제 내용")
    options: list[str] = Field(..., min_length=4, max_length=4, description="선택지 (4개 필수)")
    correct_answer: int = Field(..., ge=0, le=3, alias="correctAnswer", description="정답 인덱스 (0-3)")
    category: QuizCategory = Field(DEFAULT_CATEGORY, description="카테고리")
    difficulty: Difficulty = Field(DEFAULT_DIFFICULTY, description="난이도")
    explanation: str = Field("", description="해설 (없으면 빈 문자열)")

    @field_validator("options")
    @classmethod
    def validate_distinct_options(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("선택지는 서로 달라야 합니다")
        return v
