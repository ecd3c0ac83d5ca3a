from quizgen.schemas.ai import GenerationRequest

# 1차 시도는 다양성, 재시도(strict)는 형식 준수 우선
NORMAL_TEMPERATURE = 0.7
STRICT_TEMPERATURE = 0.2

SYSTEM_INSTRUCTION = (
    "You are an expert quiz question generator. "
    "Always return strictly valid JSON with no code fences or extra commentary."
)

STRICT_RULES = [
    "Return ONLY a valid JSON object. No markdown, no backticks, no commentary.",
    'If you are unsure, still return a syntactically valid JSON object with an empty "questions" array.',
    "Do NOT wrap JSON in code fences.",
    "Ensure all strings are properly escaped and UTF-8 safe.",
]


def build_prompt(request: GenerationRequest) -> str:
    """JSON만 반환하도록 지시하는 문제 생성 프롬프트"""
    mixed = request.difficulty == "mixed"
    parts = [
        f"Generate {request.count} high-quality multiple-choice quiz questions. "
        f"Output ONLY valid JSON. No extra text. Language: {request.language}.",
    ]

    if request.category:
        parts.append(f"Category: {request.category}")
    if mixed:
        parts.append("Difficulty: mixed (use 'easy' | 'medium' | 'hard')")
    else:
        parts.append(f"Difficulty: {request.difficulty}")

    parts.append(
        "Each question must be thoughtful, unambiguous, and factual. Ensure only one correct answer."
    )

    parts.append(f"""JSON schema (exactly this shape and property names):
{{
  "questions": [
    {{
      "question": "string (the question text)",
      "options": ["string", "string", "string", "string"],
      "correctAnswer": 0,
      "category": "{request.category or 'general'}",
      "difficulty": "{'easy' if mixed else request.difficulty}",
      "explanation": "string (brief explanation for the correct answer)"
    }}
  ]
}}""")

    parts.append(f"""Rules:
- Return only a JSON object with a "questions" array containing exactly {request.count} items (no markdown, no code fences).
- "options" must have exactly 4 distinct strings.
- "correctAnswer" must be an integer 0..3 (0-based index of the correct option).
- "difficulty" must be one of: "easy" | "medium" | "hard".{' If mixed, vary appropriately.' if mixed else ''}
- Keep neutral tone; no harmful content; ensure accuracy.""")

    return "\n".join(parts)


def build_strict_prompt(request: GenerationRequest) -> str:
    """재시도용 프롬프트: 형식 규칙을 번호 목록으로 추가"""
    rules = "\n".join(f"{i}. {rule}" for i, rule in enumerate(STRICT_RULES, start=1))
    return f"{build_prompt(request)}\n\nSTRICT MODE:\n{rules}"


def prompt_for(request: GenerationRequest, strict: bool) -> str:
    return build_strict_prompt(request) if strict else build_prompt(request)


def temperature_for(strict: bool) -> float:
    return STRICT_TEMPERATURE if strict else NORMAL_TEMPERATURE
