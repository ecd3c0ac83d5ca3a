"""테스트용 provider 응답 데이터"""
import json

import httpx


def make_question(index: int = 1, category: str = "science", **overrides) -> dict:
    """provider가 반환하는 형태의 문제 1개"""
    question = {
        "question": f"Question {index}?",
        "options": [f"A{index}", f"B{index}", f"C{index}", f"D{index}"],
        "correctAnswer": index % 4,
        "category": category,
        "difficulty": "medium",
        "explanation": f"Because {index}.",
    }
    question.update(overrides)
    return question


def make_payload(count: int = 3, category: str = "science") -> str:
    """compliant JSON 문자열 (코드 블록 없음)"""
    return json.dumps({"questions": [make_question(i, category) for i in range(1, count + 1)]})


class RecordingTransport:
    """요청을 기록하고 미리 정한 응답을 순서대로 반환하는 MockTransport 핸들러"""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"예상하지 못한 요청: {request.method} {request.url}")
        return self.responses.pop(0)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def json_bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]
