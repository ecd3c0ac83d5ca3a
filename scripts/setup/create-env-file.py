#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""로컬 실행용 .env 파일 생성"""
import os
from pathlib import Path

# 프로젝트 루트
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# AI 제공자 API 키는 .env가 아니라 설정 화면(PUT /api/v1/ai/settings)에서 입력
env_content = """# Environment
# 로컬 개발 시 development로 두면 DEBUG 로그와 상세 에러 메시지 확인 가능
ENVIRONMENT=development

# CORS (퀴즈 화면 개발 서버)
ALLOWED_ORIGINS=http://localhost:5173

# AI 설정 저장 파일 (브라우저 localStorage 대체)
SETTINGS_FILE=.quizgen/storage.json

# Claude 응답 최대 토큰
CLAUDE_MAX_TOKENS=1000
"""

def create_env_file():
    """.env 파일 생성 (UTF-8, BOM 없음)"""
    print(f"[INFO] .env 파일 생성 중: {env_file}")
    
    # 기존 파일이 있으면 백업
    if env_file.exists():
        backup_file = project_root / ".env.backup"
        print(f"[INFO] 기존 .env 파일 백업: {backup_file}")
        with open(env_file, 'r', encoding='utf-8') as f:
            backup_content = f.read()
        with open(backup_file, 'w', encoding='utf-8', newline='\n') as f:
            f.write(backup_content)
    
    # .env 파일 생성 (UTF-8, BOM 없음, LF 줄바꿈)
    with open(env_file, 'w', encoding='utf-8', newline='\n') as f:
        f.write(env_content)
    
    print(f"[OK] .env 파일 생성 완료")
    print(f"[INFO] 파일 위치: {env_file}")
    
    if os.name != 'nt':
        os.chmod(env_file, 0o600)
        print(f"[INFO] 파일 권한 설정: 600")


if __name__ == "__main__":
    try:
        create_env_file()
        print("\n[OK] 작업 완료")
    except OSError as e:
        print(f"\n[ERROR] 에러 발생: {e.__class__.__name__}: {str(e)}")
        raise SystemExit(1)
