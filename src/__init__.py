"""
`src` 서브패키지는 LMM 곡선 시뮬레이션 프로젝트의 핵심 로직을 포함합니다.
시장 데이터 검증, 모델 정의, 경로 시뮬레이션 등 여러 모듈을 이곳에서
찾을 수 있습니다.
"""

__all__ = [
    "market",
    "models",
    "simulation",
]
