"""
lmm_curve 패키지는 LIBOR 마켓 모형(LMM)으로 미래 시점의 표본 선도곡선을 생성합니다.

이 패키지는 상관 브라운 운동, LMM 상태와 곡선 진행 알고리즘(선물 호가와
볼록성 조정), 시장 데이터 검증, 다중 경로 시뮬레이션 모듈을 포함합니다.

디렉터리 구조와 각 모듈의 역할은 DESIGN.md를 참고하세요.
"""

__all__ = [
    "config",
    "market",
    "models",
    "simulation",
]
