# -*- coding: utf-8 -*-
"""
`simulation` 모듈은 LMM 표본 선도곡선의 다중 경로 생성과 요약 통계를
제공합니다.
"""

from .paths import (
    simulate_path,
    simulate_forward_curves,
    summarize_curves,
    futures_martingale_error,
)

__all__ = [
    "simulate_path",
    "simulate_forward_curves",
    "summarize_curves",
    "futures_martingale_error",
]
