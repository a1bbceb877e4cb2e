# -*- coding: utf-8 -*-
"""
`models` 패키지는 LMM의 정의와 이를 구동하는 상관 브라운 운동을 포함합니다.

* ``correlation``: 상관행렬 검증과 인자 행렬 계산
* ``brownian``: 상관된 d차원 브라운 운동 경로
* ``lmm``: LMM 상태와 곡선 진행(advance) 알고리즘
"""

from .correlation import (
    Correlation,
    identity_correlation,
    exponential_correlation,
)
from .brownian import (
    CorrelatedBrownian,
    NormalSource,
)
from .lmm import (
    LiborMarketModel,
    OutOfRangeQuery,
    first_live_index,
    futures_rate,
    convexity_adjustment,
)

__all__ = [
    "Correlation",
    "identity_correlation",
    "exponential_correlation",
    "CorrelatedBrownian",
    "NormalSource",
    "LiborMarketModel",
    "OutOfRangeQuery",
    "first_live_index",
    "futures_rate",
    "convexity_adjustment",
]
