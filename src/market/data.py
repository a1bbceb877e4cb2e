# -*- coding: utf-8 -*-
"""
LMM 시장 데이터 모듈
====================

LMM을 구성하는 시장 데이터(시간 격자 t, 선물 호가 φ, 캐플릿 변동성 σ)의
정합성을 검사하고, 설정 파일의 기본값으로 모델을 생성합니다.

주요 함수
---------

* ``validate_market_data``: 길이 일치, 격자의 엄격한 증가, σ_0 = 0 조건을 검사합니다.
* ``default_market_data``: settings의 기본 시장 데이터를 딕셔너리로 반환합니다.
* ``build_default_model``: 기본 시장 데이터와 지수 상관 구조로 LMM을 생성합니다.
"""

from typing import Dict, Sequence, Tuple

import numpy as np

from ...config.settings import (
    LMM_TIMES,
    FUTURES_QUOTES,
    CAPLET_VOLS,
    CORRELATION_BETA,
)


def validate_market_data(t: Sequence[float],
                         phi: Sequence[float],
                         sigma: Sequence[float],
                         dtype=np.float64) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """LMM 시장 데이터를 검사하고 1차원 배열로 변환하여 반환합니다.

    인수
    ----
    t: 엄격히 증가하는 시간 격자 (t_0 >= 0)
    phi: 선물 호가, t와 같은 길이
    sigma: 변동성, t와 같은 길이이며 sigma[0] == 0

    조건을 위반하면 위반 항목을 명시한 ValueError를 발생시킵니다.
    """
    t_arr = np.asarray(t, dtype=dtype)
    phi_arr = np.asarray(phi, dtype=dtype)
    sigma_arr = np.asarray(sigma, dtype=dtype)

    for name, arr in (("t", t_arr), ("phi", phi_arr), ("sigma", sigma_arr)):
        if arr.ndim != 1:
            raise ValueError(f"{name}은(는) 1차원 배열이어야 합니다: shape={arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise ValueError(f"{name}에 유한하지 않은 값이 있습니다.")

    n = len(t_arr)
    if n == 0:
        raise ValueError("시간 격자가 비어 있습니다.")
    if len(phi_arr) != n or len(sigma_arr) != n:
        raise ValueError(
            f"t, phi, sigma의 길이가 일치하지 않습니다: {n}, {len(phi_arr)}, {len(sigma_arr)}"
        )
    if t_arr[0] < 0.0:
        raise ValueError(f"첫 시점 t[0]은 0 이상이어야 합니다: {t_arr[0]}")
    if np.any(np.diff(t_arr) <= 0.0):
        raise ValueError("시간 격자 t는 엄격히 증가해야 합니다.")
    if sigma_arr[0] != 0.0:
        raise ValueError(f"단기 금리의 변동성 sigma[0]은 0이어야 합니다: {sigma_arr[0]}")
    if np.any(sigma_arr < 0.0):
        raise ValueError("변동성 sigma는 음수가 될 수 없습니다.")
    return t_arr, phi_arr, sigma_arr


def default_market_data() -> Dict[str, object]:
    """settings에 정의된 기본 시장 데이터를 반환합니다."""
    return {
        "times": list(LMM_TIMES),
        "futures": list(FUTURES_QUOTES),
        "vols": list(CAPLET_VOLS),
        "beta": CORRELATION_BETA,
    }


def build_default_model(beta: float = None, one_factor: bool = False, dtype=np.float64):
    """기본 시장 데이터로 LMM을 생성합니다.

    - ``beta``: 지수 상관 구조의 감쇠 계수. None이면 settings.CORRELATION_BETA
    - ``one_factor``: True이면 모든 만기를 단일 인자로 구동합니다.
    """
    from ..models.correlation import exponential_correlation, identity_correlation
    from ..models.lmm import LiborMarketModel

    data = default_market_data()
    if beta is None:
        beta = data["beta"]
    if one_factor:
        correlation = identity_correlation(1)
    else:
        correlation = exponential_correlation(data["times"], beta)
    return LiborMarketModel(data["times"], data["futures"], data["vols"], correlation, dtype=dtype)
