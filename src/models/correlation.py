# -*- coding: utf-8 -*-
"""
상관 구조 모듈
==============

LMM을 구동하는 d개 브라운 운동 인자의 상관행렬을 다룹니다.

상관행렬 ρ는 하삼각 인자 행렬 L(ρ = L Lᵀ)로 분해되어, 독립 표준정규
난수 z를 상관된 증분 L z로 바꾸는 데 사용됩니다.

함수 설명
---------

* ``Correlation``: 상관행렬의 검증과 인자 행렬(loadings) 계산을 담당합니다.
* ``identity_correlation``: 서로 독립인 d개 인자의 상관 구조를 생성합니다.
* ``exponential_correlation``: ρ_ij = exp(-β|t_i - t_j|) 형태의 상관 구조를 생성합니다.
"""

import warnings
from typing import Sequence

import numpy as np
import scipy.linalg as la

from ...config.settings import CORRELATION_JITTER, CORRELATION_PSD_TOL


class Correlation:
    """d x d 상관행렬과 그 인자 행렬을 보관합니다.

    행렬은 정방·대칭이어야 하며 대각 원소는 1, 나머지 원소는 [-1, 1] 구간에
    있어야 합니다. 조건을 만족하지 않으면 ValueError를 발생시킵니다.
    """

    def __init__(self, matrix, jitter: float = CORRELATION_JITTER):
        rho = np.array(matrix, dtype=float, ndmin=2)
        if rho.ndim != 2 or rho.shape[0] != rho.shape[1]:
            raise ValueError(f"상관행렬은 정방행렬이어야 합니다: shape={rho.shape}")
        if rho.shape[0] == 0:
            raise ValueError("상관행렬의 차원은 1 이상이어야 합니다.")
        if not np.allclose(rho, rho.T, atol=1e-12):
            raise ValueError("상관행렬이 대칭이 아닙니다.")
        if not np.allclose(np.diag(rho), 1.0, atol=1e-12):
            raise ValueError("상관행렬의 대각 원소는 모두 1이어야 합니다.")
        if np.any(np.abs(rho) > 1.0 + 1e-12):
            raise ValueError("상관계수는 [-1, 1] 구간에 있어야 합니다.")

        self._matrix = rho
        self._matrix.setflags(write=False)
        self._loadings = self._factorize(rho, jitter)
        self._loadings.setflags(write=False)

    @staticmethod
    def _factorize(rho: np.ndarray, jitter: float) -> np.ndarray:
        """ρ = L Lᵀ를 만족하는 인자 행렬 L을 계산합니다.

        양정치 행렬은 하삼각 Cholesky 인자를 반환합니다. 최소 고유값이
        -CORRELATION_PSD_TOL 미만인 부정치 행렬은 ValueError를 발생시킵니다.
        """
        try:
            return la.cholesky(rho, lower=True)
        except la.LinAlgError:
            pass

        # 부정치 행렬은 상관행렬이 아님
        min_eval = float(la.eigvalsh(rho)[0])
        if min_eval < -CORRELATION_PSD_TOL:
            raise ValueError(f"상관행렬이 준양정치가 아닙니다: 최소 고유값 {min_eval:.3e}")

        # 준양정치 행렬: 대각에 작은 값을 더해 재시도
        warnings.warn("상관행렬이 양정치가 아니어서 대각 jitter를 적용합니다.", RuntimeWarning)
        d = rho.shape[0]
        try:
            L = la.cholesky(rho + jitter * np.eye(d), lower=True)
        except la.LinAlgError:
            warnings.warn("Cholesky 분해에 실패하여 고유값 분해로 대체합니다.", RuntimeWarning)
            evals, evecs = la.eigh(rho)
            # 부동소수점 오차로 생긴 음의 고유값 제거
            evals = np.maximum(evals, 0.0)
            L = evecs * np.sqrt(evals)
        # 각 인자의 분산이 1이 되도록 행 정규화
        norms = np.sqrt(np.sum(L ** 2, axis=1, keepdims=True))
        return L / np.where(norms > 0.0, norms, 1.0)

    @property
    def dimension(self) -> int:
        return self._matrix.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def loadings(self) -> np.ndarray:
        return self._loadings

    def __len__(self) -> int:
        return self.dimension

    def __repr__(self) -> str:
        return f"Correlation(dimension={self.dimension})"


def identity_correlation(d: int) -> Correlation:
    """서로 독립인 d개 인자의 상관 구조."""
    return Correlation(np.eye(d))


def exponential_correlation(times: Sequence[float], beta: float) -> Correlation:
    """만기 간 거리에 따라 지수적으로 감소하는 상관 구조를 생성합니다.

    ρ_ij = exp(-β |t_i - t_j|), β >= 0. β = 0이면 모든 인자가 완전 상관입니다.
    """
    if beta < 0.0:
        raise ValueError(f"beta는 0 이상이어야 합니다: {beta}")
    t = np.asarray(times, dtype=float)
    # 브로드캐스팅으로 |t_i - t_j| 행렬 생성
    dist = np.abs(t[:, None] - t[None, :])
    return Correlation(np.exp(-beta * dist))
