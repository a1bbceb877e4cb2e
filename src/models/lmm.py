# -*- coding: utf-8 -*-
"""
LIBOR 마켓 모형(LMM)
====================

LMM은 증가하는 시점 t_j, 선물 호가 φ_j, ATM 캐플릿 변동성 σ_j와 d x d
상관행렬 ρ로 정의됩니다. j번째 선물은 t_{j-1}부터 t_j까지의 구간에
대응하며, t_{-1} = 0 규약을 사용하므로 φ_0은 현재 단기 금리이고 σ_0 = 0입니다.

시점 u에서 j번째 선물 호가는 상관 브라운 운동 B(u)로 다음과 같이 표현됩니다::

    Φ_j(u) = φ_j exp(σ_j B_j(u) - σ_j² u / 2)

볼록성 조정을 반영한 선도금리는 선물 결제 시점 t_{j-1}을 이용해::

    F_j(u) = Φ_j(u) - σ_j² (t_{j-1} - u)² / 2

로 계산합니다. ``LiborMarketModel.advance``는 시점 u에서 아직 결제되지 않은
구간(t_j > u)에 대해 F_j(u)를 계산하여 호출자가 제공한 버퍼에 기록합니다.

함수 설명
---------

* ``first_live_index``: t[j] > u를 만족하는 최소 인덱스 j를 찾습니다.
* ``futures_rate``: 로그정규 선물 호가 Φ(u)를 계산합니다.
* ``convexity_adjustment``: 선물 금리에서 차감할 볼록성 조정 크기를 계산합니다.
* ``LiborMarketModel``: 시장 데이터와 브라운 운동 상태를 보관하고 곡선을 진행합니다.
"""

from typing import Sequence, Tuple

import numpy as np

from .brownian import CorrelatedBrownian, NormalSource
from .correlation import Correlation
from ..market.data import validate_market_data


class OutOfRangeQuery(ValueError):
    """조회 시점이 마지막 격자 시점 이상이어서 곡선을 만들 수 없을 때 발생합니다."""

    def __init__(self, query_time: float, last_time: float):
        self.query_time = query_time
        self.last_time = last_time
        super().__init__(
            f"조회 시점 u={query_time}이(가) 마지막 격자 시점 t[n-1]={last_time} 이상입니다."
        )

    def __reduce__(self):
        # 프로세스 간 전달(joblib loky 등) 시 두 인자로 복원
        return type(self), (self.query_time, self.last_time)


def first_live_index(t: np.ndarray, u: float) -> int:
    """t[j] > u인 최소 인덱스 j를 반환합니다. 그런 j가 없으면 len(t)를 반환합니다.

    t[j] == u인 구간은 이미 결제된 것으로 봅니다.
    """
    return int(np.searchsorted(t, u, side="right"))


def futures_rate(phi, sigma, brownian_value, u):
    """Φ(u) = φ exp(σ B(u) - σ² u / 2)"""
    return phi * np.exp(sigma * brownian_value - sigma * sigma * u / 2)


def convexity_adjustment(sigma, settle_time, u):
    """σ² (t_settle - u)² / 2"""
    dt = settle_time - u
    return sigma * sigma * dt * dt / 2


class LiborMarketModel:
    """LMM 시장 데이터와 상관 브라운 운동 경로를 보관합니다.

    인수
    ----
    t: 엄격히 증가하는 시간 격자
    phi: 선물 호가 (phi[0]은 단기 금리)
    sigma: 캐플릿 변동성 (sigma[0] == 0)
    correlation: 브라운 운동 인자의 상관 구조. 차원이 1이면 모든 만기가
        하나의 인자를 공유하고, 그렇지 않으면 만기 k는 인자 k를 사용합니다.
    dtype: 계산에 사용할 부동소수점 타입
    validate: True이면 생성 시 시장 데이터 정합성을 검사합니다.
    """

    def __init__(self,
                 t: Sequence[float],
                 phi: Sequence[float],
                 sigma: Sequence[float],
                 correlation: Correlation,
                 dtype=np.float64,
                 validate: bool = True):
        self.dtype = np.dtype(dtype)
        if validate:
            t, phi, sigma = validate_market_data(t, phi, sigma, dtype=self.dtype)
            d = correlation.dimension
            if d != 1 and d < len(t):
                raise ValueError(
                    f"브라운 운동 인자 수({d})는 1이거나 격자 크기({len(t)}) 이상이어야 합니다."
                )
        self.t = np.array(t, dtype=self.dtype)
        self.phi = np.array(phi, dtype=self.dtype)
        self.sigma = np.array(sigma, dtype=self.dtype)
        # 시장 데이터는 시뮬레이션 상태가 아님
        for arr in (self.t, self.phi, self.sigma):
            arr.setflags(write=False)

        self.B = CorrelatedBrownian(correlation, dtype=self.dtype)
        # k번째 선물의 결제 시점 t[k-1] (t[-1] = 0)
        self._settle = np.concatenate(([0.0], self.t[:-1])).astype(self.dtype)

    @classmethod
    def from_arrays(cls, n: int, t, phi, sigma, correlation: Correlation, **kwargs) -> "LiborMarketModel":
        """각 배열의 앞 n개 원소로 모델을 생성합니다.

        n이 1보다 작거나 배열 길이보다 크면 ValueError를 발생시킵니다.
        """
        t, phi, sigma = list(t), list(phi), list(sigma)
        if n < 1 or n > min(len(t), len(phi), len(sigma)):
            raise ValueError(
                f"n은 1 이상, 배열 길이 이하여야 합니다: n={n}, 길이=({len(t)}, {len(phi)}, {len(sigma)})"
            )
        return cls(t[:n], phi[:n], sigma[:n], correlation, **kwargs)

    @property
    def brownian(self) -> CorrelatedBrownian:
        return self.B

    def size(self) -> int:
        return len(self.t)

    def __len__(self) -> int:
        return self.size()

    def reset(self) -> None:
        """브라운 운동만 시간 0으로 되돌립니다. 시장 데이터는 변하지 않습니다."""
        self.B.reset()

    def _brownian_values(self, j: int) -> np.ndarray:
        """만기 j..n-1에 대응하는 브라운 운동 값."""
        if len(self.B) == 1:
            return self.B[0]
        return self.B[j:self.size()]

    def advance(self, u: float, out: np.ndarray, rng: NormalSource) -> int:
        """시점 u의 표본 선도곡선을 out에 기록하고 첫 번째 t[j] > u의 인덱스 j를 반환합니다.

        out[j:n]만 갱신되며 out[0:j]의 결제된 값은 그대로 둡니다.
        u >= t[n-1]이면 브라운 운동을 진행하기 전에 OutOfRangeQuery를 발생시킵니다.
        """
        n = self.size()
        if (not isinstance(out, np.ndarray) or out.ndim != 1 or len(out) < n
                or not np.issubdtype(out.dtype, np.floating)):
            raise ValueError(f"출력 버퍼는 길이 {n} 이상의 1차원 부동소수점 numpy 배열이어야 합니다.")

        j = first_live_index(self.t, u)
        # t[j-1] <= u < t[j]
        if j == n:
            raise OutOfRangeQuery(u, float(self.t[-1]))

        self.B.advance(u, rng)
        u = self.dtype.type(u)
        sigma = self.sigma[j:]

        # 선물 호가
        f = futures_rate(self.phi[j:], sigma, self._brownian_values(j), u)
        # 선도금리 볼록성 조정: k번째 선물은 t[k-1]에 결제
        adj = convexity_adjustment(sigma, self._settle[j:], u)
        if j == 0:
            adj[0] = 0.0
        out[j:n] = f - adj
        return j

    def sample(self, u: float, rng: NormalSource) -> Tuple[int, np.ndarray]:
        """NaN으로 채운 새 버퍼에 ``advance`` 결과를 기록해 (j, 버퍼)를 반환합니다."""
        out = np.full(self.size(), np.nan, dtype=self.dtype)
        j = self.advance(u, out, rng)
        return j, out

    def __repr__(self) -> str:
        return (f"LiborMarketModel(n={self.size()}, factors={len(self.B)}, "
                f"time={self.B.time})")
