# -*- coding: utf-8 -*-
"""
상관된 브라운 운동 모듈
=======================

LMM의 확산 항을 구동하는 d차원 상관 브라운 운동 B(t)를 제공합니다::

    B(u) = B(s) + sqrt(u - s) · L z,   z ~ N(0, I_d)

여기에서 L은 상관행렬의 인자 행렬입니다. 객체는 현재 경과 시간과
인자별 누적 값을 상태로 가지며, ``reset``으로 시간 0 상태로 돌아갑니다.
난수원은 ``standard_normal(size)``를 제공하는 임의의 객체(보통
``numpy.random.Generator``)입니다.
"""

from typing import Protocol

import numpy as np

from .correlation import Correlation


class NormalSource(Protocol):
    """표준정규 난수를 생성할 수 있는 난수원."""

    def standard_normal(self, size=None): ...


class CorrelatedBrownian:
    """상관행렬을 따르는 d차원 브라운 운동의 단일 경로."""

    def __init__(self, correlation: Correlation, dtype=np.float64):
        self.correlation = correlation
        self.dtype = np.dtype(dtype)
        self._loadings = np.asarray(correlation.loadings, dtype=self.dtype)
        self._time = 0.0
        self._values = np.zeros(correlation.dimension, dtype=self.dtype)

    @property
    def time(self) -> float:
        """현재 경과 시간."""
        return self._time

    @property
    def values(self) -> np.ndarray:
        return self._values.copy()

    def reset(self) -> None:
        """시간 0, 모든 인자 값 0인 초기 상태로 되돌립니다."""
        self._time = 0.0
        self._values[:] = 0.0

    def advance(self, u: float, rng: NormalSource) -> np.ndarray:
        """경과 시간 u까지 경로를 진행하고 인자별 값을 반환합니다.

        u가 현재 시간과 같아도 난수는 한 번 소비되며 값은 그대로입니다.
        브라운 경로는 되돌릴 수 없으므로 u < time이면 ValueError를 발생시킵니다.
        """
        dt = u - self._time
        if dt < 0.0:
            raise ValueError(
                f"브라운 운동을 과거 시점으로 되돌릴 수 없습니다: 현재 {self._time}, 요청 {u}. "
                "먼저 reset()을 호출하세요."
            )
        z = np.asarray(rng.standard_normal(len(self)), dtype=self.dtype)
        self._values += np.sqrt(self.dtype.type(dt)) * (self._loadings @ z)
        self._time = float(u)
        return self.values

    def __getitem__(self, k):
        return self._values[k]

    def __len__(self) -> int:
        return self.correlation.dimension

    def __repr__(self) -> str:
        return f"CorrelatedBrownian(dimension={len(self)}, time={self._time})"
