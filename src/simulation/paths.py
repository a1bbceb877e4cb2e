# -*- coding: utf-8 -*-
"""
선도곡선 경로 시뮬레이션
========================

``LiborMarketModel.advance``를 반복 호출하여 여러 조회 시점에 걸친 표본
선도곡선 경로를 생성하고 요약 통계를 계산합니다.

각 경로는 독립된 모델 사본과 ``numpy.random.SeedSequence``에서 분기한
난수 생성기를 사용하므로, 병렬 작업 수와 관계없이 결과가 동일합니다.
"""

import copy
from typing import Sequence

import numpy as np
import pandas as pd
from joblib import Parallel, delayed, effective_n_jobs

from ..models.lmm import LiborMarketModel, convexity_adjustment
from ...config.settings import (
    NUM_PATHS,
    QUERY_TIMES,
    RANDOM_SEED,
    N_JOBS,
)


def _check_query_times(query_times: Sequence[float]) -> np.ndarray:
    q = np.asarray(query_times, dtype=float)
    if q.ndim != 1 or len(q) == 0:
        raise ValueError("조회 시점은 비어 있지 않은 1차원 배열이어야 합니다.")
    if np.any(q < 0.0) or np.any(np.diff(q) < 0.0):
        raise ValueError("조회 시점은 0 이상이며 증가하는 순서여야 합니다.")
    return q


def simulate_path(model: LiborMarketModel, query_times: Sequence[float], rng) -> np.ndarray:
    """하나의 경로에서 각 조회 시점의 곡선 버퍼를 기록합니다.

    모델을 reset한 뒤 조회 시점 순서대로 advance를 호출합니다. 결제된 위치는
    마지막으로 갱신된 값을 유지하고, 경로에서 한 번도 갱신되지 않은 위치는 NaN입니다.

    반환값의 shape은 (len(query_times), n)입니다.
    """
    q = _check_query_times(query_times)
    model.reset()
    buffer = np.full(model.size(), np.nan, dtype=model.dtype)
    curves = np.empty((len(q), model.size()), dtype=model.dtype)
    for i, u in enumerate(q):
        model.advance(u, buffer, rng)
        curves[i] = buffer
    return curves


def _simulate_block(model: LiborMarketModel, query_times: np.ndarray, seeds) -> np.ndarray:
    """모델 사본 하나로 주어진 시드들의 경로를 순차 생성합니다."""
    local = copy.deepcopy(model)
    return np.stack([
        simulate_path(local, query_times, np.random.default_rng(ss))
        for ss in seeds
    ])


def simulate_forward_curves(model: LiborMarketModel,
                            query_times: Sequence[float] = None,
                            num_paths: int = None,
                            seed: int = None,
                            n_jobs: int = None,
                            verbose: bool = False) -> np.ndarray:
    """여러 독립 경로의 표본 선도곡선을 생성합니다.

    - ``query_times``: 증가하는 조회 시점. 기본값은 settings.QUERY_TIMES
    - ``num_paths``: 경로 수. 기본값은 settings.NUM_PATHS
    - ``seed``: SeedSequence 시드. 기본값은 settings.RANDOM_SEED
    - ``n_jobs``: joblib 병렬 작업 수. 기본값은 settings.N_JOBS

    반환값의 shape은 (num_paths, len(query_times), n)입니다.
    전달된 모델의 상태는 변경하지 않습니다.
    """
    q = _check_query_times(QUERY_TIMES if query_times is None else query_times)
    num_paths = NUM_PATHS if num_paths is None else num_paths
    seed = RANDOM_SEED if seed is None else seed
    n_jobs = N_JOBS if n_jobs is None else n_jobs
    if num_paths <= 0:
        raise ValueError(f"경로 수는 1 이상이어야 합니다: {num_paths}")

    seeds = np.random.SeedSequence(seed).spawn(num_paths)
    # 작업마다 모델 사본 하나를 두고 경로 블록을 처리
    n_blocks = min(num_paths, effective_n_jobs(n_jobs))
    blocks = [[seeds[i] for i in idx] for idx in np.array_split(np.arange(num_paths), n_blocks)]

    results = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_simulate_block)(model, q, block) for block in blocks
    )
    curves = np.concatenate(results, axis=0)

    if verbose:
        print(f"✓ {num_paths}개 경로 x {len(q)}개 조회 시점 시뮬레이션 완료 (n_jobs={n_jobs})")
    return curves


def summarize_curves(curves: np.ndarray,
                     query_times: Sequence[float],
                     times: Sequence[float]) -> pd.DataFrame:
    """조회 시점과 만기별 표본 선도금리의 평균과 표준편차를 계산합니다.

    한 번도 계산되지 않은(NaN) 위치는 결과에서 제외합니다.
    """
    q = np.asarray(query_times, dtype=float)
    t = np.asarray(times, dtype=float)
    mean = curves.mean(axis=0)
    std = curves.std(axis=0)

    rows = []
    for i, u in enumerate(q):
        for k, t_k in enumerate(t):
            rows.append({
                "query_time": u,
                "index": k,
                "maturity": t_k,
                "live": bool(t_k > u),
                "mean": float(mean[i, k]),
                "std": float(std[i, k]),
            })
    return pd.DataFrame(rows).dropna(subset=["mean"]).reset_index(drop=True)


def futures_martingale_error(curves: np.ndarray,
                             model: LiborMarketModel,
                             query_times: Sequence[float]) -> pd.DataFrame:
    """선물 호가의 마팅게일 성질 E[Φ_k(u)] = φ_k를 점검합니다.

    표본 선도금리에 볼록성 조정을 되돌려 선물 호가를 복원한 뒤, 살아있는
    만기별로 몬테카를로 평균과 φ_k의 차이(bp)와 표준오차(bp)를 계산합니다.
    """
    q = np.asarray(query_times, dtype=float)
    num_paths = curves.shape[0]
    settle = np.concatenate(([0.0], model.t[:-1]))

    rows = []
    for i, u in enumerate(q):
        for k in range(model.size()):
            if model.t[k] <= u:
                continue
            futures = curves[:, i, k]
            if k > 0:
                futures = futures + convexity_adjustment(model.sigma[k], settle[k], u)
            mc_mean = float(np.mean(futures))
            std_error = float(np.std(futures) / np.sqrt(num_paths))
            rows.append({
                "query_time": u,
                "index": k,
                "maturity": float(model.t[k]),
                "phi": float(model.phi[k]),
                "mc_mean": mc_mean,
                "error_bps": (mc_mean - float(model.phi[k])) * 1e4,
                "std_error_bps": std_error * 1e4,
            })
    return pd.DataFrame(rows)
