#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
02_martingale_check.py
======================

이 스크립트는 시뮬레이션된 선물 호가가 마팅게일 조건 E[Φ_k(u)] = φ_k를
만족하는지 점검합니다. 오차가 표준오차의 3배를 넘는 항목을 표시합니다.
"""

import os
import sys

# PYTHONPATH 설정
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from lmm_curve.config.settings import NUM_PATHS, QUERY_TIMES, RANDOM_SEED, N_JOBS
from lmm_curve.src.market import build_default_model
from lmm_curve.src.simulation import simulate_forward_curves, futures_martingale_error


def main() -> None:
    model = build_default_model()
    curves = simulate_forward_curves(model, QUERY_TIMES, NUM_PATHS, RANDOM_SEED, N_JOBS, verbose=True)
    report = futures_martingale_error(curves, model, QUERY_TIMES)

    print("-" * 78)
    print(f"{'u':>6} | {'만기':>6} | {'phi (%)':>10} | {'MC 평균 (%)':>12} | {'오차 (bp)':>10} | {'표준오차 (bp)':>12}")
    print("-" * 78)
    n_flagged = 0
    for row in report.itertuples():
        flag = ""
        if row.std_error_bps > 0 and abs(row.error_bps) > 3.0 * row.std_error_bps:
            flag = "  <-- 확인 필요"
            n_flagged += 1
        print(f"{row.query_time:6.2f} | {row.maturity:6.2f} | {row.phi*100:10.4f} | "
              f"{row.mc_mean*100:12.4f} | {row.error_bps:10.4f} | {row.std_error_bps:12.4f}{flag}")
    print("-" * 78)
    if n_flagged == 0:
        print("✓ 모든 만기에서 마팅게일 오차가 3 표준오차 이내입니다.")
    else:
        print(f"경고: {n_flagged}개 항목의 오차가 3 표준오차를 초과했습니다.")


if __name__ == "__main__":
    main()
