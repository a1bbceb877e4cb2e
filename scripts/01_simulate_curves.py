#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
01_simulate_curves.py
=====================

이 스크립트는 settings의 기본 시장 데이터로 LMM을 구성하고, 조회 시점별
표본 선도곡선을 몬테카를로로 생성하여 만기별 평균과 표준편차를 출력합니다.
"""

import os
import sys

import pandas as pd

# PYTHONPATH 설정
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from lmm_curve.config.settings import NUM_PATHS, QUERY_TIMES, RANDOM_SEED, N_JOBS
from lmm_curve.src.market import build_default_model
from lmm_curve.src.simulation import simulate_forward_curves, summarize_curves


def main() -> None:
    # 1. 모델 생성
    model = build_default_model()
    print("LMM 스펙:")
    print(f"  격자 크기: {model.size()}")
    print(f"  마지막 만기: {model.t[-1]}년")
    print(f"  브라운 인자 수: {len(model.brownian)}")
    # 2. 경로 생성
    curves = simulate_forward_curves(model, QUERY_TIMES, NUM_PATHS, RANDOM_SEED, N_JOBS, verbose=True)
    # 3. 요약 통계
    summary = summarize_curves(curves, QUERY_TIMES, model.t)
    live = summary[summary["live"]].copy()
    live["mean_pct"] = live["mean"] * 100.0
    live["std_bp"] = live["std"] * 1e4
    table = live.pivot(index="maturity", columns="query_time", values="mean_pct")
    print("\n만기별 평균 선도금리 (%):")
    with pd.option_context("display.float_format", "{:.4f}".format):
        print(table)
    table_std = live.pivot(index="maturity", columns="query_time", values="std_bp")
    print("\n만기별 선도금리 표준편차 (bp):")
    with pd.option_context("display.float_format", "{:.2f}".format):
        print(table_std)


if __name__ == "__main__":
    main()
