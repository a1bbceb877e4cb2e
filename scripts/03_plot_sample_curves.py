#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
03_plot_sample_curves.py
========================

이 스크립트는 몇 개의 표본 경로에 대해 조회 시점별 선도곡선을 계단 함수로
그리고, 결과 그림을 데이터 디렉터리에 저장합니다.
"""

import os
import sys

import numpy as np
import matplotlib.pyplot as plt

# PYTHONPATH 설정
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from lmm_curve.config.settings import DATA_DIR, QUERY_TIMES, RANDOM_SEED, SAMPLE_CURVES_PLOT_FILE
from lmm_curve.src.market import build_default_model
from lmm_curve.src.simulation import simulate_forward_curves

NUM_SAMPLE_PATHS = 5


def main() -> None:
    model = build_default_model()
    curves = simulate_forward_curves(model, QUERY_TIMES, NUM_SAMPLE_PATHS, RANDOM_SEED)
    # 구간 [t_{k-1}, t_k]의 시작점
    starts = np.concatenate(([0.0], model.t[:-1]))

    fig, axes = plt.subplots(1, len(QUERY_TIMES), figsize=(4 * len(QUERY_TIMES), 4), sharey=True)
    for ax, i, u in zip(np.atleast_1d(axes), range(len(QUERY_TIMES)), QUERY_TIMES):
        live = model.t > u
        for p in range(NUM_SAMPLE_PATHS):
            ax.step(starts[live], curves[p, i, live] * 100.0, where="post", alpha=0.7)
        ax.step(starts, np.asarray(model.phi) * 100.0, where="post", color="black", linestyle="--", label="φ (t=0)")
        ax.set_title(f"u = {u}년")
        ax.set_xlabel("구간 시작 (년)")
        ax.grid(True, alpha=0.3)
    np.atleast_1d(axes)[0].set_ylabel("선도금리 (%)")
    np.atleast_1d(axes)[0].legend()
    fig.tight_layout()

    os.makedirs(DATA_DIR, exist_ok=True)
    path = os.path.join(DATA_DIR, SAMPLE_CURVES_PLOT_FILE)
    fig.savefig(path, dpi=120)
    print(f"✓ 표본 선도곡선 그림이 {path}에 저장되었습니다.")


if __name__ == "__main__":
    main()
