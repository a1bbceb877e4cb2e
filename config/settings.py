# lmm_curve/config/settings.py

import os

## 프로젝트 루트 디렉터리 계산
# 이 파일(settings.py)이 있는 config 폴더의 부모 폴더(lmm_curve)가 기준
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

## 산출물(그림 등)이 저장될 디렉터리
DATA_DIR = os.path.join(BASE_DIR, "data")

## 파일 이름 정의
SAMPLE_CURVES_PLOT_FILE = "sample_forward_curves.png"

## LMM 기본 시장 데이터
# 선물 구간의 종료 시점 t_j (년). t_{-1} = 0 규약을 사용합니다.
LMM_TIMES = [0.25, 0.5, 0.75, 1.0, 1.25, 1.5, 1.75, 2.0, 2.5, 3.0]

# 선물 호가 phi_j (소수). phi_0은 현재 단기 금리입니다.
FUTURES_QUOTES = [
    0.0430, 0.0425, 0.0418, 0.0410, 0.0404,
    0.0399, 0.0396, 0.0394, 0.0392, 0.0391,
]

# ATM 캐플릿 변동성 sigma_j. sigma_0은 항상 0입니다.
CAPLET_VOLS = [
    0.0, 0.22, 0.23, 0.235, 0.24,
    0.238, 0.235, 0.23, 0.225, 0.22,
]

## 상관 구조 설정
# rho_ij = exp(-beta |t_i - t_j|)
CORRELATION_BETA = 0.1

# 준양정치 상관행렬의 Cholesky 분해 시 대각에 더하는 값
CORRELATION_JITTER = 1e-10

# 준양정치 판정 허용오차: 최소 고유값이 -CORRELATION_PSD_TOL 미만이면 상관행렬이 아님
CORRELATION_PSD_TOL = 1e-10

## 몬테카를로 시뮬레이션 설정
RANDOM_SEED = 42

## 몬테카를로 시뮬레이션 경로 수
NUM_PATHS = 20000

## 곡선을 샘플링할 조회 시점 (년)
QUERY_TIMES = [0.0, 0.5, 1.0, 1.5, 2.0]

## joblib 병렬 작업 수 (1이면 순차 실행)
N_JOBS = 1
