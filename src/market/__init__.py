# -*- coding: utf-8 -*-
"""
`market` 모듈은 LMM 시장 데이터(시간 격자, 선물 호가, 캐플릿 변동성)를
다룹니다. 데이터 정합성 검사와 설정 기본값으로 모델을 생성하는 기능을
포함합니다.
"""

from .data import (
    validate_market_data,
    default_market_data,
    build_default_model,
)

__all__ = [
    "validate_market_data",
    "default_market_data",
    "build_default_model",
]
