"""
공용 픽스처

기본 사전은 세션마다 한 번만 로드하고, 각 테스트에는 스냅샷을 공유하는
복사본을 넘겨 사전 변경이 다른 테스트로 새지 않도록 한다.
"""

import pytest

from kortext_core import (KoreanDictionary, KoreanNormalizer, KoreanTokenizer,
                          KoreanTextProcessor)


@pytest.fixture(scope="session")
def base_dictionary():
    """기본 어휘집 사전 (세션 공유, 직접 변경 금지)"""
    return KoreanDictionary.load_default()


@pytest.fixture
def dictionary(base_dictionary):
    """테스트별 사전"""
    return base_dictionary.copy()


@pytest.fixture
def tokenizer(dictionary):
    return KoreanTokenizer(dictionary)


@pytest.fixture
def normalizer(dictionary):
    return KoreanNormalizer(dictionary)


@pytest.fixture
def processor(dictionary):
    return KoreanTextProcessor(dictionary)