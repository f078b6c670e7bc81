"""
한글 문자 처리 테스트

음절 분해 / 조합, 문자 분류, 구조 토큰 스캔
"""

import pytest

from kortext_core.models import KoreanPos
from kortext_core.hangul import (CharClass, classify, classify_text,
                                 scan_structure, decompose_syllable,
                                 compose_syllable, has_coda, replace_coda,
                                 replace_vowel)


class TestHangulUtils:
    """음절 분해 / 조합 테스트"""

    def test_decompose(self):
        assert decompose_syllable('한') == ('ㅎ', 'ㅏ', 'ㄴ')
        assert decompose_syllable('가') == ('ㄱ', 'ㅏ', '')
        assert decompose_syllable('닭') == ('ㄷ', 'ㅏ', 'ㄺ')

    def test_decompose_non_hangul(self):
        assert decompose_syllable('a') == ('', '', '')
        assert decompose_syllable('ㅋ') == ('', '', '')

    def test_compose(self):
        assert compose_syllable('ㅎ', 'ㅏ', 'ㄴ') == '한'
        assert compose_syllable('ㄱ', 'ㅏ') == '가'
        assert compose_syllable('x', 'ㅏ') == ''

    def test_coda_and_vowel_replacement(self):
        assert has_coda('랰')
        assert not has_coda('래')
        assert replace_coda('랰', '') == '래'
        assert replace_coda('겟', 'ㅆ') == '겠'
        assert replace_vowel('됬', 'ㅙ') == '됐'


class TestCharClassifier:
    """문자 분류 테스트"""

    @pytest.mark.parametrize("char, expected", [
        ('한', CharClass.HANGUL_SYLLABLE),
        ('ㅋ', CharClass.KOREAN_PARTICLE),
        ('ㅠ', CharClass.KOREAN_PARTICLE),
        ('a', CharClass.ALPHA),
        ('Ｚ', CharClass.ALPHA),
        ('я', CharClass.FOREIGN),
        ('漢', CharClass.FOREIGN),
        ('7', CharClass.NUMBER),
        (' ', CharClass.SPACE),
        ('\n', CharClass.SPACE),
        ('.', CharClass.PUNCTUATION),
        ('♥', CharClass.PUNCTUATION),
        ('#', CharClass.HASHTAG_MARKER),
        ('@', CharClass.SCREEN_NAME_MARKER),
        ('$', CharClass.CASHTAG_MARKER),
    ])
    def test_classify(self, char, expected):
        assert classify(char) is expected

    def test_classify_text_marks_url_fragments(self):
        classes = classify_text("주소 http://a.com")
        assert classes[0] is CharClass.HANGUL_SYLLABLE
        assert classes[2] is CharClass.SPACE
        assert set(classes[3:]) == {CharClass.URL_FRAGMENT}

    def test_classify_text_marks_email_fragments(self):
        classes = classify_text("me@mail.com")
        assert set(classes) == {CharClass.EMAIL_FRAGMENT}


class TestStructureScanner:
    """구조 토큰 스캔 테스트"""

    @pytest.mark.parametrize("text, pos, length", [
        ("test@example.com", KoreanPos.EMAIL, 16),
        ("http://example.com/path", KoreanPos.URL, 23),
        ("www.naver.com", KoreanPos.URL, 13),
        ("example.kr", KoreanPos.URL, 10),
        ("@user_01", KoreanPos.SCREEN_NAME, 8),
        ("#해시태그", KoreanPos.HASHTAG, 5),
        ("$AAPL", KoreanPos.CASH_TAG, 5),
        ("100원", KoreanPos.NUMBER, 4),
        ("1,000,000", KoreanPos.NUMBER, 9),
        ("3.5", KoreanPos.NUMBER, 3),
        ("$100", KoreanPos.NUMBER, 4),
        ("12시30분", KoreanPos.NUMBER, 3),
    ])
    def test_scan(self, text, pos, length):
        assert scan_structure(text, 0) == (pos, length)

    def test_scan_requires_word_boundary(self):
        # 단어 중간의 @는 스크린네임이 아님
        assert scan_structure("ab@cd", 2) is None

    def test_scan_hangul_returns_none(self):
        assert scan_structure("한국", 0) is None

    def test_hashtag_requires_letter(self):
        assert scan_structure("#123", 0) is None
