"""
한국어 토크나이저 테스트

분절 / 품사 태깅, 구조 토큰, 기본형, 상위 n개 후보, 커버리지 불변식
"""

import time

import pytest

from kortext_core.models import KoreanPos, KoreanToken
from kortext_core.dictionary import KoreanDictionary
from kortext_core.tokenizer import (KoreanTokenizer, chunk_text,
                                   transition_penalty)
from kortext_core.config import settings
from kortext_core.utils import MalformedInputError


def surfaces(tokens):
    return [(token.text, token.pos) for token in tokens]


def assert_covers(text, tokens):
    """토큰이 겹치지 않고 텍스트 전체를 순서대로 덮는지 확인"""
    position = 0
    for token in tokens:
        assert token.offset == position
        assert text[token.offset:token.end] == token.text
        position = token.end
    assert position == len(text)


def small_tokenizer(*entries):
    """지정한 단어만 등록된 사전의 토크나이저"""
    dictionary = KoreanDictionary()
    for pos, words in entries:
        dictionary.add(pos, words)
    return KoreanTokenizer(dictionary)


class TestChunker:
    """청크 분할 테스트"""

    def test_class_boundaries(self):
        chunks = chunk_text("한국어abc123!")
        assert [c.text for c in chunks] == ["한국어", "abc", "123", "!"]

    def test_structures_take_priority(self):
        chunks = chunk_text("메일 me@mail.com")
        assert chunks[-1].text == "me@mail.com"
        assert chunks[-1].pos is KoreanPos.EMAIL

    def test_other_chars_are_single_chunks(self):
        chunks = chunk_text("\u200b\u200b")
        assert [c.text for c in chunks] == ["\u200b", "\u200b"]
        assert all(c.unknown for c in chunks)


class TestTransitionPenalty:
    """품사 연결 비용 테스트"""

    def test_josa_after_noun(self):
        assert transition_penalty(KoreanPos.NOUN, KoreanPos.JOSA, False) == 0

    def test_josa_at_start(self):
        assert (transition_penalty(None, KoreanPos.JOSA, True) ==
                settings.TRANSITION_PENALTY)

    def test_eomi_after_noun(self):
        assert (transition_penalty(KoreanPos.NOUN, KoreanPos.EOMI, False) ==
                settings.TRANSITION_PENALTY)

    def test_determiner_inside_chunk(self):
        assert transition_penalty(None, KoreanPos.DETERMINER, True) == 0
        assert (transition_penalty(KoreanPos.NOUN, KoreanPos.DETERMINER,
                                   False) == settings.TRANSITION_PENALTY)


class TestKoreanTokenizer:
    """토크나이저 테스트"""

    def test_noun_josa(self, tokenizer):
        tokens = tokenizer.tokenize("한국어")
        assert tokens == [
            KoreanToken("한국", KoreanPos.NOUN, 0, 2),
            KoreanToken("어", KoreanPos.JOSA, 2, 1),
        ]

    def test_sentence(self, tokenizer):
        tokens = tokenizer.tokenize("나는 밥을 먹었어요", keep_space=False)
        assert surfaces(tokens) == [
            ("나", KoreanPos.NOUN),
            ("는", KoreanPos.JOSA),
            ("밥", KoreanPos.NOUN),
            ("을", KoreanPos.JOSA),
            ("먹었어요", KoreanPos.VERB),
        ]
        assert tokens[-1].stem == "먹다"
        assert tokens[-1].offset == 6
        assert all(not t.unknown for t in tokens)

    def test_stems(self, tokenizer):
        tokens = tokenizer.tokenize("학교에 갔다", keep_space=False)
        assert surfaces(tokens) == [
            ("학교", KoreanPos.NOUN),
            ("에", KoreanPos.JOSA),
            ("갔다", KoreanPos.VERB),
        ]
        assert tokens[0].stem is None
        assert tokens[2].stem == "가다"

    def test_stem_disabled(self, tokenizer):
        tokens = tokenizer.tokenize("갔다", stem=False)
        assert tokens[0].stem is None

    def test_stem_from_segmentation_snapshot(self, tokenizer, dictionary):
        snapshot = dictionary.snapshot
        dictionary.remove(KoreanPos.VERB, "먹다")
        chunk = chunk_text("먹었어요")[0]
        tokens = tokenizer._tokenize_chunk(chunk, None, 1, True, snapshot)[0]
        assert surfaces(tokens) == [("먹었어요", KoreanPos.VERB)]
        assert tokens[0].stem == "먹다"

    def test_adjective(self, tokenizer):
        tokens = tokenizer.tokenize("아름다운 꽃")
        assert surfaces(tokens) == [
            ("아름다운", KoreanPos.ADJECTIVE),
            (" ", KoreanPos.SPACE),
            ("꽃", KoreanPos.NOUN),
        ]
        assert tokens[0].stem == "아름답다"

    def test_noun_verb(self, tokenizer):
        tokens = tokenizer.tokenize("안녕하세요")
        assert surfaces(tokens) == [
            ("안녕", KoreanPos.NOUN),
            ("하세요", KoreanPos.VERB),
        ]
        assert tokens[1].stem == "하다"

    def test_suffix(self, tokenizer):
        tokens = tokenizer.tokenize("선생님들")
        assert surfaces(tokens) == [
            ("선생님", KoreanPos.NOUN),
            ("들", KoreanPos.SUFFIX),
        ]

    def test_empty(self, tokenizer):
        assert tokenizer.tokenize("") == []

    def test_unknown_hangul(self, tokenizer):
        tokens = tokenizer.tokenize("쀍뛟")
        assert tokens == [
            KoreanToken("쀍뛟", KoreanPos.NOUN, 0, 2, unknown=True)
        ]

    def test_unknown_other_char(self, tokenizer):
        tokens = tokenizer.tokenize("\u200b")
        assert tokens == [
            KoreanToken("\u200b", KoreanPos.UNKNOWN, 0, 1, unknown=True)
        ]

    def test_korean_particle(self, tokenizer):
        tokens = tokenizer.tokenize("좋아ㅋㅋ")
        assert surfaces(tokens) == [
            ("좋아", KoreanPos.ADJECTIVE),
            ("ㅋㅋ", KoreanPos.KOREAN_PARTICLE),
        ]

    def test_structural_tokens(self, tokenizer):
        text = "#해시태그 @user $AAPL test@example.com http://example.com 100원"
        tokens = tokenizer.tokenize(text, keep_space=False)
        assert [t.pos for t in tokens] == [
            KoreanPos.HASHTAG,
            KoreanPos.SCREEN_NAME,
            KoreanPos.CASH_TAG,
            KoreanPos.EMAIL,
            KoreanPos.URL,
            KoreanPos.NUMBER,
        ]
        assert not any(t.unknown for t in tokens)

    def test_josa_after_number_and_alpha(self, tokenizer):
        tokens = tokenizer.tokenize("3개를 Python으로", keep_space=False)
        assert surfaces(tokens) == [
            ("3개", KoreanPos.NUMBER),
            ("를", KoreanPos.JOSA),
            ("Python", KoreanPos.ALPHA),
            ("으로", KoreanPos.JOSA),
        ]
        assert tokens[2].unknown

    def test_keep_space(self, tokenizer):
        text = "나는  밥을"
        with_space = tokenizer.tokenize(text)
        without_space = tokenizer.tokenize(text, keep_space=False)
        assert (" " * 2, KoreanPos.SPACE) in surfaces(with_space)
        assert KoreanPos.SPACE not in [t.pos for t in without_space]

    @pytest.mark.parametrize("text", [
        "나는 밥을 먹었어요",
        "대한민국의 수도는 서울이다.",
        "오늘 날씨가 좋아ㅋㅋ #날씨 http://a.com",
        "abc한국어123 ?! 쀍",
        "   ",
    ])
    def test_coverage(self, tokenizer, text):
        assert_covers(text, tokenizer.tokenize(text))

    def test_dictionary_round_trip(self, tokenizer, dictionary):
        dictionary.add(KoreanPos.NOUN, {"foo"})
        tokens = tokenizer.tokenize("foo")
        assert len(tokens) == 1
        assert tokens[0].pos is KoreanPos.NOUN
        assert not tokens[0].unknown

        dictionary.remove(KoreanPos.NOUN, {"foo"})
        tokens = tokenizer.tokenize("foo")
        assert len(tokens) == 1
        assert tokens[0].unknown

    def test_added_word_used_in_segmentation(self, tokenizer, dictionary):
        dictionary.add(KoreanPos.NOUN, "쀍뛟")
        tokens = tokenizer.tokenize("쀍뛟을")
        assert surfaces(tokens) == [
            ("쀍뛟", KoreanPos.NOUN),
            ("을", KoreanPos.JOSA),
        ]

    def test_malformed_input(self, tokenizer):
        with pytest.raises(MalformedInputError):
            tokenizer.tokenize(None)
        with pytest.raises(MalformedInputError):
            tokenizer.tokenize(123)


class TestTopN:
    """상위 n개 후보 테스트"""

    def test_first_candidate_is_best(self, tokenizer):
        candidates = tokenizer.tokenize_top_n("한국어", 3)
        assert len(candidates) == 1
        assert candidates[0][0] == tokenizer.tokenize("한국어")
        assert 2 <= len(candidates[0]) <= 3

    def test_candidates_cover_chunk(self, tokenizer):
        for candidate in tokenizer.tokenize_top_n("밥을", 5)[0]:
            assert ''.join(t.text for t in candidate) == "밥을"

    def test_candidates_are_distinct(self, tokenizer):
        candidates = tokenizer.tokenize_top_n("먹었어요", 4)[0]
        keys = [tuple((t.text, t.pos, t.unknown) for t in c) for c in candidates]
        assert len(set(keys)) == len(keys)

    def test_space_chunks(self, tokenizer):
        with_space = tokenizer.tokenize_top_n("나는 밥을", 2)
        without_space = tokenizer.tokenize_top_n("나는 밥을", 2,
                                                 keep_space=False)
        assert len(with_space) == 3
        assert len(without_space) == 2

    def test_n_is_clamped(self, tokenizer):
        candidates = tokenizer.tokenize_top_n("한국어", 1000)[0]
        assert len(candidates) <= settings.MAX_TOP_N

    @pytest.mark.parametrize("n", [0, -1, "3", None])
    def test_invalid_n(self, tokenizer, n):
        with pytest.raises(MalformedInputError):
            tokenizer.tokenize_top_n("한국어", n)


class TestTieBreaks:
    """분절 동점 처리 순서 테스트"""

    def test_lower_cost_wins(self):
        tokenizer = small_tokenizer((KoreanPos.NOUN, ["가나", "다라"]),
                                    (KoreanPos.JOSA, ["가나다라"]))
        # 조사 하나(250 + 연결 비용 800)보다 명사 둘(500 + 500)이 싸다
        assert surfaces(tokenizer.tokenize("가나다라")) == [
            ("가나", KoreanPos.NOUN),
            ("다라", KoreanPos.NOUN),
        ]

    def test_fewer_tokens_win_on_equal_cost(self, monkeypatch):
        monkeypatch.setattr(settings, "TRANSITION_PENALTY", 750)
        tokenizer = small_tokenizer((KoreanPos.NOUN, ["가나", "다라"]),
                                    (KoreanPos.JOSA, ["가나다라"]))
        assert surfaces(tokenizer.tokenize("가나다라")) == [
            ("가나다라", KoreanPos.JOSA),
        ]

    def test_preferred_bigram_wins(self):
        tokenizer = small_tokenizer((KoreanPos.NOUN, ["가", "나"]),
                                    (KoreanPos.JOSA, ["나"]))
        # 명사+명사 / 명사+조사 모두 비용 2000, 토큰 2개
        assert surfaces(tokenizer.tokenize("가나")) == [
            ("가", KoreanPos.NOUN),
            ("나", KoreanPos.JOSA),
        ]

    def test_leftmost_longest_wins(self):
        tokenizer = small_tokenizer((KoreanPos.NOUN, ["가나", "다", "가",
                                                      "나다"]))
        assert surfaces(tokenizer.tokenize("가나다")) == [
            ("가나", KoreanPos.NOUN),
            ("다", KoreanPos.NOUN),
        ]
        candidates = tokenizer.tokenize_top_n("가나다", 2)[0]
        assert [[t.text for t in c] for c in candidates] == [
            ["가나", "다"],
            ["가", "나다"],
        ]

    def test_leftmost_longest_looks_past_first_token(self):
        tokenizer = small_tokenizer((KoreanPos.NOUN, ["가", "나다라", "나다",
                                                      "라", "나", "다라"]))
        candidates = tokenizer.tokenize_top_n("가나다라", 3)[0]
        # 가+나다라가 가장 싸고, 나머지 두 후보는 비용과 토큰 수가 같다
        assert [[t.text for t in c] for c in candidates] == [
            ["가", "나다라"],
            ["가", "나다", "라"],
            ["가", "나", "다라"],
        ]

    def test_declaration_order_wins(self):
        tokenizer = small_tokenizer((KoreanPos.ADVERB, ["가"]),
                                    (KoreanPos.NOUN, ["가"]))
        assert surfaces(tokenizer.tokenize("가")) == [("가", KoreanPos.NOUN)]

        candidates = tokenizer.tokenize_top_n("가가", 4)[0]
        assert [[t.pos for t in c] for c in candidates] == [
            [KoreanPos.NOUN, KoreanPos.NOUN],
            [KoreanPos.NOUN, KoreanPos.ADVERB],
            [KoreanPos.ADVERB, KoreanPos.NOUN],
            [KoreanPos.ADVERB, KoreanPos.ADVERB],
        ]


class TestSegmentationScaling:
    """긴 청크 분절 시간 테스트"""

    @staticmethod
    def _elapsed(tokenizer, text):
        best = None
        for _ in range(3):
            started = time.perf_counter()
            tokenizer.tokenize(text)
            elapsed = time.perf_counter() - started
            best = elapsed if best is None else min(best, elapsed)
        return best

    def test_long_chunk_time_is_linear(self, tokenizer):
        short = self._elapsed(tokenizer, "학교" * 250)
        long = self._elapsed(tokenizer, "학교" * 2000)
        # 길이 8배: 선형이면 약 8배, 이차 시간이면 약 64배
        assert long < short * 24

    def test_long_chunk_is_covered(self, tokenizer):
        text = "학교" * 2000
        tokens = tokenizer.tokenize(text)
        assert_covers(text, tokens)
        assert not any(t.unknown for t in tokens)
