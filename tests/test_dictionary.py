"""
한국어 사전 테스트

품사별 추가 / 삭제, 활용형 색인, 접두어 검색, 사용자 사전, 스냅샷 격리
"""

import threading

import pytest

from kortext_core.models import KoreanPos
from kortext_core.dictionary import (KoreanDictionary, conjugate,
                                     normalize_words, load_spam_nouns)
from kortext_core.utils import (InvalidPosError, MalformedInputError,
                                ConfigurationError)


class TestConjugation:
    """용언 활용형 생성 테스트"""

    @pytest.mark.parametrize("base, pos, surface", [
        ("먹다", KoreanPos.VERB, "먹었어요"),
        ("먹다", KoreanPos.VERB, "먹는"),
        ("먹다", KoreanPos.VERB, "먹어"),
        ("가다", KoreanPos.VERB, "갔다"),
        ("하다", KoreanPos.VERB, "했어요"),
        ("하다", KoreanPos.VERB, "하겠다"),
        ("되다", KoreanPos.VERB, "됐어"),
        ("모르다", KoreanPos.VERB, "몰라"),
        ("살다", KoreanPos.VERB, "사는"),
        ("살다", KoreanPos.VERB, "삽니다"),
        ("듣다", KoreanPos.VERB, "들어"),
        ("쓰다", KoreanPos.VERB, "써"),
        ("아름답다", KoreanPos.ADJECTIVE, "아름다운"),
        ("아름답다", KoreanPos.ADJECTIVE, "아름다워"),
        ("그렇다", KoreanPos.ADJECTIVE, "그래"),
        ("그렇다", KoreanPos.ADJECTIVE, "그런"),
        ("좋다", KoreanPos.ADJECTIVE, "좋아"),
    ])
    def test_surface_forms(self, base, pos, surface):
        assert surface in conjugate(base, pos)

    def test_base_form_included(self):
        assert "먹다" in conjugate("먹다", KoreanPos.VERB)

    def test_non_predicate_is_unchanged(self):
        assert conjugate("사과", KoreanPos.NOUN) == frozenset({"사과"})
        assert conjugate("foo", KoreanPos.VERB) == frozenset({"foo"})


class TestKoreanDictionary:
    """사전 기능 테스트"""

    def test_default_lexicon_loaded(self, dictionary):
        assert dictionary.size > 0
        assert dictionary.contains(KoreanPos.NOUN, "한국")
        assert dictionary.contains(KoreanPos.PROPER_NOUN, "서울")
        assert dictionary.contains(KoreanPos.JOSA, "어")

    def test_conjugated_surface_indexed(self, dictionary):
        assert dictionary.contains(KoreanPos.VERB, "먹었어요")
        assert dictionary.stem_of(KoreanPos.VERB, "먹었어요") == "먹다"
        assert dictionary.stem_of(KoreanPos.NOUN, "한국") is None

    def test_add_and_remove(self, dictionary):
        assert dictionary.add(KoreanPos.NOUN, ["코딩", "코딩"]) == 1
        assert dictionary.contains("Noun", "코딩")
        assert dictionary.add(KoreanPos.NOUN, "코딩") == 0

        assert dictionary.remove(KoreanPos.NOUN, {"코딩"}) == 1
        assert not dictionary.contains(KoreanPos.NOUN, "코딩")
        assert dictionary.remove(KoreanPos.NOUN, {"코딩"}) == 0

    def test_remove_verb_drops_surfaces(self, dictionary):
        dictionary.add(KoreanPos.VERB, "뽑다")
        assert dictionary.contains(KoreanPos.VERB, "뽑았다")

        dictionary.remove(KoreanPos.VERB, "뽑다")
        assert not dictionary.has_word("뽑았다")

    def test_word_under_multiple_pos(self, dictionary):
        dictionary.add(KoreanPos.ADVERB, "한국")
        assert dictionary.pos_of("한국") == [KoreanPos.NOUN, KoreanPos.ADVERB]

        dictionary.remove(KoreanPos.ADVERB, "한국")
        assert dictionary.pos_of("한국") == [KoreanPos.NOUN]

    def test_spaced_word_rejected(self, dictionary):
        size = dictionary.size
        assert dictionary.add(KoreanPos.NOUN, ["좋은 아침", ""]) == 0
        assert dictionary.size == size
        assert "좋은 아침" not in dictionary

    def test_invalid_pos(self, dictionary):
        with pytest.raises(InvalidPosError):
            dictionary.add("NotAPos", ["단어"])

    def test_malformed_words(self, dictionary):
        with pytest.raises(MalformedInputError):
            dictionary.add(KoreanPos.NOUN, None)
        with pytest.raises(MalformedInputError):
            dictionary.add(KoreanPos.NOUN, ["단어", 3])

    def test_lookup_prefixes_longest_first(self, dictionary):
        matches = list(dictionary.lookup_prefixes("한국어"))
        assert matches[0] == (KoreanPos.NOUN, 2)
        assert (KoreanPos.DETERMINER, 1) in matches
        lengths = [length for _, length in matches]
        assert lengths == sorted(lengths, reverse=True)

    def test_covers(self, dictionary):
        assert dictionary.covers("한국어")
        assert dictionary.covers("")
        assert not dictionary.covers("쀍")

    def test_copy_is_isolated(self, dictionary):
        other = dictionary.copy()
        other.add(KoreanPos.NOUN, "쀍")
        assert other.has_word("쀍")
        assert not dictionary.has_word("쀍")

    def test_snapshot_unchanged_by_mutation(self, dictionary):
        snapshot = dictionary.snapshot
        dictionary.add(KoreanPos.NOUN, "쀍")
        assert "쀍" not in snapshot.surfaces
        assert "쀍" in dictionary.snapshot.surfaces

    def test_reads_from_given_snapshot(self, dictionary):
        snapshot = dictionary.snapshot
        dictionary.remove(KoreanPos.VERB, "먹다")
        assert dictionary.stem_of(KoreanPos.VERB, "먹었어요") is None
        assert dictionary.stem_of(KoreanPos.VERB, "먹었어요",
                                  snapshot) == "먹다"
        assert dictionary.covers("먹었어요", snapshot)

    def test_concurrent_reads_and_writes(self, dictionary):
        errors = []
        words = [f"단어{i}" for i in range(50)]

        def writer():
            try:
                for word in words:
                    dictionary.add(KoreanPos.NOUN, word)
                for word in words:
                    dictionary.remove(KoreanPos.NOUN, word)
            except Exception as e:
                errors.append(e)

        def reader():
            try:
                for _ in range(200):
                    snapshot = dictionary.snapshot
                    for surface, by_pos in snapshot.surfaces.items():
                        assert by_pos
                    assert dictionary.covers("한국어")
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=writer)]
        threads += [threading.Thread(target=reader) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert not any(dictionary.has_word(word) for word in words)


class TestDictionaryResources:
    """리소스 / 사용자 사전 로드 테스트"""

    def test_normalize_words(self):
        assert normalize_words("단어") == ["단어"]
        assert normalize_words(["가", "나 다", ""]) == ["가"]

    def test_user_dictionary(self, dictionary, tmp_path):
        path = tmp_path / "user_dic.txt"
        path.write_text("# 사용자 사전\n쀍뛟\tNoun\n뽥\n\n에이비\tProperNoun\n",
                        encoding="utf-8")

        assert dictionary.load_user_dictionary(path) == 3
        assert dictionary.contains(KoreanPos.NOUN, "쀍뛟")
        assert dictionary.contains(KoreanPos.NOUN, "뽥")
        assert dictionary.contains(KoreanPos.PROPER_NOUN, "에이비")

    def test_user_dictionary_cp949(self, dictionary, tmp_path):
        path = tmp_path / "user_dic.txt"
        path.write_bytes("코딩\tNoun\n".encode("cp949"))

        assert dictionary.load_user_dictionary(path) == 1
        assert dictionary.contains(KoreanPos.NOUN, "코딩")

    def test_user_dictionary_invalid_pos(self, dictionary, tmp_path):
        path = tmp_path / "user_dic.txt"
        path.write_text("단어\tNotAPos\n", encoding="utf-8")

        with pytest.raises(InvalidPosError):
            dictionary.load_user_dictionary(path)

    def test_missing_lexicon_dir(self, tmp_path):
        with pytest.raises(ConfigurationError):
            KoreanDictionary.load_default(lexicon_dir=tmp_path)

    def test_spam_nouns(self):
        spam_nouns = load_spam_nouns()
        assert "무료" in spam_nouns
        assert "광고" in spam_nouns
