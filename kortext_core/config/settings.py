"""
KorText 설정 관리 모듈
모든 설정값을 중앙화하여 관리
"""

from pathlib import Path
from typing import List, Optional
import os
from dotenv import load_dotenv

# 환경 변수 로드
load_dotenv()


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """KorText 전체 설정"""

    # ========== 경로 설정 ==========
    BASE_DIR = Path(__file__).resolve().parent.parent
    RESOURCES_DIR = BASE_DIR / "resources"
    LEXICON_DIR = Path(os.getenv("KORTEXT_LEXICON_DIR", str(RESOURCES_DIR)))
    USER_DICTIONARY_PATH = os.getenv("KORTEXT_USER_DICTIONARY", "")
    SPAM_NOUNS_FILE = "spam_nouns.txt"

    # 사전 파일 인코딩 우선순위
    LEXICON_ENCODINGS = ['utf-8', 'utf-8-sig', 'cp949', 'euc-kr']

    # ========== 실행 설정 ==========
    DEBUG = _env_flag("KORTEXT_DEBUG")

    # ========== 토크나이저 설정 ==========
    # 사전 단어 비용 = WORD_COST_SCALE // 길이
    WORD_COST_SCALE = 1000
    # 청크 내부에서 문법적으로 어색한 품사 연결에 붙는 비용
    TRANSITION_PENALTY = 800
    # 미등록 토큰 하나당 비용 (사전 단어의 최대 비용보다 커야 함)
    UNKNOWN_PENALTY = 5000
    # 미등록 토큰의 글자당 비용
    UNKNOWN_CHAR_COST = 1500
    # 미등록 토큰 최대 길이 (글자)
    MAX_UNKNOWN_LENGTH = 20
    # tokenize_top_n 최대 후보 수
    MAX_TOP_N = 10

    # ========== 정규화 설정 ==========
    MAX_PARTICLE_REPEAT = 2  # ㅋㅋㅋㅋ -> ㅋㅋ
    MIN_ELONGATION_RUN = 2  # 좋아아아 -> 좋아
    EMOTIVE_CODAS = ('ㅋ', 'ㅎ')  # 그랰ㅋㅋ -> 그래ㅋㅋ

    # ========== 구 추출 설정 ==========
    PHRASE_MAX_TOKENS = 8
    PHRASE_MIN_CHARS = 2  # 스팸 필터 사용 시 최소 글자 수
    CONNECTOR_JOSA = ('의', )

    # ========== 문장 분리 설정 ==========
    SENTENCE_SPLIT_ON_NEWLINE = _env_flag("KORTEXT_SENTENCE_SPLIT_ON_NEWLINE")

    # ========== 로깅 설정 ==========
    LOG_LEVEL = os.getenv("KORTEXT_LOG_LEVEL", "WARNING")
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE = Path(os.getenv("KORTEXT_LOG_FILE", "kortext.log"))
    ENABLE_FILE_LOGGING = _env_flag("KORTEXT_ENABLE_FILE_LOGGING")

    @classmethod
    def get_lexicon_path(cls, file_stem: str) -> Path:
        """품사별 사전 파일 경로"""
        return cls.LEXICON_DIR / f"{file_stem}.txt"

    @classmethod
    def get_user_dictionary_path(cls) -> Optional[Path]:
        """사용자 사전 파일 경로 (설정되지 않았으면 None)"""
        if not cls.USER_DICTIONARY_PATH:
            return None
        return Path(cls.USER_DICTIONARY_PATH)


# 설정 인스턴스 생성
settings = Settings()


# 설정 검증
def validate_settings() -> List[str]:
    """설정 검증 및 경고 목록 반환"""
    warnings = []

    max_known_cost = settings.WORD_COST_SCALE + settings.TRANSITION_PENALTY
    if settings.UNKNOWN_PENALTY <= max_known_cost:
        warnings.append(
            f"UNKNOWN_PENALTY({settings.UNKNOWN_PENALTY})가 사전 단어 최대 비용"
            f"({max_known_cost})보다 작거나 같습니다. 미등록 토큰이 우선될 수 있습니다.")

    if settings.UNKNOWN_CHAR_COST <= settings.WORD_COST_SCALE:
        warnings.append("UNKNOWN_CHAR_COST가 한 글자 사전 단어 비용보다 작거나 같습니다.")

    if not settings.LEXICON_DIR.exists():
        warnings.append(f"사전 경로가 존재하지 않습니다: {settings.LEXICON_DIR}")

    user_dictionary = settings.get_user_dictionary_path()
    if user_dictionary is not None and not user_dictionary.exists():
        warnings.append(f"사용자 사전 파일이 존재하지 않습니다: {user_dictionary}")

    return warnings
