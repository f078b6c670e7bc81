"""
파일 처리 통합 유틸리티
사전 리소스와 사용자 사전 파일 읽기를 담당
"""

from pathlib import Path
from typing import List, Tuple, Union
import logging

from ..config import settings
from .error_handler import ConfigurationError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "# "


class FileHandler:
    """파일 처리 통합 클래스"""

    @staticmethod
    def read_text(file_path: Union[str, Path]) -> Tuple[str, str]:
        """
        텍스트 파일 읽기 (다양한 인코딩 지원)

        Args:
            file_path: 파일 경로

        Returns:
            (content, encoding): 파일 내용과 사용된 인코딩

        Raises:
            ConfigurationError: 파일이 없거나 모든 인코딩으로 읽기 실패했을 때
        """
        file_path = Path(file_path)

        if not file_path.is_file():
            raise ConfigurationError("사전 파일을 찾을 수 없습니다", path=file_path)

        encodings = settings.LEXICON_ENCODINGS

        last_error = None
        for encoding in encodings:
            try:
                with open(file_path, 'r', encoding=encoding) as f:
                    content = f.read()
                logger.debug(f"파일 읽기 성공: {file_path} (인코딩: {encoding})")
                return content, encoding
            except UnicodeDecodeError as e:
                last_error = e
                continue

        # 모든 인코딩 실패
        logger.error(f"파일을 읽을 수 없습니다. 시도한 인코딩: {encodings}")
        raise ConfigurationError("사전 파일 인코딩을 인식할 수 없습니다",
                                 path=file_path,
                                 details={
                                     "encodings": list(encodings),
                                     "last_error": str(last_error)
                                 })

    @staticmethod
    def iter_entries(content: str):
        """주석과 빈 줄을 제외한 줄 단위 항목"""
        for line in content.splitlines():
            line = line.strip().lstrip('\ufeff')
            if not line or line.startswith(COMMENT_PREFIX) or line == "#":
                continue
            yield line

    @staticmethod
    def read_word_list(file_path: Union[str, Path]) -> List[str]:
        """
        단어 목록 파일 읽기 (한 줄에 한 단어)

        Args:
            file_path: 단어 목록 파일 경로

        Returns:
            단어 리스트
        """
        content, _ = FileHandler.read_text(file_path)
        words = list(FileHandler.iter_entries(content))
        logger.debug(f"단어 목록 로드: {Path(file_path).name} ({len(words)}개)")
        return words

    @staticmethod
    def read_user_dictionary(
            file_path: Union[str, Path]) -> List[Tuple[str, str]]:
        """
        사용자 사전 파일 읽기

        형식: ``단어<TAB>품사`` (품사를 생략하면 Noun)

        Args:
            file_path: 사용자 사전 파일 경로

        Returns:
            (word, pos_name) 리스트
        """
        content, _ = FileHandler.read_text(file_path)

        entries = []
        for line in FileHandler.iter_entries(content):
            if '\t' in line:
                word, pos_name = line.split('\t', 1)
                entries.append((word.strip(), pos_name.strip() or "Noun"))
            else:
                entries.append((line, "Noun"))

        logger.info(f"사용자 사전 로드: {file_path} ({len(entries)}개 항목)")
        return entries
