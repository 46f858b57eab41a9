# DEPENDENCIES
import re
from typing import Optional
from config.risk_rules import DocumentLanguage
from config.pipeline_config import PipelineConfig


# Devanagari Unicode block: U+0900 to U+097F
DEVANAGARI_PATTERN = re.compile(r'[\u0900-\u097F]')
WHITESPACE_PATTERN = re.compile(r'\s')


class LanguageDetector:
    """
    Script-ratio language classifier: share of Devanagari characters among all non-whitespace characters
    """
    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()


    @staticmethod
    def devanagari_ratio(text: str) -> float:
        """
        Fraction of non-whitespace characters that fall in the Devanagari block (0.0 for empty text)
        """
        if not text:
            return 0.0

        total_chars = len(WHITESPACE_PATTERN.sub('', text))

        if (total_chars == 0):
            return 0.0

        return len(DEVANAGARI_PATTERN.findall(text)) / total_chars


    def detect_language(self, text: str) -> DocumentLanguage:
        """
        Classify text as hindi, mixed or english

        Arguments:
        ----------
            text { str } : Contract text

        Returns:
        --------
            { DocumentLanguage } : HINDI when the ratio exceeds the hindi threshold,
                                   MIXED when it exceeds the mixed threshold, else ENGLISH
        """
        ratio = self.devanagari_ratio(text)

        if (ratio > self.config.hindi_ratio_threshold):
            return DocumentLanguage.HINDI

        if (ratio > self.config.mixed_ratio_threshold):
            return DocumentLanguage.MIXED

        return DocumentLanguage.ENGLISH
