# DEPENDENCIES
import re
import math
from typing import Any
from typing import List
from typing import Dict
from typing import Optional
from config.pipeline_config import PipelineConfig
from utils.language_detector import LanguageDetector


SENTENCE_BOUNDARY = ". "
LINE_BOUNDARY     = "\n"


class TextProcessor:
    """
    Token estimation and boundary-aware chunking of contract text
    """
    def __init__(self, config: Optional[PipelineConfig] = None):
        """
        Initialize text processor

        Arguments:
        ----------
            config { PipelineConfig } : Chunk size, overlap and threshold settings
        """
        self.config = config or PipelineConfig()


    def estimate_tokens(self, text: str) -> int:
        """
        Rough token count: one token per `chars_per_token` characters, rounded up
        """
        return math.ceil(len(text) / self.config.chars_per_token)


    def needs_chunking(self, text: str, threshold: Optional[int] = None) -> bool:
        """
        Whether the text is too long to send to the model in a single call
        """
        threshold = self.config.chunking_threshold if threshold is None else threshold

        return self.estimate_tokens(text) > threshold


    def chunk_text(self, text: str, chunk_size: Optional[int] = None, overlap: Optional[int] = None) -> List[str]:
        """
        Split text into overlapping chunks, preferring sentence or line boundaries

        Arguments:
        ----------
            text       { str } : Contract text to chunk

            chunk_size { int } : Target chunk size in tokens (default from config)

            overlap    { int } : Tokens shared between adjacent chunks (default from config)

        Returns:
        --------
                { list }       : Ordered, non-empty chunks whose union covers the text
        """
        chunk_size = self.config.chunk_size if chunk_size is None else chunk_size
        overlap    = self.config.chunk_overlap if overlap is None else overlap

        if (self.estimate_tokens(text) <= chunk_size):
            return [text]

        text_length   = len(text)
        window_chars  = chunk_size * self.config.chars_per_token
        overlap_chars = overlap * self.config.chars_per_token

        chunks        = list()
        start_index   = 0

        while (start_index < text_length):
            end_index = min(start_index + window_chars, text_length)

            if (end_index < text_length):
                end_index = self._snap_to_boundary(text, start_index, end_index, window_chars)

            chunks.append(text[start_index:end_index])

            if (end_index >= text_length):
                break

            next_start  = end_index - overlap_chars

            # Overlap must never stall the cursor
            start_index = next_start if (next_start > start_index) else end_index

        return chunks


    def _snap_to_boundary(self, text: str, start_index: int, end_index: int, window_chars: int) -> int:
        """
        Move a hard cut back to just past the last sentence end or newline in the window's tail
        """
        search_start = max(start_index, end_index - window_chars * self.config.boundary_search_ratio)

        # Matches must start before the hard cut so the snapped chunk stays inside the window
        last_period  = text.rfind(SENTENCE_BOUNDARY, start_index, end_index + 1)
        last_newline = text.rfind(LINE_BOUNDARY, start_index, end_index)

        if ((last_period > search_start) and (last_period > last_newline)):
            return last_period + 1

        if (last_newline > search_start):
            return last_newline + 1

        return end_index


    @staticmethod
    def clean_extracted_text(text: str) -> str:
        """
        Normalise line endings and whitespace left behind by PDF/DOCX extraction
        """
        text = text.replace('\x00', '')
        text = text.replace('\r\n', '\n').replace('\r', '\n')
        text = re.sub(r'[ \t]+\n', '\n', text)
        text = re.sub(r'\n{3,}', '\n\n', text)
        text = re.sub(r'[ \t]{2,}', ' ', text)

        return text.strip()


    def get_text_statistics(self, text: str) -> Dict[str, Any]:
        """
        Size and language facts about a contract, used for request logging
        """
        detector = LanguageDetector(self.config)
        chunked  = self.needs_chunking(text)

        return {"character_count"  : len(text),
                "word_count"       : len(text.split()),
                "estimated_tokens" : self.estimate_tokens(text),
                "needs_chunking"   : chunked,
                "chunk_count"      : len(self.chunk_text(text)) if chunked else 1,
                "devanagari_ratio" : round(detector.devanagari_ratio(text), 4),
                "language"         : detector.detect_language(text).value,
               }
