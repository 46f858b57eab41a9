# DEPENDENCIES
from typing import Dict
from typing import List
from dataclasses import field
from dataclasses import dataclass
from config.risk_rules import RiskRules
from config.risk_rules import DocumentLanguage


@dataclass
class PipelineConfig:
    """
    Every threshold and limit of the analysis pipeline, passed explicitly into each stage
    """
    chunk_size            : int   = 3000     # tokens per chunk
    chunk_overlap         : int   = 200      # tokens shared by adjacent chunks
    chunking_threshold    : int   = 8000     # tokens above which the text is split
    chars_per_token       : int   = 4
    boundary_search_ratio : float = 0.2      # tail of the window searched for a sentence break
    hindi_ratio_threshold : float = 0.30
    mixed_ratio_threshold : float = 0.10
    max_merge_results     : int   = 100
    max_merged_clauses    : int   = 200
    max_clauses           : int   = 100
    max_field_length      : int   = 10000
    ceiling_field_length  : int   = 5000
    max_response_bytes    : int   = 10 * 1024 * 1024
    clause_vocabularies   : Dict[str, List[str]] = field(default_factory = RiskRules.get_vocabularies)

    def __post_init__(self):
        if (self.chunk_size <= 0):
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

        if ((self.chunk_overlap < 0) or (self.chunk_overlap >= self.chunk_size)):
            raise ValueError(f"chunk_overlap must be in [0, chunk_size), got {self.chunk_overlap}")

        if (self.chars_per_token <= 0):
            raise ValueError(f"chars_per_token must be positive, got {self.chars_per_token}")

        if not (0.0 <= self.mixed_ratio_threshold <= self.hindi_ratio_threshold <= 1.0):
            raise ValueError("Language thresholds must satisfy 0 <= mixed <= hindi <= 1")

        if (self.max_field_length <= 0) or (self.max_clauses < 0):
            raise ValueError("Bounding limits must be positive")


    def get_clause_names(self, language: DocumentLanguage) -> List[str]:
        names = self.clause_vocabularies.get(language.value)

        if names is None:
            names = self.clause_vocabularies.get(DocumentLanguage.ENGLISH.value, [])

        return list(names)


    @classmethod
    def from_settings(cls, settings) -> "PipelineConfig":
        """
        Build the pipeline configuration from application settings
        """
        return cls(chunk_size            = settings.CHUNK_SIZE_TOKENS,
                   chunk_overlap         = settings.CHUNK_OVERLAP_TOKENS,
                   chunking_threshold    = settings.CHUNKING_THRESHOLD,
                   chars_per_token       = settings.CHARS_PER_TOKEN,
                   hindi_ratio_threshold = settings.HINDI_RATIO_THRESHOLD,
                   mixed_ratio_threshold = settings.MIXED_RATIO_THRESHOLD,
                   max_merge_results     = settings.MAX_MERGE_RESULTS,
                   max_merged_clauses    = settings.MAX_MERGED_CLAUSES,
                   max_clauses           = settings.MAX_RESULT_CLAUSES,
                   max_field_length      = settings.MAX_FIELD_LENGTH,
                   ceiling_field_length  = settings.CEILING_FIELD_LENGTH,
                   max_response_bytes    = settings.MAX_RESPONSE_BYTES,
                  )
