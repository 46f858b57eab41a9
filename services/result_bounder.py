# DEPENDENCIES
import json
from typing import Any
from typing import Optional
from dataclasses import replace
from utils.logger import log_info
from utils.logger import log_error
from utils.logger import log_warning
from services.data_models import Clause
from services.data_models import StageOutcome
from services.exceptions import OversizeError
from services.data_models import AnalysisResult
from config.risk_rules import RiskRules
from config.pipeline_config import PipelineConfig
from services.data_models import CLAUSE_TEXT_FIELDS
from utils.logger import ContractAnalyzerLogger


TRUNCATION_MARKER     = "... [truncated]"
CEILING_MARKER        = "... [truncated due to size]"
CLAUSE_BOUNDED_FIELDS = ("name", "risk_level") + CLAUSE_TEXT_FIELDS


def truncate_field(value: Any, max_length: int, marker: str = TRUNCATION_MARKER) -> str:
    """
    Cut a text field to `max_length` characters and append `marker`

    Missing values become empty strings. A value that already ends with the marker and fits within
    `max_length + len(marker)` is returned unchanged, so truncating twice is the same as truncating once.
    """
    if value is None:
        return ""

    if not isinstance(value, str):
        value = str(value)

    if (len(value) <= max_length):
        return value

    if (value.endswith(marker) and (len(value) <= max_length + len(marker))):
        return value

    return value[:max_length] + marker


class ResultBounder:
    """
    Guarantees a result stays within clause-count, field-length and serialized-size limits
    """
    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()


    @ContractAnalyzerLogger.log_execution_time("bound_result")
    def bound(self, result: AnalysisResult) -> StageOutcome:
        """
        Apply the size limits to a result

        Arguments:
        ----------
            result { AnalysisResult } : Merged or single-chunk result

        Returns:
        --------
                 { StageOutcome }     : A new, bounded result, or an OversizeError carrying the original overall risk
        """
        try:
            bounded = self._truncate(result)
            bounded = self._enforce_ceiling(bounded)

            return StageOutcome.ok(bounded)

        except OversizeError as e:
            log_error(e, context = {"component" : "ResultBounder", "operation" : "bound"})

            return StageOutcome.failed(e)

        except Exception as e:
            log_error(e, context = {"component" : "ResultBounder", "operation" : "bound"})

            return StageOutcome.failed(OversizeError(f"Bounding failed: {e!r}", overall_risk = RiskRules.normalize_risk(getattr(result, "overall_risk", None))))


    def _truncate(self, result: AnalysisResult) -> AnalysisResult:
        clauses = list(result.clauses or [])

        if (len(clauses) > self.config.max_clauses):
            log_warning("Clauses beyond the result limit were dropped",
                        received = len(clauses),
                        limit    = self.config.max_clauses,
                       )

        bounded = [self._truncate_clause(clause) for clause in clauses[:self.config.max_clauses]]

        return AnalysisResult(overall_risk = RiskRules.normalize_risk(result.overall_risk),
                              clauses      = bounded,
                              error        = result.error,
                             )


    def _truncate_clause(self, clause: Clause) -> Clause:
        limit   = self.config.max_field_length
        updates = {name: truncate_field(getattr(clause, name, None), limit) for name in CLAUSE_BOUNDED_FIELDS}

        return replace(clause, **updates)


    def _enforce_ceiling(self, result: AnalysisResult) -> AnalysisResult:
        """
        Shrink clause excerpts further when the serialized result is still over the hard ceiling
        """
        size = self.serialized_size(result)

        if (size <= self.config.max_response_bytes):
            return result

        log_warning("Result exceeds the serialized size ceiling, truncating further",
                    size_bytes  = size,
                    limit_bytes = self.config.max_response_bytes,
                   )

        limit  = self.config.ceiling_field_length
        shrunk = result.with_clauses([replace(clause,
                                              original_text     = truncate_field(clause.original_text, limit, CEILING_MARKER),
                                              suggested_redline = truncate_field(clause.suggested_redline, limit, CEILING_MARKER),
                                             )
                                      for clause in result.clauses])

        shrunk_size = self.serialized_size(shrunk)

        if (shrunk_size > self.config.max_response_bytes):
            raise OversizeError(f"Result is {shrunk_size} bytes after truncation, limit is {self.config.max_response_bytes}",
                                overall_risk = result.overall_risk,
                               )

        log_info("Result brought under the size ceiling", size_bytes = shrunk_size)

        return shrunk


    @staticmethod
    def serialized_size(result: AnalysisResult) -> int:
        """
        Size in bytes of the UTF-8 JSON body the result serializes to
        """
        return len(json.dumps(result.to_dict(), ensure_ascii = False).encode("utf-8"))
