# DEPENDENCIES
from typing import Dict
from typing import List
from typing import Optional
from utils.logger import log_info
from utils.logger import log_error
from utils.logger import log_warning
from config.risk_rules import RiskLevel
from config.risk_rules import RiskRules
from services.data_models import Clause
from services.exceptions import MergeError
from services.data_models import StageOutcome
from services.data_models import AnalysisResult
from config.pipeline_config import PipelineConfig
from utils.logger import ContractAnalyzerLogger


NO_RESULTS_ERROR = "no results"


class ResultMerger:
    """
    Combines per-chunk analyses into one document-level result: clauses are deduplicated by name,
    the riskiest instance of a clause wins and the first one seen wins ties
    """
    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()


    @ContractAnalyzerLogger.log_execution_time("merge_results")
    def merge(self, results: List[AnalysisResult]) -> StageOutcome:
        """
        Merge partial results in order

        Arguments:
        ----------
            results { list } : Per-chunk AnalysisResult objects in chunk order

        Returns:
        --------
            { StageOutcome } : Merged result, or a MergeError if merging failed
        """
        try:
            if not results:
                return StageOutcome.ok(AnalysisResult.error_result(NO_RESULTS_ERROR))

            if (len(results) == 1):
                return StageOutcome.ok(results[0])

            return StageOutcome.ok(self._merge_many(results))

        except Exception as e:
            log_error(e, context = {"component" : "ResultMerger", "operation" : "merge", "num_results" : len(results or [])})

            return StageOutcome.failed(MergeError(f"Merging {len(results or [])} results failed: {e!r}"))


    def _merge_many(self, results: List[AnalysisResult]) -> AnalysisResult:
        considered = results[:self.config.max_merge_results]

        if (len(results) > len(considered)):
            log_warning("Partial results beyond the merge limit were ignored",
                        received = len(results),
                        limit    = self.config.max_merge_results,
                       )

        clause_map : Dict[str, Clause] = dict()
        dropped                        = 0

        for result in considered:
            for clause in result.clauses:
                existing = clause_map.get(clause.name)

                if existing is None:
                    if (len(clause_map) >= self.config.max_merged_clauses):
                        dropped += 1
                        continue

                    clause_map[clause.name] = clause

                elif (RiskRules.get_risk_priority(clause.risk_level) > RiskRules.get_risk_priority(existing.risk_level)):
                    # Replacing keeps the clause in its first-seen position
                    clause_map[clause.name] = clause

        if dropped:
            log_warning("Distinct clauses beyond the merge limit were dropped",
                        dropped = dropped,
                        limit   = self.config.max_merged_clauses,
                       )

        overall_risk = RiskRules.highest_risk([result.overall_risk for result in considered], default = RiskLevel.LOW.value)

        log_info("Partial results merged",
                 num_results  = len(considered),
                 num_clauses  = len(clause_map),
                 overall_risk = overall_risk,
                )

        return AnalysisResult(overall_risk = overall_risk,
                              clauses      = list(clause_map.values()),
                             )
