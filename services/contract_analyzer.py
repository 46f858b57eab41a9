# DEPENDENCIES
import json
import time
import uuid
from typing import Any
from typing import List
from typing import Optional
from utils.logger import log_info
from utils.logger import log_error
from utils.logger import log_warning
from config.risk_rules import RiskRules
from config.risk_rules import DocumentLanguage
from services.exceptions import PipelineError
from services.exceptions import OversizeError
from services.data_models import StageOutcome
from utils.text_processor import TextProcessor
from services.data_models import AnalysisResult
from config.pipeline_config import PipelineConfig
from utils.logger import ContractAnalyzerLogger
from model_manager.llm_manager import LLMManager
from services.exceptions import ConfigurationError
from services.result_merger import ResultMerger
from services.result_bounder import ResultBounder
from utils.language_detector import LanguageDetector
from services.exceptions import InvalidModelResponse
from services.exceptions import AnalysisTimeoutError
from services.exceptions import MISSING_API_KEY_ERROR
from services.prompt_builder import AnalysisPromptBuilder


class ContractRiskAnalyzer:
    """
    Drives clause-level risk analysis of a whole contract

    Pipeline: language detection -> chunking (long texts only) -> one model call per chunk, strictly
    sequential and in chunk order -> merge (several chunks only) -> size bounding
    """
    def __init__(self, llm_manager: LLMManager, config: Optional[PipelineConfig] = None):
        """
        Initialize the analyzer

        Arguments:
        ----------
            llm_manager { LLMManager }     : Model access; its default provider is used for every call

            config      { PipelineConfig } : Thresholds and limits shared by every stage
        """
        self.config            = config or PipelineConfig()
        self.llm_manager       = llm_manager
        self.language_detector = LanguageDetector(self.config)
        self.text_processor    = TextProcessor(self.config)
        self.prompt_builder    = AnalysisPromptBuilder(self.config)
        self.merger            = ResultMerger(self.config)
        self.bounder           = ResultBounder(self.config)


    @classmethod
    def from_settings(cls, settings) -> "ContractRiskAnalyzer":
        return cls(llm_manager = LLMManager.from_settings(settings),
                   config      = PipelineConfig.from_settings(settings),
                  )


    @ContractAnalyzerLogger.log_execution_time("analyze_contract")
    def analyze_contract(self, contract_text: str, deadline: Optional[float] = None) -> AnalysisResult:
        """
        Analyze a contract and always return a result object

        Stage failures come back as a result whose `error` holds a user-safe message; the internal cause is logged only

        Arguments:
        ----------
            contract_text { str }  : Full extracted contract text

            deadline      { float } : `time.monotonic()` value after which no further model call is made

        Returns:
        --------
            { AnalysisResult }     : Bounded analysis, or an error-flagged result with no clauses
        """
        analysis_id = str(uuid.uuid4())

        try:
            outcome = self.run(contract_text, analysis_id = analysis_id, deadline = deadline)

        except Exception as e:
            outcome = StageOutcome.failed(PipelineError(f"Unexpected pipeline failure: {e!r}"))

        return self.to_analysis_result(outcome, analysis_id = analysis_id)


    def run(self, contract_text: str, analysis_id: Optional[str] = None, deadline: Optional[float] = None) -> StageOutcome:
        """
        Run the pipeline without converting failures

        Returns:
        --------
            { StageOutcome } : The bounded result, or the PipelineError that stopped the run
        """
        if not self.llm_manager.is_configured():
            return StageOutcome.failed(ConfigurationError(MISSING_API_KEY_ERROR))

        try:
            language = self.language_detector.detect_language(contract_text)
            chunks   = self._split(contract_text)

            log_info("Contract analysis started",
                     analysis_id = analysis_id,
                     text_length = len(contract_text),
                     language    = language.value,
                     num_chunks  = len(chunks),
                    )

            results  = self._analyze_chunks(chunks, language, analysis_id, deadline)

        except PipelineError as e:
            return StageOutcome.failed(e)

        except Exception as e:
            return StageOutcome.failed(PipelineError(f"Unexpected failure during model invocation: {e!r}"))

        if (len(results) > 1):
            merged = self.merger.merge(results)

            if not merged.is_ok:
                return merged

            result = merged.result

        else:
            result = results[0]

        outcome = self.bounder.bound(result)

        if outcome.is_ok:
            log_info("Contract analysis completed",
                     analysis_id  = analysis_id,
                     overall_risk = outcome.result.overall_risk,
                     num_clauses  = len(outcome.result.clauses),
                    )

        return outcome


    def _split(self, contract_text: str) -> List[str]:
        if self.text_processor.needs_chunking(contract_text):
            return self.text_processor.chunk_text(contract_text)

        return [contract_text]


    def _analyze_chunks(self, chunks: List[str], language: DocumentLanguage, analysis_id: Optional[str], deadline: Optional[float] = None) -> List[AnalysisResult]:
        """
        Invoke the model once per chunk, one at a time; the first failure or a passed deadline aborts the whole analysis
        """
        results = list()

        for index, chunk in enumerate(chunks, start = 1):
            if ((deadline is not None) and (time.monotonic() >= deadline)):
                raise AnalysisTimeoutError(f"Deadline passed before chunk {index}/{len(chunks)}; {len(results)} chunks analyzed")

            log_info(f"Analyzing chunk {index}/{len(chunks)}", analysis_id = analysis_id, chunk_length = len(chunk))

            results.append(self.analyze_chunk(chunk, language))

        return results


    def analyze_chunk(self, chunk: str, language: DocumentLanguage = DocumentLanguage.ENGLISH) -> AnalysisResult:
        """
        Single model invocation on one chunk, validated

        Raises:
        -------
            ModelError, InvalidModelResponse, ConfigurationError
        """
        prompt   = self.prompt_builder.build(chunk, language)
        response = self.llm_manager.complete(prompt)
        payload  = self.parse_model_json(response.text)

        return AnalysisResult.from_model_payload(payload)


    @staticmethod
    def parse_model_json(text: str) -> Any:
        """
        Parse model output as JSON, tolerating a surrounding Markdown code fence
        """
        cleaned = (text or "").strip()
        cleaned = cleaned.replace("```json", "").replace("```", "").strip()

        try:
            return json.loads(cleaned)

        except json.JSONDecodeError as e:
            raise InvalidModelResponse(f"Model response is not valid JSON: {e}") from e


    @staticmethod
    def to_analysis_result(outcome: StageOutcome, analysis_id: Optional[str] = None) -> AnalysisResult:
        """
        Boundary adapter: turn a stage outcome into the client-facing result
        """
        if outcome.is_ok:
            return outcome.result

        error = outcome.error

        if isinstance(error, ConfigurationError):
            log_warning("Contract analysis skipped: model not configured", analysis_id = analysis_id, reason = str(error))

        else:
            log_error(error, context = {"component" : "ContractRiskAnalyzer", "analysis_id" : analysis_id})

        if isinstance(error, OversizeError):
            return AnalysisResult.error_result(error.user_message, overall_risk = RiskRules.normalize_risk(error.overall_risk))

        return AnalysisResult.error_result(error.user_message)
