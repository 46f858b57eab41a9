# DEPENDENCIES
from .exceptions import ModelError
from .exceptions import MergeError
from .data_models import Clause
from .exceptions import PipelineError
from .exceptions import OversizeError
from .data_models import StageOutcome
from .exceptions import ExtractionError
from .data_models import AnalysisResult
from .result_merger import ResultMerger
from .result_bounder import ResultBounder
from .exceptions import ConfigurationError
from .exceptions import InvalidModelResponse
from .prompt_builder import AnalysisPromptBuilder
from .contract_analyzer import ContractRiskAnalyzer


__all__ = ['Clause',
           'ModelError',
           'MergeError',
           'ResultMerger',
           'StageOutcome',
           'PipelineError',
           'OversizeError',
           'ResultBounder',
           'AnalysisResult',
           'ExtractionError',
           'ConfigurationError',
           'InvalidModelResponse',
           'ContractRiskAnalyzer',
           'AnalysisPromptBuilder',
          ]
