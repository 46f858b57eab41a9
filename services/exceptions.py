# DEPENDENCIES
from typing import Optional


GENERIC_ANALYSIS_ERROR = "Failed to analyze contract. Please try again."
MISSING_API_KEY_ERROR  = "OpenAI API key not configured"
MERGE_FAILURE_ERROR    = "Failed to combine partial analysis results. Please try again."
OVERSIZE_RESULT_ERROR  = ("Analysis result is too large to return. The contract may be too long. "
                          "Please try with a shorter contract or split it into sections.")
ANALYSIS_TIMEOUT_ERROR = ("Analysis timed out. The contract may be too long. "
                          "Please try with a shorter contract or split it into sections.")


class PipelineError(Exception):
    """
    Base class for analysis pipeline failures

    `str(error)` is the internal message and is only ever logged; `user_message` is what a client may see
    """
    user_message = GENERIC_ANALYSIS_ERROR

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)

        if user_message is not None:
            self.user_message = user_message


class ConfigurationError(PipelineError):
    """
    Model credential or provider configuration is missing
    """
    user_message = MISSING_API_KEY_ERROR


class ExtractionError(PipelineError):
    """
    Text could not be extracted from the uploaded document
    """
    user_message = "Failed to extract text from file. Please ensure the file is not corrupted and try again."

    def __init__(self, reason: str, user_message: Optional[str] = None):
        super().__init__(reason, user_message)
        self.reason = reason


class ModelError(PipelineError):
    """
    Transport or API failure while calling the language model
    """
    def __init__(self, message: str, provider: Optional[str] = None, user_message: Optional[str] = None):
        super().__init__(message, user_message)
        self.provider = provider


class InvalidModelResponse(ModelError):
    """
    Model answered, but not with JSON of the expected shape
    """


class MergeError(PipelineError):
    user_message = MERGE_FAILURE_ERROR


class OversizeError(PipelineError):
    """
    Result could not be brought under the size limits; keeps the risk level it was computed with
    """
    user_message = OVERSIZE_RESULT_ERROR

    def __init__(self, message: str, overall_risk: Optional[str] = None):
        super().__init__(message)
        self.overall_risk = overall_risk


class AnalysisTimeoutError(PipelineError):
    """
    The caller's deadline passed before the next model call; no further chunks are sent
    """
    user_message = ANALYSIS_TIMEOUT_ERROR
