# DEPENDENCIES
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from dataclasses import field
from dataclasses import replace
from dataclasses import dataclass
from config.risk_rules import RiskLevel
from services.exceptions import PipelineError
from services.exceptions import InvalidModelResponse


CLAUSE_TEXT_FIELDS = ("summary", "original_text", "suggested_redline")


def _as_text(value: Any) -> str:
    """
    Coerce a model-supplied field to a string; missing values become empty strings
    """
    if value is None:
        return ""

    if isinstance(value, str):
        return value

    return str(value)


@dataclass
class Clause:
    """
    One contract provision found by analysis
    """
    name              : str
    risk_level        : str  # "Low", "Medium", "High"; other values rank as unknown
    summary           : str = ""
    original_text     : str = ""
    suggested_redline : str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name"              : self.name,
                "risk_level"        : self.risk_level,
                "summary"           : self.summary,
                "original_text"     : self.original_text,
                "suggested_redline" : self.suggested_redline,
               }


    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Clause":
        return cls(name              = _as_text(data.get("name")),
                   risk_level        = _as_text(data.get("risk_level")),
                   summary           = _as_text(data.get("summary")),
                   original_text     = _as_text(data.get("original_text")),
                   suggested_redline = _as_text(data.get("suggested_redline")),
                  )


@dataclass
class AnalysisResult:
    """
    Document-level risk report; a result carrying an error never carries clauses
    """
    overall_risk : str                    = RiskLevel.LOW.value
    clauses      : List[Clause]           = field(default_factory = list)
    error        : Optional[str]          = None

    def __post_init__(self):
        if self.error is not None:
            self.clauses = list()


    @property
    def has_error(self) -> bool:
        return self.error is not None


    def to_dict(self) -> Dict[str, Any]:
        data = {"overall_risk" : self.overall_risk,
                "clauses"      : [clause.to_dict() for clause in self.clauses],
               }

        if self.error is not None:
            data["error"] = self.error

        return data


    def with_clauses(self, clauses: List[Clause]) -> "AnalysisResult":
        return replace(self, clauses = list(clauses))


    @classmethod
    def error_result(cls, message: str, overall_risk: Optional[str] = None) -> "AnalysisResult":
        return cls(overall_risk = overall_risk or RiskLevel.LOW.value,
                   clauses      = [],
                   error        = message,
                  )


    @classmethod
    def from_model_payload(cls, payload: Any) -> "AnalysisResult":
        """
        Validate a parsed model response and build a result from it

        Raises:
        -------
            InvalidModelResponse : payload is not an object, `overall_risk` is missing or null,
                                   `clauses` is not a list, or a clause entry is not an object
        """
        if not isinstance(payload, dict):
            raise InvalidModelResponse(f"Expected a JSON object, got {type(payload).__name__}")

        overall_risk = payload.get("overall_risk")
        clauses      = payload.get("clauses")

        if not overall_risk:
            raise InvalidModelResponse("Invalid response structure: missing overall_risk")

        if not isinstance(clauses, list):
            raise InvalidModelResponse("Invalid response structure: clauses is not an array")

        parsed = list()

        for position, item in enumerate(clauses):
            if not isinstance(item, dict):
                raise InvalidModelResponse(f"Invalid response structure: clause {position} is not an object")

            parsed.append(Clause.from_dict(item))

        return cls(overall_risk = _as_text(overall_risk),
                   clauses      = parsed,
                  )


@dataclass
class StageOutcome:
    """
    Result of an internal pipeline stage: either a result or the error that stopped the stage
    """
    result : Optional[AnalysisResult] = None
    error  : Optional[PipelineError]  = None

    @property
    def is_ok(self) -> bool:
        return self.error is None


    @classmethod
    def ok(cls, result: AnalysisResult) -> "StageOutcome":
        return cls(result = result)


    @classmethod
    def failed(cls, error: PipelineError) -> "StageOutcome":
        return cls(error = error)
