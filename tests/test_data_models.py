# DEPENDENCIES
import pytest
from services.data_models import Clause
from services.data_models import StageOutcome
from services.exceptions import PipelineError
from services.data_models import AnalysisResult
from services.exceptions import InvalidModelResponse


class TestAnalysisResult:
    def test_error_result_carries_no_clauses(self):
        result = AnalysisResult(overall_risk = "High", clauses = [Clause("Term", "Low")], error = "boom")

        assert result.clauses == []
        assert result.has_error
        assert result.to_dict() == {"overall_risk" : "High", "clauses" : [], "error" : "boom"}


    def test_error_result_defaults_to_low(self):
        result = AnalysisResult.error_result("no results")

        assert result.overall_risk == "Low"
        assert result.error == "no results"


    def test_to_dict_omits_absent_error(self):
        result = AnalysisResult(overall_risk = "Medium", clauses = [Clause("Term", "Medium", summary = "s")])

        assert "error" not in result.to_dict()
        assert result.to_dict()["clauses"][0] == {"name"              : "Term",
                                                  "risk_level"        : "Medium",
                                                  "summary"           : "s",
                                                  "original_text"     : "",
                                                  "suggested_redline" : "",
                                                 }


class TestFromModelPayload:
    def test_valid_payload(self):
        result = AnalysisResult.from_model_payload({"overall_risk" : "High",
                                                    "clauses"      : [{"name" : "Indemnity", "risk_level" : "High", "summary" : None}],
                                                   })

        assert result.overall_risk == "High"
        assert result.clauses[0].name == "Indemnity"
        assert result.clauses[0].summary == ""
        assert result.clauses[0].original_text == ""


    @pytest.mark.parametrize("payload", [["not", "an", "object"],
                                         {"clauses" : []},
                                         {"overall_risk" : None, "clauses" : []},
                                         {"overall_risk" : "Low"},
                                         {"overall_risk" : "Low", "clauses" : "Term"},
                                         {"overall_risk" : "Low", "clauses" : ["Term"]},
                                        ])
    def test_invalid_payload(self, payload):
        with pytest.raises(InvalidModelResponse):
            AnalysisResult.from_model_payload(payload)


    def test_empty_clause_list_is_valid(self):
        result = AnalysisResult.from_model_payload({"overall_risk" : "Low", "clauses" : []})

        assert result.clauses == []
        assert not result.has_error


def test_stage_outcome():
    ok     = StageOutcome.ok(AnalysisResult())
    failed = StageOutcome.failed(PipelineError("internal detail"))

    assert ok.is_ok
    assert not failed.is_ok
    assert failed.error.user_message == "Failed to analyze contract. Please try again."
