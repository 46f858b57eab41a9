# DEPENDENCIES
import pytest
from services.data_models import Clause
from services.exceptions import OversizeError
from services.data_models import AnalysisResult
from config.pipeline_config import PipelineConfig
from services.result_bounder import ResultBounder
from services.result_bounder import truncate_field
from services.result_bounder import CEILING_MARKER
from services.result_bounder import TRUNCATION_MARKER
from services.exceptions import OVERSIZE_RESULT_ERROR
from services.contract_analyzer import ContractRiskAnalyzer


def bounded(bounder, result):
    outcome = bounder.bound(result)

    assert outcome.is_ok

    return outcome.result


@pytest.fixture
def bounder():
    return ResultBounder(PipelineConfig())


class TestTruncateField:
    def test_short_value_untouched(self):
        assert truncate_field("abc", 10) == "abc"


    def test_long_value_cut_and_marked(self):
        assert truncate_field("a" * 20, 10) == "a" * 10 + TRUNCATION_MARKER


    def test_idempotent(self):
        once = truncate_field("a" * 20, 10)

        assert truncate_field(once, 10) == once


    def test_missing_value_becomes_empty(self):
        assert truncate_field(None, 10) == ""


class TestResultBounder:
    def test_long_fields_truncated(self, bounder):
        result = AnalysisResult(overall_risk = "High",
                                clauses      = [Clause("Indemnity", "High", summary = "short", original_text = "x" * 20000)],
                               )
        output = bounded(bounder, result)
        clause = output.clauses[0]

        assert clause.original_text == "x" * 10000 + TRUNCATION_MARKER
        assert clause.summary == "short"
        assert output.overall_risk == "High"
        assert result.clauses[0].original_text == "x" * 20000


    def test_bounding_twice_changes_nothing(self, bounder):
        result = AnalysisResult(overall_risk = "Medium",
                                clauses      = [Clause("Term", "Medium", summary = "s" * 15000, suggested_redline = "r" * 10001)],
                               )
        once   = bounded(bounder, result)
        twice  = bounded(bounder, once)

        assert twice.to_dict() == once.to_dict()


    def test_clause_cap(self, bounder):
        result = AnalysisResult(overall_risk = "Low",
                                clauses      = [Clause(f"Clause {index}", "Low") for index in range(150)],
                               )
        output = bounded(bounder, result)

        assert len(output.clauses) == 100
        assert output.clauses[-1].name == "Clause 99"


    def test_error_result_passes_through(self, bounder):
        output = bounded(bounder, AnalysisResult.error_result("no results"))

        assert output.error == "no results"
        assert output.clauses == []


    def test_ceiling_triggers_second_truncation(self):
        bounder = ResultBounder(PipelineConfig(max_response_bytes = 60000))
        result  = AnalysisResult(overall_risk = "High",
                                 clauses      = [Clause(f"Clause {index}", "High", original_text = "o" * 12000, suggested_redline = "r" * 12000)
                                                 for index in range(3)],
                                )
        output  = bounded(bounder, result)

        for clause in output.clauses:
            assert clause.original_text == "o" * 5000 + CEILING_MARKER
            assert clause.suggested_redline == "r" * 5000 + CEILING_MARKER

        assert ResultBounder.serialized_size(output) <= 60000


    def test_irreducible_result_fails_with_overall_risk(self):
        bounder = ResultBounder(PipelineConfig(max_response_bytes = 1000))
        result  = AnalysisResult(overall_risk = "High",
                                 clauses      = [Clause(f"Clause {index}", "High", original_text = "o" * 12000) for index in range(3)],
                                )
        outcome = bounder.bound(result)

        assert not outcome.is_ok
        assert isinstance(outcome.error, OversizeError)
        assert outcome.error.overall_risk == "High"


    def test_name_and_risk_level_truncated(self, bounder):
        result = AnalysisResult(overall_risk = "Medium",
                                clauses      = [Clause("N" * 20000, "R" * 20000)],
                               )
        clause = bounded(bounder, result).clauses[0]

        assert clause.name == "N" * 10000 + TRUNCATION_MARKER
        assert clause.risk_level == "R" * 10000 + TRUNCATION_MARKER


    def test_unknown_overall_risk_becomes_low(self, bounder):
        output = bounded(bounder, AnalysisResult(overall_risk = "Critical" * 10000, clauses = [Clause("Term", "Critical")]))

        assert output.overall_risk == "Low"
        assert output.clauses[0].risk_level == "Critical"


    def test_oversize_fallback_stays_under_ceiling(self):
        bounder = ResultBounder(PipelineConfig(max_response_bytes = 1000))
        result  = AnalysisResult(overall_risk = "H" * 50000,
                                 clauses      = [Clause("N" * 50000, "High")],
                                )
        outcome = bounder.bound(result)

        assert not outcome.is_ok
        assert outcome.error.overall_risk == "Low"

        fallback = ContractRiskAnalyzer.to_analysis_result(outcome)

        assert fallback.to_dict() == {"overall_risk" : "Low", "clauses" : [], "error" : OVERSIZE_RESULT_ERROR}
        assert ResultBounder.serialized_size(fallback) <= 1000
