# DEPENDENCIES
import pytest
from services.data_models import Clause
from services.exceptions import MergeError
from services.data_models import AnalysisResult
from config.pipeline_config import PipelineConfig
from services.result_merger import ResultMerger
from services.result_merger import NO_RESULTS_ERROR
from services.exceptions import MERGE_FAILURE_ERROR


def result(overall_risk, *clauses):
    return AnalysisResult(overall_risk = overall_risk,
                          clauses      = [Clause(name = name, risk_level = risk, summary = summary) for name, risk, summary in clauses],
                         )


@pytest.fixture
def merger():
    return ResultMerger(PipelineConfig())


def merged(merger, results):
    outcome = merger.merge(results)

    assert outcome.is_ok

    return outcome.result


def test_no_inputs(merger):
    output = merged(merger, [])

    assert output.error == NO_RESULTS_ERROR
    assert output.overall_risk == "Low"
    assert output.clauses == []


def test_single_input_returned_unchanged(merger):
    single = result("Medium", ("Term", "Low", "a"), ("Term", "High", "b"))

    assert merged(merger, [single]) is single


def test_higher_risk_overrides_in_first_seen_position(merger):
    output = merged(merger, [result("Low", ("Term", "Low", "first"), ("Indemnity", "Medium", "x")),
                             result("High", ("Term", "High", "second")),
                            ])

    assert [clause.name for clause in output.clauses] == ["Term", "Indemnity"]
    assert output.clauses[0].risk_level == "High"
    assert output.clauses[0].summary == "second"
    assert output.overall_risk == "High"


def test_tie_keeps_first_seen(merger):
    output = merged(merger, [result("Medium", ("Term", "Medium", "first")),
                             result("Medium", ("Term", "Medium", "second")),
                             result("Low", ("Term", "Low", "third")),
                            ])

    assert len(output.clauses) == 1
    assert output.clauses[0].summary == "first"


def test_unknown_risk_never_overrides(merger):
    output = merged(merger, [result("Low", ("Term", "Low", "first")),
                             result("Low", ("Term", "Critical", "second")),
                            ])

    assert output.clauses[0].summary == "first"


def test_disjoint_clauses_keep_order(merger):
    output = merged(merger, [result("Low", ("Term", "Low", "")),
                             result("Medium", ("Insurance", "Medium", ""), ("Governing Law", "Low", "")),
                            ])

    assert [clause.name for clause in output.clauses] == ["Term", "Insurance", "Governing Law"]
    assert output.overall_risk == "Medium"


def test_overall_risk_defaults_to_low_for_unknown_values(merger):
    output = merged(merger, [result("", ("Term", "Low", "")),
                             result("Unknown", ("Insurance", "Low", "")),
                            ])

    assert output.overall_risk == "Low"


def test_distinct_clause_cap(merger):
    results = [result("Low", *[(f"Clause {batch}-{index}", "Low", "") for index in range(100)]) for batch in range(3)]
    output  = merged(merger, results)

    assert len(output.clauses) == 200
    assert output.clauses[-1].name == "Clause 1-99"


def test_capped_merge_still_applies_overrides(merger):
    results  = [result("Low", *[(f"Clause {batch}-{index}", "Low", "") for index in range(100)]) for batch in range(2)]
    results += [result("High", ("Clause 0-0", "High", "raised"), ("Brand New", "High", ""))]
    output   = merged(merger, results)

    assert len(output.clauses) == 200
    assert output.clauses[0].risk_level == "High"
    assert "Brand New" not in [clause.name for clause in output.clauses]


def test_input_cap(merger):
    results  = [result("Low", ("Term", "Low", "")) for _ in range(100)]
    results += [result("High", ("Late Clause", "High", ""))]
    output   = merged(merger, results)

    assert [clause.name for clause in output.clauses] == ["Term"]
    assert output.overall_risk == "Low"


def test_failure_while_merging_is_reported_not_raised(merger, monkeypatch):
    def explode(results):
        raise RuntimeError("internal detail")

    monkeypatch.setattr(merger, "_merge_many", explode)

    outcome = merger.merge([result("Low", ("Term", "Low", "")), result("High", ("Indemnity", "High", ""))])

    assert not outcome.is_ok
    assert isinstance(outcome.error, MergeError)
    assert outcome.error.user_message == MERGE_FAILURE_ERROR
