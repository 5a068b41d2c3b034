"""Unit tests for flattening batch results to CSV."""

import io

from conftest import evaluation_payload
from screener.batch.export import HEADER, export_rows, write_results_csv
from screener.schemas.evaluation import EvaluationResponse


def _response(results):
    return EvaluationResponse.model_validate(evaluation_payload(results))


def test_export_rows_are_binary_per_criterion():
    """PASS is 1, FAIL is 0, one column per criterion in id order."""
    results = {
        "S1": _response(("PASS",) * 5),
        "S3": _response(("PASS", "FAIL", "PASS", "PASS", "FAIL")),
    }
    assert export_rows(results) == [["S1", 1, 1, 1, 1, 1], ["S3", 1, 0, 1, 1, 0]]


def test_write_results_csv():
    """Header then one line per solution."""
    handle = io.StringIO()
    written = write_results_csv({"S1": _response(("FAIL",) + ("PASS",) * 4)}, handle)
    assert written == 1
    assert handle.getvalue() == (
        "Solution ID,Criterion 1,Criterion 2,Criterion 3,Criterion 4,Criterion 5\n"
        "S1,0,1,1,1,1\n"
    )
    assert HEADER[0] == "Solution ID"
