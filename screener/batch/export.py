"""Flatten batch results into a pass/fail CSV."""

import csv
from collections.abc import Mapping
from typing import TextIO

from screener.engine.criteria import CRITERIA
from screener.schemas.evaluation import EvaluationResponse

HEADER = ["Solution ID", *(f"Criterion {c.id}" for c in CRITERIA)]


def export_rows(results: Mapping[str, EvaluationResponse]) -> list[list[str | int]]:
    """One row per solution: its ID then 1 (PASS) or 0 (FAIL) per criterion."""
    rows: list[list[str | int]] = []
    for solution_id, evaluation in results.items():
        passed = {c.id: c.result == "PASS" for c in evaluation.criteria}
        rows.append([solution_id, *(int(passed.get(c.id, False)) for c in CRITERIA)])
    return rows


def write_results_csv(results: Mapping[str, EvaluationResponse], handle: TextIO) -> int:
    """Write the header and result rows; returns the number of rows written."""
    rows = export_rows(results)
    writer = csv.writer(handle, lineterminator="\n")
    writer.writerow(HEADER)
    writer.writerows(rows)
    return len(rows)
