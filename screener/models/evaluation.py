"""Evaluation record model."""

from typing import Any, Literal

from screener.models.base import RecordModel

Verdict = Literal["PASS", "FAIL"]


class NewEvaluation(RecordModel):
    """Evaluation payload before the store assigns an id."""

    solution_id: str
    timestamp: str
    results: dict[str, Any]
    overall_verdict: Verdict
    model_used: str
    temperature: str


class EvaluationRecord(NewEvaluation):
    """Evaluation history entry - append-only."""

    id: int
