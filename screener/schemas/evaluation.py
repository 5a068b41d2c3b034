"""Evaluation request/response schemas."""

from pydantic import Field, field_validator

from screener.engine.criteria import CRITERION_IDS
from screener.models import Verdict
from screener.models.base import CamelModel


class EvaluateRequest(CamelModel):
    """POST /api/evaluate/{id} request. Presence is checked by the route."""

    model: str | None = None
    temperature: float | None = None


class CriterionResult(CamelModel):
    """One criterion as judged by the model."""

    id: int = Field(ge=1, le=5)
    name: str
    result: Verdict
    reasoning: str


class EvaluationResponse(CamelModel):
    """Full evaluation: one result per criterion plus the overall verdict."""

    criteria: list[CriterionResult]
    overall_verdict: Verdict

    @field_validator("criteria", mode="after")
    @classmethod
    def one_result_per_criterion(cls, v: list[CriterionResult]) -> list[CriterionResult]:
        """Require exactly one entry for each criterion id and order them by id."""
        ids = sorted(c.id for c in v)
        if ids != sorted(CRITERION_IDS):
            raise ValueError(f"expected one result for each of criteria 1-5, got ids {ids}")
        return sorted(v, key=lambda c: c.id)

    @property
    def all_passed(self) -> bool:
        return all(c.result == "PASS" for c in self.criteria)


class CriterionInfo(CamelModel):
    """GET /api/criteria entry."""

    id: int
    name: str
    description: str
