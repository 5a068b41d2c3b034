"""Record models."""

from screener.models.account import Account
from screener.models.evaluation import EvaluationRecord, NewEvaluation, Verdict
from screener.models.solution import SOLUTION_FIELDS, NewSolution, SolutionRecord

__all__ = [
    "Account",
    "EvaluationRecord",
    "NewEvaluation",
    "NewSolution",
    "SOLUTION_FIELDS",
    "SolutionRecord",
    "Verdict",
]
