"""Evaluation endpoints."""

from fastapi import APIRouter, HTTPException, status

from screener.api.deps import GatewayDep, StoreDep
from screener.engine.criteria import CRITERIA
from screener.errors import ProviderError
from screener.models import EvaluationRecord
from screener.schemas.evaluation import CriterionInfo, EvaluateRequest, EvaluationResponse

router = APIRouter()


@router.get("/criteria", response_model=list[CriterionInfo])
async def list_criteria():
    """The five screening criteria."""
    return [CriterionInfo(id=c.id, name=c.name, description=c.description) for c in CRITERIA]


@router.post("/evaluate/{solution_id}", response_model=EvaluationResponse)
async def evaluate_solution(
    solution_id: str,
    body: EvaluateRequest,
    store: StoreDep,
    gateway: GatewayDep,
):
    """
    Evaluate a solution against the screening criteria with the chosen model.
    Every call reaches the model and adds an entry to the solution's history.
    """
    if not body.model or body.temperature is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Model and temperature are required",
        )

    solution = store.get_solution(solution_id)
    if not solution:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Solution not found")

    if gateway is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": "Failed to evaluate solution",
                "error": "Evaluation provider is not configured",
            },
        )

    try:
        return await gateway.evaluate(solution, body.model, body.temperature)
    except ProviderError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Failed to evaluate solution", "error": str(exc)},
        )


@router.get("/evaluations/{solution_id}", response_model=list[EvaluationRecord])
async def get_evaluations(solution_id: str, store: StoreDep):
    """Evaluation history for a solution, oldest first."""
    return store.list_evaluations(solution_id)
