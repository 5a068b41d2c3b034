"""Evaluation gateway - prompt, model call, JSON extraction, validation, history."""

import logging
import math

from pydantic import ValidationError

from screener.engine.extraction import ParseFailure, extract_json
from screener.engine.gemini import ModelClient
from screener.engine.prompt import build_prompt
from screener.engine.rate_limiter import RateLimiter
from screener.errors import (
    MalformedResponseError,
    ProviderError,
    ProviderTransportError,
    RateLimitedError,
    ResponseValidationError,
)
from screener.models import NewEvaluation, SolutionRecord
from screener.schemas.evaluation import EvaluationResponse
from screener.storage.repositories import RecordStore
from screener.utils.timestamps import now_iso

logger = logging.getLogger(__name__)


def format_temperature(temperature: float) -> str:
    """Temperature as sent: ``0`` stays ``"0"``, ``0.123456789`` keeps every digit."""
    if float(temperature).is_integer():
        return str(int(temperature))
    return repr(float(temperature))


class EvaluationGateway:
    """Evaluates one solution per call. Every call reaches the model; history is never reused."""

    def __init__(self, client: ModelClient, store: RecordStore, limiter: RateLimiter):
        self.client = client
        self.store = store
        self.limiter = limiter

    async def evaluate(
        self,
        solution: SolutionRecord,
        model: str,
        temperature: float,
    ) -> EvaluationResponse:
        """
        Run one evaluation and append it to the solution's history.

        Raises RateLimitedError before any model call when the limiter window is
        full. Any failure of the model call itself surfaces as
        ProviderTransportError. MalformedResponseError means no usable JSON came
        back and ResponseValidationError means the JSON has the wrong shape. None
        of these are retried here.
        """
        if self.limiter.is_limited():
            retry_after = math.ceil(self.limiter.time_to_wait_ms() / 1000)
            raise RateLimitedError(retry_after)

        try:
            raw_text = await self.client.generate(
                build_prompt(solution), model=model, temperature=temperature
            )
        except ProviderError:
            raise
        except Exception as exc:
            logger.error("Model call failed for %s: %s", solution.solution_id, exc)
            raise ProviderTransportError(f"Model call failed: {exc}") from exc

        parsed = extract_json(raw_text)
        if isinstance(parsed, ParseFailure):
            logger.error("Unparseable model output for %s: %s", solution.solution_id, parsed.reason)
            raise MalformedResponseError(f"Failed to parse model response: {parsed.reason}")
        payload = parsed.value
        if "criteria" not in payload or "overallVerdict" not in payload:
            raise MalformedResponseError("Invalid response format: missing criteria or overallVerdict")

        try:
            response = EvaluationResponse.model_validate(payload)
        except ValidationError as exc:
            raise ResponseValidationError(f"Model response failed validation: {exc}") from exc

        # The overall verdict is derived from the criteria, not taken on trust.
        verdict = "PASS" if response.all_passed else "FAIL"
        if response.overall_verdict != verdict:
            logger.warning(
                "Model reported %s for %s but criteria give %s; using %s",
                response.overall_verdict,
                solution.solution_id,
                verdict,
                verdict,
            )
            response = response.model_copy(update={"overall_verdict": verdict})

        record = self.store.append_evaluation(
            NewEvaluation(
                solution_id=solution.solution_id,
                timestamp=now_iso(),
                results=payload,
                overall_verdict=verdict,
                model_used=model,
                temperature=format_temperature(temperature),
            )
        )
        logger.info(
            "Evaluation %d for %s: %s (%s)", record.id, solution.solution_id, verdict, model
        )
        return response
