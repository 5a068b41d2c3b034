"""Shared fixtures."""

import json

import pytest

from screener.engine.criteria import CRITERIA
from screener.engine.rate_limiter import RateLimiter
from screener.models import NewSolution
from screener.storage.repositories import RecordStore


class FakeModelClient:
    """Returns queued texts in order and records every prompt it was given."""

    def __init__(self, responses: list[str] | None = None):
        self.responses = list(responses or [])
        self.calls: list[dict] = []

    async def generate(self, prompt: str, *, model: str, temperature: float) -> str:
        self.calls.append({"prompt": prompt, "model": model, "temperature": temperature})
        return self.responses.pop(0)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def evaluation_payload(results=("PASS",) * 5, overall=None) -> dict:
    """Model-style evaluation JSON; the overall verdict defaults to the correct one."""
    if overall is None:
        overall = "PASS" if all(r == "PASS" for r in results) else "FAIL"
    return {
        "criteria": [
            {"id": c.id, "name": c.name, "result": r, "reasoning": f"Reasoning for {c.id}."}
            for c, r in zip(CRITERIA, results)
        ],
        "overallVerdict": overall,
    }


def fenced(payload: dict) -> str:
    return "Here is my evaluation:\n```json\n" + json.dumps(payload, indent=2) + "\n```\n"


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def model_client():
    return FakeModelClient()


@pytest.fixture
def limiter(clock):
    return RateLimiter(5, 60, clock=clock)


@pytest.fixture
def solution(store):
    return store.upsert_solution(
        NewSolution(
            solution_id="S1",
            challenge_name="Global Health",
            summary="Mobile clinics scheduling app",
            technologies_used="Mobile app, SMS",
        )
    )
