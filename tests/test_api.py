"""HTTP API tests through FastAPI's TestClient."""

import json

import pytest
from fastapi.testclient import TestClient

from conftest import FakeModelClient, evaluation_payload, fenced
from screener.config import Settings
from screener.main import create_app

CSV = (
    "Solution ID,Challenge Name,Provide a one-line summary of your solution.\n"
    "S1,Global Health,Clinics on wheels\n"
    "S2,Global Health,Telehealth kiosks\n"
    "S1,Global Health,Duplicate row\n"
)


@pytest.fixture
def settings(tmp_path):
    csv_path = tmp_path / "selected_solutions.csv"
    csv_path.write_text(CSV, encoding="utf-8")
    return Settings(
        gemini_api_key="",
        solutions_csv_path=csv_path,
        upload_directory=tmp_path / "uploads",
        rate_limit_max_requests=5,
        rate_limit_window_seconds=60,
    )


@pytest.fixture
def fake_model():
    return FakeModelClient()


@pytest.fixture
def client(settings, fake_model):
    with TestClient(create_app(settings, model_client=fake_model)) as c:
        yield c


def test_health(client):
    """Health check responds ok."""
    assert client.get("/health").json() == {"status": "ok"}


def test_startup_loads_csv(client):
    """Startup CSV is loaded with duplicates dropped; fields are camelCase."""
    solutions = client.get("/api/solutions").json()
    assert [s["solutionId"] for s in solutions] == ["S1", "S2"]
    assert solutions[0]["summary"] == "Clinics on wheels"
    assert solutions[0]["id"] == 1
    assert solutions[0]["teamSize"] is None


def test_get_solution_and_404(client):
    """Solutions are fetched by natural key."""
    assert client.get("/api/solutions/S2").json()["challengeName"] == "Global Health"
    response = client.get("/api/solutions/NOPE")
    assert response.status_code == 404
    assert response.json() == {"message": "Solution not found"}


def test_missing_startup_file_is_not_fatal(tmp_path, fake_model):
    """Without the CSV the app starts with no solutions."""
    settings = Settings(
        gemini_api_key="",
        solutions_csv_path=tmp_path / "absent.csv",
        upload_directory=tmp_path / "uploads",
    )
    with TestClient(create_app(settings, model_client=fake_model)) as c:
        assert c.get("/api/solutions").json() == []


def test_upload_upserts_and_removes_temp_file(client, settings):
    """Uploaded rows are upserted by Solution ID and the temporary file is deleted."""
    body = "Solution ID,Provide a one-line summary of your solution.\nS2,Updated\nS3,New one\n"
    response = client.post(
        "/api/solutions/upload", files={"file": ("more.csv", body.encode(), "text/csv")}
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Successfully imported 2 solutions", "count": 2}

    solutions = {s["solutionId"]: s for s in client.get("/api/solutions").json()}
    assert set(solutions) == {"S1", "S2", "S3"}
    assert solutions["S2"]["summary"] == "Updated"
    assert solutions["S2"]["id"] == 2
    assert solutions["S2"]["challengeName"] is None
    assert list(settings.upload_directory.iterdir()) == []


def test_upload_with_replace(client):
    """replace=true drops the existing solutions first."""
    body = "Solution ID\nS9\n"
    client.post(
        "/api/solutions/upload",
        params={"replace": "true"},
        files={"file": ("new.csv", body.encode(), "text/csv")},
    )
    assert [s["solutionId"] for s in client.get("/api/solutions").json()] == ["S9"]


def test_upload_undecodable_file(client, settings):
    """A file that cannot be decoded is a 500 with a message, and is still removed."""
    response = client.post(
        "/api/solutions/upload",
        files={"file": ("bad.csv", b"Solution ID\n\xff\xfe\xfa\n", "text/csv")},
    )
    assert response.status_code == 500
    assert response.json()["message"] == "Failed to parse CSV"
    assert list(settings.upload_directory.iterdir()) == []


def test_upload_without_file(client):
    """No file part is a 400."""
    response = client.post("/api/solutions/upload")
    assert response.status_code == 400
    assert response.json() == {"message": "No file uploaded"}


def test_evaluate_and_history(client, fake_model):
    """Evaluate returns the response and history grows by one per call."""
    fake_model.responses.append(fenced(evaluation_payload()))
    fake_model.responses.append(json.dumps(evaluation_payload(("PASS",) * 4 + ("FAIL",))))

    first = client.post("/api/evaluate/S1", json={"model": "gemini-2.0-flash", "temperature": 0.2})
    second = client.post("/api/evaluate/S1", json={"model": "gemini-1.5-pro", "temperature": 0})

    assert first.status_code == 200
    assert first.json()["overallVerdict"] == "PASS"
    assert second.json()["overallVerdict"] == "FAIL"
    assert second.json()["criteria"][4]["result"] == "FAIL"

    history = client.get("/api/evaluations/S1").json()
    assert [h["overallVerdict"] for h in history] == ["PASS", "FAIL"]
    assert [h["modelUsed"] for h in history] == ["gemini-2.0-flash", "gemini-1.5-pro"]
    assert history[1]["temperature"] == "0"
    assert history[0]["solutionId"] == "S1"
    assert client.get("/api/evaluations/S2").json() == []


@pytest.mark.parametrize(
    "body",
    [{"temperature": 0.2}, {"model": "gemini-2.0-flash"}, {"model": "", "temperature": 0.2}],
)
def test_evaluate_requires_model_and_temperature(client, body):
    """Missing model or temperature is a 400."""
    response = client.post("/api/evaluate/S1", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": "Model and temperature are required"}


def test_evaluate_invalid_body_is_400(client):
    """A non-numeric temperature is rejected as a bad request."""
    response = client.post("/api/evaluate/S1", json={"model": "m", "temperature": "hot"})
    assert response.status_code == 400
    assert "message" in response.json()


def test_evaluate_unknown_solution(client, fake_model):
    """Unknown solution is a 404 and the model is not called."""
    response = client.post("/api/evaluate/NOPE", json={"model": "m", "temperature": 0.2})
    assert response.status_code == 404
    assert fake_model.calls == []


def test_evaluate_provider_failure_is_500(client, fake_model):
    """Malformed model output is a 500 with message and error."""
    fake_model.responses.append("no json here")
    response = client.post("/api/evaluate/S1", json={"model": "m", "temperature": 0.2})
    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Failed to evaluate solution"
    assert "parse" in body["error"]


def test_evaluate_rate_limited(tmp_path, fake_model):
    """Past the limit the endpoint answers 429 with a whole-second retry hint."""
    settings = Settings(
        gemini_api_key="",
        solutions_csv_path=tmp_path / "absent.csv",
        upload_directory=tmp_path / "uploads",
        rate_limit_max_requests=1,
        rate_limit_window_seconds=60,
    )
    with TestClient(create_app(settings, model_client=fake_model)) as c:
        c.post(
            "/api/solutions/upload",
            files={"file": ("s.csv", b"Solution ID\nS1\n", "text/csv")},
        )
        fake_model.responses.append(fenced(evaluation_payload()))
        assert c.post("/api/evaluate/S1", json={"model": "m", "temperature": 0.2}).status_code == 200

        response = c.post("/api/evaluate/S1", json={"model": "m", "temperature": 0.2})
        assert response.status_code == 429
        body = response.json()
        assert isinstance(body["retryAfter"], int)
        assert 0 < body["retryAfter"] <= 60
        assert response.headers["Retry-After"] == str(body["retryAfter"])
        assert "Rate limit exceeded" in body["message"]


def test_gateway_unconfigured(settings):
    """Without an API key only evaluation fails; other routes work."""
    with TestClient(create_app(settings)) as c:
        assert c.get("/api/solutions").status_code == 200
        response = c.post("/api/evaluate/S1", json={"model": "m", "temperature": 0.2})
        assert response.status_code == 500
        assert response.json()["message"] == "Failed to evaluate solution"


def test_criteria_listing(client):
    """The five criteria are exposed."""
    criteria = client.get("/api/criteria").json()
    assert [c["id"] for c in criteria] == [1, 2, 3, 4, 5]
    assert criteria[1]["name"] == "Prototype Stage Verification"


class ExplodingModelClient:
    async def generate(self, prompt: str, *, model: str, temperature: float) -> str:
        raise RuntimeError("connection reset by peer")


def test_evaluate_unexpected_client_error_is_json_500(settings):
    """Any failure inside the model call is rendered as a message/error body."""
    with TestClient(create_app(settings, model_client=ExplodingModelClient())) as c:
        response = c.post("/api/evaluate/S1", json={"model": "m", "temperature": 0.2})
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    body = response.json()
    assert body["message"] == "Failed to evaluate solution"
    assert "connection reset by peer" in body["error"]
    assert c.app.state.store.list_evaluations("S1") == []


def test_limiter_is_owned_by_gateway(client):
    """The app exposes the store and gateway; the limiter lives on the gateway."""
    state = client.app.state
    assert state.gateway.limiter.max_requests == 5
    assert not hasattr(state, "limiter")
