"""Solution record model."""

from screener.models.base import RecordModel

# Descriptive fields in prompt and export order.
SOLUTION_FIELDS: tuple[str, ...] = (
    "challenge_name",
    "summary",
    "headquarters",
    "organization_type",
    "problem_statement",
    "solution_description",
    "target_beneficiaries",
    "technologies_used",
    "website_links",
    "operating_countries",
    "team_size",
    "duration",
    "diversity_approaches",
    "business_model",
    "service_delivery_model",
    "financial_sustainability",
)


class NewSolution(RecordModel):
    """Solution payload before the store assigns an internal id."""

    solution_id: str
    challenge_name: str | None = None
    summary: str | None = None
    headquarters: str | None = None
    organization_type: str | None = None
    problem_statement: str | None = None
    solution_description: str | None = None
    target_beneficiaries: str | None = None
    technologies_used: str | None = None
    website_links: str | None = None
    operating_countries: str | None = None
    team_size: str | None = None
    duration: str | None = None
    diversity_approaches: str | None = None
    business_model: str | None = None
    service_delivery_model: str | None = None
    financial_sustainability: str | None = None


class SolutionRecord(NewSolution):
    """Stored solution. `id` is internal; `solution_id` is the natural key."""

    id: int
