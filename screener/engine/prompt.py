"""Prompt construction for a single solution evaluation."""

from screener.engine.criteria import CHALLENGE_CONTEXT, CRITERIA
from screener.models import SolutionRecord

# (label, field) in the order they appear in the prompt.
PROMPT_FIELDS: tuple[tuple[str, str], ...] = (
    ("Solution ID", "solution_id"),
    ("Challenge Name", "challenge_name"),
    ("Summary", "summary"),
    ("Headquarters", "headquarters"),
    ("Organization Type", "organization_type"),
    ("Problem Statement", "problem_statement"),
    ("Solution Description", "solution_description"),
    ("Target Beneficiaries", "target_beneficiaries"),
    ("Technologies Used", "technologies_used"),
    ("Website/App Links", "website_links"),
    ("Operating Countries", "operating_countries"),
    ("Team Size", "team_size"),
    ("Duration", "duration"),
    ("Diversity and Inclusion Approaches", "diversity_approaches"),
    ("Business Model", "business_model"),
    ("Service Delivery Model", "service_delivery_model"),
    ("Financial Sustainability Plan", "financial_sustainability"),
)

_RESPONSE_FORMAT = """{
  "criteria": [
    {
      "id": 1,
      "name": "Completeness, Appropriateness, and Intelligibility",
      "result": "PASS/FAIL",
      "reasoning": "Your reasoning here"
    },
    ... other criteria ...
  ],
  "overallVerdict": "PASS/FAIL"
}"""


def build_prompt(solution: SolutionRecord) -> str:
    """Render the evaluation prompt. Every field is listed; missing values render empty."""
    criteria = "\n\n".join(f"{c.id}. {c.name}: {c.description}" for c in CRITERIA)
    details = "\n".join(
        f"{label}: {getattr(solution, field) or ''}" for label, field in PROMPT_FIELDS
    )
    return f"""
You are an expert evaluator for the MIT Solve Global Health Challenge. You need to assess the following solution against the five screening criteria.

### MIT Solve Challenge Context:
{CHALLENGE_CONTEXT}

### Evaluation Criteria:
{criteria}

### Solution to Evaluate:
{details}

### Instructions:
1. Carefully analyze the solution against each criterion
2. For each criterion, determine a PASS or FAIL result
3. Provide 2-3 sentences explaining your reasoning for each determination
4. Provide an overall verdict (PASS only if ALL criteria pass, otherwise FAIL)

Return your evaluation in the following JSON format:
{_RESPONSE_FORMAT}

Note: If any single criterion fails, the overall verdict must be FAIL. Only if all criteria pass can the overall verdict be PASS.
"""
