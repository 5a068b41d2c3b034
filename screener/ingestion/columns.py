"""Mapping from submission export headers to solution fields."""

SOLUTION_ID_COLUMN = "Solution ID"

# Keys are compared after stripping, because headers are trimmed on read.
COLUMN_MAP: dict[str, str] = {
    "Solution ID": "solution_id",
    "Challenge Name": "challenge_name",
    "Provide a one-line summary of your solution.": "summary",
    "In what city, town, or region is your solution team headquartered?": "headquarters",
    "What type of organization is your solution team?": "organization_type",
    "What specific problem are you solving?": "problem_statement",
    "What is your solution?": "solution_description",
    "Who does your solution serve, and in what ways will the solution impact their lives?": (
        "target_beneficiaries"
    ),
    "Please select the technologies currently used in your solution:": "technologies_used",
    "If your solution has a website, app, or social media handle, provide the link(s) here:": (
        "website_links"
    ),
    "In which countries do you currently operate?": "operating_countries",
    "How many people work on your solution team?": "team_size",
    "How long have you been working on your solution?": "duration",
    (
        "Tell us about how you ensure that your team is diverse, minimizes barriers to "
        "opportunity for staff, and provides a welcoming and inclusive environment for "
        "all team members."
    ): "diversity_approaches",
    "What is your business model?": "business_model",
    (
        "Do you primarily provide products or services directly to individuals, to other "
        "organizations, or to the government?"
    ): "service_delivery_model",
    (
        "What is your plan for becoming financially sustainable, and what evidence can you "
        "provide that this plan has been successful so far?"
    ): "financial_sustainability",
}


def map_row(row: dict[str, str]) -> dict[str, str]:
    """Project a header-keyed row onto solution field names. Absent columns become ""."""
    return {field: row.get(header, "") for header, field in COLUMN_MAP.items()}
