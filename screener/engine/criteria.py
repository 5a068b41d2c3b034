"""Fixed challenge context and the five screening criteria."""

from dataclasses import dataclass

CHALLENGE_CONTEXT = (
    "The MIT Solve Global Health Challenge seeks innovative technology-based solutions that "
    "improve health outcomes in underserved communities worldwide. The challenge focuses on "
    "expanding access to quality healthcare, preventive services, and health education through "
    "scalable, sustainable approaches."
)


@dataclass(frozen=True)
class Criterion:
    id: int
    name: str
    description: str


CRITERIA: tuple[Criterion, ...] = (
    Criterion(
        id=1,
        name="Completeness, Appropriateness, and Intelligibility",
        description=(
            "The Solution Application should be complete with all questions answered clearly. "
            "The solution must be presented in English and be fully intelligible for reviewers "
            "without requiring translation or interpretation."
        ),
    ),
    Criterion(
        id=2,
        name="Prototype Stage Verification",
        description=(
            "The Solution must have advanced beyond the idea/concept phase and be at minimum at "
            "prototype stage. There should be evidence of implementation or testing in "
            "real-world settings, not just a theoretical concept."
        ),
    ),
    Criterion(
        id=3,
        name="Relevance to Challenge",
        description=(
            "The Solution must directly address the MIT Solve Global Health Challenge goals and "
            "objectives. It should clearly demonstrate how it improves health outcomes in target "
            "communities and aligns with the challenge's focus areas."
        ),
    ),
    Criterion(
        id=4,
        name="Technology-Driven Solution",
        description=(
            "The Solution must utilize technology as a key component of its approach, "
            "implementation, or scaling strategy. Technology should be integral to how the "
            "solution works, not just a peripheral element."
        ),
    ),
    Criterion(
        id=5,
        name="Suitability for External Review",
        description=(
            "The Solution must be appropriate for external review and not contain confidential "
            "or proprietary information that would prevent comprehensive evaluation by judges "
            "and experts."
        ),
    ),
)

CRITERION_IDS = frozenset(c.id for c in CRITERIA)
