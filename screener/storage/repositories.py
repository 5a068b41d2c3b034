"""In-memory record store for accounts, solutions and evaluations."""

from screener.errors import DuplicateAccountError
from screener.models import (
    SOLUTION_FIELDS,
    Account,
    EvaluationRecord,
    NewEvaluation,
    NewSolution,
    SolutionRecord,
)


class RecordStore:
    """
    Keyed collections for the three record kinds.

    Lookups by natural key are linear scans; the collections are small.
    Nothing is persisted and there is no locking, so one instance is meant
    to be shared by a single-process, single-event-loop server.
    """

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._solutions: dict[int, SolutionRecord] = {}
        self._evaluations: dict[int, EvaluationRecord] = {}
        self._next_account_id = 1
        self._next_solution_id = 1
        self._next_evaluation_id = 1

    # Accounts

    def create_account(self, username: str, password: str) -> Account:
        """Register a new account. Usernames are unique."""
        if self.get_account_by_username(username) is not None:
            raise DuplicateAccountError(f"Username already registered: {username}")
        account = Account(id=self._next_account_id, username=username, password=password)
        self._next_account_id += 1
        self._accounts[account.id] = account
        return account

    def get_account(self, account_id: int) -> Account | None:
        return self._accounts.get(account_id)

    def get_account_by_username(self, username: str) -> Account | None:
        return next(
            (account for account in self._accounts.values() if account.username == username),
            None,
        )

    # Solutions

    def list_solutions(self) -> list[SolutionRecord]:
        """All solutions in insertion order."""
        return list(self._solutions.values())

    def get_solution(self, solution_id: str) -> SolutionRecord | None:
        """Find a solution by its natural key."""
        return next(
            (s for s in self._solutions.values() if s.solution_id == solution_id),
            None,
        )

    def upsert_solution(self, solution: NewSolution) -> SolutionRecord:
        """
        Insert or replace by natural key.
        Every descriptive field is overwritten; empty or missing values become None
        so an update never keeps a stale value. The internal id survives updates.
        """
        fields = {name: getattr(solution, name) or None for name in SOLUTION_FIELDS}
        existing = self.get_solution(solution.solution_id)
        if existing:
            record_id = existing.id
        else:
            record_id = self._next_solution_id
            self._next_solution_id += 1
        record = SolutionRecord(id=record_id, solution_id=solution.solution_id, **fields)
        self._solutions[record_id] = record
        return record

    def clear_solutions(self) -> None:
        """Drop every solution and restart id assignment at 1."""
        self._solutions.clear()
        self._next_solution_id = 1

    # Evaluations

    def append_evaluation(self, evaluation: NewEvaluation) -> EvaluationRecord:
        """Store an evaluation as a new history entry."""
        record = EvaluationRecord(id=self._next_evaluation_id, **evaluation.model_dump())
        self._next_evaluation_id += 1
        self._evaluations[record.id] = record
        return record

    def list_evaluations(self, solution_id: str) -> list[EvaluationRecord]:
        """Evaluation history for one solution, oldest first."""
        return [e for e in self._evaluations.values() if e.solution_id == solution_id]
