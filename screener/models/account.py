"""Account model."""

from screener.models.base import RecordModel


class Account(RecordModel):
    """Registered reviewer account - created once, never mutated."""

    id: int
    username: str
    password: str
