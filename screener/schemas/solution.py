"""Solution upload schemas."""

from screener.models.base import CamelModel


class UploadResult(CamelModel):
    """POST /api/solutions/upload response."""

    message: str
    count: int
