"""Solution browsing and CSV upload endpoints."""

import logging
from pathlib import Path
from uuid import uuid4

import aiofiles
from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from screener.api.deps import SettingsDep, StoreDep
from screener.errors import IngestionError
from screener.ingestion.loader import ingest_solutions
from screener.models import SolutionRecord
from screener.schemas.solution import UploadResult
from screener.storage.repositories import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter()

UPLOAD_CHUNK_SIZE = 64 * 1024


def _ingest_file(path: Path, store: RecordStore, replace: bool) -> int:
    with path.open("r", encoding="utf-8-sig", newline="") as stream:
        return ingest_solutions(stream, store, replace=replace)


@router.get("/solutions", response_model=list[SolutionRecord])
async def list_solutions(store: StoreDep):
    """All loaded solutions."""
    return store.list_solutions()


@router.get("/solutions/{solution_id}", response_model=SolutionRecord)
async def get_solution(solution_id: str, store: StoreDep):
    """One solution by its Solution ID."""
    solution = store.get_solution(solution_id)
    if not solution:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Solution not found")
    return solution


@router.post("/solutions/upload", response_model=UploadResult)
async def upload_solutions(
    store: StoreDep,
    settings: SettingsDep,
    file: UploadFile | None = File(default=None),
    replace: bool = False,
):
    """
    Import a submissions CSV. Rows are upserted by Solution ID; with ``replace``
    the current solutions are dropped first. The temporary copy of the upload is
    always deleted.
    """
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    settings.upload_directory.mkdir(parents=True, exist_ok=True)
    upload_path = settings.upload_directory / f"{uuid4().hex}.csv"
    try:
        async with aiofiles.open(upload_path, "wb") as handle:
            while chunk := await file.read(UPLOAD_CHUNK_SIZE):
                await handle.write(chunk)
        count = await run_in_threadpool(_ingest_file, upload_path, store, replace)
    except (OSError, IngestionError) as exc:
        logger.error("Failed to import %s: %s", file.filename, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Failed to parse CSV", "error": str(exc)},
        )
    finally:
        upload_path.unlink(missing_ok=True)

    return UploadResult(message=f"Successfully imported {count} solutions", count=count)
