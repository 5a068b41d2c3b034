"""Command-line batch evaluation against a running screener server."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from screener.batch.export import write_results_csv
from screener.batch.orchestrator import BatchItem, BatchOrchestrator, BatchReport, ItemState

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate every solution on a screener server.")
    parser.add_argument("--base-url", default="http://localhost:5000")
    parser.add_argument("--model", default="gemini-2.0-flash")
    parser.add_argument("--temperature", type=float, default=0.2)
    parser.add_argument("--output", type=Path, default=Path("evaluation_results.csv"))
    parser.add_argument(
        "--solution",
        action="append",
        dest="solutions",
        help="Solution ID to evaluate (repeatable). Defaults to every solution on the server.",
    )
    return parser.parse_args(argv)


def _log_progress(index: int, item: BatchItem) -> None:
    if item.state in (ItemState.SUCCEEDED, ItemState.SKIPPED):
        logger.info("[%d] %s -> %s", index + 1, item.solution_id, item.state.value)


async def run_batch(args: argparse.Namespace) -> BatchReport:
    async with httpx.AsyncClient(base_url=args.base_url, timeout=None) as client:
        solution_ids = args.solutions
        if not solution_ids:
            response = await client.get("/api/solutions")
            response.raise_for_status()
            solution_ids = [s["solutionId"] for s in response.json()]
        orchestrator = BatchOrchestrator(
            client,
            model=args.model,
            temperature=args.temperature,
            on_progress=_log_progress,
        )
        return await orchestrator.run(solution_ids)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)
    try:
        report = asyncio.run(run_batch(args))
    except httpx.HTTPError as exc:
        logger.error("Could not load solutions from %s: %s", args.base_url, exc)
        return 1

    if report.total == 0:
        logger.warning("No solutions to evaluate")
        return 0

    with args.output.open("w", encoding="utf-8", newline="") as handle:
        written = write_results_csv(report.results, handle)
    logger.info("Successfully evaluated %s; wrote %d rows to %s", report.summary, written, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
