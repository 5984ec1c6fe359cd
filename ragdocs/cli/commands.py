"""Ingest and query commands for the ragdocs CLI.

Usage::

    python -m ragdocs.cli ingest report.pdf notes.md --param pdf_mode=document
    python -m ragdocs.cli ingest export.log --content-type text/plain
    python -m ragdocs.cli query "What is the capital of France?" --top-k 5

The content type of each file is guessed from its extension unless
``--content-type`` is given.  ``--param key=value`` pairs become the
resolution parameters of the ingest call, exactly like HTTP query
parameters on ``POST /api/v1/ingest``.
"""

from __future__ import annotations

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path
from typing import Any

from ragdocs.models.documents import RawFile
from ragdocs.utils.errors import RagDocsError

_DEFAULT_CONTENT_TYPE = "application/octet-stream"

# mimetypes does not know Markdown on every platform.
mimetypes.add_type("text/markdown", ".md")
mimetypes.add_type("text/markdown", ".markdown")


def guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or _DEFAULT_CONTENT_TYPE


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Turn ``["k=v", ...]`` into a dict; raises ``ValueError`` on a missing ``=``."""
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected key=value, got '{pair}'")
        params[key.strip()] = value.strip()
    return params


def load_raw_file(path: Path, content_type: str | None = None) -> RawFile:
    content = path.read_bytes()
    return RawFile(
        name=path.name,
        size=len(content),
        content_type=content_type or guess_content_type(path),
        content=content,
    )


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _handle_ingest(args: argparse.Namespace, services: dict[str, Any]) -> int:
    try:
        params = parse_params(args.param)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    paths = [Path(name) for name in args.files]
    missing = [str(path) for path in paths if not path.is_file()]
    if missing:
        print(f"Error: file not found: {', '.join(missing)}", file=sys.stderr)
        return 1

    raw_files = [load_raw_file(path, args.content_type) for path in paths]
    for raw_file in raw_files:
        print(f"Ingesting: {raw_file.name} ({raw_file.content_type}, {raw_file.size} bytes)")

    result = await services["ingestion_service"].ingest(raw_files, params)

    print("\nIngestion complete:")
    print(f"  Files processed: {result.files_processed}")
    print(f"  Units extracted: {result.units_extracted}")
    print(f"  Chunks created:  {result.chunks_created}")
    print(f"  Time:            {result.ingestion_time:.2f}s")
    return 0


async def _handle_query(args: argparse.Namespace, services: dict[str, Any]) -> int:
    app_settings = services["settings"]
    threshold = args.threshold if args.threshold is not None else app_settings.rag_score_threshold

    result = await services["qa_service"].ask(
        args.question,
        top_k=args.top_k or app_settings.rag_top_k,
        score_threshold=threshold,
        max_tokens=args.max_tokens or app_settings.rag_max_tokens,
    )

    if not result.answer:
        print("No relevant passages found in the index.")
        return 0

    print(result.answer)
    if args.show_sources:
        print("\nSources:")
        for index, source in enumerate(result.sources, start=1):
            origin = source.metadata.get("source", "?")
            page = source.metadata.get("page")
            location = f"{origin} p.{page}" if page is not None else origin
            print(f"  [{index}] {location} (score {source.score:.3f})")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m ragdocs.cli",
        description="Index documents and ask questions about them.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    ingest_parser = subparsers.add_parser("ingest", help="Ingest one or more files")
    ingest_parser.add_argument("files", nargs="+", help="Paths of the files to ingest")
    ingest_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Resolution parameter passed to extractors (repeatable)",
    )
    ingest_parser.add_argument(
        "--content-type",
        dest="content_type",
        default=None,
        help="Override the content type guessed from the file extension",
    )

    query_parser = subparsers.add_parser("query", help="Ask a question")
    query_parser.add_argument("question", help="Question text")
    query_parser.add_argument("--top-k", dest="top_k", type=int, default=None)
    query_parser.add_argument("--threshold", type=float, default=None)
    query_parser.add_argument("--max-tokens", dest="max_tokens", type=int, default=None)
    query_parser.add_argument(
        "--show-sources",
        dest="show_sources",
        action="store_true",
        help="Print the passages the answer was grounded on",
    )

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

_HANDLERS = {
    "ingest": _handle_ingest,
    "query": _handle_query,
}


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, build the services and run the selected command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    from ragdocs.main import build_services

    try:
        services = build_services()
        return asyncio.run(_HANDLERS[args.command](args, services))
    except RagDocsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
