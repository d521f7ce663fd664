"""Command-line entry point.

    python -m pagemind ingest https://example.com/about https://example.com/blog
    python -m pagemind ask "List all his projects?"
    python -m pagemind sources
    python -m pagemind delete https://example.com/about
"""

from __future__ import annotations

import argparse
import logging
import sys

from pagemind.config import Settings
from pagemind.errors import PageMindError
from pagemind.services import open_services


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pagemind", description="Web page RAG")
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Ingest (or re-ingest) one or more URLs")
    ingest.add_argument("urls", nargs="+")

    ask = sub.add_parser("ask", help="Answer a question from the ingested pages")
    ask.add_argument("question")

    sources = sub.add_parser("sources", help="List ingested source URLs")
    sources.add_argument("--url", help="Only check whether this URL is ingested")

    delete = sub.add_parser("delete", help="Remove every indexed chunk of a URL")
    delete.add_argument("url")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    with open_services(settings) as services:
        if args.command == "ingest":
            reports = services.pipeline.ingest_many(
                args.urls, max_workers=services.ingest_max_workers
            )
            for report in reports:
                print(f"{report.status:<10} {report.url} "
                      f"(+{report.chunks_inserted} / ={report.chunks_skipped})")
            return 0 if all(r.ok for r in reports) else 1

        if args.command == "ask":
            try:
                answer = services.answerer.answer(args.question)
            except PageMindError as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 1
            print(answer.text)
            if answer.primary_url:
                print(f"\nSource: {answer.primary_url}")
            for result in answer.sources:
                print(f"  {result}")
            return 0

        if args.command == "sources":
            if args.url:
                ingested = services.indexer.is_ingested(args.url)
                print(f"{args.url}: {'ingested' if ingested else 'not ingested'}")
                return 0 if ingested else 1
            for url in services.indexer.list_sources():
                print(url)
            return 0

        deleted = services.pipeline.delete_source(args.url)
        print(f"Deleted {deleted} chunks for {args.url}")
        return 0
