"""Command-line entry point: ``python -m oci_rag <command>``."""

from __future__ import annotations

import argparse
import logging
import sys

import oci
import oracledb

from oci_rag.config import settings
from oci_rag.factory import build_chat_service, build_document_loader, build_embedding_model, build_vector_store
from oci_rag.ingestion.splitter import LineSplitter, RecursiveSplitter, Splitter
from oci_rag.logging_config import setup_logging
from oci_rag.workflow.chat import ChatWorkflow
from oci_rag.workflow.embedding import EmbeddingWorkflow

logger = logging.getLogger(__name__)


def _init_db(args: argparse.Namespace) -> int:
    build_vector_store().create_table_if_not_exists()
    return 0


def _ingest(args: argparse.Namespace) -> int:
    splitter: Splitter = (
        LineSplitter() if args.splitter == "line" else RecursiveSplitter(args.chunk_size, args.chunk_overlap)
    )
    vector_store = build_vector_store()
    vector_store.create_table_if_not_exists()
    stored = EmbeddingWorkflow(
        vector_store=vector_store,
        embedding_model=build_embedding_model(),
        document_loader=build_document_loader(),
        bucket_name=args.bucket,
        object_prefix=args.prefix,
        splitter=splitter,
    ).run()
    print(f"Stored {stored} chunk(s) from {args.bucket}/{args.prefix}")
    return 0


def _ask(args: argparse.Namespace) -> int:
    workflow = ChatWorkflow(
        vector_store=build_vector_store(),
        chat_service=build_chat_service(),
        embedding_model=build_embedding_model(),
        min_score=args.min_score,
        max_results=args.max_results,
    )
    print(workflow.call(args.question))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oci_rag", description="RAG with OCI GenAI and Oracle Database")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    commands = parser.add_subparsers(dest="command", required=True)

    init_db = commands.add_parser("init-db", help="Create the vector table")
    init_db.set_defaults(handler=_init_db)

    ingest = commands.add_parser("ingest", help="Embed Object Storage documents into the vector table")
    ingest.add_argument("--bucket", default=settings.oci_bucket_name, required=not settings.oci_bucket_name)
    ingest.add_argument("--prefix", default=settings.oci_object_prefix, help="Object prefix or name")
    ingest.add_argument("--splitter", choices=("line", "recursive"), default="line")
    ingest.add_argument("--chunk-size", type=int, default=512, help="Recursive splitter chunk size")
    ingest.add_argument("--chunk-overlap", type=int, default=64, help="Recursive splitter chunk overlap")
    ingest.set_defaults(handler=_ingest)

    ask = commands.add_parser("ask", help="Ask a question over the ingested documents")
    ask.add_argument("question")
    ask.add_argument("--min-score", type=float, default=settings.min_score)
    ask.add_argument("--max-results", type=int, default=settings.max_results)
    ask.set_defaults(handler=_ask)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "ingest" and args.splitter == "recursive" and not 0 <= args.chunk_overlap < args.chunk_size:
        parser.error("--chunk-overlap must be at least 0 and smaller than --chunk-size")
    setup_logging(args.log_level)
    try:
        return args.handler(args)
    except oci.exceptions.ServiceError as exc:
        logger.error("OCI request failed (%s %s): %s", exc.status, exc.code, exc.message)
    except oracledb.Error as exc:
        logger.error("Database error: %s", exc)
    return 1


if __name__ == "__main__":
    sys.exit(main())
