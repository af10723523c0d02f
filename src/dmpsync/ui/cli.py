# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from dmpsync.adapters.documents import dump_record, parse_candidate_works, parse_record
from dmpsync.app import build_record_service, compare_works, harvest_related_works, propose_works
from dmpsync.common import configure_logging
from dmpsync.domain.errors import DmpSyncError, RecordParseError
from dmpsync.domain.model import LATEST
from dmpsync.harvest.pool import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_WORKERS

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from dmpsync.domain.sync import RecordService

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise and curate DMP records")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Register a new DMP record")
    create.add_argument("--writer", type=str, required=True, help="Provenance id of the writer")
    create.add_argument("file", type=Path, help="JSON document describing the DMP")

    update = subparsers.add_parser("update", help="Submit a new state for a DMP record")
    update.add_argument("--writer", type=str, required=True, help="Provenance id of the writer")
    update.add_argument("dmp_id", type=str, help="DMP ID to update")
    update.add_argument("file", type=Path, help="JSON document with the proposed state")

    tombstone = subparsers.add_parser("tombstone", help="Retire a DMP record")
    tombstone.add_argument("--writer", type=str, required=True, help="Provenance id of the owner")
    tombstone.add_argument("dmp_id", type=str, help="DMP ID to retire")

    show = subparsers.add_parser("show", help="Print a DMP record")
    show.add_argument("dmp_id", type=str, help="DMP ID to print")
    show.add_argument(
        "--version",
        type=str,
        default=LATEST,
        help="Snapshot timestamp to print instead of the latest state",
    )

    versions = subparsers.add_parser("versions", help="List the versions of a DMP record")
    versions.add_argument("dmp_id", type=str, help="DMP ID to inspect")

    compare = subparsers.add_parser("compare", help="Score works against a DMP record")
    compare.add_argument("dmp_id", type=str, help="DMP ID to compare against")
    compare.add_argument("file", type=Path, help="JSON work (or list of works)")

    propose = subparsers.add_parser("propose", help="Queue related works for the owner's review")
    propose.add_argument("--writer", type=str, required=True, help="Provenance id of the writer")
    propose.add_argument("--note", type=str, help="Note stored on the modification entry")
    propose.add_argument("dmp_id", type=str, help="DMP ID to propose to")
    propose.add_argument("file", type=Path, help="JSON work (or list of works)")

    harvest = subparsers.add_parser("harvest", help="Search DataCite for related works")
    harvest.add_argument("dmp_ids", nargs="+", type=str, help="DMP IDs to harvest for")
    harvest.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help="Records per worker task (default: %(default)s)",
    )
    harvest.add_argument(
        "--max-workers",
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help="Worker threads (default: %(default)s)",
    )
    harvest.add_argument(
        "--include-researchers",
        action="store_true",
        help="Also search by contributor ORCID",
    )
    harvest.add_argument(
        "--include-affiliations",
        action="store_true",
        help="Also search by contributor affiliation ROR",
    )

    return parser.parse_args(list(argv))


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Unable to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc


def _load_document(path: Path) -> dict[str, object]:
    payload = _load_json(path)
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return payload


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _run(args: argparse.Namespace, service: RecordService) -> None:
    if args.command == "create":
        record = service.create(parse_record(_load_document(args.file)), writer_id=args.writer)
        _emit(dump_record(record))
    elif args.command == "update":
        record = service.update(
            args.dmp_id, parse_record(_load_document(args.file)), writer_id=args.writer
        )
        _emit(dump_record(record))
    elif args.command == "tombstone":
        _emit(dump_record(service.tombstone(args.dmp_id, writer_id=args.writer)))
    elif args.command == "show":
        _emit(dump_record(service.get(args.dmp_id, args.version)))
    elif args.command == "versions":
        _emit([{"timestamp": link.timestamp, "url": link.url} for link in service.versions(args.dmp_id)])
    elif args.command == "compare":
        works = parse_candidate_works(_load_json(args.file))
        _emit(
            [
                {
                    "identifier": work.identifier,
                    "score": result.score,
                    "confidence": str(result.confidence),
                    "notes": list(result.notes),
                }
                for work, result in compare_works(args.dmp_id, works, service=service)
            ]
        )
    elif args.command == "propose":
        works = parse_candidate_works(_load_json(args.file))
        entry = propose_works(
            args.dmp_id, works, writer_id=args.writer, service=service, note=args.note
        )
        if entry is None:
            log.info("Nothing new to propose for %s", args.dmp_id)
        else:
            log.info("Queued modification %s on %s", entry.id, args.dmp_id)
    elif args.command == "harvest":
        summary = harvest_related_works(
            args.dmp_ids,
            service=service,
            chunk_size=args.chunk_size,
            max_workers=args.max_workers,
            include_researchers=args.include_researchers,
            include_affiliations=args.include_affiliations,
        )
        log.info(
            "Harvest finished: records=%d, queued=%d, failed_chunks=%d",
            len(summary.outcomes),
            len(summary.modifications),
            summary.report.failed,
        )
        if not summary.report.ok:
            raise DmpSyncError(f"{summary.report.failed} harvest chunk(s) failed")
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        service = build_record_service()
        _run(parsed_args, service)
    except (ValueError, RecordParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except DmpSyncError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
