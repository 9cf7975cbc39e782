"""
Command line interface for the Box View SDK.

    python -m box_view list --limit 5
    python -m box_view upload report.pdf --name "Q3 report" --thumbnails 100x100,200x200
    python -m box_view session DOCUMENT_ID --duration 10
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .client import BoxViewClient
from .config import Settings
from .document import Document
from .exceptions import BoxViewError
from .session import Session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="box-view", description="Box View document conversion API client"
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Box View API key (default: BOX_VIEW_API_KEY env var)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Seconds to keep retrying rate-limited requests (default: 60)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    find = commands.add_parser("list", help="List documents")
    find.add_argument("--limit", type=int, default=None)
    find.add_argument("--created-before", default=None, help="Date upper bound")
    find.add_argument("--created-after", default=None, help="Date lower bound")

    get = commands.add_parser("get", help="Show a document")
    get.add_argument("document_id")

    upload = commands.add_parser("upload", help="Upload a file or URL")
    upload.add_argument("source", help="Local path or http(s) URL")
    upload.add_argument("--name", default=None)
    upload.add_argument("--thumbnails", default=None, help="e.g. 100x100,200x200")
    upload.add_argument("--non-svg", action="store_true", default=None)

    update = commands.add_parser("update", help="Rename a document")
    update.add_argument("document_id")
    update.add_argument("name")

    delete = commands.add_parser("delete", help="Delete a document")
    delete.add_argument("document_id")

    download = commands.add_parser("download", help="Download document content")
    download.add_argument("document_id")
    download.add_argument("--extension", default=None, help="pdf or zip")
    download.add_argument("-o", "--output", required=True)

    thumbnail = commands.add_parser("thumbnail", help="Download a thumbnail")
    thumbnail.add_argument("document_id")
    thumbnail.add_argument("width", type=int)
    thumbnail.add_argument("height", type=int)
    thumbnail.add_argument("-o", "--output", required=True)

    session = commands.add_parser("session", help="Create a viewing session")
    session.add_argument("document_id")
    session.add_argument("--duration", type=int, default=None, help="Minutes")
    session.add_argument("--expires-at", default=None)
    session.add_argument("--downloadable", action="store_true", default=None)
    session.add_argument("--text-selectable", action="store_true", default=None)

    delete_session = commands.add_parser("delete-session", help="Delete a session")
    delete_session.add_argument("session_id")

    return parser


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def run(client: BoxViewClient, args: argparse.Namespace) -> None:
    if args.command == "list":
        documents = client.find_documents(
            limit=args.limit,
            created_before=args.created_before,
            created_after=args.created_after,
        )
        _print_json([document.to_dict() for document in documents])

    elif args.command == "get":
        _print_json(client.get_document(args.document_id).to_dict())

    elif args.command == "upload":
        document = client.upload(
            args.source,
            name=args.name,
            thumbnails=args.thumbnails,
            non_svg=args.non_svg,
        )
        _print_json(document.to_dict())

    elif args.command == "update":
        document = client.get_document(args.document_id)
        document.update(args.name)
        _print_json(document.to_dict())

    elif args.command == "delete":
        document = Document(client=client, id=args.document_id)
        _print_json({"id": args.document_id, "deleted": document.delete()})

    elif args.command == "download":
        document = Document(client=client, id=args.document_id)
        content = document.download(args.extension)
        Path(args.output).write_bytes(content)
        _print_json({"id": args.document_id, "output": args.output, "bytes": len(content)})

    elif args.command == "thumbnail":
        document = Document(client=client, id=args.document_id)
        content = document.thumbnail(args.width, args.height)
        Path(args.output).write_bytes(content)
        _print_json({"id": args.document_id, "output": args.output, "bytes": len(content)})

    elif args.command == "session":
        session = client.create_session(
            args.document_id,
            duration=args.duration,
            expires_at=args.expires_at,
            is_downloadable=args.downloadable,
            is_text_selectable=args.text_selectable,
        )
        _print_json(session.to_dict())

    elif args.command == "delete-session":
        session = Session(client=client, id=args.session_id)
        _print_json({"id": args.session_id, "deleted": session.delete()})


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.debug:
        overrides["debug"] = True
    if args.timeout is not None:
        overrides["retry_timeout"] = args.timeout

    try:
        client = BoxViewClient(args.api_key, Settings(**overrides))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    with client:
        try:
            run(client, args)
        except BoxViewError as e:
            print(f"{e.code}: {e.message}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
