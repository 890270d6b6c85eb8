#!/usr/bin/env python3
"""
Waitlist command line tool

Usage:
    waitlist serve [--host HOST] [--port PORT] [--reload]
    waitlist join EMAIL
    waitlist check EMAIL
    waitlist stats
    waitlist list [--page N] [--limit N] [--sort-by FIELD] [--sort-order asc|desc]
    waitlist export [--output PATH]
    waitlist delete ENTRY_ID [--yes]

Every client command accepts --api-url (default: API_BASE_URL setting).
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from waitlist_api.client import AdminClient, SignupStatus, WaitlistClient, WaitlistClientError
from waitlist_api.platform.config import settings


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("waitlist_api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def cmd_join(args: argparse.Namespace) -> int:
    with WaitlistClient(args.api_url) as client:
        if client.email_exists(args.email):
            print("⚠️  This email is already on our waitlist!")
            return 1

        result = client.join(args.email)

    if result.status == SignupStatus.SUCCESS:
        print(f"✅ {result.message}: {result.data.get('email')}")
        return 0
    if result.status == SignupStatus.DUPLICATE:
        print(f"⚠️  {result.message}")
        return 1
    print(f"❌ {result.message}")
    return 2


def cmd_check(args: argparse.Namespace) -> int:
    with WaitlistClient(args.api_url) as client:
        exists = client.email_exists(args.email)
    print("registered" if exists else "not registered")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    with WaitlistClient(args.api_url) as client:
        stats = client.stats()
    print(f"Total signups: {stats.get('totalCount', 0)}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    with AdminClient(args.api_url) as client:
        data = client.list_entries(
            page=args.page, limit=args.limit, sort_by=args.sort_by, sort_order=args.sort_order
        )

    entries = data.get("entries", [])
    pagination = data.get("pagination", {})

    print(f"{'ID':<38} {'EMAIL':<40} {'CREATED AT':<26} SOURCE")
    for entry in entries:
        print(
            f"{entry['id']:<38} {entry['email']:<40} {entry.get('createdAt', ''):<26} "
            f"{entry.get('source', '')}"
        )
    print(
        f"\nPage {pagination.get('currentPage', args.page)}/{pagination.get('totalPages', 0)} "
        f"({pagination.get('totalCount', 0)} entries)"
    )
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    with AdminClient(args.api_url) as client:
        filename, csv_text = client.export_csv()

    output = Path(args.output) if args.output else Path(filename)
    output.write_text(csv_text, encoding="utf-8")
    print(f"📥 Exported waitlist to {output}")
    return 0


def cmd_delete(args: argparse.Namespace, confirm: Callable[[str], str] = input) -> int:
    if not args.yes:
        answer = confirm(f"Are you sure you want to delete {args.entry_id}? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted.")
            return 1

    with AdminClient(args.api_url) as client:
        client.delete_entry(args.entry_id)
    print(f"🗑️  Deleted waitlist entry {args.entry_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="waitlist", description="Waitlist API tools")
    parser.add_argument("--api-url", default=settings.API_BASE_URL, help="Base URL of the API")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.PORT)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    join = sub.add_parser("join", help="Add an email to the waitlist")
    join.add_argument("email")
    join.set_defaults(func=cmd_join)

    check = sub.add_parser("check", help="Check whether an email is registered")
    check.add_argument("email")
    check.set_defaults(func=cmd_check)

    stats = sub.add_parser("stats", help="Show the number of signups")
    stats.set_defaults(func=cmd_stats)

    list_ = sub.add_parser("list", help="List waitlist entries")
    list_.add_argument("--page", type=int, default=1)
    list_.add_argument("--limit", type=int, default=settings.DEFAULT_PAGE_SIZE)
    list_.add_argument("--sort-by", default="createdAt")
    list_.add_argument("--sort-order", choices=["asc", "desc"], default="desc")
    list_.set_defaults(func=cmd_list)

    export = sub.add_parser("export", help="Download the waitlist as CSV")
    export.add_argument("--output", "-o", help="File to write (default: server-provided name)")
    export.set_defaults(func=cmd_export)

    delete = sub.add_parser("delete", help="Delete a waitlist entry")
    delete.add_argument("entry_id")
    delete.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    delete.set_defaults(func=cmd_delete)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except WaitlistClientError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
