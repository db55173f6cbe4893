#!/usr/bin/env python3
"""Auto-fill an application from a job URL and track it.

Usage:
    python run_autofill.py fill https://boards.greenhouse.io/acme/jobs/987654
    python run_autofill.py fill URL --save --status Pending
    python run_autofill.py list --query eng --status Interview --sort company_name
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from apptrack.autofill import AutoFiller
from apptrack.backends import CsvStore
from apptrack.config import ensure_dirs, get_env
from apptrack.errors import AppTrackError
from apptrack.llm import GenerationClient
from apptrack.log import get_logger
from apptrack.models import ALL_STATUSES, DRAFT_FIELDS, STATUSES, Draft
from apptrack.settings import SettingsStore
from apptrack.store import ApplicationStore
from apptrack.views import SortConfig, request_sort, visible_records

log = get_logger(__name__)


def _open_store(user: str) -> ApplicationStore:
    store = ApplicationStore(CsvStore())
    store.sign_in(user)
    return store


def cmd_fill(args: argparse.Namespace) -> int:
    settings = SettingsStore().load()
    filler = AutoFiller(GenerationClient.from_env(settings.api_key_override))
    draft = Draft(status=args.status)

    result = filler.auto_fill(args.url, draft)
    for name, value in result.draft.to_fields().items():
        if value and name != "job_description":
            log.info("  %-16s %s", name, value)
    log.info(result.message)

    if args.save:
        store = _open_store(args.user)
        record_id = store.create(result.draft)
        log.info("Saved as %s", record_id)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    store = _open_store(args.user)
    config = SortConfig()
    if args.sort:
        config = request_sort(config, args.sort)
        if args.desc:
            config = request_sort(config, args.sort)
    for r in visible_records(store.records, config, args.query, args.status):
        log.info("%s  %-10s  %-12s  %s @ %s", r.id, r.status, r.job_id or "-", r.job_title, r.company_name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--user", default=get_env("APPTRACK_USER", "default"), help="Owner of the collection")
    sub = parser.add_subparsers(dest="command", required=True)

    fill = sub.add_parser("fill", help="Auto-fill a draft from a job posting URL")
    fill.add_argument("url")
    fill.add_argument("--status", default="Applied", choices=STATUSES)
    fill.add_argument("--save", action="store_true", help="Submit the merged draft")
    fill.set_defaults(func=cmd_fill)

    lst = sub.add_parser("list", help="Show tracked applications")
    lst.add_argument("--query", default="")
    lst.add_argument("--status", default=ALL_STATUSES, choices=(ALL_STATUSES, *STATUSES))
    lst.add_argument("--sort", default=None, choices=DRAFT_FIELDS)
    lst.add_argument("--desc", action="store_true")
    lst.set_defaults(func=cmd_list)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    ensure_dirs()
    try:
        return args.func(args)
    except AppTrackError as exc:
        log.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
