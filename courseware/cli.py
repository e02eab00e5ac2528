"""Command line entry point for courseware summaries and API keys.

Examples::

    courseware-summary summary page.json --files ./uploads
    courseware-summary api-key set a07535cf sk-test
    courseware-summary api-key get a07535cf
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from models import Page, PageContext
from observability.logging import configure_logging
from settings import get_settings
from .credentials import get_api_key, store_api_key
from .stores import (
    FileStore,
    LocalFileStore,
    MongoFileStore,
    MongoRangeConfigStore,
    RangeConfigStore,
    get_mongo_database,
)
from .summary import build_summary


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="courseware-summary")
    sub = p.add_subparsers(dest="command", required=True)

    summary = sub.add_parser("summary", help="print the summary of a page JSON document")
    summary.add_argument("page", type=Path, help="path to the page JSON")
    summary.add_argument("--files", type=Path, help="directory holding referenced files")

    api_key = sub.add_parser("api-key", help="read or store the GPT API key of a range")
    actions = api_key.add_subparsers(dest="action", required=True)
    get = actions.add_parser("get")
    get.add_argument("range_id")
    store = actions.add_parser("set")
    store.add_argument("range_id")
    store.add_argument("value")
    return p


def _load_page(path: Path) -> Page:
    return Page.model_validate_json(path.read_text(encoding="utf-8"))


def main(
    argv: list[str] | None = None,
    *,
    config_store: RangeConfigStore | None = None,
    file_store: FileStore | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)

    if args.command == "summary":
        try:
            page = _load_page(args.page)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            print(f"cannot read page {args.page}: {exc}", file=sys.stderr)
            return 2
        if file_store is None:
            if args.files is not None:
                file_store = LocalFileStore(args.files)
            else:
                file_store = MongoFileStore(get_mongo_database())
        print(build_summary(page, file_store=file_store))
        return 0

    if config_store is None:
        config_store = MongoRangeConfigStore(get_mongo_database())
    context = PageContext(range_id=args.range_id)
    if args.action == "set":
        store_api_key(context, args.value, config_store)
        return 0
    api_key = get_api_key(context, config_store)
    if api_key is None:
        print(f"no API key stored for range {args.range_id}", file=sys.stderr)
        return 1
    print(api_key)
    return 0


if __name__ == "__main__":
    sys.exit(main())
