# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""bulktag CLI."""

from __future__ import annotations

import argparse
import json
import signal
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from ..config import load_http_settings, load_shopify_settings
from ..errors import ValidationError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import Direction, FilterCriteria, Mode, PreviewResult, RunProgress, RunResult
from ..runtime import BulkTagger

EXIT_OK = 0
EXIT_ABORTED = 1
EXIT_USAGE = 2


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--keyword", help="Match products whose title contains this text")
    parser.add_argument("--product-type", dest="product_type", help="Match products of this exact type")
    parser.add_argument("--collection", help="Collection GID; only its first 250 products are matched")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bulk add or remove a product tag across a Shopify catalog")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log page-level progress")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for local proxies)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Apply or remove a tag on every matching product")
    _add_filter_arguments(run_parser)
    run_parser.add_argument("--tag", required=True, help="Tag to apply or remove")
    run_parser.add_argument("--mode", choices=[mode.value for mode in Mode], default=Mode.APPLY.value)
    run_parser.add_argument("--dry-run", dest="dry_run", action="store_true", help="Report changes without writing")
    run_parser.add_argument("--workers", type=int, default=None, help="Concurrent tag writes per page")

    preview_parser = subparsers.add_parser("preview", help="Show one page of matching products")
    _add_filter_arguments(preview_parser)
    preview_parser.add_argument("--cursor", help="Cursor from a previous preview page")
    preview_parser.add_argument(
        "--direction",
        choices=[direction.value for direction in Direction],
        default=Direction.NEXT.value,
    )
    return parser


def _print_json(data: Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _print_run(result: RunResult) -> None:
    print(f"[bulktag] {result.summary()}")
    if result.cancelled:
        print(f"Cancelled after {result.pages} page(s).")
    if result.error:
        print(f"Stopped after {result.pages} page(s): {result.error}")
    if result.sample_titles:
        print("Sample:")
        for title in result.sample_titles:
            print(f"- {title}")


def _print_preview(result: PreviewResult) -> None:
    if result.error:
        print(f"[bulktag] {result.error}")
        return
    print(f"[bulktag] {result.total_count} matching product(s)")
    for product in result.page.items:
        tags = ", ".join(product.tags) if product.tags else "-"
        print(f"- {product.title or product.id} [{product.product_type or '-'}] tags: {tags}")
    if result.page.has_previous and result.page.previous_cursor:
        print(f"Previous: --cursor {result.page.previous_cursor} --direction prev")
    if result.page.has_more and result.page.next_cursor:
        print(f"Next: --cursor {result.page.next_cursor}")
    if result.collections:
        print("Collections:")
        for collection in result.collections:
            print(f"- {collection.title} ({collection.id})")


def _print_progress(progress: RunProgress) -> None:
    print(
        f"page {progress.page}: {progress.visited} visited "
        f"({progress.updated} updated, {progress.skipped} skipped, {progress.failed} failed)",
        file=sys.stderr,
    )


@contextmanager
def _cancel_on_interrupt() -> Iterator[threading.Event]:
    """Turn Ctrl-C into a cancellation request honored at the next page boundary."""
    event = threading.Event()
    if threading.current_thread() is not threading.main_thread():
        yield event
        return

    def _handler(_signum, _frame) -> None:  # noqa: ANN001
        event.set()
        print("Cancelling after the current page...", file=sys.stderr)

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield event
    finally:
        signal.signal(signal.SIGINT, previous)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("INFO" if args.verbose else None)

    shopify_settings = load_shopify_settings()
    if not shopify_settings.configured:
        print("BULKTAG_SHOP and BULKTAG_ACCESS_TOKEN must be set", file=sys.stderr)
        return EXIT_USAGE

    http_settings = load_http_settings()
    if args.ignore_ssl_errors:
        http_settings.verify_ssl = False
    http_client = create_default_http_client(http_settings)

    filters = FilterCriteria(
        keyword=args.keyword,
        product_type=args.product_type,
        collection_id=args.collection,
    )

    with BulkTagger(http_client=http_client, shopify_settings=shopify_settings, http_settings=http_settings) as tagger:
        try:
            if args.command == "preview":
                preview = tagger.preview(filters, cursor=args.cursor, direction=Direction.parse(args.direction))
                if args.json:
                    _print_json(preview)
                else:
                    _print_preview(preview)
                return EXIT_ABORTED if preview.error else EXIT_OK

            with _cancel_on_interrupt() as cancel_event:
                result = tagger.run(
                    filters,
                    args.tag,
                    mode=Mode.parse(args.mode),
                    dry_run=args.dry_run,
                    max_workers=args.workers,
                    cancel_event=cancel_event,
                    on_progress=None if args.json else _print_progress,
                )
        except ValidationError as exc:
            print(f"[bulktag] {exc}", file=sys.stderr)
            return EXIT_USAGE

    if args.json:
        _print_json(result)
    else:
        _print_run(result)
    return EXIT_ABORTED if result.error else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
