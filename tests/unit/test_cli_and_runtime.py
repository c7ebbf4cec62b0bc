# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from bulktag.cli import main as cli
from bulktag.config import RunSettings
from bulktag.errors import TagValidationError
from bulktag.models import FilterCriteria, Mode
from bulktag.runtime import BulkTagger


@pytest.fixture
def cli_env(monkeypatch, shop_factory, products_factory):
    monkeypatch.setenv("BULKTAG_SHOP", "example.myshopify.com")
    monkeypatch.setenv("BULKTAG_ACCESS_TOKEN", "shpat_test")
    monkeypatch.setenv("BULKTAG_HTTP_RETRIES", "1")
    shop = shop_factory(products_factory(3, tagged=(2,)))
    monkeypatch.setattr(cli, "create_default_http_client", lambda settings: shop)
    return shop


def test_build_parser_run_defaults():
    args = cli.build_parser().parse_args(["run", "--tag", "Sale"])
    assert args.command == "run"
    assert args.mode == "apply"
    assert args.dry_run is False
    assert args.json is False


def test_cli_dry_run_json(cli_env, capsys):
    code = cli.main(["--json", "run", "--tag", "Sale", "--dry-run"])
    payload = json.loads(capsys.readouterr().out)
    assert code == cli.EXIT_OK
    assert payload["updated"] == 2
    assert payload["skipped"] == 1
    assert payload["sample_titles"] == ["Product 1", "Product 3"]
    assert cli_env.mutation_calls == []


def test_cli_live_run_pretty(cli_env, capsys):
    code = cli.main(["run", "--tag", "Sale", "--mode", "remove"])
    out = capsys.readouterr().out
    assert code == cli.EXIT_OK
    assert "1 removed, 2 skipped, 0 failed." in out


def test_cli_empty_tag_is_usage_error(cli_env, capsys):
    code = cli.main(["run", "--tag", "  "])
    assert code == cli.EXIT_USAGE
    assert "Tag cannot be empty" in capsys.readouterr().err
    assert cli_env.requests == []


def test_cli_aborted_run_exit_code(cli_env, capsys):
    cli_env.fail_page_reads_from = 1
    assert cli.main(["run", "--tag", "Sale"]) == cli.EXIT_ABORTED
    assert "Stopped after 0 page(s)" in capsys.readouterr().out


def test_cli_preview(cli_env, capsys):
    assert cli.main(["preview", "--keyword", "Product"]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "3 matching product(s)" in out
    assert "Product 2" in out


def test_cli_preview_bad_cursor(cli_env, capsys):
    assert cli.main(["preview", "--cursor", "abc!!"]) == cli.EXIT_USAGE
    assert "Malformed pagination cursor" in capsys.readouterr().err


def test_cli_requires_credentials(monkeypatch, capsys):
    monkeypatch.delenv("BULKTAG_SHOP", raising=False)
    monkeypatch.delenv("BULKTAG_ACCESS_TOKEN", raising=False)
    assert cli.main(["preview"]) == cli.EXIT_USAGE
    assert "BULKTAG_SHOP" in capsys.readouterr().err


def test_bulk_tagger_runs_and_closes(shop_factory, products_factory, shopify_settings, http_settings):
    shop = shop_factory(products_factory(5, tagged=(1,)))
    closed = []
    shop.close = lambda: closed.append(True)
    with BulkTagger(
        shop,
        shopify_settings=shopify_settings,
        http_settings=http_settings,
        run_settings=RunSettings(bulk_page_size=2, max_workers=2),
    ) as tagger:
        result = tagger.run(FilterCriteria(), "Sale", mode=Mode.APPLY)
        with pytest.raises(TagValidationError):
            tagger.run(FilterCriteria(), "")
    assert (result.updated, result.skipped, result.failed) == (4, 1, 0)
    assert result.pages == 3
    assert closed == [True]
