"""Smoke tests for the click CLI against a temporary data directory."""

import re

import pytest
from click.testing import CliRunner

from catalog.infrastructure.bootstrap import DATA_DIR_ENV
from catalog.infrastructure.cli.main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch) -> CliRunner:
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    return CliRunner()


def _create(runner: CliRunner) -> str:
    result = runner.invoke(
        cli,
        ["product", "create", "--name", "Laptop", "--category", "computers", "--price", "1000"],
    )
    assert result.exit_code == 0, result.output
    match = re.search(r"Product (\S+) 'Laptop' created", result.output)
    assert match
    return match.group(1)


def test_create_discount_and_show(runner):
    product_id = _create(runner)

    result = runner.invoke(
        cli,
        [
            "discount", "apply", "--id", product_id, "--percentage", "25",
            "--starts-at", "2000-01-01", "--ends-at", "2999-01-01",
        ],
    )
    assert result.exit_code == 0, result.output

    result = runner.invoke(cli, ["product", "show", "--id", product_id])
    assert result.exit_code == 0, result.output
    assert "Base price: 10.00 USD" in result.output
    assert "Price now:  7.50 USD" in result.output


def test_domain_error_becomes_click_error(runner):
    product_id = _create(runner)
    result = runner.invoke(cli, ["discount", "remove", "--id", product_id])
    assert result.exit_code == 1
    assert "no active discount" in result.output


def test_unknown_product(runner):
    result = runner.invoke(cli, ["product", "deactivate", "--id", "missing"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_outbox_pending_lists_events(runner):
    product_id = _create(runner)
    runner.invoke(cli, ["product", "deactivate", "--id", product_id])

    result = runner.invoke(cli, ["outbox", "pending"])
    assert result.exit_code == 0, result.output
    assert "product.created" in result.output
    assert "product.deactivated" in result.output
