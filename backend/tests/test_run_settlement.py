"""Tests for the run_settlement command line script."""

import json
from unittest.mock import patch

import pytest

from scripts.run_settlement import build_parser, main
from settlement.core.errors import HttpError
from tests.conftest import FakeBillingClient


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.preview is False
        assert args.organization_concurrency is None
        assert args.invoice_concurrency is None

    def test_concurrency_options(self):
        args = build_parser().parse_args(
            ["--preview", "--organization-concurrency", "2", "--invoice-concurrency", "3"]
        )
        assert args.preview is True
        assert args.organization_concurrency == 2
        assert args.invoice_concurrency == 3

    @pytest.mark.parametrize("value", ["0", "-2", "many"])
    def test_rejects_invalid_concurrency(self, value):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--invoice-concurrency", value])


class TestMain:
    def test_prints_settled_payments(self, capsys, usd_settings, end_to_end_invoices):
        client = FakeBillingClient(
            invoices=end_to_end_invoices, organization_settings=[usd_settings]
        )

        with patch("scripts.run_settlement.BillingClient", return_value=client):
            exit_code = main([])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert [entry["payment"]["id"] for entry in output] == ["p2", "p1"]
        assert [entry["status"] for entry in output] == ["paid", "paid"]

    def test_preview_prints_plan(self, capsys, usd_settings, end_to_end_invoices):
        client = FakeBillingClient(
            invoices=end_to_end_invoices, organization_settings=[usd_settings]
        )

        with patch("scripts.run_settlement.BillingClient", return_value=client):
            exit_code = main(["--preview"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert [entry["payment_id"] for entry in output] == ["p2", "p1"]
        assert client.pay_calls == []

    def test_failure_prints_error_and_exits_non_zero(
        self, capsys, usd_settings, end_to_end_invoices
    ):
        client = FakeBillingClient(
            invoices=end_to_end_invoices,
            organization_settings=[usd_settings],
            payment_errors={"p2": HttpError(500, "Internal Server Error")},
        )

        with patch("scripts.run_settlement.BillingClient", return_value=client):
            exit_code = main([])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err.strip().splitlines()[-1])["type"] == "HttpError"
