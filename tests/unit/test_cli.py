"""Tests for the equity-calc CLI commands."""

import json

import pytest
from click.testing import CliRunner

from equitycalc import __version__
from equitycalc.cli.__main__ import cli


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point settings at an empty config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("EQUITY_CALC_CONFIG_PATH", str(config_dir))
    return config_dir


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def vests_file(tmp_path):
    path = tmp_path / "vests.yaml"
    path.write_text(
        "vests:\n"
        "  - grant_date: 1/1/22\n"
        "    vest_date: 1/1/23\n"
        "    shares: 10\n"
        "    vest_price: 50\n"
        "    grant_name: new hire\n"
        "  - grant_date: 1/6/25\n"
        "    vest_date: 1/9/26\n"
        "    shares: 10\n"
        "    vest_price: 50\n"
        "    grant_name: refresh\n"
    )
    return path


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestTaxCommands:

    def test_marginal_json(self, runner, isolated_config):
        result = runner.invoke(cli, ["tax", "marginal", "400000", "18500", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tax_year"] == 2026
        assert data["income_tax"] == pytest.approx(6475)
        assert data["national_insurance"] == pytest.approx(1295)
        assert data["surtax"] == 0

    def test_marginal_text(self, runner, isolated_config):
        result = runner.invoke(cli, ["tax", "marginal", "400000", "18500"])
        assert result.exit_code == 0, result.output
        assert "Income tax" in result.output

    def test_brackets_json(self, runner, isolated_config):
        result = runner.invoke(cli, ["tax", "brackets", "84000", "1000", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [b["rate"] for b in data] == [0.10, 0.14]

    def test_rules(self, runner, isolated_config):
        result = runner.invoke(cli, ["tax", "rules", "--year", "2026"])
        assert result.exit_code == 0, result.output
        assert "2026" in result.output

    def test_rules_year_not_found(self, runner, isolated_config):
        result = runner.invoke(cli, ["tax", "rules", "--year", "1990"])
        assert result.exit_code == 1
        assert "No tax rules" in result.output

    def test_baseline(self, runner, isolated_config):
        result = runner.invoke(cli, ["tax", "baseline", "--earned", "300000", "--salary", "30000"])
        assert result.exit_code == 0, result.output
        assert "Projected gross" in result.output


class TestRsuCommands:

    def test_net_matured_json(self, runner, isolated_config):
        result = runner.invoke(cli, [
            "rsu", "net", "--shares", "100", "--vest-price", "50", "--rate", "3.7",
            "--sell-price", "60", "--grant-date", "1/1/22", "--sell-date", "1/6/24",
            "--baseline", "400000", "--json",
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["track"] == "matured"
        assert data["income"] == pytest.approx(18500)
        assert data["capital_gains_tax"] == pytest.approx(925)

    def test_net_text(self, runner, isolated_config):
        result = runner.invoke(cli, [
            "rsu", "net", "--shares", "100", "--vest-price", "50", "--rate", "3.7",
            "--baseline", "400000",
        ])
        assert result.exit_code == 0, result.output
        assert "unmatured" in result.output

    def test_baseline_from_settings(self, runner, isolated_config):
        (isolated_config / "settings.json").write_text(json.dumps({"earned_so_far": 400000}))
        result = runner.invoke(cli, [
            "rsu", "net", "--shares", "100", "--vest-price", "50", "--rate", "3.7", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["income_tax"] == pytest.approx(18500 * 0.35)

    def test_invalid_date(self, runner, isolated_config):
        result = runner.invoke(cli, [
            "rsu", "net", "--shares", "100", "--vest-price", "50", "--rate", "3.7",
            "--grant-date", "2024-02-31",
        ])
        assert result.exit_code == 2
        assert "Invalid date" in result.output

    def test_plan_json(self, runner, isolated_config, vests_file):
        result = runner.invoke(cli, [
            "rsu", "plan", str(vests_file), "--price", "60", "--rate", "3.7",
            "--sell-date", "19/10/26", "--baseline", "400000", "--json",
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["sell_date"] == "2026-10-19"
        assert data["matured"]["shares"] == 10
        assert data["unmatured"]["shares"] == 10
        assert data["wait_scenario"]["sell_date"] == "2027-06-01"

    def test_plan_text(self, runner, isolated_config, vests_file):
        result = runner.invoke(cli, [
            "rsu", "plan", str(vests_file), "--price", "60", "--rate", "3.7",
            "--sell-date", "19/10/26", "--baseline", "400000",
        ])
        assert result.exit_code == 0, result.output
        assert "RSU sale on 19/10/2026" in result.output

    def test_plan_bad_file(self, runner, isolated_config, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("vests:\n  - vest_date: 1/1/23\n")
        result = runner.invoke(cli, ["rsu", "plan", str(path), "--price", "60", "--rate", "3.7"])
        assert result.exit_code == 1

    @pytest.mark.parametrize("command", ["plan", "holdings"])
    @pytest.mark.parametrize("content", ["vests: 5\n", "vests: [\n"])
    def test_malformed_file(self, runner, isolated_config, tmp_path, command, content):
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        result = runner.invoke(cli, ["rsu", command, str(path), "--price", "60", "--rate", "3.7"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_holdings(self, runner, isolated_config, vests_file):
        result = runner.invoke(cli, ["rsu", "holdings", str(vests_file), "--price", "60", "--rate", "3.7"])
        assert result.exit_code == 0, result.output
        assert "Total value" in result.output


class TestEsppCommands:

    def test_net_json(self, runner, isolated_config):
        result = runner.invoke(cli, [
            "espp", "net", "--shares", "50", "--market-price", "100", "--purchase-price", "85",
            "--contribution", "4250", "--rate", "3.7", "--sell-price", "120",
            "--grant-date", "1/1/22", "--sell-date", "1/6/24", "--json",
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["track"] == "matured"
        assert data["income_tax"] == 0
        assert data["surtax"] == 0

    def test_estimate_json(self, runner, isolated_config):
        result = runner.invoke(cli, [
            "espp", "estimate", "--shares", "100", "--purchase-price", "85",
            "--sell-price", "120", "--rate", "3.7", "--baseline", "0", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["gain"] == pytest.approx(12950)

    def test_estimate_shares_from_settings(self, runner, isolated_config):
        (isolated_config / "settings.json").write_text(json.dumps({
            "espp_monthly_contribution": 5000,
            "espp_purchase_price": 85,
        }))
        result = runner.invoke(cli, [
            "espp", "estimate", "--sell-price", "120", "--rate", "3.7", "--baseline", "0",
        ])
        assert result.exit_code == 0, result.output
        assert "Net" in result.output

    def test_estimate_missing_inputs(self, runner, isolated_config):
        result = runner.invoke(cli, ["espp", "estimate", "--sell-price", "120", "--rate", "3.7", "--baseline", "0"])
        assert result.exit_code == 2


class TestMaturationCommands:

    def test_check_matured(self, runner, isolated_config):
        result = runner.invoke(cli, ["maturation", "check", "15/3/22", "15/3/24"])
        assert result.exit_code == 0, result.output
        assert "Matured" in result.output
        assert "15/03/2024" in result.output

    def test_check_not_matured(self, runner, isolated_config):
        result = runner.invoke(cli, ["maturation", "check", "15/3/22", "14/3/24"])
        assert result.exit_code == 0, result.output
        assert "Not matured" in result.output

    def test_status_json(self, runner, isolated_config):
        result = runner.invoke(cli, ["maturation", "status", "15/3/24", "--today", "1/3/26", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["maturation_date"] == "2026-03-15"
        assert data["matured"] is False
        assert data["days_remaining"] == 14
        assert data["coming_soon"] is True

    @pytest.mark.parametrize("args", [
        ["status", "1/1/9999"],
        ["check", "1/1/9999", "31/12/9999"],
    ])
    def test_maturation_past_last_date(self, runner, isolated_config, args):
        result = runner.invoke(cli, ["maturation", *args])
        assert result.exit_code == 2
        assert "out of range" in result.output


class TestSettingsCommands:

    def test_set_and_show(self, runner, isolated_config):
        result = runner.invoke(cli, ["settings", "set", "monthly_salary", "30000"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["settings", "show"])
        assert result.exit_code == 0, result.output
        assert "monthly_salary: 30000.0" in result.output

    def test_set_invalid_value(self, runner, isolated_config):
        result = runner.invoke(cli, ["settings", "set", "tax_year", "soon"])
        assert result.exit_code == 2

    def test_set_unknown_key(self, runner, isolated_config):
        result = runner.invoke(cli, ["settings", "set", "favorite_color", "blue"])
        assert result.exit_code == 2

    def test_unset(self, runner, isolated_config):
        runner.invoke(cli, ["settings", "set", "tax_year", "2026"])
        result = runner.invoke(cli, ["settings", "unset", "tax_year"])
        assert "Cleared tax_year" in result.output
        result = runner.invoke(cli, ["settings", "unset", "tax_year"])
        assert "was not set" in result.output
