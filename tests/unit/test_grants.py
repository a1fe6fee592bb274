"""Unit tests for vest loading, grant grouping and holdings summary."""

from datetime import date

import pytest

from equitycalc.sdk.equity import VestEvent, calc_rsu_net
from equitycalc.sdk.grants import group_into_grants, load_vests, summarize_holdings
from equitycalc.sdk.taxes import DEFAULT_TAX_CONFIGURATION as CONFIG

TODAY = date(2026, 10, 19)


def vest(grant_date, vest_date, shares=10, vest_price=50.0, sold=False, grant_name=""):
    return VestEvent(
        shares=shares,
        vest_price=vest_price,
        exchange_rate=3.7,
        grant_date=grant_date,
        vest_date=vest_date,
        sold=sold,
        grant_name=grant_name,
    )


class TestLoadVests:
    """Tests for load_vests()."""

    def test_load(self, tmp_path):
        path = tmp_path / "vests.yaml"
        path.write_text(
            "vests:\n"
            "  - grant_date: 15/3/22\n"
            "    vest_date: 15/6/23\n"
            "    shares: 40\n"
            "    vest_price: 42.5\n"
            "    grant_name: 2022 refresh\n"
            "  - grant_date: 2024-01-10\n"
            "    shares: \"1,000\"\n"
            "    sold: true\n"
        )

        vests = load_vests(path)

        assert len(vests) == 2
        assert vests[0].grant_date == "15/3/22"
        assert vests[0].vest_date == "15/6/23"
        assert vests[0].shares == 40
        assert vests[0].vest_price == 42.5
        assert vests[0].grant_name == "2022 refresh"
        assert vests[0].sold is False
        assert vests[1].grant_date == date(2024, 1, 10)
        assert vests[1].vest_date == date(2024, 1, 10)
        assert vests[1].shares == 1000
        assert vests[1].vest_price is None
        assert vests[1].sold is True

    def test_missing_shares(self, tmp_path):
        path = tmp_path / "vests.yaml"
        path.write_text("vests:\n  - grant_date: 15/3/22\n")
        with pytest.raises(ValueError, match="vest #1"):
            load_vests(path)

    @pytest.mark.parametrize("content,message", [
        ("vests: 5\n", "must be a list"),
        ("vests: {grant_date: 15/3/22}\n", "must be a list"),
        ("vests: [\n", "invalid YAML"),
    ])
    def test_malformed_file(self, tmp_path, content, message):
        path = tmp_path / "vests.yaml"
        path.write_text(content)
        with pytest.raises(ValueError, match=message):
            load_vests(path)

    def test_empty_vests_key(self, tmp_path):
        path = tmp_path / "vests.yaml"
        path.write_text("vests:\n")
        assert load_vests(path) == []

    def test_empty_file(self, tmp_path):
        path = tmp_path / "vests.yaml"
        path.write_text("")
        assert load_vests(path) == []


class TestGroupIntoGrants:
    """Tests for group_into_grants()."""

    def test_groups_and_sorts(self):
        vests = [
            vest("1/6/25", "1/6/27", grant_name="refresh"),
            vest("1/1/22", "1/1/23", grant_name="new hire"),
            vest("1/6/25", "1/9/26", grant_name="refresh"),
        ]

        grants = group_into_grants(vests, TODAY)

        assert [g.grant_date for g in grants] == ["1/1/22", "1/6/25"]
        refresh = grants[1]
        assert refresh.grant_name == "refresh"
        assert [v.vest_date for v in refresh.vests] == ["1/9/26", "1/6/27"]
        assert refresh.vested_shares == 10
        assert refresh.unvested_shares == 10

    def test_date_objects_and_strings_share_a_grant(self):
        vests = [vest(date(2022, 1, 1), "1/1/23"), vest("1/1/22", "1/7/23")]
        grants = group_into_grants(vests, TODAY)
        assert len(grants) == 1
        assert len(grants[0].vests) == 2


class TestSummarizeHoldings:
    """Tests for summarize_holdings()."""

    def test_summary(self):
        vests = [
            vest("1/1/22", "1/1/23"),             # vested, matured
            vest("1/6/25", "1/9/26"),             # vested, unmatured
            vest("1/6/25", "1/6/27"),             # unvested
            vest("1/1/22", "1/7/23", sold=True),  # already sold
        ]

        summary = summarize_holdings(CONFIG, vests, 60, 3.7, TODAY)

        value = 10 * 60 * 3.7
        assert summary.unvested_value == pytest.approx(value)
        assert summary.vested_value == pytest.approx(2 * value)
        assert summary.holdable_value == pytest.approx(value)
        assert summary.total_value == pytest.approx(3 * value)

        expected_tax = calc_rsu_net(
            CONFIG, shares=10, vest_price=50, exchange_rate=3.7, fees=0,
            base_yearly_gross=0, sell_price=60, grant_date="1/1/22", sell_date=TODAY,
        ).total_tax
        assert summary.estimated_tax_if_sold_today == pytest.approx(expected_tax)

    def test_no_tax_estimate_without_vest_price(self):
        summary = summarize_holdings(CONFIG, [vest("1/1/22", "1/1/23", vest_price=None)], 60, 3.7, TODAY)
        assert summary.holdable_value > 0
        assert summary.estimated_tax_if_sold_today == 0
