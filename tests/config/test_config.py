"""
Tests for configuration loading and validation.
"""

from decimal import Decimal

import pytest
import yaml

from bookkeeping_kernel.config import BookkeepingConfig, SeedAccount, get_default_config, load_config
from bookkeeping_kernel.models.account import AccountType
from bookkeeping_kernel.models.vat_period import VatPeriodType


def _write(tmp_path, data) -> str:
    path = tmp_path / "bookkeeping.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


class TestDefaultConfig:
    def test_packaged_defaults(self):
        config = get_default_config()

        assert config.voucher_number_width == 4
        assert config.corporate_tax_rate == Decimal("0.206")
        assert config.employer_contribution_rate == Decimal("0.3142")
        assert config.default_vat_period_type == VatPeriodType.QUARTERLY
        assert config.output_vat_accounts == ("2610", "2620", "2630")
        assert config.input_vat_accounts == ("2640",)
        assert config.invoice_revenue_fallback is False

    def test_seed_chart(self):
        chart = {a.account_number: a for a in get_default_config().seed_chart}

        assert chart["1930"].account_type == AccountType.ASSET
        assert chart["2610"].account_type == AccountType.LIABILITY
        assert chart["3001"].account_type == AccountType.REVENUE
        assert chart["5010"].account_type == AccountType.EXPENSE
        assert chart["8310"].account_type == AccountType.FINANCIAL_INCOME
        assert chart["8410"].account_type == AccountType.FINANCIAL_EXPENSE
        assert "8999" not in chart
        assert "2099" not in chart

    def test_cached(self):
        assert get_default_config() is get_default_config()


class TestLoadConfig:
    def test_overrides(self, tmp_path):
        path = _write(
            tmp_path,
            {
                "voucher_number_width": 6,
                "corporate_tax_rate": 0.22,
                "default_vat_period_type": "monthly",
                "seed_chart": [{"number": 1930, "name": "Bank", "type": "asset"}],
            },
        )
        config = load_config(path)

        assert config.voucher_number_width == 6
        assert config.corporate_tax_rate == Decimal("0.22")
        assert config.default_vat_period_type == VatPeriodType.MONTHLY
        assert config.seed_chart == (SeedAccount("1930", "Bank", AccountType.ASSET),)

    def test_empty_file_gives_dataclass_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == BookkeepingConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_unknown_keys_warn(self, tmp_path, captured_logs):
        load_config(_write(tmp_path, {"surprise": 1}))

        records = [r for r in captured_logs() if r["message"] == "config_unknown_keys"]
        assert records[0]["keys"] == ["surprise"]
        assert records[0]["level"] == "WARNING"


class TestValidation:
    def test_rate_out_of_range(self):
        with pytest.raises(ValueError, match="corporate_tax_rate"):
            BookkeepingConfig(corporate_tax_rate=Decimal("1.5"))

    def test_width_must_be_positive(self):
        with pytest.raises(ValueError):
            BookkeepingConfig(voucher_number_width=0)

    def test_closing_accounts_must_differ(self):
        with pytest.raises(ValueError):
            BookkeepingConfig(result_account_number="2099")

    def test_duplicate_seed_numbers(self):
        seed = SeedAccount("1930", "Bank", AccountType.ASSET)
        with pytest.raises(ValueError, match="duplicate"):
            BookkeepingConfig(seed_chart=(seed, seed))

    def test_seed_account_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            SeedAccount("1930", "Bank", "cash")

    def test_seed_account_rejects_empty_name(self):
        with pytest.raises(ValueError):
            SeedAccount("1930", " ", AccountType.ASSET)
