"""
Bookkeeping configuration schema.

Defines the settings the kernel reads at runtime with sensible Swedish
small-business defaults.  Actual values are loaded from YAML:

    config = load_config(Path("bookkeeping.yaml"))
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Self

from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_kernel.models.account import AccountType
from bookkeeping_kernel.models.vat_period import VatPeriodType

logger = get_logger("config.schema")


@dataclass(frozen=True)
class SeedAccount:
    """One entry of the chart every new company starts with."""

    account_number: str
    name: str
    account_type: AccountType

    def __post_init__(self):
        if not self.account_number or not self.account_number.strip():
            raise ValueError("account_number cannot be empty")
        if not self.name or not self.name.strip():
            raise ValueError(f"name cannot be empty for account {self.account_number}")
        # Accept raw strings from YAML
        object.__setattr__(self, "account_type", AccountType(self.account_type))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            account_number=str(data["number"]),
            name=data["name"],
            account_type=data["type"],
        )


@dataclass(frozen=True)
class BookkeepingConfig:
    """
    Runtime settings for the kernel.

    Rates are Decimal fractions (0.206 means 20.6%).
    """

    voucher_number_width: int = 4

    corporate_tax_rate: Decimal = Decimal("0.206")
    employer_contribution_rate: Decimal = Decimal("0.3142")

    # Year-end closing accounts, created on first close if missing
    result_account_number: str = "8999"
    result_account_name: str = "Current year result"
    retained_earnings_account_number: str = "2099"
    retained_earnings_account_name: str = "Retained earnings"

    # Ledger VAT view
    output_vat_accounts: tuple[str, ...] = ("2610", "2620", "2630")
    input_vat_accounts: tuple[str, ...] = ("2640",)

    default_vat_period_type: VatPeriodType = VatPeriodType.QUARTERLY

    # Take revenue from paid sales documents when the ledger shows none
    invoice_revenue_fallback: bool = False

    seed_chart: tuple[SeedAccount, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.voucher_number_width < 1:
            raise ValueError(
                f"voucher_number_width must be positive, got {self.voucher_number_width}"
            )
        for name in ("corporate_tax_rate", "employer_contribution_rate"):
            rate = getattr(self, name)
            if not Decimal("0") <= rate <= Decimal("1"):
                raise ValueError(f"{name} must be between 0 and 1, got {rate}")
        if self.result_account_number == self.retained_earnings_account_number:
            raise ValueError("result and retained earnings accounts must differ")
        if not self.output_vat_accounts:
            raise ValueError("output_vat_accounts cannot be empty")

        numbers = [account.account_number for account in self.seed_chart]
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        if duplicates:
            raise ValueError(f"seed_chart has duplicate account numbers: {duplicates}")

        object.__setattr__(
            self, "default_vat_period_type", VatPeriodType(self.default_vat_period_type)
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Build a config from a parsed YAML mapping.

        Missing keys keep their defaults.  Unknown keys are ignored with a
        warning so a newer file still loads.
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("config_unknown_keys", extra={"keys": unknown})

        kwargs: dict[str, Any] = {}
        for key in ("voucher_number_width",):
            if key in data:
                kwargs[key] = int(data[key])
        for key in ("corporate_tax_rate", "employer_contribution_rate"):
            if key in data:
                kwargs[key] = Decimal(str(data[key]))
        for key in (
            "result_account_number",
            "result_account_name",
            "retained_earnings_account_number",
            "retained_earnings_account_name",
        ):
            if key in data:
                kwargs[key] = str(data[key])
        for key in ("output_vat_accounts", "input_vat_accounts"):
            if key in data:
                kwargs[key] = tuple(str(n) for n in data[key])
        if "default_vat_period_type" in data:
            kwargs["default_vat_period_type"] = VatPeriodType(data["default_vat_period_type"])
        if "invoice_revenue_fallback" in data:
            kwargs["invoice_revenue_fallback"] = bool(data["invoice_revenue_fallback"])
        if "seed_chart" in data:
            kwargs["seed_chart"] = tuple(
                SeedAccount.from_dict(entry) for entry in data["seed_chart"] or ()
            )

        return cls(**kwargs)
