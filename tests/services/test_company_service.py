"""
Tests for CompanyService: creation, chart seeding and VAT cadence.
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from bookkeeping_kernel.domain.clock import DeterministicClock
from bookkeeping_kernel.exceptions import CompanyNotFoundError
from bookkeeping_kernel.models.vat_period import VatPeriodType
from bookkeeping_kernel.services.company_service import CompanyService


class TestCreateCompany:
    def test_seeds_configured_chart(self, company, account_service, config):
        accounts = account_service.list_accounts(company.id)

        assert len(accounts) == len(config.seed_chart)
        assert {"1930", "2610", "2640", "3001", "5010", "8310"} <= {
            a.account_number for a in accounts
        }

    def test_defaults(self, company, config):
        assert company.name == "Test AB"
        assert company.organization_number == "556000-0000"
        assert company.current_fiscal_year == 2024
        assert company.vat_period_type == config.default_vat_period_type

    def test_fiscal_year_defaults_to_clock_year(self, session, config):
        clock = DeterministicClock(datetime(2026, 2, 1, tzinfo=timezone.utc))
        created = CompanyService(session, clock=clock, config=config).create_company("Clocked AB")

        assert created.current_fiscal_year == 2026

    def test_explicit_vat_period_type(self, company_service):
        created = company_service.create_company("Monthly AB", vat_period_type=VatPeriodType.MONTHLY)

        assert created.vat_period_type == VatPeriodType.MONTHLY

    def test_without_seed_chart(self, company_service, account_service):
        created = company_service.create_company("Empty AB", seed_chart=False)

        assert account_service.list_accounts(created.id) == []

    def test_creation_logged(self, company_service, captured_logs):
        company_service.create_company("Logged AB", fiscal_year=2024)

        records = [r for r in captured_logs() if r["message"] == "company_created"]
        assert records[0]["fiscal_year"] == 2024
        assert records[0]["seeded_accounts"] > 0


class TestCompanyLookup:
    def test_get_company(self, company_service, company):
        assert company_service.get_company(company.id) == company

    def test_get_unknown_company(self, company_service):
        assert company_service.get_company(uuid4()) is None


class TestVatPeriodType:
    def test_change_cadence(self, company_service, company):
        updated = company_service.set_vat_period_type(company.id, VatPeriodType.YEARLY)

        assert updated.vat_period_type == VatPeriodType.YEARLY
        assert company_service.get_company(company.id).vat_period_type == VatPeriodType.YEARLY

    def test_unknown_company(self, company_service):
        with pytest.raises(CompanyNotFoundError):
            company_service.set_vat_period_type(uuid4(), VatPeriodType.MONTHLY)
