"""
CompanyService -- tenant creation and company-level settings.

Creating a company opens its first fiscal year (the clock's calendar year
unless given) and seeds the default chart of accounts from configuration.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from bookkeeping_kernel.config.loader import get_default_config
from bookkeeping_kernel.config.schema import BookkeepingConfig
from bookkeeping_kernel.domain.clock import Clock, SystemClock
from bookkeeping_kernel.domain.dtos import CompanyInfo
from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_kernel.models.company import Company
from bookkeeping_kernel.models.vat_period import VatPeriodType
from bookkeeping_kernel.services.account_service import AccountService
from bookkeeping_kernel.services.base import BaseService

logger = get_logger("services.company")


def company_to_dto(company: Company) -> CompanyInfo:
    return CompanyInfo(
        id=company.id,
        name=company.name,
        organization_number=company.organization_number,
        current_fiscal_year=company.current_fiscal_year,
        vat_period_type=VatPeriodType(company.vat_period_type),
    )


class CompanyService(BaseService[Company]):
    """Service for company lifecycle and settings."""

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: BookkeepingConfig | None = None,
    ):
        super().__init__(session)
        self._clock = clock or SystemClock()
        self._config = config or get_default_config()
        self._accounts = AccountService(session)

    def create_company(
        self,
        name: str,
        organization_number: str | None = None,
        fiscal_year: int | None = None,
        vat_period_type: VatPeriodType | None = None,
        seed_chart: bool = True,
    ) -> CompanyInfo:
        """
        Create a company with its first open fiscal year.

        Args:
            name: Company name.
            organization_number: Registration number, free-form.
            fiscal_year: First open fiscal year.  Defaults to the clock's year.
            vat_period_type: Default VAT cadence.  Defaults to configuration.
            seed_chart: Seed the configured default chart of accounts.
        """
        period_type = VatPeriodType(vat_period_type or self._config.default_vat_period_type)
        company = Company(
            name=name,
            organization_number=organization_number,
            current_fiscal_year=fiscal_year or self._clock.today().year,
            vat_period_type=period_type.value,
        )
        self.session.add(company)
        self.session.flush()

        seeded = 0
        if seed_chart:
            seeded = self._accounts.seed_chart(company.id, self._config.seed_chart)

        logger.info(
            "company_created",
            extra={
                "company_id": str(company.id),
                "fiscal_year": company.current_fiscal_year,
                "vat_period_type": period_type.value,
                "seeded_accounts": seeded,
            },
        )
        return company_to_dto(company)

    def get_company(self, company_id: UUID) -> CompanyInfo | None:
        company = self.session.get(Company, company_id)
        return company_to_dto(company) if company is not None else None

    def set_vat_period_type(self, company_id: UUID, period_type: VatPeriodType) -> CompanyInfo:
        """
        Change the company's default VAT cadence.

        Raises:
            CompanyNotFoundError: No such company.
        """
        company = self._get_company(company_id)
        company.vat_period_type = VatPeriodType(period_type).value
        self.session.flush()
        logger.info(
            "vat_period_type_changed",
            extra={"company_id": str(company_id), "vat_period_type": company.vat_period_type},
        )
        return company_to_dto(company)
