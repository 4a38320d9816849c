"""
AccountService -- chart of accounts maintenance.

Responsibility:
    Create, list and retire accounts in a company's chart.  Retiring an
    account that any voucher row references only deactivates it; an
    unreferenced account is removed outright.

Invariants enforced:
    - Account numbers are unique within a company.
    - Referenced accounts are never hard-deleted.

Failure modes:
    - AccountNumberExistsError on a duplicate number.
    - CompanyNotFoundError when creating into an unknown company.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping_kernel.config.schema import SeedAccount
from bookkeeping_kernel.domain.dtos import AccountInfo
from bookkeeping_kernel.exceptions import AccountNumberExistsError
from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_kernel.models.account import Account, AccountType
from bookkeeping_kernel.selectors.ledger_selector import LedgerSelector
from bookkeeping_kernel.services.base import BaseService

logger = get_logger("services.account")


def account_to_dto(account: Account) -> AccountInfo:
    return AccountInfo(
        id=account.id,
        account_number=account.account_number,
        name=account.name,
        account_type=AccountType(account.account_type),
        is_active=account.is_active,
    )


class AccountService(BaseService[Account]):
    """Service for the per-company chart of accounts."""

    def __init__(self, session: Session):
        super().__init__(session)
        self._ledger = LedgerSelector(session)

    def _find_by_number(self, company_id: UUID, account_number: str) -> Account | None:
        return self.session.execute(
            select(Account).where(
                Account.company_id == company_id,
                Account.account_number == account_number,
            )
        ).scalar_one_or_none()

    def _find(self, company_id: UUID, account_id: UUID) -> Account | None:
        return self.session.execute(
            select(Account).where(
                Account.id == account_id,
                Account.company_id == company_id,
            )
        ).scalar_one_or_none()

    def create_account(
        self,
        company_id: UUID,
        account_number: str,
        name: str,
        account_type: AccountType,
    ) -> AccountInfo:
        """
        Add an active account to the company's chart.

        Raises:
            AccountNumberExistsError: The number is already taken in this
                company (active or not).
            CompanyNotFoundError: No such company.
        """
        self._get_company(company_id)

        if self._find_by_number(company_id, account_number) is not None:
            logger.warning(
                "account_number_exists",
                extra={"company_id": str(company_id), "account_number": account_number},
            )
            raise AccountNumberExistsError(account_number)

        account = Account(
            company_id=company_id,
            account_number=account_number,
            name=name,
            account_type=AccountType(account_type).value,
            is_active=True,
        )
        self.session.add(account)
        self.session.flush()

        logger.info(
            "account_created",
            extra={
                "company_id": str(company_id),
                "account_id": str(account.id),
                "account_number": account_number,
                "account_type": account.account_type,
            },
        )
        return account_to_dto(account)

    def get_account(self, company_id: UUID, account_id: UUID) -> AccountInfo | None:
        account = self._find(company_id, account_id)
        return account_to_dto(account) if account is not None else None

    def list_accounts(self, company_id: UUID, include_inactive: bool = False) -> list[AccountInfo]:
        """Accounts ordered by number; active only unless asked otherwise."""
        query = (
            select(Account)
            .where(Account.company_id == company_id)
            .order_by(Account.account_number)
        )
        if not include_inactive:
            query = query.where(Account.is_active.is_(True))
        return [account_to_dto(a) for a in self.session.execute(query).scalars()]

    def delete_account(self, company_id: UUID, account_id: UUID) -> bool:
        """
        Retire an account.

        Returns:
            False if the account does not belong to the company, True
            otherwise.  A referenced account is deactivated; an
            unreferenced one is deleted.
        """
        account = self._find(company_id, account_id)
        if account is None:
            return False

        if self._ledger.is_account_referenced(account.id):
            account.is_active = False
            self.session.flush()
            logger.info(
                "account_deactivated",
                extra={
                    "company_id": str(company_id),
                    "account_id": str(account_id),
                    "account_number": account.account_number,
                },
            )
        else:
            self.session.delete(account)
            self.session.flush()
            logger.info(
                "account_deleted",
                extra={
                    "company_id": str(company_id),
                    "account_id": str(account_id),
                    "account_number": account.account_number,
                },
            )
        return True

    def ensure_account(
        self,
        company_id: UUID,
        account_number: str,
        name: str,
        account_type: AccountType,
    ) -> Account:
        """
        Return the account with this number, creating it if absent.

        An existing but deactivated account is reactivated so it can
        take postings again.  Its name and type are left untouched.
        """
        account = self._find_by_number(company_id, account_number)
        if account is None:
            account = Account(
                company_id=company_id,
                account_number=account_number,
                name=name,
                account_type=AccountType(account_type).value,
                is_active=True,
            )
            self.session.add(account)
            self.session.flush()
            logger.info(
                "account_created",
                extra={
                    "company_id": str(company_id),
                    "account_id": str(account.id),
                    "account_number": account_number,
                    "account_type": account.account_type,
                },
            )
        elif not account.is_active:
            account.is_active = True
            self.session.flush()
            logger.info(
                "account_reactivated",
                extra={"company_id": str(company_id), "account_number": account_number},
            )
        return account

    def seed_chart(self, company_id: UUID, chart: tuple[SeedAccount, ...]) -> int:
        """
        Insert the seed accounts in one flush, skipping numbers the company
        already has.  Returns the count added.
        """
        existing = set(
            self.session.execute(
                select(Account.account_number).where(Account.company_id == company_id)
            ).scalars()
        )
        added = 0
        for entry in chart:
            if entry.account_number in existing:
                continue
            added += 1
            self.session.add(
                Account(
                    company_id=company_id,
                    account_number=entry.account_number,
                    name=entry.name,
                    account_type=entry.account_type.value,
                    is_active=True,
                )
            )
        self.session.flush()
        logger.debug(
            "chart_seeded",
            extra={"company_id": str(company_id), "accounts": added},
        )
        return added
