"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for every
    service in the kernel.  Services persist with ``session.flush()`` and
    never ``session.commit()``.

Invariants enforced:
    - Transaction boundaries: services flush within the caller's transaction
      and never commit or roll back themselves.  The caller (the
      CompanyLedger facade, or a test) owns commit/rollback, so a failed
      multi-step operation such as a year-end close leaves nothing behind.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping_kernel.db.base import Base
from bookkeeping_kernel.exceptions import CompanyNotFoundError
from bookkeeping_kernel.models.company import Company

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for all kernel services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide DTO read queries; those live in selectors/.
    """

    def __init__(self, session: Session):
        self.session = session

    def _get_company(self, company_id, lock: bool = False) -> Company:
        """
        Load the company row, optionally holding ``SELECT ... FOR UPDATE``.

        Raises:
            CompanyNotFoundError: No company with this id.
        """
        query = select(Company).where(Company.id == company_id)
        if lock:
            query = query.with_for_update().execution_options(populate_existing=True)
        company = self.session.execute(query).scalar_one_or_none()
        if company is None:
            raise CompanyNotFoundError(str(company_id))
        return company
