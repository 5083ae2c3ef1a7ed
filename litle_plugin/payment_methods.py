import logging

from sqlalchemy import false, func, select
from sqlalchemy.orm import Session

from litle_plugin.config import settings
from litle_plugin.errors import AmbiguousStateError, NotFoundError
from litle_plugin.models import PaymentMethod
from litle_plugin.pagination import LazyResultSet, Pagination, next_offset_for
from litle_plugin.search import count_query, page_query

logger = logging.getLogger(__name__)


class PaymentMethodStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, **attributes) -> PaymentMethod:
        payment_method = PaymentMethod(**attributes)
        self.db.add(payment_method)
        self.db.commit()
        self.db.refresh(payment_method)
        return payment_method

    def from_kb_account_id(self, kb_account_id: str) -> list[PaymentMethod]:
        query = (
            select(PaymentMethod)
            .where(PaymentMethod.kb_account_id == kb_account_id, PaymentMethod.is_deleted == false())
            .order_by(PaymentMethod.id)
        )
        return list(self.db.scalars(query))

    def from_kb_payment_method_id(self, kb_payment_method_id: str) -> PaymentMethod:
        query = (
            select(PaymentMethod)
            .where(PaymentMethod.kb_payment_method_id == kb_payment_method_id, PaymentMethod.is_deleted == false())
            .order_by(PaymentMethod.id)
        )
        payment_methods = list(self.db.scalars(query))
        if not payment_methods:
            raise NotFoundError(f"No payment method found for payment method {kb_payment_method_id}")
        if len(payment_methods) > 1:
            raise AmbiguousStateError(
                f"Killbill payment method mapping to multiple active Litle tokens for payment method {kb_payment_method_id}"
            )
        return payment_methods[0]

    def mark_as_deleted(self, kb_payment_method_id: str) -> PaymentMethod:
        try:
            payment_method = self.from_kb_payment_method_id(kb_payment_method_id)
            payment_method.is_deleted = True
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Marked payment method %s as deleted", kb_payment_method_id)
        return payment_method

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(PaymentMethod))

    def search(self, search_key, offset: int = 0, limit: int = None) -> Pagination:
        if limit is None:
            limit = settings.SEARCH_DEFAULT_LIMIT

        total_nb_records = self.db.scalar(count_query(search_key))
        max_nb_records = self.count()
        # Don't fetch more than the table holds
        actual_limit = min(max_nb_records, limit)

        def fetch(page_offset, page_limit):
            rows = self.db.scalars(page_query(search_key, page_offset, page_limit)).all()
            return [row.to_payment_method_response() for row in rows]

        logger.debug("Search %r matched %s of %s payment methods", search_key, total_nb_records, max_nb_records)
        return Pagination(
            current_offset=offset,
            total_nb_records=total_nb_records,
            max_nb_records=max_nb_records,
            next_offset=next_offset_for(offset, limit, total_nb_records),
            iterator=LazyResultSet(offset, actual_limit, fetch, batch_size=settings.SEARCH_BATCH_SIZE),
        )
