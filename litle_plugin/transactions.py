import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from litle_plugin.errors import (
    AmbiguousStateError,
    NoRefundableChargeError,
    NotFoundError,
    RefundLimitExceededError,
)
from litle_plugin.models import ApiCall, Transaction

logger = logging.getLogger(__name__)


class TransactionStore:
    def __init__(self, db: Session):
        self.db = db

    def record(self, kb_payment_id: str, api_call: ApiCall, litle_txn_id: str, amount_in_cents: int,
               litle_response_id: int = None) -> Transaction:
        if amount_in_cents <= 0:
            raise ValueError(f"Transaction amount must be positive, got {amount_in_cents}")

        transaction = Transaction(
            kb_payment_id=kb_payment_id,
            api_call=ApiCall(api_call),
            litle_txn_id=litle_txn_id,
            amount_in_cents=amount_in_cents,
            litle_response_id=litle_response_id,
        )
        self.db.add(transaction)
        self.db.commit()
        self.db.refresh(transaction)
        return transaction

    def from_kb_payment_id(self, kb_payment_id: str) -> Transaction:
        return self._single_transaction_from_kb_payment_id(ApiCall.CHARGE, kb_payment_id)

    def refund_from_kb_payment_id(self, kb_payment_id: str) -> Transaction:
        return self._single_transaction_from_kb_payment_id(ApiCall.REFUND, kb_payment_id)

    def _single_transaction_from_kb_payment_id(self, api_call: ApiCall, kb_payment_id: str) -> Transaction:
        query = (
            select(Transaction)
            .where(Transaction.api_call == api_call, Transaction.kb_payment_id == kb_payment_id)
            .order_by(Transaction.id)
        )
        transactions = list(self.db.scalars(query))
        if not transactions:
            raise NotFoundError(f"Unable to find Litle transaction id for payment {kb_payment_id}")
        if len(transactions) > 1:
            raise AmbiguousStateError(f"Killbill payment mapping to multiple Litle transactions for payment {kb_payment_id}")
        return transactions[0]

    def find_candidate_transaction_for_refund(self, kb_payment_id: str, amount_in_cents: int) -> Transaction:
        """
        Return the charge a refund of ``amount_in_cents`` should be issued against.

        Candidates are the charges for the payment at least as large as the
        requested amount. The refund is allowed if those candidates, less
        everything already refunded for the payment, still cover it. The
        first candidate is returned whichever charge made the refund possible.
        """
        candidates_query = (
            select(Transaction)
            .where(
                Transaction.api_call == ApiCall.CHARGE,
                Transaction.kb_payment_id == kb_payment_id,
                Transaction.amount_in_cents >= amount_in_cents,
            )
            .order_by(Transaction.id)
        )
        transactions = list(self.db.scalars(candidates_query))
        if not transactions:
            if self._has_charges(kb_payment_id):
                raise NoRefundableChargeError(
                    f"Amount {amount_in_cents} too large to refund for payment {kb_payment_id}: no charge that large"
                )
            raise NotFoundError(f"Unable to find Litle transaction id for payment {kb_payment_id}")

        refunded_query = select(func.coalesce(func.sum(Transaction.amount_in_cents), 0)).where(
            Transaction.api_call == ApiCall.REFUND,
            Transaction.kb_payment_id == kb_payment_id,
        )
        amount_refunded_in_cents = self.db.scalar(refunded_query)

        amount_left_to_refund_in_cents = -amount_refunded_in_cents
        for transaction in transactions:
            amount_left_to_refund_in_cents += transaction.amount_in_cents
        if amount_left_to_refund_in_cents < amount_in_cents:
            raise RefundLimitExceededError(f"Amount {amount_in_cents} too large to refund for payment {kb_payment_id}")

        logger.info(
            "Refund of %s for payment %s goes against transaction %s (%s left to refund)",
            amount_in_cents, kb_payment_id, transactions[0].litle_txn_id, amount_left_to_refund_in_cents,
        )
        return transactions[0]

    def _has_charges(self, kb_payment_id: str) -> bool:
        query = select(func.count(Transaction.id)).where(
            Transaction.api_call == ApiCall.CHARGE,
            Transaction.kb_payment_id == kb_payment_id,
        )
        return self.db.scalar(query) > 0
