from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from litle_plugin.auth import verify_token
from litle_plugin.config import settings
from litle_plugin.database import get_db
from litle_plugin.payment_methods import PaymentMethodStore
from litle_plugin.responses import (
    PaymentMethodInfoResponse,
    PaymentMethodResponse,
    SearchResponse,
    TransactionResponse,
)
from litle_plugin.transactions import TransactionStore

router = APIRouter(dependencies=[Depends(verify_token)])


def _coerce_search_key(search_key: str):
    # Query strings are always text; decimal keys also search the numeric card columns
    return int(search_key) if search_key.isdecimal() else search_key


@router.get("/payment-methods/search", response_model=SearchResponse)
def search_payment_methods(
    search_key: str,
    offset: int = Query(0, ge=0),
    limit: int = Query(settings.SEARCH_DEFAULT_LIMIT, ge=1),
    db: Session = Depends(get_db),
):
    pagination = PaymentMethodStore(db).search(_coerce_search_key(search_key), offset, limit)
    return SearchResponse(
        current_offset=pagination.current_offset,
        next_offset=pagination.next_offset,
        total_nb_records=pagination.total_nb_records,
        max_nb_records=pagination.max_nb_records,
        records=list(pagination.iterator),
    )


@router.get("/accounts/{kb_account_id}/payment-methods", response_model=List[PaymentMethodInfoResponse])
def account_payment_methods(kb_account_id: str, db: Session = Depends(get_db)):
    payment_methods = PaymentMethodStore(db).from_kb_account_id(kb_account_id)
    return [pm.to_payment_method_info_response() for pm in payment_methods]


@router.get("/payment-methods/{kb_payment_method_id}", response_model=PaymentMethodResponse)
def get_payment_method(kb_payment_method_id: str, db: Session = Depends(get_db)):
    return PaymentMethodStore(db).from_kb_payment_method_id(kb_payment_method_id).to_payment_method_response()


@router.get("/payment-methods/{kb_payment_method_id}/info", response_model=PaymentMethodInfoResponse)
def get_payment_method_info(kb_payment_method_id: str, db: Session = Depends(get_db)):
    return PaymentMethodStore(db).from_kb_payment_method_id(kb_payment_method_id).to_payment_method_info_response()


@router.delete("/payment-methods/{kb_payment_method_id}")
def delete_payment_method(kb_payment_method_id: str, db: Session = Depends(get_db)):
    PaymentMethodStore(db).mark_as_deleted(kb_payment_method_id)
    return {"status": "deleted"}


@router.get("/payments/{kb_payment_id}/charge", response_model=TransactionResponse)
def get_charge(kb_payment_id: str, db: Session = Depends(get_db)):
    return TransactionStore(db).from_kb_payment_id(kb_payment_id).to_transaction_response()


@router.get("/payments/{kb_payment_id}/refund", response_model=TransactionResponse)
def get_refund(kb_payment_id: str, db: Session = Depends(get_db)):
    return TransactionStore(db).refund_from_kb_payment_id(kb_payment_id).to_transaction_response()


@router.get("/payments/{kb_payment_id}/refund-candidate", response_model=TransactionResponse)
def get_refund_candidate(
    kb_payment_id: str,
    amount_in_cents: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    store = TransactionStore(db)
    return store.find_candidate_transaction_for_refund(kb_payment_id, amount_in_cents).to_transaction_response()
