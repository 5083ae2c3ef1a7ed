"""Response shapes required by the host billing system's plugin contract."""

from typing import Any, List, Optional

from pydantic import BaseModel


class PaymentMethodKVInfo(BaseModel):
    key: str
    value: Optional[Any] = None


class PaymentMethodResponse(BaseModel):
    kb_payment_method_id: Optional[str] = None
    external_payment_method_id: Optional[str] = None
    is_default_payment_method: bool = False
    type: str = "CreditCard"
    cc_name: Optional[str] = None
    cc_type: Optional[str] = None
    cc_expiration_month: Optional[int] = None
    cc_expiration_year: Optional[int] = None
    cc_last4: Optional[int] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    properties: List[PaymentMethodKVInfo] = []


class PaymentMethodInfoResponse(BaseModel):
    account_id: Optional[str] = None
    payment_method_id: Optional[str] = None
    external_payment_method_id: Optional[str] = None
    is_default: bool = False


class CardToken(BaseModel):
    token: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None


class TransactionResponse(BaseModel):
    id: int
    kb_payment_id: str
    api_call: str
    litle_txn_id: Optional[str] = None
    amount_in_cents: int


class SearchResponse(BaseModel):
    current_offset: int
    next_offset: Optional[int] = None
    total_nb_records: int
    max_nb_records: int
    records: List[PaymentMethodResponse]
