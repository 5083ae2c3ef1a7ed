import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, func

from litle_plugin.database import Base
from litle_plugin.responses import (
    CardToken,
    PaymentMethodInfoResponse,
    PaymentMethodKVInfo,
    PaymentMethodResponse,
    TransactionResponse,
)


class ApiCall(str, enum.Enum):
    CHARGE = "charge"
    REFUND = "refund"


class PaymentMethod(Base):
    __tablename__ = "litle_payment_methods"

    id = Column(Integer, primary_key=True, autoincrement=True)
    kb_account_id = Column(String, index=True)
    kb_payment_method_id = Column(String, index=True)
    litle_token = Column(String)                   # also the external payment method id
    cc_first_name = Column(String)
    cc_last_name = Column(String)
    cc_type = Column(String)
    cc_exp_month = Column(Integer)
    cc_exp_year = Column(Integer)
    cc_last_4 = Column(Integer)
    address1 = Column(String)
    address2 = Column(String)
    city = Column(String)
    state = Column(String)
    zip = Column(String)
    country = Column(String)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    @property
    def external_payment_method_id(self):
        return self.litle_token

    @property
    def is_default(self) -> bool:
        # No concept of default payment method in Litle
        return False

    @property
    def cc_name(self):
        if self.cc_first_name and self.cc_last_name:
            return f"{self.cc_first_name} {self.cc_last_name}"
        if self.cc_first_name:
            return self.cc_first_name
        if self.cc_last_name:
            return self.cc_last_name
        return None

    def properties(self) -> list[PaymentMethodKVInfo]:
        values = [
            ("token", self.external_payment_method_id),
            ("ccName", self.cc_name),
            ("ccType", self.cc_type),
            ("ccExpirationMonth", self.cc_exp_month),
            ("ccExpirationYear", self.cc_exp_year),
            ("ccLast4", self.cc_last_4),
            ("address1", self.address1),
            ("address2", self.address2),
            ("city", self.city),
            ("state", self.state),
            ("zip", self.zip),
            ("country", self.country),
        ]
        return [PaymentMethodKVInfo(key=key, value=value) for key, value in values]

    def to_payment_method_response(self) -> PaymentMethodResponse:
        return PaymentMethodResponse(
            kb_payment_method_id=self.kb_payment_method_id,
            external_payment_method_id=self.external_payment_method_id,
            is_default_payment_method=self.is_default,
            properties=self.properties(),
            cc_name=self.cc_name,
            cc_type=self.cc_type,
            cc_expiration_month=self.cc_exp_month,
            cc_expiration_year=self.cc_exp_year,
            cc_last4=self.cc_last_4,
            address1=self.address1,
            address2=self.address2,
            city=self.city,
            state=self.state,
            zip=self.zip,
            country=self.country,
        )

    def to_payment_method_info_response(self) -> PaymentMethodInfoResponse:
        return PaymentMethodInfoResponse(
            account_id=self.kb_account_id,
            payment_method_id=self.kb_payment_method_id,
            external_payment_method_id=self.external_payment_method_id,
            is_default=self.is_default,
        )

    def to_card_token(self) -> CardToken:
        return CardToken(token=self.litle_token, month=self.cc_exp_month, year=self.cc_exp_year)


class Transaction(Base):
    __tablename__ = "litle_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    litle_response_id = Column(Integer, nullable=True)  # gateway response record, if any
    kb_payment_id = Column(String, index=True, nullable=False)
    api_call = Column(Enum(ApiCall, values_callable=lambda e: [m.value for m in e]), nullable=False)
    litle_txn_id = Column(String)
    amount_in_cents = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    def to_transaction_response(self) -> TransactionResponse:
        return TransactionResponse(
            id=self.id,
            kb_payment_id=self.kb_payment_id,
            api_call=ApiCall(self.api_call).value,
            litle_txn_id=self.litle_txn_id,
            amount_in_cents=self.amount_in_cents,
        )
