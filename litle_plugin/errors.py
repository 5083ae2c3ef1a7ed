class PaymentLookupError(Exception):
    """
    Base class for lookup and refund failures. These are fatal to the
    calling operation: raised immediately, never retried.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PaymentLookupError):
    """Zero rows where exactly one was required."""


class AmbiguousStateError(PaymentLookupError):
    """More than one active row where uniqueness was assumed."""


class RefundLimitExceededError(PaymentLookupError):
    """Requested refund exceeds what remains refundable."""


class NoRefundableChargeError(NotFoundError, RefundLimitExceededError):
    """The payment has charges, but none as large as the requested refund."""
