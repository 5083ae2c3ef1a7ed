"""
Query building for payment method search.

Exact match for litle_token, cc_type, state and zip, partial match for the
name and address columns. Numeric keys additionally match cc_exp_month,
cc_exp_year and cc_last_4 exactly. Soft-deleted rows never match.
"""

import numbers

from sqlalchemy import distinct, false, func, or_, select

from litle_plugin.models import PaymentMethod

EXACT_MATCH_COLUMNS = (
    PaymentMethod.litle_token,
    PaymentMethod.cc_type,
    PaymentMethod.state,
    PaymentMethod.zip,
)

SUBSTRING_MATCH_COLUMNS = (
    PaymentMethod.cc_first_name,
    PaymentMethod.cc_last_name,
    PaymentMethod.address1,
    PaymentMethod.address2,
    PaymentMethod.city,
    PaymentMethod.country,
)

NUMERIC_MATCH_COLUMNS = (
    PaymentMethod.cc_exp_month,
    PaymentMethod.cc_exp_year,
    PaymentMethod.cc_last_4,
)


# Range of the INTEGER card columns; larger keys cannot match them
INTEGER_MIN = -2 ** 31
INTEGER_MAX = 2 ** 31 - 1


def is_numeric(search_key) -> bool:
    return isinstance(search_key, numbers.Number) and not isinstance(search_key, bool)


def matches_numeric_columns(search_key) -> bool:
    return is_numeric(search_key) and INTEGER_MIN <= search_key <= INTEGER_MAX


def search_predicate(search_key):
    text = str(search_key)
    clauses = [column == text for column in EXACT_MATCH_COLUMNS]
    clauses += [column.contains(text, autoescape=True) for column in SUBSTRING_MATCH_COLUMNS]
    if matches_numeric_columns(search_key):
        clauses += [column == search_key for column in NUMERIC_MATCH_COLUMNS]
    return (PaymentMethod.is_deleted == false()) & or_(*clauses)


def count_query(search_key):
    return select(func.count(distinct(PaymentMethod.id))).where(search_predicate(search_key))


def page_query(search_key, offset=None, limit=None):
    query = (
        select(PaymentMethod)
        .where(search_predicate(search_key))
        .order_by(PaymentMethod.id)
        .distinct()
    )
    if offset is not None:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query
