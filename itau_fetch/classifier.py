"""
Transaction classification.

Decides which raw statement records are real transactions and turns them
into canonical `Transaction`s. Records are dropped when their description
is a known header or balance label, or when they are dated after `today`
(pending entries). Input order is preserved.
"""
import logging
import re
from datetime import date
from typing import Iterable, List, Optional, Sequence

from .errors import UnparseableDate
from .models import RawAccountLine, RawCardEntry, Transaction
from .utils import TransactionNormalizer

logger = logging.getLogger(__name__)

# Report table header and opening/closing balance markers.
ACCOUNT_EXCLUDED = [
    re.compile(r'CONCEPTO'),
    re.compile(r'SALDO INICIAL'),
    re.compile(r'SALDO FINAL'),
]

# "Recibo de Pago" is last month's balance carried forward. Actual payments
# show up as "RECIBO DE PAGO", so the match is exact and case-sensitive.
# It cannot tell every carried balance from a payment.
CARD_EXCLUDED = [
    re.compile(r'Recibo de Pago'),
]


def _matches_any(description: str, patterns: Sequence[re.Pattern]) -> bool:
    text = description.strip()
    return any(p.fullmatch(text) for p in patterns)


def is_account_transaction(description: str) -> bool:
    return not _matches_any(description, ACCOUNT_EXCLUDED)


def is_card_transaction(description: str) -> bool:
    return not _matches_any(description, CARD_EXCLUDED)


def classify_account_lines(lines: Iterable[RawAccountLine], today: Optional[date] = None) -> List[Transaction]:
    """
    Turn deposit account report lines into transactions.

    Lines with an excluded description never need a date. Any other line
    whose date segment did not parse raises UnparseableDate.
    """
    today = today or date.today()
    transactions = []
    for line in lines:
        description = TransactionNormalizer.clean_description(line.description)
        if not is_account_transaction(description):
            continue
        if line.date is None:
            raise UnparseableDate(f"Invalid date {line.date_text!r} for {description!r}", line.date_text)
        if line.date > today:
            logger.debug(f"Skipping future dated line {line.date} {description}")
            continue
        transactions.append(Transaction(date=line.date, amount=line.amount, description=description))
    return transactions


def classify_card_entries(entries: Iterable[RawCardEntry], today: Optional[date] = None) -> List[Transaction]:
    """
    Turn credit card entries into transactions.

    The merchant amount is negated so charges come out negative. Installment
    fields are carried over only for installment plan entries.
    """
    today = today or date.today()
    transactions = []
    for entry in entries:
        posted = entry.posted.to_date()
        description = TransactionNormalizer.clean_description(entry.merchant)
        if not is_card_transaction(description):
            continue
        if posted > today:
            logger.debug(f"Skipping future dated movement {posted} {description}")
            continue

        installment_number = installment_count = None
        if entry.is_installment_plan:
            installment_number = entry.installment_number
            installment_count = entry.installment_count

        transactions.append(Transaction(
            date=posted,
            amount=entry.amount,
            description=description,
            installment_number=installment_number,
            installment_count=installment_count,
        ))
    return transactions
