"""
Statement exporters.

Both exporters work only on canonical `Transaction`s and never filter or
reorder them. The plain dialect is a simple ledger; the YNAB dialect splits
the amount into Outflow/Inflow columns and annotates installment purchases
in the memo.
"""
import csv
import io
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .card_json import parse_card_statement
from .classifier import classify_account_lines, classify_card_entries
from .fixed_width import DEFAULT_ENCODING, parse_account_statement
from .models import Transaction
from .utils import format_amount

CSV_FIELDS = ['Date', 'Amount', 'Description']
YNAB_CSV_FIELDS = ['Date', 'Payee', 'Category', 'Memo', 'Outflow', 'Inflow']


def _render(fieldnames: List[str], rows: Iterable[Sequence[Any]]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(fieldnames)
    writer.writerows(rows)
    return output.getvalue()


def _side(value: Decimal) -> str:
    # The empty side of an Outflow/Inflow pair is a bare 0.
    return format_amount(value) if value else '0'


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions as `Date,Amount,Description` CSV."""
    return _render(CSV_FIELDS, (
        [t.date.isoformat(), format_amount(t.amount), t.description]
        for t in transactions
    ))


def transactions_to_ynab_csv(transactions: Iterable[Transaction]) -> str:
    """
    Render transactions as YNAB import CSV.

    Outflow holds the size of negative amounts and Inflow the positive ones,
    so at most one of them is non-zero per row.
    """
    return _render(YNAB_CSV_FIELDS, (
        [t.date.isoformat(), t.description, '', t.memo, _side(t.outflow), _side(t.inflow)]
        for t in transactions
    ))


def account_statement_to_transactions(
    report: Union[str, bytes],
    today: Optional[date] = None,
    encoding: str = DEFAULT_ENCODING,
) -> List[Transaction]:
    """Parse and classify a deposit account report."""
    return classify_account_lines(parse_account_statement(report, encoding), today=today)


def card_statement_to_transactions(
    payload: Union[str, bytes, Dict[str, Any]],
    currency: str,
    today: Optional[date] = None,
) -> List[Transaction]:
    """Parse and classify the `currency` movements of a credit card statement."""
    return classify_card_entries(parse_card_statement(payload, currency), today=today)
