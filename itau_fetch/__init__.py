"""
itau_fetch package.

This package converts Itau (Uruguay) statements into CSV. Deposit account
reports arrive as fixed-width text and credit card movements as JSON; both
are normalized into one `Transaction` type and exported either as a plain
ledger CSV or as a YNAB import CSV. `ItauDownloader` retrieves the raw
statements for the configured accounts and cards.
"""
from .models import Transaction, Account, CreditCard, RawAccountLine, RawCardEntry
from .errors import ItauFetchError, MalformedPayload, UnparseableDate, RetrievalError
from .config import settings, Config
from .fixed_width import parse_account_line, parse_account_statement
from .card_json import parse_card_statement
from .classifier import classify_account_lines, classify_card_entries
from .export import (
    transactions_to_csv,
    transactions_to_ynab_csv,
    account_statement_to_transactions,
    card_statement_to_transactions,
)
from .downloader import ItauDownloader

__all__ = [
    "Transaction",
    "Account",
    "CreditCard",
    "RawAccountLine",
    "RawCardEntry",
    "ItauFetchError",
    "MalformedPayload",
    "UnparseableDate",
    "RetrievalError",
    "settings",
    "Config",
    "parse_account_line",
    "parse_account_statement",
    "parse_card_statement",
    "classify_account_lines",
    "classify_card_entries",
    "transactions_to_csv",
    "transactions_to_ynab_csv",
    "account_statement_to_transactions",
    "card_statement_to_transactions",
    "ItauDownloader",
]
