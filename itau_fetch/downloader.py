import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional

from .config import Config, settings
from .errors import RetrievalError
from .export import (
    account_statement_to_transactions,
    card_statement_to_transactions,
    transactions_to_csv,
    transactions_to_ynab_csv,
)
from .models import Account, CreditCard, Transaction
from .utils import CSVWriter

logger = logging.getLogger(__name__)

# The bank only honours this value for "recent movements" reports.
RECENT_DAYS = 5


class ItauDownloader:
    """
    Downloads Itau statements and exports them as CSV.

    This class builds the statement URLs, retrieves the raw reports through an
    already authenticated request context and hands them to the conversion
    core. Login and account discovery happen elsewhere: the accounts and cards
    come from the configuration and the session headers are baked into the
    request context.

    `request_context` is anything with a `get(url)` method returning a response
    with `ok`, `status`, `status_text` and `body()`, such as a Playwright
    `APIRequestContext`. `cache` maps URLs to response bodies and is consulted
    before every request, so a card statement downloaded for one currency is
    reused for the next.
    """

    def __init__(
        self,
        config: Config = settings,
        request_context: Any = None,
        cache: Optional[MutableMapping[str, bytes]] = None,
    ):
        self.config = config
        self.request_context = request_context
        self.cache: MutableMapping[str, bytes] = {} if cache is None else cache

    def account_url(self, account: Account) -> str:
        return f"{self.config.base_url}/cuentas/{account.type}/{account.hash}"

    def account_statement_url(
        self,
        account: Account,
        year: Optional[int] = None,
        month: Optional[int] = None,
        fmt: str = "TXT",
    ) -> str:
        """
        Report URL for a calendar month, or for the last few days when no
        month is given.
        """
        url = f"{self.account_url(account)}/reporteEstadoCta/{fmt}"
        if year and month:
            return f"{url}?anio={year}&mes={month}"
        return f"{url}?diasAtras={RECENT_DAYS}"

    def card_url(self, card: CreditCard) -> str:
        return f"{self.config.base_url}/tarjetas/credito/{card.hash}/movimientos_actuales"

    def card_statement_url(self, card: CreditCard, year: Optional[int] = None, month: Optional[int] = None) -> str:
        now = datetime.now()
        year = year or now.year
        month = month or now.month
        return f"{self.card_url(card)}/{year}{month}00"

    def fetch(self, url: str) -> bytes:
        """
        Return the body at `url`, downloading it only on a cache miss.
        """
        if url in self.cache:
            return self.cache[url]

        if self.request_context is None:
            raise RuntimeError("No request context configured for downloads")

        logger.info(f"Downloading from: {url}")
        response = self.request_context.get(url)
        if not response.ok:
            raise RetrievalError(url, response.status, response.status_text)

        body = response.body()
        self.cache[url] = body
        return body

    def account_transactions(
        self,
        account: Account,
        year: Optional[int] = None,
        month: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[Transaction]:
        report = self.fetch(self.account_statement_url(account, year, month))
        return account_statement_to_transactions(report, today=today)

    def card_transactions(
        self,
        card: CreditCard,
        currency: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[Transaction]:
        payload = self.fetch(self.card_statement_url(card, year, month))
        return card_statement_to_transactions(payload, currency, today=today)

    def export_account(self, account: Account, year=None, month=None, ynab: bool = False, today=None) -> str:
        transactions = self.account_transactions(account, year, month, today=today)
        return self._render(transactions, ynab)

    def export_card(self, card: CreditCard, currency: str, year=None, month=None, ynab: bool = False, today=None) -> str:
        transactions = self.card_transactions(card, currency, year, month, today=today)
        return self._render(transactions, ynab)

    def _render(self, transactions: List[Transaction], ynab: bool) -> str:
        if ynab:
            return transactions_to_ynab_csv(transactions)
        return transactions_to_csv(transactions)

    @staticmethod
    def output_filename(*parts: Any) -> str:
        """Join the non-empty name parts with dashes, e.g. `savings-123-UYU-2024-1.csv`."""
        return "-".join(str(p) for p in parts if p is not None) + ".csv"

    def save_account(self, account: Account, year=None, month=None, ynab: bool = False, today=None) -> Path:
        csv_text = self.export_account(account, year, month, ynab=ynab, today=today)
        filename = self.output_filename(account.filename, year, month)
        return CSVWriter(self.config.transactions_path).write(csv_text, filename)

    def save_card(self, card: CreditCard, currency: str, year=None, month=None, ynab: bool = False, today=None) -> Path:
        csv_text = self.export_card(card, currency, year, month, ynab=ynab, today=today)
        filename = self.output_filename(card.filename, currency, year, month)
        return CSVWriter(self.config.transactions_path).write(csv_text, filename)

    def unique_cards(self) -> List[CreditCard]:
        """Configured cards, keeping only the first card of each card account."""
        seen: Dict[str, CreditCard] = {}
        for card in self.config.credit_cards:
            seen.setdefault(card.account, card)
        return list(seen.values())

    def run(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        ynab: Optional[bool] = None,
        accounts: bool = True,
        cards: bool = True,
    ) -> List[Path]:
        """
        Export every configured account, then every card once per currency.

        Returns the paths of the written files.
        """
        ynab = self.config.ynab if ynab is None else ynab
        written = []

        if accounts:
            logger.info(f"Exporting {len(self.config.accounts)} accounts...")
            for account in self.config.accounts:
                path = self.save_account(account, year, month, ynab=ynab)
                logger.info(f"{path.name} exported")
                written.append(path)

        if cards:
            unique_cards = self.unique_cards()
            logger.info(f"Exporting {len(unique_cards)} credit cards...")
            for card in unique_cards:
                for currency in self.config.currencies:
                    path = self.save_card(card, currency, year, month, ynab=ynab)
                    logger.info(f"{path.name} exported")
                    written.append(path)

        return written
