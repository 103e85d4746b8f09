import datetime
from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator, model_validator

from .errors import UnparseableDate

"""
Data Models for Itau Fetch

This module defines the records that flow through the statement conversion.
All of them are frozen pydantic models: they are built once per parse call,
compared structurally and never mutated.

Key Classes:
- Transaction: The canonical transaction both statement formats converge on.
- RawAccountLine: One decomposed line of the fixed-width deposit account report.
- RawCardEntry: One validated entry of the credit card JSON movements list.
- Account / CreditCard: Descriptors of the statement sources to download.
"""

INSTALLMENT_PLAN_TYPE = "Plan Pagos"


class Transaction(BaseModel):
    """
    A single exported transaction.

    Deposit account lines and credit card entries are both turned into this
    record, so exporters never need to know which format a transaction came
    from. Negative amounts are money leaving the account or charged to the card.
    """
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    amount: Decimal
    description: str
    installment_number: Optional[int] = Field(default=None, gt=0)
    installment_count: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_installments(self) -> "Transaction":
        if (self.installment_number is None) != (self.installment_count is None):
            raise ValueError("installment_number and installment_count must be given together")
        return self

    @property
    def has_installments(self) -> bool:
        return self.installment_number is not None

    @property
    def installment_suffix(self) -> str:
        """' N/M' for installment plan purchases, empty otherwise."""
        if not self.has_installments:
            return ""
        return f" {self.installment_number}/{self.installment_count}"

    @property
    def memo(self) -> str:
        return self.description + self.installment_suffix

    @property
    def outflow(self) -> Decimal:
        return -self.amount if self.amount < 0 else Decimal(0)

    @property
    def inflow(self) -> Decimal:
        return self.amount if self.amount > 0 else Decimal(0)


class RawAccountLine(BaseModel):
    """
    Positional decomposition of one deposit account report line.

    `segments` keeps the seven raw segments exactly as they were cut from the
    line. `date` is None when the date segment does not parse; header and
    balance lines are allowed to carry such segments because they are
    discarded before their date is needed.
    """
    model_config = ConfigDict(frozen=True)

    segments: Tuple[str, str, str, str, str, str, str]
    date: Optional[datetime.date] = None
    credit: Decimal = Decimal(0)
    debit: Decimal = Decimal(0)

    @property
    def code(self) -> str:
        return self.segments[0]

    @property
    def sub_code(self) -> str:
        return self.segments[1]

    @property
    def date_text(self) -> str:
        return self.segments[2]

    @property
    def kind(self) -> str:
        return self.segments[3]

    @property
    def description(self) -> str:
        return self.segments[6]

    @property
    def amount(self) -> Decimal:
        # Fifth field minus sixth field.
        return self.credit - self.debit


class CardDate(BaseModel):
    """The structured `fecha` object of a credit card entry."""
    model_config = ConfigDict(frozen=True)

    year: StrictInt
    month: StrictInt = Field(alias="monthOfYear")
    day: StrictInt = Field(alias="dayOfMonth")

    @model_validator(mode="after")
    def _check_calendar_date(self) -> "CardDate":
        self.to_date()
        return self

    def to_date(self) -> datetime.date:
        try:
            return datetime.date(self.year, self.month, self.day)
        except ValueError as e:
            text = f"{self.year}-{self.month}-{self.day}"
            raise UnparseableDate(f"Invalid card transaction date {text}: {e}", text) from e


class RawCardEntry(BaseModel):
    """
    One element of the `movimientos` list of a credit card statement.

    Field aliases are the Spanish keys used by the bank. Installment fields are
    only required (and only meaningful) for installment plan entries. Amounts
    must be JSON numbers and installment fields JSON integers.
    """
    model_config = ConfigDict(frozen=True)

    currency: StrictStr = Field(alias="moneda")
    posted: CardDate = Field(alias="fecha")
    merchant_amount: Decimal = Field(alias="importe")
    merchant: StrictStr = Field(alias="nombreComercio")
    type: StrictStr = Field(alias="tipo")
    installment_number: Optional[StrictInt] = Field(default=None, alias="nroCuota")
    installment_count: Optional[StrictInt] = Field(default=None, alias="cantCuotas")

    @field_validator("merchant_amount", mode="before")
    @classmethod
    def _json_number(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError(f"importe must be a number, got {type(value).__name__}")
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @model_validator(mode="after")
    def _check_installment_plan(self) -> "RawCardEntry":
        if self.is_installment_plan:
            for name in ("installment_number", "installment_count"):
                value = getattr(self, name)
                if value is None or value <= 0:
                    raise ValueError(f"installment plan entry has invalid {name}: {value!r}")
        return self

    @property
    def is_installment_plan(self) -> bool:
        return self.type == INSTALLMENT_PLAN_TYPE

    @property
    def amount(self) -> Decimal:
        # Merchant charges are positive in the payload; charges are negative here.
        return -self.merchant_amount


class Account(BaseModel):
    """A deposit account whose fixed-width report can be downloaded."""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    type_name: str
    type: str
    hash: str
    currency: str
    number: str

    @property
    def filename(self) -> str:
        return f"{self.type_name}-{self.number}-{self.currency}"


class CreditCard(BaseModel):
    """A credit card whose JSON movements can be downloaded."""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    brand: str = ""
    owner_id: str
    hash: str
    account: str
    id: str

    @property
    def filename(self) -> str:
        return "-".join(["credit_card", self.id, self.owner_id])
