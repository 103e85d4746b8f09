"""Shared fixtures and statement builders for the itau_fetch tests."""

import json
from datetime import date

import pytest


def make_line(code="1234567", sub_code="0001", posted="05JAN24", kind="01",
              credit="", debit="", description=""):
    """Build one fixed-width deposit account report line."""
    return f"{code:<7}{sub_code:<4}{posted:<7}{kind:<2}{credit:>15}{debit:>15}{description}"


def movement(merchant="SUPERMARKET", importe=500.00, moneda="Pesos", tipo="Compra",
             posted=(2024, 2, 10), **extra):
    """Build one credit card movement as found in the JSON statement."""
    year, month, day = posted
    entry = {
        "moneda": moneda,
        "fecha": {"year": year, "monthOfYear": month, "dayOfMonth": day},
        "importe": importe,
        "nombreComercio": merchant,
        "tipo": tipo,
    }
    entry.update(extra)
    return entry


def card_payload(movements):
    return json.dumps({
        "itaulink_msg": {"data": {"datos": {"datosMovimientos": {"movimientos": movements}}}}
    })


@pytest.fixture
def today():
    return date(2024, 2, 20)


@pytest.fixture
def account_report():
    """A small report with a header, balances, a future line and two movements."""
    lines = [
        make_line(code="", sub_code="", posted="", kind="", credit="CREDITOS", debit="DEBITOS",
                  description="CONCEPTO"),
        make_line(posted="01FEB24", credit="000000001000.00", description="SALDO INICIAL"),
        make_line(posted="05FEB24", credit="000000000000100", debit="000000000000000",
                  description="PAYMENT   RECEIVED  "),
        make_line(posted="10FEB24", credit="000000000000000", debit="000000000250.50",
                  description="COMPRA  SUPERMERCADO"),
        make_line(posted="25FEB24", debit="000000000010.00", description="PENDING DEBIT"),
        make_line(posted="29FEB24", credit="000000000849.50", description="SALDO FINAL"),
    ]
    return "\r\n".join(lines) + "\r\n"


@pytest.fixture
def card_statement():
    return card_payload([
        movement("Recibo de Pago", importe=-1500.00),
        movement("SUPERMARKET", importe=500.00),
        movement("RECIBO DE PAGO", importe=-1200.00),
        movement("TIENDA  INGLESA ", importe=1250.50, tipo="Plan Pagos", nroCuota=3, cantCuotas=12),
        movement("AMAZON", importe=19.99, moneda="Dolares", posted=(2024, 2, 12)),
        movement("FUTURE SHOP", importe=80.00, posted=(2024, 3, 1)),
    ])
