"""
Credit card statement parser.

Card movements come as a JSON document with the entries nested under
`itaulink_msg.data.datos.datosMovimientos.movimientos`. Every entry is
validated; a missing path or a bad entry fails the whole statement.
"""
import json
import logging
from decimal import Decimal
from typing import Any, Dict, List, Union

from pydantic import ValidationError

from .errors import MalformedPayload
from .models import RawCardEntry

logger = logging.getLogger(__name__)

MOVEMENTS_PATH = ("itaulink_msg", "data", "datos", "datosMovimientos", "movimientos")


def load_card_payload(payload: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Decode the raw payload. Fractional numbers are read as Decimal.
    """
    if isinstance(payload, dict):
        return payload
    try:
        document = json.loads(payload, parse_float=Decimal)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedPayload(f"Credit card statement is not valid JSON: {e}") from e
    if not isinstance(document, dict):
        raise MalformedPayload("Credit card statement must be a JSON object")
    return document


def extract_movements(document: Dict[str, Any]) -> List[Any]:
    """Walk the nested document down to the `movimientos` list."""
    node: Any = document
    for depth, key in enumerate(MOVEMENTS_PATH):
        if not isinstance(node, dict) or key not in node:
            path = ".".join(MOVEMENTS_PATH[:depth + 1])
            raise MalformedPayload(f"Credit card statement has no '{path}'")
        node = node[key]

    if not isinstance(node, list):
        raise MalformedPayload(f"'movimientos' must be a list, got {type(node).__name__}")
    return node


def parse_card_entry(raw: Any, index: int = 0) -> RawCardEntry:
    if not isinstance(raw, dict):
        raise MalformedPayload(f"Movement #{index} is not an object")
    try:
        return RawCardEntry.model_validate(raw)
    except ValidationError as e:
        raise MalformedPayload(f"Movement #{index} is malformed: {e}") from e


def parse_card_statement(payload: Union[str, bytes, Dict[str, Any]], currency: str) -> List[RawCardEntry]:
    """
    Parse a credit card statement and keep the entries in `currency`.

    All entries are validated before the currency filter, so a malformed entry
    in another currency still fails the statement. No conversion between
    currencies takes place.
    """
    movements = extract_movements(load_card_payload(payload))
    entries = [parse_card_entry(raw, index) for index, raw in enumerate(movements)]
    selected = [entry for entry in entries if entry.currency == currency]

    logger.debug(f"Parsed {len(entries)} card movements, {len(selected)} in {currency}")
    return selected
