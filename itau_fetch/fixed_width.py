"""
Deposit account report parser.

The bank exports checking and savings account statements as a plain text
report where every line is cut into positional fields:

    code(7) sub_code(4) date(7) kind(2) credit(15) debit(15) description(rest)

Fields are sliced by position, never by delimiter. A line shorter than the
fixed part simply yields empty trailing fields.
"""
import logging
from typing import List, Sequence, Tuple, Union

from .models import RawAccountLine
from .utils import TransactionNormalizer

logger = logging.getLogger(__name__)

FIELD_WIDTHS = (7, 4, 7, 2, 15, 15)
DEFAULT_ENCODING = "latin-1"


def split_account_line(line: str) -> Tuple[str, ...]:
    """Cut one report line into its seven raw segments."""
    segments = []
    position = 0
    for width in FIELD_WIDTHS:
        segments.append(line[position:position + width])
        position += width
    segments.append(line[position:])
    return tuple(segments)


def parse_account_fields(segments: Sequence[str]) -> RawAccountLine:
    """
    Build a RawAccountLine from already separated segments.

    Amount segments that are not numeric (headers, footers) read as zero.
    An unparseable date segment is kept as text with `date` left unset.
    """
    if len(segments) != len(FIELD_WIDTHS) + 1:
        raise ValueError(f"Expected {len(FIELD_WIDTHS) + 1} segments, got {len(segments)}")

    return RawAccountLine(
        segments=tuple(segments),
        date=TransactionNormalizer.parse_statement_date(segments[2]),
        credit=TransactionNormalizer.parse_decimal(segments[4]),
        debit=TransactionNormalizer.parse_decimal(segments[5]),
    )


def parse_account_line(line: str) -> RawAccountLine:
    return parse_account_fields(split_account_line(line.rstrip("\r\n")))


def parse_account_statement(report: Union[str, bytes], encoding: str = DEFAULT_ENCODING) -> List[RawAccountLine]:
    """
    Parse a whole deposit account report into raw lines, in report order.

    Bytes are decoded with `encoding`; the default keeps one character per
    byte so positions match the report layout. Blank lines are skipped.
    """
    if isinstance(report, bytes):
        report = report.decode(encoding)

    lines = []
    for line in report.split("\n"):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        lines.append(parse_account_line(line))

    logger.debug(f"Parsed {len(lines)} report lines")
    return lines
