import logging
import re
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Leading number as read by the report: sign, digits, optional fraction.
_LEADING_NUMBER = re.compile(r'\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))')

# Spanish month abbreviations that differ from the English ones.
_SPANISH_MONTHS = {
    'ENE': 'JAN',
    'ABR': 'APR',
    'AGO': 'AUG',
    'SET': 'SEP',
    'DIC': 'DEC',
}


class TransactionNormalizer:
    """
    Utility class for standardizing statement fields.

    This class provides static methods to clean descriptions and to turn the
    text segments of the deposit account report into dates and decimals.
    """

    @staticmethod
    def clean_description(description: str) -> str:
        """
        Collapse runs of whitespace into a single space and trim the ends.
        """
        if not description:
            return ""
        return re.sub(r'\s+', ' ', str(description)).strip()

    @staticmethod
    def parse_decimal(text: str) -> Decimal:
        """
        Read the leading number of a fixed-width amount segment.

        Header and footer lines carry labels where amounts would be, so
        anything without a leading number is read as zero instead of failing.
        Amounts are kept as Decimal to avoid cent drift.
        """
        match = _LEADING_NUMBER.match(text or "")
        if not match:
            return Decimal(0)
        number = match.group(1)
        if number.endswith('.'):
            number = number[:-1]
        return Decimal(number)

    @staticmethod
    def parse_statement_date(text: str) -> Optional[date]:
        """
        Parse the date segment of a deposit account report line.

        Returns None when the segment is not a date. Supported forms are
        YYYYMMDD, YYMMDD, YYYY-MM-DD, DD/MM/YY, DD/MM/YYYY and DDMMMYY with
        English or Spanish month abbreviations.
        """
        value = (text or "").strip().upper()
        if not value:
            return None

        if re.fullmatch(r'\d{8}', value):
            formats = ['%Y%m%d']
        elif re.fullmatch(r'\d{6}', value):
            formats = ['%y%m%d']
        else:
            month = re.fullmatch(r'(\d{1,2})([A-Z]{3})(\d{2}|\d{4})', value)
            if month:
                day, name, year = month.groups()
                value = f"{day}{_SPANISH_MONTHS.get(name, name)}{year}"
            formats = ['%Y-%m-%d', '%d/%m/%Y', '%d/%m/%y', '%d%b%y', '%d%b%Y']

        for fmt in formats:
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue
        return None


def format_amount(value: Decimal) -> str:
    """
    Render a decimal amount exactly, always with a fractional part.

    100 becomes "100.0", -500.00 becomes "-500.0" and 12.34 stays "12.34".
    """
    if not value:
        return "0.0"
    text = format(value.normalize(), 'f')
    if '.' not in text:
        text += '.0'
    return text


class CSVWriter:
    """
    Helper class to write exported statements to CSV files.

    The CSV text is fully rendered by the exporters; this class only owns the
    output directory and the file encoding.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def write(self, csv_text: str, filename: str) -> Path:
        """Write rendered CSV text to `filename` inside the output directory."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / filename
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            f.write(csv_text)

        rows = max(csv_text.count('\n') - 1, 0)
        logger.info(f"Saved {rows} transactions to {filepath}")
        return filepath
