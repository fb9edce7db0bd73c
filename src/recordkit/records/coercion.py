"""
Typed value coercion - best-fit primitive for a raw string.

Values arriving as text (CSV cells, query parameters, environment variables)
often carry a number, a flag or a date. ``parse_typed_value`` decides which,
tolerating thousands separators, German-style decimal commas, trailing signs
and complex numbers, and falls back to the original text when nothing fits.

Manifesto:
    - **First match wins:** complex, number, boolean, timestamp, then string
    - **Leading zeroes are identifiers:** ``"012345"`` stays a string
    - **Never lossy on failure:** The fallback is the untouched input

Architecture:
    ::

        "12.345.678,90"
            │ normalise separators      → "12,345,678.90"
            │ move trailing sign        (none)
            │ scan characters           → "12345678.90", one decimal point
            ├─ complex?                 no  ("i" missing)
            ├─ number?                  yes → float 12345678.9
            ├─ boolean?                 ("true"/"false")
            ├─ timestamp?               dateutil → epoch millis (needs a year)
            └─ string                   original input

Examples:
    >>> parse_typed_value("1.234.567.890")
    1234567890
    >>> parse_typed_value("12.345.678,90")
    12345678.9
    >>> parse_typed_value("12,345.678 + 9i")
    (12345.678+9j)
    >>> parse_typed_value("012345")
    '012345'
    >>> parse_typed_value("TRUE")
    True
    >>> parse_typed_value("") is None
    True

Tags:
    parsing, coercion, locale, numbers, dates, recordkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from datetime import datetime

from dateutil import parser as date_parser

from recordkit.core.timestamps import to_epoch_millis

TypedValue = int | float | complex | bool | str

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Inputs at least this long are never tried as dates.
_MAX_DATE_LENGTH = 32

# Fills the parts a date string leaves out. A result still in year 1 had no
# year of its own ("May", "Monday", "10:30") and is not a timestamp.
_DATE_DEFAULT = datetime(1, 1, 1)

# Scanning stops once an unrecognised character is seen at this position.
_MAX_SCAN_POSITION = 5

_STRIPPED = frozenset("()[]{}")


def parse_typed_value(data: str) -> TypedValue | None:
    """Parse ``data`` into its best-fit primitive. Empty input gives None."""
    if data == "":
        return None

    original = data
    data = _normalise_separators(data)
    if not data:
        return original

    # Trailing sign, as in "1234-"
    if data[-1] in "+-":
        data = data[-1] + data[:-1]

    scan = _Scan(data)
    if scan.position == 0:
        return None

    if scan.complex_supported:
        value = _parse_complex(scan.text)
        if value is not None:
            return value

    if scan.number_supported and not scan.leading_zero:
        value = _parse_number(scan.text, scan.decimal_count)
        if value is not None:
            return value

    if len(scan.text) < 6:
        lowered = scan.text.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False

    if len(original) < _MAX_DATE_LENGTH:
        millis = _parse_timestamp(original)
        if millis is not None:
            return millis

    return original


def _normalise_separators(data: str) -> str:
    last_period = data.rfind(".")
    last_comma = data.rfind(",")
    if last_period > -1 and last_comma > last_period:
        # German formatting: 12.345.678,90
        return data.translate(str.maketrans({",": ".", ".": ","}))
    if data.count(".") > 1:
        return data.replace(".", "")
    return data


class _Scan:
    """Single pass over the characters of a candidate number."""

    def __init__(self, data: str):
        self.complex_supported = True
        self.number_supported = True
        self.decimal_count = 0
        self.leading_zero = False
        self.position = 0

        output: list[str] = []
        has_i = False
        has_operand = False

        for c in data:
            if c.isspace():
                continue

            if c in _STRIPPED:
                pass
            elif c in "+-":
                if c == "-" or self.position > 0:
                    output.append(c)
                if self.position > 0:
                    self.number_supported = False
                else:
                    if has_operand:
                        self.complex_supported = False
                        break
                    has_operand = True
            elif c == ".":
                self.leading_zero = False
                output.append(c)
                if self.complex_supported and self.decimal_count == 2:
                    self.complex_supported = False
                    self.number_supported = False
                    break
                if self.number_supported and self.decimal_count == 1:
                    self.number_supported = False
                self.decimal_count += 1
            elif c == ",":
                pass
            elif c == "0":
                if not output:
                    self.leading_zero = True
                output.append(c)
            elif c in "123456789":
                output.append(c)
            elif c == "i":
                output.append(c)
                self.number_supported = False
                if has_i:
                    self.complex_supported = False
                    break
                has_i = True
            else:
                output.append(c)
                self.complex_supported = False
                self.number_supported = False
                if self.position == _MAX_SCAN_POSITION:
                    break
            self.position += 1

        self.text = "".join(output)


def _parse_complex(text: str) -> complex | None:
    parts = text.split("+")
    if len(parts) == 2:
        value = _complex_from_parts(parts[0], parts[1], negate=False)
        if value is not None:
            return value

    parts = text.split("-")
    if len(parts) == 2:
        return _complex_from_parts(parts[0], parts[1], negate=True)

    return None


def _complex_from_parts(left: str, right: str, *, negate: bool) -> complex | None:
    """Combine ``left``/``right`` around a ``+`` or ``-`` operator.

    Exactly one side carries the ``i`` suffix. With ``negate`` the right-hand
    side is subtracted.
    """
    sign = -1.0 if negate else 1.0
    if left.endswith("i"):
        imaginary, real = _float(left.strip("i")), _float(right)
        if real is None or imaginary is None:
            return None
        return complex(sign * real, imaginary)
    if right.endswith("i"):
        real, imaginary = _float(left), _float(right.strip("i"))
        if real is None or imaginary is None:
            return None
        return complex(real, sign * imaginary)
    return None


def _parse_number(text: str, decimal_count: int) -> int | float | None:
    if decimal_count > 0:
        value = _float(text)
        if value is not None:
            return value

    try:
        number = int(text, 10)
    except ValueError:
        return None
    if _INT64_MIN <= number <= _INT64_MAX:
        return number
    return None


def _float(text: str) -> float | None:
    # float() also accepts "inf", "nan" and underscores; the scan never
    # produces those, but an empty part is possible
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _parse_timestamp(data: str) -> int | None:
    try:
        parsed = date_parser.parse(data, default=_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    if parsed.year == _DATE_DEFAULT.year:
        return None
    try:
        return to_epoch_millis(parsed)
    except (OverflowError, OSError, ValueError):
        return None


__all__ = ["TypedValue", "parse_typed_value"]
