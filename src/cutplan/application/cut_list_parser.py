"""Cut list text parsing.

A cut list has one piece per line::

    23 1/2" x 47 7/8" = 4PCS 2L 1S
    47.875 x 96 = 2PCS

The dimensions accept integers, decimals, simple fractions (``3/4``) and
mixed fractions (``23 1/2`` or ``23-1/2``). Right of the ``=`` sign,
``<n>PCS`` is the quantity and every ``<n>L`` / ``<n>S`` token adds edge
banding. Blank lines and lines starting with ``#`` are ignored.
"""

from __future__ import annotations

import logging
import math
import re
from fractions import Fraction

from cutplan.domain.value_objects import PieceRequest

logger = logging.getLogger(__name__)

# Largest quantity accepted on one cut list line
MAX_QUANTITY = 10_000

_SEPARATOR = re.compile(r"\s*[xX*×]\s*")
_DECIMAL = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)$")
_FRACTION = re.compile(r"^(\d+)/(\d+)$")
_MIXED = re.compile(r"^(\d+)(?:\s+|\s*-\s*)(\d+)/(\d+)$")
_QUANTITY = re.compile(r"(\d+)\s*PCS", re.IGNORECASE)
_EDGE = re.compile(r"(\d+)\s*[LS](?![a-z])", re.IGNORECASE)


class CutListParseError(ValueError):
    """Raised when a cut list line cannot be parsed.

    Attributes:
        message: Description of the problem.
        line_number: One-based line number in the input text.
        line: The offending line.
    """

    def __init__(self, message: str, line_number: int = 0, line: str = "") -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line_number:
            return f"Line {self.line_number}: {self.message} ({self.line.strip()!r})"
        return self.message


def parse_fraction(text: str) -> float:
    """Parse an inch dimension such as ``23``, ``47.875``, ``3/4`` or ``23 1/2``.

    Args:
        text: Dimension text without quote marks.

    Returns:
        The dimension in inches.

    Raises:
        ValueError: If the text is not a valid dimension.
    """
    token = " ".join(text.split())

    match = _DECIMAL.match(token)
    if match:
        return float(token)

    match = _FRACTION.match(token)
    if match:
        return _ratio(match.group(1), match.group(2), token)

    match = _MIXED.match(token)
    if match:
        return int(match.group(1)) + _ratio(match.group(2), match.group(3), token)

    raise ValueError(f"Invalid dimension {text.strip()!r}")


def _ratio(numerator: str, denominator: str, token: str) -> float:
    if int(denominator) == 0:
        raise ValueError(f"Zero denominator in {token!r}")
    return int(numerator) / int(denominator)


def format_fraction(value: float, denominator: int = 32) -> str:
    """Render inches as a mixed fraction rounded to ``1/denominator``.

    Examples:
        >>> format_fraction(23.5)
        '23 1/2'
        >>> format_fraction(0.75)
        '3/4'
    """
    if not math.isfinite(value):
        raise ValueError("Cannot format a non-finite dimension")

    sign = "-" if value < 0 else ""
    steps = round(abs(value) * denominator)
    whole, remainder = divmod(steps, denominator)
    if remainder == 0:
        return f"{sign}{whole}"

    fraction = Fraction(remainder, denominator)
    if whole == 0:
        return f"{sign}{fraction.numerator}/{fraction.denominator}"
    return f"{sign}{whole} {fraction.numerator}/{fraction.denominator}"


def parse_line(line: str, line_number: int = 0) -> PieceRequest:
    """Parse one cut list line into a PieceRequest.

    Raises:
        CutListParseError: If the line is malformed.
    """
    if "=" not in line:
        raise CutListParseError("Missing '=' before the quantity", line_number, line)

    left, right = line.split("=", 1)
    dims = left.replace('"', "").replace("'", "").strip()
    parts = _SEPARATOR.split(dims)
    if len(parts) != 2 or not all(parts):
        raise CutListParseError(
            "Expected dimensions as '<width> x <height>'", line_number, line
        )

    try:
        width = parse_fraction(parts[0])
        height = parse_fraction(parts[1])
    except ValueError as e:
        raise CutListParseError(str(e), line_number, line) from e

    quantity_match = _QUANTITY.search(right)
    quantity = int(quantity_match.group(1)) if quantity_match else 0
    if quantity > MAX_QUANTITY:
        raise CutListParseError(
            f"Quantity {quantity} exceeds the limit of {MAX_QUANTITY}",
            line_number,
            line,
        )
    edges = sum(int(count) for count in _EDGE.findall(right))

    try:
        return PieceRequest(
            width=width,
            height=height,
            quantity=quantity,
            edge_banding_units=edges,
            display_width=" ".join(parts[0].split()),
            display_height=" ".join(parts[1].split()),
        )
    except ValueError as e:
        raise CutListParseError(str(e), line_number, line) from e


def parse_cut_list(text: str) -> list[PieceRequest]:
    """Parse cut list text into piece requests, in input order.

    Args:
        text: Cut list with one piece per line.

    Returns:
        One PieceRequest per non-blank, non-comment line. Lines without a
        ``PCS`` quantity produce zero-quantity requests.

    Raises:
        CutListParseError: If any line is malformed.
    """
    requests: list[PieceRequest] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        requests.append(parse_line(stripped, line_number))

    logger.debug("Parsed %d cut list lines", len(requests))
    return requests
