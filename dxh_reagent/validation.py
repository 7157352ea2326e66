# /dxh_reagent/validation.py
"""DxH reagent validation code and barcode payload.

Validation code = SHA-1("H628" + YYMMDD + LOT + CONTAINER)[-5:]
Barcode payload = LABELER_ID + PRODUCT_CODE + YYMMDD + LOT + "h" + CONTAINER(5) + VALIDATION_CODE
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass

# Hash seed is the labeler id without the leading "+".
HASH_PREFIX = "H628"
CONTAINER_DELIMITER = "h"
CONTAINER_WIDTH = 5
VALIDATION_CODE_LENGTH = 5

_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


class ReagentError(Exception):
    """Base class for reagent generator errors."""


class DigestUnavailableError(ReagentError):
    """The SHA-1 primitive is not usable in this interpreter."""


@dataclass(frozen=True)
class ReagentParams:
    labeler_id: str
    product_code: str
    expiration_date: str
    lot: str
    container: str


@dataclass(frozen=True)
class ReagentData:
    validation_code: str | None = None
    barcode_payload: str | None = None

    @property
    def ok(self) -> bool:
        return bool(self.validation_code and self.barcode_payload)

    def to_dict(self) -> dict:
        return {
            "validationCode": self.validation_code,
            "barcodePayload": self.barcode_payload,
        }


def format_date_to_yymmdd(date_str: str | None) -> str | None:
    """Convert ``YYYY-MM-DD`` to ``YYMMDD``.

    Only the digit shape is checked; month and day are passed through
    verbatim, so ``2027-13-40`` becomes ``271340``. Returns None for
    anything that does not match the pattern.
    """
    if not date_str:
        return None
    match = _DATE_RE.fullmatch(date_str)
    if not match:
        return None
    year, month, day = match.groups()
    return year[2:] + month + day


def sha1_hex(message: str) -> str:
    """Lowercase hex SHA-1 of the UTF-8 encoded message."""
    try:
        digest = hashlib.sha1(message.encode("utf-8"))
    except ValueError as e:
        raise DigestUnavailableError(f"SHA-1 is not available: {e}") from e
    return digest.hexdigest()


def calculate_validation_code(expiration_date: str | None, lot: str | None, container: str | None) -> str | None:
    """Return the 5-character validation code, or None when inputs are incomplete.

    The container goes into the hash exactly as given (``0158`` and
    ``00158`` give different codes) and the product code is not part of it.
    """
    if not expiration_date or not lot or not container:
        return None

    yymmdd = format_date_to_yymmdd(expiration_date)
    if not yymmdd:
        return None

    hash_input = f"{HASH_PREFIX}{yymmdd}{lot}{container}"
    return sha1_hex(hash_input)[-VALIDATION_CODE_LENGTH:]


def generate_barcode_data(
    labeler_id: str | None,
    product_code: str | None,
    expiration_date: str | None,
    lot: str | None,
    container: str | None,
    validation_code: str | None,
) -> str | None:
    """Assemble the HIBC barcode payload, or None when any field is missing."""
    if not all((labeler_id, product_code, expiration_date, lot, container, validation_code)):
        return None

    yymmdd = format_date_to_yymmdd(expiration_date)
    if not yymmdd:
        return None

    # Padded only in the payload; the hash uses the raw container.
    container_padded = container.rjust(CONTAINER_WIDTH, "0")
    return f"{labeler_id}{product_code}{yymmdd}{lot}{CONTAINER_DELIMITER}{container_padded}{validation_code}"


def generate_reagent_data(params: ReagentParams) -> ReagentData:
    """Compute the validation code and barcode payload together.

    Both values are present or both are None.
    """
    validation_code = calculate_validation_code(params.expiration_date, params.lot, params.container)
    if not validation_code:
        return ReagentData()

    barcode_payload = generate_barcode_data(
        params.labeler_id,
        params.product_code,
        params.expiration_date,
        params.lot,
        params.container,
        validation_code,
    )
    if not barcode_payload:
        return ReagentData()

    return ReagentData(validation_code=validation_code, barcode_payload=barcode_payload)
