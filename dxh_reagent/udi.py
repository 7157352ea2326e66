# /dxh_reagent/udi.py
"""GS1 UDI string for DxH reagents.

Format: (01)GTIN (11)manufacture YYMMDD (17)expiration YYMMDD (10)lot,
written without parentheses as it is encoded in the Data Matrix symbol.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from dxh_reagent.catalog import gtin_for
from dxh_reagent.validation import format_date_to_yymmdd

AI_GTIN = "01"
AI_MANUFACTURE_DATE = "11"
AI_EXPIRATION_DATE = "17"
AI_LOT = "10"


@dataclass(frozen=True)
class UdiData:
    full: str
    gtin: str
    mfg_date: str
    exp_date: str
    lot: str

    def to_dict(self) -> dict:
        return asdict(self)


def generate_udi(
    product_code: str | None,
    manufacture_date: str | None,
    expiration_date: str | None,
    lot: str | None,
) -> UdiData | None:
    """Build the UDI, or None for missing fields, unknown products or bad dates."""
    if not product_code or not manufacture_date or not expiration_date or not lot:
        return None

    gtin = gtin_for(product_code)
    if not gtin:
        return None

    mfg_yymmdd = format_date_to_yymmdd(manufacture_date)
    exp_yymmdd = format_date_to_yymmdd(expiration_date)
    if not mfg_yymmdd or not exp_yymmdd:
        return None

    # Lot is variable length, so it goes last.
    full = f"{AI_GTIN}{gtin}{AI_MANUFACTURE_DATE}{mfg_yymmdd}{AI_EXPIRATION_DATE}{exp_yymmdd}{AI_LOT}{lot}"
    return UdiData(full=full, gtin=gtin, mfg_date=mfg_yymmdd, exp_date=exp_yymmdd, lot=lot)
