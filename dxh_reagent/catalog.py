from __future__ import annotations

# Known DxH reagents keyed by HIBC product code.
PRODUCT_CODES = {
    "B3686813": "Cleaner",
    "B3684613": "Lyse",
    "B3684513": "Diluent",
}

# GS1 GTIN-14 by product code
PRODUCT_GTINS = {
    "B3686813": "15099590671877",  # Cleaner
    "B3684613": "15099590671860",  # Lyse
    "B3684513": "15099590671853",  # Diluent
}

LOT_PREFIXES = {
    "B3686813": "CLN",  # Cleaner
    "B3684613": "LYS",  # Lyse
    "B3684513": "DIL",  # Diluent
}

CUSTOM_REAGENT = "custom"
CUSTOM_LOT_PREFIX = "CUS"
DEFAULT_LABELER_ID = "+H628"
DEFAULT_PRODUCT_CODE = "B3686813"


def reagent_name(product_code: str | None) -> str | None:
    return PRODUCT_CODES.get((product_code or "").strip())


def gtin_for(product_code: str | None) -> str | None:
    return PRODUCT_GTINS.get((product_code or "").strip())


def lot_prefix_for(product_code: str | None) -> str:
    return LOT_PREFIXES.get((product_code or "").strip(), CUSTOM_LOT_PREFIX)


def reagent_choices() -> list[tuple[str, str]]:
    """(value, label) pairs for the reagent type dropdown, custom last."""
    choices = [(code, f"{name} ({code})") for code, name in PRODUCT_CODES.items()]
    choices.append((CUSTOM_REAGENT, "Custom"))
    return choices
