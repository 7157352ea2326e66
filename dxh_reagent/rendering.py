# /dxh_reagent/rendering.py
"""Data Matrix rendering through treepoem (BWIPP)."""

from __future__ import annotations

import io

import treepoem
from PIL import ImageOps

from dxh_reagent.validation import ReagentError


class RenderError(ReagentError):
    """The barcode renderer failed (missing Ghostscript, bad data, ...)."""


def render_datamatrix_png(data: str, scale: int = 3, padding: int = 2) -> bytes:
    """Draw ``data`` as a Data Matrix symbol and return PNG bytes.

    ``padding`` is in modules, matching the quiet zone the label printer
    expects; it is converted to pixels with ``scale``.
    """
    if not data:
        raise ValueError("Nothing to render")

    try:
        image = treepoem.generate_barcode(barcode_type="datamatrix", data=data, scale=scale)
    except treepoem.TreepoemError as e:
        raise RenderError(str(e)) from e

    image = image.convert("1")
    if padding > 0:
        image = ImageOps.expand(image, border=padding * scale, fill=255)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
