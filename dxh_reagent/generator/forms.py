from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Mapping

from dxh_reagent.catalog import (
	CUSTOM_REAGENT,
	DEFAULT_LABELER_ID,
	DEFAULT_PRODUCT_CODE,
	lot_prefix_for,
	reagent_name,
)
from dxh_reagent.validation import ReagentParams, format_date_to_yymmdd

LOT_LENGTH = 7

# Fields trimmed on input; dates come from date pickers and are taken as-is.
_STRIPPED_FIELDS = ("labeler_id", "product_code", "lot", "container")

# Form keys posted by the page for each event.
EVENT_REAGENT_TYPE = "reagent_type"
EVENT_PRODUCT_CODE = "product_code"
EVENT_MANUFACTURE_DATE = "manufacture_date"


@dataclass(frozen=True)
class LotValidationResult:
	ok: bool
	hint: str
	error: bool = False


def validate_lot(lot: str | None, length: int = LOT_LENGTH) -> LotValidationResult:
	value = lot or ""
	if not value:
		# Nothing typed yet: not usable, but not an error either.
		return LotValidationResult(ok=False, hint=f"Must be {length} characters")
	if len(value) != length:
		return LotValidationResult(
			ok=False,
			hint=f"Must be {length} characters (currently {len(value)})",
			error=True,
		)
	return LotValidationResult(ok=True, hint=f"Must be {length} characters")


def _iso(value: date) -> str:
	return value.strftime("%Y-%m-%d")


def _one_year_later(today: date) -> date:
	try:
		return today.replace(year=today.year + 1)
	except ValueError:
		# Feb 29 rolls over to Mar 1
		return today.replace(year=today.year + 1, month=3, day=1)


def default_lot(product_code: str | None, manufacture_date: str | None) -> str:
	"""PREFIX + MMYY of the manufacture date, e.g. CLN0225 for Cleaner made Feb 2025."""
	mmyy = "0000"
	yymmdd = format_date_to_yymmdd(manufacture_date)
	if yymmdd:
		mmyy = yymmdd[2:4] + yymmdd[0:2]
	return lot_prefix_for(product_code) + mmyy


def default_container(manufacture_date: str | None) -> str:
	"""00 + day of month of the manufacture date, e.g. 0004 for the 4th."""
	yymmdd = format_date_to_yymmdd(manufacture_date)
	dd = yymmdd[4:6] if yymmdd else "01"
	return "00" + dd


@dataclass(frozen=True)
class ReagentForm:
	"""Snapshot of the generator form.

	Every event returns a new snapshot; nothing is mutated in place.
	"""

	labeler_id: str = DEFAULT_LABELER_ID
	reagent_type: str = DEFAULT_PRODUCT_CODE
	product_code: str = DEFAULT_PRODUCT_CODE
	manufacture_date: str = ""
	expiration_date: str = ""
	lot: str = ""
	container: str = ""

	@classmethod
	def initial(cls, today: date, labeler_id: str = DEFAULT_LABELER_ID) -> ReagentForm:
		form = cls(
			labeler_id=labeler_id,
			manufacture_date=_iso(today),
			expiration_date=_iso(_one_year_later(today)),
		)
		return form.with_defaults()

	@classmethod
	def from_mapping(cls, data: Mapping[str, str]) -> ReagentForm:
		values = {}
		for name in cls.__dataclass_fields__:
			raw = data.get(name)
			if raw is None:
				continue
			values[name] = raw.strip() if name in _STRIPPED_FIELDS else raw
		return cls(**values)

	def with_defaults(self) -> ReagentForm:
		return replace(
			self,
			lot=default_lot(self.product_code, self.manufacture_date),
			container=default_container(self.manufacture_date),
		)

	def on_reagent_type_change(self, value: str) -> ReagentForm:
		form = replace(self, reagent_type=value)
		if value != CUSTOM_REAGENT:
			form = replace(form, product_code=value)
		return form.with_defaults()

	def on_product_code_change(self, value: str) -> ReagentForm:
		code = (value or "").strip()
		reagent_type = code if reagent_name(code) else CUSTOM_REAGENT
		return replace(self, product_code=code, reagent_type=reagent_type).with_defaults()

	def on_manufacture_date_change(self, value: str) -> ReagentForm:
		return replace(self, manufacture_date=value or "").with_defaults()

	def apply_event(self, event: str | None, value: str | None = None) -> ReagentForm:
		"""Apply a change to one field.

		Changing the reagent type, product code or manufacture date
		regenerates lot and container. Any other field is just set.
		"""
		if event == EVENT_REAGENT_TYPE:
			return self.on_reagent_type_change(value or "")
		if event == EVENT_PRODUCT_CODE:
			return self.on_product_code_change(value or "")
		if event == EVENT_MANUFACTURE_DATE:
			return self.on_manufacture_date_change(value or "")
		if event in self.__dataclass_fields__:
			raw = value or ""
			return replace(self, **{event: raw.strip() if event in _STRIPPED_FIELDS else raw})
		return self

	def to_params(self) -> ReagentParams:
		return ReagentParams(
			labeler_id=self.labeler_id,
			product_code=self.product_code,
			expiration_date=self.expiration_date,
			lot=self.lot,
			container=self.container,
		)
