import re

import pytest

from dxh_reagent import validation
from dxh_reagent.validation import (
    DigestUnavailableError,
    ReagentData,
    ReagentParams,
    calculate_validation_code,
    format_date_to_yymmdd,
    generate_barcode_data,
    generate_reagent_data,
    sha1_hex,
)


def _params(**overrides):
    values = {
        "labeler_id": "+H628",
        "product_code": "B3686813",
        "expiration_date": "2026-08-26",
        "lot": "7703835",
        "container": "0158",
    }
    values.update(overrides)
    return ReagentParams(**values)


# ----------------------------
# Date normalization
# ----------------------------

@pytest.mark.parametrize(
    "date_str, expected",
    [
        ("2027-10-22", "271022"),
        ("2026-08-26", "260826"),
        ("2030-12-31", "301231"),
        ("2027-01-05", "270105"),
    ],
)
def test_format_date_to_yymmdd(date_str, expected):
    assert format_date_to_yymmdd(date_str) == expected


def test_format_date_passes_out_of_range_month_and_day_through():
    assert format_date_to_yymmdd("2027-13-40") == "271340"
    assert format_date_to_yymmdd("2027-00-00") == "270000"


@pytest.mark.parametrize(
    "date_str",
    [None, "", "10-22-2027", "2027/10/22", "invalid", "27-10-22", "2027-1-22", "2027-10-22T00:00", "2027-10-22\n", " 2027-10-22"],
)
def test_format_date_rejects_malformed_input(date_str):
    assert format_date_to_yymmdd(date_str) is None


def test_format_date_rejects_non_ascii_digits():
    # Arabic-Indic digits are \d in Unicode mode but not on a label.
    assert format_date_to_yymmdd("٢٠٢٧-١٠-٢٢") is None


# ----------------------------
# Digest
# ----------------------------

def test_sha1_hex_known_values():
    assert sha1_hex("") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"
    assert sha1_hex("test") == "a94a8fe5ccb19ba61c4c0873d391e987982fbbd3"


def test_sha1_hex_is_40_lowercase_hex_chars():
    assert re.fullmatch(r"[0-9a-f]{40}", sha1_hex("any input"))


def test_sha1_hex_wraps_primitive_failure(monkeypatch):
    def unsupported(*args, **kwargs):
        raise ValueError("unsupported hash type sha1")

    monkeypatch.setattr(validation.hashlib, "sha1", unsupported)

    with pytest.raises(DigestUnavailableError):
        sha1_hex("test")


# ----------------------------
# Validation code
# ----------------------------

def test_validation_code_known_label():
    assert calculate_validation_code("2026-08-26", "7703835", "0158") == "37f08"
    assert sha1_hex("H62826082677038350158")[-5:] == "37f08"


def test_validation_code_is_five_lowercase_hex_chars():
    code = calculate_validation_code("2027-10-22", "7703835", "0001")
    assert re.fullmatch(r"[0-9a-f]{5}", code)


def test_validation_code_hashes_container_unpadded():
    assert calculate_validation_code("2026-08-26", "7703835", "00158") != "37f08"


def test_validation_code_ignores_product_code():
    codes = {generate_reagent_data(_params(product_code=pc)).validation_code for pc in ("B3686813", "B3684613", "X")}
    assert codes == {"37f08"}


@pytest.mark.parametrize(
    "changed",
    [
        {"lot": "7703836"},
        {"container": "0159"},
        {"expiration_date": "2026-08-27"},
    ],
)
def test_validation_code_depends_on_hashed_fields(changed):
    args = {"expiration_date": "2026-08-26", "lot": "7703835", "container": "0158"}
    args.update(changed)
    assert calculate_validation_code(**args) != "37f08"


@pytest.mark.parametrize(
    "expiration_date, lot, container",
    [
        ("", "7703835", "0001"),
        (None, "7703835", "0001"),
        ("2027-10-22", "", "0001"),
        ("2027-10-22", "7703835", ""),
        ("22/10/2027", "7703835", "0001"),
    ],
)
def test_validation_code_none_for_incomplete_input(expiration_date, lot, container):
    assert calculate_validation_code(expiration_date, lot, container) is None


def test_validation_code_is_repeatable():
    first = calculate_validation_code("2027-10-22", "7703835", "0001")
    assert calculate_validation_code("2027-10-22", "7703835", "0001") == first


def test_barcode_data_is_repeatable():
    args = ("+H628", "B3686813", "2027-10-22", "7703835", "0001", "abcde")
    first = generate_barcode_data(*args)
    assert generate_barcode_data(*args) == first == "+H628B36868132710227703835h00001abcde"


# ----------------------------
# Barcode payload
# ----------------------------

def test_barcode_data_layout():
    barcode = generate_barcode_data("+H628", "B3686813", "2027-10-22", "7703835", "0001", "abcde")
    assert barcode == "+H628B36868132710227703835h00001abcde"


@pytest.mark.parametrize(
    "container, segment",
    [
        ("1", "h00001"),
        ("0158", "h00158"),
        ("12345", "h12345"),
        ("123456", "h123456"),
    ],
)
def test_barcode_data_pads_container_without_truncating(container, segment):
    barcode = generate_barcode_data("+H628", "B3686813", "2027-10-22", "7703835", container, "abcde")
    assert f"7703835{segment}abcde" in barcode


@pytest.mark.parametrize("missing", range(6))
def test_barcode_data_none_when_any_field_empty(missing):
    args = ["+H628", "B3686813", "2027-10-22", "7703835", "0001", "abcde"]
    args[missing] = ""
    assert generate_barcode_data(*args) is None


def test_barcode_data_none_for_bad_date():
    assert generate_barcode_data("+H628", "B3686813", "2027.10.22", "7703835", "0001", "abcde") is None


# ----------------------------
# Orchestration
# ----------------------------

def test_generate_reagent_data_known_label():
    data = generate_reagent_data(_params())

    assert data == ReagentData("37f08", "+H628B3686813260826" + "7703835h00158" + "37f08")
    assert data.ok
    assert data.to_dict() == {
        "validationCode": "37f08",
        "barcodePayload": "+H628B36868132608267703835h0015837f08",
    }


def test_generate_reagent_data_payload_ends_with_code():
    data = generate_reagent_data(_params(expiration_date="2027-10-22", container="0001"))
    assert data.barcode_payload.endswith(data.validation_code)
    assert data.barcode_payload.startswith("+H628B3686813")


@pytest.mark.parametrize("field", ["labeler_id", "product_code", "expiration_date", "lot", "container"])
def test_generate_reagent_data_all_or_nothing(field):
    data = generate_reagent_data(_params(**{field: ""}))
    assert data == ReagentData(None, None)
    assert not data.ok
