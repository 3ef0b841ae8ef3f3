import pytest

from caresync.core.exceptions import InvalidPhoneNumberError
from caresync.utils.phone import normalize_phone, try_normalize_phone


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0712345678", "+254712345678"),
        ("0712 345 678", "+254712345678"),
        ("0712-345-678", "+254712345678"),
        ("(0712) 345678", "+254712345678"),
        ("254712345678", "+254712345678"),
        ("+254712345678", "+254712345678"),
        ("+254 712 345 678", "+254712345678"),
        ("712345678", "+254712345678"),
        ("0110123456", "+254110123456"),
        (712345678, "+254712345678"),
    ],
)
def test_normalize_phone_formats(raw, expected):
    assert normalize_phone(raw, strict=True) == expected


@pytest.mark.parametrize("local", ["0712345678", "0798765432", "0100000001", "0123456789"])
def test_trunk_prefix_replaced_by_country_code(local):
    result = normalize_phone(local, strict=False)
    assert result == "+254" + local[1:]


@pytest.mark.parametrize("raw", ["254712345678", "+254712345678", "254 798-765-432", "+254110123456"])
def test_normalization_idempotent_with_country_code(raw):
    once = normalize_phone(raw)
    assert normalize_phone(once) == once


@pytest.mark.parametrize(
    "raw",
    [
        "0812345678",  # not a mobile operator prefix
        "07123456",  # too short
        "07123456789",  # too long
        "+254712345abc",
        "+447911123456",
    ],
)
def test_strict_policy_rejects_invalid_numbers(raw):
    with pytest.raises(InvalidPhoneNumberError) as exc_info:
        normalize_phone(raw, strict=True)
    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "SMS100"


def test_permissive_policy_prefixes_unconditionally():
    assert normalize_phone("0812345678", strict=False) == "+254812345678"
    assert normalize_phone("12345", strict=False) == "+25412345"


@pytest.mark.parametrize("raw", ["", "   ", " - ( ) ", None])
def test_empty_phone_rejected_in_both_policies(raw):
    with pytest.raises(InvalidPhoneNumberError):
        normalize_phone(raw, strict=False)
    with pytest.raises(InvalidPhoneNumberError):
        normalize_phone(raw, strict=True)


def test_other_country_code():
    assert normalize_phone("0772123456", country_code="256", strict=True) == "+256772123456"


def test_try_normalize_returns_none_on_rejection():
    assert try_normalize_phone("0812345678", strict=True) is None
    assert try_normalize_phone("") is None
    assert try_normalize_phone("0712345678") == "+254712345678"
