# pos_core/common/tests/test_phone.py
import pytest

from pos_core.common.errors import ErrorCode, ProvisioningError
from pos_core.common.phone import format_phone_number


@pytest.mark.parametrize(
    "raw",
    ["0712345678", "+254712345678", "254712345678", "712345678", " 0712 345 678 ", "0712-345-678"],
)
def test_format_normalizes_to_local_form(raw):
    assert format_phone_number(raw) == "0712345678"


@pytest.mark.parametrize("raw", ["12345", "07123456789", "+1 555 123 4567", "07abc45678"])
def test_format_rejects_bad_numbers(raw):
    with pytest.raises(ProvisioningError) as exc:
        format_phone_number(raw)

    assert exc.value.code == ErrorCode.INVALID_PHONE_NUMBER
    assert "Expected 0XXXXXXXXX" in exc.value.message
    assert raw.strip() in exc.value.message


def test_format_requires_a_value():
    with pytest.raises(ProvisioningError) as exc:
        format_phone_number("  ")

    assert exc.value.message == "Phone number is required"
