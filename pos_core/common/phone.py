# pos_core/common/phone.py
"""
Phone number helpers.

Canonical storage format is the local 10-digit form: 0XXXXXXXXX.
Accepted inputs:
  - 0712345678
  - +254712345678 / 254712345678
  - 712345678
"""
from __future__ import annotations

import re

from pos_core.common.errors import ErrorCode, ProvisioningError

COUNTRY_CODE = "254"

_LOCAL_RE = re.compile(r"^0\d{9}$")


def format_phone_number(phone: str) -> str:
    if not phone or not str(phone).strip():
        raise ProvisioningError(ErrorCode.INVALID_PHONE_NUMBER, "Phone number is required")

    raw = str(phone).strip()
    digits = re.sub(r"[\s\-()]", "", raw)
    if digits.startswith("+"):
        digits = digits[1:]

    if digits.startswith(COUNTRY_CODE) and len(digits) == 12:
        digits = "0" + digits[len(COUNTRY_CODE):]
    elif len(digits) == 9 and digits.isdigit() and not digits.startswith("0"):
        digits = "0" + digits

    if not _LOCAL_RE.match(digits):
        raise ProvisioningError(
            ErrorCode.INVALID_PHONE_NUMBER,
            "Invalid phone number format. Expected 0XXXXXXXXX (10 digits starting with 0). "
            f"Received: {raw}",
        )
    return digits
