"""Order number and ticket redemption code generation.

Order numbers combine a base36 millisecond timestamp with five random
base36 characters; uniqueness is enforced by the database.
"""

import secrets
import string
import time
import uuid

_BASE36 = string.digits + string.ascii_uppercase


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("Only non-negative numbers can be encoded")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


class CodeGenerator:
    """Produces order numbers and ticket codes."""

    def order_number(self) -> str:
        timestamp = to_base36(time.time_ns() // 1_000_000)
        random_part = "".join(secrets.choice(_BASE36) for _ in range(5))
        return f"ORD-{timestamp}-{random_part}"

    def ticket_code(self) -> str:
        return f"TKT-{uuid.uuid4()}"
