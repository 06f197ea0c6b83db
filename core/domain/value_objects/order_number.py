"""Order number value object."""
import re
from dataclasses import dataclass

_PATTERN = re.compile(r"^ORD-(\d{4})-(\d{6,})$")


@dataclass(frozen=True)
class OrderNumber:
    """
    Customer-facing order identifier.

    Format: ORD-YYYY-NNNNNN, where NNNNNN is the 1-based sequence of the
    order within its year (zero padded to six digits).
    Examples:
    - ORD-2026-000001
    - ORD-2026-000415
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Order number cannot be empty")

        normalized = self.value.strip().upper()
        if not _PATTERN.match(normalized):
            raise ValueError(
                f"Invalid order number format (expected ORD-YYYY-NNNNNN): {self.value}"
            )
        object.__setattr__(self, "value", normalized)

    @classmethod
    def for_sequence(cls, year: int, sequence: int) -> "OrderNumber":
        """Build the order number for the ``sequence``-th order of ``year``."""
        if sequence < 1:
            raise ValueError("Order sequence must start at 1")
        return cls(value=f"ORD-{year:04d}-{sequence:06d}")

    @property
    def year(self) -> int:
        return int(_PATTERN.match(self.value).group(1))

    @property
    def sequence(self) -> int:
        return int(_PATTERN.match(self.value).group(2))

    def __str__(self) -> str:
        return self.value
