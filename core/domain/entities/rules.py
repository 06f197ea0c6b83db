"""Field normalisation helpers shared by the entities."""
from decimal import Decimal
from typing import Any, Optional


def required_text(value: Optional[str], label: str, max_length: Optional[int] = None) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{label} cannot be empty")
    value = str(value).strip()
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return value


def optional_text(value: Optional[str], label: str, max_length: Optional[int] = None) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return value


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def non_negative(value: Any, label: str) -> Decimal:
    amount = to_decimal(value)
    if amount < 0:
        raise ValueError(f"{label} cannot be negative")
    return amount


def optional_non_negative(value: Any, label: str) -> Optional[Decimal]:
    if value is None:
        return None
    return non_negative(value, label)


class EventRecorder:
    """Domain event collection for aggregate roots (needs ``_domain_events``)."""

    def get_domain_events(self) -> list:
        """Events recorded since the last clear (published by the unit of work)."""
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def _record_event(self, event) -> None:
        self._domain_events.append(event)
