"""Address type enum."""
from enum import Enum


class AddressType(str, Enum):
    """Purpose of a saved address."""

    SHIPPING = "Shipping"
    BILLING = "Billing"
