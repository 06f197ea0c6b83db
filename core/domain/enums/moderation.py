"""
Moderation enums.

Status values shared by product questions and their answers, plus the
reasons recorded with price history entries.
"""
from enum import Enum


class ModerationStatus(str, Enum):
    """Moderation state of user generated content."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    FLAGGED = "Flagged"


class PriceChangeReason(str, Enum):
    """Why a product price history entry was recorded."""

    INITIAL = "Initial"
    PRICE_CHANGE = "PriceChange"
    SALE = "Sale"
    PROMOTION = "Promotion"
