"""Application DTOs."""

from .address_dto import AddressDto
from .cart_dto import CartDto, CartItemDto, ReorderResultDto
from .catalog_dto import (
    FinancingOfferDto,
    FinancingQuoteDto,
    InstallationOptionDto,
    InstallationOptionsDto,
    PriceHistoryDto,
    PricePointDto,
)
from .order_dto import (
    OrderDto,
    OrderEventDto,
    OrderItemDto,
    OrderListDto,
    OrderSummaryDto,
    OrderTimelineDto,
)
from .product_dto import (
    FilterOptionsDto,
    ProductDto,
    ProductListDto,
    ProductSummaryDto,
    ProductTranslationDto,
    ProductTranslationsDto,
    ProductVariantDto,
    StockAdjustmentDto,
)
from .question_dto import (
    AnswerDto,
    CreatedDto,
    PendingModerationDto,
    ProductQuestionsDto,
    QuestionDto,
)
from .wishlist_dto import WishlistDto, WishlistItemDto

__all__ = [
    "AddressDto",
    "AnswerDto",
    "CartDto",
    "CartItemDto",
    "CreatedDto",
    "FilterOptionsDto",
    "FinancingOfferDto",
    "FinancingQuoteDto",
    "InstallationOptionDto",
    "InstallationOptionsDto",
    "OrderDto",
    "OrderEventDto",
    "OrderItemDto",
    "OrderListDto",
    "OrderSummaryDto",
    "OrderTimelineDto",
    "PendingModerationDto",
    "PriceHistoryDto",
    "PricePointDto",
    "ProductDto",
    "ProductListDto",
    "ProductQuestionsDto",
    "ProductSummaryDto",
    "ProductTranslationDto",
    "ProductTranslationsDto",
    "ProductVariantDto",
    "QuestionDto",
    "ReorderResultDto",
    "StockAdjustmentDto",
    "WishlistDto",
    "WishlistItemDto",
]
