"""
Request handlers grouped by feature.

Importing this package registers every handler and validator with the
mediator.
"""
from . import (  # noqa: F401
    addresses,
    admin_orders,
    cart,
    financing,
    installation,
    orders,
    price_history,
    products,
    questions,
    translations,
    wishlist,
)
