import pytest

from core.application.features.cart import GetCartQuery
from core.application.features.products import GetProductsQuery
from core.application.mediator import CurrentUser, Request
from core.domain.exceptions import ValidationException


class UnhandledQuery(Request):
    pass


@pytest.mark.asyncio
async def test_unregistered_request(mediator):
    with pytest.raises(LookupError, match="No handler registered for UnhandledQuery"):
        await mediator.send(UnhandledQuery())


@pytest.mark.asyncio
async def test_validation_errors_are_collected(mediator):
    with pytest.raises(ValidationException) as exc_info:
        await mediator.send(GetProductsQuery(page=0, sort="cheapest"))

    assert exc_info.value.errors == [
        "Page must be at least 1",
        "Sort must be one of: newest, price_asc, price_desc, name",
    ]
    assert exc_info.value.message == "; ".join(exc_info.value.errors)


def test_for_user_shares_the_context(mediator, customer):
    scoped = mediator.for_user(customer)

    assert scoped.context.current_user == customer
    assert scoped.context.session_factory is mediator.context.session_factory
    assert mediator.context.current_user == CurrentUser()


@pytest.mark.asyncio
async def test_anonymous_caller_has_no_cart(mediator):
    result = await mediator.send(GetCartQuery())

    assert not result.succeeded
    assert result.error == "Cart session required"
