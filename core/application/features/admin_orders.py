"""Back-office order management (admin only)."""
from typing import List, Optional
from uuid import UUID

from core.application.dtos.order_dto import OrderDto, OrderEventDto, OrderListDto
from core.application.features.orders import ORDER_NOT_FOUND, page_errors, restore_stock
from core.application.mediator import Request, RequestHandler, RequestValidator, handles, validates
from core.application.result import Result
from core.domain.enums import OrderStatus
from core.domain.exceptions import InvalidOrderTransitionError
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)


class GetAdminOrdersQuery(Request):
    page: int = 1
    page_size: int = 20
    status: Optional[str] = None
    search: Optional[str] = None


class UpdateOrderStatusCommand(Request):
    order_id: UUID
    status: str
    note: Optional[str] = None


class UpdateShippingInfoCommand(Request):
    order_id: UUID
    tracking_number: Optional[str] = None
    shipping_method: Optional[str] = None
    mark_as_shipped: bool = False


class GetOrderEventsQuery(Request):
    order_id: UUID


@validates(GetAdminOrdersQuery)
class GetAdminOrdersValidator(RequestValidator[GetAdminOrdersQuery]):
    def validate(self, request: GetAdminOrdersQuery) -> List[str]:
        return page_errors(request.page, request.page_size)


@handles(GetAdminOrdersQuery)
class GetAdminOrdersHandler(RequestHandler[GetAdminOrdersQuery, Result[OrderListDto]]):
    async def handle(self, request: GetAdminOrdersQuery) -> Result[OrderListDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        status = None
        if request.status:
            status = OrderStatus.parse(request.status)
            if status is None:
                return Result.failure("Invalid order status")

        async with self.context.uow() as uow:
            page = await uow.orders.search(
                page=request.page,
                page_size=request.page_size,
                status=status,
                search=request.search,
            )
        return Result.success(OrderListDto.from_page(page))


@handles(UpdateOrderStatusCommand)
class UpdateOrderStatusHandler(RequestHandler[UpdateOrderStatusCommand, Result[OrderDto]]):
    """
    Moves an order along its workflow.

    Cancelling through the back office puts the stock back, like a
    customer cancellation does.
    """

    async def handle(self, request: UpdateOrderStatusCommand) -> Result[OrderDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        target = OrderStatus.parse(request.status)
        if target is None:
            return Result.failure("Invalid order status")

        async with self.context.uow() as uow:
            order = await uow.orders.get(request.order_id)
            if order is None:
                return Result.not_found(ORDER_NOT_FOUND)

            previous = order.status
            try:
                if target == OrderStatus.CANCELLED:
                    order.cancel(request.note)
                else:
                    order.set_status(target, notes=request.note)
            except InvalidOrderTransitionError as e:
                return Result.failure(e.message)

            if request.note:
                order.append_note(f"Status changed to {target.value}: {request.note}")

            touched = []
            if target == OrderStatus.CANCELLED:
                touched = await restore_stock(uow, order, f"Order {order.order_number} cancelled")

            await uow.orders.save(order)
            uow.collect(order, *touched)
            await uow.commit()

            logger.info(
                f"[{uow.execution_id}] Order {order.order_number}: {previous.value} -> {target.value}"
            )

        return Result.success(OrderDto.from_entity(order))


@handles(UpdateShippingInfoCommand)
class UpdateShippingInfoHandler(RequestHandler[UpdateShippingInfoCommand, Result[OrderDto]]):
    async def handle(self, request: UpdateShippingInfoCommand) -> Result[OrderDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            order = await uow.orders.get(request.order_id)
            if order is None:
                return Result.not_found(ORDER_NOT_FOUND)

            if request.tracking_number is not None:
                order.set_tracking_number(request.tracking_number)
            if request.shipping_method is not None:
                order.set_shipping_method(request.shipping_method)

            if request.mark_as_shipped and order.status != OrderStatus.SHIPPED:
                description = (
                    f"Shipped with tracking number {order.tracking_number}"
                    if order.tracking_number else "Order shipped"
                )
                try:
                    order.set_status(OrderStatus.SHIPPED, description=description)
                except InvalidOrderTransitionError as e:
                    return Result.failure(e.message)

            await uow.orders.save(order)
            uow.collect(order)
            await uow.commit()

        return Result.success(OrderDto.from_entity(order))


@handles(GetOrderEventsQuery)
class GetOrderEventsHandler(RequestHandler[GetOrderEventsQuery, Result[List[OrderEventDto]]]):
    """Audit trail of an order as stored by the event store."""

    async def handle(self, request: GetOrderEventsQuery) -> Result[List[OrderEventDto]]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            order = await uow.orders.get(request.order_id)
            if order is None:
                return Result.not_found(ORDER_NOT_FOUND)
            events = await uow.events.get_events(str(order.id))

        return Result.success([OrderEventDto.from_stored(e) for e in events])
