"""Order service - the order transaction coordinator.

Services:
- Depend only on interfaces (stores, ledger, notifier)
- Validate catalog state and price the order from captured prices
- Hand reservations and writes to one unit of work
- Notify only after the unit of work has committed
"""

import logging
from datetime import datetime
from typing import Callable

from django.utils import timezone

from catalog.domain import Event, Product, ProductVariant, TicketType
from catalog.domain.errors import EventNotFoundError
from catalog.stores.interfaces import CatalogStore
from orders.domain import (
    CreateOrderRequest,
    LineItemDraft,
    LineItemRequest,
    Order,
    OrderDraft,
    OrderId,
    OrderKind,
    OrderStatus,
    PaymentStatus,
    PricedLine,
    PricingPolicy,
    Reservation,
    StockRef,
    TicketDraft,
    TicketTypeRef,
    calculate_price,
)
from orders.domain.codes import CodeGenerator
from orders.domain.errors import (
    EmptyOrderError,
    EventNotAvailableError,
    EventRequiredError,
    InsufficientStockError,
    InsufficientTicketsError,
    InvalidOrderIdError,
    InvalidStatusTransitionError,
    MaxPerOrderExceededError,
    OrderNotFoundError,
    ProductNotFoundError,
    SalesWindowClosedError,
    TicketTypeNotFoundError,
    TicketTypeUnavailableError,
    VariantNotFoundError,
)
from orders.notifications import Notifier
from orders.services.reversal_service import ReversalService
from orders.stores.interfaces import InventoryLedger, OrderStore

logger = logging.getLogger(__name__)


class OrderService:
    """Service for placing orders and moving them through their lifecycle."""

    def __init__(
        self,
        catalog: CatalogStore,
        orders: OrderStore,
        ledger: InventoryLedger,
        notifier: Notifier,
        pricing: PricingPolicy | None = None,
        codes: CodeGenerator | None = None,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._catalog = catalog
        self._orders = orders
        self._notifier = notifier
        self._pricing = pricing or PricingPolicy.from_settings()
        self._codes = codes or CodeGenerator()
        self._clock = clock
        self._reversal = ReversalService(orders, catalog, ledger, notifier)

    def create_order(self, request: CreateOrderRequest) -> Order:
        """Validate, price and atomically place an order.

        Nothing is written unless every line validates and every reservation
        succeeds.

        Raises:
            RequestValidationError: If the request is empty or tickets lack an event.
            NotFoundError: If a product, variant, event or ticket type is missing.
            InactiveOrClosedError: If the event is not published or sales are closed.
            InsufficientInventoryError: If stock, availability or the per-order cap is exceeded.
            OrderNumberTakenError: If the order number collided; retry the request.
        """
        if not request.items and not request.tickets:
            raise EmptyOrderError()
        placed_at = self._clock()

        item_drafts, product_lines, stock_reservations = self._check_items(request.items)
        event, ticket_drafts, ticket_lines, ticket_reservations = self._check_tickets(
            request, placed_at
        )

        prices = calculate_price(
            product_lines, ticket_lines, request.shipping_address, self._pricing
        )
        draft = OrderDraft(
            order_number=self._codes.order_number(),
            customer=request.customer,
            kind=OrderKind.for_contents(bool(item_drafts), bool(ticket_drafts)),
            prices=prices,
            shipping_address=request.shipping_address,
            event_id=event.id if event is not None else None,
            payment_method=request.payment_method,
            placed_at=placed_at,
            items=tuple(item_drafts),
            tickets=tuple(ticket_drafts),
        )
        order = self._orders.commit_order(draft, stock_reservations + ticket_reservations)

        logger.info(
            "Order %s placed: %d items, %d tickets, total %s",
            order.order_number,
            len(order.items),
            len(order.tickets),
            order.prices.total,
        )
        self._notify_placed(order, event)
        return order

    def _check_items(self, items):
        drafts, lines, reservations = [], [], []
        for item in items:
            product = self._catalog.get_product(item.product_id)
            if product is None or not product.is_active:
                raise ProductNotFoundError()
            variant = self._variant_for(product, item)

            stock = variant.stock if variant is not None else product.stock
            if item.quantity > stock.value:
                name = f"{product.name} - {variant.name}" if variant is not None else product.name
                raise InsufficientStockError(name)

            unit_price = product.price
            if variant is not None and variant.price is not None:
                unit_price = variant.price
            line = PricedLine(unit_price, item.quantity, product.weight_grams)

            lines.append(line)
            drafts.append(
                LineItemDraft(
                    product_id=product.id,
                    variant_id=item.variant_id,
                    quantity=item.quantity,
                    unit_price=unit_price,
                    total_price=line.total.rounded(),
                )
            )
            reservations.append(Reservation(StockRef(product.id, item.variant_id), item.quantity))
        return drafts, lines, reservations

    def _variant_for(self, product: Product, item: LineItemRequest) -> ProductVariant | None:
        if item.variant_id is None:
            return None
        variant = self._catalog.get_variant(item.variant_id)
        if variant is None or variant.product_id != product.id:
            raise VariantNotFoundError()
        return variant

    def _check_tickets(self, request: CreateOrderRequest, at: datetime):
        if not request.tickets:
            return None, [], [], []
        if request.event_id is None:
            raise EventRequiredError()

        event = self._catalog.get_event(request.event_id)
        if event is None:
            raise EventNotFoundError()
        if not event.is_published:
            raise EventNotAvailableError()

        # Selections of the same type share one per-order cap
        requested: dict = {}
        for selection in request.tickets:
            requested[selection.ticket_type_id] = (
                requested.get(selection.ticket_type_id, 0) + selection.quantity
            )

        drafts, lines, reservations = [], [], []
        for ticket_type_id, quantity in requested.items():
            ticket_type = event.ticket_type(ticket_type_id)
            self._check_ticket_type(ticket_type, quantity, at)
            lines.append(PricedLine(ticket_type.price, quantity))
            drafts.extend(
                TicketDraft(ticket_type.id, self._codes.ticket_code()) for _ in range(quantity)
            )
            reservations.append(Reservation(TicketTypeRef(ticket_type.id), quantity))
        return event, drafts, lines, reservations

    def _check_ticket_type(self, ticket_type: TicketType | None, quantity: int, at: datetime) -> None:
        if ticket_type is None:
            raise TicketTypeNotFoundError()
        if not ticket_type.is_active:
            raise TicketTypeUnavailableError(ticket_type.name)
        if not ticket_type.sales_open(at):
            raise SalesWindowClosedError(ticket_type.name)
        if quantity > ticket_type.max_per_order:
            raise MaxPerOrderExceededError(ticket_type.name, ticket_type.max_per_order)
        if quantity > ticket_type.available:
            raise InsufficientTicketsError(ticket_type.name, ticket_type.available)

    def _notify_placed(self, order: Order, event: Event | None) -> None:
        if order.tickets and event is not None:
            self._notifier.send_ticket_confirmation(
                order.customer.email,
                order.order_number,
                {
                    "title": event.title,
                    "venue": event.venue,
                    "starts_at": event.starts_at.isoformat(),
                },
                len(order.tickets),
            )
        if order.items:
            self._notifier.send_order_confirmation(
                order.customer.email,
                order.order_number,
                {
                    "total": str(order.prices.total),
                    "item_count": sum(item.quantity for item in order.items),
                },
            )

    def get_order_by_id(self, order_id: str) -> Order:
        """Return an order by ID.

        Raises:
            InvalidOrderIdError: If the order_id is not a valid UUID.
            OrderNotFoundError: If the order does not exist.
        """
        order = self._orders.get_order(self._parse_id(order_id))
        if order is None:
            raise OrderNotFoundError()
        return order

    def get_order_by_number(self, order_number: str) -> Order:
        order = self._orders.get_order_by_number(order_number)
        if order is None:
            raise OrderNotFoundError()
        return order

    def get_customer_orders(self, email: str) -> list[Order]:
        return self._orders.list_orders_for_customer(email)

    def process_payment(self, order_id: str, transaction_id: str) -> Order:
        """Confirm an order once the gateway reports success.

        A repeated callback for an already paid order changes nothing.

        Raises:
            InvalidStatusTransitionError: If the order is cancelled or refunded.
            TransactionAlreadyRecordedError: If the transaction paid another order.
        """
        parsed = self._parse_id(order_id)
        with self._orders.atomic():
            order = self._orders.lock_order(parsed)
            if order is None:
                raise OrderNotFoundError()
            if order.payment_status is PaymentStatus.COMPLETED:
                logger.warning(
                    "Duplicate payment callback for order %s (transaction %s)",
                    order.order_number,
                    transaction_id,
                )
                return order
            if order.status.is_terminal:
                raise InvalidStatusTransitionError(order.status.value, OrderStatus.CONFIRMED.value)
            paid = self._orders.record_payment(parsed, transaction_id)

        logger.info("Order %s paid (transaction %s)", paid.order_number, transaction_id)
        return paid

    def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        """Move an order along its state machine.

        Cancellation and refund run the matching reversal so inventory is
        always returned; asking for the current status is a no-op.
        """
        parsed = self._parse_id(order_id)
        if status is OrderStatus.CANCELLED:
            return self._reversal_or_noop(parsed, status, self._reversal.cancel_order)
        if status is OrderStatus.REFUNDED:
            return self._reversal_or_noop(parsed, status, self._reversal.refund_order)

        with self._orders.atomic():
            order = self._orders.lock_order(parsed)
            if order is None:
                raise OrderNotFoundError()
            if order.status is status:
                return order
            if not order.status.can_transition_to(status):
                raise InvalidStatusTransitionError(order.status.value, status.value)
            updated = self._orders.set_status(parsed, status)

        logger.info("Order %s moved to %s", updated.order_number, status.value)
        return updated

    def _reversal_or_noop(self, order_id: OrderId, status: OrderStatus, reverse) -> Order:
        current = self._orders.get_order(order_id)
        if current is not None and current.status is status:
            return current
        return reverse(order_id)

    def refund_order(self, order_id: str) -> Order:
        return self._reversal.refund_order(self._parse_id(order_id))

    def cancel_order(self, order_id: str) -> Order:
        return self._reversal.cancel_order(self._parse_id(order_id))

    @staticmethod
    def _parse_id(order_id: str) -> OrderId:
        try:
            return OrderId.from_string(order_id)
        except (ValueError, TypeError) as exc:
            raise InvalidOrderIdError() from exc
