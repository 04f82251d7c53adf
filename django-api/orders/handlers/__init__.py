from orders.handlers.views import (
    CustomerOrdersView,
    OrderByNumberView,
    OrderCancelView,
    OrderCreateView,
    OrderDetailView,
    OrderPaymentView,
    OrderRefundView,
    OrderStatusView,
)

__all__ = [
    "OrderCreateView",
    "OrderDetailView",
    "OrderByNumberView",
    "CustomerOrdersView",
    "OrderStatusView",
    "OrderPaymentView",
    "OrderRefundView",
    "OrderCancelView",
]
