from django.urls import path

from orders.handlers import (
    CustomerOrdersView,
    OrderByNumberView,
    OrderCancelView,
    OrderCreateView,
    OrderDetailView,
    OrderPaymentView,
    OrderRefundView,
    OrderStatusView,
)

urlpatterns = [
    path("orders", OrderCreateView.as_view(), name="order-create"),
    path("orders/number/<str:order_number>", OrderByNumberView.as_view(), name="order-by-number"),
    path("orders/customer/<str:email>", CustomerOrdersView.as_view(), name="customer-orders"),
    path("orders/<str:order_id>", OrderDetailView.as_view(), name="order-detail"),
    path("orders/<str:order_id>/status", OrderStatusView.as_view(), name="order-status"),
    path("orders/<str:order_id>/payment", OrderPaymentView.as_view(), name="order-payment"),
    path("orders/<str:order_id>/refund", OrderRefundView.as_view(), name="order-refund"),
    path("orders/<str:order_id>/cancel", OrderCancelView.as_view(), name="order-cancel"),
]
