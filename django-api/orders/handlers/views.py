"""HTTP handlers (views) - handle HTTP concerns only.

Handlers parse and shape-check requests, call the order service and map
domain errors to responses. They never contain business logic.
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.errors import DomainError
from common.responses import error_response, invalid_request
from orders.handlers.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    PaymentInputSerializer,
    StatusUpdateSerializer,
)
from orders.services import OrderService, build_order_service


def get_order_service() -> OrderService:
    return build_order_service()


class OrderCreateView(APIView):
    """Handler for POST /api/orders"""

    def post(self, request: Request) -> Response:
        serializer = CreateOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)
        try:
            order = get_order_service().create_order(serializer.to_domain())
        except DomainError as error:
            return error_response(error)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """Handler for GET /api/orders/{order_id}"""

    def get(self, request: Request, order_id: str) -> Response:
        try:
            order = get_order_service().get_order_by_id(order_id)
        except DomainError as error:
            return error_response(error)
        return Response(OrderSerializer(order).data)


class OrderByNumberView(APIView):
    """Handler for GET /api/orders/number/{order_number}"""

    def get(self, request: Request, order_number: str) -> Response:
        try:
            order = get_order_service().get_order_by_number(order_number)
        except DomainError as error:
            return error_response(error)
        return Response(OrderSerializer(order).data)


class CustomerOrdersView(APIView):
    """Handler for GET /api/orders/customer/{email}"""

    def get(self, request: Request, email: str) -> Response:
        orders = get_order_service().get_customer_orders(email)
        return Response(OrderSerializer(orders, many=True).data)


class OrderStatusView(APIView):
    """Handler for PATCH /api/orders/{order_id}/status"""

    def patch(self, request: Request, order_id: str) -> Response:
        serializer = StatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)
        try:
            order = get_order_service().update_order_status(order_id, serializer.to_domain())
        except DomainError as error:
            return error_response(error)
        return Response(OrderSerializer(order).data)


class OrderPaymentView(APIView):
    """Handler for POST /api/orders/{order_id}/payment"""

    def post(self, request: Request, order_id: str) -> Response:
        serializer = PaymentInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)
        try:
            order = get_order_service().process_payment(
                order_id, serializer.validated_data["transaction_id"]
            )
        except DomainError as error:
            return error_response(error)
        return Response(OrderSerializer(order).data)


class OrderRefundView(APIView):
    """Handler for POST /api/orders/{order_id}/refund"""

    def post(self, request: Request, order_id: str) -> Response:
        try:
            order = get_order_service().refund_order(order_id)
        except DomainError as error:
            return error_response(error)
        return Response(OrderSerializer(order).data)


class OrderCancelView(APIView):
    """Handler for POST /api/orders/{order_id}/cancel"""

    def post(self, request: Request, order_id: str) -> Response:
        try:
            order = get_order_service().cancel_order(order_id)
        except DomainError as error:
            return error_response(error)
        return Response(OrderSerializer(order).data)
