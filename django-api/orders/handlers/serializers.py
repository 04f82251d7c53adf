"""Serializers for order requests and responses.

Request serializers only check shape; ``to_domain`` builds the request the
order service understands.
"""

from rest_framework import serializers

from catalog.domain import EventId, ProductId, TicketTypeId, VariantId
from orders.domain import (
    CreateOrderRequest,
    Customer,
    LineItemRequest,
    OrderStatus,
    ShippingAddress,
    TicketRequest,
)


class LineItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    product_variant_id = serializers.UUIDField(required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=1)


class TicketInputSerializer(serializers.Serializer):
    ticket_type_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class ShippingAddressInputSerializer(serializers.Serializer):
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    zip = serializers.CharField(max_length=20)
    country = serializers.CharField(max_length=100)


class CreateOrderSerializer(serializers.Serializer):
    customer_email = serializers.EmailField()
    customer_name = serializers.CharField(max_length=255)
    customer_phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    event_id = serializers.UUIDField(required=False, allow_null=True)
    items = LineItemInputSerializer(many=True, required=False)
    tickets = TicketInputSerializer(many=True, required=False)
    shipping_address = ShippingAddressInputSerializer(required=False, allow_null=True)
    payment_method = serializers.CharField(max_length=50)

    def validate(self, attrs):
        if not attrs.get("items") and not attrs.get("tickets"):
            raise serializers.ValidationError("An order needs at least one product or ticket")
        return attrs

    def to_domain(self) -> CreateOrderRequest:
        data = self.validated_data
        shipping = data.get("shipping_address")
        return CreateOrderRequest(
            customer=Customer(
                email=data["customer_email"],
                name=data["customer_name"],
                phone=data.get("customer_phone") or None,
            ),
            items=tuple(
                LineItemRequest(
                    product_id=ProductId(item["product_id"]),
                    quantity=item["quantity"],
                    variant_id=(
                        VariantId(item["product_variant_id"])
                        if item.get("product_variant_id")
                        else None
                    ),
                )
                for item in data.get("items", [])
            ),
            tickets=tuple(
                TicketRequest(TicketTypeId(ticket["ticket_type_id"]), ticket["quantity"])
                for ticket in data.get("tickets", [])
            ),
            event_id=EventId(data["event_id"]) if data.get("event_id") else None,
            shipping_address=(
                ShippingAddress(
                    address=shipping["address"],
                    city=shipping["city"],
                    zip_code=shipping["zip"],
                    country=shipping["country"],
                    state=shipping.get("state") or None,
                )
                if shipping
                else None
            ),
            payment_method=data["payment_method"],
        )


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s.value for s in OrderStatus])

    def to_domain(self) -> OrderStatus:
        return OrderStatus(self.validated_data["status"])


class PaymentInputSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(max_length=255)


def _money(source: str) -> serializers.DecimalField:
    return serializers.DecimalField(source=source, max_digits=10, decimal_places=2)


class LineItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField(source="product_id.value")
    product_variant_id = serializers.SerializerMethodField()
    quantity = serializers.IntegerField()
    unit_price = _money("unit_price.amount")
    total_price = _money("total_price.amount")

    def get_product_variant_id(self, item):
        return str(item.variant_id.value) if item.variant_id else None


class TicketSerializer(serializers.Serializer):
    ticket_type_id = serializers.UUIDField(source="ticket_type_id.value")
    code = serializers.CharField()
    status = serializers.CharField(source="status.value")


class PaymentSerializer(serializers.Serializer):
    amount = _money("amount.amount")
    payment_method = serializers.CharField()
    transaction_id = serializers.CharField()
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()


class OrderSerializer(serializers.Serializer):
    """Serializer for Order domain model. Money is rendered as decimal strings."""

    id = serializers.UUIDField(source="id.value")
    order_number = serializers.CharField()
    customer_email = serializers.CharField(source="customer.email")
    customer_name = serializers.CharField(source="customer.name")
    customer_phone = serializers.CharField(source="customer.phone", allow_null=True)
    kind = serializers.CharField(source="kind.value")
    status = serializers.CharField(source="status.value")
    payment_status = serializers.CharField(source="payment_status.value")
    event_id = serializers.SerializerMethodField()
    subtotal = _money("prices.subtotal.amount")
    shipping_fee = _money("prices.shipping_fee.amount")
    tax = _money("prices.tax.amount")
    total = _money("prices.total.amount")
    payment_method = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    items = LineItemSerializer(many=True)
    tickets = TicketSerializer(many=True)
    payments = PaymentSerializer(many=True)

    def get_event_id(self, order):
        return str(order.event_id.value) if order.event_id else None
