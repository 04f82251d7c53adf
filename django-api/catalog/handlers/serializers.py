"""Serializers for transforming catalog domain models to API responses."""

from rest_framework import serializers


class TicketTypeSerializer(serializers.Serializer):
    """Serializer for TicketType domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    price = serializers.DecimalField(source="price.amount", max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField(source="quantity.value")
    sold = serializers.IntegerField(source="sold.value")
    available = serializers.IntegerField()
    max_per_order = serializers.IntegerField()
    sales_start = serializers.DateTimeField(allow_null=True)
    sales_end = serializers.DateTimeField(allow_null=True)
    is_active = serializers.BooleanField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    venue = serializers.CharField()
    starts_at = serializers.DateTimeField()
    status = serializers.CharField(source="status.value")
    ticket_types = TicketTypeSerializer(many=True)


class EventCancellationSerializer(serializers.Serializer):
    event_id = serializers.UUIDField(source="event_id.value")
    cancelled_orders = serializers.ListField(child=serializers.CharField())
    released_tickets = serializers.IntegerField()
