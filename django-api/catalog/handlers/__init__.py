from catalog.handlers.views import EventCancelView, EventDetailView, EventPublishView

__all__ = ["EventDetailView", "EventPublishView", "EventCancelView"]
