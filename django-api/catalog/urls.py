from django.urls import path

from catalog.handlers import EventCancelView, EventDetailView, EventPublishView

urlpatterns = [
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/publish", EventPublishView.as_view(), name="event-publish"),
    path("events/<str:event_id>/cancel", EventCancelView.as_view(), name="event-cancel"),
]
