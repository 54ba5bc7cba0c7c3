from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'events'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.EventViewSet, basename='event')

urlpatterns = [
    # Event ViewSet routes
    # GET    /api/events/                          - List events
    # POST   /api/events/                          - Create event
    # GET    /api/events/{id}/                     - Get event details
    # PUT    /api/events/{id}/                     - Update event
    # PATCH  /api/events/{id}/                     - Partial update
    # DELETE /api/events/{id}/                     - Delete event

    # Custom event actions
    # PUT    /api/events/{id}/participants/        - Replace participants
    # POST   /api/events/{id}/add_participant/     - Add one participant
    # POST   /api/events/{id}/remove_participant/  - Remove one participant
    # GET    /api/events/{id}/balance/             - Participant balances
    # GET    /api/events/{id}/statistics/          - Event statistics
    # GET    /api/events/{id}/equal_split/         - Equal split (?mode=, ?exclude=)

    # Include router URLs
    path('', include(router.urls)),
]
