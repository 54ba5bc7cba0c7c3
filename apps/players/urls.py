from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'players'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.PlayerViewSet, basename='player')

urlpatterns = [
    # Player ViewSet routes
    # GET    /api/players/                - List players (?search=)
    # POST   /api/players/                - Create player
    # GET    /api/players/{id}/           - Get player details
    # PUT    /api/players/{id}/           - Update player
    # PATCH  /api/players/{id}/           - Partial update
    # DELETE /api/players/{id}/           - Delete player

    # Custom player actions
    # GET    /api/players/{id}/balance/   - Global balance of one player
    # GET    /api/players/balances/       - Global balances of everyone

    # Include router URLs
    path('', include(router.urls)),
]
