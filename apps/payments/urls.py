from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'payments'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.PaymentViewSet, basename='payment')

urlpatterns = [
    # Payment ViewSet routes
    # GET    /api/payments/              - List payments (?player=, ?event=)
    # POST   /api/payments/              - Record payment
    # GET    /api/payments/{id}/         - Get payment
    # PUT    /api/payments/{id}/         - Update payment
    # PATCH  /api/payments/{id}/         - Partial update
    # DELETE /api/payments/{id}/         - Delete payment

    # Custom payment actions
    # POST   /api/payments/settle/       - Record a settlement between players

    # Include router URLs
    path('', include(router.urls)),
]
