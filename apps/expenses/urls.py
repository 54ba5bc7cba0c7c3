from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'expenses'

# Router for ViewSets; templates must be registered before the cost item
# detail route so "templates/" is not taken for a cost item id.
router = DefaultRouter()
router.register(r'templates', views.ExpenseTemplateViewSet, basename='template')
router.register(r'', views.CostItemViewSet, basename='cost-item')

urlpatterns = [
    # Template routes
    # GET    /api/expenses/templates/                 - List templates
    # POST   /api/expenses/templates/                 - Create template
    # GET    /api/expenses/templates/{id}/            - Get template
    # PUT    /api/expenses/templates/{id}/            - Update template
    # PATCH  /api/expenses/templates/{id}/            - Partial update
    # DELETE /api/expenses/templates/{id}/            - Delete template
    # GET    /api/expenses/templates/quick_add/       - Quick-add templates (?limit=)
    # POST   /api/expenses/templates/reorder/         - Reorder templates
    # POST   /api/expenses/templates/{id}/apply/      - Expense data for an event

    # Cost item routes
    # GET    /api/expenses/                           - List cost items (?event=)
    # POST   /api/expenses/                           - Create cost item
    # GET    /api/expenses/{id}/                      - Get cost item
    # PUT    /api/expenses/{id}/                      - Update cost item
    # PATCH  /api/expenses/{id}/                      - Partial update
    # DELETE /api/expenses/{id}/                      - Delete cost item
    # PUT    /api/expenses/{id}/split/                - Replace the split
    # GET    /api/expenses/{id}/breakdown/            - Per-participant amounts

    # Include router URLs
    path('', include(router.urls)),
]
