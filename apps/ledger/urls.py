from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    # GET  /api/ledger/settlements/       - Suggested settlements
    path('settlements/', views.settlements, name='settlements'),

    # POST /api/ledger/splits/equal/      - Equal split over posted ids
    path('splits/equal/', views.equal_split, name='equal-split'),

    # POST /api/ledger/splits/sanitize/   - Sanitize posted expense splits
    path('splits/sanitize/', views.sanitize_splits, name='sanitize-splits'),
]
