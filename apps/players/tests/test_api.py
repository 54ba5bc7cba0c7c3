import uuid
import pytest
from decimal import Decimal
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from apps.players.models import Player
from apps.events.models import Event
from apps.expenses.models import CostItem, ExpenseTemplate
from apps.payments.models import Payment


# =============================================================================
# Player CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestPlayerList:
    """Tests for GET /api/players/"""

    def test_list_players(self, api_client, alice, bob):
        url = reverse('players:player-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        assert [p['name'] for p in response.data['results']] == ['Alice', 'Bob']

    def test_search(self, api_client, alice, bob):
        url = reverse('players:player-list')
        response = api_client.get(url, {'search': 'bo'})

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data['results']] == ['Bob']

    def test_event_count(self, api_client, event, dana):
        url = reverse('players:player-list')
        response = api_client.get(url)

        counts = {p['name']: p['event_count'] for p in response.data['results']}
        assert counts == {'Alice': 1, 'Bob': 1, 'Charlie': 1, 'Dana': 0}


@pytest.mark.django_db
class TestPlayerCreate:
    """Tests for POST /api/players/"""

    def test_create_player(self, api_client):
        url = reverse('players:player-list')
        response = api_client.post(url, {'name': 'Eve', 'email': 'eve@example.com'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Eve'
        assert response.data['event_count'] == 0
        assert Player.objects.filter(name='Eve').exists()

    def test_duplicate_name(self, api_client, alice):
        url = reverse('players:player-list')
        response = api_client.post(url, {'name': 'alice'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'] == 'name'
        assert response.data['status'] == 400

    def test_invalid_email(self, api_client, db):
        url = reverse('players:player-list')
        response = api_client.post(url, {'name': 'Eve', 'email': 'not-an-email'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'email' in response.data


@pytest.mark.django_db
class TestPlayerDetail:
    """Tests for GET/PATCH/DELETE /api/players/{id}/"""

    def test_retrieve(self, api_client, alice):
        url = reverse('players:player-detail', kwargs={'pk': alice.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == 'alice@example.com'

    def test_retrieve_missing(self, api_client, db):
        url = reverse('players:player-detail', kwargs={'pk': uuid.uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_partial_update(self, api_client, alice):
        url = reverse('players:player-detail', kwargs={'pk': alice.id})
        response = api_client.patch(url, {'phone': '555-0100'})

        assert response.status_code == status.HTTP_200_OK
        alice.refresh_from_db()
        assert alice.phone == '555-0100'
        assert alice.email == 'alice@example.com'

    def test_delete_unused_player(self, api_client, dana):
        url = reverse('players:player-detail', kwargs={'pk': dana.id})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Player.objects.filter(id=dana.id).exists()

    def test_delete_participant_refused(self, api_client, event, alice):
        url = reverse('players:player-detail', kwargs={'pk': alice.id})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['status'] == 422


# =============================================================================
# Balance Tests
# =============================================================================

@pytest.mark.django_db
class TestPlayerBalance:
    """Tests for GET /api/players/{id}/balance/ and /api/players/balances/"""

    def test_balance(self, api_client, court_rental, alice):
        url = reverse('players:player-balance', kwargs={'pk': alice.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['net'] == Decimal('40.00')
        assert response.data['status'] == 'owed'
        assert response.data['user_id'] == str(alice.id)

    def test_balance_missing_player(self, api_client, db):
        url = reverse('players:player-balance', kwargs={'pk': uuid.uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Player not found'

    def test_all_balances(self, api_client, court_rental):
        url = reverse('players:player-balances')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [b['user_name'] for b in response.data] == ['Alice', 'Bob', 'Charlie']
        assert [b['status'] for b in response.data] == ['owed', 'owes', 'owes']


# =============================================================================
# Sample Data Command
# =============================================================================

@pytest.mark.django_db
class TestCreateSampleDataCommand:
    """Tests for the create_sample_data management command."""

    def test_creates_sample_data(self):
        call_command('create_sample_data')

        assert Player.objects.count() == 5
        assert Event.objects.count() == 2
        assert CostItem.objects.count() == 4
        assert Payment.objects.count() == 2
        assert ExpenseTemplate.objects.count() == 3

    def test_running_twice_does_not_duplicate(self):
        call_command('create_sample_data')
        call_command('create_sample_data')

        assert Player.objects.count() == 5
        assert CostItem.objects.count() == 4

    def test_clear(self, dana):
        Payment.objects.create(player=dana, amount=Decimal('1.00'), date='2024-03-04')

        call_command('create_sample_data', '--clear')

        assert Payment.objects.count() == 2
        assert Player.objects.filter(name='Dana').count() == 1
