import uuid
import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.expenses.models import CostItem, ExpenseTemplate


# =============================================================================
# Cost Item Tests
# =============================================================================

@pytest.mark.django_db
class TestCostItemList:
    """Tests for GET /api/expenses/"""

    def test_list_cost_items(self, api_client, court_rental, shuttlecocks):
        url = reverse('expenses:cost-item-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_filter_by_event(self, api_client, court_rental, empty_event):
        url = reverse('expenses:cost-item-list')
        response = api_client.get(url, {'event': str(empty_event.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 0

    def test_filter_by_invalid_event(self, api_client, db):
        url = reverse('expenses:cost-item-list')
        response = api_client.get(url, {'event': 'monday'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'] == 'event'


@pytest.mark.django_db
class TestCostItemCreate:
    """Tests for POST /api/expenses/"""

    def test_create_with_percentages(self, api_client, event, alice, bob, charlie):
        url = reverse('expenses:cost-item-list')
        data = {
            'event': str(event.id),
            'description': 'Court rental',
            'amount': '60.00',
            'paid_by': str(alice.id),
            'date': '2024-03-04',
            'split_percentage': {str(alice.id): 50, str(bob.id): 25, str(charlie.id): 25},
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['split_mode'] == 'percentage'
        assert response.data['split_shares'] is None
        assert response.data['split_percentage'][str(alice.id)] == Decimal('50.00')
        assert response.data['paid_by_name'] == 'Alice'

    def test_create_with_equal_default(self, api_client, event, alice, charlie):
        url = reverse('expenses:cost-item-list')
        data = {
            'event': str(event.id),
            'description': 'Court rental',
            'amount': '60.00',
            'paid_by': str(alice.id),
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['split_percentage'][str(charlie.id)] == Decimal('33.34')

    def test_shares_win_over_percentages(self, api_client, event, alice, bob):
        url = reverse('expenses:cost-item-list')
        data = {
            'event': str(event.id),
            'description': 'Shuttlecocks',
            'amount': '90.00',
            'paid_by': str(bob.id),
            'split_percentage': {str(alice.id): 10},
            'split_shares': {str(alice.id): 1, str(bob.id): 2},
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['split_mode'] == 'shares'
        assert response.data['split_shares'] == {str(alice.id): 1, str(bob.id): 2}
        assert response.data['split_percentage'] is None

    def test_percentages_not_summing_to_100(self, api_client, event, alice, bob):
        url = reverse('expenses:cost-item-list')
        data = {
            'event': str(event.id),
            'description': 'Court rental',
            'amount': '60.00',
            'paid_by': str(alice.id),
            'split_percentage': {str(alice.id): 50, str(bob.id): 49},
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            'error': 'Split percentages must sum to 100%. Currently: 99.00%',
            'field': 'split_percentage',
            'status': 400,
        }
        assert not CostItem.objects.exists()

    def test_unknown_event(self, api_client, alice):
        url = reverse('expenses:cost-item-list')
        data = {
            'event': str(uuid.uuid4()),
            'description': 'Court rental',
            'amount': '60.00',
            'paid_by': str(alice.id),
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestCostItemDetail:
    """Tests for /api/expenses/{id}/ and its actions."""

    def test_retrieve(self, api_client, shuttlecocks, alice, bob, charlie):
        url = reverse('expenses:cost-item-detail', kwargs={'pk': shuttlecocks.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['split_shares'] == {
            str(alice.id): 1, str(bob.id): 2, str(charlie.id): 0,
        }

    def test_partial_update(self, api_client, court_rental):
        url = reverse('expenses:cost-item-detail', kwargs={'pk': court_rental.id})
        response = api_client.patch(url, {'description': 'Court 4 rental'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['description'] == 'Court 4 rental'
        assert response.data['amount'] == Decimal('60.00')

    def test_delete(self, api_client, court_rental):
        url = reverse('expenses:cost-item-detail', kwargs={'pk': court_rental.id})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not CostItem.objects.exists()

    def test_replace_split(self, api_client, court_rental, alice, bob):
        url = reverse('expenses:cost-item-split', kwargs={'pk': court_rental.id})
        response = api_client.put(url, {'split_shares': {str(alice.id): 1, str(bob.id): 1}})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['split_mode'] == 'shares'
        court_rental.refresh_from_db()
        assert court_rental.split_values == {str(alice.id): 1, str(bob.id): 1}

    def test_replace_split_requires_a_map(self, api_client, court_rental):
        url = reverse('expenses:cost-item-split', kwargs={'pk': court_rental.id})
        response = api_client.put(url, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_replace_split_with_outsider(self, api_client, court_rental, alice, dana):
        url = reverse('expenses:cost-item-split', kwargs={'pk': court_rental.id})
        response = api_client.put(
            url, {'split_percentage': {str(alice.id): 50, str(dana.id): 50}}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'] == 'split_percentage'

    def test_breakdown(self, api_client, shuttlecocks, alice, bob):
        url = reverse('expenses:cost-item-breakdown', kwargs={'pk': shuttlecocks.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        amounts = {a['player_name']: a['amount'] for a in response.data['allocations']}
        assert amounts == {
            'Alice': Decimal('30.00'),
            'Bob': Decimal('60.00'),
            'Charlie': Decimal('0.00'),
        }
        assert response.data['total_allocated'] == Decimal('90.00')

    def test_breakdown_missing(self, api_client, db):
        url = reverse('expenses:cost-item-breakdown', kwargs={'pk': uuid.uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Expense Template Tests
# =============================================================================

@pytest.fixture
def court_template(alice):
    return ExpenseTemplate.objects.create(
        name='Court rental',
        default_amount=Decimal('60.00'),
        category='Venue',
        default_paid_by=alice,
        order=0,
    )


@pytest.fixture
def drinks_template(db):
    return ExpenseTemplate.objects.create(
        name='Drinks', default_amount=Decimal('15.00'), order=1
    )


@pytest.mark.django_db
class TestExpenseTemplates:
    """Tests for /api/expenses/templates/"""

    def test_list_in_display_order(self, api_client, drinks_template, court_template):
        url = reverse('expenses:template-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [t['name'] for t in response.data] == ['Court rental', 'Drinks']
        assert response.data[0]['default_paid_by_name'] == 'Alice'
        assert response.data[1]['default_paid_by_name'] is None

    def test_create(self, api_client, court_template):
        url = reverse('expenses:template-list')
        response = api_client.post(url, {'name': 'Shuttlecocks', 'default_amount': '24.50'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['order'] == 1
        assert response.data['default_amount'] == Decimal('24.50')

    def test_create_unknown_payer(self, api_client, db):
        url = reverse('expenses:template-list')
        data = {
            'name': 'Shuttlecocks',
            'default_amount': '24.50',
            'default_paid_by': str(uuid.uuid4()),
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'] == 'default_paid_by'

    def test_partial_update_clears_payer(self, api_client, court_template):
        url = reverse('expenses:template-detail', kwargs={'pk': court_template.id})
        response = api_client.patch(url, {'default_paid_by': None})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['default_paid_by'] is None
        assert response.data['name'] == 'Court rental'

    def test_delete(self, api_client, court_template):
        url = reverse('expenses:template-detail', kwargs={'pk': court_template.id})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not ExpenseTemplate.objects.exists()

    def test_quick_add(self, api_client, court_template, drinks_template):
        url = reverse('expenses:template-quick-add')
        response = api_client.get(url, {'limit': 1})

        assert response.status_code == status.HTTP_200_OK
        assert [t['name'] for t in response.data] == ['Court rental']

    def test_quick_add_invalid_limit(self, api_client, db):
        url = reverse('expenses:template-quick-add')
        response = api_client.get(url, {'limit': 'many'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_reorder(self, api_client, court_template, drinks_template):
        url = reverse('expenses:template-reorder')
        data = {'order_updates': [
            {'id': str(drinks_template.id), 'order': 0},
            {'id': str(court_template.id), 'order': 1},
        ]}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        court_template.refresh_from_db()
        assert court_template.order == 1

    def test_reorder_negative_order(self, api_client, court_template):
        url = reverse('expenses:template-reorder')
        data = {'order_updates': [{'id': str(court_template.id), 'order': -1}]}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_apply(self, api_client, court_template, event, alice, bob, charlie):
        url = reverse('expenses:template-apply', kwargs={'pk': court_template.id})
        response = api_client.post(url, {'event': str(event.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['description'] == 'Court rental'
        assert response.data['paid_by'] == str(alice.id)
        assert response.data['split_shares'] == {
            str(alice.id): 1, str(bob.id): 1, str(charlie.id): 1,
        }

    def test_apply_missing_template(self, api_client, event):
        url = reverse('expenses:template-apply', kwargs={'pk': uuid.uuid4()})
        response = api_client.post(url, {'event': str(event.id)})

        assert response.status_code == status.HTTP_404_NOT_FOUND
