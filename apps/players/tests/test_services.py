import uuid
import pytest
from decimal import Decimal
from datetime import date

from apps.players.models import Player
from apps.players.services import (
    create_player,
    get_player_by_id,
    update_player,
    delete_player,
    search_players,
    PlayerNotFoundError,
    DuplicatePlayerNameError,
    PlayerInUseError,
)
from apps.ledger.services.exceptions import LedgerValidationError
from apps.payments.models import Payment


@pytest.mark.django_db
class TestCreatePlayer:
    """Tests for create_player()."""

    def test_create_player(self):
        player = create_player(name='  Alice  ', email='alice@example.com')

        assert player.name == 'Alice'
        assert player.email == 'alice@example.com'
        assert player.phone == ''
        assert Player.objects.count() == 1

    @pytest.mark.parametrize('name', ['', 'A', ' B ', 'x' * 101])
    def test_invalid_name_length(self, name):
        with pytest.raises(LedgerValidationError) as exc_info:
            create_player(name=name)

        assert exc_info.value.field == 'name'

    def test_duplicate_name_ignores_case(self, alice):
        with pytest.raises(DuplicatePlayerNameError) as exc_info:
            create_player(name='ALICE')

        assert exc_info.value.status_code == 400
        assert exc_info.value.field == 'name'


@pytest.mark.django_db
class TestGetPlayer:
    """Tests for get_player_by_id()."""

    def test_get_player(self, alice):
        assert get_player_by_id(player_id=alice.id) == alice

    @pytest.mark.parametrize('player_id', [uuid.uuid4(), 'not-a-uuid'])
    def test_missing_player(self, player_id):
        with pytest.raises(PlayerNotFoundError):
            get_player_by_id(player_id=player_id)


@pytest.mark.django_db
class TestUpdatePlayer:
    """Tests for update_player()."""

    def test_update_only_given_fields(self, alice):
        player = update_player(player_id=alice.id, phone='555-0100')

        assert player.phone == '555-0100'
        assert player.name == 'Alice'
        assert player.email == 'alice@example.com'

    def test_rename_to_own_name_in_other_case(self, alice):
        player = update_player(player_id=alice.id, name='alice')

        assert player.name == 'alice'

    def test_rename_to_taken_name(self, alice, bob):
        with pytest.raises(DuplicatePlayerNameError):
            update_player(player_id=bob.id, name='Alice')

    def test_missing_player(self):
        with pytest.raises(PlayerNotFoundError):
            update_player(player_id=uuid.uuid4(), name='Nobody')


@pytest.mark.django_db
class TestDeletePlayer:
    """Tests for delete_player()."""

    def test_delete_unused_player(self, dana):
        delete_player(player_id=dana.id)

        assert not Player.objects.filter(id=dana.id).exists()

    def test_participant_cannot_be_deleted(self, event, alice):
        with pytest.raises(PlayerInUseError) as exc_info:
            delete_player(player_id=alice.id)

        assert exc_info.value.status_code == 422
        assert Player.objects.filter(id=alice.id).exists()

    def test_player_with_payments_cannot_be_deleted(self, dana):
        Payment.objects.create(player=dana, amount=Decimal('5.00'), date=date(2024, 3, 4))

        with pytest.raises(PlayerInUseError):
            delete_player(player_id=dana.id)


@pytest.mark.django_db
class TestSearchPlayers:
    """Tests for search_players()."""

    def test_search_by_name_or_email(self, alice, bob, charlie):
        assert list(search_players(query='ali')) == [alice]
        assert list(search_players(query='bob@')) == [bob]

    def test_empty_query_returns_everyone_alphabetically(self, charlie, alice, bob):
        assert list(search_players()) == [alice, bob, charlie]
