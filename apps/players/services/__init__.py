"""
Players app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    PlayerNotFoundError,
    DuplicatePlayerNameError,
    PlayerInUseError,
)

from .player_management import (
    create_player,
    get_player_by_id,
    update_player,
    delete_player,
    search_players,
)


__all__ = [
    # Exceptions
    'PlayerNotFoundError',
    'DuplicatePlayerNameError',
    'PlayerInUseError',

    # Player Management
    'create_player',
    'get_player_by_id',
    'update_player',
    'delete_player',
    'search_players',
]
