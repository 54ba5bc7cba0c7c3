"""
Events app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row locks.
"""

from .exceptions import (
    EventNotFoundError,
    DuplicateEventNameError,
    InvalidParticipantsError,
    PayerRemovalError,
    UnresolvableSplitError,
    EventInUseError,
)

from .event_management import (
    create_event,
    get_event_by_id,
    update_event,
    delete_event,
    get_equal_split,
)

from .participant_management import (
    ParticipantChange,
    validate_participant_ids,
    set_participants,
    add_participant,
    remove_participant,
)


__all__ = [
    # Exceptions
    'EventNotFoundError',
    'DuplicateEventNameError',
    'InvalidParticipantsError',
    'PayerRemovalError',
    'UnresolvableSplitError',
    'EventInUseError',

    # Event Management
    'create_event',
    'get_event_by_id',
    'update_event',
    'delete_event',
    'get_equal_split',

    # Participant Management
    'ParticipantChange',
    'validate_participant_ids',
    'set_participants',
    'add_participant',
    'remove_participant',
]
