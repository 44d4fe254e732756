"""Calendar client: local mirror plus optimistic sync with the events API."""

from .api import ApiCallError, CredentialStore, EventsApiClient, UnauthorizedError
from .cache import EventsCache
from .mutations import InvalidTransition, Mutation, MutationKind, MutationState
from .session import CalendarSession
from .sync import SyncController, is_confirmed_id

__all__ = [
    "ApiCallError",
    "CalendarSession",
    "CredentialStore",
    "EventsApiClient",
    "EventsCache",
    "InvalidTransition",
    "Mutation",
    "MutationKind",
    "MutationState",
    "SyncController",
    "UnauthorizedError",
    "is_confirmed_id",
]
