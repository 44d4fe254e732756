"""Optimistic mutation lifecycle: PENDING -> CONFIRMED | ROLLED_BACK."""

from dataclasses import dataclass
from enum import Enum

from models.events import Event


class MutationKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class MutationState(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


class InvalidTransition(RuntimeError):
    """Raised when a settled mutation is settled again."""


@dataclass
class Mutation:
    """
    One optimistic change to the local mirror.

    `event_id` is the temporary id for creates and the server id otherwise.
    `previous` and `position` hold what a rollback needs to restore.
    """

    kind: MutationKind
    date_key: str
    event_id: str
    previous: Event | None = None
    position: int = -1
    state: MutationState = MutationState.PENDING
    confirmed: Event | None = None
    error: Exception | None = None

    @property
    def settled(self) -> bool:
        return self.state is not MutationState.PENDING

    def confirm(self, server_event: Event | None = None) -> None:
        self._leave_pending(MutationState.CONFIRMED)
        self.confirmed = server_event

    def roll_back(self, error: Exception) -> None:
        self._leave_pending(MutationState.ROLLED_BACK)
        self.error = error

    def _leave_pending(self, target: MutationState) -> None:
        if self.state is not MutationState.PENDING:
            raise InvalidTransition(
                f"{self.kind.value} mutation already {self.state.value}, cannot become {target.value}"
            )
        self.state = target
