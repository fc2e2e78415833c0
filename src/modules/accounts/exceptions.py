"""Account domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import Conflict, InvalidInput, NotFound


class UserNotFound(NotFound):
    """No account with the given username."""


class UsernameTaken(Conflict):
    """Registration collided with an existing username."""


class InvalidCredentials(InvalidInput):
    """A password supplied for confirmation does not match."""

    def __init__(self, field: str = "password") -> None:
        super().__init__({field: "Invalid credentials."})
