"""Single-administrator access-control primitive.

Holds the administrator identity and the ownership-transfer capability. The
voting aggregate delegates its administrator checks here and never touches
``owner`` directly.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from permissioned_voting.domain.shared.exceptions import InvalidOwnerError, UnauthorizedError
from permissioned_voting.domain.shared.types import Identity


class Ownable(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    owner: Identity

    def is_owner(self, caller: str) -> bool:
        return caller == self.owner

    def check_owner(self, caller: str) -> None:
        """Raise ``UnauthorizedError`` unless ``caller`` is the administrator."""
        if not self.is_owner(caller):
            raise UnauthorizedError(caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> str:
        """Hand the administrator role to ``new_owner``; returns the previous owner."""
        self.check_owner(caller)
        if not new_owner:
            raise InvalidOwnerError()
        previous, self.owner = self.owner, new_owner
        return previous
