"""House Plants Ownership Guard — checks resource ownership before mutation."""

import logging
from enum import Enum

from houseplants.core.errors import ForbiddenError, NotFoundError
from houseplants.core.store import DocumentStore

logger = logging.getLogger("houseplants.guard")

OWNER_FIELD = "ownerId"


class Decision(str, Enum):
    ALLOW = "allow"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


class OwnershipGuard:
    """Decides allow / not-found / forbidden for a path-scoped resource.

    A pre-check only: nothing is locked, so the document may vanish
    between the decision and the caller's next store call. Owners are
    never reassigned, so an ALLOW cannot turn into FORBIDDEN.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def authorize(self, principal_id: str, resource_id: str, collection: str) -> Decision:
        """Compare the stored owner to the caller. Store failures raise StoreError."""
        resource = await self.store.get(collection, resource_id)
        if resource is None:
            return Decision.NOT_FOUND
        if resource.get(OWNER_FIELD) != principal_id:
            logger.warning(f"User {principal_id} does not own {collection}/{resource_id}")
            return Decision.FORBIDDEN
        return Decision.ALLOW

    async def require(self, principal_id: str, resource_id: str, collection: str, label: str = "Resource") -> None:
        """Raise unless the caller owns the resource."""
        decision = await self.authorize(principal_id, resource_id, collection)
        self.raise_for(decision, resource_id, label)

    @staticmethod
    def raise_for(decision: Decision, resource_id: str, label: str = "Resource") -> None:
        if decision is Decision.NOT_FOUND:
            raise NotFoundError(f"{label} with id {resource_id} does not exist")
        if decision is Decision.FORBIDDEN:
            raise ForbiddenError()
