"""
Resource ownership checks.

The only authorization rule in this service: a user may touch a resource
only if they created it. There are no roles and no admin override. Operator
endpoints that see everyone's data live behind their own key and never call
into this module.

Callers are expected to check that the resource exists first, so a missing
resource surfaces as 404 before a foreign one surfaces as 403.
"""

import logging

from shared.models import Identity

from .exceptions import ForbiddenError

logger = logging.getLogger(__name__)


def is_owner(identity: Identity, resource_owner_id: int) -> bool:
    """Whether ``identity`` owns a resource belonging to ``resource_owner_id``."""
    return identity.subject_id == resource_owner_id


def authorize_owner(identity: Identity, resource_owner_id: int) -> None:
    """
    Allow the request iff the caller owns the resource.

    Raises:
        ForbiddenError: ``identity.subject_id`` differs from the owner.
    """
    if not is_owner(identity, resource_owner_id):
        logger.info(
            f"Ownership check failed: user {identity.subject_id} on resource owned by {resource_owner_id}"
        )
        raise ForbiddenError(identity.subject_id, resource_owner_id)
