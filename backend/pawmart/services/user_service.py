"""
PawMart Backend — User Service
================================

What:  Users are addressed by email for lookup and update, by `_id` for
       deletion, and creation refuses a second account for the same email.

Duplicate check:
    find_one({"email": ...}) then insert_one(...). The check is not a
    unique constraint: two concurrent sign-ups with the same email can
    both pass it.
"""

import logging
from typing import Any, Dict

from pawmart.services.resource_service import (
    AlreadyExists,
    CreateOutcome,
    ResourceService,
)

logger = logging.getLogger(__name__)


class UserService(ResourceService):
    collection_name = "users"
    resource = "user"
    key_field = "email"

    async def create(self, document: Dict[str, Any]) -> CreateOutcome:
        email = document.get("email")
        if email is not None:
            try:
                existing = await self.collection.find_one({"email": email})
            except Exception as e:
                raise self._failure("Failed to create user", e)
            if existing is not None:
                logger.info("User %s already exists as %s", email, existing["_id"])
                return AlreadyExists(existing_id=existing["_id"])

        return await super().create(document)
