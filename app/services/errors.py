"""Error taxonomy for family tree operations"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"


class FamilyTreeError(Exception):
    """Base class for errors surfaced to the API caller"""
    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    @property
    def detail(self) -> dict:
        detail = {"message": self.message}
        if self.field:
            detail["field"] = self.field
        return detail


class ValidationError(FamilyTreeError):
    """Malformed, missing or self-referential input"""
    status_code = 400
    default_message = "Invalid request"


class MemberReferenceError(FamilyTreeError):
    """A referenced family member does not exist"""
    status_code = 404
    default_message = "Family member not found"


class RelationshipNotFoundError(MemberReferenceError):
    default_message = "Relationship not found"


class RecordNotFoundError(FamilyTreeError):
    status_code = 404
    default_message = "Record not found"


class DuplicateRelationshipError(FamilyTreeError):
    """The request conflicts with relationships already stored"""
    status_code = 409
    default_message = "Relationship already exists"


class StorageError(FamilyTreeError):
    status_code = 500
    default_message = "Failed to save changes"


def translate_integrity_error(error: IntegrityError) -> FamilyTreeError:
    """Map a store constraint violation onto the error taxonomy"""
    orig = getattr(error, "orig", None)
    code = getattr(orig, "pgcode", None)
    text = str(orig or error).lower()

    if code == UNIQUE_VIOLATION or "unique" in text:
        return DuplicateRelationshipError()
    if code == FOREIGN_KEY_VIOLATION or "foreign key" in text:
        return MemberReferenceError("Referenced family member no longer exists")
    if code == CHECK_VIOLATION or "check constraint" in text:
        return ValidationError("Relationship violates a store constraint")

    logger.error(f"Unhandled integrity error: {error}")
    return StorageError()
