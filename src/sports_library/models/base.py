"""
Base types shared by all persistent models.

Every model is a pydantic model that can be flattened into a JSON document
(to_document) and restored from one (from_document). Related objects are
never embedded in a document: they are replaced by the identifiers of the
records they point to and resolved again by the repository on read.
"""

import uuid as uuid_lib
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, Field

P = TypeVar("P", bound="PersistentObject")

RESTORE_CONTEXT = {"restore": True}


def generate_uuid() -> str:
    """Generate a new random identifier."""
    return str(uuid_lib.uuid4())


@dataclass(frozen=True, order=True)
class UUID:
    """Identifier of a persistent object, compared and hashed by its string value."""

    value: str

    def __post_init__(self) -> None:
        if self.value is None:
            raise ValueError("An identifier must not be None")

    def __str__(self) -> str:
        return self.value


class PersistentObject(BaseModel):
    """
    Base class for all objects stored in the datastore.

    Subclasses declare the name of their collection and the field holding
    their unique key. Most types are keyed by their uuid; types with a
    business key (e.g. MovementType) override identity_field.
    """

    identity_field: ClassVar[str] = "uuid"
    collection_name: ClassVar[str] = ""

    uuid: str = Field(default_factory=generate_uuid)

    def get_key(self) -> str:
        """Get the value of the field that identifies this object in its collection."""
        return getattr(self, self.identity_field)

    def get_uuid(self) -> UUID:
        """Get the identifier used for lookups and references."""
        return UUID(self.get_key())

    def to_document(self) -> dict[str, Any]:
        """Flatten the object into a JSON-compatible record."""
        return self.model_dump(mode="json")

    @classmethod
    def from_document(cls: type[P], document: dict[str, Any], **related: Any) -> P:
        """
        Restore an object from a stored record.

        Args:
            document: The stored record
            **related: Already resolved related objects (e.g. entries=[...])

        Returns:
            The restored object
        """
        return cls.model_validate({**document, **related}, context=RESTORE_CONTEXT)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistentObject):
            return NotImplemented
        return type(self) is type(other) and self.get_key() == other.get_key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.get_key()))
