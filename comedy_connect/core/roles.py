import enum
from dataclasses import dataclass
from typing import Optional
from uuid import UUID


class Role(str, enum.Enum):
    AUDIENCE = "AUDIENCE"
    ORGANIZER_UNVERIFIED = "ORGANIZER_UNVERIFIED"
    ORGANIZER_VERIFIED = "ORGANIZER_VERIFIED"
    COMEDIAN_UNVERIFIED = "COMEDIAN_UNVERIFIED"
    COMEDIAN_VERIFIED = "COMEDIAN_VERIFIED"
    ADMIN = "ADMIN"

    @property
    def is_organizer(self) -> bool:
        return self in (Role.ORGANIZER_UNVERIFIED, Role.ORGANIZER_VERIFIED)

    @property
    def is_comedian(self) -> bool:
        return self in (Role.COMEDIAN_UNVERIFIED, Role.COMEDIAN_VERIFIED)

    @property
    def is_creator(self) -> bool:
        """Any organizer or comedian tier, verified or not."""
        return self.is_organizer or self.is_comedian

    @property
    def is_verified_creator(self) -> bool:
        return self in (Role.ORGANIZER_VERIFIED, Role.COMEDIAN_VERIFIED)

    @property
    def can_publish(self) -> bool:
        return self.is_verified_creator or self is Role.ADMIN

    def verified(self) -> "Role":
        """The verified tier of a creator role."""
        if self.is_organizer:
            return Role.ORGANIZER_VERIFIED
        if self.is_comedian:
            return Role.COMEDIAN_VERIFIED
        return self

    def unverified(self) -> "Role":
        if self.is_organizer:
            return Role.ORGANIZER_UNVERIFIED
        if self.is_comedian:
            return Role.COMEDIAN_UNVERIFIED
        return self


@dataclass(frozen=True)
class Actor:
    """The caller of a service operation. Guests are represented by ``None``."""

    user_id: UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def owns(self, created_by: Optional[UUID]) -> bool:
        return created_by is not None and created_by == self.user_id

    def can_manage(self, created_by: Optional[UUID]) -> bool:
        """Creator of the resource, or an admin."""
        return self.is_admin or self.owns(created_by)
