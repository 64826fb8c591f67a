from typing import Optional, List
from pydantic import UUID4
from datetime import datetime

from comedy_connect.core.roles import Role
from comedy_connect.models.profile import ApprovalStatus
from comedy_connect.schemas.common import CamelModel


class User(CamelModel):
    id: UUID4
    email: str
    full_name: Optional[str] = None
    role: Role
    is_active: bool = True


# Organizer application (PUT /organizer/profile)
class OrganizerProfileUpsert(CamelModel):
    name: str
    contact: Optional[str] = None
    description: Optional[str] = None


# Comedian application (PUT /comedian/profile)
class ComedianProfileUpsert(CamelModel):
    stage_name: str
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    youtube_urls: List[str] = []
    instagram_urls: List[str] = []


class Approval(CamelModel):
    approval_status: ApprovalStatus
    approved_at: Optional[datetime] = None
    approved_by: Optional[UUID4] = None
    admin_note: Optional[str] = None


class OrganizerProfile(Approval):
    id: UUID4
    user_id: UUID4
    name: str
    contact: Optional[str] = None
    description: Optional[str] = None
    custom_platform_fee: Optional[float] = None


class ComedianProfile(Approval):
    id: UUID4
    user_id: Optional[UUID4] = None
    stage_name: str
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    youtube_urls: Optional[List[str]] = None
    instagram_urls: Optional[List[str]] = None
    custom_platform_fee: Optional[float] = None


# Admin: pending creator applications (GET /admin/approvals)
class PendingCreator(CamelModel):
    user: User
    organizer_profile: Optional[OrganizerProfile] = None
    comedian_profile: Optional[ComedianProfile] = None


# Admin: POST /admin/approvals/{user_id}/reject
class ApprovalDecision(CamelModel):
    note: Optional[str] = None
