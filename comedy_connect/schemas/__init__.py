from comedy_connect.schemas.common import PaginatedResponse, ErrorResponse, MessageResponse
from comedy_connect.schemas.show import (
    Show, ShowCreate, ShowUpdate, ShowStats, ComedianSummary, ShowFeeUpdate,
)
from comedy_connect.schemas.booking import (
    Booking, BookingCreate, BookingCancelResponse, BookingShowSummary,
)
from comedy_connect.schemas.fees import FeeSlab, PlatformConfig, PlatformConfigUpdate, CreatorFeeUpdate
from comedy_connect.schemas.user import (
    User, OrganizerProfile, OrganizerProfileUpsert, ComedianProfile, ComedianProfileUpsert,
    PendingCreator, ApprovalDecision,
)
from comedy_connect.schemas.collections import (
    CollectionsSummary, CollectionGroup, ShowCollection, CollectionStats, CollectionCreator,
)
