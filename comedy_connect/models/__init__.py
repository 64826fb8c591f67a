from comedy_connect.models.user import User
from comedy_connect.models.profile import OrganizerProfile, ComedianProfile, ApprovalStatus
from comedy_connect.models.show import Show, TicketInventory, ShowComedian
from comedy_connect.models.booking import Booking, BookingStatus
from comedy_connect.models.platform_config import PlatformConfig
