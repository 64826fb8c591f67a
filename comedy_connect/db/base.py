from comedy_connect.db.session import Base
from comedy_connect.models.user import User
from comedy_connect.models.profile import OrganizerProfile, ComedianProfile
from comedy_connect.models.show import Show, TicketInventory, ShowComedian
from comedy_connect.models.booking import Booking
from comedy_connect.models.platform_config import PlatformConfig
