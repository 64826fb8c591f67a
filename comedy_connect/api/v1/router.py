from fastapi import APIRouter

# Public - shows and comedian directory
from comedy_connect.api.v1.public.shows import router as shows_router
from comedy_connect.api.v1.public.comedians import router as comedians_router

# Public - bookings
from comedy_connect.api.v1.public.bookings import router as bookings_router

# Public - account and creator applications
from comedy_connect.api.v1.public.me import (
    router as me_router,
    organizer_router,
    comedian_router,
)

# Admin
from comedy_connect.api.v1.admin.shows import router as admin_shows_router
from comedy_connect.api.v1.admin.fees import (
    router as admin_fees_router,
    organizer_router as admin_organizer_router,
    comedian_router as admin_comedian_router,
)
from comedy_connect.api.v1.admin.approvals import router as admin_approvals_router
from comedy_connect.api.v1.admin.collections import router as admin_collections_router
from comedy_connect.api.v1.admin.bookings import router as admin_bookings_router

api_router = APIRouter()

# --- Public ---
api_router.include_router(shows_router)
api_router.include_router(comedians_router)
api_router.include_router(bookings_router)
api_router.include_router(me_router)
api_router.include_router(organizer_router)
api_router.include_router(comedian_router)

# --- Admin ---
api_router.include_router(admin_shows_router)
api_router.include_router(admin_fees_router)
api_router.include_router(admin_organizer_router)
api_router.include_router(admin_comedian_router)
api_router.include_router(admin_approvals_router)
api_router.include_router(admin_collections_router)
api_router.include_router(admin_bookings_router)
