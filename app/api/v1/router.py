from fastapi import APIRouter

# Public — centers & availability
from app.api.v1.public.centers import router as centers_router

# Public — reservations
from app.api.v1.public.reservations import router as reservations_router

# Public — reviews
from app.api.v1.public.reviews import router as reviews_router

# Public — favorites
from app.api.v1.public.favorites import router as favorites_router

# Admin
from app.api.v1.admin.reservations import router as admin_reservations_router
from app.api.v1.admin.ratings import router as admin_ratings_router

from app.schemas.common import ErrorResponse

api_router = APIRouter()

# Error envelope shared by every endpoint
error_responses = {
    status: {"model": ErrorResponse}
    for status in (400, 403, 404, 409, 500)
}

# --- Public ---
api_router.include_router(centers_router, responses=error_responses)
api_router.include_router(reservations_router, responses=error_responses)
api_router.include_router(reviews_router, responses=error_responses)
api_router.include_router(favorites_router, responses=error_responses)

# --- Admin ---
api_router.include_router(admin_reservations_router, responses=error_responses)
api_router.include_router(admin_ratings_router, responses=error_responses)
