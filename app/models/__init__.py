from app.models.user import User
from app.models.center import Center
from app.models.reservation import Reservation, ReservationStatus, ACTIVE_STATUSES
from app.models.review import Review
from app.models.favorite import Favorite
