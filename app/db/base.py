from app.db.session import Base
from app.models.user import User
from app.models.center import Center
from app.models.reservation import Reservation
from app.models.review import Review
from app.models.favorite import Favorite
