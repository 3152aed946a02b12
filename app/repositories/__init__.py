from app.repositories.base import DuplicateError, Page  # noqa: F401
from app.repositories.blog import BlogRepository  # noqa: F401
from app.repositories.product import ProductCategoryRepository, ProductRepository  # noqa: F401
from app.repositories.reservation_request import ReservationRequestRepository  # noqa: F401
from app.repositories.showcase import (  # noqa: F401
    LandingMenuRepository,
    MarqueeImageRepository,
    MarqueeSlideRepository,
)
from app.repositories.user import UserRepository  # noqa: F401
