# Import every model so Base.metadata (and Alembic autogenerate) sees all tables.
from app.models.blog import Blog  # noqa: F401
from app.models.product import Product, ProductCategory  # noqa: F401
from app.models.reservation_request import ReservationRequest  # noqa: F401
from app.models.showcase import LandingMenuImage, MarqueeImage, MarqueeSlide  # noqa: F401
from app.models.user import User  # noqa: F401
