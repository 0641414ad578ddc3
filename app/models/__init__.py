# registers every table on Base.metadata
from app.db.base import Base  # noqa: F401
import app.models.tenant         # noqa: F401
import app.models.user           # noqa: F401
import app.models.refresh_token  # noqa: F401

from app.models.tenant import Tenant
from app.models.user import User
from app.models.refresh_token import RefreshToken

__all__: list[str] = ["Base", "Tenant", "User", "RefreshToken"]
