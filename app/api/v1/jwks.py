from fastapi import APIRouter

from app.core.config import settings
from app.core.tokens import public_jwks

router = APIRouter()

@router.get("/jwks.json")
def jwks():
    """Public half of the access-token key, for services that verify access tokens."""
    return public_jwks(settings.public_key_pem)
