from authgate.models.revoked_token import RevokedToken
from authgate.models.user import User

__all__ = ["RevokedToken", "User"]
