"""Resolution of the acting user from the auth cookie."""

from fastapi import HTTPException, status

from blog.domain.service import JWTService


def require_user_id(jwt_service: JWTService, auth_token: str | None, action: str) -> str:
    """Return the authenticated user's ID or raise 401.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from the ``auth_token`` cookie
        action: Short description used in the error, e.g. "create comments"

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id
