from jose import JWTError, jwt
from hotel_console.config import settings
from hotel_console.core.exceptions import UnauthorizedException

# Claims every console token must carry, with the error reported when absent
REQUIRED_CLAIMS = {
    "exp": "Token missing expiration",
    "sub": "Token missing user identifier",
}


def decode_jwt(token: str) -> dict:
    """
    Decode a platform-issued access token and check the console's claims.

    Signature and expiry are verified by jose with the shared SECRET_KEY;
    `exp` and a non-blank `sub` must also be present.

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {e}") from e

    for claim, message in REQUIRED_CLAIMS.items():
        value = payload.get(claim)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise UnauthorizedException(message)
    return payload


def extract_operator_id(token: str) -> str:
    """Operator id (the `sub` claim) of a valid token"""
    return str(decode_jwt(token)["sub"]).strip()
