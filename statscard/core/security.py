from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer


bearer_scheme = HTTPBearer(auto_error=False)

MISSING_TOKEN_DETAIL = "Authorization Bearer token with a GitHub token is required"


def extract_github_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    """Return the GitHub token carried in a Bearer authorization header.

    Raises:
        HTTPException: If credentials are missing, use another scheme, or are
            blank.
    """

    token = ""
    if credentials is not None and credentials.scheme.lower() == "bearer":
        token = credentials.credentials.strip()

    if not token:
        raise HTTPException(status_code=401, detail=MISSING_TOKEN_DETAIL)
    return token
