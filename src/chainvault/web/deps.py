from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chainvault.app import App
from chainvault.core.modules.session.models import AuthToken
from chainvault.errors import AuthenticationRequiredError

bearer_scheme = HTTPBearer(auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> AuthToken:
    """Extract the bearer token from the Authorization header.

    Only presence is checked here; signature and expiry are validated by App methods.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError
    return AuthToken(credentials.credentials)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
