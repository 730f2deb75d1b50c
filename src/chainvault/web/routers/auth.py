from fastapi import APIRouter

from chainvault.core.modules.auth.models import LoginResult, NonceRequest, NonceResponse, VerifyRequest
from chainvault.web.deps import AppDep
from chainvault.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


@router.post(
    "/auth/nonce",
    summary="Request login nonce",
    description=(
        "Issue a single-use nonce for the wallet, creating its user record on first contact. "
        "Requesting a new nonce invalidates any earlier one for the same wallet."
    ),
    operation_id="requestNonce",
    responses={
        200: {"description": "Nonce issued"},
        400: {"model": ErrorResponse, "description": "Malformed wallet address"},
    },
)
async def request_nonce(body: NonceRequest, app: AppDep) -> NonceResponse:
    nonce = await app.request_nonce(body.wallet_address)
    return NonceResponse(nonce=nonce)


@router.post(
    "/auth/verify",
    summary="Verify signed nonce",
    description=(
        "Verify a personal_sign signature over the authentication message containing the nonce. "
        "On success the nonce is consumed and a session token is returned."
    ),
    operation_id="verifySignature",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Malformed request"},
        401: {"model": ErrorResponse, "description": "Unknown wallet, stale nonce, or invalid signature"},
    },
)
async def verify_signature(body: VerifyRequest, app: AppDep) -> LoginResult:
    return await app.login(body.wallet_address, body.signature, body.nonce)
