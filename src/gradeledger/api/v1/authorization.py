"""
Authorization API Endpoints

Owner-only management of the callers allowed to mutate ledger data.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, Response, status

from gradeledger.api.dependencies import get_caller, get_ledger
from gradeledger.core.schemas import AuthorizationRequest, AuthorizationStatus
from gradeledger.ledger import StudentLedger

router = APIRouter()


@router.post("/", response_model=AuthorizationStatus, status_code=status.HTTP_201_CREATED)
async def authorize_identity(
    request: AuthorizationRequest,
    caller: str = Depends(get_caller),
    ledger: StudentLedger = Depends(get_ledger),
) -> AuthorizationStatus:
    """Allow an identity to mutate ledger data (owner only)."""
    await ledger.authorize(caller, request.identity)
    return AuthorizationStatus(identity=request.identity, authorized=True, is_owner=False)


@router.delete("/{identity}", status_code=status.HTTP_204_NO_CONTENT)
async def deauthorize_identity(
    identity: str,
    caller: str = Depends(get_caller),
    ledger: StudentLedger = Depends(get_ledger),
) -> Response:
    """Revoke an identity's write access (owner only)."""
    await ledger.deauthorize(caller, identity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{identity}", response_model=AuthorizationStatus)
async def get_authorization(
    identity: str, ledger: StudentLedger = Depends(get_ledger)
) -> AuthorizationStatus:
    """Check whether an identity may mutate ledger data."""
    return AuthorizationStatus(
        identity=identity,
        authorized=await ledger.is_authorized(identity),
        is_owner=identity == ledger.owner,
    )
