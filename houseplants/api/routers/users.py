"""Users router — the calling user."""

from fastapi import APIRouter, Depends, status

from houseplants.api.deps import get_principal
from houseplants.api.schemas import Envelope, envelope
from houseplants.core.auth import Principal

router = APIRouter()


@router.get("/me", response_model=Envelope)
async def get_me(principal: Principal = Depends(get_principal)):
    """Get information about the current user."""
    return envelope(status.HTTP_200_OK, {
        "uid": principal.uid,
        "displayName": principal.display_name,
        "email": principal.email,
    })
