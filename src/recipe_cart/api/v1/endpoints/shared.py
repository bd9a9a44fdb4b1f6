"""Public shared-cart endpoints.

No authentication: possession of the share token is the authorization.
"""

# Annotations stay eager here: FastAPI resolves postponed ones against the
# rate limiter wrapper's module globals.
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status

from recipe_cart.api.dependencies import get_sharing_gateway
from recipe_cart.cache.rate_limit import rate_limit_shared_cart
from recipe_cart.core.exceptions import NotFoundException
from recipe_cart.schemas.cart import SharedCartResponse, UpdateCheckedItemsRequest
from recipe_cart.services.cart import SharedCartNotFoundError, SharingGateway


router = APIRouter(prefix="/cart/shared", tags=["Shared Cart"])

SharingGatewayDep = Annotated[SharingGateway, Depends(get_sharing_gateway)]
ShareTokenPath = Annotated[
    str,
    Path(alias="shareToken", min_length=1, max_length=128),
]


@router.get(
    "/{shareToken}",
    response_model=SharedCartResponse,
    summary="Read a shared cart",
    responses={404: {"description": "Unknown or revoked share link"}},
)
async def get_shared_cart(
    share_token: ShareTokenPath,
    gateway: SharingGatewayDep,
) -> SharedCartResponse:
    try:
        shared = await gateway.read_by_token(share_token)
    except SharedCartNotFoundError:
        raise NotFoundException("Shared cart") from None
    return SharedCartResponse(
        shopping_list=shared.shopping_list,
        checked_items=shared.checked_items,
        owner_name=shared.owner_name,
        share_token=shared.share_token,
    )


@router.put(
    "/{shareToken}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update the checked items of a shared cart",
    responses={
        404: {"description": "Unknown or revoked share link"},
        429: {"description": "Too many updates from this client"},
    },
)
@rate_limit_shared_cart()
async def update_shared_cart(
    request: Request,  # noqa: ARG001 - required by the rate limiter
    share_token: ShareTokenPath,
    body: UpdateCheckedItemsRequest,
    gateway: SharingGatewayDep,
) -> Response:
    try:
        await gateway.update_by_token(share_token, body.checked_items)
    except SharedCartNotFoundError:
        raise NotFoundException("Shared cart") from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
