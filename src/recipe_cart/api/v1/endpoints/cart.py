"""Owner-scoped shopping cart endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from recipe_cart.api.dependencies import (
    get_app_settings,
    get_cart_store,
    get_sharing_gateway,
)
from recipe_cart.auth.dependencies import CurrentUser, get_current_user
from recipe_cart.core.config import Settings
from recipe_cart.core.exceptions import NotFoundException
from recipe_cart.schemas.cart import (
    CartResponse,
    SaveCartRequest,
    ShareCartResponse,
    UpdateCheckedItemsRequest,
)
from recipe_cart.services.cart import (
    Cart,
    CartNotFoundError,
    CartStore,
    SharingGateway,
)


router = APIRouter(prefix="/cart", tags=["Shopping Cart"])

CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
CartStoreDep = Annotated[CartStore, Depends(get_cart_store)]


def to_cart_response(cart: Cart) -> CartResponse:
    """Owner-facing view of a cart; stale checked keys are hidden."""
    return CartResponse(
        id=cart.id,
        user_id=cart.owner_id,
        recipe_ids=cart.recipe_ids,
        shopping_list=cart.shopping_list,
        checked_items=cart.visible_checked_items,
        share_token=cart.share_token,
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


def build_share_url(request: Request, settings: Settings, share_token: str) -> str:
    """Public link for a share token, on the configured web origin."""
    base = settings.cart.public_base_url or str(request.base_url)
    return f"{base.rstrip('/')}{settings.cart.shared_path}/{share_token}"


@router.get(
    "",
    response_model=CartResponse,
    summary="Get the caller's cart",
    responses={404: {"description": "No saved cart"}},
)
async def get_shopping_cart(
    user: CurrentUserDep,
    store: CartStoreDep,
) -> CartResponse:
    try:
        cart = await store.get(user.id)
    except CartNotFoundError:
        raise NotFoundException("Shopping cart") from None
    return to_cart_response(cart)


@router.put(
    "",
    response_model=CartResponse,
    summary="Save the caller's cart",
    description=(
        "Replaces the caller's cart with a new snapshot. An existing share "
        "link keeps working and shows the new list."
    ),
)
async def save_shopping_cart(
    body: SaveCartRequest,
    user: CurrentUserDep,
    store: CartStoreDep,
) -> CartResponse:
    cart = await store.put(
        user.id,
        body.recipe_ids,
        body.shopping_list,
        body.checked_items,
        owner_name=user.name,
        keep_share_token=True,
    )
    return to_cart_response(cart)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete the caller's cart",
)
async def delete_shopping_cart(
    user: CurrentUserDep,
    store: CartStoreDep,
) -> Response:
    await store.delete(user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/checked-items",
    response_model=CartResponse,
    summary="Replace the checked items of the caller's cart",
    responses={404: {"description": "No saved cart"}},
)
async def update_checked_items(
    body: UpdateCheckedItemsRequest,
    user: CurrentUserDep,
    store: CartStoreDep,
) -> CartResponse:
    try:
        cart = await store.update_checked_items(user.id, body.checked_items)
    except CartNotFoundError:
        raise NotFoundException("Shopping cart") from None
    return to_cart_response(cart)


@router.post(
    "/share",
    response_model=ShareCartResponse,
    summary="Share the caller's cart",
    description="Returns the cart's share link, creating it on first use.",
    responses={404: {"description": "No saved cart"}},
)
async def share_shopping_cart(
    request: Request,
    user: CurrentUserDep,
    gateway: Annotated[SharingGateway, Depends(get_sharing_gateway)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ShareCartResponse:
    try:
        result = await gateway.share(user.id)
    except CartNotFoundError:
        raise NotFoundException("Shopping cart") from None
    return ShareCartResponse(
        share_token=result.share_token,
        share_url=build_share_url(request, settings, result.share_token),
    )


@router.delete(
    "/share",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Stop sharing the caller's cart",
)
async def unshare_shopping_cart(
    user: CurrentUserDep,
    gateway: Annotated[SharingGateway, Depends(get_sharing_gateway)],
) -> Response:
    await gateway.unshare(user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
