"""Address book router for the authenticated user."""

import logging
from uuid import UUID

from fastapi import APIRouter, status

from shopfront.presentation.api.dependencies import (
    AddressServiceDep,
    CurrentAuth,
    DBSession,
)
from shopfront.presentation.api.schemas import (
    ERROR_RESPONSES,
    AddressCreateRequest,
    AddressResponse,
    AddressUpdateRequest,
    ApiResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("", summary="List addresses")
async def list_addresses(
    auth: CurrentAuth,
    address_service: AddressServiceDep,
) -> ApiResponse[list[AddressResponse]]:
    """List the caller's addresses, default first."""
    addresses = await address_service.list_addresses(auth.user_id)
    return ApiResponse(
        message="Addresses retrieved successfully",
        data=[AddressResponse.from_domain(a) for a in addresses],
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create address",
    responses={400: {"description": "Invalid address"}},
)
async def create_address(
    request: AddressCreateRequest,
    auth: CurrentAuth,
    address_service: AddressServiceDep,
    session: DBSession,
) -> ApiResponse[AddressResponse]:
    """
    Add an address.

    The first address always becomes the default; ``is_default`` on a
    later one moves the default to it.
    """
    address = await address_service.create_address(
        user_id=auth.user_id,
        **request.model_dump(),
    )
    await session.commit()

    return ApiResponse(
        message="Address created successfully",
        data=AddressResponse.from_domain(address),
    )


@router.put(
    "/{address_id}",
    summary="Update address",
    responses={404: {"description": "Address not found"}},
)
async def update_address(
    address_id: UUID,
    request: AddressUpdateRequest,
    auth: CurrentAuth,
    address_service: AddressServiceDep,
    session: DBSession,
) -> ApiResponse[AddressResponse]:
    address = await address_service.update_address(
        auth.user_id,
        address_id,
        **request.model_dump(exclude_unset=True),
    )
    await session.commit()

    return ApiResponse(
        message="Address updated successfully",
        data=AddressResponse.from_domain(address),
    )


@router.delete(
    "/{address_id}",
    summary="Delete address",
    responses={404: {"description": "Address not found"}},
)
async def delete_address(
    address_id: UUID,
    auth: CurrentAuth,
    address_service: AddressServiceDep,
    session: DBSession,
) -> ApiResponse[None]:
    await address_service.delete_address(auth.user_id, address_id)
    await session.commit()

    return ApiResponse(message="Address deleted successfully")


@router.post(
    "/{address_id}/default",
    summary="Make address the default",
    responses={404: {"description": "Address not found"}},
)
async def set_default_address(
    address_id: UUID,
    auth: CurrentAuth,
    address_service: AddressServiceDep,
    session: DBSession,
) -> ApiResponse[AddressResponse]:
    address = await address_service.set_default(auth.user_id, address_id)
    await session.commit()

    return ApiResponse(
        message="Default address updated successfully",
        data=AddressResponse.from_domain(address),
    )
