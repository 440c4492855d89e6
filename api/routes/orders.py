"""
Orders endpoints.

Every id in paths and bodies is a hashed id; it is decoded here and the
service only ever sees internal integers.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse
import logging

from api.dependencies import (
    get_current_identity,
    get_id_codec,
    get_manifest_renderer,
    get_order_service,
)
from api.envelope import success_response
from core.application.commands import OrderLineRequest, PlaceOrderCommand, UpdateOrderStatusCommand
from core.application.dtos import (
    CreateOrderRequest,
    OrderDTO,
    OrderWithItemsDTO,
    UpdateOrderStatusRequest,
)
from core.application.interfaces import IIdCodec, IManifestRenderer
from core.application.services import OrderApplicationService
from core.domain.enums import OrderStatus
from core.domain.exceptions import ValidationError
from core.domain.value_objects import CallerIdentity


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# LIST ORDERS
# =============================================================================

@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="List orders",
    description="Admins see every order; store users see their own store's orders",
)
async def list_orders(
    identity: CallerIdentity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
    codec: IIdCodec = Depends(get_id_codec),
):
    orders = await service.list_orders(identity)
    return success_response([OrderDTO.from_domain(order, codec.encode) for order in orders])


@router.get(
    "/store/{store_id}",
    status_code=status.HTTP_200_OK,
    summary="List orders for one store",
)
async def list_store_orders(
    store_id: str,
    identity: CallerIdentity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
    codec: IIdCodec = Depends(get_id_codec),
):
    orders = await service.list_store_orders(identity, codec.decode(store_id))
    return success_response([OrderDTO.from_domain(order, codec.encode) for order in orders])


# =============================================================================
# GET ORDER BY ID
# =============================================================================

@router.get(
    "/{order_id}",
    status_code=status.HTTP_200_OK,
    summary="Get order with items",
)
async def get_order(
    order_id: str,
    identity: CallerIdentity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
    codec: IIdCodec = Depends(get_id_codec),
):
    found = await service.get_order(identity, codec.decode(order_id))
    return success_response(OrderWithItemsDTO.from_read_model(found, codec.encode))


@router.get(
    "/{order_id}/manifest",
    response_class=HTMLResponse,
    summary="Printable packing manifest",
)
async def get_order_manifest(
    order_id: str,
    identity: CallerIdentity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
    codec: IIdCodec = Depends(get_id_codec),
    renderer: IManifestRenderer = Depends(get_manifest_renderer),
):
    found = await service.get_order(identity, codec.decode(order_id))
    return HTMLResponse(content=renderer.render(found))


# =============================================================================
# CREATE ORDER
# =============================================================================

@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
    description="Prices come from the catalog; the request only names products and quantities",
)
async def create_order(
    request: CreateOrderRequest,
    identity: CallerIdentity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
    codec: IIdCodec = Depends(get_id_codec),
):
    command = PlaceOrderCommand(
        store_id=codec.decode(request.store_id),
        lines=[
            OrderLineRequest(product_id=codec.decode(item.product_id), quantity=item.quantity)
            for item in request.items
        ],
        notes=request.notes,
    )

    created = await service.create_order(identity, command)

    return success_response(
        OrderWithItemsDTO.from_read_model(created, codec.encode),
        message="Order created successfully",
        status_code=status.HTTP_201_CREATED,
    )


# =============================================================================
# UPDATE STATUS
# =============================================================================

@router.put(
    "/{order_id}/status",
    status_code=status.HTTP_200_OK,
    summary="Change order status",
)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    identity: CallerIdentity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
    codec: IIdCodec = Depends(get_id_codec),
):
    target = OrderStatus.parse(request.status)
    if target is None:
        raise ValidationError(f"Unknown order status: {request.status}")

    updated = await service.update_status(
        identity,
        UpdateOrderStatusCommand(order_id=codec.decode(order_id), status=target, notes=request.notes),
    )

    return success_response(
        OrderWithItemsDTO.from_read_model(updated, codec.encode),
        message="Order status updated successfully",
    )
