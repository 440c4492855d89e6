"""
Packing manifest rendering.

Turns an order and its joined line items into a printable HTML page.
"""
import logging
from typing import Callable, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from core.application.interfaces import IManifestRenderer
from core.domain.entities.order import OrderWithItems

logger = logging.getLogger(__name__)

MANIFEST_TEMPLATE = "manifest.html"


class JinjaManifestRenderer(IManifestRenderer):
    """Jinja2 renderer; templates ship inside this package."""

    def __init__(
        self,
        encode_id: Callable[[int], str],
        environment: Optional[Environment] = None,
    ) -> None:
        self._encode_id = encode_id
        self._env = environment or Environment(
            loader=PackageLoader("core.infrastructure.rendering", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, order_with_items: OrderWithItems) -> str:
        order = order_with_items.order
        template = self._env.get_template(MANIFEST_TEMPLATE)

        lines = sorted(
            order_with_items.items,
            key=lambda line: (line.product_bin_location, line.product_name),
        )

        logger.debug(f"Rendering manifest for order {order.order_number.value} ({len(lines)} lines)")

        return template.render(
            order_id=self._encode_id(order.id),
            order_number=order.order_number.value,
            store_id=self._encode_id(order.store_id),
            status=order.status.value,
            created_at=order.created_at,
            notes=order.notes,
            total_amount=f"{order.total_amount.amount:.2f}",
            total_units=sum(line.item.quantity for line in lines),
            lines=[
                {
                    "product_id": self._encode_id(line.item.product_id),
                    "name": line.product_name,
                    "sku": line.product_sku,
                    "category": line.category_name,
                    "bin_location": line.product_bin_location,
                    "unit_type": line.product_unit_type,
                    "quantity": line.item.quantity,
                    "unit_price": f"{line.item.unit_price.amount:.2f}",
                    "total_price": f"{line.item.total_price.amount:.2f}",
                }
                for line in lines
            ],
        )
