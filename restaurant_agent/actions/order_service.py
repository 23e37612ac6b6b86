"""Order operations exposed to the assistant as tools.

Every method returns data the agent can hand back to the model as an
observation: failures come back as short strings (or ``success: False``
dicts for business rule violations) instead of exceptions.
"""
import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Union

from langsmith import traceable

from restaurant_agent.actions.order_repository import OrderRepository, OrderStorageError
from restaurant_agent.catalog.menu import CENTS, Catalog
from restaurant_agent.models.domain import Order, OrderStatus

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND = "Order not found"

SoftResult = Union[Dict[str, Any], str]


class OrderService:
    """Service for order operations."""
    
    def __init__(self, order_repository: OrderRepository, catalog: Catalog):
        """
        Initialize order service.
        
        Args:
            order_repository: Repository for order data access
            catalog: Menu used to validate and price items
        """
        self.order_repository = order_repository
        self.catalog = catalog
    
    def _total(self, items: Iterable[str]) -> float:
        total = Decimal("0")
        for item in items:
            price = self.catalog.get_price(item)
            if price is None:
                logger.warning(f"ORDER_SERVICE: Item no longer on the menu, priced at 0: {item}")
                continue
            total += price
        return float(total.quantize(CENTS, rounding=ROUND_HALF_UP))
    
    @traceable(name="create_order")
    def create_order(self, customer_name: str, items: List[str]) -> SoftResult:
        """
        Create a new order, keeping only items found on the menu.
        
        Args:
            customer_name: Name the order is placed under
            items: Requested item names
            
        Returns:
            orderId, validItems, invalidItems, totalPrice and status
        """
        if not isinstance(customer_name, str) or not customer_name.strip():
            logger.warning(f"ORDER_SERVICE: create_order rejected - customer_name: {customer_name!r}")
            return {"success": False, "message": "Customer name is required"}
        if isinstance(items, str):
            items = [items]
        valid_items = []
        invalid_items = []
        for item in items or []:
            if isinstance(item, str) and self.catalog.is_available(item):
                valid_items.append(item)
            else:
                invalid_items.append(item)
        
        order = Order(
            order_id=self.order_repository.next_order_id(),
            customer_name=customer_name,
            items=valid_items,
            total_price=self._total(valid_items),
            status=OrderStatus.PENDING.value,
            timestamp=datetime.now(timezone.utc),
        )
        try:
            self.order_repository.create_order(order)
        except OrderStorageError:
            return "Error creating order"
        
        logger.info(
            f"ORDER_SERVICE: create_order - order_id: {order.order_id}, "
            f"valid: {len(valid_items)}, invalid: {len(invalid_items)}"
        )
        return {
            "orderId": order.order_id,
            "validItems": valid_items,
            "invalidItems": invalid_items,
            "totalPrice": order.total_price,
            "status": order.status,
        }
    
    def get_order_details(self, order_id: str) -> SoftResult:
        """Return the full order record or an error message."""
        try:
            order = self.order_repository.get_order(str(order_id))
        except OrderStorageError:
            return "Error retrieving order"
        if order is None:
            return ORDER_NOT_FOUND
        return order.to_record()
    
    @traceable(name="update_order_status")
    def update_order_status(self, order_id: str, status: str) -> SoftResult:
        """
        Set the status of an order.
        
        Any status string is accepted; see OrderStatus for the documented ones.
        """
        order_id = str(order_id)
        try:
            order = self.order_repository.get_order(order_id)
            if order is None:
                return ORDER_NOT_FOUND
            updated = order.model_copy(update={"status": str(status)})
            self.order_repository.save_order(updated)
        except OrderStorageError:
            return "Error updating order"
        
        logger.info(f"ORDER_SERVICE: update_order_status - order_id: {order_id}, status: {status}")
        return {"success": True, "orderId": order_id, "status": updated.status}
    
    def get_all_orders(self) -> Union[List[Dict[str, Any]], str]:
        """Return every stored order record."""
        try:
            return [order.to_record() for order in self.order_repository.list_orders()]
        except OrderStorageError:
            return "Error retrieving orders"
    
    def get_pending_orders(self) -> Union[List[Dict[str, Any]], str]:
        """Return stored orders whose status is pending."""
        try:
            orders = self.order_repository.list_orders()
        except OrderStorageError:
            return "Error retrieving pending orders"
        return [
            order.to_record()
            for order in orders
            if order.status == OrderStatus.PENDING.value
        ]
    
    def calculate_bill(self, order_id: str) -> SoftResult:
        """Bill view of an order."""
        details = self.get_order_details(order_id)
        if isinstance(details, str):
            return details
        return {
            "orderId": details["orderId"],
            "customerName": details["customerName"],
            "items": details["items"],
            "totalPrice": details["totalPrice"],
            "status": details["status"],
        }
    
    @traceable(name="add_item_to_order")
    def add_item_to_order(self, order_id: str, item: str) -> SoftResult:
        """Append a menu item to an order and recompute its total."""
        order_id = str(order_id)
        try:
            order = self.order_repository.get_order(order_id)
            if order is None:
                return ORDER_NOT_FOUND
            if not self.catalog.is_available(item):
                return {"success": False, "message": "Item not found in menu"}
            
            items = [*order.items, item]
            updated = order.model_copy(update={"items": items, "total_price": self._total(items)})
            self.order_repository.save_order(updated)
        except OrderStorageError:
            return "Error updating order"
        
        logger.info(f"ORDER_SERVICE: add_item_to_order - order_id: {order_id}, item: {item}")
        return {"success": True, "orderId": order_id, "item": item, "newTotal": updated.total_price}
    
    @traceable(name="remove_item_from_order")
    def remove_item_from_order(self, order_id: str, item: str) -> SoftResult:
        """Remove the first occurrence of an item and recompute the total."""
        order_id = str(order_id)
        try:
            order = self.order_repository.get_order(order_id)
            if order is None:
                return ORDER_NOT_FOUND
            if item not in order.items:
                return {"success": False, "message": "Item not found in order"}
            
            items = list(order.items)
            items.remove(item)
            updated = order.model_copy(update={"items": items, "total_price": self._total(items)})
            self.order_repository.save_order(updated)
        except OrderStorageError:
            return "Error updating order"
        
        logger.info(f"ORDER_SERVICE: remove_item_from_order - order_id: {order_id}, item: {item}")
        return {"success": True, "orderId": order_id, "item": item, "newTotal": updated.total_price}
