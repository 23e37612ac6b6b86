"""Tool declarations and dispatch for the agent loop."""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from langsmith import traceable

from restaurant_agent.actions.order_service import OrderService
from restaurant_agent.catalog.menu import Catalog

logger = logging.getLogger(__name__)


class ToolArgumentError(ValueError):
    """Raised when an action input cannot be bound to a tool's parameters."""


class ToolExecutionError(RuntimeError):
    """Raised when a tool implementation fails during dispatch."""


@dataclass(frozen=True)
class ToolParameter:
    """Named parameter as seen by the model."""
    name: str
    type: str
    description: str = ""
    required: bool = True
    argument: Optional[str] = None

    @property
    def keyword(self) -> str:
        return self.argument or self.name


@dataclass(frozen=True)
class ToolSpec:
    """A callable capability plus the schema the model must follow."""
    name: str
    func: Callable[..., Any]
    description: str
    parameters: Tuple[ToolParameter, ...] = field(default_factory=tuple)
    returns: str = "object"

    def signature(self) -> str:
        params = ", ".join(
            f"{p.name}{'' if p.required else '?'}: {p.type}" for p in self.parameters
        )
        return f"function {self.name}({params}): {self.returns}"

    def bind(self, tool_input: Any) -> Dict[str, Any]:
        """
        Map an action input onto keyword arguments.

        Args:
            tool_input: None, a scalar, a list (positional) or an object (by name)

        Returns:
            Keyword arguments for ``func``

        Raises:
            ToolArgumentError: If fields are unknown, missing or too many
        """
        by_name = {p.name: p for p in self.parameters}
        values: Dict[str, Any] = {}

        if tool_input is None:
            pass
        elif isinstance(tool_input, dict):
            unknown = [key for key in tool_input if key not in by_name]
            if unknown:
                raise ToolArgumentError(f"unknown field(s) {', '.join(sorted(unknown))}")
            values = dict(tool_input)
        elif isinstance(tool_input, (list, tuple)):
            if len(tool_input) > len(self.parameters):
                raise ToolArgumentError(
                    f"expected at most {len(self.parameters)} value(s), got {len(tool_input)}"
                )
            values = {p.name: v for p, v in zip(self.parameters, tool_input)}
        else:
            if not self.parameters:
                raise ToolArgumentError("takes no input")
            values = {self.parameters[0].name: tool_input}

        missing = [p.name for p in self.parameters if p.required and p.name not in values]
        if missing:
            raise ToolArgumentError(f"missing required field(s) {', '.join(missing)}")
        return {by_name[name].keyword: value for name, value in values.items()}


class ToolRegistry:
    """Closed mapping from tool name to ToolSpec."""

    def __init__(self, specs: Iterable[ToolSpec]):
        self._tools: Dict[str, ToolSpec] = {}
        for spec in specs:
            if spec.name in self._tools:
                raise ValueError(f"Duplicate tool name: {spec.name}")
            self._tools[spec.name] = spec

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def names(self) -> List[str]:
        return list(self._tools)

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._tools.get(name)

    def describe(self) -> str:
        """Render the tool list for the system prompt."""
        blocks = []
        for spec in self._tools.values():
            lines = [f"- {spec.signature()}", f"  {spec.description}"]
            for param in spec.parameters:
                if param.description:
                    lines.append(f"  {param.name}: {param.description}")
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    @traceable(name="tool_dispatch")
    def dispatch(self, name: str, tool_input: Any = None) -> Any:
        """
        Invoke a tool and return its result as the observation payload.

        Unknown tools and unusable inputs become error strings so the model
        can correct itself. Failures inside a tool raise ToolExecutionError.
        """
        spec = self._tools.get(name)
        if spec is None:
            logger.warning(f"TOOLS: Function not found - {name}")
            return f"Error: Function {name} not found"

        try:
            kwargs = spec.bind(tool_input)
        except ToolArgumentError as e:
            logger.warning(f"TOOLS: Invalid input for {name}: {e}")
            return f"Error: Invalid input for {name}: {e}"

        logger.info(f"TOOLS: dispatch - {name}({', '.join(kwargs)})")
        try:
            return spec.func(**kwargs)
        except Exception as e:
            logger.error(f"TOOLS: {name} raised: {str(e)}", exc_info=True)
            raise ToolExecutionError(f"Tool {name} failed: {e}") from e


def build_default_registry(catalog: Catalog, order_service: OrderService) -> ToolRegistry:
    """Registry with the menu and order tools of the restaurant assistant."""

    def get_menu():
        return catalog.get_all()

    def get_menu_category(category):
        items = catalog.get_category(category)
        return "Category not found" if items is None else items

    def get_price(item):
        price = catalog.get_price(item)
        return "Item not found" if price is None else price

    def check_item_availability(item):
        return catalog.is_available(item)

    order_id = ToolParameter("orderId", "string", argument="order_id")
    item = ToolParameter("item", "string")

    return ToolRegistry([
        ToolSpec(
            "getMenu", get_menu,
            "Returns the full menu with categories, items, and prices.",
        ),
        ToolSpec(
            "getMenuCategory", get_menu_category,
            "Returns items and prices for a specific menu category.",
            (ToolParameter("category", "string"),),
        ),
        ToolSpec(
            "getPrice", get_price,
            'Returns the price of a specific menu item or "Item not found".',
            (item,), returns="number | string",
        ),
        ToolSpec(
            "checkItemAvailability", check_item_availability,
            "Checks if an item exists in the menu.",
            (item,), returns="boolean",
        ),
        ToolSpec(
            "createOrder", order_service.create_order,
            "Creates a new order with the given customer name and items. Returns order "
            "details including orderId, valid items, invalid items, total price, and status.",
            (
                ToolParameter("customerName", "string", argument="customer_name"),
                ToolParameter("items", "string[]"),
            ),
        ),
        ToolSpec(
            "getOrderDetails", order_service.get_order_details,
            "Returns details of an order by ID or error message if not found.",
            (order_id,), returns="object | string",
        ),
        ToolSpec(
            "updateOrderStatus", order_service.update_order_status,
            'Updates the status of an order (e.g., "pending", "preparing", "ready", '
            '"delivered"). Returns success status or error message.',
            (order_id, ToolParameter("status", "string")), returns="object | string",
        ),
        ToolSpec(
            "getAllOrders", order_service.get_all_orders,
            "Returns all orders or error message.",
            returns="array | string",
        ),
        ToolSpec(
            "getPendingOrders", order_service.get_pending_orders,
            "Returns all pending orders or error message.",
            returns="array | string",
        ),
        ToolSpec(
            "calculateBill", order_service.calculate_bill,
            "Calculates the bill for an order, returning order details with total price.",
            (order_id,), returns="object | string",
        ),
        ToolSpec(
            "addItemToOrder", order_service.add_item_to_order,
            "Adds an item to an existing order and updates the total price. "
            "Returns success status or error message.",
            (order_id, item), returns="object | string",
        ),
        ToolSpec(
            "removeItemFromOrder", order_service.remove_item_from_order,
            "Removes an item from an existing order and updates the total price. "
            "Returns success status or error message.",
            (order_id, item), returns="object | string",
        ),
    ])
