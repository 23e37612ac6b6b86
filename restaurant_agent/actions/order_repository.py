"""Flat-file JSON order repository."""
import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from restaurant_agent.models.domain import Order

logger = logging.getLogger(__name__)


class OrderStorageError(RuntimeError):
    """Raised when an order file cannot be read or written."""


class OrderRepository:
    """One indented JSON file per order, keyed by order ID."""
    
    def __init__(self, orders_dir: Union[str, Path]):
        """
        Initialize order repository.
        
        Args:
            orders_dir: Directory holding the order files (created if missing)
        """
        self.orders_dir = Path(orders_dir)
        self.orders_dir.mkdir(parents=True, exist_ok=True)
    
    def _path_for(self, order_id: str) -> Optional[Path]:
        # IDs come from the model; anything that is not a bare file stem is unknown.
        if not order_id or order_id in (".", "..") or "/" in order_id or "\\" in order_id:
            return None
        return self.orders_dir / f"{order_id}.json"
    
    def _is_record(self, path: Optional[Path]) -> bool:
        if path is None:
            return False
        try:
            return path.is_file()
        except OSError as e:
            # e.g. ENAMETOOLONG: no such record can exist under this ID
            logger.warning(f"ORDER_REPO: Unusable order path {path.name[:40]}...: {str(e)}")
            return False
    
    def next_order_id(self) -> str:
        """Generate an unused order ID from the current time in milliseconds."""
        candidate = int(time.time() * 1000)
        while (self.orders_dir / f"{candidate}.json").exists():
            candidate += 1
        return str(candidate)
    
    def _read(self, path: Path) -> Order:
        try:
            return Order.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError, ValueError) as e:
            logger.error(f"ORDER_REPO: Error reading {path.name}: {str(e)}", exc_info=True)
            raise OrderStorageError(f"Could not read order file {path.name}") from e
    
    def _write(self, order: Order) -> None:
        path = self.orders_dir / f"{order.order_id}.json"
        payload = json.dumps(order.to_record(), indent=2)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.orders_dir, prefix=f".{order.order_id}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            # Whole-record replace: readers see the old or the new file, never a partial one.
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"ORDER_REPO: Error writing {path.name}: {str(e)}", exc_info=True)
            raise OrderStorageError(f"Could not write order file {path.name}") from e
    
    def get_order(self, order_id: str) -> Optional[Order]:
        """Get order by ID, or None if no such record exists."""
        logger.info(f"ORDER_REPO: get_order - order_id: {order_id}")
        path = self._path_for(order_id)
        if not self._is_record(path):
            logger.warning(f"ORDER_REPO: Order not found - order_id: {order_id}")
            return None
        return self._read(path)
    
    def order_exists(self, order_id: str) -> bool:
        """Check if an order exists."""
        path = self._path_for(order_id)
        return self._is_record(path)
    
    def create_order(self, order: Order) -> Order:
        """Persist a new order."""
        logger.info(f"ORDER_REPO: create_order - order_id: {order.order_id}")
        if self.order_exists(order.order_id):
            raise OrderStorageError(f"Order {order.order_id} already exists")
        self._write(order)
        logger.info(f"ORDER_REPO: Order created - order_id: {order.order_id}")
        return order
    
    def save_order(self, order: Order) -> Order:
        """Rewrite an existing order record."""
        logger.info(f"ORDER_REPO: save_order - order_id: {order.order_id}")
        if not self.order_exists(order.order_id):
            raise OrderStorageError(f"Order {order.order_id} does not exist")
        self._write(order)
        return order
    
    def list_orders(self) -> List[Order]:
        """List all orders sorted by file name."""
        logger.info("ORDER_REPO: list_orders")
        try:
            paths = sorted(self.orders_dir.glob("*.json"))
        except OSError as e:
            logger.error(f"ORDER_REPO: Error listing orders: {str(e)}", exc_info=True)
            raise OrderStorageError("Could not list order files") from e
        orders = [self._read(path) for path in paths]
        logger.info(f"ORDER_REPO: Found {len(orders)} orders")
        return orders
