import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from restaurant_agent.actions.order_repository import OrderRepository, OrderStorageError
from restaurant_agent.models.domain import Order


def make_order(order_id="1700000000000", **overrides):
    data = dict(
        order_id=order_id,
        customer_name="John",
        items=["Garlic Bread"],
        total_price=5.99,
        status="pending",
        timestamp=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )
    data.update(overrides)
    return Order(**data)


class TestOrderRepository:
    """Tests for the flat-file order store"""
    
    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "orders"
        OrderRepository(target)
        assert target.is_dir()
    
    def test_create_and_get(self, repository):
        order = make_order()
        repository.create_order(order)
        
        assert repository.get_order(order.order_id) == order
    
    def test_record_layout(self, repository, orders_dir):
        repository.create_order(make_order())
        
        text = (orders_dir / "1700000000000.json").read_text()
        assert text.startswith('{\n  "orderId"')
        assert json.loads(text) == {
            "orderId": "1700000000000",
            "customerName": "John",
            "items": ["Garlic Bread"],
            "totalPrice": 5.99,
            "status": "pending",
            "timestamp": "2024-01-01T12:00:00Z",
        }
    
    def test_missing_order_is_none(self, repository):
        assert repository.get_order("42") is None
    
    @pytest.mark.parametrize("order_id", ["", "..", "../secret", "a/b", "a\\b"])
    def test_path_like_ids_are_not_found(self, repository, order_id):
        assert repository.get_order(order_id) is None
        assert repository.order_exists(order_id) is False
    
    def test_overlong_id_is_not_found(self, repository):
        assert repository.get_order("9" * 300) is None
        assert repository.order_exists("9" * 300) is False
    
    def test_malformed_file_raises_storage_error(self, repository, orders_dir):
        (orders_dir / "123.json").write_text("{not json")
        
        with pytest.raises(OrderStorageError):
            repository.get_order("123")
        with pytest.raises(OrderStorageError):
            repository.list_orders()
    
    def test_create_twice_rejected(self, repository):
        repository.create_order(make_order())
        with pytest.raises(OrderStorageError):
            repository.create_order(make_order())
    
    def test_save_requires_existing_order(self, repository):
        with pytest.raises(OrderStorageError):
            repository.save_order(make_order())
    
    def test_save_replaces_whole_record(self, repository, orders_dir):
        repository.create_order(make_order())
        repository.save_order(make_order(status="ready"))
        
        assert repository.get_order("1700000000000").status == "ready"
        assert [p.name for p in orders_dir.iterdir()] == ["1700000000000.json"]
    
    def test_list_orders_sorted_by_id(self, repository):
        repository.create_order(make_order("300"))
        repository.create_order(make_order("100"))
        repository.create_order(make_order("200"))
        
        assert [o.order_id for o in repository.list_orders()] == ["100", "200", "300"]
    
    def test_next_order_id_from_clock(self, repository):
        with patch("restaurant_agent.actions.order_repository.time.time", return_value=1621234567.5):
            assert repository.next_order_id() == "1621234567500"
    
    def test_next_order_id_skips_existing(self, repository):
        repository.create_order(make_order("1621234567500"))
        repository.create_order(make_order("1621234567501"))
        
        with patch("restaurant_agent.actions.order_repository.time.time", return_value=1621234567.5):
            assert repository.next_order_id() == "1621234567502"
