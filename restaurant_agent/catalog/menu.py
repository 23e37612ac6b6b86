"""Static restaurant menu and catalog lookups."""
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Mapping, Optional


MENU: Dict[str, Dict[str, str]] = {
    "Appetizers": {
        "Garlic Bread": "5.99",
        "Mozzarella Sticks": "7.99",
        "Chicken Wings": "9.99",
        "Soup of the Day": "4.99",
    },
    "Main Courses": {
        "Spaghetti Bolognese": "12.99",
        "Grilled Salmon": "18.99",
        "Chicken Alfredo": "14.99",
        "Vegetable Stir Fry": "11.99",
        "Steak": "22.99",
    },
    "Desserts": {
        "Chocolate Cake": "6.99",
        "Cheesecake": "7.99",
        "Ice Cream": "4.99",
        "Fruit Salad": "5.99",
    },
    "Drinks": {
        "Soda": "2.99",
        "Coffee": "3.99",
        "Tea": "2.99",
        "Wine": "8.99",
        "Beer": "5.99",
    },
}

CENTS = Decimal("0.01")


class Catalog:
    """Read-only price list organized as category -> item -> price."""
    
    def __init__(self, menu: Mapping[str, Mapping[str, object]] = MENU):
        """
        Initialize catalog.
        
        Args:
            menu: Category mapping; prices are converted to Decimal cents
        """
        categories = {}
        for category, items in menu.items():
            prices = {}
            for item, price in items.items():
                value = Decimal(str(price)).quantize(CENTS)
                if value < 0:
                    raise ValueError(f"Negative price for {item}: {price}")
                prices[item] = value
            categories[category] = MappingProxyType(prices)
        self._categories = MappingProxyType(categories)
    
    def get_all(self) -> Dict[str, Dict[str, Decimal]]:
        """Return a copy of the full menu."""
        return {category: dict(items) for category, items in self._categories.items()}
    
    def get_category(self, name: str) -> Optional[Dict[str, Decimal]]:
        """Return items of a category, or None if the category does not exist."""
        items = self._categories.get(name)
        if items is None:
            return None
        return dict(items)
    
    def get_price(self, item: str) -> Optional[Decimal]:
        """Return the price of an item, first category in menu order wins."""
        for items in self._categories.values():
            if item in items:
                return items[item]
        return None
    
    def is_available(self, item: str) -> bool:
        """Check if an item exists in the menu."""
        return self.get_price(item) is not None
