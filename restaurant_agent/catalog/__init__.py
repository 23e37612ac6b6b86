from restaurant_agent.catalog.menu import MENU, Catalog

__all__ = ["MENU", "Catalog"]
