from enum import Enum
from typing import Optional


class View(Enum):
    DASHBOARD = ('Dashboard', '/')
    PRODUCTS = ('Products', '/products')
    INVENTORY = ('Inventory', '/inventory')
    STORES = ('Stores', '/stores')
    TRENDING = ('Trending', '/trending')

    def __init__(self, label: str, path: str):
        self.label = label
        self.path = path

    @property
    def nav_id(self) -> str:
        return f"nav-{self.name.lower()}"

    @classmethod
    def from_path(cls, pathname: Optional[str]) -> 'View':
        path = (pathname or '/').split('?', 1)[0].rstrip('/') or '/'
        for view in cls:
            if view.path == path:
                return view
        return cls.DASHBOARD
