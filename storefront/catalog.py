"""
Product catalog and search filter.

The catalog is static. Searching does not drop products: every entry comes
back with a ``matches`` flag and the page dims the ones that don't match.
"""
from dataclasses import dataclass
from typing import Iterable, List, Literal

Category = Literal["hardware", "game"]


@dataclass(frozen=True)
class Product:
    """Catalog entry. ``name`` is also the cart line item key."""
    name: str
    price: int
    category: Category
    description: str = ""

    @property
    def search_text(self) -> str:
        """Everything a shopper can read on the product card."""
        return f"{self.name} {self.description} {self.category}".lower()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "description": self.description,
        }


CATALOG: List[Product] = [
    Product("RTX 4070 Graphics Card", 12999, "hardware", "12GB GDDR6X, ray tracing and DLSS 3"),
    Product("Mechanical Keyboard", 1499, "hardware", "RGB backlit, hot-swappable switches"),
    Product("Gaming Mouse", 799, "hardware", "16000 DPI optical sensor, 8 programmable buttons"),
    Product("27\" 165Hz Monitor", 4999, "hardware", "QHD IPS panel, 1ms response time"),
    Product("Wireless Headset", 1899, "hardware", "7.1 surround sound, noise-cancelling mic"),
    Product("Elden Ring", 899, "game", "Open-world action RPG"),
    Product("Cyberpunk 2077", 699, "game", "Open-world RPG set in Night City"),
    Product("EA Sports FC 24", 1099, "game", "Football simulation"),
    Product("Minecraft", 499, "game", "Sandbox building and survival"),
    Product("Baldur's Gate 3", 999, "game", "Party-based turn-based RPG"),
]


def filter_products(products: Iterable[Product], term: str) -> List[dict]:
    """
    Flag each product as matching the search term or not.

    Matching is a case-insensitive substring test on the product's name or
    card text. An empty term matches everything. Catalog order is kept.
    """
    needle = (term or "").lower()
    return [
        {
            **product.to_dict(),
            "matches": needle in product.name.lower() or needle in product.search_text,
        }
        for product in products
    ]
