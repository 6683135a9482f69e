from .catalog import Product
from .interaction import Review


__all__ = [
    "Product",
    "Review",
]
