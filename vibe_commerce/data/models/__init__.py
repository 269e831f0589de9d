#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from vibe_commerce.data.models.product import ProductModel
from vibe_commerce.data.models.cart_item import CartItemModel

__all__ = ["ProductModel", "CartItemModel"]
