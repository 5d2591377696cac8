# Central models file: importing it registers every mapped class with Base
# so string-based relationships can resolve.

from .core import Base

from ..users.models import User
from ..auth.models import UserSession
from ..products.models import Product
from ..vrooms.models import Vroom
from ..social.models import Follow, VroomFollow, ProductLike, ProductBookmark
from ..comments.models import Comment
from ..cart.models import CartItem
from ..orders.models import Order
from ..messages.models import Message

__all__ = [
    "Base",
    "User",
    "UserSession",
    "Product",
    "Vroom",
    "Follow",
    "VroomFollow",
    "ProductLike",
    "ProductBookmark",
    "Comment",
    "CartItem",
    "Order",
    "Message",
]
