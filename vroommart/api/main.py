# vroommart/api/main.py

from fastapi import APIRouter
from .endpoints import hashtags
from ..auth.controller import router as auth_router
from ..users.controller import router as users_router
from ..products.controller import router as products_router
from ..vrooms.controller import router as vrooms_router
from ..social.controller import router as social_router
from ..comments.controller import router as comments_router
from ..cart.controller import router as cart_router
from ..orders.controller import router as orders_router
from ..messages.controller import router as messages_router

# Create main API router
api_router = APIRouter()

# Domain routers carry their own prefixes ('/products', '/cart', ...)
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(products_router)
api_router.include_router(vrooms_router)
api_router.include_router(social_router)
api_router.include_router(comments_router)
api_router.include_router(cart_router)
api_router.include_router(orders_router)
api_router.include_router(messages_router)

# Analytics endpoints
api_router.include_router(
    hashtags.router,
    prefix="/hashtags",
    tags=["Analytics"]
)
