import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookstore_orders.config import settings
from bookstore_orders.database import create_db_and_tables
from bookstore_orders.exceptions import BookstoreError
from bookstore_orders.routes import (
    admin_orders,
    cart,
    checkout,
    health,
    orders,
    wishlist,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.env == "local":
        create_db_and_tables()
    yield

app = FastAPI(title="Bookstore Orders API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookstoreError)
async def bookstore_error_handler(request: Request, exc: BookstoreError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(cart.router, prefix="/cart", tags=["Cart"])
app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])
app.include_router(admin_orders.router, prefix="/admin/orders", tags=["Admin Orders"])
app.include_router(wishlist.router, prefix="/wishlists", tags=["Wishlists"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "cart": [
            "/cart", "/cart/add", "/cart/update/{book_id}",
            "/cart/remove/{book_id}", "/cart/clear"
        ],
        "checkout": ["/checkout"],
        "orders": [
            "/orders", "/orders/{order_id}", "/orders/{order_id}/cancel",
            "/orders/{order_id}/timeline"
        ],
        "admin_orders": [
            "/admin/orders", "/admin/orders/{order_id}/status",
            "/admin/orders/{order_id}/timeline"
        ],
        "wishlists": [
            "/wishlists", "/wishlists/{wishlist_id}", "/wishlists/{wishlist_id}/stats",
            "/wishlists/{wishlist_id}/books/{book_id}",
            "/wishlists/{wishlist_id}/bulk/add", "/wishlists/{wishlist_id}/bulk/remove"
        ],
    }
