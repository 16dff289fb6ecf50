from bookstore_orders.models.user import User
from bookstore_orders.models.book import Book
from bookstore_orders.models.cart import Cart, CartItem
from bookstore_orders.models.order_item import OrderItem
from bookstore_orders.models.order import Order
from bookstore_orders.models.order_event import OrderEvent
from bookstore_orders.models.wishlist import Wishlist, WishlistBook

# add ALL models here
