"""
Errors raised by the ordering core.

Every error carries the HTTP status the API layer answers with, so routes
never translate them one by one (see ``main.py``).
"""


class BookstoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# -------- categories --------

class NotFoundError(BookstoreError):
    status_code = 404


class ConflictError(BookstoreError):
    status_code = 409


class InvalidStateError(BookstoreError):
    status_code = 400


class InvalidRequest(BookstoreError):
    """Rejected before the store is touched."""
    status_code = 422


class AccessDeniedError(BookstoreError):
    status_code = 403


# -------- not found --------

class OwnerNotFound(NotFoundError):
    def __init__(self, owner_id: int):
        super().__init__(f"User not found with ID: {owner_id}")
        self.owner_id = owner_id


class BookNotFound(NotFoundError):
    def __init__(self, book_id: int):
        super().__init__(f"Book not found with ID: {book_id}")
        self.book_id = book_id


class CartNotFound(NotFoundError):
    def __init__(self, owner_id: int):
        super().__init__(f"Cart not found for user ID: {owner_id}")
        self.owner_id = owner_id


class ItemNotInCart(NotFoundError):
    def __init__(self, book_id: int, cart_id: int):
        super().__init__(f"Book with ID: {book_id} is not in cart {cart_id}")
        self.book_id = book_id
        self.cart_id = cart_id


class OrderNotFound(NotFoundError):
    def __init__(self, order_id: int):
        super().__init__(f"Order not found with ID: {order_id}")
        self.order_id = order_id


class WishlistNotFound(NotFoundError):
    def __init__(self, wishlist_id: int):
        super().__init__(f"Wishlist not found with ID: {wishlist_id}")
        self.wishlist_id = wishlist_id


class BookNotInWishlist(NotFoundError):
    def __init__(self, book_id: int, wishlist_id: int):
        super().__init__(f"Book with ID: {book_id} is not in wishlist {wishlist_id}")
        self.book_id = book_id
        self.wishlist_id = wishlist_id


# -------- conflicts --------

class CartAlreadyCheckedOut(ConflictError):
    def __init__(self, cart_id: int):
        super().__init__(f"Cart {cart_id} has already been checked out")
        self.cart_id = cart_id


class WishlistAlreadyExists(ConflictError):
    def __init__(self, name: str):
        super().__init__(f"Wishlist with name '{name}' already exists")
        self.name = name


class BookAlreadyInWishlist(ConflictError):
    def __init__(self, book_id: int, wishlist_id: int):
        super().__init__(f"Book with ID: {book_id} is already in wishlist {wishlist_id}")
        self.book_id = book_id
        self.wishlist_id = wishlist_id


# -------- invalid state --------

class CartEmpty(InvalidStateError):
    def __init__(self, owner_id: int):
        super().__init__(f"Cannot checkout an empty cart for user ID: {owner_id}")
        self.owner_id = owner_id


class InvalidOrderState(InvalidStateError):
    def __init__(self, order_id: int, status: str, action: str = "cancel"):
        super().__init__(f"Cannot {action} order {order_id} in status '{status}'")
        self.order_id = order_id
        self.status = status


class InvalidOrderStatus(InvalidStateError):
    def __init__(self, value, valid_values):
        super().__init__(
            f"Invalid order status: {value}. Valid values are: {', '.join(valid_values)}"
        )
        self.value = value


# -------- access --------

class NotOrderOwner(AccessDeniedError):
    def __init__(self, order_id: int, owner_id: int):
        super().__init__(f"Order {order_id} does not belong to user ID: {owner_id}")
        self.order_id = order_id
        self.owner_id = owner_id
