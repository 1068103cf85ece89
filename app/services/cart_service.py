from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.errors import ConflictError, InvalidRequestError, NotFoundError
from app.repos.cart_repo import CartRepo
from app.repos.user_repo import UserRepo
from app.services.product_client import ProductClient
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.utils.settings import DEFAULT_PAYMENT_OPTION, USER_LOCK_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y dla domeny cart, jeden koszyk na uzytkownika.
    commands (add, update, delete, checkout) modyfikuja stan
    query (get) tylko odczyt

    Kazda zmiana koszyka podbija version warunkowym update,
    checkout debetuje portfel i czysci koszyk w jednej transakcji.
    """

    def __init__(
        self,
        db: Session,
        product_client: ProductClient,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.repo = CartRepo(db)
        self.user_repo = UserRepo(db)
        self.product_client = product_client
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)

        if not cart:
            raise NotFoundError("User does not have a cart")

        return self._to_dict(cart)

    #commands
    def add_item(self, user_id: int, product_id: str, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")

        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            cart = self._create_cart(user_id)

        if self.repo.get_cart_item(cart.id, product_id):
            raise InvalidRequestError(
                "Product already in cart. Use the cart sidebar to update or remove product from cart"
            )

        logger.info(f"Fetching product {product_id} from product-service")
        product = self.product_client.find_by_id(product_id)
        if product is None:
            raise InvalidRequestError("Product doesn't exist in database")

        old_version = cart.version
        try:
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    position=self.repo.next_position(cart.id),
                    product_id=product.id,
                    product_name=product.name,
                    cost=product.cost,
                    quantity=quantity,
                )
            )
        except IntegrityError:
            # rownolegle dodanie tego samego produktu (u_cart_product)
            self.repo.rollback()
            raise ConflictError("Cart was modified by another operation")

        self._bump_version(cart.id, old_version)
        self.repo.commit()

        logger.info(
            f"Product {product_id} x{quantity} added to cart {cart.id}, "
            f"new version: {old_version + 1}"
        )
        return self.get_cart(user_id)

    def update_item(self, user_id: int, product_id: str, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")

        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise InvalidRequestError(
                "User does not have a cart. Use POST to create cart and add a product"
            )

        product = self.product_client.find_by_id(product_id)
        if product is None:
            raise InvalidRequestError("Product doesn't exist in database")

        item = self.repo.get_cart_item(cart.id, product_id)
        if not item:
            raise InvalidRequestError("Product not in cart")

        old_version = cart.version
        logger.info(
            f"Updating product {product_id} in cart {cart.id}: "
            f"quantity {item.quantity} -> {quantity}"
        )
        item.quantity = quantity

        self._bump_version(cart.id, old_version)
        self.repo.commit()

        return self.get_cart(user_id)

    def delete_item(self, user_id: int, product_id: str) -> None:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise InvalidRequestError("User does not have a cart")

        item = self.repo.get_cart_item(cart.id, product_id)
        if not item:
            raise InvalidRequestError("Product not in cart")

        old_version = cart.version
        self.repo.delete_cart_item(item)
        self._bump_version(cart.id, old_version)
        self.repo.commit()

        logger.info(f"Product {product_id} removed from cart {cart.id}")

    def checkout(self, user_id: int) -> None:
        """
        Debet portfela i czyszczenie koszyka jako jedna transakcja.

        1. lock uzytkownika w redis (serializacja checkoutow)
        2. walidacja: koszyk, pozycje, adres
        3. total po aktualnych cenach z product-service
        4. warunkowy debet portfela + delete pozycji + podbicie version
        5. jeden commit, przy jakimkolwiek bledzie rollback obu zmian
        """
        token = self.lock_service.acquire_user_lock(user_id, ttl=USER_LOCK_TTL_SECONDS)
        if token is None:
            raise ConflictError("Checkout already in progress for this user")

        try:
            total = self._checkout_locked(user_id)
        finally:
            self.lock_service.release_user_lock(user_id, token)

        self.notification_service.send_checkout_notification(user_id, total)

    def _checkout_locked(self, user_id: int) -> Decimal:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise NotFoundError("User does not have a cart")

        items = self.repo.get_cart_items(cart.id)
        if not items:
            raise InvalidRequestError("User does not have any items in cart")

        user = self.user_repo.get_user(user_id)
        if not user:
            raise NotFoundError("User does not exist")

        if not user.has_set_non_default_address():
            raise InvalidRequestError("Address not set")

        total = Decimal("0.00")
        for item in items:
            product = self.product_client.find_by_id(item.product_id)
            if product is None:
                raise InvalidRequestError(f"Product {item.product_id} no longer exists")
            total += product.cost * item.quantity

        if user.wallet_money < total:
            raise InvalidRequestError("Insufficient wallet balance")

        old_version = cart.version
        try:
            if self.user_repo.debit_wallet(user_id, total) == 0:
                raise InvalidRequestError("Insufficient wallet balance")

            self.repo.clear_cart_items(cart.id)
            self._bump_version(cart.id, old_version)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Checkout for user {user_id} rolled back: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Checkout for user {user_id}: charged {total}, cart {cart.id} cleared")
        return total

    def _create_cart(self, user_id: int) -> CartModel:
        if not self.user_repo.get_user(user_id):
            raise InvalidRequestError("User does not exist")

        try:
            created = self.repo.create_cart(
                CartModel(
                    user_id=user_id,
                    payment_option=DEFAULT_PAYMENT_OPTION,
                    version=1,
                )
            )
        except IntegrityError:
            self.repo.rollback()
            logger.warning(f"Cart creation race for user {user_id}")
            raise ConflictError("User cart creation failed because user already has a cart")

        logger.info(f"Created cart {created.id} for user {user_id}")
        return created

    def _bump_version(self, cart_id: int, old_version: int) -> None:
        # Optimistic locking, 0 rows affected = ktos nas wyprzedzil
        rowcount = self.repo.update_cart_version(
            cart_id=cart_id,
            old_version=old_version,
            new_data={"version": old_version + 1},
        )
        if rowcount == 0:
            self.repo.rollback()
            raise ConflictError("Cart was modified by another operation")

    def _to_dict(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)
        total = sum((i.cost * i.quantity for i in items), Decimal("0.00"))

        #dict przeksztalcany w jsona
        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "payment_option": cart.payment_option,
            "items": [
                {
                    "product_id": i.product_id,
                    "name": i.product_name,
                    "cost": i.cost,
                    "quantity": i.quantity,
                }
                for i in items
            ],
            "total": total,
        }
