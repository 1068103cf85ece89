import os

# konfiguracja przed importem app.*, settings czytaja env przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_lock_service, get_notification_service, get_product_client
from app.data.database import Base, SessionLocal, engine
from app.data.models.user import UserModel
from app.domain.schemas import Product
from app.main import create_app
from app.repos.user_repo import UserRepo
from app.services.cart_service import CartService

VALID_ADDRESS = "221B Baker Street, London NW1 6XE"


class FakeProductClient:
    """In-memory catalog with the same lookup contract as ProductClient."""

    def __init__(self, products: dict[str, Product]):
        self.products = dict(products)
        self.lookups: list[str] = []

    def find_by_id(self, product_id: str) -> Product | None:
        self.lookups.append(product_id)
        return self.products.get(product_id)

    def set_cost(self, product_id: str, cost: str):
        self.products[product_id] = self.products[product_id].model_copy(
            update={"cost": Decimal(cost)}
        )


class FakeLockService:
    def __init__(self):
        self.held: dict[int, str] = {}
        self.released: list[int] = []

    def acquire_user_lock(self, user_id: int, ttl: int) -> str | None:
        if user_id in self.held:
            return None
        token = f"token-{user_id}"
        self.held[user_id] = token
        return token

    def release_user_lock(self, user_id: int, token: str) -> bool:
        if self.held.get(user_id) != token:
            return False
        del self.held[user_id]
        self.released.append(user_id)
        return True


class RecordingNotificationService:
    def __init__(self):
        self.sent: list[tuple[int, Decimal]] = []

    def send_checkout_notification(self, user_id: int, total: Decimal):
        self.sent.append((user_id, total))


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def catalog():
    return FakeProductClient(
        {
            "productA": Product(id="productA", name="Product A", cost=Decimal("10")),
            "productB": Product(id="productB", name="Product B", cost=Decimal("5")),
            "productC": Product(id="productC", name="Product C", cost=Decimal("20")),
        }
    )


@pytest.fixture
def locks():
    return FakeLockService()


@pytest.fixture
def notifications():
    return RecordingNotificationService()


@pytest.fixture
def cart_service(db, catalog, locks, notifications):
    return CartService(
        db=db,
        product_client=catalog,
        lock_service=locks,
        notification_service=notifications,
    )


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(wallet_money="100", address=VALID_ADDRESS, email=None) -> UserModel:
        counter["n"] += 1
        user = UserModel(
            email=email or f"user{counter['n']}@example.com",
            name=f"User {counter['n']}",
            wallet_money=Decimal(wallet_money),
            address=address,
        )
        return UserRepo(db).create_user(user)

    return _make


@pytest.fixture
def client(catalog, locks, notifications):
    app = create_app()
    app.dependency_overrides[get_product_client] = lambda: catalog
    app.dependency_overrides[get_lock_service] = lambda: locks
    app.dependency_overrides[get_notification_service] = lambda: notifications
    return TestClient(app)
