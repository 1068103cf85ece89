from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.data.models.user import UserModel
from app.domain.errors import ConflictError, NotFoundError
from app.repos.user_repo import UserRepo
from app.domain.schemas import UserCreate, UserRead
from app.utils.settings import DEFAULT_ADDRESS, DEFAULT_WALLET_MONEY
from app.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        if self.repo.get_user_by_email(payload.email):
            raise ConflictError("Email already taken")

        user = UserModel(
            email=payload.email,
            name=payload.name,
            wallet_money=payload.wallet_money if payload.wallet_money is not None else DEFAULT_WALLET_MONEY,
            address=payload.address or DEFAULT_ADDRESS,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            self.repo.db.rollback()
            raise ConflictError("Email already taken")

        logger.info(f"Created user {created.id}")
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)

    def set_address(self, user_id: int, address: str) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        user.address = address
        saved = self.repo.save(user)
        logger.info(f"Address updated for user {user_id}")
        return UserRead.model_validate(saved)
