from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import to_http
from app.data.database import get_db
from app.domain.errors import CartServiceError
from app.services.user_service import UserService
from app.domain.schemas import AddressIn, UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.create_user(payload)
    except CartServiceError as e:
        raise to_http(e)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except CartServiceError as e:
        raise to_http(e)


@router.put("/{user_id}/address", response_model=UserRead)
def set_address(user_id: int, payload: AddressIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.set_address(user_id, payload.address)
    except CartServiceError as e:
        raise to_http(e)
