from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from takatena.application.errors import ConflictError, StoreError
from takatena.application.interfaces.user_repository import UserRepository
from takatena.domain.entities.user import User
from takatena.domain.enums.user_type import UserType
from takatena.infrastructure.database.models import ListingModel, UserModel
from takatena.infrastructure.database.repositories.store_errors import wrap_store_errors


def _to_domain(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        password_hash=model.password_hash,
        name=model.name,
        user_type=UserType(model.user_type),
        location=model.location,
        phone=model.phone,
        whatsapp=model.whatsapp,
        verified=model.verified,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation for user persistence."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @wrap_store_errors
    async def add(self, user: User) -> None:
        self._session.add(
            UserModel(
                id=user.id,
                email=user.email,
                password_hash=user.password_hash,
                name=user.name,
                user_type=user.user_type,
                location=user.location,
                phone=user.phone,
                whatsapp=user.whatsapp,
                verified=user.verified,
                created_at=user.created_at,
                updated_at=user.updated_at,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # Lost a signup race on the unique email index
            raise ConflictError("User with this email already exists") from exc

    @wrap_store_errors
    async def get_by_id(self, user_id: str) -> User | None:
        model = await self._session.get(UserModel, user_id)
        return _to_domain(model) if model is not None else None

    @wrap_store_errors
    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(select(UserModel).where(UserModel.email == email))
        model = result.scalar_one_or_none()
        return _to_domain(model) if model is not None else None

    @wrap_store_errors
    async def update(self, user: User) -> None:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            raise StoreError(f"User {user.id} disappeared before it could be updated")
        model.name = user.name
        model.location = user.location
        model.phone = user.phone
        model.whatsapp = user.whatsapp
        model.updated_at = user.updated_at
        await self._session.flush()

    @wrap_store_errors
    async def count_with_listings(self) -> int:
        result = await self._session.execute(
            select(func.count(func.distinct(ListingModel.user_id)))
        )
        return result.scalar_one()
