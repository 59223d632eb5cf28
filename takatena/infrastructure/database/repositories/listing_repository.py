from sqlalchemy import ColumnElement, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from takatena.application.errors import StoreError
from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.domain.entities.listing import Listing, ListingOwner
from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType
from takatena.domain.filters import AnyOf, FieldMatch, ListingFilter, MatchOp
from takatena.infrastructure.database.models import ListingModel
from takatena.infrastructure.database.repositories.store_errors import wrap_store_errors

_COLUMNS = {
    "title": ListingModel.title,
    "description": ListingModel.description,
    "location": ListingModel.location,
    "material_type": ListingModel.material_type,
    "status": ListingModel.status,
    "user_id": ListingModel.user_id,
}

_ENUM_FIELDS = {
    "material_type": MaterialType,
    "status": ListingStatus,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _field_clause(match: FieldMatch) -> ColumnElement[bool]:
    column = _COLUMNS[match.field]
    if match.op is MatchOp.EQUALS:
        enum_cls = _ENUM_FIELDS.get(match.field)
        return column == (enum_cls(match.value) if enum_cls else match.value)
    if match.op is MatchOp.IEQUALS:
        return func.lower(column) == match.value.lower()
    return column.ilike(f"%{_escape_like(match.value)}%", escape="\\")


def to_where_clause(listing_filter: ListingFilter) -> list[ColumnElement[bool]]:
    """SQL form of a ListingFilter: one AND-ed clause per criterion."""
    clauses: list[ColumnElement[bool]] = []
    for criterion in listing_filter.criteria():
        if isinstance(criterion, AnyOf):
            clauses.append(or_(*(_field_clause(c) for c in criterion.clauses)))
        else:
            clauses.append(_field_clause(criterion))
    return clauses


def _to_domain(model: ListingModel) -> Listing:
    owner = model.user
    return Listing(
        id=model.id,
        user_id=model.user_id,
        title=model.title,
        description=model.description,
        material_type=MaterialType(model.material_type),
        quantity=model.quantity,
        unit=model.unit,
        location=model.location,
        images=list(model.images or []),
        status=ListingStatus(model.status),
        views=model.views,
        created_at=model.created_at,
        updated_at=model.updated_at,
        owner=ListingOwner(
            id=owner.id,
            name=owner.name,
            user_type=owner.user_type,
            location=owner.location,
            email=owner.email,
            phone=owner.phone,
            whatsapp=owner.whatsapp,
        ),
    )


def _to_model(listing: Listing) -> ListingModel:
    return ListingModel(
        id=listing.id,
        user_id=listing.user_id,
        title=listing.title,
        description=listing.description,
        material_type=listing.material_type,
        quantity=listing.quantity,
        unit=listing.unit,
        location=listing.location,
        images=list(listing.images),
        status=listing.status,
        views=listing.views,
        created_at=listing.created_at,
        updated_at=listing.updated_at,
    )


class SqlAlchemyListingRepository(ListingRepository):
    """SQLAlchemy implementation for listing persistence."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @wrap_store_errors
    async def add(self, listing: Listing) -> Listing:
        self._session.add(_to_model(listing))
        await self._session.flush()
        # Reload with the owner row joined in
        result = await self._session.execute(
            select(ListingModel)
            .where(ListingModel.id == listing.id)
            .execution_options(populate_existing=True)
        )
        return _to_domain(result.scalar_one())

    @wrap_store_errors
    async def get_by_id(self, listing_id: str) -> Listing | None:
        model = await self._session.get(ListingModel, listing_id)
        return _to_domain(model) if model is not None else None

    @wrap_store_errors
    async def find(
        self,
        listing_filter: ListingFilter,
        *,
        limit: int,
        offset: int = 0,
    ) -> list[Listing]:
        query = (
            select(ListingModel)
            .where(*to_where_clause(listing_filter))
            .order_by(ListingModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(query)
        return [_to_domain(m) for m in result.scalars().all()]

    @wrap_store_errors
    async def count(self, listing_filter: ListingFilter) -> int:
        count_query = (
            select(func.count())
            .select_from(ListingModel)
            .where(*to_where_clause(listing_filter))
        )
        result = await self._session.execute(count_query)
        return result.scalar_one()

    @wrap_store_errors
    async def increment_views(self, listing_id: str) -> bool:
        # Single UPDATE so concurrent readers never lose an increment
        result = await self._session.execute(
            update(ListingModel)
            .where(ListingModel.id == listing_id)
            .values(views=ListingModel.views + 1)
        )
        return result.rowcount > 0

    @wrap_store_errors
    async def update(self, listing: Listing) -> Listing:
        model = await self._session.get(ListingModel, listing.id)
        if model is None:
            raise StoreError(f"Listing {listing.id} disappeared before it could be updated")

        model.title = listing.title
        model.description = listing.description
        model.material_type = listing.material_type
        model.quantity = listing.quantity
        model.unit = listing.unit
        model.location = listing.location
        model.images = list(listing.images)
        model.status = listing.status
        model.updated_at = listing.updated_at
        await self._session.flush()
        return _to_domain(model)

    @wrap_store_errors
    async def delete(self, listing_id: str) -> bool:
        result = await self._session.execute(
            delete(ListingModel).where(ListingModel.id == listing_id)
        )
        return result.rowcount > 0
