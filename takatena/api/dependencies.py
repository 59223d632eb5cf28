"""
FastAPI dependency injection wiring.

Each dependency function returns a fully-constructed object with its
collaborators injected, so route handlers stay thin.
"""
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from takatena.application.errors import UnauthorizedError
from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.application.interfaces.security import PasswordHasher, TokenIssuer
from takatena.application.interfaces.user_repository import UserRepository
from takatena.application.use_cases.authenticate_user import AuthenticateUser
from takatena.application.use_cases.browse_listings import BrowseListings
from takatena.application.use_cases.create_listing import CreateListing
from takatena.application.use_cases.delete_listing import DeleteListing
from takatena.application.use_cases.get_global_impact import GetGlobalImpact
from takatena.application.use_cases.get_listing import GetListing
from takatena.application.use_cases.get_user_profile import GetUserProfile
from takatena.application.use_cases.register_user import RegisterUser
from takatena.application.use_cases.search_listings import SearchListings
from takatena.application.use_cases.update_listing import UpdateListing
from takatena.application.use_cases.update_user_profile import UpdateUserProfile
from takatena.config import settings
from takatena.infrastructure.database.connection import Database
from takatena.infrastructure.database.repositories.listing_repository import (
    SqlAlchemyListingRepository,
)
from takatena.infrastructure.database.repositories.user_repository import (
    SqlAlchemyUserRepository,
)
from takatena.infrastructure.security.passwords import BcryptPasswordHasher
from takatena.infrastructure.security.tokens import JwtTokenIssuer

_bearer = HTTPBearer(auto_error=False)


# ---- Low-level dependencies ------------------------------------------------

def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    async for session in database.session():
        yield session


def get_listing_repo(session: AsyncSession = Depends(get_session)) -> ListingRepository:
    return SqlAlchemyListingRepository(session)


def get_user_repo(session: AsyncSession = Depends(get_session)) -> UserRepository:
    return SqlAlchemyUserRepository(session)


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher()


def get_token_issuer() -> TokenIssuer:
    return JwtTokenIssuer(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl_seconds=settings.access_token_ttl_seconds,
    )


# ---- Authorization context -------------------------------------------------

def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """Id of the caller from a bearer token; 401 when missing or invalid."""
    if credentials is None:
        raise UnauthorizedError()
    user_id = token_issuer.read_subject(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError("Invalid or expired session")
    return user_id


# ---- Use-case dependencies -------------------------------------------------

def get_browse_listings_use_case(
    listing_repo: ListingRepository = Depends(get_listing_repo),
) -> BrowseListings:
    return BrowseListings(listing_repo)


def get_search_listings_use_case(
    listing_repo: ListingRepository = Depends(get_listing_repo),
) -> SearchListings:
    return SearchListings(listing_repo)


def get_create_listing_use_case(
    listing_repo: ListingRepository = Depends(get_listing_repo),
) -> CreateListing:
    return CreateListing(listing_repo)


def get_listing_use_case(
    listing_repo: ListingRepository = Depends(get_listing_repo),
) -> GetListing:
    return GetListing(listing_repo)


def get_update_listing_use_case(
    listing_repo: ListingRepository = Depends(get_listing_repo),
) -> UpdateListing:
    return UpdateListing(listing_repo)


def get_delete_listing_use_case(
    listing_repo: ListingRepository = Depends(get_listing_repo),
) -> DeleteListing:
    return DeleteListing(listing_repo)


def get_register_user_use_case(
    user_repo: UserRepository = Depends(get_user_repo),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> RegisterUser:
    return RegisterUser(user_repo, password_hasher)


def get_authenticate_user_use_case(
    user_repo: UserRepository = Depends(get_user_repo),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthenticateUser:
    return AuthenticateUser(user_repo, password_hasher, token_issuer)


def get_own_profile_use_case(
    user_repo: UserRepository = Depends(get_user_repo),
    listing_repo: ListingRepository = Depends(get_listing_repo),
) -> GetUserProfile:
    return GetUserProfile(user_repo, listing_repo)


def get_public_profile_use_case(
    user_repo: UserRepository = Depends(get_user_repo),
    listing_repo: ListingRepository = Depends(get_listing_repo),
) -> GetUserProfile:
    return GetUserProfile(user_repo, listing_repo, include_listings=True)


def get_update_profile_use_case(
    user_repo: UserRepository = Depends(get_user_repo),
) -> UpdateUserProfile:
    return UpdateUserProfile(user_repo)


def get_global_impact_use_case(
    listing_repo: ListingRepository = Depends(get_listing_repo),
    user_repo: UserRepository = Depends(get_user_repo),
) -> GetGlobalImpact:
    return GetGlobalImpact(listing_repo, user_repo, settings.kg_per_completed_listing)
