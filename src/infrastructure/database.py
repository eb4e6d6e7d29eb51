import logging
import uuid
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy import Table, Column, String, DateTime, MetaData, select, update, delete

from src.domain.exceptions import DatabaseException
from src.domain.models import DeleteResult, GithubProfile
from src.infrastructure.acl import ProfileTranslator

logger = logging.getLogger(__name__)

# SQLAlchemy core Table definition
metadata = MetaData()
profiles_table = Table(
    'github_profiles', metadata,
    Column('id', String, primary_key=True),
    Column('document', JSONB, nullable=False),
    # Copied out of the document so rows can be ordered without touching JSON.
    Column('created_on', DateTime(timezone=True), nullable=False),
    Column('updated_on', DateTime(timezone=True), nullable=False),
)

class PostgresProfileRepository:
    """
    Document store for GithubProfile records backed by a PostgreSQL JSONB table.
    Misses are reported as None; driver errors are wrapped in DatabaseException.
    """

    def __init__(self, db_url: str):
        self.engine = create_async_engine(db_url, echo=False)

    async def create_schema(self) -> None:
        """Creates the profiles table if it does not exist yet."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseException(f"Failed to create schema: {e}") from e

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def create(self, profile: GithubProfile) -> Optional[str]:
        """
        Inserts a new profile under a freshly minted id.

        Returns:
            Optional[str]: The new id, or None if the insert returned no row.
        """
        stmt = (
            profiles_table.insert()
            .values(
                id=str(uuid.uuid4()),
                document=ProfileTranslator.to_document(profile),
                created_on=profile.created_on,
                updated_on=profile.updated_on,
            )
            .returning(profiles_table.c.id)
        )
        rows = await self._execute(stmt)
        return rows[0].id if rows else None

    async def get(self, profile_id: str) -> Optional[GithubProfile]:
        stmt = select(profiles_table.c.document).where(profiles_table.c.id == profile_id)
        rows = await self._execute(stmt)
        if not rows:
            return None
        return self._to_domain(profile_id, rows[0].document)

    async def find(self) -> List[GithubProfile]:
        stmt = (
            select(profiles_table.c.id, profiles_table.c.document)
            .order_by(profiles_table.c.created_on)
        )
        rows = await self._execute(stmt)
        return [self._to_domain(row.id, row.document) for row in rows]

    async def replace(self, profile_id: str, profile: GithubProfile) -> Optional[str]:
        """
        Overwrites the whole document stored under ``profile_id``.

        Returns:
            Optional[str]: The id, or None if no row matched.
        """
        stmt = (
            update(profiles_table)
            .where(profiles_table.c.id == profile_id)
            .values(
                document=ProfileTranslator.to_document(profile),
                updated_on=profile.updated_on,
            )
            .returning(profiles_table.c.id)
        )
        rows = await self._execute(stmt)
        return rows[0].id if rows else None

    async def delete(self, profile_id: str) -> DeleteResult:
        stmt = (
            delete(profiles_table)
            .where(profiles_table.c.id == profile_id)
            .returning(profiles_table.c.id)
        )
        rows = await self._execute(stmt)
        return DeleteResult(deleted=bool(rows))

    async def _execute(self, stmt) -> list:
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                return list(result.all())
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database operation failed: {e}")
            raise DatabaseException(str(e)) from e

    @staticmethod
    def _to_domain(profile_id: str, document) -> GithubProfile:
        # pydantic's ValidationError is a ValueError too.
        try:
            return ProfileTranslator.to_domain(profile_id, document)
        except ValueError as e:
            logger.error(f"Stored github-profile {profile_id} is corrupt: {e}")
            raise DatabaseException(f"Corrupt document for {profile_id}: {e}") from e
