"""PostgreSQL implementation of Post repository."""

from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from opaq.domain.model import Post
from opaq.domain.repository import PostRepository
from opaq.domain.value import PostId
from opaq.persistence.mappers import post_to_dict, row_to_post
from opaq.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        post_dict = post_to_dict(post)
        stmt = insert(posts_table).values(**post_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[posts_table.c.id],
            set_={
                "title": stmt.excluded.title,
                "content": stmt.excluded.content,
                "labels": stmt.excluded.labels,
                "status": stmt.excluded.status,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return post
