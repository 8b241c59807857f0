"""Channel repository (lookups for channel-scoped access checks)."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from edition_access.application.dtos.company import ChannelResult
from edition_access.infrastructure.persistence.models.tenancy import Channel
from edition_access.infrastructure.persistence.repositories.base import BaseRepository


class ChannelRepository(BaseRepository[Channel]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Channel)

    async def get_by_id(self, channel_id: str) -> ChannelResult | None:
        channel = await self.get_entity_by_id(channel_id)
        if channel is None:
            return None
        return ChannelResult(
            id=channel.id, name=channel.name, system_edition_id=channel.system_edition_id
        )
