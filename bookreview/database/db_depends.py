from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Выдать сессию из пула приложения на время запроса"""
    async with request.app.state.pool.acquire() as db:
        yield db
