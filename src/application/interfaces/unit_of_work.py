from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.members import MembersRepository
from src.application.interfaces.repositories.requests import RequestsRepository


class UnitOfWork(Protocol):
    requests: RequestsRepository
    members: MembersRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
