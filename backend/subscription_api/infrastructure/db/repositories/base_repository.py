"""
Base Repository for the Subscription API

Generic async repository: holds the session, runs every statement
through one timeout-bound execution path and translates driver errors
into the application's exception hierarchy.
"""

import asyncio
import logging
from typing import Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable
from sqlmodel import SQLModel

from subscription_api.config.settings import settings
from subscription_api.infrastructure.exceptions import NotFoundError, StoreError


# Type variable for generic repository
ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic async repository with single-statement operations.

    Each call issues exactly one statement; mutations are committed right
    away so every operation is atomic on its own.

    Args:
        model: The SQLModel table class to operate on
        session: Async database session
        statement_timeout: Seconds before a statement is abandoned
        logger: Logger to report through (defaults to the module logger)
    """

    def __init__(
        self,
        model: Type[ModelType],
        session: AsyncSession,
        statement_timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._model = model
        self._session = session
        self._statement_timeout = (
            statement_timeout
            if statement_timeout is not None
            else settings.database_statement_timeout
        )
        self._logger = logger or logging.getLogger(__name__)

    @property
    def table_name(self) -> str:
        return self._model.__tablename__

    async def _execute(
        self,
        statement: Executable,
        operation: str,
        commit: bool = False,
    ) -> Result:
        """
        Execute one statement, optionally committing it.

        The timeout bounds the statement only. The commit runs outside it,
        so a timeout always means nothing was committed.

        Task cancellation is not intercepted, so a cancelled request
        abandons the statement immediately.

        Raises:
            StoreError: On timeout, connection failure or any database error
        """
        try:
            result = await asyncio.wait_for(
                self._session.execute(statement),
                timeout=self._statement_timeout,
            )
            if commit:
                await self._session.commit()
            return result
        except asyncio.TimeoutError as e:
            self._logger.error(
                f"{operation} on {self.table_name} timed out after "
                f"{self._statement_timeout}s"
            )
            raise StoreError(
                f"Database operation timed out: {operation}",
                operation=operation,
                table=self.table_name,
                original_error=e,
            )
        except SQLAlchemyError as e:
            self._logger.error(f"{operation} on {self.table_name} failed: {e}")
            raise StoreError(
                f"Database error during {operation}: {e}",
                operation=operation,
                table=self.table_name,
                original_error=e,
            )
        except OSError as e:
            # Driver connect failures (refused, unreachable) are not wrapped by SQLAlchemy
            self._logger.error(f"{operation} on {self.table_name} could not reach the database: {e}")
            raise StoreError(
                f"Database unavailable during {operation}: {e}",
                operation=operation,
                table=self.table_name,
                original_error=e,
            )

    async def get_by_id(self, id: UUID) -> ModelType:
        """
        Get a single record by its primary key.

        Raises:
            NotFoundError: If no row matches
            StoreError: If the query fails
        """
        stmt = select(self._model).where(self._model.id == id)
        result = await self._execute(stmt, "select")
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundError(
                f"{self._model.__name__} {id} not found",
                operation="select",
                table=self.table_name,
            )
        return model

    async def delete(self, id: UUID) -> None:
        """
        Hard-delete a record by ID.

        Deleting a missing row is not an error.
        """
        stmt = delete(self._model).where(self._model.id == id)
        result = await self._execute(stmt, "delete", commit=True)
        self._logger.debug(f"Deleted {result.rowcount} row(s) from {self.table_name} for id {id}")
