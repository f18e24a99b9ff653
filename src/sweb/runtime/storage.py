"""
Persistence for saved SWeb programs and their runtime data.

Two record types are stored: applications (source text plus name and
description) and data records (arbitrary JSON associated with an
application and a model name). Only source text is persisted, never
compiled artifacts.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .logging import log_with_context

logger = logging.getLogger(__name__)


# =============================================================================
# Records
# =============================================================================


class AppCreate(BaseModel):
    """Payload for creating an application."""

    name: str = Field(min_length=1)
    description: str | None = None
    code: str


def _reject_nulls(values: Any, fields: tuple[str, ...]) -> Any:
    """Refuse an explicit null for a field the stored record requires."""
    if isinstance(values, dict):
        for name in fields:
            if name in values and values[name] is None:
                raise ValueError(f"{name} may be omitted but not null")
    return values


class AppUpdate(BaseModel):
    """Partial update for an application; unset fields are left alone."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    code: str | None = None

    @model_validator(mode="before")
    @classmethod
    def validate_required_fields(cls, values: Any) -> Any:
        return _reject_nulls(values, ("name", "code"))


class AppRecord(BaseModel):
    """A stored application."""

    id: int
    name: str
    description: str | None = None
    code: str
    created_at: datetime

    model_config = ConfigDict(frozen=True)


class DataCreate(BaseModel):
    """Payload for creating a data record."""

    app_id: int
    model_name: str = Field(min_length=1)
    data: dict[str, Any]


class DataUpdate(BaseModel):
    """Partial update for a data record."""

    model_name: str | None = Field(default=None, min_length=1)
    data: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def validate_required_fields(cls, values: Any) -> Any:
        return _reject_nulls(values, ("model_name", "data"))


class DataRecord(BaseModel):
    """A stored data record."""

    id: int
    app_id: int
    model_name: str
    data: dict[str, Any]
    created_at: datetime

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Storage interface
# =============================================================================


class Storage(ABC):
    """
    Storage backend interface.

    Lookups of missing ids return None; deletes of missing ids return False.
    """

    @abstractmethod
    def list_apps(self) -> list[AppRecord]: ...

    @abstractmethod
    def get_app(self, app_id: int) -> AppRecord | None: ...

    @abstractmethod
    def get_app_by_name(self, name: str) -> AppRecord | None: ...

    @abstractmethod
    def create_app(self, app: AppCreate) -> AppRecord: ...

    @abstractmethod
    def update_app(self, app_id: int, update: AppUpdate) -> AppRecord | None: ...

    @abstractmethod
    def delete_app(self, app_id: int) -> bool: ...

    @abstractmethod
    def list_data(self, app_id: int, model_name: str) -> list[DataRecord]: ...

    @abstractmethod
    def get_data(self, data_id: int) -> DataRecord | None: ...

    @abstractmethod
    def create_data(self, data: DataCreate) -> DataRecord: ...

    @abstractmethod
    def update_data(self, data_id: int, update: DataUpdate) -> DataRecord | None: ...

    @abstractmethod
    def delete_data(self, data_id: int) -> bool: ...


class MemStorage(Storage):
    """
    In-memory storage.

    Records live in insertion-ordered dicts keyed by integer ids counting
    from 1. Mutations hold a lock so one instance can back a threaded
    server. Updates merge the supplied fields over the stored record.
    """

    def __init__(self) -> None:
        self._apps: dict[int, AppRecord] = {}
        self._data: dict[int, DataRecord] = {}
        self._next_app_id = 1
        self._next_data_id = 1
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Applications
    # -------------------------------------------------------------------------

    def list_apps(self) -> list[AppRecord]:
        return list(self._apps.values())

    def get_app(self, app_id: int) -> AppRecord | None:
        return self._apps.get(app_id)

    def get_app_by_name(self, name: str) -> AppRecord | None:
        for app in self._apps.values():
            if app.name == name:
                return app
        return None

    def create_app(self, app: AppCreate) -> AppRecord:
        with self._lock:
            record = AppRecord(
                id=self._next_app_id,
                created_at=datetime.now(UTC),
                **app.model_dump(),
            )
            self._apps[record.id] = record
            self._next_app_id += 1

        log_with_context(logger, logging.INFO, f"Created app {record.id}", app_id=record.id)
        return record

    def update_app(self, app_id: int, update: AppUpdate) -> AppRecord | None:
        with self._lock:
            existing = self._apps.get(app_id)
            if existing is None:
                return None
            record = existing.model_validate(
                {**existing.model_dump(), **update.model_dump(exclude_unset=True)}
            )
            self._apps[app_id] = record

        log_with_context(logger, logging.INFO, f"Updated app {app_id}", app_id=app_id)
        return record

    def delete_app(self, app_id: int) -> bool:
        with self._lock:
            if self._apps.pop(app_id, None) is None:
                return False

        log_with_context(logger, logging.INFO, f"Deleted app {app_id}", app_id=app_id)
        return True

    # -------------------------------------------------------------------------
    # Data records
    # -------------------------------------------------------------------------

    def list_data(self, app_id: int, model_name: str) -> list[DataRecord]:
        return [
            record
            for record in self._data.values()
            if record.app_id == app_id and record.model_name == model_name
        ]

    def get_data(self, data_id: int) -> DataRecord | None:
        return self._data.get(data_id)

    def create_data(self, data: DataCreate) -> DataRecord:
        with self._lock:
            record = DataRecord(
                id=self._next_data_id,
                created_at=datetime.now(UTC),
                **data.model_dump(),
            )
            self._data[record.id] = record
            self._next_data_id += 1

        log_with_context(
            logger,
            logging.INFO,
            f"Created {record.model_name} record {record.id}",
            app_id=record.app_id,
            data_id=record.id,
        )
        return record

    def update_data(self, data_id: int, update: DataUpdate) -> DataRecord | None:
        with self._lock:
            existing = self._data.get(data_id)
            if existing is None:
                return None
            record = existing.model_validate(
                {**existing.model_dump(), **update.model_dump(exclude_unset=True)}
            )
            self._data[data_id] = record

        log_with_context(logger, logging.INFO, f"Updated data record {data_id}", data_id=data_id)
        return record

    def delete_data(self, data_id: int) -> bool:
        with self._lock:
            if self._data.pop(data_id, None) is None:
                return False

        log_with_context(logger, logging.INFO, f"Deleted data record {data_id}", data_id=data_id)
        return True
