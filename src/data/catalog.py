"""Benefits catalog — holds the loaded record set and its load status.

One catalog is shared read-only by every session. A failed load clears the
records: stale data is never served after an error.
"""

from __future__ import annotations

import asyncio
import logging

from src.data.loader import load_benefits
from src.errors import DataLoadError
from src.events import emit
from src.models.enums import CatalogStatus
from src.schemas.benefits import BenefitRecord
from src.schemas.events import EventType, SystemEvent

logger = logging.getLogger(__name__)


class BenefitCatalog:
    """Loads the data source once and exposes the records to the matcher."""

    def __init__(self, source: str, timeout: float = 10.0) -> None:
        self.source = source
        self.timeout = timeout
        self.status = CatalogStatus.LOADING
        self.error: str | None = None
        self._records: tuple[BenefitRecord, ...] = ()
        self._lock = asyncio.Lock()

    @property
    def records(self) -> tuple[BenefitRecord, ...]:
        return self._records

    @property
    def is_ready(self) -> bool:
        return self.status == CatalogStatus.READY

    async def load(self) -> CatalogStatus:
        """(Re)load the data source. Also serves as the retry action.

        Never raises: a DataLoadError moves the catalog to the error status.
        """
        async with self._lock:
            self.status = CatalogStatus.LOADING
            self.error = None
            try:
                records = await load_benefits(self.source, timeout=self.timeout)
            except DataLoadError as exc:
                logger.error("Error loading benefits data from %s: %s", exc.source, exc)
                self._records = ()
                self.status = CatalogStatus.ERROR
                self.error = str(exc)
                await emit(SystemEvent(
                    event_type=EventType.DATA_LOAD_FAILED,
                    data={"source": self.source, "error": self.error},
                    source_module="data.catalog",
                ))
                return self.status

            self._records = tuple(records)
            self.status = CatalogStatus.READY
            await emit(SystemEvent(
                event_type=EventType.DATA_LOADED,
                data={"source": self.source, "records": len(records)},
                source_module="data.catalog",
            ))
            return self.status
