"""Live service catalog and its mutations.

The catalog follows the services collection ordered by createdAt, newest
first. The ordering is part of the store query; this module never sorts.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pydantic import ValidationError

from storefront.application.dtos.service import Service, ServiceCreate, ServicePatch
from storefront.application.interfaces.store import DocumentSnapshot, IDocumentStore
from storefront.application.services._store_calls import with_timeout
from storefront.core.constants import COLLECTION_SERVICES, FIELD_CREATED_AT
from storefront.domain.enums import SortDirection
from storefront.domain.exceptions import StoreException
from storefront.shared.streams import Broadcaster, Subscription
from storefront.shared.telemetry.tracing import traced
from storefront.shared.utils.datetime import MonotonicMillisClock

logger = logging.getLogger(__name__)

_process_clock = MonotonicMillisClock()


class CatalogSynchronizer:
    """Follows the services collection and writes catalog changes."""

    def __init__(
        self,
        store: IDocumentStore,
        *,
        clock: Callable[[], int] = _process_clock,
        timeout: float | None = 30.0,
    ) -> None:
        self._store = store
        self._clock = clock
        self._timeout = timeout
        self._current: list[Service] = []
        self._confirmed = False
        self._broadcaster: Broadcaster[list[Service]] = Broadcaster()
        self._source: Subscription[list[DocumentSnapshot]] | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def current(self) -> list[Service]:
        return list(self._current)

    @property
    def confirmed(self) -> bool:
        return self._confirmed

    def start(self) -> None:
        if self._source is not None:
            return
        self._source = self._store.subscribe_collection(
            COLLECTION_SERVICES, FIELD_CREATED_AT, SortDirection.DESCENDING
        )
        self._task = asyncio.create_task(self._follow(self._source), name="sync:services")

    async def _follow(self, source: Subscription[list[DocumentSnapshot]]) -> None:
        try:
            async for snapshots in source:
                self._apply(snapshots)
        except StoreException as e:
            logger.warning("Live read of %s stopped: %s", COLLECTION_SERVICES, e.message)

    def _apply(self, snapshots: list[DocumentSnapshot]) -> None:
        services: list[Service] = []
        for snapshot in snapshots:
            try:
                services.append(Service.from_document(snapshot.id, snapshot.data))
            except ValidationError:
                logger.warning("Skipping malformed service document %s", snapshot.id)
        self._current = services
        self._confirmed = True
        self._broadcaster.publish(list(services))

    def subscribe(self) -> Subscription[list[Service]]:
        """Live stream of the ordered service list; the confirmed list is replayed first."""
        return self._broadcaster.subscribe()

    def find_by_slug(self, slug: str) -> Service | None:
        """First service with this slug in catalog order. Slugs are not unique."""
        return next((s for s in self._current if s.slug == slug), None)

    def get(self, service_id: str) -> Service | None:
        return next((s for s in self._current if s.id == service_id), None)

    @traced("catalog.create")
    async def create(self, data: ServiceCreate) -> str:
        """Add a service stamped with createdAt from the process clock; returns its id."""
        document = data.model_dump(by_alias=True)
        document[FIELD_CREATED_AT] = self._clock()
        service_id = await with_timeout(
            self._store.add(COLLECTION_SERVICES, document), self._timeout
        )
        logger.info("Created service %s (%s)", service_id, data.slug)
        return service_id

    @traced("catalog.update")
    async def update(self, service_id: str, patch: ServicePatch) -> None:
        """Merge the provided fields into the stored service (store-side merge)."""
        fields = patch.to_document()
        if not fields:
            return
        await with_timeout(
            self._store.update(COLLECTION_SERVICES, service_id, fields), self._timeout
        )
        logger.info("Updated service %s", service_id)

    @traced("catalog.remove")
    async def remove(self, service_id: str) -> None:
        await with_timeout(
            self._store.delete(COLLECTION_SERVICES, service_id), self._timeout
        )
        logger.info("Removed service %s", service_id)

    async def aclose(self) -> None:
        if self._source is not None:
            self._source.dispose()
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
        self._broadcaster.close()
