"""Live site and payment settings.

Each synchronizer follows one remote document. Remote snapshots are merged
field by field over the last known value, so a partial document never blanks
the other fields, and each snapshot produces exactly one emission. Until the
store confirms the document, current holds the defaults.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from storefront.application.dtos.settings import (
    PaymentSettings,
    PaymentSettingsPatch,
    SiteSettings,
    SiteSettingsPatch,
    apply_patch,
    merge_remote,
)
from storefront.application.interfaces.store import DocumentSnapshot, IDocumentStore
from storefront.application.services._store_calls import with_timeout
from storefront.core.constants import DOC_PAYMENT_SETTINGS, DOC_SITE_SETTINGS
from storefront.domain.exceptions import StoreException, ValidationException
from storefront.shared.streams import Broadcaster, Subscription
from storefront.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class DocumentSynchronizer(Generic[RecordT]):
    """Follows one settings document and republishes the merged record.

    Subclasses set path, record_type and patch_type.
    """

    path: ClassVar[str]
    record_type: ClassVar[type[BaseModel]]
    patch_type: ClassVar[type[BaseModel]]

    def __init__(self, store: IDocumentStore, *, timeout: float | None = 30.0) -> None:
        self._store = store
        self._timeout = timeout
        self._current: RecordT = self.record_type()  # type: ignore[assignment]
        self._confirmed = False
        self._broadcaster: Broadcaster[RecordT] = Broadcaster()
        self._source: Subscription[DocumentSnapshot] | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def current(self) -> RecordT:
        """Last known good value (defaults before the first confirmation)."""
        return self._current

    @property
    def confirmed(self) -> bool:
        """True once the store has confirmed the document's state at least once."""
        return self._confirmed

    def start(self) -> None:
        """Attach the store subscription. Idempotent."""
        if self._source is not None:
            return
        self._source = self._store.subscribe_document(self.path)
        self._task = asyncio.create_task(self._follow(self._source), name=f"sync:{self.path}")

    async def _follow(self, source: Subscription[DocumentSnapshot]) -> None:
        try:
            async for snapshot in source:
                self._apply(snapshot)
        except StoreException as e:
            # Consumers keep the last known good value and see no further emissions.
            logger.warning("Live read of %s stopped: %s", self.path, e.message)

    def _apply(self, snapshot: DocumentSnapshot) -> None:
        if snapshot.exists:
            self._current = merge_remote(self._current, snapshot.data)
        self._confirmed = True
        self._broadcaster.publish(self._current)

    def subscribe(self) -> Subscription[RecordT]:
        """Live stream of the merged record; the confirmed value is replayed first."""
        return self._broadcaster.subscribe()

    def _coerce_patch(self, patch: BaseModel | Mapping[str, Any]) -> BaseModel:
        if isinstance(patch, self.patch_type):
            return patch
        if isinstance(patch, BaseModel):
            patch = patch.model_dump(exclude_unset=True)
        try:
            return self.patch_type.model_validate(patch)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or None
            raise ValidationException(first.get("msg", "Invalid patch"), field=field) from e

    @traced("settings.update")
    async def update(self, patch: BaseModel | Mapping[str, Any]) -> RecordT:
        """Merge patch over current and write the full record back.

        Returns the record that was written. Unknown patch fields raise
        ValidationException before anything is sent.

        Raises:
            PermissionDeniedException: the store refused the write for authorization.
            WriteFailedException: any other refusal, or the store timeout elapsed.
        """
        merged = apply_patch(self._current, self._coerce_patch(patch))
        await with_timeout(
            self._store.set_document(self.path, merged.model_dump(by_alias=True)),
            self._timeout,
        )
        logger.info("Updated %s", self.path)
        return merged

    async def aclose(self) -> None:
        """Dispose the store subscription and every consumer subscription."""
        if self._source is not None:
            self._source.dispose()
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
        self._broadcaster.close()


class SiteSettingsSynchronizer(DocumentSynchronizer[SiteSettings]):
    path = DOC_SITE_SETTINGS
    record_type = SiteSettings
    patch_type = SiteSettingsPatch


class PaymentSettingsSynchronizer(DocumentSynchronizer[PaymentSettings]):
    path = DOC_PAYMENT_SETTINGS
    record_type = PaymentSettings
    patch_type = PaymentSettingsPatch
