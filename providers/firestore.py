"""Cloud Firestore provider.

Setup:

1. Create a Firebase project and enable *Firestore* (not the Realtime
   Database).
2. Project settings → Service accounts → "Generate new private key"; this
   downloads the service-account JSON.
3. Point ``FIREBASE_CREDENTIALS`` at that file, or put ``FIREBASE_PROJECT``,
   ``FIREBASE_EMAIL`` (``client_email``) and ``FIREBASE_KEY`` (``private_key``)
   into ``.env``. ``FIREBASE_DATABASE_URL`` defaults to
   ``https://<project>.firebaseio.com``.

Tables map to collections and ids to document ids. Every call is a single
request; there is no caching, batching or transaction wrapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Union

import firebase_admin
from firebase_admin import credentials as fb_credentials
from firebase_admin import firestore_async

from .base import Provider, ProviderNotReadyError
from .schedule import ScheduledTask

logger = logging.getLogger(__name__)


class FirestoreProvider(Provider):
    def __init__(
        self,
        credentials: Union[str, Mapping],
        database_url: Optional[str] = None,
        app_name: str = "[DEFAULT]",
    ):
        self.credentials = credentials
        self.database_url = database_url
        self.app_name = app_name
        self.app: Optional[firebase_admin.App] = None
        self.db = None

    async def init(self) -> None:
        if self.db is not None:
            return

        cert = self.credentials if isinstance(self.credentials, str) else dict(self.credentials)
        options: Dict[str, Any] = {}
        if self.database_url:
            options["databaseURL"] = self.database_url

        self.app = firebase_admin.initialize_app(
            fb_credentials.Certificate(cert),
            options,
            name=self.app_name,
        )
        self.db = firestore_async.client(self.app)
        logger.info("Firestore provider ready (app=%s)", self.app_name)

    async def shutdown(self) -> None:
        if self.app is not None:
            firebase_admin.delete_app(self.app)
        self.app = None
        self.db = None

    def _collection(self, table: str):
        if self.db is None:
            raise ProviderNotReadyError("FirestoreProvider.init() has not been awaited")
        return self.db.collection(table)

    # ─────────────────────────────────────────────
    # Tables
    # ─────────────────────────────────────────────

    async def has_table(self, table: str) -> bool:
        snaps = await self._collection(table).limit(1).get()
        return bool(snaps)

    async def create_table(self, table: str):
        # collections appear on first write
        return self._collection(table)

    async def delete_table(self, table: str) -> None:
        logger.warning("delete_table(%s) is not supported by the Firestore provider", table)
        return None

    async def get_keys(self, table: str) -> List[str]:
        snaps = await self._collection(table).get()
        return [snap.id for snap in snaps]

    # ─────────────────────────────────────────────
    # Documents
    # ─────────────────────────────────────────────

    async def get(self, table: str, id: str) -> Dict[str, Any]:
        snap = await self._collection(table).document(id).get()
        return self.pack_data(snap.to_dict(), snap.id)

    async def has(self, table: str, id: str) -> bool:
        snap = await self._collection(table).document(id).get()
        return bool(snap.exists)

    async def get_all(self, table: str, filter: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        snaps = await self._collection(table).get()
        data = [self.pack_data(snap.to_dict(), snap.id) for snap in snaps]

        wanted = set(filter or ())
        if not wanted:
            return data
        return [item for item in data if item["id"] in wanted]

    async def create(self, table: str, id: str, doc: Any = None):
        doc = self._unwrap_schedules(self.parse_update_input(doc))
        return await self._collection(table).document(id).set(doc)

    async def update(self, table: str, id: str, doc: Any):
        doc = self._unwrap_schedules(self.parse_update_input(doc))
        return await self._collection(table).document(id).update(doc)

    async def delete(self, table: str, id: str):
        return await self._collection(table).document(id).delete()

    @staticmethod
    def _unwrap_schedules(doc: Dict[str, Any]) -> Dict[str, Any]:
        """Store a list of ``ScheduledTask`` as the plain data of its first task."""
        schedules = doc.get("schedules")
        if not schedules or not isinstance(schedules, list):
            return doc
        if not all(isinstance(task, ScheduledTask) for task in schedules):
            return doc

        return {**doc, "schedules": [schedules[0].to_json()]}
