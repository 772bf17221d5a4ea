"""
Shared test fixtures.

Provides: in-memory stand-in for the async Firestore client, a ready
FirestoreProvider wired to it, mocked aiogram messages, and a real Bot
whose session records API calls instead of sending them.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.client.session.base import BaseSession
from aiogram.types import Chat, Message, MessageEntity, Update, User
# NotFound comes with firebase-admin (google-api-core)
from google.api_core.exceptions import NotFound

from providers import FirestoreProvider


class FakeSnapshot:
    def __init__(self, id: str, data: Optional[Dict[str, Any]]):
        self.id = id
        self._data = copy.deepcopy(data)
        self.exists = data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)


class FakeDocument:
    def __init__(self, store: Dict[str, Dict[str, Any]], id: str):
        self._store = store
        self.id = id

    async def get(self) -> FakeSnapshot:
        return FakeSnapshot(self.id, self._store.get(self.id))

    async def set(self, data: Dict[str, Any]) -> None:
        self._store[self.id] = copy.deepcopy(data)

    async def update(self, data: Dict[str, Any]) -> None:
        if self.id not in self._store:
            raise NotFound(f"No document to update: {self.id}")
        self._store[self.id].update(copy.deepcopy(data))

    async def delete(self) -> None:
        self._store.pop(self.id, None)


class FakeQuery:
    def __init__(self, store: Dict[str, Dict[str, Any]], limit: Optional[int] = None):
        self._store = store
        self._limit = limit

    def limit(self, count: int) -> "FakeQuery":
        return FakeQuery(self._store, count)

    async def get(self) -> List[FakeSnapshot]:
        snaps = [FakeSnapshot(id, data) for id, data in self._store.items()]
        return snaps[: self._limit] if self._limit is not None else snaps


class FakeCollection(FakeQuery):
    def document(self, id: str) -> FakeDocument:
        return FakeDocument(self._store, id)


class FakeFirestore:
    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self.collections.setdefault(name, {}))


@pytest.fixture
def fake_db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def provider(fake_db) -> FirestoreProvider:
    """Provider that skips firebase-admin and talks to the in-memory store."""
    p = FirestoreProvider(credentials={"type": "service_account"}, database_url="https://test.firebaseio.com")
    p.db = fake_db
    return p


@pytest.fixture
def message():
    msg = MagicMock()
    msg.chat.id = 100
    msg.text = ""
    msg.entities = None
    msg.answer = AsyncMock()
    msg.answer_photo = AsyncMock()
    return msg


class RecordingSession(BaseSession):
    """aiogram session that keeps every API method instead of calling Telegram."""

    def __init__(self):
        super().__init__()
        self.requests: List[Any] = []

    async def make_request(self, bot, method, timeout=None):
        self.requests.append(method)
        return True

    async def stream_content(self, url, headers=None, timeout=30, chunk_size=65536, raise_for_status=True):
        yield b""

    async def close(self):
        return None


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def tg_bot(session) -> Bot:
    return Bot(token="42:TEST", session=session, default=DefaultBotProperties(parse_mode="HTML"))


def _make_update(text: str, entities: Optional[List[MessageEntity]] = None) -> Update:
    command_length = len(text.split(" ", 1)[0])
    return Update(
        update_id=1,
        message=Message(
            message_id=1,
            date=datetime.now(timezone.utc),
            chat=Chat(id=100, type="private"),
            from_user=User(id=1, is_bot=False, first_name="Rex"),
            text=text,
            entities=[MessageEntity(type="bot_command", offset=0, length=command_length)] + (entities or []),
        ),
    )


@pytest.fixture
def make_update():
    return _make_update
