"""Scheduled task record stored inside the ``schedules`` field of a document."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _new_task_id() -> str:
    return secrets.token_hex(8)


@dataclass
class ScheduledTask:
    task_name: str
    time: datetime
    id: str = field(default_factory=_new_task_id)
    repeat: Optional[str] = None
    catch_up: bool = True
    data: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        when = self.time if self.time.tzinfo else self.time.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "taskName": self.task_name,
            "time": int(when.timestamp() * 1000),
            "catchUp": self.catch_up,
            "data": dict(self.data),
            "repeat": self.repeat,
        }

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "ScheduledTask":
        return cls(
            task_name=payload["taskName"],
            time=datetime.fromtimestamp(payload["time"] / 1000, tz=timezone.utc),
            id=payload["id"],
            repeat=payload.get("repeat"),
            catch_up=payload.get("catchUp", True),
            data=dict(payload.get("data") or {}),
        )
