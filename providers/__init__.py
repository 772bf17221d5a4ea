"""Storage providers for FoxBell."""

from .base import Provider, ProviderNotReadyError
from .firestore import FirestoreProvider
from .schedule import ScheduledTask

__all__ = ["Provider", "ProviderNotReadyError", "FirestoreProvider", "ScheduledTask"]
