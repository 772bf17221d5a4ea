"""Bot package for FoxBell.

This package contains the Telegram bot: a couple of small fun commands
(/shame, /fox) and the entrypoint that wires them, together with the
Firestore storage provider, into an aiogram dispatcher.
"""
