"""Polling pipeline for mirroring a Notion database."""

from .poller import Ledger, Poller

__all__ = ["Ledger", "Poller"]
