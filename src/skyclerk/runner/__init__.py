"""
CLI runner module.

Provides commands:
- init: Write a default config file
- login / register / logout / status: Session management
- account / switch: Profile, billing and workspace selection
- ledger / receipts / categories / labels / pnl: Read workspace data
- upload-receipt: Submit a receipt photo
- ping: One subscription health check
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
