"""User credit ledger, stored as a JSON file."""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from .config import CREDITS_FILE, MAX_CREDITS
from .core import load_json, now_iso, save_json

logger = logging.getLogger(__name__)


class CreditLedger:
    """
    Remaining simplification credits per user id.

    ``use_credit`` reads and decrements under one lock, so a balance never
    goes below zero even with concurrent requests in the same process.
    """

    def __init__(
        self,
        path: Union[str, Path] = CREDITS_FILE,
        max_credits: int = MAX_CREDITS,
    ):
        self.path = Path(path)
        self.max_credits = max_credits
        self._lock = threading.Lock()

    def _load(self) -> dict:
        return load_json(self.path, default={})

    def _save(self, ledger: dict) -> None:
        save_json(ledger, self.path)

    def get_credits(self, user_id: str) -> int:
        """
        Remaining credits; a first read creates the record with the full allowance.
        """
        with self._lock:
            ledger = self._load()
            record = ledger.get(user_id)
            if record is None:
                record = {"remaining_credits": self.max_credits, "created_at": now_iso()}
                ledger[user_id] = record
                self._save(ledger)
                logger.info(f"Created credit record for {user_id}")
            return int(record.get("remaining_credits", 0))

    def has_credits(self, user_id: str) -> bool:
        """True only for an existing record with a positive balance."""
        with self._lock:
            record = self._load().get(user_id)
        return bool(record) and int(record.get("remaining_credits", 0)) > 0

    def use_credit(self, user_id: str) -> Optional[int]:
        """
        Spend one credit.

        Returns:
            New balance, or None if the user has no credits left
        """
        with self._lock:
            ledger = self._load()
            record = ledger.get(user_id)
            if not record or int(record.get("remaining_credits", 0)) <= 0:
                return None
            record["remaining_credits"] = int(record["remaining_credits"]) - 1
            record["updated_at"] = now_iso()
            self._save(ledger)
            return record["remaining_credits"]
