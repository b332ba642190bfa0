from __future__ import annotations

import json
import os
from typing import Dict

from acctab.domain.ports import SettingsStoragePort


class StorageLocal(SettingsStoragePort):
    """Local filesystem storage for user settings (JSON)."""

    FILE_NAME = "acctab_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def path(self) -> str:
        return os.path.join(self.root, self.FILE_NAME)

    def save_user_prefs(self, prefs: Dict) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(prefs, f, ensure_ascii=False, indent=2)

    def load_user_prefs(self) -> Dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a JSON object.")
        return data
