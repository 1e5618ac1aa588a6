"""Client-side persistence of the Google token pair between app reloads."""

import json
from pathlib import Path
from typing import Dict, Optional

STORAGE_KEY = "googleTokens"
DEFAULT_STORAGE_PATH = Path.home() / ".ai_agent" / "frontend_storage.json"


class TokenStore:
    """Keeps one token pair under a fixed key in a small JSON key-value file."""

    def __init__(self, storage_path: Optional[Path] = None, key: str = STORAGE_KEY):
        self.storage_path = Path(storage_path or DEFAULT_STORAGE_PATH)
        self.key = key

    def _read_all(self) -> Dict[str, str]:
        if not self.storage_path.exists():
            return {}
        try:
            data = json.loads(self.storage_path.read_text())
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: Dict[str, str]):
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self.storage_path.write_text(json.dumps(data))

    def load(self) -> Optional[Dict[str, str]]:
        """Returns the stored tokens, or None when nothing usable is stored."""
        raw = self._read_all().get(self.key)
        if not raw:
            return None
        try:
            tokens = json.loads(raw)
        except ValueError:
            return None
        if not isinstance(tokens, dict) or not tokens.get("access_token"):
            return None
        return tokens

    def save(self, tokens: Dict[str, str]):
        """Stores the token pair, replacing any previous one."""
        if not tokens.get("access_token"):
            raise ValueError("A token pair needs an access_token")
        data = self._read_all()
        data[self.key] = json.dumps(tokens)
        self._write_all(data)

    def clear(self):
        """Forgets the stored tokens (explicit disconnect)."""
        data = self._read_all()
        if data.pop(self.key, None) is not None:
            self._write_all(data)
