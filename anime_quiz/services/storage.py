import json
import os
import tempfile
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """
    Durable key/value storage for client-side state (a JSON object on disk).
    Every write overwrites the whole file.
    """

    def __init__(self, path):
        self.path = os.path.abspath(str(path))
        self.items: Dict[str, Any] = {}
        self.load_from_disk()

    def load_from_disk(self):
        """Loads items from the JSON file. Missing or corrupt files read as empty."""
        if not os.path.exists(self.path):
            logger.debug(f"Storage file {self.path} does not exist (yet).")
            self.items = {}
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.items = data if isinstance(data, dict) else {}
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load storage from {self.path}: {e}")
            self.items = {}

    def save_to_disk(self) -> bool:
        """
        Saves current items to the JSON file.
        Written to a temp file first and swapped in, so the old file survives a failed write.
        """
        tmp_path = None
        try:
            directory = os.path.dirname(self.path)
            os.makedirs(directory, exist_ok=True)
            content = json.dumps(self.items, indent=2, ensure_ascii=False)

            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save storage to {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            return False

    def get_item(self, key: str) -> Optional[Any]:
        return self.items.get(key)

    def set_item(self, key: str, value: Any) -> bool:
        """Updates one key and persists immediately. A failed save leaves items as they were."""
        previous = dict(self.items)
        self.items[key] = value
        if not self.save_to_disk():
            self.items = previous
            return False
        return True

    def remove_item(self, key: str) -> bool:
        if key in self.items:
            previous = dict(self.items)
            del self.items[key]
            if not self.save_to_disk():
                self.items = previous
                return False
        return True
