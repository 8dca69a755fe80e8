# core/local_storage.py

from typing import Dict, Optional

from core.cache import SimpleCache


class LocalStorage:
    """
    Process-local persisted client state.

    ``get_item`` / ``set_item`` / ``remove_item`` follow the async storage
    interface the Supabase auth client expects, so the access and refresh
    tokens of the live session land in ``tokens``. ``cache`` holds key/value
    entries and cached responses.
    """

    def __init__(self):
        self.tokens: Dict[str, str] = {}
        self.cache = SimpleCache()

    # ---------------------------------------------
    # Auth storage interface
    # ---------------------------------------------
    async def get_item(self, key: str) -> Optional[str]:
        return self.tokens.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.tokens[key] = value

    async def remove_item(self, key: str) -> None:
        self.tokens.pop(key, None)

    # ---------------------------------------------
    # Wipe
    # ---------------------------------------------
    def clear(self) -> None:
        """Drop stored tokens and every cached entry."""
        self.tokens.clear()
        self.cache.clear()

    def is_empty(self) -> bool:
        return not self.tokens and self.cache.size() == 0
