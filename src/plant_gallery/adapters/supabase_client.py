"""Shared Supabase client handle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from supabase import Client, create_client

if TYPE_CHECKING:
    from postgrest import SyncRequestBuilder


@dataclass
class SupabaseClientHandle:
    """Creates the Supabase client on first use and reuses it afterwards.

    Empty credentials are accepted here; the client rejects them when the
    first store call builds it.
    """

    url: str
    key: str
    _client: Client | None = field(default=None, init=False, repr=False)

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_client(self.url, self.key)
        return self._client

    def table(self, name: str) -> SyncRequestBuilder:
        return self.client.table(name)
