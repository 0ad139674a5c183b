"""Status Store - Durable key/value map of externally observable state."""

from pimainteno.status_store import keys
from pimainteno.status_store.exceptions import StatusStoreError, StoredValueError
from pimainteno.status_store.models import StatusEntry
from pimainteno.status_store.store import StatusStore

__all__ = [
    "StatusEntry",
    "StatusStore",
    "StatusStoreError",
    "StoredValueError",
    "keys",
]
