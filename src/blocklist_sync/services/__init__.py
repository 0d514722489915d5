from .feed_service import BlocklistFeed
from .mastodon_client import MastodonClient
from .reconciler import Reconciler, plan
from .remote_state import RemoteStateReader
from .sanitizer import sanitize
from .scheduler import RepeatingTask
from .sync_service import SyncService
from .translator import translate

__all__ = [
    "BlocklistFeed", "MastodonClient", "Reconciler", "RemoteStateReader",
    "RepeatingTask", "SyncService", "plan", "sanitize", "translate"
]
