# bloodbridge/deps.py
from bloodbridge.core.config import settings
from bloodbridge.core.events import ChangeFeed

if settings.use_mongo:
    from bloodbridge.core.db import get_db
    from bloodbridge.repos.mongo import MongoRepo
    _repo_singleton = MongoRepo(get_db())
else:
    from bloodbridge.repos.inmemory import InMemoryRepo
    _repo_singleton = InMemoryRepo()

_feed_singleton = ChangeFeed(maxlen=settings.event_buffer)

def get_repo():
    return _repo_singleton

def get_feed():
    return _feed_singleton
