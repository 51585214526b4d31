import random
from typing import Dict, Optional, Sequence

from .memory import Session, SessionStore


class ContentRotator:
    """Pick pool items for a user without repeats until the pool runs out.

    History is kept per user and per pool. Once a user has seen every item of
    a pool, that pool's history is cleared and the cycle starts over.
    """

    def __init__(self, store: SessionStore, pools: Dict[str, Sequence], rng: Optional[random.Random] = None):
        self.store = store
        self.pools = dict(pools)
        self.rng = rng or random.Random()

    def size(self, pool: str) -> int:
        return len(self.pools[pool])

    def pick(self, user_id: str, pool: str, session: Optional[Session] = None) -> int:
        """Draw an unshown index. History lives on `session`, or the store's session for `user_id`."""
        n = self.size(pool)
        if n == 0:
            raise ValueError(f"content pool {pool!r} is empty")
        if session is None:
            session = self.store.get(user_id)
        shown = session.shown_in(pool)
        if len(shown) >= n:
            shown.clear()
        index = self.rng.randrange(n)
        while index in shown:
            index = self.rng.randrange(n)
        shown.add(index)
        return index

    def pick_item(self, user_id: str, pool: str, session: Optional[Session] = None):
        return self.pools[pool][self.pick(user_id, pool, session=session)]
