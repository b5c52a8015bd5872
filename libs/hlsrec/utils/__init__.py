from collections import OrderedDict
from typing import Generic, Hashable, OrderedDict as TOrderedDict, TypeVar

from hlsrec.utils.url import absolute_url, is_http_url, normalize_url, update_scheme


TCacheKey = TypeVar("TCacheKey", bound=Hashable)


class LRUCache(Generic[TCacheKey]):
    """
    A bounded set of keys, ordered by recency.

    Looking up a present key marks it as recently used; recording a key past the
    capacity evicts the least recently used one.
    """

    def __init__(self, num: int):
        if num < 1:
            raise ValueError("LRUCache capacity must be at least 1")
        self.cache: TOrderedDict[TCacheKey, None] = OrderedDict()
        self.num = num

    def lookup(self, key: TCacheKey) -> bool:
        if key not in self.cache:
            return False
        self.cache.move_to_end(key)
        return True

    def record(self, key: TCacheKey) -> None:
        self.cache[key] = None
        self.cache.move_to_end(key)
        if len(self.cache) > self.num:
            self.cache.popitem(last=False)

    def __contains__(self, key: TCacheKey) -> bool:
        return key in self.cache

    def __len__(self) -> int:
        return len(self.cache)


__all__ = ["LRUCache", "absolute_url", "is_http_url", "normalize_url", "update_scheme"]
