# corpsleague/services/cache.py
from __future__ import annotations
import asyncio
import functools
import hashlib
import time
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

# In-process TTL caches by namespace
# value = (expires_at_epoch, stored_at_epoch, data)
_CACHES: Dict[str, Dict[Tuple[Any, ...], Tuple[float, int, Any]]] = {}

def _cache_for(namespace: str) -> Dict[Tuple[Any, ...], Tuple[float, int, Any]]:
    if namespace not in _CACHES:
        _CACHES[namespace] = {}
    return _CACHES[namespace]

def _now() -> float:
    return time.time()

def clear_cache(namespace: Optional[str] = None) -> None:
    # clear in place: decorated routes hold a reference to their namespace dict
    for name, cache in _CACHES.items():
        if namespace is None or name == namespace:
            cache.clear()

def _store(cache, key, entry, now: float, max_entries: Optional[int]) -> None:
    # drop expired entries, then evict oldest-first down to the cap
    for k in [k for k, (exp_at, _, _) in cache.items() if exp_at <= now]:
        del cache[k]
    cache[key] = entry
    if max_entries is not None:
        while len(cache) > max_entries:
            del cache[next(iter(cache))]

def _set_headers(response, state: str, stored_at: int, cache_control: str) -> None:
    if response is None:
        return
    response.headers["X-Cache"] = state
    response.headers["X-Cache-Stored-At"] = str(stored_at)
    response.headers["Cache-Control"] = cache_control

def cache_route(
    *,
    namespace: str,
    ttl_seconds: int | Callable[[], int],
    key_builder: Callable[..., Tuple[Any, ...]],
    cache_control: str | None = None,  # defaults to private,max-age=ttl
    max_entries: int | Callable[[], int] | None = None,
):
    """
    Decorator for FastAPI routes (sync or async).
    - Caches the returned data by a computed key.
    - Sets X-Cache: HIT|MISS, X-Cache-Stored-At, and Cache-Control on the Response if present in kwargs.
    - ttl_seconds may be a callable so settings are read per call; 0 disables storing.
    - max_entries bounds the namespace; the oldest entry is evicted first.
    - Sync routes run in the threadpool, as FastAPI would run them undecorated.
    """
    cache = _cache_for(namespace)

    def decorator(fn: Callable):
        is_async = asyncio.iscoroutinefunction(fn)

        async def _call(*args, **kwargs):
            if is_async:
                return await fn(*args, **kwargs)
            return await run_in_threadpool(fn, *args, **kwargs)

        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            response = kwargs.get("response")  # FastAPI Response if included in signature
            ttl = ttl_seconds() if callable(ttl_seconds) else ttl_seconds
            cc = cache_control or f"private, max-age={ttl}"
            key = key_builder(*args, **kwargs)
            now = _now()

            entry = cache.get(key)
            if entry:
                exp_at, stored_at, data = entry
                if exp_at > now:
                    _set_headers(response, "HIT", stored_at, cc)
                    return data
                cache.pop(key, None)

            # MISS → compute
            data = await _call(*args, **kwargs)
            stored_at = int(now)
            if ttl > 0:
                cap = max_entries() if callable(max_entries) else max_entries
                _store(cache, key, (now + ttl, stored_at, data), now, cap)
            _set_headers(response, "MISS", stored_at, cc)
            return data

        return wrapper
    return decorator

# ------------- common key helpers -------------

def key_tuple(*parts: Any) -> Tuple[Any, ...]:
    return tuple(parts)

def body_digest(body: BaseModel) -> str:
    # stable by request content; field order is fixed by the model
    return hashlib.sha256(body.model_dump_json().encode()).hexdigest()
