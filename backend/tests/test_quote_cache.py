from nseticker.services.cache import QuoteCache
from nseticker.services.market_data.synthetic import synthetic_quote


def test_get_missing_symbol_returns_none(clock):
    cache = QuoteCache(ttl=30, clock=clock)
    assert cache.get("TATASTEEL") is None
    assert cache.fresh_quote("TATASTEEL") is None


def test_entry_is_fresh_strictly_inside_ttl(clock):
    cache = QuoteCache(ttl=30, clock=clock)
    entry = cache.put("TATASTEEL", synthetic_quote("TATASTEEL"), clock())

    assert cache.is_fresh(entry, clock.now + 29.999)
    assert not cache.is_fresh(entry, clock.now + 30)
    assert cache.is_fresh(entry, clock.now + 45, ttl=60)


def test_fresh_quote_expires_with_clock(clock):
    cache = QuoteCache(ttl=30, clock=clock)
    quote = synthetic_quote("HDFCBANK")
    cache.put("HDFCBANK", quote)

    assert cache.fresh_quote("hdfcbank") == quote
    clock.advance(31)
    assert cache.fresh_quote("HDFCBANK") is None
    # stale entries are kept, not evicted
    assert cache.get("HDFCBANK").quote == quote


def test_put_replaces_entry(clock):
    cache = QuoteCache(ttl=30, clock=clock)
    first = synthetic_quote("NIFTY50")
    second = synthetic_quote("NIFTY50")
    cache.put("NIFTY50", first)
    clock.advance(5)
    cache.put("NIFTY50", second)

    entry = cache.get("NIFTY50")
    assert entry.quote is second
    assert entry.fetched_at == clock.now
    assert len(cache) == 1
    assert "nifty50" in cache


def test_lock_is_per_symbol(clock):
    cache = QuoteCache(clock=clock)
    assert cache.lock("TATASTEEL") is cache.lock("tatasteel")
    assert cache.lock("TATASTEEL") is not cache.lock("HDFCBANK")
