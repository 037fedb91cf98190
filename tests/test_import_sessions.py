import threading
import time
from datetime import datetime

from fleetdata.domain.entities import ImportDomain, ImportSession, ParseResult
from fleetdata.infrastructure.import_sessions import (
    InMemoryImportSessionStore,
    get_import_session_store,
)


def _session(session_id: str = "abc") -> ImportSession:
    return ImportSession(
        session_id=session_id,
        parse_result=ParseResult(domain=ImportDomain.BUDGET, all_rows=()),
        original_filename="budget.xlsx",
        raw_bytes=b"raw",
        created_at=datetime(2024, 1, 1),
    )


def test_take_returns_session_once():
    store = InMemoryImportSessionStore()
    store.put(_session())

    assert store.take("abc").original_filename == "budget.xlsx"
    assert store.take("abc") is None
    assert store.take("never-issued") is None


def test_session_is_evicted_after_ttl():
    store = InMemoryImportSessionStore()
    store.put(_session())
    store.schedule_eviction("abc", 0.05)

    deadline = time.monotonic() + 2
    while "abc" in store and time.monotonic() < deadline:
        time.sleep(0.01)

    assert "abc" not in store
    assert store.take("abc") is None


def test_take_cancels_pending_eviction():
    store = InMemoryImportSessionStore()
    store.put(_session())
    store.schedule_eviction("abc", 60)

    assert store.take("abc") is not None
    assert len(store) == 0
    assert store._timers == {}


def test_concurrent_take_has_a_single_winner():
    store = InMemoryImportSessionStore()
    store.put(_session())
    results = []
    barrier = threading.Barrier(8)

    def _worker():
        barrier.wait()
        results.append(store.take("abc"))

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(1 for result in results if result is not None) == 1


def test_clear_drops_sessions_and_timers():
    store = InMemoryImportSessionStore()
    store.put(_session("one"))
    store.put(_session("two"))
    store.schedule_eviction("one", 60)

    store.clear()

    assert len(store) == 0
    assert store._timers == {}


def test_process_store_is_shared():
    assert get_import_session_store() is get_import_session_store()
