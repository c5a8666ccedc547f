"""
Unit tests for the bounded pending-link queue.
"""
import threading

from youwee.controller.pending_links import PendingLinkQueue
from youwee.core.config import MAX_PENDING_EXTERNAL_LINKS


def test_take_all_on_new_queue_is_empty():
    queue = PendingLinkQueue()
    assert queue.take_all() == []
    assert queue.take_all() == []


def test_enqueue_empty_is_noop():
    queue = PendingLinkQueue()
    queue.enqueue([])
    queue.enqueue(None)
    assert queue.size == 0


def test_duplicate_enqueue_keeps_size(make_link):
    queue = PendingLinkQueue()
    link = make_link(1)
    queue.enqueue([link])
    queue.enqueue([link])
    assert queue.size == 1


def test_invalid_links_are_dropped(make_link):
    queue = PendingLinkQueue()
    queue.enqueue(["noise", "youwee://download?v=1", make_link(1), "", None])
    assert queue.snapshot() == [make_link(1)]


def test_overflow_evicts_oldest(make_link):
    queue = PendingLinkQueue()
    links = [make_link(index) for index in range(1, 102)]
    for link in links:
        queue.enqueue([link])
    assert queue.size == MAX_PENDING_EXTERNAL_LINKS
    assert queue.take_all() == links[1:]


def test_overflow_within_single_call(make_link):
    queue = PendingLinkQueue(capacity=3)
    queue.enqueue([make_link(index) for index in range(5)])
    assert queue.snapshot() == [make_link(2), make_link(3), make_link(4)]


def test_drain_returns_insertion_order_then_empty(make_link):
    queue = PendingLinkQueue()
    queue.enqueue([make_link(3), make_link(1)])
    queue.enqueue([make_link(2), make_link(3)])
    assert queue.take_all() == [make_link(3), make_link(1), make_link(2)]
    assert queue.take_all() == []


def test_links_round_trip_verbatim():
    queue = PendingLinkQueue()
    link = "  youwee://download?v=1&url=https%3A%2F%2Fexample.com%2F%E2%9C%93  "
    queue.enqueue([link])
    assert queue.take_all() == [link]


def test_enqueue_is_noop_when_lock_unavailable(make_link):
    lock = threading.Lock()
    queue = PendingLinkQueue(lock=lock, lock_timeout_seconds=0.01)
    lock.acquire()
    try:
        queue.enqueue([make_link(1)])
        assert queue.take_all() == []
    finally:
        lock.release()
    assert queue.take_all() == []


def test_take_all_returns_empty_when_lock_unavailable(make_link):
    lock = threading.Lock()
    queue = PendingLinkQueue(lock=lock, lock_timeout_seconds=0.01)
    queue.enqueue([make_link(1)])
    lock.acquire()
    try:
        assert queue.take_all() == []
        assert queue.size == 0
    finally:
        lock.release()
    assert queue.take_all() == [make_link(1)]


def test_enqueue_absorbs_iteration_failure(make_link):
    def broken():
        yield make_link(1)
        raise RuntimeError("argv source failed")

    queue = PendingLinkQueue()
    queue.enqueue(broken())
    assert queue.take_all() == [make_link(1)]


def test_concurrent_producers_and_consumer(make_link):
    queue = PendingLinkQueue(capacity=1000)
    drained = []
    start = threading.Event()

    def produce(offset):
        start.wait()
        for index in range(50):
            queue.enqueue([make_link(offset + index)])

    def consume():
        start.wait()
        for _ in range(20):
            drained.extend(queue.take_all())

    threads = [threading.Thread(target=produce, args=(offset,)) for offset in (0, 100, 200, 300)]
    threads.append(threading.Thread(target=consume))
    for thread in threads:
        thread.start()
    start.set()
    for thread in threads:
        thread.join()
    drained.extend(queue.take_all())

    assert len(drained) == 200
    assert len(set(drained)) == 200
