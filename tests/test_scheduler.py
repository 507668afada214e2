from duckspider.request import Request
from duckspider.scheduler import Scheduler


def test_empty_scheduler():
    scheduler = Scheduler()
    assert scheduler.is_empty() is True
    assert scheduler.next_request() is None


def test_fifo_order():
    scheduler = Scheduler()
    requests = [Request(f"http://example.com/{n}") for n in range(3)]
    for request in requests:
        scheduler.en_request(request)
    assert len(scheduler) == len(requests)
    assert scheduler.is_empty() is False
    drained = [scheduler.next_request() for _ in requests]
    assert drained == requests
    assert scheduler.is_empty() is True
    assert scheduler.next_request() is None


def test_interleaved_enqueue_dequeue():
    scheduler = Scheduler()
    first, second = Request("http://example.com/a"), Request("http://example.com/b")
    scheduler.en_request(first)
    assert scheduler.next_request() is first
    scheduler.en_request(second)
    assert scheduler.next_request() is second
    assert len(scheduler) == 0