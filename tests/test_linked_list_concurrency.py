from __future__ import annotations

import threading

from addrlist.core.addresses import SENTINEL_ADDRESS, random_address
from addrlist.core.errors import IndexMismatchError, LinkedListError
from addrlist.core.registry import LinkedAddressList


def test_concurrent_inserts_keep_invariants() -> None:
    reg = LinkedAddressList()
    per_thread = 200
    batches = [[random_address() for _ in range(per_thread)] for _ in range(8)]

    def worker(batch: list[str]) -> None:
        for addr in batch:
            reg.insert(addr)

    threads = [threading.Thread(target=worker, args=(b,)) for b in batches]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert reg.count() == 8 * per_thread
    assert set(reg.get_addresses()) == {a for b in batches for a in b}
    reg.check_invariants()


def test_concurrent_head_removals_never_corrupt_the_list() -> None:
    initial = [random_address() for _ in range(500)]
    reg = LinkedAddressList(initial)
    removed: list[str] = []
    removed_lock = threading.Lock()

    def worker() -> None:
        while True:
            head = reg.head()
            if head == SENTINEL_ADDRESS:
                return
            try:
                reg.remove(SENTINEL_ADDRESS, head)
            except IndexMismatchError:
                # Another thread removed it first; re-read and retry.
                continue
            with removed_lock:
                removed.append(head)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert reg.count() == 0
    assert sorted(removed) == sorted(initial)
    reg.check_invariants()


def test_readers_see_consistent_snapshots_during_writes() -> None:
    reg = LinkedAddressList([random_address() for _ in range(50)])
    stop = threading.Event()
    mismatches: list[tuple[int, int]] = []

    def writer() -> None:
        try:
            for _ in range(300):
                addr = random_address()
                reg.insert(addr)
                reg.remove(SENTINEL_ADDRESS, addr)
        finally:
            stop.set()

    def reader() -> None:
        while not stop.is_set():
            snap = reg.snapshot()
            if snap["count"] != len(snap["addresses"]):
                mismatches.append((snap["count"], len(snap["addresses"])))

    threads = [threading.Thread(target=writer)] + [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert mismatches == []
    assert reg.count() == 50
    reg.check_invariants()


def test_failed_mutations_under_contention_leave_state_valid() -> None:
    members = [random_address() for _ in range(20)]
    reg = LinkedAddressList(members)
    errors: list[LinkedListError] = []

    def worker() -> None:
        for addr in members:
            try:
                reg.insert(addr)
            except LinkedListError as e:
                errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(errors) == 4 * len(members)
    assert reg.get_addresses() == members
    reg.check_invariants()
