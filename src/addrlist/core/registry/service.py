from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, Iterator

from ..addresses import SENTINEL_ADDRESS, ZERO_ADDRESS, is_reserved, normalize_address, random_address
from ..errors import (
    DuplicateAddressError,
    IndexMismatchError,
    InvalidAddressError,
    InvalidInitialSetError,
    InvariantViolationError,
)

logger = logging.getLogger(__name__)


class LinkedAddressList:
    """Ordered set of addresses stored as a sentinel-anchored singly linked map.

    `_next[a]` is the address following member `a`, or the sentinel for the
    last member. `_next[SENTINEL]` is the head (the sentinel itself when the
    list is empty), so the chain is circular through the sentinel.

    Removal and replacement are addressed by predecessor rather than by index:
    the caller names the item that currently precedes the target and the call
    is rejected when it does not. Every public method runs under one lock.
    """

    SENTINEL = SENTINEL_ADDRESS

    def __init__(self, initial: Iterable[Any] = (), *, self_address: Any | None = None) -> None:
        self._lock = threading.RLock()
        self.self_address = normalize_address(self_address) if self_address is not None else random_address()
        self._next: dict[str, str] = {SENTINEL_ADDRESS: SENTINEL_ADDRESS}
        self._count = 0
        self._revision = 0

        members = self._validate_initial(initial)
        prev = SENTINEL_ADDRESS
        for addr in members:
            self._next[prev] = addr
            prev = addr
        self._next[prev] = SENTINEL_ADDRESS
        self._count = len(members)
        logger.debug("Created list %s with %d members", self.self_address, self._count)

    def _validate_initial(self, initial: Iterable[Any]) -> list[str]:
        members: list[str] = []
        seen: set[str] = set()
        for raw in initial:
            try:
                addr = normalize_address(raw)
            except ValueError as e:
                raise InvalidInitialSetError(str(e), {"address": repr(raw)}) from e
            if self._is_invalid_new_item(addr):
                raise InvalidInitialSetError(
                    "LinkedAddressList: initial address is invalid.",
                    {"address": addr},
                )
            if addr in seen:
                raise InvalidInitialSetError(
                    "LinkedAddressList: no duplicate addresses allowed.",
                    {"address": addr},
                )
            seen.add(addr)
            members.append(addr)
        return members

    def _is_invalid_new_item(self, addr: str) -> bool:
        return is_reserved(addr, self.self_address)

    def _is_member_locked(self, addr: str) -> bool:
        return addr != SENTINEL_ADDRESS and addr in self._next

    def _addresses_locked(self) -> list[str]:
        out: list[str] = []
        current = self._next[SENTINEL_ADDRESS]
        while current != SENTINEL_ADDRESS:
            out.append(current)
            current = self._next[current]
        return out

    # Queries

    def sentinel(self) -> str:
        return SENTINEL_ADDRESS

    def is_member(self, item: Any) -> bool:
        addr = normalize_address(item)
        with self._lock:
            return self._is_member_locked(addr)

    def count(self) -> int:
        with self._lock:
            return self._count

    def get_addresses(self) -> list[str]:
        """Snapshot of the members, head to tail."""
        with self._lock:
            return self._addresses_locked()

    def head(self) -> str:
        with self._lock:
            return self._next[SENTINEL_ADDRESS]

    def revision(self) -> int:
        with self._lock:
            return self._revision

    def predecessor_of(self, item: Any) -> str:
        """Return the address whose successor is `item` (the sentinel for the head).

        Walks the chain, so this is O(n). Raises KeyError if `item` is not a member.
        """

        addr = normalize_address(item)
        with self._lock:
            if not self._is_member_locked(addr):
                raise KeyError(addr)
            prev = SENTINEL_ADDRESS
            while self._next[prev] != addr:
                prev = self._next[prev]
            return prev

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "sentinel": SENTINEL_ADDRESS,
                "self": self.self_address,
                "count": self._count,
                "addresses": self._addresses_locked(),
                "revision": self._revision,
            }

    # Mutations

    def insert(self, new_item: Any) -> None:
        """Add `new_item` at the head of the list."""

        new = normalize_address(new_item)
        with self._lock:
            if self._is_invalid_new_item(new):
                raise InvalidAddressError("LinkedAddressList: new address is invalid.", {"newItem": new})
            if self._is_member_locked(new):
                raise DuplicateAddressError("LinkedAddressList: no duplicate addresses allowed.", {"newItem": new})

            self._next[new] = self._next[SENTINEL_ADDRESS]
            self._next[SENTINEL_ADDRESS] = new
            self._count += 1
            self._revision += 1
            logger.debug("insert %s (count=%d)", new, self._count)

    def remove(self, prev_item: Any, item: Any) -> None:
        """Unlink `item`, whose current predecessor must be `prev_item`."""

        prev = normalize_address(prev_item)
        target = normalize_address(item)
        with self._lock:
            if target in (ZERO_ADDRESS, SENTINEL_ADDRESS):
                raise InvalidAddressError(
                    "LinkedAddressList: cannot remove 0 address or sentinel address.",
                    {"item": target},
                )
            if self._next.get(prev) != target:
                raise IndexMismatchError(
                    "LinkedAddressList: item does not correspond to the index.",
                    {"prevItem": prev, "item": target},
                )

            self._next[prev] = self._next.pop(target)
            self._count -= 1
            self._revision += 1
            logger.debug("remove %s after %s (count=%d)", target, prev, self._count)

    def swap(self, prev_item: Any, old_item: Any, new_item: Any) -> None:
        """Replace `old_item` with `new_item` in place. `prev_item` must precede `old_item`."""

        prev = normalize_address(prev_item)
        old = normalize_address(old_item)
        new = normalize_address(new_item)
        with self._lock:
            if self._is_invalid_new_item(new):
                raise InvalidAddressError("LinkedAddressList: new address is invalid.", {"newItem": new})
            if self._is_member_locked(new):
                raise DuplicateAddressError(
                    "LinkedAddressList: cannot add duplicate item to list.",
                    {"newItem": new},
                )
            if old in (ZERO_ADDRESS, SENTINEL_ADDRESS):
                raise InvalidAddressError(
                    "LinkedAddressList: oldItem cannot be 0 address or sentinel.",
                    {"oldItem": old},
                )
            if self._next.get(prev) != old:
                raise IndexMismatchError(
                    "LinkedAddressList: oldItem is not at the specified index.",
                    {"prevItem": prev, "oldItem": old},
                )

            self._next[new] = self._next.pop(old)
            self._next[prev] = new
            self._revision += 1
            logger.debug("swap %s -> %s after %s", old, new, prev)

    # Consistency

    def check_invariants(self) -> None:
        """Walk the chain and raise InvariantViolationError if it is inconsistent."""

        with self._lock:
            count = self._count
            head = self._next.get(SENTINEL_ADDRESS)
            if head is None:
                raise InvariantViolationError(3, "sentinel is not linked")
            if (count == 0) != (head == SENTINEL_ADDRESS):
                raise InvariantViolationError(4, "empty head does not match count", {"count": count, "head": head})

            seen: set[str] = set()
            current = head
            for step in range(count):
                if current == SENTINEL_ADDRESS:
                    raise InvariantViolationError(3, "chain returned to sentinel early", {"steps": step, "count": count})
                if current in (ZERO_ADDRESS, self.self_address):
                    raise InvariantViolationError(1, "reserved address is a member", {"address": current})
                if current in seen:
                    raise InvariantViolationError(2, "address appears twice", {"address": current})
                seen.add(current)
                nxt = self._next.get(current)
                if nxt is None:
                    raise InvariantViolationError(3, "chain is broken", {"address": current})
                current = nxt

            if current != SENTINEL_ADDRESS:
                raise InvariantViolationError(3, "chain does not return to sentinel", {"count": count})
            if len(self._next) - 1 != count:
                raise InvariantViolationError(
                    2,
                    "unreachable entries in the mapping",
                    {"entries": len(self._next) - 1, "count": count},
                )

    # Python protocol

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, item: object) -> bool:
        try:
            return self.is_member(item)
        except ValueError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self.get_addresses())

    def __repr__(self) -> str:
        return f"LinkedAddressList(count={self.count()}, self_address={self.self_address!r})"
