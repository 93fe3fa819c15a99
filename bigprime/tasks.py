# bigprime/tasks.py
# Prime searches driven by the Miller-Rabin predicate
# - nth prime (scan up from 2)
# - largest prime <= N (scan down from N)
# - all primes <= N, optionally persisted one per line
# The deadline is polled between candidates; the core cannot be interrupted.

from __future__ import annotations
import sys, time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .bigint import BigInt4096
from .numtheory import is_prime


class Mode(Enum):
    NTH = "nth"
    AT_MOST = "le"
    ALL = "all"


class Deadline:
    """Wall-clock budget; timeout_s <= 0 never expires."""

    def __init__(self, timeout_s: float = 0, clock: Callable[[], float] = time.monotonic):
        self.timeout_s = timeout_s
        self._clock = clock
        self._t0 = clock()
        self.tripped = False

    def expired(self) -> bool:
        if self.timeout_s > 0 and self._clock() - self._t0 >= self.timeout_s:
            self.tripped = True
        return self.tripped

    def elapsed_ms(self) -> int:
        return int((self._clock() - self._t0) * 1000)


def _warn(msg: str):
    print(f"[warn] {msg}", file=sys.stderr, flush=True)


def nth_prime(n, deadline: Optional[Deadline] = None, rounds: int = 5) -> Optional[BigInt4096]:
    n = BigInt4096(n)
    if not n:
        raise ValueError("n must be >= 1")
    deadline = deadline or Deadline()
    one = BigInt4096(1)
    count = BigInt4096(0)
    candidate = BigInt4096(2)
    while True:
        if is_prime(candidate, rounds):
            count += one
            if count == n:
                return candidate
        if deadline.expired():
            _warn("timeout reached during nth-prime computation")
            return None
        candidate += one


def largest_prime_at_most(n, deadline: Optional[Deadline] = None, rounds: int = 5) -> Optional[BigInt4096]:
    n = BigInt4096(n)
    two = BigInt4096(2)
    if n < two:
        return None
    deadline = deadline or Deadline()
    one = BigInt4096(1)
    candidate = BigInt4096(n)
    while candidate >= two:
        if is_prime(candidate, rounds):
            return candidate
        if deadline.expired():
            _warn("timeout reached during prime-at-most-n computation")
            return None
        candidate -= one
    return None


def primes_up_to(n, deadline: Optional[Deadline] = None, rounds: int = 5,
                 progress_every: int = 0) -> List[BigInt4096]:
    """All primes in [2, n]; a timeout returns what was found so far."""
    n = BigInt4096(n)
    deadline = deadline or Deadline()
    one = BigInt4096(1)
    primes: List[BigInt4096] = []
    candidate = BigInt4096(2)
    checked = 0
    # candidate <= n before the increment, so it cannot wrap past 2^4096 - 1
    while candidate <= n:
        if is_prime(candidate, rounds):
            primes.append(BigInt4096(candidate))
        checked += 1
        if progress_every > 0 and checked % progress_every == 0:
            print(f"[progress] n={candidate} primes={len(primes)}", file=sys.stderr, flush=True)
        if candidate == n:
            break
        if deadline.expired():
            _warn("timeout reached during all-primes-up-to computation")
            break
        candidate += one
    return primes


def write_primes(primes, path: str) -> int:
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as fh:
        for p in primes:
            fh.write(f"{p}\n")
            count += 1
    return count


@dataclass
class TaskResult:
    mode: Mode
    value: BigInt4096
    prime: Optional[BigInt4096] = None
    primes: List[BigInt4096] = field(default_factory=list)
    timed_out: bool = False
    elapsed_ms: int = 0

    def to_dict(self) -> dict:
        d = {
            "mode": self.mode.value,
            "n": str(self.value),
            "timed_out": self.timed_out,
            "elapsed_ms": self.elapsed_ms,
        }
        if self.mode is Mode.ALL:
            d["count"] = len(self.primes)
            d["primes"] = [str(p) for p in self.primes]
        else:
            d["prime"] = str(self.prime) if self.prime is not None else None
        return d


def run_task(mode: Mode, value, timeout_s: float = 0, rounds: int = 5,
             progress_every: int = 0) -> TaskResult:
    value = BigInt4096(value)
    deadline = Deadline(timeout_s)
    res = TaskResult(mode=mode, value=value)
    if mode is Mode.NTH:
        res.prime = nth_prime(value, deadline, rounds)
        res.timed_out = deadline.tripped
    elif mode is Mode.AT_MOST:
        res.prime = largest_prime_at_most(value, deadline, rounds)
        res.timed_out = deadline.tripped
    else:
        res.primes = primes_up_to(value, deadline, rounds, progress_every)
        res.timed_out = deadline.tripped
    res.elapsed_ms = deadline.elapsed_ms()
    return res
