from src.components.endpoint import Endpoint

from typing import Callable

import threading
import numpy as np
import pandas as pd


class RunStatistics:
    """
    Thread-safe accumulation of transmission outcomes into run-level metrics.

    Every mutating method takes the instance lock, so workers resolving attempts in
    parallel can record their outcomes directly.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        """Drops every recorded outcome and the finalized throughput."""
        with self._lock:
            self.latencies_ms: list[float] = []  # completion order
            self.success_count = 0
            self.collision_count = 0
            self.failure_count = 0
            self.total_bits_delivered = 0.0
            self.throughput_bps = 0.0
            self.is_finalized = False

    def record_success(self, latency_ms: float, bits_delivered: float):
        with self._lock:
            self.latencies_ms.append(latency_ms)
            self.success_count += 1
            self.total_bits_delivered += bits_delivered

    def record_collision(self, endpoint: Endpoint, backoff_increment_s: float):
        """Counts a collision and grows the backoff of the endpoint that issued it."""
        with self._lock:
            self.collision_count += 1
            endpoint.update_backoff(backoff_increment_s)

    def record_failure(self):
        """Counts an attempt lost to channel error (retried later, no backoff)."""
        with self._lock:
            self.failure_count += 1

    def finalize_throughput(
        self,
        duration_s: float,
        penalty_fn: Callable[[int], float],
        num_users: int,
        delivered_bits: float | None = None,
    ):
        """
        Computes the run throughput. Must be called exactly once per run.

        Args:
            duration_s (float): The run duration in seconds.
            penalty_fn (Callable[[int], float]): Load penalty applied for the given number of users.
            num_users (int): The number of users of the run.
            delivered_bits (float | None, optional): Bits to use instead of the recorded total.
                Used by models whose throughput does not derive from recorded attempts.
        """
        with self._lock:
            if self.is_finalized:
                raise RuntimeError("Throughput was already finalized for this run")

            bits = self.total_bits_delivered if delivered_bits is None else delivered_bits
            self.throughput_bps = bits * penalty_fn(num_users) / duration_s
            self.is_finalized = True

    def total_attempts(self) -> int:
        return self.success_count + self.collision_count + self.failure_count

    def average_latency_ms(self) -> float:
        if not self.latencies_ms:
            return 0.0
        return float(np.mean(self.latencies_ms))

    def max_latency_ms(self) -> float:
        if not self.latencies_ms:
            return 0.0
        return float(np.max(self.latencies_ms))

    def get_collision_count(self) -> int:
        return self.collision_count

    def throughput_Mbps(self) -> float:
        return self.throughput_bps / 1e6

    def to_dataframe(self) -> pd.DataFrame:
        """Returns the recorded latencies, in completion order, as a DataFrame."""
        return pd.DataFrame(
            {
                "completion_index": range(len(self.latencies_ms)),
                "latency_ms": list(self.latencies_ms),
            }
        )

    def to_dict(self) -> dict:
        latencies = self.to_dataframe()["latency_ms"]
        return {
            "tx_attempts": self.total_attempts(),
            "tx_successes": self.success_count,
            "collisions": self.collision_count,
            "failures": self.failure_count,
            "bits_delivered": self.total_bits_delivered,
            "throughput_Mbps": self.throughput_Mbps(),
            "avg_latency_ms": self.average_latency_ms(),
            "max_latency_ms": self.max_latency_ms(),
            "p95_latency_ms": float(latencies.quantile(0.95)) if not latencies.empty else 0.0,
            "p99_latency_ms": float(latencies.quantile(0.99)) if not latencies.empty else 0.0,
        }
