from tests._user_config_tests import UserConfig as cfg_module
from tests._sim_params_tests import SimParams as sparams_module

from src.components.multiplexed import MultiplexedSimulator
from src.components.endpoint import Endpoint, SuccessPolicy, UniformSuccessPolicy
from src.utils.transmission import get_tx_time_s, get_difs_s
from src.utils.support import InvalidParameterError
from src.utils.event_logger import get_logger
from src.utils.messages import (
    STARTING_TEST_MSG,
    TEST_COMPLETED_MSG,
    STARTING_SIMULATION_MSG,
    SIMULATION_TERMINATED_MSG,
)

from collections import Counter

import threading
import pytest


class RecordingPolicy(SuccessPolicy):
    """Always succeeds and keeps track of who was granted the channel."""

    def __init__(self):
        self.granted = Counter()
        self._lock = threading.Lock()

    def is_successful(self, endpoint: Endpoint) -> bool:
        with self._lock:
            self.granted[endpoint.id] += 1
        return True


class FailEveryOther(SuccessPolicy):
    def __init__(self):
        self.calls = 0
        self._lock = threading.Lock()

    def is_successful(self, endpoint: Endpoint) -> bool:
        with self._lock:
            self.calls += 1
            return self.calls % 2 == 0


def test_round_robin_grants_users_in_turn():
    policy = RecordingPolicy()
    sim = MultiplexedSimulator(cfg_module, sparams_module, policy=policy)
    sim.simulate(3, 2)

    counts = [policy.granted[i] for i in range(3)]
    assert sum(counts) == sim.stats.total_attempts()
    assert sum(counts) % sparams_module.WIFI5_MAX_IN_FLIGHT == 0
    assert max(counts) - min(counts) <= 1


def test_failures_are_not_collisions():
    sim = MultiplexedSimulator(cfg_module, sparams_module, policy=FailEveryOther())
    sim.simulate(10, 2)

    assert sim.failure_count() > 0
    assert sim.stats.get_collision_count() == 0
    assert sim.stats.success_count + sim.failure_count() == sim.stats.total_attempts()
    assert len(sim.stats.latencies_ms) == sim.stats.success_count


def test_default_success_rate():
    sim = MultiplexedSimulator(cfg_module, sparams_module)
    sim.simulate(10, 50)

    rate = sim.stats.success_count / sim.stats.total_attempts()
    assert 0.7 < rate < 0.9


def test_clock_advances_only_on_success():
    sim = MultiplexedSimulator(cfg_module, sparams_module, policy=UniformSuccessPolicy(1.0))
    sim.simulate(1, 1)

    tx_us = get_tx_time_s(1500, 80) * 1.01 / 1.5 * 1e6
    per_success_us = tx_us + get_difs_s(sparams_module) * 1e6

    assert sim.env.now >= 1000
    assert sim.env.now == pytest.approx(sim.stats.success_count * per_success_us)


def test_latency_floor():
    sim = MultiplexedSimulator(cfg_module, sparams_module)
    sim.simulate(100, 5)

    assert sim.stats.success_count > 0
    assert min(sim.stats.latencies_ms) >= sparams_module.WIFI5_MIN_LATENCY_ms
    assert sim.average_latency_ms() >= 5.0


@pytest.mark.parametrize("num_users, penalty", [(1, 0.99), (10, 0.9), (80, 0.5)])
def test_throughput_formula(num_users, penalty):
    sim = MultiplexedSimulator(cfg_module, sparams_module, policy=UniformSuccessPolicy(1.0))
    sim.simulate(num_users, 2)

    expected_bps = sim.stats.success_count * 12000 * 1.5 * penalty / 2e-3
    assert sim.throughput_Mbps() == pytest.approx(expected_bps / 1e6)


def test_wider_channel_delivers_more():
    narrow = MultiplexedSimulator(cfg_module, sparams_module, bandwidth_MHz=20)
    wide = MultiplexedSimulator(cfg_module, sparams_module, bandwidth_MHz=160)
    narrow.simulate(10, 5)
    wide.simulate(10, 5)

    assert wide.throughput_Mbps() > narrow.throughput_Mbps()


def test_queries_are_idempotent():
    sim = MultiplexedSimulator(cfg_module, sparams_module)
    sim.simulate(10, 5)

    assert sim.throughput_Mbps() == sim.throughput_Mbps()
    assert sim.average_latency_ms() == sim.average_latency_ms()
    assert sim.max_latency_ms() == sim.max_latency_ms()
    assert sim.failure_count() == sim.failure_count()


def test_invalid_parameters():
    sim = MultiplexedSimulator(cfg_module, sparams_module)

    with pytest.raises(InvalidParameterError):
        sim.simulate(1001, 5)

    assert sim.params is None
    assert sim.stats.total_attempts() == 0


if __name__ == "__main__":
    print(STARTING_TEST_MSG)

    logger = get_logger("TEST", cfg_module, sparams_module)

    print(STARTING_SIMULATION_MSG)

    sim = MultiplexedSimulator(cfg_module, sparams_module)
    for n in (1, 10, 100):
        sim.simulate(n, 5)
        sim.display_stats()

    print(SIMULATION_TERMINATED_MSG)

    print(TEST_COMPLETED_MSG)
