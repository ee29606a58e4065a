from tests._user_config_tests import UserConfig as cfg_module
from tests._sim_params_tests import SimParams as sparams_module

from src.components.subchannel import SubchannelSimulator
from src.utils.support import InvalidParameterError
from src.utils.event_logger import get_logger
from src.utils.messages import (
    STARTING_TEST_MSG,
    TEST_COMPLETED_MSG,
    STARTING_SIMULATION_MSG,
    SIMULATION_TERMINATED_MSG,
)

import pytest


def test_closed_form_latency():
    sim = SubchannelSimulator(cfg_module, sparams_module, num_subchannels=4, bandwidth_MHz=80)
    sim.simulate(100, 60)

    assert sim.users_per_subchannel == 25.0
    assert sim.average_latency_ms() == pytest.approx(530.0)
    assert sim.max_latency_ms() == pytest.approx(1191.0)


def test_closed_form_throughput():
    sim = SubchannelSimulator(cfg_module, sparams_module, num_subchannels=4, bandwidth_MHz=80)
    sim.simulate(100, 60)

    # (80 / 4) * 2.0 * 0.75 / (1 + 0.1 * 25) * 4
    expected = 30.0 / 3.5 * 4
    assert sim.calculate_throughput() == pytest.approx(expected)
    assert sim.throughput_Mbps() == pytest.approx(expected)


def test_throughput_is_capped_by_the_link():
    sim = SubchannelSimulator(cfg_module, sparams_module, num_subchannels=1, bandwidth_MHz=80)
    sim.simulate(1, 10)

    assert sim.calculate_throughput() <= 80 * 2.0 * 0.75


def test_throughput_floor():
    sim = SubchannelSimulator(cfg_module, sparams_module, num_subchannels=1, bandwidth_MHz=1)
    sim.simulate(1000, 10)

    assert sim.calculate_throughput() == pytest.approx(sparams_module.WIFI6_MIN_THROUGHPUT_Mbps)


def test_throughput_decreases_with_users():
    sim = SubchannelSimulator(cfg_module, sparams_module)

    throughputs = []
    for num_users in (1, 10, 50, 200):
        sim.simulate(num_users, 10)
        throughputs.append(sim.throughput_Mbps())

    assert throughputs == sorted(throughputs, reverse=True)


def test_latency_increases_with_users():
    sim = SubchannelSimulator(cfg_module, sparams_module, num_subchannels=4, bandwidth_MHz=80)

    avg_latencies = []
    max_latencies = []
    for num_users in (1, 10, 50, 200, 1000):
        sim.simulate(num_users, 10)
        avg_latencies.append(sim.average_latency_ms())
        max_latencies.append(sim.max_latency_ms())

    assert avg_latencies == sorted(avg_latencies)
    assert max_latencies == sorted(max_latencies)


def test_queries_are_idempotent():
    sim = SubchannelSimulator(cfg_module, sparams_module)
    sim.simulate(100, 60)

    assert sim.throughput_Mbps() == sim.throughput_Mbps()
    assert sim.average_latency_ms() == sim.average_latency_ms()
    assert sim.max_latency_ms() == sim.max_latency_ms()
    assert sim.frame_exchange_time_ms() == sim.frame_exchange_time_ms()


def test_throughput_increases_with_bandwidth():
    throughputs = []
    for bandwidth_MHz in (20, 40, 80, 160):
        sim = SubchannelSimulator(cfg_module, sparams_module, bandwidth_MHz=bandwidth_MHz)
        sim.simulate(20, 10)
        throughputs.append(sim.throughput_Mbps())

    assert throughputs == sorted(throughputs)


def test_latency_independent_of_recorded_attempts():
    sim = SubchannelSimulator(cfg_module, sparams_module)
    sim.simulate(100, 60)

    assert sim.stats.latencies_ms == []
    assert sim.average_latency_ms() == pytest.approx(530.0)


def test_metrics_before_any_run():
    sim = SubchannelSimulator(cfg_module, sparams_module)

    assert sim.average_latency_ms() == 0.0
    assert sim.max_latency_ms() == 0.0
    assert sim.throughput_Mbps() == 0.0
    assert sim.frame_exchange_time_ms() == 0.0


def test_csi_sounding():
    sim = SubchannelSimulator(cfg_module, sparams_module, num_subchannels=4, bandwidth_MHz=80)
    sim.simulate(100, 60)

    assert sim.csi_stats.success_count == 100
    assert sim.csi_stats.total_bits_delivered == 100 * 200 * 8
    assert min(sim.csi_stats.latencies_ms) >= sparams_module.WIFI6_CSI_MIN_LATENCY_ms

    # 100 reports of 20 us, then 25 OFDMA rounds of 5 ms
    assert sim.frame_exchange_time_ms() == pytest.approx(2.0 + 125.0)


def test_csi_stats_reset_between_runs():
    sim = SubchannelSimulator(cfg_module, sparams_module)
    sim.simulate(50, 10)
    sim.simulate(8, 10)

    assert sim.csi_stats.success_count == 8


def test_collect_stats():
    sim = SubchannelSimulator(cfg_module, sparams_module)
    sim.simulate(100, 60)

    data = sim.collect_stats()
    assert data["generation"] == "WIFI6"
    assert data["params"]["num_subchannels"] == 4
    assert data["stats"]["avg_latency_ms"] == pytest.approx(530.0)
    assert data["stats"]["csi"]["tx_successes"] == 100


@pytest.mark.parametrize("num_subchannels", [0, -2, 1.5])
def test_invalid_subchannels(num_subchannels):
    with pytest.raises(InvalidParameterError):
        SubchannelSimulator(cfg_module, sparams_module, num_subchannels=num_subchannels)


def test_invalid_parameters():
    sim = SubchannelSimulator(cfg_module, sparams_module)

    with pytest.raises(InvalidParameterError):
        sim.simulate(0, 60)

    assert sim.average_latency_ms() == 0.0


if __name__ == "__main__":
    print(STARTING_TEST_MSG)

    logger = get_logger("TEST", cfg_module, sparams_module)

    print(STARTING_SIMULATION_MSG)

    sim = SubchannelSimulator(cfg_module, sparams_module)
    for n in (1, 10, 100):
        sim.simulate(n, 60)
        sim.display_stats()

    print(SIMULATION_TERMINATED_MSG)

    print(TEST_COMPLETED_MSG)
