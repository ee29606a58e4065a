from tests._user_config_tests import UserConfig as cfg_module
from tests._sim_params_tests import SimParams as sparams_module

from src.components.contention import ContentionSimulator
from src.components.multiplexed import MultiplexedSimulator
from src.components.subchannel import SubchannelSimulator
from src.utils.support import (
    InvalidParameterError,
    initialize_simulator,
    validate_config,
    validate_params,
    validate_run_params,
    validate_settings,
)
from src.utils.event_logger import get_logger
from src.utils.messages import STARTING_TEST_MSG, TEST_COMPLETED_MSG

import os
import pytest


logger = get_logger("TEST", cfg_module, sparams_module)


def test_default_settings_are_valid():
    validate_settings(cfg_module, sparams_module, logger)


def test_run_params_bounds():
    validate_run_params(1, 1, sparams_module, logger)
    validate_run_params(1000, 10000, sparams_module, logger)
    validate_run_params(10, 2.5, sparams_module, logger)

    for num_users, duration_ms in [(0, 10), (1001, 10), (10, 0), (10, 10000.5)]:
        with pytest.raises(InvalidParameterError):
            validate_run_params(num_users, duration_ms, sparams_module, logger)


def test_invalid_parameter_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate_run_params(-1, 10, sparams_module, logger)


@pytest.mark.parametrize(
    "name, value",
    [
        ("PACKET_SIZE_bytes", 0),
        ("WIFI4_SUCCESS_PROBABILITY", 1.5),
        ("WIFI5_SUCCESS_PROBABILITY", 0),
        ("WIFI4_SUCCESS_MODEL", "aloha"),
        ("WIFI6_NUM_SUBCHANNELS", -1),
        ("CODING_RATE", 0),
        ("WIFI4_LOAD_FACTOR", -0.1),
        ("WIFI4_DERIVE_THROUGHPUT_FROM_DELIVERED_BITS", "yes"),
        ("MAX_USERS", 0),
    ],
)
def test_invalid_sim_params(name, value):
    Params = type("Params", (sparams_module,), {name: value})

    with pytest.raises(InvalidParameterError):
        validate_params(Params, logger)


@pytest.mark.parametrize(
    "name, value",
    [
        ("SEED", "1"),
        ("MAX_WORKERS", 0),
        ("USER_COUNTS", [1, "10"]),
        ("WIFI5_DURATION_ms", 0),
        ("ENABLE_FIGS_SAVING", 1),
        ("STATS_SAVE_PATH", None),
    ],
)
def test_invalid_config(name, value):
    Config = type("Config", (cfg_module,), {name: value})

    with pytest.raises(InvalidParameterError):
        validate_config(Config, logger)


def test_enabled_paths_are_created(tmp_path):
    stats_path = os.path.join(str(tmp_path), "stats")

    class Config(cfg_module):
        ENABLE_STATS_COLLECTION = True
        STATS_SAVE_PATH = stats_path

    validate_config(Config, logger)

    assert os.path.isdir(stats_path)


def test_initialize_simulator():
    assert isinstance(initialize_simulator("WIFI4", cfg_module, sparams_module), ContentionSimulator)
    assert isinstance(initialize_simulator("WIFI5", cfg_module, sparams_module), MultiplexedSimulator)

    sim = initialize_simulator("WIFI6", cfg_module, sparams_module)
    assert isinstance(sim, SubchannelSimulator)
    assert sim.num_subchannels == sparams_module.WIFI6_NUM_SUBCHANNELS

    with pytest.raises(ValueError):
        initialize_simulator("WIFI7", cfg_module, sparams_module)


if __name__ == "__main__":
    print(STARTING_TEST_MSG)

    test_default_settings_are_valid()
    test_run_params_bounds()
    test_invalid_parameter_error_is_a_value_error()
    test_initialize_simulator()

    print(TEST_COMPLETED_MSG)
