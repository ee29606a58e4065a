from tests._user_config_tests import UserConfig as cfg_module
from tests._sim_params_tests import SimParams as sparams_module

from src.utils.transmission import get_tx_time_s, get_slot_time_s, get_difs_s
from src.utils.data_units import Packet, CSIReport
from src.utils.event_logger import get_logger
from src.utils.messages import STARTING_TEST_MSG, TEST_COMPLETED_MSG

import pytest


def test_tx_time_of_a_data_packet():
    # 1500 bytes over 20 MHz at one bit per hertz
    assert get_tx_time_s(1500, 20) == pytest.approx(600e-6)
    assert get_tx_time_s(1500, 80) == pytest.approx(150e-6)


def test_tx_time_scales_with_size_and_bandwidth():
    assert get_tx_time_s(3000, 20) == pytest.approx(2 * get_tx_time_s(1500, 20))
    assert get_tx_time_s(1500, 40) == pytest.approx(get_tx_time_s(1500, 20) / 2)


def test_frame_spacing():
    assert sparams_module.DIFS_us == sparams_module.SIFS_us + 2 * sparams_module.SLOT_TIME_us
    assert get_slot_time_s(sparams_module) == pytest.approx(9e-6)
    assert get_difs_s(sparams_module) == pytest.approx(34e-6)


def test_data_units():
    packet = Packet(src_id=3)
    assert packet.type == "DATA"
    assert packet.size_bytes == sparams_module.PACKET_SIZE_bytes
    assert packet.size_bits == 12000
    assert packet.tx_time_s(20) == pytest.approx(get_tx_time_s(1500, 20))

    report = CSIReport(src_id=3)
    assert report.type == "CSI"
    assert report.size_bits == sparams_module.CSI_PACKET_SIZE_bytes * 8
    assert report.tx_time_s(80) == pytest.approx(20e-6)


if __name__ == "__main__":
    print(STARTING_TEST_MSG)

    logger = get_logger("TEST", cfg_module, sparams_module)

    test_tx_time_of_a_data_packet()
    test_tx_time_scales_with_size_and_bandwidth()
    test_frame_spacing()
    test_data_units()

    logger.success("Transmission timing checks passed.")

    print(TEST_COMPLETED_MSG)
