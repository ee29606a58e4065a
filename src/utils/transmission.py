from src.sim_params import SimParams as sparams


def get_tx_time_s(packet_size_bytes: int, bandwidth_MHz: float) -> float:
    """
    Calculates the base transmission time (in seconds) of a packet over a channel.

    The channel is assumed to carry one bit per hertz, so the data rate equals the
    bandwidth expressed in hertz.

    Args:
        packet_size_bytes (int): The size of the packet in bytes.
        bandwidth_MHz (float): The channel bandwidth in MHz.

    Returns:
        float: The transmission time in seconds.
    """
    return packet_size_bytes * 8 / (bandwidth_MHz * 1e6)


def get_slot_time_s(sparams: sparams) -> float:
    """Returns the slot time (in seconds), i.e., the backoff increment after a collision."""
    return sparams.SLOT_TIME_us * 1e-6


def get_difs_s(sparams: sparams) -> float:
    """Returns the DCF inter-frame spacing (in seconds) that follows every transmission."""
    return sparams.DIFS_us * 1e-6
