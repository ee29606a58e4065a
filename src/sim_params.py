class SimParams:
    # --- Frame Parameters --- #
    PACKET_SIZE_bytes = 1500

    SLOT_TIME_us = 9
    SIFS_us = 16
    DIFS_us = SIFS_us + 2 * SLOT_TIME_us  # equals 34

    # --- Run Bounds (inclusive) --- #
    MIN_USERS = 1
    MAX_USERS = 1000

    MIN_DURATION_ms = 1
    MAX_DURATION_ms = 10000

    # --- Wi-Fi 4 (contention) Parameters --- #
    WIFI4_BANDWIDTH_MHz = 20

    # "uniform": fixed success probability, "bianchi": 1 - Bianchi's collision probability
    WIFI4_SUCCESS_MODEL = "uniform"
    WIFI4_SUCCESS_PROBABILITY = 0.5
    WIFI4_BIANCHI_MAX_BACKOFF_STAGE = 6
    WIFI4_BIANCHI_CW_MIN = 16

    WIFI4_LOAD_FACTOR = 0.002  # latency growth per user
    WIFI4_JITTER_STEP_ms = 0.1
    WIFI4_JITTER_STEPS = 20
    WIFI4_MIN_LATENCY_ms = 0.8

    WIFI4_ATTEMPT_TIME_us = 10  # simulated time consumed by each issued attempt

    WIFI4_NOMINAL_THROUGHPUT_Mbps = 15.0
    WIFI4_THROUGHPUT_PENALTY_PER_USER = 0.01
    WIFI4_MIN_THROUGHPUT_FACTOR = 0.67

    # If True, throughput is the recorded delivered bits over the run duration instead of
    # the nominal throughput scaled by the load penalty
    WIFI4_DERIVE_THROUGHPUT_FROM_DELIVERED_BITS = False

    # --- Wi-Fi 5 (multiplexed) Parameters --- #
    WIFI5_BANDWIDTH_MHz = 80

    WIFI5_SUCCESS_PROBABILITY = 0.8
    WIFI5_SPATIAL_MULTIPLIER = 1.5  # multi-stream capacity

    WIFI5_LOAD_FACTOR = 0.01  # airtime growth per user
    WIFI5_JITTER_A_STEP_ms = 0.1
    WIFI5_JITTER_A_STEPS = 30
    WIFI5_JITTER_B_BASE_ms = 2.0
    WIFI5_JITTER_B_STEP_ms = 0.5
    WIFI5_JITTER_B_STEPS = 10
    WIFI5_MIN_LATENCY_ms = 5.0

    WIFI5_MAX_IN_FLIGHT = 10

    WIFI5_THROUGHPUT_PENALTY_PER_USER = 0.01
    WIFI5_MIN_THROUGHPUT_FACTOR = 0.5

    # --- Wi-Fi 6 (OFDMA) Parameters --- #
    WIFI6_BANDWIDTH_MHz = 80
    WIFI6_NUM_SUBCHANNELS = 4

    BITS_PER_SYMBOL = 2.0
    CODING_RATE = 0.75

    WIFI6_USER_PENALTY_FACTOR = 0.1
    WIFI6_MIN_THROUGHPUT_Mbps = 1.0001

    OFDMA_PARALLEL_TIME_ms = 5.0
    WIFI6_AVG_CONTENTION_FACTOR = 1.2
    WIFI6_AVG_LATENCY_SCALE_ms = 17.5
    WIFI6_MAX_CONTENTION_FACTOR = 2.0
    WIFI6_MAX_LATENCY_SCALE_ms = 23.72

    CSI_PACKET_SIZE_bytes = 200
    WIFI6_CSI_LOAD_FACTOR = 0.01
    WIFI6_CSI_JITTER_A_STEP_ms = 0.1
    WIFI6_CSI_JITTER_A_STEPS = 30
    WIFI6_CSI_JITTER_B_BASE_ms = 2.0
    WIFI6_CSI_JITTER_B_STEP_ms = 0.5
    WIFI6_CSI_JITTER_B_STEPS = 10
    WIFI6_CSI_MIN_LATENCY_ms = 5.0
