from src.user_config import UserConfig as cfg
from src.sim_params import SimParams as sparams

import os
import logging


GENERATIONS = ("WIFI4", "WIFI5", "WIFI6")
VALID_LOG_MODULES = ["MAIN", "TEST", "WIFI4", "WIFI5", "WIFI6", "STATS", "PLOTTER"]
VALID_LOG_LEVELS = ["HEADER", "DEBUG", "DEFAULT", "INFO", "SUCCESS", "WARNING", "ALL"]
VALID_SUCCESS_MODELS = {"uniform", "bianchi"}


class InvalidParameterError(ValueError):
    """Raised when a run or configuration parameter is outside its valid range."""


def _reject(logger: logging.Logger, message: str):
    logger.error(message)
    raise InvalidParameterError(message)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_run_params(
    num_users: int, duration_ms: float, sparams: sparams, logger: logging.Logger
) -> None:
    """
    Validates the load parameters of a run before any state is touched.

    Args:
        num_users (int): The number of simulated users.
        duration_ms (float): The simulated duration in milliseconds.
        sparams (sparams): The SimParams object holding the bounds.
        logger (logging.Logger): The logger of the calling simulator.

    Raises:
        InvalidParameterError: If a parameter has the wrong type or is out of bounds (inclusive).
    """
    if not isinstance(num_users, int) or isinstance(num_users, bool):
        _reject(logger, f"Invalid number of users: {num_users!r}. It must be an integer.")

    if not sparams.MIN_USERS <= num_users <= sparams.MAX_USERS:
        _reject(
            logger,
            f"Number of users must be between {sparams.MIN_USERS} and {sparams.MAX_USERS} (got {num_users})",
        )

    if not _is_number(duration_ms):
        _reject(logger, f"Invalid simulation duration: {duration_ms!r}. It must be a number.")

    if not sparams.MIN_DURATION_ms <= duration_ms <= sparams.MAX_DURATION_ms:
        _reject(
            logger,
            f"Simulation duration must be between {sparams.MIN_DURATION_ms} and {sparams.MAX_DURATION_ms} milliseconds (got {duration_ms})",
        )


def validate_params(sparams: sparams, logger: logging.Logger):
    positive_int_params = {
        "PACKET_SIZE_bytes": sparams.PACKET_SIZE_bytes,
        "SLOT_TIME_us": sparams.SLOT_TIME_us,
        "SIFS_us": sparams.SIFS_us,
        "DIFS_us": sparams.DIFS_us,
        "MIN_USERS": sparams.MIN_USERS,
        "MAX_USERS": sparams.MAX_USERS,
        "WIFI4_JITTER_STEPS": sparams.WIFI4_JITTER_STEPS,
        "WIFI4_BIANCHI_CW_MIN": sparams.WIFI4_BIANCHI_CW_MIN,
        "WIFI5_JITTER_A_STEPS": sparams.WIFI5_JITTER_A_STEPS,
        "WIFI5_JITTER_B_STEPS": sparams.WIFI5_JITTER_B_STEPS,
        "WIFI5_MAX_IN_FLIGHT": sparams.WIFI5_MAX_IN_FLIGHT,
        "WIFI6_NUM_SUBCHANNELS": sparams.WIFI6_NUM_SUBCHANNELS,
        "CSI_PACKET_SIZE_bytes": sparams.CSI_PACKET_SIZE_bytes,
        "WIFI6_CSI_JITTER_A_STEPS": sparams.WIFI6_CSI_JITTER_A_STEPS,
        "WIFI6_CSI_JITTER_B_STEPS": sparams.WIFI6_CSI_JITTER_B_STEPS,
    }

    for name, value in positive_int_params.items():
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            _reject(logger, f"Invalid {name}: {value}. It must be a positive integer.")

    if (
        not isinstance(sparams.WIFI4_BIANCHI_MAX_BACKOFF_STAGE, int)
        or sparams.WIFI4_BIANCHI_MAX_BACKOFF_STAGE < 0
    ):
        _reject(
            logger,
            f"Invalid WIFI4_BIANCHI_MAX_BACKOFF_STAGE: {sparams.WIFI4_BIANCHI_MAX_BACKOFF_STAGE}. It must be a non-negative integer.",
        )

    positive_float_params = {
        "MIN_DURATION_ms": sparams.MIN_DURATION_ms,
        "MAX_DURATION_ms": sparams.MAX_DURATION_ms,
        "WIFI4_BANDWIDTH_MHz": sparams.WIFI4_BANDWIDTH_MHz,
        "WIFI4_ATTEMPT_TIME_us": sparams.WIFI4_ATTEMPT_TIME_us,
        "WIFI4_NOMINAL_THROUGHPUT_Mbps": sparams.WIFI4_NOMINAL_THROUGHPUT_Mbps,
        "WIFI5_BANDWIDTH_MHz": sparams.WIFI5_BANDWIDTH_MHz,
        "WIFI5_SPATIAL_MULTIPLIER": sparams.WIFI5_SPATIAL_MULTIPLIER,
        "WIFI6_BANDWIDTH_MHz": sparams.WIFI6_BANDWIDTH_MHz,
        "BITS_PER_SYMBOL": sparams.BITS_PER_SYMBOL,
        "CODING_RATE": sparams.CODING_RATE,
        "OFDMA_PARALLEL_TIME_ms": sparams.OFDMA_PARALLEL_TIME_ms,
    }

    for name, value in positive_float_params.items():
        if not _is_number(value) or value <= 0:
            _reject(logger, f"Invalid {name}: {value}. It must be a positive number.")

    non_negative_params = {
        "WIFI4_LOAD_FACTOR": sparams.WIFI4_LOAD_FACTOR,
        "WIFI4_JITTER_STEP_ms": sparams.WIFI4_JITTER_STEP_ms,
        "WIFI4_MIN_LATENCY_ms": sparams.WIFI4_MIN_LATENCY_ms,
        "WIFI4_THROUGHPUT_PENALTY_PER_USER": sparams.WIFI4_THROUGHPUT_PENALTY_PER_USER,
        "WIFI4_MIN_THROUGHPUT_FACTOR": sparams.WIFI4_MIN_THROUGHPUT_FACTOR,
        "WIFI5_LOAD_FACTOR": sparams.WIFI5_LOAD_FACTOR,
        "WIFI5_JITTER_A_STEP_ms": sparams.WIFI5_JITTER_A_STEP_ms,
        "WIFI5_JITTER_B_BASE_ms": sparams.WIFI5_JITTER_B_BASE_ms,
        "WIFI5_JITTER_B_STEP_ms": sparams.WIFI5_JITTER_B_STEP_ms,
        "WIFI5_MIN_LATENCY_ms": sparams.WIFI5_MIN_LATENCY_ms,
        "WIFI5_THROUGHPUT_PENALTY_PER_USER": sparams.WIFI5_THROUGHPUT_PENALTY_PER_USER,
        "WIFI5_MIN_THROUGHPUT_FACTOR": sparams.WIFI5_MIN_THROUGHPUT_FACTOR,
        "WIFI6_USER_PENALTY_FACTOR": sparams.WIFI6_USER_PENALTY_FACTOR,
        "WIFI6_MIN_THROUGHPUT_Mbps": sparams.WIFI6_MIN_THROUGHPUT_Mbps,
        "WIFI6_AVG_CONTENTION_FACTOR": sparams.WIFI6_AVG_CONTENTION_FACTOR,
        "WIFI6_AVG_LATENCY_SCALE_ms": sparams.WIFI6_AVG_LATENCY_SCALE_ms,
        "WIFI6_MAX_CONTENTION_FACTOR": sparams.WIFI6_MAX_CONTENTION_FACTOR,
        "WIFI6_MAX_LATENCY_SCALE_ms": sparams.WIFI6_MAX_LATENCY_SCALE_ms,
        "WIFI6_CSI_LOAD_FACTOR": sparams.WIFI6_CSI_LOAD_FACTOR,
        "WIFI6_CSI_JITTER_A_STEP_ms": sparams.WIFI6_CSI_JITTER_A_STEP_ms,
        "WIFI6_CSI_JITTER_B_BASE_ms": sparams.WIFI6_CSI_JITTER_B_BASE_ms,
        "WIFI6_CSI_JITTER_B_STEP_ms": sparams.WIFI6_CSI_JITTER_B_STEP_ms,
        "WIFI6_CSI_MIN_LATENCY_ms": sparams.WIFI6_CSI_MIN_LATENCY_ms,
    }

    for name, value in non_negative_params.items():
        if not _is_number(value) or value < 0:
            _reject(logger, f"Invalid {name}: {value}. It must be a non-negative number.")

    probability_params = {
        "WIFI4_SUCCESS_PROBABILITY": sparams.WIFI4_SUCCESS_PROBABILITY,
        "WIFI5_SUCCESS_PROBABILITY": sparams.WIFI5_SUCCESS_PROBABILITY,
    }

    for name, value in probability_params.items():
        if not _is_number(value) or not (0 <= value <= 1):
            _reject(logger, f"Invalid {name}: {value}. It must be between 0 and 1.")

    if sparams.WIFI5_SUCCESS_PROBABILITY == 0:
        # failed Wi-Fi 5 attempts never advance the simulated time
        _reject(logger, "Invalid WIFI5_SUCCESS_PROBABILITY: 0. The run would never end.")

    if sparams.WIFI4_SUCCESS_MODEL not in VALID_SUCCESS_MODELS:
        _reject(
            logger,
            f"Invalid WIFI4_SUCCESS_MODEL: {sparams.WIFI4_SUCCESS_MODEL}. It must be one of {VALID_SUCCESS_MODELS}.",
        )

    if not isinstance(sparams.WIFI4_DERIVE_THROUGHPUT_FROM_DELIVERED_BITS, bool):
        _reject(
            logger,
            f"Invalid WIFI4_DERIVE_THROUGHPUT_FROM_DELIVERED_BITS: {sparams.WIFI4_DERIVE_THROUGHPUT_FROM_DELIVERED_BITS}. It must be a boolean.",
        )

    if sparams.MAX_USERS < sparams.MIN_USERS:
        _reject(
            logger,
            f"Invalid MAX_USERS: {sparams.MAX_USERS}. It must be greater than MIN_USERS ({sparams.MIN_USERS}).",
        )

    if sparams.MAX_DURATION_ms < sparams.MIN_DURATION_ms:
        _reject(
            logger,
            f"Invalid MAX_DURATION_ms: {sparams.MAX_DURATION_ms}. It must be greater than MIN_DURATION_ms ({sparams.MIN_DURATION_ms}).",
        )

    logger.success("Simulation parameters validated.")


def validate_config(cfg: cfg, logger: logging.Logger) -> None:
    if cfg.SEED is not None and (not isinstance(cfg.SEED, int) or isinstance(cfg.SEED, bool)):
        _reject(logger, f"Invalid SEED: {cfg.SEED}. It must be an integer.")

    if cfg.MAX_WORKERS is not None and (
        not isinstance(cfg.MAX_WORKERS, int) or cfg.MAX_WORKERS <= 0
    ):
        _reject(logger, f"Invalid MAX_WORKERS: {cfg.MAX_WORKERS}. It must be a positive integer.")

    if not isinstance(cfg.USER_COUNTS, list) or not all(
        isinstance(n, int) and not isinstance(n, bool) for n in cfg.USER_COUNTS
    ):
        _reject(logger, f"Invalid USER_COUNTS: {cfg.USER_COUNTS}. It must be a list of integers.")

    for generation in GENERATIONS:
        name = f"{generation}_DURATION_ms"
        value = getattr(cfg, name)
        if not _is_number(value) or value <= 0:
            _reject(logger, f"Invalid {name}: {value}. It must be a positive number.")

    bool_settings = {
        "ENABLE_CONSOLE_LOGGING": cfg.ENABLE_CONSOLE_LOGGING,
        "USE_COLORS_IN_LOGS": cfg.USE_COLORS_IN_LOGS,
        "ENABLE_LOGS_RECORDING": cfg.ENABLE_LOGS_RECORDING,
        "ENABLE_FIGS_DISPLAY": cfg.ENABLE_FIGS_DISPLAY,
        "ENABLE_FIGS_SAVING": cfg.ENABLE_FIGS_SAVING,
        "ENABLE_STATS_COLLECTION": cfg.ENABLE_STATS_COLLECTION,
    }

    for name, value in bool_settings.items():
        if not isinstance(value, bool):
            _reject(logger, f"Invalid {name}: '{value}'. It must be a boolean.")

    str_settings = {
        "LOGS_RECORDING_PATH": cfg.LOGS_RECORDING_PATH,
        "FIGS_SAVE_PATH": cfg.FIGS_SAVE_PATH,
        "STATS_SAVE_PATH": cfg.STATS_SAVE_PATH,
    }
    for name, value in str_settings.items():
        if not isinstance(value, str):
            _reject(logger, f"Invalid {name}: '{value}'. It must be a string.")

    for module, levels in cfg.EXCLUDED_LOGS.items():
        if module not in VALID_LOG_MODULES:
            logger.warning(f"Invalid module name: '{module}' in EXCLUDED_LOGS.")

        for level in levels:
            if level not in VALID_LOG_LEVELS:
                logger.warning(
                    f"Invalid log level: '{level}' for module: '{module}' in EXCLUDED_LOGS."
                )

    path_settings = {
        cfg.LOGS_RECORDING_PATH: cfg.ENABLE_LOGS_RECORDING,
        cfg.FIGS_SAVE_PATH: cfg.ENABLE_FIGS_SAVING,
        cfg.STATS_SAVE_PATH: cfg.ENABLE_STATS_COLLECTION,
    }

    for path, enabled in path_settings.items():
        if enabled:
            if not os.path.exists(path):
                logger.warning(f"Path '{path}' does not exist. Creating it...")
                os.makedirs(path)

    logger.success("User configuration validated.")


def validate_settings(cfg: cfg, sparams: sparams, logger: logging.Logger):
    validate_params(sparams, logger)
    validate_config(cfg, logger)


def initialize_simulator(generation: str, cfg: cfg, sparams: sparams):
    """
    Builds the simulator of a Wi-Fi generation with its default configuration.

    Args:
        generation (str): One of "WIFI4", "WIFI5" or "WIFI6".
        cfg (cfg): The UserConfig object.
        sparams (sparams): The SimParams object.
    """
    from src.components.contention import ContentionSimulator
    from src.components.multiplexed import MultiplexedSimulator
    from src.components.subchannel import SubchannelSimulator

    simulators = {
        "WIFI4": ContentionSimulator,
        "WIFI5": MultiplexedSimulator,
        "WIFI6": SubchannelSimulator,
    }
    if generation not in simulators:
        raise ValueError(
            f"Unknown generation: {generation}. It must be one of {GENERATIONS}."
        )
    return simulators[generation](cfg, sparams)
