from src.sim_params import SimParams as sparams
from src.user_config import UserConfig as cfg

from datetime import datetime
import threading
import logging
import simpy
import json
import os


HEADER_LEVEL = 5
DEFAULT_LEVEL = 15
SUCCESS_LEVEL = 25

CUSTOM_LEVELS = {
    "header": HEADER_LEVEL,  # titles of DEBUG sections, e.g. the start of a run
    "default": DEFAULT_LEVEL,  # plain messages
    "success": SUCCESS_LEVEL,  # completed runs and validations
}

COLORS = {
    "HEADER": "\033[95m",  # Magenta
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[96m",  # Cyan
    "DEFAULT": "\033[0m",  # Reset
    "SUCCESS": "\033[92m",  # Green
    "WARNING": "\033[38;5;214m",  # Orange
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[1;38;5;1m",  # Bold Dark Red
}

LOGGER_CACHE = {}
ALWAYS_INCLUDED_MODULES = ["MAIN", "TEST"]

LOGS_RECORDING_FILENAME = "session_logs.jsonl"


def _make_log_method(level: int):
    def log_method(self, message: str, *args, **kwargs):
        if self.isEnabledFor(level):
            self._log(level, message, args, **kwargs)

    log_method.__doc__ = f"Log a message with level {logging.getLevelName(level)} ({level})."
    return log_method


for method_name, level in CUSTOM_LEVELS.items():
    logging.addLevelName(level, method_name.upper())
    setattr(logging.Logger, method_name, _make_log_method(level))


def _sim_time(env: simpy.Environment | None) -> float:
    return env.now if env is not None else 0


def _worker_name(record: logging.LogRecord) -> str | None:
    """Name of the pool worker that emitted the record, None for the coordinator."""
    if record.threadName == threading.main_thread().name:
        return None
    return record.threadName


class ConfigFilter(logging.Filter):
    """Drops the records whose level is excluded for their module in cfg.EXCLUDED_LOGS."""

    def __init__(self, cfg: cfg, sparams: sparams):
        super().__init__()
        self.cfg = cfg
        self.sparams = sparams

    def filter(self, record: logging.LogRecord) -> bool:
        excluded_levels = self.cfg.EXCLUDED_LOGS.get(record.name, [])
        return "ALL" not in excluded_levels and record.levelname not in excluded_levels


class ConsoleFormatter(logging.Formatter):
    """
    Formats console records, optionally colored by level.

    While a run is attached (see `update_logger_environment`), records are stamped with the
    simulated time in microseconds and, when emitted from a pool worker, with its name.
    Otherwise they are prefixed with their level name.
    """

    def __init__(self, cfg: cfg, sparams: sparams, env: simpy.Environment = None):
        super().__init__()
        self.cfg = cfg
        self.sparams = sparams
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if self.cfg.USE_COLORS_IN_LOGS:
            color = COLORS.get(record.levelname, COLORS["DEFAULT"])
            message = f"{color}{message}{COLORS['DEFAULT']}"

        if self.env is None:
            return f"{record.levelname}: {message}"

        worker = _worker_name(record)
        origin = f"{record.name}/{worker}" if worker else record.name
        return f"[t = {_sim_time(self.env):^18.1f}] {origin:^10} {message}"


class JSONLinesHandler(logging.Handler):
    """Appends every record as one JSON object per line to the session log file."""

    def __init__(self, filename: str, env: simpy.Environment = None):
        super().__init__()
        self.filename = filename
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "level": record.levelname,
                "sim_time": _sim_time(self.env),
                "module": record.name,
                "worker": _worker_name(record),
                "message": record.getMessage(),
            }
        )

    def emit(self, record: logging.LogRecord) -> None:
        # handle() holds the handler lock, so workers never interleave lines
        with open(self.filename, "a") as file:
            file.write(self.format(record) + "\n")


def initialize_log_file(cfg: cfg) -> str:
    """
    Creates the session log file under cfg.LOGS_RECORDING_PATH if it does not exist yet.

    The first line records the creation time of the session.

    Returns:
        str: The path of the log file.
    """
    os.makedirs(cfg.LOGS_RECORDING_PATH, exist_ok=True)

    log_file = os.path.join(cfg.LOGS_RECORDING_PATH, LOGS_RECORDING_FILENAME)
    if not os.path.exists(log_file):
        creation_time = datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
        with open(log_file, "w") as file:
            file.write(json.dumps({"creation_time": creation_time}) + "\n")

    return log_file


def get_logger(
    module_name: str, cfg: cfg, sparams: sparams, env: simpy.Environment = None
) -> logging.Logger:
    """
    Returns the logger of a module, creating and caching it on first use.

    Handlers are chosen from the UserConfig: a console handler if console logging is enabled
    (always for the MAIN and TEST modules), and a JSON lines handler if logs recording is
    enabled. Both apply the EXCLUDED_LOGS filter. Without any handler, records are dropped.

    Args:
        module_name (str): The module name, e.g. "WIFI4" or "STATS".
        cfg (cfg): The UserConfig object.
        sparams (sparams): The SimParams object.
        env (simpy.Environment, optional): The environment used to stamp the simulated time. Defaults to None.

    Returns:
        logging.Logger: The logger instance.
    """
    if module_name in LOGGER_CACHE:
        return LOGGER_CACHE[module_name]

    logger = logging.getLogger(module_name)
    logger.setLevel(HEADER_LEVEL)
    logger.propagate = False

    config_filter = ConfigFilter(cfg=cfg, sparams=sparams)

    if cfg.ENABLE_CONSOLE_LOGGING or module_name in ALWAYS_INCLUDED_MODULES:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ConsoleFormatter(cfg=cfg, sparams=sparams, env=env))
        console_handler.addFilter(config_filter)
        logger.addHandler(console_handler)

    if cfg.ENABLE_LOGS_RECORDING:
        file_handler = JSONLinesHandler(initialize_log_file(cfg), env=env)
        file_handler.addFilter(config_filter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    LOGGER_CACHE[module_name] = logger

    return logger


def update_logger_environment(logger: logging.Logger, env: simpy.Environment | None):
    """Stamps the records of a logger with the simulated time of a new run."""
    for handler in logger.handlers:
        if isinstance(handler.formatter, ConsoleFormatter):
            handler.formatter.env = env
        elif isinstance(handler, JSONLinesHandler):
            handler.env = env
