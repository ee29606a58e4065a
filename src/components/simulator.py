from src.user_config import UserConfig as cfg_module
from src.sim_params import SimParams as sparams_module

from src.components.endpoint import Endpoint, SuccessPolicy
from src.utils.event_logger import get_logger, update_logger_environment
from src.utils.file_manager import get_unique_filename
from src.utils.statistics import RunStatistics
from src.utils.support import validate_run_params

from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple

import os
import json
import random
import simpy


class SimulationParameters(NamedTuple):
    num_users: int
    duration_ms: float
    bandwidth_MHz: float
    packet_size_bytes: int
    num_subchannels: int | None = None


class Simulator:
    """
    Common shape of the per-generation simulators.

    A run validates its load parameters, creates fresh endpoints and statistics, and lets a
    coordinator process (a simpy process) drive the rounds. The coordinator is the only owner
    of the simulated clock: it advances it after joining the workers of each round. Workers
    run on a thread pool and fold their outcomes into the lock-guarded RunStatistics.
    """

    def __init__(
        self,
        cfg: cfg_module,
        sparams: sparams_module,
        name: str,
        bandwidth_MHz: float,
        packet_size_bytes: int,
        policy: SuccessPolicy | None = None,
    ):
        self.cfg = cfg
        self.sparams = sparams

        self.bandwidth_MHz = bandwidth_MHz
        self.packet_size_bytes = packet_size_bytes

        self.policy = policy  # None: the generation's default policy is built per run

        self.params: SimulationParameters | None = None
        self.endpoints: list[Endpoint] = []
        self.stats = RunStatistics()

        self.env: simpy.Environment | None = None
        self._executor: ThreadPoolExecutor | None = None

        self.rng = random.Random(cfg.SEED)

        self.name = name
        self.logger = get_logger(self.name, cfg, sparams)
        self.stats_logger = get_logger("STATS", cfg, sparams)

    def _build_params(self, num_users: int, duration_ms: float) -> SimulationParameters:
        return SimulationParameters(
            num_users, duration_ms, self.bandwidth_MHz, self.packet_size_bytes
        )

    def _reset(self):
        self.stats.reset()

    def _default_policy(self, num_users: int) -> SuccessPolicy:
        raise NotImplementedError

    def _run(self, policy: SuccessPolicy):
        """Coordinator process. Must be a generator yielding simpy events."""
        raise NotImplementedError

    def _finalize(self):
        raise NotImplementedError

    def simulate(self, num_users: int, duration_ms: float):
        """
        Runs the simulation for the given load.

        Args:
            num_users (int): The number of users, in [MIN_USERS, MAX_USERS].
            duration_ms (float): The simulated duration in milliseconds, in [MIN_DURATION_ms, MAX_DURATION_ms].

        Raises:
            InvalidParameterError: If a parameter is out of bounds. Nothing is reset in that case.
        """
        validate_run_params(num_users, duration_ms, self.sparams, self.logger)

        self.params = self._build_params(num_users, duration_ms)
        self._reset()
        self.endpoints = [Endpoint(i) for i in range(num_users)]
        policy = self.policy if self.policy is not None else self._default_policy(num_users)

        self.env = simpy.Environment()
        update_logger_environment(self.logger, self.env)

        self.logger.header(
            f"{self.name} -> Simulating {num_users} user(s) for {duration_ms} ms ({self.bandwidth_MHz} MHz)..."
        )

        try:
            with ThreadPoolExecutor(
                max_workers=self.cfg.MAX_WORKERS, thread_name_prefix=self.name
            ) as executor:
                self._executor = executor
                self.env.process(self._run(policy))
                self.env.run()
        finally:
            self._executor = None

        self._finalize()

        self.logger.success(
            f"{self.name} -> Run completed: {self.stats.total_attempts()} attempts, throughput {self.throughput_Mbps():.3f} Mbps"
        )

    @property
    def duration_us(self) -> float:
        return self.params.duration_ms * 1e3

    @property
    def duration_s(self) -> float:
        return self.params.duration_ms / 1e3

    def throughput_Mbps(self) -> float:
        return self.stats.throughput_Mbps()

    def average_latency_ms(self) -> float:
        return self.stats.average_latency_ms()

    def max_latency_ms(self) -> float:
        return self.stats.max_latency_ms()

    def collect_stats(self) -> dict:
        """Gathers the metrics of the last run into a JSON-serializable dictionary."""
        stats = self.stats.to_dict()
        stats.update(
            {
                "throughput_Mbps": self.throughput_Mbps(),
                "avg_latency_ms": self.average_latency_ms(),
                "max_latency_ms": self.max_latency_ms(),
            }
        )
        return {
            "generation": self.name,
            "params": self.params._asdict() if self.params else None,
            "stats": stats,
        }

    def save_stats(self) -> str | None:
        """Save the statistics of the last run to JSON if enabled."""
        if not self.cfg.ENABLE_STATS_COLLECTION:
            return None

        os.makedirs(self.cfg.STATS_SAVE_PATH, exist_ok=True)

        num_users = self.params.num_users if self.params else 0
        filepath = get_unique_filename(
            self.cfg.STATS_SAVE_PATH, f"{self.name.lower()}_{num_users}_users", "json"
        )

        with open(filepath, "w") as f:
            json.dump(self.collect_stats(), f, indent=4)

        self.stats_logger.info(f"Statistics saved to {filepath}")
        return filepath

    def display_stats(self):
        """Print a summary of the last run."""
        stats = self.collect_stats()["stats"]
        num_users = self.params.num_users if self.params else 0
        duration_ms = self.params.duration_ms if self.params else 0

        print("\033[93m" + f"{self.name} Statistics Summary:" + "\033[0m")
        print(f"  Users: {num_users}, Duration: {duration_ms} ms")
        print(f"  Throughput: {stats['throughput_Mbps']:.4f} Mbps")
        print(f"  Average Latency: {stats['avg_latency_ms']:.4f} ms")
        print(f"  Max Latency: {stats['max_latency_ms']:.4f} ms")
        print(
            f"  TX Attempts: {stats['tx_attempts']} (Successes: {stats['tx_successes']}, "
            f"Collisions: {stats['collisions']}, Failures: {stats['failures']})"
        )
