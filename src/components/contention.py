from src.user_config import UserConfig as cfg_module
from src.sim_params import SimParams as sparams_module

from src.components.endpoint import (
    BianchiSuccessPolicy,
    Endpoint,
    SuccessPolicy,
    TransmissionAttempt,
    TransmissionOutcome,
    UniformSuccessPolicy,
)
from src.components.simulator import Simulator
from src.utils.data_units import Packet
from src.utils.transmission import get_slot_time_s

import numpy as np


class ContentionSimulator(Simulator):
    """
    Wi-Fi 4 slotted random access.

    Every round, all users attempt to transmit at once and each attempt is resolved
    independently by the success policy. A collision adds one slot time to the backoff of
    the user that issued it. The simulated clock advances WIFI4_ATTEMPT_TIME_us per issued
    attempt, once the round has been joined, so it is decoupled from the actual airtime.
    """

    def __init__(
        self,
        cfg: cfg_module,
        sparams: sparams_module,
        bandwidth_MHz: float | None = None,
        packet_size_bytes: int | None = None,
        policy: SuccessPolicy | None = None,
    ):
        super().__init__(
            cfg,
            sparams,
            "WIFI4",
            bandwidth_MHz if bandwidth_MHz is not None else sparams.WIFI4_BANDWIDTH_MHz,
            (
                packet_size_bytes
                if packet_size_bytes is not None
                else sparams.PACKET_SIZE_bytes
            ),
            policy,
        )
        self.rounds = 0

    def _default_policy(self, num_users: int) -> SuccessPolicy:
        if self.sparams.WIFI4_SUCCESS_MODEL == "bianchi":
            return BianchiSuccessPolicy(
                num_users,
                self.sparams.WIFI4_BIANCHI_MAX_BACKOFF_STAGE,
                self.sparams.WIFI4_BIANCHI_CW_MIN,
                self.rng,
            )
        return UniformSuccessPolicy(self.sparams.WIFI4_SUCCESS_PROBABILITY, self.rng)

    def throughput_penalty(self, num_users: int) -> float:
        return max(
            self.sparams.WIFI4_MIN_THROUGHPUT_FACTOR,
            1.0 - self.sparams.WIFI4_THROUGHPUT_PENALTY_PER_USER * num_users,
        )

    def _latency_ms(self, tx_time_s: float) -> float:
        load = 1.0 + self.sparams.WIFI4_LOAD_FACTOR * self.params.num_users
        jitter_ms = self.sparams.WIFI4_JITTER_STEP_ms * self.rng.randrange(
            self.sparams.WIFI4_JITTER_STEPS
        )
        return max(self.sparams.WIFI4_MIN_LATENCY_ms, tx_time_s * 1000 * load + jitter_ms)

    def _attempt(self, endpoint: Endpoint, policy: SuccessPolicy) -> TransmissionAttempt:
        packet = Packet(endpoint.id, self.params.packet_size_bytes)
        tx_time_s = packet.tx_time_s(self.params.bandwidth_MHz)

        outcome = endpoint.attempt_transmission(policy)
        if outcome == TransmissionOutcome.SUCCESS:
            latency_ms = self._latency_ms(tx_time_s)
            self.stats.record_success(latency_ms, packet.size_bits)
            return TransmissionAttempt(endpoint.id, outcome, tx_time_s, latency_ms)

        self.stats.record_collision(endpoint, get_slot_time_s(self.sparams))
        return TransmissionAttempt(endpoint.id, outcome, tx_time_s)

    def _run(self, policy: SuccessPolicy):
        self.rounds = 0
        while self.env.now < self.duration_us:
            futures = [
                self._executor.submit(self._attempt, endpoint, policy)
                for endpoint in self.endpoints
            ]
            attempts = [future.result() for future in futures]

            self.rounds += 1
            yield self.env.timeout(self.sparams.WIFI4_ATTEMPT_TIME_us * len(attempts))

        self.logger.debug(
            f"{self.name} -> {self.rounds} rounds, {self.stats.collision_count} collisions"
        )

    def _finalize(self):
        num_users = self.params.num_users

        if self.sparams.WIFI4_DERIVE_THROUGHPUT_FROM_DELIVERED_BITS:
            self.stats.finalize_throughput(self.duration_s, lambda n: 1.0, num_users)
            return

        # Nominal link throughput scaled by the load penalty; the recorded bits are ignored
        nominal_bits = self.sparams.WIFI4_NOMINAL_THROUGHPUT_Mbps * 1e6 * self.duration_s
        self.stats.finalize_throughput(
            self.duration_s, self.throughput_penalty, num_users, delivered_bits=nominal_bits
        )

    def collision_count(self) -> int:
        return self.stats.get_collision_count()

    def average_backoff_ms(self) -> float:
        """Mean backoff accumulated by the users of the last run."""
        if not self.endpoints:
            return 0.0
        return float(np.mean([endpoint.backoff_s for endpoint in self.endpoints])) * 1e3

    def collect_stats(self) -> dict:
        data = super().collect_stats()
        data["stats"].update(
            {"rounds": self.rounds, "avg_backoff_ms": self.average_backoff_ms()}
        )
        return data
