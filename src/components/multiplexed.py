from src.user_config import UserConfig as cfg_module
from src.sim_params import SimParams as sparams_module

from src.components.endpoint import (
    Endpoint,
    SuccessPolicy,
    TransmissionAttempt,
    TransmissionOutcome,
    UniformSuccessPolicy,
)
from src.components.simulator import Simulator
from src.utils.data_units import Packet
from src.utils.transmission import get_difs_s


class MultiplexedSimulator(Simulator):
    """
    Wi-Fi 5 round-robin access on a single shared channel.

    Users are granted the channel in turn and their attempts are issued in batches of at most
    WIFI5_MAX_IN_FLIGHT. A granted attempt fails with a fixed probability (channel error):
    failed attempts are only counted, they consume no simulated time and the user simply
    tries again on its next turn. Successful ones advance the clock by their airtime plus DIFS.
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
            "WIFI5",
            bandwidth_MHz if bandwidth_MHz is not None else sparams.WIFI5_BANDWIDTH_MHz,
            (
                packet_size_bytes
                if packet_size_bytes is not None
                else sparams.PACKET_SIZE_bytes
            ),
            policy,
        )
        self.rr_index = 0

    def _default_policy(self, num_users: int) -> SuccessPolicy:
        return UniformSuccessPolicy(self.sparams.WIFI5_SUCCESS_PROBABILITY, self.rng)

    def throughput_penalty(self, num_users: int) -> float:
        load_penalty = max(
            self.sparams.WIFI5_MIN_THROUGHPUT_FACTOR,
            1.0 - self.sparams.WIFI5_THROUGHPUT_PENALTY_PER_USER * num_users,
        )
        return self.sparams.WIFI5_SPATIAL_MULTIPLIER * load_penalty

    def _tx_time_s(self, packet: Packet) -> float:
        """Airtime of a packet, stretched by the load and shortened by the spatial streams."""
        load = 1.0 + self.sparams.WIFI5_LOAD_FACTOR * self.params.num_users
        return (
            packet.tx_time_s(self.params.bandwidth_MHz)
            * load
            / self.sparams.WIFI5_SPATIAL_MULTIPLIER
        )

    def _latency_ms(self, tx_time_s: float) -> float:
        jitter_a_ms = self.sparams.WIFI5_JITTER_A_STEP_ms * self.rng.randrange(
            self.sparams.WIFI5_JITTER_A_STEPS
        )
        jitter_b_ms = (
            self.sparams.WIFI5_JITTER_B_BASE_ms
            + self.sparams.WIFI5_JITTER_B_STEP_ms
            * self.rng.randrange(self.sparams.WIFI5_JITTER_B_STEPS)
        )
        return max(
            self.sparams.WIFI5_MIN_LATENCY_ms, tx_time_s * 1000 + jitter_a_ms + jitter_b_ms
        )

    def _attempt(self, endpoint: Endpoint, policy: SuccessPolicy) -> TransmissionAttempt:
        packet = Packet(endpoint.id, self.params.packet_size_bytes)
        tx_time_s = self._tx_time_s(packet)

        if endpoint.attempt_transmission(policy) != TransmissionOutcome.SUCCESS:
            self.stats.record_failure()
            return TransmissionAttempt(endpoint.id, TransmissionOutcome.FAILURE, tx_time_s)

        latency_ms = self._latency_ms(tx_time_s)
        self.stats.record_success(latency_ms, packet.size_bits)
        return TransmissionAttempt(
            endpoint.id, TransmissionOutcome.SUCCESS, tx_time_s, latency_ms
        )

    def _next_batch(self) -> list[Endpoint]:
        batch = []
        for _ in range(self.sparams.WIFI5_MAX_IN_FLIGHT):
            batch.append(self.endpoints[self.rr_index])
            self.rr_index = (self.rr_index + 1) % self.params.num_users
        return batch

    def _run(self, policy: SuccessPolicy):
        self.rr_index = 0
        while self.env.now < self.duration_us:
            futures = [
                self._executor.submit(self._attempt, endpoint, policy)
                for endpoint in self._next_batch()
            ]
            attempts = [future.result() for future in futures]

            airtime_us = sum(
                (attempt.tx_time_s + get_difs_s(self.sparams)) * 1e6
                for attempt in attempts
                if attempt.is_success
            )
            yield self.env.timeout(airtime_us)

    def _finalize(self):
        self.stats.finalize_throughput(
            self.duration_s, self.throughput_penalty, self.params.num_users
        )

    def failure_count(self) -> int:
        return self.stats.failure_count
