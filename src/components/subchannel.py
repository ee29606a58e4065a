from src.user_config import UserConfig as cfg_module
from src.sim_params import SimParams as sparams_module

from src.components.endpoint import (
    Endpoint,
    SuccessPolicy,
    TransmissionAttempt,
    TransmissionOutcome,
    UniformSuccessPolicy,
)
from src.components.simulator import Simulator, SimulationParameters
from src.utils.data_units import CSIReport
from src.utils.statistics import RunStatistics
from src.utils.support import InvalidParameterError

import math


class SubchannelSimulator(Simulator):
    """
    Wi-Fi 6 OFDMA access over parallel subchannels.

    Users are spread evenly over the subchannels. Throughput and latency are closed-form
    functions of the users per subchannel; they are not aggregated from recorded attempts.
    A run still sounds the channel: every user returns a CSI report (one worker per user),
    and the reports are recorded in `csi_stats`, apart from the access metrics.
    """

    def __init__(
        self,
        cfg: cfg_module,
        sparams: sparams_module,
        num_subchannels: int | None = None,
        bandwidth_MHz: float | None = None,
        packet_size_bytes: int | None = None,
    ):
        super().__init__(
            cfg,
            sparams,
            "WIFI6",
            bandwidth_MHz if bandwidth_MHz is not None else sparams.WIFI6_BANDWIDTH_MHz,
            (
                packet_size_bytes
                if packet_size_bytes is not None
                else sparams.PACKET_SIZE_bytes
            ),
        )
        self.num_subchannels = (
            num_subchannels
            if num_subchannels is not None
            else sparams.WIFI6_NUM_SUBCHANNELS
        )
        if not isinstance(self.num_subchannels, int) or self.num_subchannels <= 0:
            raise InvalidParameterError(
                f"Invalid number of subchannels: {self.num_subchannels}. It must be a positive integer."
            )

        self.csi_stats = RunStatistics()

    def _build_params(self, num_users: int, duration_ms: float) -> SimulationParameters:
        return SimulationParameters(
            num_users,
            duration_ms,
            self.bandwidth_MHz,
            self.packet_size_bytes,
            self.num_subchannels,
        )

    def _reset(self):
        super()._reset()
        self.csi_stats.reset()

    def _default_policy(self, num_users: int) -> SuccessPolicy:
        # CSI reports are scheduled by the AP, they never contend
        return UniformSuccessPolicy(1.0, self.rng)

    @property
    def num_users(self) -> int:
        return self.params.num_users if self.params else 0

    @property
    def users_per_subchannel(self) -> float:
        return self.num_users / self.num_subchannels

    def calculate_throughput(self) -> float:
        """
        Aggregated throughput (in Mbps) of all subchannels.

        Each subchannel carries its share of the bandwidth at BITS_PER_SYMBOL * CODING_RATE,
        reduced by a contention penalty that grows with the users per subchannel. The sum is
        capped at the throughput of the whole link and floored at WIFI6_MIN_THROUGHPUT_Mbps.
        """
        efficiency = self.sparams.BITS_PER_SYMBOL * self.sparams.CODING_RATE

        subchannel_bandwidth_MHz = self.bandwidth_MHz / self.num_subchannels
        base_throughput = subchannel_bandwidth_MHz * efficiency

        user_penalty = (
            1.0 + self.sparams.WIFI6_USER_PENALTY_FACTOR * self.users_per_subchannel
        )
        adjusted_throughput = base_throughput / user_penalty

        max_throughput = self.bandwidth_MHz * efficiency

        throughput = min(adjusted_throughput * self.num_subchannels, max_throughput)
        return max(throughput, self.sparams.WIFI6_MIN_THROUGHPUT_Mbps)

    def average_latency_ms(self) -> float:
        if self.params is None:
            return 0.0
        contention_factor = (
            self.users_per_subchannel * self.sparams.WIFI6_AVG_CONTENTION_FACTOR
        )
        return (
            self.sparams.OFDMA_PARALLEL_TIME_ms
            + contention_factor * self.sparams.WIFI6_AVG_LATENCY_SCALE_ms
        )

    def max_latency_ms(self) -> float:
        if self.params is None:
            return 0.0
        contention_factor = (
            self.users_per_subchannel * self.sparams.WIFI6_MAX_CONTENTION_FACTOR
        )
        return (
            self.sparams.OFDMA_PARALLEL_TIME_ms
            + contention_factor * self.sparams.WIFI6_MAX_LATENCY_SCALE_ms
        )

    def _csi_latency_ms(self, tx_time_s: float) -> float:
        load = 1.0 + self.sparams.WIFI6_CSI_LOAD_FACTOR * self.num_users
        jitter_a_ms = self.sparams.WIFI6_CSI_JITTER_A_STEP_ms * self.rng.randrange(
            self.sparams.WIFI6_CSI_JITTER_A_STEPS
        )
        jitter_b_ms = (
            self.sparams.WIFI6_CSI_JITTER_B_BASE_ms
            + self.sparams.WIFI6_CSI_JITTER_B_STEP_ms
            * self.rng.randrange(self.sparams.WIFI6_CSI_JITTER_B_STEPS)
        )
        return max(
            self.sparams.WIFI6_CSI_MIN_LATENCY_ms,
            tx_time_s * load * 1000 + jitter_a_ms + jitter_b_ms,
        )

    def _send_csi_report(
        self, endpoint: Endpoint, policy: SuccessPolicy
    ) -> TransmissionAttempt:
        report = CSIReport(endpoint.id, self.sparams.CSI_PACKET_SIZE_bytes)
        tx_time_s = report.tx_time_s(self.bandwidth_MHz)

        if endpoint.attempt_transmission(policy) != TransmissionOutcome.SUCCESS:
            self.csi_stats.record_failure()
            return TransmissionAttempt(endpoint.id, TransmissionOutcome.FAILURE, tx_time_s)

        latency_ms = self._csi_latency_ms(tx_time_s)
        self.csi_stats.record_success(latency_ms, report.size_bits)
        return TransmissionAttempt(
            endpoint.id, TransmissionOutcome.SUCCESS, tx_time_s, latency_ms
        )

    def _run(self, policy: SuccessPolicy):
        # Sounding: reports are sent back to back
        futures = [
            self._executor.submit(self._send_csi_report, endpoint, policy)
            for endpoint in self.endpoints
        ]
        reports = [future.result() for future in futures]
        yield self.env.timeout(sum(report.tx_time_s for report in reports) * 1e6)

        # Data: one OFDMA round serves one user per subchannel
        rounds = math.ceil(self.num_users / self.num_subchannels)
        yield self.env.timeout(rounds * self.sparams.OFDMA_PARALLEL_TIME_ms * 1e3)

    def _finalize(self):
        closed_form_bits = self.calculate_throughput() * 1e6 * self.duration_s
        self.stats.finalize_throughput(
            self.duration_s, lambda n: 1.0, self.num_users, delivered_bits=closed_form_bits
        )

    def frame_exchange_time_ms(self) -> float:
        """Simulated time of the last run: CSI sounding plus the OFDMA rounds."""
        return self.env.now / 1e3 if self.env else 0.0

    def collect_stats(self) -> dict:
        data = super().collect_stats()
        data["stats"].update(
            {
                "users_per_subchannel": self.users_per_subchannel,
                "frame_exchange_time_ms": self.frame_exchange_time_ms(),
                "csi": self.csi_stats.to_dict(),
            }
        )
        return data
