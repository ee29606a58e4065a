from src.utils.theoretical import compute_collision_probability

import random


class TransmissionOutcome:
    SUCCESS = 0
    COLLISION = 1
    FAILURE = 2  # lost to channel error, not to contention

    NAMES = {SUCCESS: "SUCCESS", COLLISION: "COLLISION", FAILURE: "FAILURE"}


class TransmissionAttempt:
    def __init__(
        self,
        endpoint_id: int,
        outcome: int,
        tx_time_s: float,
        latency_ms: float | None = None,
    ):
        """
        Initializes a TransmissionAttempt, the result of one (endpoint, round) attempt.

        Args:
            endpoint_id (int): The ID of the endpoint that issued the attempt.
            outcome (int): One of the TransmissionOutcome values.
            tx_time_s (float): The transmission time of the attempt in seconds.
            latency_ms (float | None, optional): The delivery latency in milliseconds. Only set on success.
        """
        self.endpoint_id: int = endpoint_id
        self.outcome: int = outcome
        self.tx_time_s: float = tx_time_s
        self.latency_ms: float | None = latency_ms

    @property
    def is_success(self) -> bool:
        return self.outcome == TransmissionOutcome.SUCCESS

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(endpoint_id={self.endpoint_id}, "
            f"outcome={TransmissionOutcome.NAMES[self.outcome]}, latency_ms={self.latency_ms})"
        )


class SuccessPolicy:
    """Decides whether a transmission attempt goes through."""

    def is_successful(self, endpoint: "Endpoint") -> bool:
        raise NotImplementedError


class UniformSuccessPolicy(SuccessPolicy):
    """
    Every attempt succeeds independently with a fixed probability.

    This stands in for the unmodeled carrier-sense and backoff resolution of the channel.
    """

    def __init__(self, probability: float, rng: random.Random | None = None):
        self.probability = probability
        self.rng = rng if rng is not None else random.Random()

    def is_successful(self, endpoint: "Endpoint") -> bool:
        return self.rng.random() < self.probability


class BianchiSuccessPolicy(UniformSuccessPolicy):
    """Succeeds with the complement of Bianchi's saturation collision probability."""

    def __init__(
        self,
        num_users: int,
        max_backoff_stage: int,
        cw_min: int,
        rng: random.Random | None = None,
    ):
        self.collision_probability = compute_collision_probability(
            num_users, max_backoff_stage, cw_min
        )
        super().__init__(1 - self.collision_probability, rng)


class Endpoint:
    def __init__(self, id: int, backoff_s: float = 0.0):
        """
        Initializes an Endpoint, a station contending for the channel during one run.

        Args:
            id (int): The unique endpoint identifier.
            backoff_s (float, optional): The initial accumulated backoff in seconds. Defaults to 0.
        """
        self.id = id
        self.backoff_s = backoff_s

    def attempt_transmission(self, policy: SuccessPolicy) -> int:
        """Resolves one transmission attempt and returns its TransmissionOutcome."""
        if policy.is_successful(self):
            return TransmissionOutcome.SUCCESS
        return TransmissionOutcome.COLLISION

    def update_backoff(self, increment_s: float):
        self.backoff_s += increment_s

    def __repr__(self):
        return f"{self.__class__.__name__}({self.id}, backoff_s={self.backoff_s})"
