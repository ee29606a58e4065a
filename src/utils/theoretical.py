# Bianchi, "Performance analysis of the IEEE 802.11 distributed coordination function"
# https://ieeexplore.ieee.org/abstract/document/840210

RELAXATION = 0.95
CONVERGENCE_THRESHOLD = 1e-9
MAX_ITERATIONS = 1000


def _transmission_probability(p: float, m: int, cw_min: int) -> float:
    """Per-slot transmission probability (tau) of a saturated station given its collision probability."""
    numerator = 2 * (1 - 2 * p)
    denominator = (1 - 2 * p) * (cw_min + 1) + p * cw_min * (1 - (2 * p) ** m)
    if denominator == 0:
        return 0.0
    return min(max(numerator / denominator, 0.0), 1.0)


def compute_collision_probability(n: int, m: int, cw_min: int) -> float:
    """
    Solves Bianchi's fixed point for the conditional collision probability.

    Args:
        n (int): Number of contending stations.
        m (int): Maximum backoff stage (CW_MAX = 2^m * CW_MIN).
        cw_min (int): Minimum contention window size.

    Returns:
        float: The collision probability seen by a transmitting station, in [0, 1].
    """
    if n <= 1:
        return 0.0

    tau = 2 / (cw_min + 1)
    p = 1 - (1 - tau) ** (n - 1)

    for _ in range(MAX_ITERATIONS):
        tau = _transmission_probability(p, m, cw_min)
        p_next = RELAXATION * p + (1 - RELAXATION) * (1 - (1 - tau) ** (n - 1))

        converged = abs(p_next - p) < CONVERGENCE_THRESHOLD
        p = p_next
        if converged:
            break

    return min(max(p, 0.0), 1.0)
