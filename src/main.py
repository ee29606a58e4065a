from src.user_config import UserConfig as cfg_module
from src.sim_params import SimParams as sparams_module

from src.utils.plotters import GenerationSweepPlotter, LatencyCDFPlotter
from src.utils.support import GENERATIONS, initialize_simulator, validate_settings
from src.utils.event_logger import get_logger
from src.utils.messages import (
    STARTING_EXECUTION_MSG,
    EXECUTION_TERMINATED_MSG,
    STARTING_SIMULATION_MSG,
    SIMULATION_TERMINATED_MSG,
    RESULTS_MSG,
    PRESS_TO_EXIT_MSG,
    SECTION_DIVIDER_MSG,
)

import matplotlib.pyplot as plt


def run_sweep(cfg: cfg_module, sparams: sparams_module, latencies: dict | None = None) -> dict:
    """
    Runs every generation for each number of users in cfg.USER_COUNTS.

    Args:
        cfg (cfg_module): The UserConfig object.
        sparams (sparams_module): The SimParams object.
        latencies (dict | None, optional): If given, filled with "<generation> (<n> users)" -> latency frame.

    Returns:
        dict: {generation: {num_users: stats dict}}
    """
    logger = get_logger("MAIN", cfg, sparams)
    results = {}

    for generation in GENERATIONS:
        simulator = initialize_simulator(generation, cfg, sparams)
        duration_ms = getattr(cfg, f"{generation}_DURATION_ms")
        results[generation] = {}

        for num_users in cfg.USER_COUNTS:
            simulator.simulate(num_users, duration_ms)

            simulator.display_stats()
            simulator.save_stats()

            results[generation][num_users] = simulator.collect_stats()["stats"]
            if latencies is not None:
                latencies[f"{generation} ({num_users} users)"] = simulator.stats.to_dataframe()

            print(SECTION_DIVIDER_MSG)

        logger.success(f"{generation} -> Sweep over {cfg.USER_COUNTS} users completed.")

    return results


if __name__ == "__main__":
    print(STARTING_EXECUTION_MSG)

    logger = get_logger("MAIN", cfg_module, sparams_module)

    validate_settings(cfg_module, sparams_module, logger)

    print(STARTING_SIMULATION_MSG)

    latencies = {}
    results = run_sweep(cfg_module, sparams_module, latencies)

    print(SIMULATION_TERMINATED_MSG)

    print(RESULTS_MSG)
    for generation, per_users in results.items():
        for num_users, stats in per_users.items():
            logger.info(
                f"{generation} | {num_users} users -> Throughput: {stats['throughput_Mbps']:.3f} Mbps, Avg latency: {stats['avg_latency_ms']:.3f} ms, Max latency: {stats['max_latency_ms']:.3f} ms, Collisions: {stats['collisions']}"
            )

    GenerationSweepPlotter(cfg_module, sparams_module).plot_sweep(
        results, cfg_module.USER_COUNTS
    )
    LatencyCDFPlotter(cfg_module, sparams_module).plot_cdf(latencies)

    if len(plt.get_fignums()) > 0:
        input(PRESS_TO_EXIT_MSG)

    print(EXECUTION_TERMINATED_MSG)
