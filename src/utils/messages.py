def _banner(text: str, width: int = 66) -> str:
    padding = (width - len(text) - 4) // 2
    return "\033[93m" + "=" * padding + f"  {text}  " + "=" * padding + "\033[0m"


STARTING_EXECUTION_MSG = _banner("STARTING EXECUTION")

STARTING_SIMULATION_MSG = _banner("STARTING SIMULATION")

STARTING_TEST_MSG = _banner("STARTING TEST")

TEST_COMPLETED_MSG = _banner("TEST COMPLETED")

RESULTS_MSG = _banner("RESULTS")

SIMULATION_TERMINATED_MSG = _banner("SIMULATION TERMINATED")

EXECUTION_TERMINATED_MSG = _banner("EXECUTION TERMINATED")

PRESS_TO_EXIT_MSG = _banner("Press Enter to exit and close all plots")

SECTION_DIVIDER_MSG = "\033[93m" + "=" * 66 + "\033[0m"
