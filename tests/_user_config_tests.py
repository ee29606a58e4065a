class UserConfig:
    # --- Simulation Parameters --- #
    SEED = 1

    USER_COUNTS = [1, 10]

    WIFI4_DURATION_ms = 10
    WIFI5_DURATION_ms = 2
    WIFI6_DURATION_ms = 10

    MAX_WORKERS = 4

    # --- Logging Configuration --- #
    ENABLE_CONSOLE_LOGGING = False
    USE_COLORS_IN_LOGS = False

    ENABLE_LOGS_RECORDING = False
    LOGS_RECORDING_PATH = "tests/events"
    EXCLUDED_LOGS = {
        "WIFI4": ["ALL"],
        "WIFI5": ["ALL"],
        "WIFI6": ["ALL"],
        "STATS": ["ALL"],
        "PLOTTER": ["ALL"],
    }

    # --- Visualization --- #
    ENABLE_FIGS_DISPLAY = False
    ENABLE_FIGS_SAVING = False
    FIGS_SAVE_PATH = "figs/tests"

    # --- Statistics Collection --- #
    ENABLE_STATS_COLLECTION = False
    STATS_SAVE_PATH = "tests/statistics"
