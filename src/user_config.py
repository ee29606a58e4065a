class UserConfig:
    # --- Simulation Parameters --- #
    SEED = 1  # Set to None for random behavior

    # Number of users simulated on each generation by the driver (src/main.py)
    USER_COUNTS = [1, 10, 100]

    # Simulated duration of each run, per generation (in milliseconds)
    WIFI4_DURATION_ms = 100
    WIFI5_DURATION_ms = 5
    WIFI6_DURATION_ms = 60

    # Worker threads used to resolve the attempts of a round. None lets
    # concurrent.futures pick a default based on the number of CPUs
    MAX_WORKERS = None

    # --- Logging Configuration --- #
    ENABLE_CONSOLE_LOGGING = True  # Enable/disable displaying logs in the console
    USE_COLORS_IN_LOGS = True  # Enable/disable colored logs

    ENABLE_LOGS_RECORDING = (
        False  # Enable/disable recording logs (may affect performance)
    )
    LOGS_RECORDING_PATH = "data/events"  # Path to the directory where logs will be recorded

    # Logging exclusions (if ENABLE_CONSOLE_LOGGING or ENABLE_LOGS_RECORDING is enabled)
    # Format: { "<module_name>": ["<excluded_log_level_1>", "<excluded_log_level_2>", ...] }
    # <module_name>: Module name (e.g., "WIFI4", "WIFI5", "WIFI6", "STATS", "PLOTTER")
    # <excluded_log_level>: Log levels to exclude (e.g., "HEADER","DEBUG", "INFO", "WARNING", "ALL")
    EXCLUDED_LOGS = {
        "WIFI4": ["DEBUG"],
        "WIFI5": ["DEBUG"],
        "WIFI6": ["DEBUG"],
        "STATS": [],
        "PLOTTER": [],
    }

    # --- Visualization --- #
    ENABLE_FIGS_DISPLAY = False  # Enable/disable displaying figures
    ENABLE_FIGS_SAVING = False  # Enable/disable saving figures
    FIGS_SAVE_PATH = "figs/sim"

    # --- Statistics Collection --- #
    ENABLE_STATS_COLLECTION = False  # Enable/disable saving the run statistics as JSON
    STATS_SAVE_PATH = "data/statistics"
