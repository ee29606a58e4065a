from src.sim_params import SimParams as sparams_module
from src.user_config import UserConfig as cfg_module

from src.utils.file_manager import get_project_root
from src.utils.event_logger import get_logger

from matplotlib import rcParams

import os
import logging
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors


rcParams["font.family"] = "serif"
rcParams["font.serif"] = ["DejaVu Serif"]
rcParams["mathtext.fontset"] = "dejavuserif"

GENERATION_LABELS = {"WIFI4": "Wi-Fi 4", "WIFI5": "Wi-Fi 5", "WIFI6": "Wi-Fi 6"}


class BasePlotter:
    """Base class for all plotters, handling saving and displaying plots."""

    def __init__(self, cfg: cfg_module, sparams: sparams_module):
        """
        Initialize a BasePlotter object.

        Args:
            cfg (cfg): The UserConfig object.
            sparams (sparams): The SimParams object.
        """
        self.cfg = cfg
        self.sparams = sparams

        self.name: str = "PLOTTER"
        self.logger: logging.Logger = get_logger(self.name, cfg, sparams)

    def save_plot(self, figure: plt.Figure, save_name: str, save_format: str) -> str | None:
        """
        Saves the plot under FIGS_SAVE_PATH.

        Args:
            figure (plt.Figure): The figure to save.
            save_name (str): The base name of the saved file.
            save_format (str): The format of the saved file (e.g. pdf, png).

        Returns:
            str | None: The path of the saved file.
        """
        if not save_name or not save_format:
            return None

        save_folder = os.path.join(get_project_root(), self.cfg.FIGS_SAVE_PATH)
        os.makedirs(save_folder, exist_ok=True)

        file_path = os.path.join(save_folder, f"{save_name}.{save_format}")
        figure.savefig(file_path)
        self.logger.info(f"Figure saved to {file_path}")
        return file_path

    def _show_or_close(self, figure: plt.Figure, save_name: str, save_format: str):
        plt.tight_layout()

        if self.cfg.ENABLE_FIGS_SAVING:
            self.save_plot(figure, save_name, save_format)

        if self.cfg.ENABLE_FIGS_DISPLAY:
            plt.show()
        else:
            plt.close(figure)


class GenerationSweepPlotter(BasePlotter):
    """Plotter for throughput and latency versus the number of users, per generation."""

    def validate_data(self, data: dict, user_counts: list[int]):
        """Validates the data passed to the plot method."""
        for generation, results in data.items():
            for num_users in user_counts:
                if num_users not in results:
                    self.logger.error(f"Missing num_users={num_users} for {generation}.")
                    continue
                for key in ("throughput_Mbps", "avg_latency_ms", "max_latency_ms"):
                    if key not in results[num_users]:
                        self.logger.error(
                            f"Missing '{key}' in data[{generation}][{num_users}]."
                        )

    def plot_sweep(
        self,
        data: dict,
        user_counts: list[int],
        save_name: str = "generation_sweep",
        save_format: str = "pdf",
    ):
        """
        Plots throughput (left) and average/max latency (right) against the number of users.
        The data is expected to be structured as follows:
            {
                generation: {
                    num_users: {
                        "throughput_Mbps": float,
                        "avg_latency_ms": float,
                        "max_latency_ms": float,
                    }
                }
            }

        Args:
            data (dict): The data to plot.
            user_counts (list[int]): The numbers of users on the x axis.
            save_name (str, optional): The name of the plot file. Defaults to "generation_sweep".
            save_format (str, optional): The format of the plot file. Defaults to "pdf".
        """
        if not self.cfg.ENABLE_FIGS_SAVING and not self.cfg.ENABLE_FIGS_DISPLAY:
            return

        plt.ion()

        self.validate_data(data, user_counts)

        fig, (ax_tput, ax_lat) = plt.subplots(1, 2, figsize=(12.8, 4.8))
        tableau_colors = list(mcolors.TABLEAU_COLORS.values())

        ax_tput.set_xlabel("Number of users")
        ax_tput.set_ylabel("Throughput (Mbps)")
        ax_lat.set_xlabel("Number of users")
        ax_lat.set_ylabel("Latency (ms)")

        for i, (generation, results) in enumerate(data.items()):
            color = tableau_colors[i % len(tableau_colors)]
            label = GENERATION_LABELS.get(generation, generation)

            n_values = sorted(n for n in user_counts if n in results)
            ax_tput.plot(
                n_values,
                [results[n]["throughput_Mbps"] for n in n_values],
                "o-",
                color=color,
                label=label,
                markerfacecolor="none",
                markersize=3,
            )
            ax_lat.plot(
                n_values,
                [results[n]["avg_latency_ms"] for n in n_values],
                "o-",
                color=color,
                label=f"{label} (mean)",
                markerfacecolor="none",
                markersize=3,
            )
            ax_lat.plot(
                n_values,
                [results[n]["max_latency_ms"] for n in n_values],
                "s--",
                color=color,
                label=f"{label} (max)",
                markerfacecolor="none",
                markersize=3,
            )

        for ax in (ax_tput, ax_lat):
            if len(user_counts) > 1 and min(user_counts) > 0:
                ax.set_xscale("log")
            ax.legend(fontsize=8, frameon=False)

        self._show_or_close(fig, save_name, save_format)


class LatencyCDFPlotter(BasePlotter):
    """Plotter for the empirical latency CDF of recorded runs."""

    def plot_cdf(
        self,
        data: dict[str, pd.DataFrame],
        save_name: str = "latency_cdf",
        save_format: str = "pdf",
    ):
        """
        Plots the latency CDF of each run.

        Args:
            data (dict[str, pd.DataFrame]): Run label -> frame with a "latency_ms" column (see RunStatistics.to_dataframe).
            save_name (str, optional): The name of the plot file. Defaults to "latency_cdf".
            save_format (str, optional): The format of the plot file. Defaults to "pdf".
        """
        if not self.cfg.ENABLE_FIGS_SAVING and not self.cfg.ENABLE_FIGS_DISPLAY:
            return

        plt.ion()

        fig, ax = plt.subplots(figsize=(6.4, 4.8))
        ax.set_xlabel("Latency (ms)")
        ax.set_ylabel("CDF")
        ax.set_ylim(0, 1)

        for label, df in data.items():
            latencies = np.sort(df["latency_ms"].to_numpy())
            if len(latencies) == 0:
                self.logger.warning(f"{label} -> No latencies recorded, skipping.")
                continue
            cdf = np.arange(1, len(latencies) + 1) / len(latencies)
            ax.step(latencies, cdf, where="post", label=label)

        ax.legend(fontsize=8, frameon=False)

        self._show_or_close(fig, save_name, save_format)
