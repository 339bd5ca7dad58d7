# oz_solver/calculators/ornstein_zernike/export.py

import json
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from oz_solver.utils import ExecutionContext, get_logger

logger = get_logger(__name__)


def _to_list(a):
    # json has no inf/nan
    a = np.asarray(a, dtype=float)
    return [float(v) if np.isfinite(v) else None for v in a]


def apply_adaptive_ylim(ax, ydata, limit=10, clip=5):
    finite = np.asarray(ydata)[np.isfinite(ydata)]
    if finite.size and np.max(np.abs(finite)) > limit:
        ax.set_ylim(-clip, clip)


def plot_series(x, y, title, xlabel, filename, plots_dir, u=None):
    fig, ax = plt.subplots(figsize=(5, 4))
    ax.plot(x, y, label="value")
    if u is not None:
        u = np.where(np.isfinite(u), u, np.nan)
        ax.plot(x, u, "--", alpha=0.7, label="u(r)")
        apply_adaptive_ylim(ax, u)
    ax.set_xlabel(xlabel)
    ax.set_title(title)
    ax.grid(alpha=0.3)
    ax.legend(loc="upper right")
    fig.tight_layout()

    path = Path(plots_dir) / filename
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


def export_solution(ctx, payload, filename_prefix="oz", plot=False):
    """
    Write a converged solution to ``ctx.scratch_dir`` as JSON and, when
    ``plot`` is set, g(r), c(r) and S(k) figures to ``ctx.plots_dir``.

    Returns
    -------
    list of Path
        Files written.
    """
    out = Path(ctx.scratch_dir)
    out.mkdir(parents=True, exist_ok=True)

    meta = payload["metadata"]
    json_out = {
        "metadata": meta,
        "r": _to_list(payload["r"]),
        "k": _to_list(payload["k"]),
        "g_r": _to_list(payload["g_r"]),
        "c_r": _to_list(payload["c_r"]),
        "u_r": _to_list(payload["u_r"]),
        "c_k": _to_list(payload["c_k"]),
        "s_k": _to_list(payload["s_k"]),
    }

    json_path = out / f"{filename_prefix}_{meta['closure']}.json"
    with open(json_path, "w") as f:
        json.dump(json_out, f, indent=4)
    written = [json_path]
    logger.info(f"OZ solution exported to JSON -> {json_path}")

    if plot:
        plots = Path(ctx.plots_dir)
        plots.mkdir(parents=True, exist_ok=True)
        tag = f"{meta['closure']}_phi_{meta['volume_factor']:.3f}"

        written.append(plot_series(
            payload["r"], payload["g_r"], "g(r)", "r",
            f"{filename_prefix}_gr_{tag}.png", plots, u=payload["u_r"],
        ))
        written.append(plot_series(
            payload["r"], payload["c_r"], "c(r)", "r",
            f"{filename_prefix}_cr_{tag}.png", plots, u=payload["u_r"],
        ))
        written.append(plot_series(
            payload["k"], payload["s_k"], "S(k)", "k",
            f"{filename_prefix}_sk_{tag}.png", plots,
        ))

    return written


def scratch_exporter(scratch_dir, plot=False):
    """
    Exporter callback for ``OrnsteinZernikeSolver``: each run lands in
    ``scratch_dir/<run_label>/`` with plots in a ``plots`` subdirectory.
    """
    def exporter(run_label, payload):
        run_dir = Path(scratch_dir) / (run_label or "run")
        ctx = ExecutionContext(scratch_dir=run_dir, plots_dir=run_dir / "plots")
        return export_solution(ctx, payload, plot=plot)

    return exporter
