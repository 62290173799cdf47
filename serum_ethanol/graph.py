"""
Serum ethanol over time. Produces an image file or returns data for a frontend.
"""

from pathlib import Path
from typing import List, Tuple

from serum_ethanol.clinical import CLINICAL_EFFECTS
from serum_ethanol.session import DrinkingSession
from serum_ethanol.units import mg_per_dl


def curve_data(
    session: DrinkingSession, step_hours: float = 0.25, max_hours: float = 12.0
) -> List[Tuple[float, float]]:
    """(time_hours, mg/dL) for use in any frontend."""
    return session.curve(step_hours=step_hours, max_hours=max_hours)


def save_ebac_graph(
    session: DrinkingSession,
    output_path: str = "ebac_graph.png",
    step_hours: float = 0.25,
    max_hours: float = 12.0,
    title: str = "Estimated serum ethanol over time",
) -> str:
    """
    Plot the session curve with matplotlib and save it to a file.

    Each clinical band's lower bound is drawn as a dashed line. Returns the
    path of the saved file.
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    points = curve_data(session, step_hours=step_hours, max_hours=max_hours)
    if not points:
        times, levels = [0.0], [0.0]
    else:
        times, levels = zip(*points)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(times, levels, color="#2563eb", linewidth=2, label="eBAC")
    ax.fill_between(times, levels, alpha=0.2, color="#2563eb")
    # Only thresholds within view.
    top = max(max(levels), 100.0)
    for band in CLINICAL_EFFECTS:
        lower = band.lower.to(mg_per_dl)
        if lower > top:
            continue
        ax.axhline(y=lower, color="#dc2626", linestyle="--", linewidth=1, alpha=0.6)
        ax.annotate(band.description, (times[0], lower), fontsize=7, color="#991b1b",
                    xytext=(2, 2), textcoords="offset points")
    ax.set_xlabel("Hours from start")
    ax.set_ylabel("Serum ethanol (mg/dL)")
    ax.set_title(title)
    ax.legend(loc="upper right")
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
