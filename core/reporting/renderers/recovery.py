from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from core.reporting.contexts import RecoveryChartContext  # noqa: E402


class RecoveryChartRenderer:
    def render(self, ctx: RecoveryChartContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        labels = [p.month_label for p in ctx.monthly]
        forecast = [p.forecast_dollars for p in ctx.monthly]
        actual = [p.actual_dollars for p in ctx.monthly]
        positions = list(range(len(labels)))
        width = 0.4

        fig, ax = plt.subplots(figsize=(9, 3.5))
        ax.bar([x - width / 2 for x in positions], forecast, width, label="Forecast $")
        ax.bar([x + width / 2 for x in positions], actual, width, label="Actual $")
        ax.set_xticks(positions)
        ax.set_xticklabels(labels, rotation=45, ha="right")
        ax.set_title(f"Revenue recovery - {ctx.project_name} (as of {ctx.as_of.date().isoformat()})")
        ax.grid(True, axis="y", linestyle=":", linewidth=0.6)

        # Overall recovery only exists for completed months.
        overall = [(x, p.overall_recovery_percent) for x, p in zip(positions, ctx.monthly)]
        overall = [(x, pct) for x, pct in overall if pct is not None]
        if overall:
            ax2 = ax.twinx()
            ax2.plot([x for x, _ in overall], [pct for _, pct in overall], color="black", marker="o", label="Overall %")
            ax2.set_ylabel("Overall recovery %")
            ax2.set_ylim(bottom=0)

        ax.legend(loc="upper left")
        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
