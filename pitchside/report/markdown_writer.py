"""Markdown session summary writer."""

from pathlib import Path
from typing import TextIO

from .models import SessionReport


class MarkdownSessionWriter:
    """Generates markdown session summaries."""

    def write_session_summary(self, report: SessionReport, output_path: Path) -> None:
        """
        Write a complete session summary to a markdown file.

        Args:
            report: Finished session report
            output_path: Path to write markdown file
        """
        with open(output_path, "w") as f:
            f.write(self.generate_summary_string(report))
            if report.events:
                self.write_events(f, report)

    def generate_summary_string(self, report: SessionReport) -> str:
        """Generate markdown summary as a string."""
        lines = []

        lines.append(f"# {report.drill.title()} session {report.session_id}")
        lines.append("")
        lines.append(f"**Date:** {report.date_time}  ")
        lines.append(f"**Duration:** {report.duration_s:.1f}s")
        lines.append("")

        lines.append("## Metrics")
        lines.append("")
        lines.append("| Player | Position | Distance (m) | Avg (m/s) | P95 (m/s) | Max (m/s) | HSR (s) | Sprints |")
        lines.append("|--------|----------|--------------|-----------|-----------|-----------|---------|---------|")
        for p in report.participants:
            m = p.metrics
            lines.append(
                f"| {p.player_name} | {p.position} | {m.distance_m:.1f} | {m.avg_speed_mps:.2f} | "
                f"{m.p95_speed_mps:.2f} | {m.max_speed_mps:.2f} | {m.high_speed_time_s:.1f} | {m.sprint_count} |"
            )
        lines.append("")

        counters = [p for p in report.participants if p.counters]
        if counters:
            lines.append("## Drill")
            lines.append("")
            for p in counters:
                parts = [f"{k.replace('_', ' ')}: {v}" for k, v in p.counters.items() if v is not None]
                lines.append(f"- **{p.player_name}**: {', '.join(parts)}")
            lines.append("")

        lines.append("## Ratings")
        lines.append("")
        for p in report.participants:
            update = p.rating_update
            if update is None:
                lines.append(f"- **{p.player_name}**: no update (no movement recorded)")
            else:
                sign = "+" if update.delta >= 0 else ""
                lines.append(
                    f"- **{p.player_name}**: {update.previous_rating} -> {update.new_rating} "
                    f"({sign}{update.delta}, {update.mode.value})"
                )
        lines.append("")

        lines.append("## Feedback")
        lines.append("")
        for p in report.participants:
            lines.append(f"- {p.feedback}")
        lines.append("")

        self._write_footer(lines)
        return "\n".join(lines)

    def _write_footer(self, lines: list) -> None:
        lines.append("---")
        lines.append("*Generated by pitchside*")
        lines.append("")

    def write_events(self, f: TextIO, report: SessionReport) -> None:
        """Append a play-by-play of drill events to an open file."""
        f.write("## Timeline\n\n")
        for event in report.events:
            who = f" ({event['player_id']})" if event.get("player_id") else ""
            text = f" - {event['description']}" if event.get("description") else ""
            f.write(f"- `{event['time']:.2f}s` {event['type']}{who}{text}\n")
        f.write("\n")
