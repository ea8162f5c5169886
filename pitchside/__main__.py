"""Entry point for pitchside package."""

import argparse
import logging
import sys


def main() -> None:
    """Main entry point for the pitchside command."""
    parser = argparse.ArgumentParser(
        description="Pitchside - football drill simulation and analytics",
        prog="pitchside",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP/WebSocket API",
    )
    parser.add_argument(
        "--drill",
        type=str,
        default="chase",
        choices=["chase", "shuttle", "slalom"],
        help="Drill to run headless (default: chase)",
    )
    parser.add_argument("--seconds", type=float, default=10.0, help="Simulated seconds (default: 10)")
    parser.add_argument("--dt", type=float, default=0.05, help="Fixed step in seconds (default: 0.05)")
    parser.add_argument("--seed", type=int, default=7, help="RNG seed (default: 7)")
    parser.add_argument(
        "--players",
        type=str,
        default=None,
        help="Comma-separated demo player ids (default: first players that fit the drill)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--csv", action="store_true", help="Print the report as CSV")
    output.add_argument("--json", action="store_true", help="Print the report as JSON")
    output.add_argument("--markdown", action="store_true", help="Print a markdown summary")

    args = parser.parse_args()

    from pitchside.config import get_config

    config = get_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        from pitchside.api.main import run_api

        errors = config.validate()
        if errors:
            for error in errors:
                print(f"config error: {error}", file=sys.stderr)
            sys.exit(2)
        run_api(host=config.host, port=config.port)
        return

    from pitchside.demo import run_demo
    from pitchside.errors import SessionConfigError
    from pitchside.report import MarkdownSessionWriter, export_csv, export_json

    players = args.players.split(",") if args.players else None
    try:
        report = run_demo(args.drill, args.seconds, args.dt, args.seed, players)
    except SessionConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.csv:
        print(export_csv(report), end="")
    elif args.json:
        print(export_json(report))
    elif args.markdown:
        print(MarkdownSessionWriter().generate_summary_string(report))
    else:
        print(f"Pitchside - {report.drill} drill ({report.duration_s:.1f}s)")
        print("=" * 50)
        for p in report.participants:
            m = p.metrics
            print(
                f"{p.player_name:<16} {m.distance_m:7.1f} m  avg {m.avg_speed_mps:4.2f} m/s  "
                f"max {m.max_speed_mps:4.2f} m/s  sprints {m.sprint_count}"
            )
            print(f"    {p.feedback}")


if __name__ == "__main__":
    main()
