"""Suggest cheer spots for a GPX course from the command line.

Usage:
  python scripts/plan_spots.py \\
      --gpx marathon.gpx \\
      --pace 5:30 \\
      --spots 4 \\
      --strategy minTravel \\
      --profile cycling \\
      --skip-km 5 \\
      --start 09:30

Set CHEERCHASER_OSRM_URL to check the plan against a different OSRM server;
pass --no-route to skip the routed leg check.
"""

from __future__ import annotations

import argparse
import logging
import sys

from cheerchaser.course.gpx import CourseLoadError, load_course_from_file
from cheerchaser.course.indexer import CourseIndexer
from cheerchaser.planning.feasibility import check_legs
from cheerchaser.planning.formatting import eta_label, format_distance, format_seconds_hms
from cheerchaser.planning.models import PlannerConfig, SelectionStrategy, TravelProfile
from cheerchaser.planning.pace import PaceValidationError, parse_pace
from cheerchaser.planning.selector import SpotSelector
from cheerchaser.routing.osrm import OsrmClient


def main() -> None:
    ap = argparse.ArgumentParser(description="Suggest cheer spots along a race course")
    ap.add_argument("--gpx", required=True, help="GPX file with the course track")
    ap.add_argument("--pace", default="", help="Runner pace per km, MM:SS (e.g. 5:30)")
    ap.add_argument("--spots", type=int, default=3, help="Number of spots to suggest")
    ap.add_argument(
        "--strategy",
        choices=[s.value for s in SelectionStrategy],
        default=SelectionStrategy.MIN_TRAVEL.value,
    )
    ap.add_argument(
        "--profile",
        choices=[p.value for p in TravelProfile],
        default=TravelProfile.WALKING.value,
        help="How the spectator travels between spots",
    )
    ap.add_argument("--skip-km", type=float, default=0.0, help="No spots before this km")
    ap.add_argument("--start", default="", help="Race start time HH:MM (for wall-clock ETAs)")
    ap.add_argument("--interval", type=float, default=None, help="Candidate spacing in metres")
    ap.add_argument("--no-route", action="store_true", help="Skip the OSRM leg check")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = PlannerConfig.from_env()
    interval = args.interval or config.candidate_interval_m

    try:
        points = load_course_from_file(args.gpx)
    except (OSError, CourseLoadError) as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        sys.exit(1)

    index = CourseIndexer(interval, config.km_marker_interval_m).build(points)
    if index.is_empty:
        print("  [!] The course needs at least two track points.", file=sys.stderr)
        sys.exit(1)

    print(f"Course    : {args.gpx}")
    print(f"Length    : {format_distance(index.total_distance_m)} "
          f"({len(index.candidates)} candidate spots every {interval:g} m)")
    print(f"Strategy  : {args.strategy}  Travel: {args.profile}")
    print()

    pace = parse_pace(args.pace)
    profile = TravelProfile(args.profile)
    try:
        spots = SpotSelector(config).suggest(
            index.candidates,
            args.spots,
            SelectionStrategy(args.strategy),
            pace_s_per_m=pace,
            travel_profile=profile,
            skip_first_km=args.skip_km,
            course=index.points,
        )
    except PaceValidationError as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        sys.exit(1)

    if not spots:
        print("No spots available with these settings.")
        return
    if len(spots) < args.spots:
        print(f"Only {len(spots)} of {args.spots} spots are reachable in time.\n")

    for i, distance in enumerate(spots, 1):
        point = index.candidates[distance]
        print(f"{i:>2}. {format_distance(distance):>8}  "
              f"{eta_label(distance, pace, args.start):<20} ({point.lat:.5f}, {point.lng:.5f})")

    if args.no_route or pace is None or len(spots) < 2:
        return

    durations = OsrmClient().leg_durations([index.candidates[d] for d in spots], profile)
    checks = check_legs(spots, pace, durations, config.leg_buffer_s)
    if checks:
        print()
    for check in checks:
        status = "TIGHT" if check.tight else "ok"
        print(f"    {format_distance(check.from_m)} -> {format_distance(check.to_m)}: "
              f"travel {format_seconds_hms(check.spectator_s)}, "
              f"runner {format_seconds_hms(check.runner_s)} [{status}]")


if __name__ == "__main__":
    main()
