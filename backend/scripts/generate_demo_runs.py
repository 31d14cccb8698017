"""Write a week of demo FIT files for a small loop around a park.

Usage: python scripts/generate_demo_runs.py [output_dir]
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

from runsynth.schemas.activity import ExportBatchRequest, ExportVariant, PointIn
from runsynth.services.activity import export_variants


# Roughly a 1 km loop in Hyde Park, London
PARK_LOOP = [
    (51.5073, -0.1657),
    (51.5080, -0.1610),
    (51.5062, -0.1586),
    (51.5048, -0.1625),
    (51.5055, -0.1660),
]


def build_request(seed: int = 2024) -> ExportBatchRequest:
    """Tue easy, Thu workout, Sun long run at 07:00 UTC this week."""
    today = datetime.now(timezone.utc).replace(hour=7, minute=0, second=0, microsecond=0)
    week_start = today - timedelta(days=today.weekday())

    variants = [
        ExportVariant(start_time=(week_start + timedelta(days=1)).isoformat(), pace_seconds_per_km=345),
        ExportVariant(start_time=(week_start + timedelta(days=3)).isoformat(), pace_seconds_per_km=285),
        ExportVariant(start_time=(week_start + timedelta(days=6)).isoformat(), pace_seconds_per_km=330),
    ]
    return ExportBatchRequest(
        points=[PointIn(lat=lat, lng=lng) for lat, lng in PARK_LOOP],
        hr_rest=55,
        hr_max=188,
        lap_count=5,
        seed=seed,
        variants=variants,
    )


def main():
    out_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("demo_runs")
    out_dir.mkdir(parents=True, exist_ok=True)

    files = export_variants(build_request())
    for f in files:
        (out_dir / f.filename).write_bytes(f.content)

    print(f"Wrote {len(files)} demo runs to {out_dir}")


if __name__ == "__main__":
    main()
