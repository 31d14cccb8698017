"""End-to-end activity generation: route -> samples -> FIT bytes."""

import logging
import random

from runsynth.core.config import settings
from runsynth.core.errors import InvalidInput
from runsynth.core.time_utils import variant_filename
from runsynth.models.activity import ActivityParams, ActivityResult, ExportedFile, GeoPoint
from runsynth.schemas.activity import ExportBatchRequest, ExportRequest, PreviewRequest
from runsynth.services.distance import accumulate
from runsynth.services.encoder import encode_activity
from runsynth.services.route import close_loop, expand_laps
from runsynth.services.synthesizer import synthesize
from runsynth.services.validation import (
    check_encodable,
    parse_start_time,
    require_points,
    resolve_params,
)

logger = logging.getLogger(__name__)


def make_rng(seed: int | None = None) -> random.Random:
    """Return a random source owned by one call; falls back to the configured seed."""
    if seed is None:
        seed = settings.random_seed
    return random.Random(seed)


def build_activity(
    points: list[GeoPoint],
    params: ActivityParams,
    add_noise: bool,
    rng: random.Random,
) -> ActivityResult:
    base = close_loop(points)
    route = expand_laps(base, params.lap_count, add_noise, rng)
    distances, total = accumulate(route)
    check_encodable(total, params.pace_seconds_per_km)
    return synthesize(
        route,
        distances,
        total,
        params.pace_seconds_per_km,
        params.hr_rest,
        params.hr_max,
        rng,
    )


def preview_activity(request: PreviewRequest, rng: random.Random | None = None) -> ActivityResult:
    """Synthesize without per-lap noise and without encoding."""
    parse_start_time(request.start_time)
    points = require_points(request.points)
    params = resolve_params(
        request.pace_seconds_per_km, request.hr_rest, request.hr_max, request.lap_count
    )
    result = build_activity(points, params, add_noise=False, rng=rng or make_rng(request.seed))
    logger.info(
        "preview: %d points x %d laps -> %.1fm in %.1fs",
        len(points), params.lap_count, result.total_distance_meters, result.total_duration_sec,
    )
    return result


def export_activity(request: ExportRequest, rng: random.Random | None = None) -> ExportedFile:
    """Synthesize with per-lap noise and encode as a FIT file."""
    start = parse_start_time(request.start_time)
    points = require_points(request.points)
    params = resolve_params(
        request.pace_seconds_per_km,
        request.hr_rest,
        request.hr_max,
        request.lap_count,
        request.variant_index,
    )
    result = build_activity(points, params, add_noise=True, rng=rng or make_rng(request.seed))
    content = encode_activity(result, start)
    logger.info(
        "export variant %d: %.1fm in %.1fs, %d bytes",
        params.variant_index, result.total_distance_meters, result.total_duration_sec, len(content),
    )
    return ExportedFile(filename=variant_filename(params.variant_index), content=content)


def export_variants(request: ExportBatchRequest) -> list[ExportedFile]:
    """Export one FIT file per variant record.

    Every variant goes through the same validation as a single export and
    gets its own random source (derived from `seed` when given, so a batch
    is reproducible).
    """
    count = len(request.variants)
    if count < 1:
        raise InvalidInput("at least one export variant is required")
    if count > settings.max_export_variants:
        raise InvalidInput(f"at most {settings.max_export_variants} export variants are allowed")

    base_seed = request.seed if request.seed is not None else settings.random_seed
    files: list[ExportedFile] = []
    for idx, variant in enumerate(request.variants, start=1):
        single = ExportRequest(
            start_time=variant.start_time,
            pace_seconds_per_km=variant.pace_seconds_per_km,
            points=request.points,
            hr_rest=request.hr_rest,
            hr_max=request.hr_max,
            lap_count=request.lap_count,
            variant_index=idx,
        )
        rng = random.Random(None if base_seed is None else base_seed + idx)
        try:
            files.append(export_activity(single, rng))
        except InvalidInput as e:
            raise InvalidInput(f"variant {idx}: {e}") from e
    return files
