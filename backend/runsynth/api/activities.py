import io
import logging
import zipfile

from fastapi import APIRouter, File, HTTPException, Response, UploadFile

from runsynth.core.constants import FIT_MEDIA_TYPE
from runsynth.core.errors import DegenerateRoute, EncodingFailure, InvalidInput
from runsynth.core.time_utils import compute_pace, seconds_to_hhmmss
from runsynth.schemas.activity import (
    ExportBatchRequest,
    ExportRequest,
    PointIn,
    PreviewRequest,
    PreviewResponse,
    RouteImportResponse,
    SampleOut,
)
from runsynth.services.activity import export_activity, export_variants, preview_activity
from runsynth.services.distance import accumulate
from runsynth.services.gpx_route import points_from_gpx

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["activities"])


def _raise_http(e: Exception, what: str):
    """Map pipeline errors onto HTTP responses."""
    if isinstance(e, (InvalidInput, DegenerateRoute)):
        raise HTTPException(status_code=400, detail=str(e))
    if not isinstance(e, EncodingFailure):
        logger.exception("%s failed", what)
    raise HTTPException(status_code=500, detail=f"failed to generate {what}")


@router.post("/preview", response_model=PreviewResponse)
def preview(payload: PreviewRequest):
    try:
        result = preview_activity(payload)
    except Exception as e:
        _raise_http(e, "preview")

    return PreviewResponse(
        total_distance_meters=result.total_distance_meters,
        total_duration_sec=result.total_duration_sec,
        duration=seconds_to_hhmmss(result.total_duration_sec),
        pace=compute_pace(result.total_duration_sec, result.total_distance_meters),
        samples=[
            SampleOut(
                time_sec=s.time_sec,
                distance=s.distance,
                speed=s.speed,
                heart_rate=s.heart_rate,
                lat=s.lat,
                lng=s.lng,
            )
            for s in result.samples
        ],
    )


@router.post("/generate-fit")
def generate_fit(payload: ExportRequest):
    try:
        exported = export_activity(payload)
    except Exception as e:
        _raise_http(e, "FIT file")

    return Response(
        content=exported.content,
        media_type=FIT_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={exported.filename}"},
    )


@router.post("/generate-fit/batch")
def generate_fit_batch(payload: ExportBatchRequest):
    """Export several variants of one route as a ZIP of FIT files."""
    try:
        files = export_variants(payload)
    except Exception as e:
        _raise_http(e, "FIT files")

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for f in files:
            zf.writestr(f.filename, f.content)

    return Response(
        content=buf.getvalue(),
        media_type="application/zip",
        headers={"Content-Disposition": "attachment; filename=runs.zip"},
    )


@router.post("/routes/gpx", response_model=RouteImportResponse)
async def import_gpx_route(file: UploadFile = File(...)):
    """Turn an uploaded GPX file into route points for the drawing surface."""
    raw = await file.read()
    try:
        points = points_from_gpx(raw.decode("utf-8", errors="replace"))
        _, total = accumulate(points)
    except (InvalidInput, DegenerateRoute) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return RouteImportResponse(
        points=[PointIn(lat=p.lat, lng=p.lng) for p in points],
        distance_meters=total,
    )
