"""FIT activity encoding.

Message order: file_id, device_info, session, activity, then one record per
sample in time order. fit_tool expects timestamps in milliseconds since the
Unix epoch and positions in degrees (its field scale stores semicircles).
"""

import logging
from datetime import datetime

from fit_tool.fit_file_builder import FitFileBuilder
from fit_tool.profile.messages.activity_message import ActivityMessage
from fit_tool.profile.messages.device_info_message import DeviceInfoMessage
from fit_tool.profile.messages.file_id_message import FileIdMessage
from fit_tool.profile.messages.record_message import RecordMessage
from fit_tool.profile.messages.session_message import SessionMessage
from fit_tool.profile.profile_type import Activity, FileType, Manufacturer, Sport, SubSport

from runsynth.core.constants import FIT_PRODUCT_ID, FIT_SERIAL_NUMBER
from runsynth.core.errors import EncodingFailure
from runsynth.models.activity import ActivityResult, Sample

logger = logging.getLogger(__name__)


def _ms(start_ms: int, offset_sec: float) -> int:
    return start_ms + int(round(offset_sec * 1000))


def _file_id(start_ms: int) -> FileIdMessage:
    msg = FileIdMessage()
    msg.type = FileType.ACTIVITY
    msg.manufacturer = Manufacturer.DEVELOPMENT.value
    msg.product = FIT_PRODUCT_ID
    msg.serial_number = FIT_SERIAL_NUMBER
    msg.time_created = start_ms
    return msg


def _device_info(start_ms: int) -> DeviceInfoMessage:
    msg = DeviceInfoMessage()
    msg.timestamp = start_ms
    msg.manufacturer = Manufacturer.DEVELOPMENT.value
    msg.product = FIT_PRODUCT_ID
    msg.serial_number = FIT_SERIAL_NUMBER
    return msg


def _session(result: ActivityResult, start_ms: int) -> SessionMessage:
    duration = result.total_duration_sec
    msg = SessionMessage()
    msg.timestamp = _ms(start_ms, duration)
    msg.start_time = start_ms
    msg.total_elapsed_time = duration
    msg.total_timer_time = duration
    msg.total_distance = result.total_distance_meters
    msg.avg_speed = result.total_distance_meters / duration if duration > 0 else 0.0
    msg.sport = Sport.RUNNING
    msg.sub_sport = SubSport.GENERIC
    return msg


def _activity(result: ActivityResult, start_ms: int) -> ActivityMessage:
    msg = ActivityMessage()
    msg.timestamp = _ms(start_ms, result.total_duration_sec)
    msg.total_timer_time = result.total_duration_sec
    msg.num_sessions = 1
    msg.type = Activity.MANUAL
    return msg


def _record(sample: Sample, start_ms: int) -> RecordMessage:
    msg = RecordMessage()
    msg.timestamp = _ms(start_ms, sample.time_sec)
    msg.position_lat = sample.lat
    msg.position_long = sample.lng
    msg.distance = sample.distance
    msg.speed = sample.speed
    msg.heart_rate = sample.heart_rate
    return msg


def encode_activity(result: ActivityResult, start_time: datetime) -> bytes:
    """Serialize a synthesized activity into FIT bytes.

    Any failure inside the FIT library is logged and surfaced as
    EncodingFailure so callers can report it without leaking internals.
    """
    start_ms = int(round(start_time.timestamp() * 1000))
    try:
        builder = FitFileBuilder(auto_define=True, min_string_size=50)
        builder.add(_file_id(start_ms))
        builder.add(_device_info(start_ms))
        builder.add(_session(result, start_ms))
        builder.add(_activity(result, start_ms))
        builder.add_all([_record(s, start_ms) for s in result.samples])
        content = builder.build().to_bytes()
    except Exception as e:
        logger.exception("FIT encoding failed for %d samples", len(result.samples))
        raise EncodingFailure("failed to build FIT file") from e

    logger.debug("encoded %d records into %d bytes", len(result.samples), len(content))
    return content
