# waktusolat/routes/solat_routes.py
from flask import current_app
from flask_smorest import Blueprint, abort

from ..errors import ScheduleNotFoundError, WaktuSolatError
from ..schemas import MessageSchema, PeriodArgsSchema, SolatV1Schema, SolatV2Schema
from ..services.presenters import present_v1, present_v2
from ..services.schedule_service import resolve_month_schedule

solat_bp = Blueprint(
    'Solat',
    __name__,
    url_prefix='/',
    description="Monthly prayer times per JAKIM zone."
)


@solat_bp.route('/solat/<string:zone>')
@solat_bp.arguments(PeriodArgsSchema, location='query')
@solat_bp.response(200, SolatV1Schema, description="Month of prayer times as formatted local times.")
@solat_bp.alt_response(500, schema=MessageSchema, description="Any resolution failure (legacy opaque error).")
def solat_v1(args, zone):
    """
    Legacy month schedule.

    Every failure, whether the zone is unknown or the month has no data, is
    reported as the same opaque "Server Error". Existing clients depend on it.
    """
    try:
        schedule = resolve_month_schedule(zone, args.get('year'), args.get('month'))
    except WaktuSolatError as e:
        current_app.logger.warning(f"v1 schedule request for zone '{zone}' failed: {e}")
        abort(500, message="Server Error")
    return present_v1(schedule)


@solat_bp.route('/v2/solat/<string:zone>')
@solat_bp.arguments(PeriodArgsSchema, location='query')
@solat_bp.response(200, SolatV2Schema, description="Month of prayer times as epoch seconds.")
@solat_bp.alt_response(404, schema=MessageSchema, description="No data for the zone and month.")
def solat_v2(args, zone):
    """Month schedule with absolute prayer instants (epoch seconds, UTC)."""
    try:
        schedule = resolve_month_schedule(zone, args.get('year'), args.get('month'))
    except ScheduleNotFoundError as e:
        abort(404, message=e.message)
    return present_v2(schedule, current_app.config['ZONE_TIMEZONE'])
