from flask import make_response
from flask_smorest import Blueprint, abort
from webargs import fields
from webargs.flaskparser import use_args

from ..errors import ScheduleNotFoundError
from ..schemas import MessageSchema
from ..services.document_service import assemble_schedule_document, render_schedule_pdf
from ..services.gazetteer import get_gazetteer

jadual_bp = Blueprint(
    'Jadual',
    __name__,
    url_prefix='/',
    description="Printable monthly prayer time schedules."
)


@jadual_bp.route('/jadual_solat/<string:zone>')
@use_args({'year': fields.Int(), 'month': fields.Int()}, location='query')
@jadual_bp.alt_response(200, description="PDF schedule.", content_type="application/pdf")
@jadual_bp.alt_response(404, schema=MessageSchema, description="No data for the zone and month.")
def jadual_solat(args, zone):
    """Download one month's schedule for a zone as a PDF."""
    try:
        document = assemble_schedule_document(get_gazetteer(), zone, args.get('year'), args.get('month'))
    except ScheduleNotFoundError as e:
        abort(404, message=e.message)

    response = make_response(render_schedule_pdf(document))
    response.headers['Content-Type'] = 'application/pdf'
    response.headers['Content-Disposition'] = f'inline; filename="{document.filename}"'
    return response
