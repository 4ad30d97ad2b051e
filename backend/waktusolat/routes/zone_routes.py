# waktusolat/routes/zone_routes.py
from flask import current_app, jsonify
from flask_smorest import Blueprint, abort

from ..errors import CoordinateRangeError, ZoneNotFoundError
from ..schemas import ErrorSchema, MessageSchema, ZoneLocationSchema, ZoneSchema
from ..services.gazetteer import get_gazetteer
from ..services.spatial_resolver import resolve_zone

zone_bp = Blueprint(
    'Zones',
    __name__,
    url_prefix='/zones',
    description="JAKIM zone directory and GPS lookup."
)


@zone_bp.route('', strict_slashes=False)
@zone_bp.response(200, ZoneSchema(many=True), description="All 60 zones.")
def list_all_zones():
    """List every zone."""
    return get_gazetteer().list_zones()


@zone_bp.route('/<string:state>')
@zone_bp.response(200, ZoneSchema(many=True), description="Zones whose code starts with the state code. May be empty.")
def list_zones_by_state(state):
    """List the zones of one state, e.g. /zones/SGR."""
    return get_gazetteer().list_zones(state)


@zone_bp.route('/<string:lat>/<string:lon>')
@zone_bp.alt_response(200, schema=ZoneLocationSchema, description="Zone containing the point.")
@zone_bp.alt_response(400, schema=MessageSchema, description="Coordinates are not numbers.")
@zone_bp.alt_response(500, schema=ErrorSchema, description="No zone contains the point, or coordinates are out of range.")
def zone_by_gps(lat, lon):
    """Find the zone for a GPS coordinate."""
    # Parsed here: Flask's float converter rejects integers and negative values.
    try:
        latitude = float(lat)
        longitude = float(lon)
    except ValueError:
        abort(400, message="Invalid coordinates.")

    try:
        location = resolve_zone(get_gazetteer(), latitude, longitude)
    except (CoordinateRangeError, ZoneNotFoundError) as e:
        current_app.logger.warning(f"GPS zone lookup failed for ({lat}, {lon}): {e}")
        response = jsonify({"error": e.message})
        response.status_code = 500
        return response

    return jsonify(ZoneLocationSchema().dump(location))
