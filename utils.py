from flask import request
from werkzeug.exceptions import BadRequest

from errors import ApiError


def get_payload(root_key=None):
    """Return the JSON request body as a dict.

    Accepts both a flat object and one wrapped in ``root_key``
    (``{"user": {...}}``). An empty body reads as ``{}``; unparseable JSON and
    JSON that is not an object (``null``, lists, scalars) raise a 400.
    """
    if not request.get_data(cache=True):
        return {}
    try:
        data = request.get_json(force=True)
    except BadRequest:
        raise ApiError(400, "malformed_json", "Request body is not valid JSON.") from None
    if root_key and isinstance(data, dict) and isinstance(data.get(root_key), dict):
        data = data[root_key]
    if not isinstance(data, dict):
        raise ApiError(400, "invalid_payload", "Request body must be a JSON object.")
    return data
