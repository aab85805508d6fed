"""
Helpers shared by every namespace: the response envelope, authentication
and permission checks, and list query-string parsing.
"""
import logging
from functools import wraps

from flask import request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_restx import reqparse
from jwt.exceptions import PyJWTError
from werkzeug.exceptions import HTTPException

from utils.errors import AppError, PermissionDenied, Unauthenticated
from utils.pagination import ListParams
from utils.permissions import has_permission

logger = logging.getLogger(__name__)

KIND_STATUS = {
    'validation': 400,
    'conflict': 400,
    'not_found': 404,
    'unauthenticated': 401,
    'forbidden': 403,
    'internal': 500,
}


def success(data, status=200):
    return {'data': data}, status


def error_response(message, status):
    return {'error': {'message': message}}, status


def result_response(result, schema=None, status=200):
    """Map a ``ServiceResult`` onto the response envelope."""
    if not result.success:
        return error_response(result.error, KIND_STATUS.get(result.kind, 400))
    data = schema.dump(result.data) if schema is not None else result.data
    return success(data, status)


def detail_response(found, schema, resource):
    """Envelope for a ``find_by_id_with_relations`` result."""
    if found is None:
        return error_response(f'{resource} not found', 404)
    entity, extras = found
    data = schema.dump(entity)
    data.update(extras)
    return success(data)


def request_payload():
    return request.get_json(silent=True)


def current_user_id():
    identity = get_jwt_identity()
    return int(identity) if identity is not None else None


def current_role():
    return get_jwt().get('role')


def require_permission(permission=None):
    """
    Authenticate the request and check the caller's role.

    Failures are answered here so they use the ``{"error": {...}}`` envelope.
    Typed errors escaping the handler map to their status; anything else is
    logged and reported as a generic 500.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                verify_jwt_in_request()
            except (JWTExtendedException, PyJWTError) as exc:
                logger.debug(f"Rejected token: {exc}")
                return error_response(Unauthenticated.default_message, Unauthenticated.status_code)

            if permission and not has_permission(current_role(), permission):
                return error_response(PermissionDenied.default_message, PermissionDenied.status_code)

            try:
                return fn(*args, **kwargs)
            except HTTPException:
                raise
            except AppError as exc:
                return error_response(exc.message, exc.status_code)
            except Exception:
                logger.exception(f"Unhandled error in {request.method} {request.path}")
                return error_response('An unexpected error occurred', 500)
        return wrapper
    return decorator


def list_parser(*filters):
    """Query-string parser for a paginated list endpoint with ``filters``."""
    parser = reqparse.RequestParser()
    parser.add_argument('page', type=str, location='args', help='Page number (default 1)')
    parser.add_argument('pageSize', type=str, location='args', help='Items per page (1-100, default 10)')
    parser.add_argument('search', type=str, location='args', help='Case-insensitive search')
    parser.add_argument('sortBy', type=str, location='args', help='Sort column')
    parser.add_argument('sortOrder', type=str, location='args', help='asc or desc (default desc)')
    for name in filters:
        parser.add_argument(name, type=str, location='args', help=f'Filter by {name}')
    return parser


def list_params(parser, filters):
    return ListParams.from_args(parser.parse_args(), filters)


def deleted_response(result, resource):
    if not result.success:
        return result_response(result)
    return success({'message': f'{resource} deleted'})
