from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from app import db, jwt
from api.common import (
    current_role,
    current_user_id,
    error_response,
    request_payload,
    require_permission,
    result_response,
)
from models.user import UserRole
from schemas.user import UserSchema
from services.auth import AuthService
from utils.permissions import get_permissions, is_role_at_least

# ------------------------------------------------------------------------------
# API namespace setup
# ------------------------------------------------------------------------------
api = Namespace("auth", description="Authentication operations")

# ------------------------------------------------------------------------------
# Swagger models
# ------------------------------------------------------------------------------
login_model = api.model(
    "Login",
    {
        "username": fields.String(required=True, description="Username"),
        "password": fields.String(required=True, description="Password"),
    },
)

register_model = api.model(
    "Register",
    {
        "username": fields.String(required=True, description="Username"),
        "email": fields.String(required=True, description="Email"),
        "password": fields.String(required=True, description="Password"),
        "role": fields.String(
            required=False,
            description="Role, honoured only for admin callers",
            enum=[role.value for role in UserRole],
        ),
    },
)

token_model = api.model(
    "Token",
    {
        "access_token": fields.String(description="JWT access token"),
        "refresh_token": fields.String(description="JWT refresh token"),
        "user": fields.Raw(description="User data"),
    },
)

# ------------------------------------------------------------------------------
# Schemas & helpers
# ------------------------------------------------------------------------------
user_schema = UserSchema()


@jwt.token_in_blocklist_loader
def check_if_token_revoked(jwt_header, jwt_payload):
    """Revoked tokens live in the database so every worker sees them."""
    return AuthService(db.session).is_revoked(jwt_payload["jti"])


def _issue_access_token(user):
    # identity must be a string so PyJWT accepts the 'sub' claim
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


def _caller_role():
    """Role of an optional bearer token, or None for anonymous callers."""
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError):
        return None
    return current_role()


# ------------------------------------------------------------------------------
# /auth/login
# ------------------------------------------------------------------------------
@api.route("/login")
class Login(Resource):
    @api.expect(login_model)
    @api.response(200, "Login successful", token_model)
    @api.response(401, "Invalid credentials")
    def post(self):
        """Authenticate user and issue access/refresh tokens."""
        data = request_payload() or {}
        user = AuthService(db.session).authenticate(data.get("username"), data.get("password"))
        if user is None:
            return error_response("Invalid credentials", 401)

        return {
            "access_token": _issue_access_token(user),
            "refresh_token": create_refresh_token(identity=str(user.id)),
            "user": user_schema.dump(user),
        }, 200


# ------------------------------------------------------------------------------
# /auth/refresh
# ------------------------------------------------------------------------------
@api.route("/refresh")
class TokenRefresh(Resource):
    @api.response(200, "Token refreshed successfully")
    @api.response(401, "Invalid token")
    def post(self):
        """Issue a new access token using a valid refresh token."""
        try:
            verify_jwt_in_request(refresh=True)
        except (JWTExtendedException, PyJWTError):
            return error_response("Authentication required", 401)

        user = AuthService(db.session).get_user(current_user_id())
        if user is None:
            return error_response("User not found", 404)

        return {"access_token": _issue_access_token(user)}, 200


# ------------------------------------------------------------------------------
# /auth/logout
# ------------------------------------------------------------------------------
@api.route("/logout")
class Logout(Resource):
    @require_permission()
    @api.response(200, "Logout successful")
    def post(self):
        """Revoke the current access token."""
        AuthService(db.session).revoke(get_jwt()["jti"])
        return {"data": {"message": "Logout successful"}}, 200


# ------------------------------------------------------------------------------
# /auth/register
# ------------------------------------------------------------------------------
@api.route("/register")
class Register(Resource):
    @api.expect(register_model)
    @api.response(201, "User registered successfully")
    @api.response(400, "Validation error")
    def post(self):
        """Create a new user account."""
        caller_role = _caller_role()
        allow_role = caller_role is not None and is_role_at_least(caller_role, UserRole.ADMIN.value)
        result = AuthService(db.session).register(request_payload(), allow_role=allow_role)
        return result_response(result, user_schema, 201)


# ------------------------------------------------------------------------------
# /auth/me
# ------------------------------------------------------------------------------
@api.route("/me")
class Me(Resource):
    @require_permission()
    @api.response(200, "Current user")
    @api.response(401, "Authentication required")
    def get(self):
        """Return the authenticated user and the permissions of their role."""
        user = AuthService(db.session).get_user(current_user_id())
        if user is None:
            return error_response("User not found", 404)

        data = user_schema.dump(user)
        data["permissions"] = get_permissions(current_role())
        return {"data": data}, 200
