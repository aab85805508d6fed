"""
User accounts and token revocation.

Token issuing stays in the HTTP layer; this service only deals with the
rows behind it.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.user import User, RevokedToken, UserRole
from schemas.user import RegisterInputSchema
from services.base import ServiceResult, load_input, run_write
from utils.errors import translate_integrity_error

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session):
        self.session = session

    def authenticate(self, username, password):
        if not username or not password:
            return None
        user = self.session.query(User).filter_by(username=username).first()
        if user is None or not user.check_password(password):
            logger.info(f"Failed login for {username!r}")
            return None
        return user

    def get_user(self, user_id):
        return self.session.get(User, int(user_id))

    def register(self, payload, allow_role=False):
        """
        Create an account. The requested role is honoured only when the
        caller may grant it; everyone else gets the default role.
        """
        values, error = load_input(RegisterInputSchema, payload, label='user')
        if error:
            return error

        query = self.session.query(User)
        if query.filter_by(username=values['username']).first():
            return ServiceResult.fail('Username already exists', kind='conflict')
        if query.filter_by(email=values['email']).first():
            return ServiceResult.fail('Email already exists', kind='conflict')

        role = values.get('role') if allow_role else None
        user = User(
            username=values['username'],
            email=values['email'],
            role=role or UserRole.EMPLOYEE.value,
        )
        user.set_password(values['password'])

        def _create():
            self.session.add(user)
            self._commit()
            return user

        return run_write('create user', _create)

    def revoke(self, jti):
        if self.is_revoked(jti):
            return
        self.session.add(RevokedToken(jti=jti))
        self._commit()

    def is_revoked(self, jti):
        return self.session.query(RevokedToken.id).filter_by(jti=jti).first() is not None

    def _commit(self):
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise translate_integrity_error(exc) from exc
        except SQLAlchemyError:
            self.session.rollback()
            raise
