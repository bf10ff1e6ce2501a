import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskist.auth.password import hash_password, verify_password
from taskist.errors import AuthError, ConflictError
from taskist.models.user import User
from taskist.validators import normalize_email, validate_registration

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials.'
EMAIL_ALREADY_REGISTERED = 'Email already registered.'


class CredentialStore:
    """Users and their password hashes."""

    def __init__(self, db: Session, bcrypt_rounds: int = 10) -> None:
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def register(self, email: str, password: str) -> int:
        normalized_email, password = validate_registration(email, password)

        if self.find_by_email(normalized_email) is not None:
            raise ConflictError(EMAIL_ALREADY_REGISTERED)

        user = User(
            email=normalized_email,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
        )

        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email.
            self.db.rollback()
            raise ConflictError(EMAIL_ALREADY_REGISTERED) from exc
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info('Registered user %s', user.id)
        return user.id

    def verify(self, email: str, password: str) -> int:
        user = self.find_by_email(email)

        if user is None or not verify_password(password or '', user.password_hash):
            logger.warning('Rejected login attempt')
            raise AuthError(INVALID_CREDENTIALS)

        return user.id
