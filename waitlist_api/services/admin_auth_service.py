import logging

from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from jwt.exceptions import PyJWTError
from flask_jwt_extended.exceptions import JWTExtendedException

from waitlist_api.exceptions import AuthError, ForbiddenError
from waitlist_api.models.enums import AdminRole
from waitlist_api.models.timestamps import utcnow
from waitlist_api.repositories import AdminRepository
from waitlist_api.utils.validators import normalize_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
NO_TOKEN = "Access denied. No token provided."
INVALID_TOKEN = "Invalid or expired token."


class AdminAuthService:
    @staticmethod
    def login(email, password):
        email = normalize_email(email)

        admin = AdminRepository.find_by_email(email)
        # Same message for unknown email and wrong password
        if not admin or not admin.check_password(password):
            logger.warning(f"Failed admin login attempt for: {email}")
            raise AuthError(INVALID_CREDENTIALS)

        if not admin.is_active:
            logger.warning(f"Login attempt for deactivated admin: {email}")
            raise ForbiddenError("Account is deactivated. Contact support.")

        admin.last_login = utcnow()
        AdminRepository.save(admin)

        token = create_access_token(
            identity=admin.email,
            additional_claims={"role": admin.role.value},
        )
        logger.info(f"Admin logged in successfully: {email}")

        return {
            "token": token,
            "email": admin.email,
            "role": admin.role.value,
            "expiresIn": AdminAuthService.expires_in(),
        }

    @staticmethod
    def expires_in():
        expires = current_app.config["JWT_ACCESS_TOKEN_EXPIRES"]
        return f"{int(expires.total_seconds() // 3600)}h"

    @staticmethod
    def verify(token):
        """Validate signature, expiry and type of a token and return its identity."""
        if not token:
            raise AuthError(NO_TOKEN)

        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException) as e:
            logger.info(f"Rejected admin token: {str(e)}")
            raise AuthError(INVALID_TOKEN) from e

        role = claims.get("role")
        if claims.get("type") != "access" or role not in [r.value for r in AdminRole]:
            raise AuthError(INVALID_TOKEN)

        return {"email": claims["sub"], "role": role}
