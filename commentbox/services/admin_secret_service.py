"""Admin secret resolution, rotation and authorization."""

import hmac
import logging
from collections.abc import Callable

from prometheus_client import Counter
from sqlalchemy.exc import SQLAlchemyError

from commentbox.config import (
    DEVELOPMENT_ADMIN_SECRET,
    MIN_ADMIN_SECRET_LENGTH,
    Settings,
)
from commentbox.exceptions import (
    AuthenticationException,
    StorageException,
    ValidationException,
)
from commentbox.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

# Well-known settings key holding the rotated admin secret
ADMIN_SECRET_SETTING_KEY = "ADMIN_SECRET"

ADMIN_AUTH_FAILURES_TOTAL = Counter(
    "commentbox_admin_auth_failures_total",
    "Admin requests rejected because the secret was missing or wrong",
)
ADMIN_SECRET_ROTATIONS_TOTAL = Counter(
    "commentbox_admin_secret_rotations_total",
    "Successful admin secret updates",
)


class AdminSecretService:
    """Single access point for the process-wide admin secret.

    The secret is resolved on every call through an ordered chain:
    the settings table, then the ADMIN_SECRET_KEY configuration value,
    then the development default. Nothing else may cache or read it.
    """

    def __init__(self, settings_service: SettingsService, config: Settings) -> None:
        """Initialize service with the durable store and static configuration.

        Args:
            settings_service: Key-value store holding the rotated secret
            config: Application settings providing the fallback secret
        """
        self.settings_service = settings_service
        self.config = config

    def _resolution_chain(self) -> list[Callable[[], str | None]]:
        return [self._stored_secret, self._configured_secret]

    def _stored_secret(self) -> str | None:
        try:
            return self.settings_service.get(ADMIN_SECRET_SETTING_KEY) or None
        except SQLAlchemyError as e:
            logger.error("Failed to read stored admin secret: %s", e, exc_info=True)
            return None

    def _configured_secret(self) -> str | None:
        return self.config.ADMIN_SECRET_KEY or None

    def resolve(self) -> str:
        """Return the current admin secret. Never fails."""
        for tier in self._resolution_chain():
            secret = tier()
            if secret is not None:
                return secret

        logger.warning(
            "No admin secret configured; using the insecure development default. "
            "Set ADMIN_SECRET_KEY or POST /setup before deploying."
        )
        return DEVELOPMENT_ADMIN_SECRET

    def is_configured(self) -> bool:
        """Check whether any tier other than the development default yields a secret."""
        return any(tier() is not None for tier in self._resolution_chain())

    def is_authorized(self, supplied_secret: str | None) -> bool:
        """Check a request-supplied secret against the resolved secret."""
        if not isinstance(supplied_secret, str) or not supplied_secret:
            ADMIN_AUTH_FAILURES_TOTAL.inc()
            return False

        authorized = hmac.compare_digest(
            supplied_secret.encode("utf-8"), self.resolve().encode("utf-8")
        )
        if not authorized:
            ADMIN_AUTH_FAILURES_TOTAL.inc()

        return authorized

    def update(self, current_secret: str | None, new_secret: str) -> None:
        """Store a new admin secret.

        When a secret is already configured the caller must prove knowledge of
        it. On first boot (nothing configured) the check is skipped.

        Args:
            current_secret: Secret the caller believes is current
            new_secret: Replacement secret

        Raises:
            ValidationException: If new_secret is too short
            AuthenticationException: If current_secret does not match
            StorageException: If the secret cannot be persisted
        """
        if not isinstance(new_secret, str) or len(new_secret) < MIN_ADMIN_SECRET_LENGTH:
            raise ValidationException(
                f"newSecret must be at least {MIN_ADMIN_SECRET_LENGTH} characters"
            )

        if self.is_configured():
            if not self.is_authorized(current_secret):
                logger.warning("Rejected admin secret update: current secret mismatch")
                raise AuthenticationException()
        else:
            logger.info("No admin secret configured; accepting initial secret")

        # Last write wins; concurrent rotations are not serialized
        try:
            self.settings_service.set(ADMIN_SECRET_SETTING_KEY, new_secret)
        except SQLAlchemyError as e:
            logger.error("Failed to store admin secret: %s", e, exc_info=True)
            raise StorageException("Failed to update admin secret", str(e)) from e

        ADMIN_SECRET_ROTATIONS_TOTAL.inc()
        logger.info("Admin secret updated")
