"""Dependency injection container for services."""

from dependency_injector import containers, providers
from sqlalchemy.orm import sessionmaker

from commentbox.config import Settings
from commentbox.services.admin_secret_service import AdminSecretService
from commentbox.services.comment_service import CommentService
from commentbox.services.settings_service import SettingsService


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    # Configuration providers
    config = providers.Dependency(instance_of=Settings)
    session_maker = providers.Dependency(instance_of=sessionmaker)
    db_session = providers.ContextLocalSingleton(
        session_maker.provided.call()
    )

    # SettingsService - Factory creates new instance per request with database session
    settings_service = providers.Factory(
        SettingsService,
        db=db_session,
    )

    # AdminSecretService - re-resolves the secret on every use, never cached
    admin_secret_service = providers.Factory(
        AdminSecretService,
        settings_service=settings_service,
        config=config,
    )

    # CommentService - Factory creates new instance per request with database session
    comment_service = providers.Factory(
        CommentService,
        db=db_session,
    )
