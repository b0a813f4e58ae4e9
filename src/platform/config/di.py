"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.metrics.ticketing_metrics import metrics
from src.platform.types.clock import utc_now
from src.service.ticketing.driven_adapter.notification.logging_notification_sender import (
    LoggingNotificationSender,
)
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Unit of Work - one per transaction attempt; use cases receive `uow.provider` as a factory
    uow = providers.Factory(SqlAlchemyUnitOfWork)

    # Wall clock (overridden in tests to move time forward)
    clock = providers.Object(utc_now)

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth, settings=config_service)

    # Side effects outside the core
    notification_sender = providers.Singleton(LoggingNotificationSender)

    # Observability
    ticketing_metrics = providers.Object(metrics)


container = Container()
