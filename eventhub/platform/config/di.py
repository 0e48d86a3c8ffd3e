"""
Application container

https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from eventhub.platform.database.orm_db_setting import Database
from eventhub.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from eventhub.platform.event.in_memory_domain_event_bus import InMemoryDomainEventBus
from eventhub.service.ticketing.app.event_handler.notification_event_handler import (
    NotificationEventHandler,
)
from eventhub.service.ticketing.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from eventhub.service.ticketing.driven_adapter.repo.dashboard_query_repo_impl import (
    DashboardQueryRepoImpl,
)
from eventhub.service.ticketing.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from eventhub.service.ticketing.driven_adapter.repo.notification_command_repo_impl import (
    NotificationCommandRepoImpl,
)
from eventhub.service.ticketing.driven_adapter.repo.notification_query_repo_impl import (
    NotificationQueryRepoImpl,
)
from eventhub.service.ticketing.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from eventhub.service.ticketing.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from eventhub.service.ticketing.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from eventhub.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Database (uses AsyncEngineManager with settings from core_setting)
    database = providers.Singleton(Database)

    # Unit of work: one per request, every command repo inside shares its transaction
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Query / standalone repositories (stateless - use session_factory per call)
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    notification_command_repo = providers.Singleton(
        NotificationCommandRepoImpl, session_factory=database.provided.session
    )
    notification_query_repo = providers.Singleton(
        NotificationQueryRepoImpl, session_factory=database.provided.session
    )
    dashboard_query_repo = providers.Singleton(
        DashboardQueryRepoImpl, session_factory=database.provided.session
    )

    # Users and auth
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl,
        session_factory=database.provided.session,
        password_hasher=password_hasher,
    )
    jwt_auth = providers.Singleton(JwtAuth)

    # Domain events (in-process; handlers subscribed in the app lifespan)
    domain_event_bus = providers.Singleton(InMemoryDomainEventBus)
    notification_event_handler = providers.Singleton(
        NotificationEventHandler, notification_command_repo=notification_command_repo
    )


container = Container()
