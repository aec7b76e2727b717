"""EMS client: application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from ems_client.admin.service import AlertConfigurationService, OrganizationService, SmtpConfigService
from ems_client.api import ApiClient
from ems_client.attendance.service import AttendanceService
from ems_client.auth.service import AuthService
from ems_client.auth.session import FileStorage, SessionState, SessionStorage, SessionStore
from ems_client.config import Settings, settings as default_settings
from ems_client.core_hr.service import DepartmentService, EmployeeService, PositionService, UserService
from ems_client.dashboard.service import DashboardService
from ems_client.documents.service import DocumentService
from ems_client.leave.service import LeaveService
from ems_client.navigation.service import Navigator
from ems_client.notifications.service import NotificationService, UnreadCountPoller
from ems_client.rota.service import RotaService
from ems_client.search.service import SearchService

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or default_settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )


class EmsApp:
    """Everything one signed-in client needs, wired once."""

    def __init__(
        self,
        settings: Settings,
        session: SessionStore,
        api: ApiClient,
    ) -> None:
        self.settings = settings
        self.session = session
        self.api = api
        self.navigator = Navigator(session)

        # Services
        self.auth = AuthService(api, session)
        self.employees = EmployeeService(api)
        self.departments = DepartmentService(api)
        self.positions = PositionService(api)
        self.users = UserService(api)
        self.leaves = LeaveService(api)
        self.documents = DocumentService(api)
        self.attendance = AttendanceService(api)
        self.rotas = RotaService(api)
        self.notifications = NotificationService(api)
        self.search = SearchService(api)
        self.smtp = SmtpConfigService(api)
        self.alerts = AlertConfigurationService(api)
        self.organizations = OrganizationService(api)
        self.dashboard = DashboardService(api)

        self.poller = UnreadCountPoller(
            self.notifications, session, interval=settings.NOTIFICATION_POLL_SECONDS,
        )

    @asynccontextmanager
    async def lifespan(self) -> AsyncIterator["EmsApp"]:
        """Restore the session on entry; stop polling and close HTTP on exit."""
        # Startup
        if self.session.restore() is SessionState.AUTHENTICATED:
            self.poller.start()
        try:
            yield self
        finally:
            # Shutdown
            await self.poller.aclose()
            self.navigator.close()
            await self.api.aclose()


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[SessionStorage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> EmsApp:
    """Create and wire the client application."""
    settings = settings or default_settings
    session = SessionStore(storage if storage is not None else FileStorage(settings.SESSION_FILE))
    api = ApiClient(settings, session, transport=transport)
    logger.debug("EMS client targeting %s (%s)", settings.API_URL, settings.ENVIRONMENT)
    return EmsApp(settings, session, api)
