"""
Process-wide registry of entity controllers.

Dash callbacks are plain functions, so the controllers for each resource
screen live here, created on first use and shared by every callback that
touches that resource.
"""

import logging
import threading
from typing import Dict, Optional

from api.client import ApiClient
from UI.config import settings
from UI.state.entity_controller import EntityController

logger = logging.getLogger(__name__)


class ControllerRegistry:
    """
    Singleton holding the API client and one EntityController per resource.

    State is per process, not per browser session: the console assumes a
    single operator, and every open tab shares the same search, selection
    and dialogs.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ControllerRegistry, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._client: Optional[ApiClient] = None
        self._controllers: Dict[str, EntityController] = {}
        self._lock = threading.Lock()

    @property
    def client(self) -> ApiClient:
        if self._client is None:
            self._client = ApiClient(settings.API_BASE_URL, timeout=settings.API_TIMEOUT)
            logger.info("API client created for %s", settings.API_BASE_URL)
        return self._client

    @client.setter
    def client(self, client: ApiClient) -> None:
        self._client = client

    def get(self, resource: str) -> EntityController:
        """
        Controller for a resource screen.

        Raises:
            KeyError: if no screen is registered under ``resource``
        """
        from UI.screens import SCREENS, build_config

        with self._lock:
            controller = self._controllers.get(resource)
            if controller is None:
                screen = SCREENS[resource]
                controller = EntityController(build_config(screen, self.client, settings.PAGE_SIZE))
                self._controllers[resource] = controller
            return controller

    def reset(self) -> None:
        """Drop every controller and the client (tests, settings reload)."""
        with self._lock:
            self._controllers = {}
            self._client = None


registry = ControllerRegistry()
