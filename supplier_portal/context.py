"""
Process-wide application context.

Built once at startup and attached to ``app.state.context``; read-only for the
lifetime of the process. Handlers reach it through ``get_context``.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Tuple

import firebase_admin
from firebase_admin import credentials
from fastapi import Request

from .auth.identity import FirebaseIdentityProvider, IdentityProvider
from .auth.roles import RoleResolver
from .config import Settings
from .store.base import RoleStore
from .store.firebase import FirebaseRoleStore
from .store.memory import InMemoryRoleStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    identity_provider: IdentityProvider
    store: RoleStore
    resolver: RoleResolver
    firebase_app: Optional[firebase_admin.App] = None
    owns_firebase_app: bool = False
    started_at: float = field(default_factory=time.monotonic)

    @property
    def uptime(self) -> float:
        return round(time.monotonic() - self.started_at, 3)

    def close(self) -> None:
        """Release the Firebase app, only if this context created it."""
        if self.firebase_app is not None and self.owns_firebase_app:
            firebase_admin.delete_app(self.firebase_app)
            logger.info("Firebase app closed")
        self.firebase_app = None
        self.owns_firebase_app = False


def init_firebase_app(settings: Settings) -> Tuple[firebase_admin.App, bool]:
    """
    Initialise (ou récupère) l'app Firebase par défaut.

    Returns:
        (app, created): created vaut False si l'app existait déjà
    """
    try:
        return firebase_admin.get_app(), False
    except ValueError:
        pass

    info = settings.service_account_info()
    cred = credentials.Certificate(info) if info else credentials.ApplicationDefault()
    options = {}
    if settings.sp_firebase_database_url:
        options["databaseURL"] = settings.sp_firebase_database_url

    app = firebase_admin.initialize_app(cred, options)
    logger.info("Firebase app initialised (database: %s)", settings.sp_firebase_database_url)
    return app, True


def build_resolver(settings: Settings, store: RoleStore) -> RoleResolver:
    return RoleResolver(
        store,
        supplier_collection=settings.sp_supplier_collection,
        admin_collection=settings.sp_admin_collection,
        admin_indexed_query=settings.sp_admin_indexed_query,
    )


def build_context(
    settings: Settings,
    identity_provider: Optional[IdentityProvider] = None,
    store: Optional[RoleStore] = None,
) -> AppContext:
    """Wire the collaborators described by ``settings``; explicit ones win."""
    fb_app = None
    owns_app = False
    if store is None and settings.sp_store_backend == "memory":
        store = InMemoryRoleStore()

    # L'authentification reste déléguée à Firebase même avec le store mémoire.
    if identity_provider is None or store is None:
        fb_app, owns_app = init_firebase_app(settings)
        if identity_provider is None:
            identity_provider = FirebaseIdentityProvider(fb_app)
        if store is None:
            store = FirebaseRoleStore(fb_app)

    return AppContext(
        settings=settings,
        identity_provider=identity_provider,
        store=store,
        resolver=build_resolver(settings, store),
        firebase_app=fb_app,
        owns_firebase_app=owns_app,
    )


def get_context(request: Request) -> AppContext:
    return request.app.state.context
