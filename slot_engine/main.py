"""
Slot Engine - Clean Architecture Entry Point

Serves the slot machine over HTTP REST. Configuration comes from environment
variables (PORT, MONGODB_URL, RABBITMQ_URL, SENTRY_*).
"""
import os
import logging

import sentry_sdk
from tornado import web, ioloop
from sentry_sdk.integrations.tornado import TornadoIntegration

from slot_engine.config.container import Container
from slot_engine.presentation.http.handlers import (
    BetHandler,
    ConfirmWinHandler,
    HealthHandler,
    InputHandler,
    LeaderboardHandler,
    LoginHandler,
    MetricsHandler,
    PaytableHandler,
    PlayerBalanceHandler,
    PlayerStatsHandler,
    ReconcileHandler,
    RegisterHandler,
    SessionHandler,
    SessionsHandler,
    SimulateHandler,
    SpinHandler
)

logger = logging.getLogger(__name__)


def init_sentry():
    version = os.environ.get('APP_VERSION', '1.0.0')
    sentry_sdk.init(
        dsn=os.environ.get('SENTRY_DSN'),
        integrations=[TornadoIntegration()],
        traces_sample_rate=float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE', '1.0')),
        environment=os.environ.get('SENTRY_ENVIRONMENT', 'development'),
        profiles_sample_rate=float(os.environ.get('SENTRY_PROFILES_SAMPLE_RATE', '0')),
        debug=os.environ.get('SENTRY_DEBUG', 'false').lower() == 'true',
        release=f"slot-engine@{version}",
        auto_session_tracking=True
    )


def make_app(container=None):
    """Create Tornado application with Clean Architecture handlers"""
    container = container or Container.get_instance()
    sessions = {"registry": container.session_registry}

    routes = [
        (r"/health", HealthHandler),
        (r"/metrics", MetricsHandler),
        (r"/auth/register", RegisterHandler, {"auth_use_case": container.auth_use_case}),
        (r"/auth/login", LoginHandler, {"auth_use_case": container.auth_use_case}),
        (r"/sessions", SessionsHandler, sessions),
        (r"/sessions/([^/]+)", SessionHandler, sessions),
        (r"/sessions/([^/]+)/spin", SpinHandler, sessions),
        (r"/sessions/([^/]+)/input", InputHandler, sessions),
        (r"/sessions/([^/]+)/bet", BetHandler, sessions),
        (r"/sessions/([^/]+)/confirm-win", ConfirmWinHandler, sessions),
        (r"/sessions/([^/]+)/reconcile", ReconcileHandler, sessions),
        (r"/leaderboard", LeaderboardHandler, {"leaderboard": container.leaderboard}),
        (r"/players/([^/]+)/stats", PlayerStatsHandler, {"game_repository": container.game_repository}),
        (r"/players/([^/]+)/balance", PlayerBalanceHandler, sessions),
        (r"/simulate", SimulateHandler, {"simulate_use_case": container.simulate_use_case}),
        (r"/paytable", PaytableHandler, {"slot_symbols": container.slot_symbols}),
    ]

    return web.Application(routes)


def main():
    logging.basicConfig(level=logging.INFO)
    init_sentry()

    container = Container.get_instance()
    container.start()

    app = make_app(container)
    port = int(os.environ.get('PORT', 8082))
    app.listen(port)
    logger.info(f"Slot Engine started on :{port}")

    try:
        ioloop.IOLoop.current().start()
    finally:
        container.shutdown()


if __name__ == "__main__":
    main()
