"""HTTP REST handlers for the slot engine"""
import json
from concurrent.futures import ThreadPoolExecutor

import sentry_sdk
from tornado import ioloop, web
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from slot_engine.application.dto.auth_request import LoginRequest, RegisterRequest
from slot_engine.application.dto.bet_request import BetRequest
from slot_engine.application.dto.simulate_request import SimulateRequest
from slot_engine.application.ports.game_repository_port import GameRepositoryPort
from slot_engine.application.use_cases.authenticate_use_case import AuthenticateUseCase
from slot_engine.application.use_cases.game_session import GameSessionRegistry
from slot_engine.application.use_cases.leaderboard_use_case import LeaderboardUseCase
from slot_engine.application.use_cases.simulate_rtp_use_case import SimulateRtpUseCase
from slot_engine.domain.entities.slot_symbols import SlotSymbols
from slot_engine.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

# Simulations never run on the IOLoop thread
SIMULATION_EXECUTOR = ThreadPoolExecutor(max_workers=2, thread_name_prefix="simulate")

ERROR_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


class JsonHandler(web.RequestHandler):
    """Shared JSON body parsing and error mapping"""

    def json_body(self) -> dict:
        if not self.request.body:
            return {}
        try:
            data = json.loads(self.request.body)
        except json.JSONDecodeError as e:
            raise ValidationError(f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValidationError("JSON object expected")
        return data

    def write_error_response(self, error: Exception):
        for error_type, status in ERROR_STATUS:
            if isinstance(error, error_type):
                self.set_status(status)
                break
        else:
            sentry_sdk.capture_exception(error)
            self.set_status(500)
        self.write({"error": str(error)})

    def continue_transaction(self, op: str, name: str):
        """Continue an upstream trace when the caller sent one"""
        sentry_trace = self.request.headers.get("sentry-trace", "")
        baggage = self.request.headers.get("baggage", "")
        if sentry_trace:
            transaction = sentry_sdk.continue_trace({
                "sentry-trace": sentry_trace,
                "baggage": baggage
            }, op=op, name=name)
            return sentry_sdk.start_transaction(transaction)
        return sentry_sdk.start_transaction(op=op, name=name)


class HealthHandler(web.RequestHandler):
    """Health check endpoint"""

    def get(self):
        self.write({"status": "ok"})


class MetricsHandler(web.RequestHandler):
    """Prometheus metrics endpoint"""

    def get(self):
        self.set_header('Content-Type', CONTENT_TYPE_LATEST)
        self.write(generate_latest())


class RegisterHandler(JsonHandler):
    """POST /auth/register"""

    def initialize(self, auth_use_case: AuthenticateUseCase):
        self.auth_use_case = auth_use_case

    async def post(self):
        try:
            request = RegisterRequest.from_snake_case(self.json_body())
            account = self.auth_use_case.register(request.username, request.pin, request.confirm_pin)
            self.set_status(201)
            self.write(account.to_public_dict())
        except Exception as e:
            self.write_error_response(e)


class LoginHandler(JsonHandler):
    """POST /auth/login"""

    def initialize(self, auth_use_case: AuthenticateUseCase):
        self.auth_use_case = auth_use_case

    async def post(self):
        try:
            request = LoginRequest.from_snake_case(self.json_body())
            account = self.auth_use_case.login(request.username, request.pin)
            sentry_sdk.set_user({"id": account.id, "username": account.username})
            self.write(account.to_public_dict())
        except Exception as e:
            self.write_error_response(e)


class SessionsHandler(JsonHandler):
    """POST /sessions - open (or resume) a game session"""

    def initialize(self, registry: GameSessionRegistry):
        self.registry = registry

    async def post(self):
        try:
            user_id = self.json_body().get("user_id")
            if not user_id:
                raise ValidationError("user_id is required")
            session = self.registry.open_session(str(user_id))
            self.write(session.snapshot())
        except Exception as e:
            self.write_error_response(e)


class SessionHandler(JsonHandler):
    """GET/DELETE /sessions/<user_id>"""

    def initialize(self, registry: GameSessionRegistry):
        self.registry = registry

    async def get(self, user_id):
        try:
            self.write(self.registry.get(user_id).snapshot())
        except Exception as e:
            self.write_error_response(e)

    async def delete(self, user_id):
        try:
            if not self.registry.close_session(user_id):
                raise NotFoundError(f"No session for user: {user_id}")
            self.set_status(204)
        except Exception as e:
            self.write_error_response(e)


class SpinHandler(JsonHandler):
    """POST /sessions/<user_id>/spin"""

    def initialize(self, registry: GameSessionRegistry):
        self.registry = registry

    async def post(self, user_id):
        with self.continue_transaction("game.spin", "spin"):
            try:
                sentry_sdk.set_user({"id": user_id})
                session = self.registry.get(user_id)
                accepted = session.spin()
                self.write({"accepted": accepted, "session": session.snapshot()})
            except Exception as e:
                self.write_error_response(e)


class InputHandler(JsonHandler):
    """POST /sessions/<user_id>/input - keyboard shortcut"""

    def initialize(self, registry: GameSessionRegistry):
        self.registry = registry

    async def post(self, user_id):
        try:
            key = self.json_body().get("key", "")
            session = self.registry.get(user_id)
            accepted = session.handle_key(str(key))
            self.write({"accepted": accepted, "session": session.snapshot()})
        except Exception as e:
            self.write_error_response(e)


class BetHandler(JsonHandler):
    """PUT /sessions/<user_id>/bet"""

    def initialize(self, registry: GameSessionRegistry):
        self.registry = registry

    async def put(self, user_id):
        try:
            request = BetRequest.from_snake_case(self.json_body())
            session = self.registry.get(user_id)
            if request.ratio is not None:
                accepted = session.set_bet_ratio(request.ratio)
            else:
                accepted = session.set_bet(request.amount)
            self.write({"accepted": accepted, "session": session.snapshot()})
        except Exception as e:
            self.write_error_response(e)


class ConfirmWinHandler(JsonHandler):
    """POST /sessions/<user_id>/confirm-win - dismiss the win popup"""

    def initialize(self, registry: GameSessionRegistry):
        self.registry = registry

    async def post(self, user_id):
        try:
            session = self.registry.get(user_id)
            accepted = session.confirm_win()
            self.write({"accepted": accepted, "session": session.snapshot()})
        except Exception as e:
            self.write_error_response(e)


class ReconcileHandler(JsonHandler):
    """POST /sessions/<user_id>/reconcile - retry persisting the balance"""

    def initialize(self, registry: GameSessionRegistry):
        self.registry = registry

    async def post(self, user_id):
        try:
            session = self.registry.get(user_id)
            accepted = session.reconcile()
            self.write({"accepted": accepted, "session": session.snapshot()})
        except Exception as e:
            self.write_error_response(e)


class LeaderboardHandler(JsonHandler):
    """GET /leaderboard"""

    def initialize(self, leaderboard: LeaderboardUseCase):
        self.leaderboard = leaderboard

    async def get(self):
        try:
            self.write(self.leaderboard.get(self.get_argument("user_id", None)))
        except Exception as e:
            self.write_error_response(e)


class PlayerStatsHandler(JsonHandler):
    """GET /players/<user_id>/stats"""

    def initialize(self, game_repository: GameRepositoryPort):
        self.game_repository = game_repository

    async def get(self, user_id):
        try:
            try:
                hours = int(self.get_argument("hours", "1"))
            except ValueError as e:
                raise ValidationError("hours must be an integer") from e
            stats = self.game_repository.get_session_stats(user_id, hours=hours)
            self.write({"user_id": user_id, "hours": hours, "stats": stats})
        except Exception as e:
            self.write_error_response(e)


class PlayerBalanceHandler(JsonHandler):
    """PUT /players/<user_id>/balance - external balance edit"""

    def initialize(self, registry: GameSessionRegistry):
        self.registry = registry

    async def put(self, user_id):
        try:
            try:
                balance = int(self.json_body()["balance"])
            except (KeyError, TypeError, ValueError) as e:
                raise ValidationError("balance must be an integer") from e
            balance = self.registry.adjust_balance(user_id, balance)
            self.write({"user_id": user_id, "balance": balance})
        except Exception as e:
            self.write_error_response(e)


class SimulateHandler(JsonHandler):
    """POST /simulate - Monte Carlo RTP report"""

    def initialize(self, simulate_use_case: SimulateRtpUseCase):
        self.simulate_use_case = simulate_use_case

    async def post(self):
        try:
            try:
                request = SimulateRequest.from_snake_case(self.json_body())
            except (TypeError, ValueError) as e:
                raise ValidationError(f"invalid simulation request: {e}") from e
            result = await ioloop.IOLoop.current().run_in_executor(
                SIMULATION_EXECUTOR, self.simulate_use_case.execute, request
            )
            self.write(result.to_snake_case())
        except Exception as e:
            self.write_error_response(e)


class PaytableHandler(web.RequestHandler):
    """GET /paytable"""

    def initialize(self, slot_symbols: SlotSymbols):
        self.slot_symbols = slot_symbols

    def get(self):
        self.write(self.slot_symbols.to_dict())
