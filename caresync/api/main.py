import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware

from caresync.api.routes_health import router as health_router
from caresync.api.routes_metrics import router as metrics_router
from caresync.api.routes_reminders import router as reminders_router
from caresync.api.routes_sms import router as sms_router
from caresync.core.config import settings
from caresync.core.errors import register_error_handlers
from caresync.core.logger import init_logging
from caresync.core.monitoring import init_monitoring
from caresync.db.session import SessionLocal, check_database, init_db
from caresync.services.reminder_dispatcher import ReminderDispatcher
from caresync.services.reminder_store import ReminderStore
from caresync.services.sms_gateway import SMSGateway, build_gateway
from caresync.workers.dispatch_loop import DispatchLoop

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        check_database()
    except SQLAlchemyError as exc:
        logger.critical("Reminder store unreachable at startup: %s", exc)
        raise RuntimeError("Reminder store unreachable") from exc
    init_db()
    logger.info("Reminder store connected")

    loop: DispatchLoop | None = None
    if settings.REMINDER_SCHEDULER == "inprocess":
        dispatcher = ReminderDispatcher(store=app.state.reminder_store, gateway=app.state.sms_gateway)
        loop = DispatchLoop(dispatcher, interval_seconds=settings.REMINDER_DISPATCH_INTERVAL_SECONDS)
        app.state.dispatcher = dispatcher
        loop.start()
    else:
        logger.info("In-process reminder dispatch disabled (REMINDER_SCHEDULER=%s)", settings.REMINDER_SCHEDULER)
    try:
        yield
    finally:
        if loop is not None:
            await loop.stop()


def create_app(
    store: ReminderStore | None = None,
    gateway: SMSGateway | None = None,
) -> FastAPI:
    init_logging()
    init_monitoring()

    is_production = settings.ENV.lower() == "prod"
    app = FastAPI(
        title=settings.APP_NAME,
        debug=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        lifespan=lifespan,
    )
    app.state.reminder_store = store or ReminderStore(SessionLocal)
    app.state.sms_gateway = gateway or build_gateway()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(reminders_router)
    app.include_router(sms_router)
    app.include_router(metrics_router)
    return app


app = create_app()
