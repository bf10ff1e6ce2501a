import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskist.core.config import Settings, validate_runtime_config
from taskist.database import create_db_engine, create_session_factory, init_database
from taskist.errors import TaskistError
from taskist.routes import auth_routes, task_routes

logger = logging.getLogger(__name__)

FIELD_ALIASES = {'due_date': 'dueDate'}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message})


def describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return 'Invalid request.'

    first = errors[0]
    if first.get('type') == 'json_invalid':
        return 'Request body must be valid JSON.'

    location = [str(part) for part in first.get('loc', ()) if part not in ('body', 'path', 'query')]
    if not location:
        return 'Request body must be a JSON object.'

    field = FIELD_ALIASES.get(location[-1], location[-1])
    return f'Invalid {field} value.'


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskistError)
    async def handle_taskist_error(request: Request, exc: TaskistError):
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return _error_response(400, describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.exception('Database error on %s %s', request.method, request.url.path)
        return _error_response(500, 'Internal server error.')


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    validate_runtime_config(settings)
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        try:
            init_database(engine)
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL.')
            engine.dispose()
            raise

        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info('Database ready at %s', engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(title='Taskist API', lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    @app.get('/')
    def root():
        return {'status': 'Taskist API running'}

    @app.get('/api/health')
    def health():
        return {'ok': True}

    app.include_router(auth_routes.router, prefix='/api/auth')
    app.include_router(task_routes.router, prefix='/api/tasks')

    return app
