import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from homeschool.core import config
from homeschool.core.errors import AppError, InternalError
from homeschool.database import init_db
from homeschool.routes import (
    assignment_routes,
    auth_routes,
    student_assignment_routes,
    student_routes,
    subject_routes,
    teacher_routes,
    user_routes,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

app = FastAPI(title='Homeschool Helper API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


def error_response(message, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={'error': {'message': message, 'status': status_code}},
    )


def flatten_validation_errors(exc: RequestValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        messages.append(f"{location}: {error.get('msg')}" if location else error.get('msg'))
    return messages


@app.exception_handler(AppError)
def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    logger.debug('%s %s -> %s %s', request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(flatten_validation_errors(exc), status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.detail, exc.status_code)


@app.exception_handler(SQLAlchemyError)
def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception('Database error on %s %s', request.method, request.url.path)
    error = InternalError()
    return error_response(error.message, error.status_code)


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return error_response('Internal Server Error', status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.get('/')
def root():
    return {'status': 'Homeschool Helper API Running'}


app.include_router(auth_routes.router)
app.include_router(user_routes.router)
app.include_router(teacher_routes.router)
app.include_router(student_routes.router)
app.include_router(subject_routes.router)
app.include_router(assignment_routes.router)
app.include_router(student_assignment_routes.router)
