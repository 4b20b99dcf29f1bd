import logging
from contextlib import asynccontextmanager

import httpx
import openai
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlmodel import Session
from starlette.middleware.cors import CORSMiddleware

from projectcode.api.main import api_router
from projectcode.core.config import settings
from projectcode.core.db import engine, init_db
from projectcode.exceptions import (
    CredentialRequiredError,
    FlowOutputError,
    InvalidDataUriError,
    InvalidWebhookPayloadError,
    MediaMissingError,
    NotFoundError,
    PaymentNotCapturedError,
    SignatureMismatchError,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    tag = route.tags[0] if route.tags else "default"
    return f"{tag}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    with Session(engine) as session:
        init_db(session)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.exception_handler(CredentialRequiredError)
async def credential_required_handler(request: Request, exc: CredentialRequiredError) -> JSONResponse:
    return _error(401, str(exc))


@app.exception_handler(SignatureMismatchError)
@app.exception_handler(PaymentNotCapturedError)
@app.exception_handler(InvalidDataUriError)
@app.exception_handler(InvalidWebhookPayloadError)
async def bad_request_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _error(400, str(exc))


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(404, str(exc))


@app.exception_handler(FlowOutputError)
@app.exception_handler(MediaMissingError)
async def flow_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Flow failed on %s: %s", request.url.path, exc)
    return _error(502, str(exc))


@app.exception_handler(openai.APIError)
@app.exception_handler(httpx.HTTPError)
async def upstream_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Upstream call failed on %s: %s", request.url.path, exc)
    return _error(502, "Upstream service error")


app.include_router(api_router, prefix=settings.API_V1_STR)
