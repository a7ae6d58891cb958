import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from petsocial.config import settings
from petsocial.dependencies import _init_firebase
from petsocial.exceptions import InvalidArgument, NotFoundError, PetSocialError
from petsocial.routers import content, hashtags, health, nearby, posts


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _init_firebase()
    yield


app = FastAPI(
    title="PetSocial API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


_STATUS_CODES = {
    InvalidArgument: (400, "invalid_argument"),
    NotFoundError: (404, "not_found"),
}


@app.exception_handler(PetSocialError)
async def petsocial_error_handler(request: Request, exc: PetSocialError):
    status_code, error = _STATUS_CODES.get(type(exc), (500, "internal_error"))
    if status_code >= 500:
        logging.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": exc.message, "details": exc.context},
    )


app.include_router(health.router)
app.include_router(nearby.router)
app.include_router(posts.router)
app.include_router(hashtags.router)
app.include_router(content.router)
