from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from api.routes.auth_routes import auth_routes
from api.routes.member_routes import member_routes
from api.routes.thread_routes import thread_routes
from api.routes.post_routes import post_routes
from api.routes.comment_routes import comment_routes
from api.routes.reaction_routes import reaction_routes
from api.routes.vote_routes import vote_routes
from api.routes.moderation_routes import moderation_routes
from api.routes.appeal_routes import appeal_routes
from api.routes.notification_routes import notification_routes
from api.routes.attendance_routes import attendance_routes
from api.config import create_db
from api.utils.logger import configure_logging, set_request_id, clear_request_id
from fastapi import Request
from starlette.responses import Response, JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder

app = FastAPI(title="Discussion Board")
logger = configure_logging()
create_db()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def request_logger(request: Request, call_next):
    # The harness sends x-request-id so client and server log lines correlate.
    rid = set_request_id(request.headers.get("x-request-id"))
    try:
        logger.info("request start method=%s path=%s client=%s", request.method, request.url.path, request.client)
        response: Response = await call_next(request)
        logger.info("request end status=%s method=%s path=%s", response.status_code, request.method, request.url.path)
        response.headers["x-request-id"] = rid
        return response
    except Exception:
        logger.exception("request error method=%s path=%s", request.method, request.url.path)
        raise
    finally:
        clear_request_id()


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    # Log server-side errors with stack traces; client errors as warnings.
    if exc.status_code >= 500:
        logger.exception("http error status=%s method=%s path=%s detail=\n%s", exc.status_code, request.method, request.url.path, exc.detail)
    else:
        logger.warning("http error status=%s method=%s path=%s detail=\n%s", exc.status_code, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("validation error method=%s path=%s errors=\n%s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Never leak internal exception details to clients.
    logger.exception("unhandled error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors may carry exception objects in ``ctx``; keep them JSON-safe."""
    return jsonable_encoder(exc.errors(), custom_encoder={Exception: str})


@app.get("/")
def read_root():
    return {"message": "Discussion board is healthy"}

app.include_router(auth_routes, prefix="/auth")
app.include_router(member_routes, prefix="/board")
app.include_router(thread_routes, prefix="/board")
app.include_router(post_routes, prefix="/board")
app.include_router(comment_routes, prefix="/board")
app.include_router(reaction_routes, prefix="/board")
app.include_router(vote_routes, prefix="/board")
app.include_router(moderation_routes, prefix="/board")
app.include_router(appeal_routes, prefix="/board")
app.include_router(notification_routes, prefix="/board")
app.include_router(attendance_routes, prefix="/board")

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
