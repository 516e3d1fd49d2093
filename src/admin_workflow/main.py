import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from admin_workflow.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from admin_workflow.errors import AdminWorkflowError, StoreError
from admin_workflow.utils.mongo_client import close_db, init_db


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup

    client = await init_db()
    logger.info("Database initialized successfully")
    yield

    # Shutdown
    await close_db(client)
    logger.info("Application shutting down")


app = FastAPI(title="Admin Workflow Service", lifespan=lifespan)


@app.exception_handler(AdminWorkflowError)
async def admin_workflow_error_handler(request: Request, exc: AdminWorkflowError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    logger.error(
        f"Store error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    store_error = StoreError()
    return JSONResponse(
        status_code=store_error.status_code, content={"message": store_error.message}
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    return JSONResponse(status_code=500, content={"message": "Server error"})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Custom handler for request validation errors that includes field descriptions
    """
    errors = []
    for error in exc.errors():
        error_detail = {
            "type": error["type"],
            "loc": error["loc"],
            "msg": error["msg"],
            "input": error.get("input"),
        }
        errors.append(error_detail)

    return JSONResponse(
        status_code=422,
        content={"message": "Request Validation Error", "detail": errors},
    )


# add a /health endpoint
@app.get("/health")
async def health_check():
    """
    Health check endpoint to verify if the application is running.
    """
    return {"status": "ok", "message": "Application is running"}


from admin_workflow.api.routes.admin import router as admin_router

app.include_router(admin_router, prefix=settings.API_PREFIX)

"""
USAGE:
- From the repository root, after `pip install -e .`
- run `uvicorn admin_workflow.main:app --reload`
"""
