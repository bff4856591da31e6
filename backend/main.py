from fastapi import FastAPI
from fastapi import Request   # Incoming HTTP request received by server.
from fastapi.middleware.cors import CORSMiddleware
import os
import logging
import uvicorn
from fastapi.responses import JSONResponse # paylaod returned by a web service from a  request.
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from config import get_settings
from api import content, jobs, metrics # importing routers

logger = logging.getLogger("uvicorn.error")

settings = get_settings()
frontend_url = settings.frontend_url
logging.basicConfig(level=logging.INFO)
logging.info(f"Allowed frontend URL: {frontend_url}")
logging.info(f"Environment: {settings.environment}, OpenAI key {settings.api_key_status}, "
             f"force regenerate: {settings.force_regenerate}")

app = FastAPI(title="Job Application Tracker")

origins = [frontend_url]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],  # ALlow all HTTP methods (GET, POST, etc..)
    allow_headers=["*"],
    expose_headers=["X-AI-Status", "X-API-Key-Status"],
)


@app.exception_handler(Exception)
async def global_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    response = JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occured"}
    )
    #Manually add CORS headers
    response.headers["Access-Control-Allow-Origin"] = frontend_url
    return response

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f'Validation Error: {exc}')
    response = JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())},)
    response.headers["Access-Control-Allow-Origin"] = frontend_url
    return response


@app.get("/health")
def health():
    return {"status": "ok"}

#Include routers from separate modules. metrics first so /summary is not read as a job id
app.include_router(metrics.router)
app.include_router(jobs.router)
app.include_router(content.router)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    host = os.environ.get("HOST", "localhost")
    uvicorn.run("main:app", host=host, port=port, reload=settings.environment == "development")
