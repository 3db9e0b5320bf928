# main.py (root)
import os
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

load_dotenv()

from coursehub.config.database import init_connections, close_connections
from coursehub.api.middleware.session_middleware import session_middleware
from coursehub.api.routes.course_routes import router as course_router
from coursehub.api.routes.user_routes import router as user_router
from coursehub.api.routes.educator_routes import router as educator_router
from coursehub.api.routes.stats_routes import router as stats_router
from coursehub.api.routes.webhook_routes import router as webhook_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_connections()
    except Exception as e:
        logging.error(f"⚠️ Error initializing connections: {e}")
    yield
    close_connections()


app = FastAPI(title="CourseHub API", version="1.0.0",
              description="Online course marketplace: catalog, purchases, enrollments and progress.",
              lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Resolve the caller from the bearer token before protected routes run
app.middleware("http")(session_middleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # business validation failures are reported inline, never as HTTP errors
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    detail = f"{field}: {first.get('msg')}" if field else first.get("msg", "")
    return JSONResponse(status_code=200, content={"success": False, "message": f"Invalid details ({detail})"})


@app.get("/", tags=["Health"])
async def root():
    return {"message": "✅ CourseHub API is up and running."}


@app.get("/api/ping", tags=["Health"])
async def ping():
    return {"status": "ok", "message": "pong"}


app.include_router(webhook_router)
app.include_router(course_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(educator_router, prefix="/api")
app.include_router(stats_router, prefix="/api")


if __name__ == "__main__":
    port = int(os.getenv("PORT", 5000))
    uvicorn.run(app, host="0.0.0.0", port=port)
