import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from hospital import config
from hospital.db import init_db
from hospital.routes import auth, booking, contact, departments, media, pages, payments, slots


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()

    # Seed departments and doctors on an empty database
    try:
        from seed_data import seed_data
        seed_data()
    except Exception as e:
        logger.warning(f"Failed to seed data: {e}")

    yield


app = FastAPI(title=f"{config.HOSPITAL_NAME} API", docs_url="/docs", redoc_url="/redoc", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report missing or malformed fields as 400 with a readable message"""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query"))
        problems.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    logger.info(f"Rejected {request.method} {request.url.path}: {problems}")
    return JSONResponse(status_code=400, content={"detail": "; ".join(problems) or "Invalid request"})


app.include_router(auth.router, prefix="/api")
app.include_router(booking.router, prefix="/api")
app.include_router(contact.router, prefix="/api")
app.include_router(slots.router, prefix="/api")
app.include_router(departments.router, prefix="/api")
app.include_router(media.router, prefix="/api")
app.include_router(payments.router, prefix="/api")
app.include_router(pages.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat() + "Z"}


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("hospital.main:app", host="0.0.0.0", port=port)
