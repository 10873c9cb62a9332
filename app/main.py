from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import CORS_ORIGINS
from app.core.logging_config import configure_logging
from app.core.responses import failure
from app.database import create_db_and_tables
from app.models import account, billing, horse, lesson, performed_service, session, user, verification
from app.routers import auth
from app.routers import billings, horses, lessons, services
from app.routers import users
from app.schemas.common import error_details

configure_logging()

app = FastAPI(title="Riding school API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(billings.router)
app.include_router(horses.router)
app.include_router(lessons.router)
app.include_router(services.router)
app.include_router(users.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return failure("Invalid data", 400, details=error_details(exc))


@app.on_event("startup")
def on_startup():
    create_db_and_tables()


@app.get("/")
def root():
    return {"message": "Riding school API running"}
