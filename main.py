"""
Main application entry point for the Contacts API.

This module initializes the FastAPI application, configures logging and
CORS, registers the JSON error envelope handlers, initializes the rate
limiter and includes routers for users, contacts and addresses.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from contacts_api import addresses, contacts, models, users
from contacts_api.core import configure_logging, get_settings
from contacts_api.database import engine
from contacts_api.errors import http_exception_handler, validation_exception_handler
from contacts_api.limiter import close_limiter, init_limiter

configure_logging()

# Create tables (migrations are out of scope)
models.Base.metadata.create_all(bind=engine)

settings = get_settings()

# Initialize FastAPI application
app = FastAPI(title="Contacts API")

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.on_event("startup")
async def startup_event():
    """
    FastAPI startup event handler.

    Initializes the rate limiter with its Redis backend. Requests are
    served without limits when Redis is unavailable.
    """
    await init_limiter(settings)


@app.on_event("shutdown")
async def shutdown_event():
    await close_limiter()


# Include routers for application areas
app.include_router(users.router)
app.include_router(contacts.router)
app.include_router(addresses.router)


@app.get("/")
def root():
    """
    Root endpoint for the API.

    Returns:
        dict: JSON message with information about the API
    """
    return {"msg": "Contacts API. Visit /docs for Swagger UI"}
