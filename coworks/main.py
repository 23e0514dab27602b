from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coworks.api.routes import (
    admin_analytics,
    admin_auth,
    admin_bookings,
    admin_panel,
    auth,
    bookings,
    images,
    payments,
    profile,
    spaces,
)
from coworks.services.transitions import InvalidTransition

# ⭐ Import logging system
from coworks.core.logging_config import get_logger

logger = get_logger()

app = FastAPI(
    title="Coworks Booking API",
    version="1.0.0",
    description="API for Coworking Spaces, Bookings, Payments & Admin Back Office"
)


# ⭐ Request Logging Middleware
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code} {request.url}")
        return response

    except Exception as e:
        logger.error(f"ERROR: {request.url} -> {str(e)}")
        raise e


# Status changes outside the transition table
@app.exception_handler(InvalidTransition)
async def invalid_transition_handler(request: Request, exc: InvalidTransition):
    logger.warning(f"REJECTED: {request.url} -> {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# ⭐ CORS (important for frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Can restrict later for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------- ROUTERS --------
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(spaces.router)
app.include_router(bookings.router)
app.include_router(payments.router)
app.include_router(admin_auth.router)
app.include_router(admin_panel.router)
app.include_router(admin_bookings.router)
app.include_router(admin_analytics.router)
app.include_router(images.router)


@app.get("/", tags=["Root"])
def root():
    return {"message": "Backend running successfully"}
