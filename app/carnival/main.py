import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from carnival import config
from carnival.controller.payment_gateway import build_payment_gateway
from carnival.errors import CarnivalError
from carnival.response_model import ErrorResponseModel, CarnivalErrorResponse

from carnival.routes.auth_route import router as AuthRouter
from carnival.routes.band_route import router as BandRouter
from carnival.routes.booking_route import router as BookingRouter
from carnival.routes.chat_route import router as ChatRouter
from carnival.routes.concierge_route import router as ConciergeRouter
from carnival.routes.event_route import router as EventRouter
from carnival.routes.family_route import router as FamilyRouter
from carnival.routes.hotel_route import router as HotelRouter
from carnival.routes.i18n_route import router as I18nRouter
from carnival.routes.live_update_route import router as LiveUpdateRouter
from carnival.routes.location_share_route import router as LocationShareRouter
from carnival.routes.map_route import router as MapRouter
from carnival.routes.payment_route import router as PaymentRouter
from carnival.routes.profile_route import router as ProfileRouter
from carnival.routes.safety_route import router as SafetyRouter

from carnival.database import Base, engine
from carnival.models.user_model import User, AuthSession, UserProfile
from carnival.models.event_model import Event, SavedEvent
from carnival.models.hotel_model import Hotel, HotelBooking
from carnival.models.band_model import Band, BandVote
from carnival.models.live_update_model import LiveUpdate
from carnival.models.safety_model import IncidentReport, FamilyGroup, FamilyMember, LocationShare, LostFoundItem
from carnival.models.chat_model import ChatSession, ChatMessage

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CarnivalXperience API")

app.state.payment_gateway = build_payment_gateway()


@app.exception_handler(CarnivalError)
async def carnival_error_handler(request: Request, exc: CarnivalError):
    # errors raised from dependencies, e.g. the session gate
    return CarnivalErrorResponse(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing"]
    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    else:
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"Invalid request: {field} {first.get('msg', '')}".strip()
    return ErrorResponseModel(message, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR")


app.include_router(AuthRouter, tags=["Auth"], prefix="/api/auth")
app.include_router(BandRouter, tags=["Band"], prefix="/api/bands")
app.include_router(BookingRouter, tags=["Booking"], prefix="/api/bookings")
app.include_router(EventRouter, tags=["Event"], prefix="/api/events")
app.include_router(HotelRouter, tags=["Hotel"], prefix="/api/hotels")
app.include_router(LiveUpdateRouter, tags=["LiveUpdate"], prefix="/api/live-updates")
app.include_router(PaymentRouter, tags=["Payment"], prefix="/api/payments")
app.include_router(ProfileRouter, tags=["Profile"], prefix="/api/profile")
app.include_router(I18nRouter, tags=["I18n"], prefix="/api/i18n")
app.include_router(SafetyRouter, tags=["Safety"], prefix="/api/safety")
app.include_router(FamilyRouter, tags=["Family"], prefix="/api/safety/family")
app.include_router(LocationShareRouter, tags=["LocationShare"], prefix="/api/safety/location-share")
app.include_router(ConciergeRouter, tags=["Concierge"], prefix="/api/concierge/sessions")
app.include_router(ChatRouter, tags=["Chat"], prefix="/api/chat")
app.include_router(MapRouter, tags=["Map"], prefix="/api/maps")


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok"}


# Create all tables (must be after importing all models)
# The server still starts when the database is unreachable
try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")
except Exception as e:
    logger.warning("Could not create database tables: %s", e)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS", "DELETE", "PUT", "PATCH"],
    allow_headers=["*"],
)
