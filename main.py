import logging
import os
import re
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from database import InMemoryDatabase
from errors import LedgerError
from ledger import TurfLedger
from schemas import Booking as BookingSchema
from schemas import BookingStatus, Role
from schemas import Review as ReviewSchema
from schemas import Turf as TurfSchema
from schemas import User as UserSchema
from seed import seed

logger = logging.getLogger(__name__)

APP_NAME = "TurfLedger"
TIME_SLOT_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


# ----------------------------------------------------------------------------
# Request Models
# ----------------------------------------------------------------------------
def _check_iso_date(value: str) -> str:
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValueError("date must be YYYY-MM-DD")
    return value


def _check_time_slot(value: str) -> str:
    if not TIME_SLOT_RE.match(value):
        raise ValueError("time slot must be HH:MM")
    return value


class SlotPayload(BaseModel):
    turf_id: str
    date: str
    time_slot: str

    @field_validator("date")
    @classmethod
    def valid_date(cls, v):
        return _check_iso_date(v)

    @field_validator("time_slot")
    @classmethod
    def valid_time_slot(cls, v):
        return _check_time_slot(v)


class CreateBookingPayload(SlotPayload):
    user_id: str


class BlockSlotPayload(SlotPayload):
    admin_id: str
    notes: Optional[str] = None


class DecisionPayload(BaseModel):
    admin_id: str
    status: BookingStatus


class RegisterPayload(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    contact_no: str = Field(..., min_length=1)
    dob: str

    @field_validator("dob")
    @classmethod
    def valid_dob(cls, v):
        if not re.match(r"^\d{2}/\d{2}/\d{4}$", v):
            raise ValueError("dob must be DD/MM/YYYY")
        try:
            born = datetime.strptime(v, "%d/%m/%Y")
        except ValueError:
            raise ValueError("dob is not a real date")
        if born >= datetime.now():
            raise ValueError("dob must be in the past")
        return v


class LoginPayload(BaseModel):
    email: str = Field(..., min_length=1)
    contact_no: str = Field(..., min_length=1)


class ReviewPayload(BaseModel):
    turf_id: str
    user_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str

    @field_validator("comment")
    @classmethod
    def non_empty_comment(cls, v):
        if not v.strip():
            raise ValueError("comment must not be empty")
        return v


class SlotsOut(BaseModel):
    turf_id: str
    date: str
    slots: List[str]


class SummaryOut(BaseModel):
    counts: dict
    pending_bookings: List[BookingSchema]
    blocked_slots: List[BookingSchema]
    players: List[UserSchema]


# ----------------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------------
def get_ledger(request: Request) -> TurfLedger:
    return request.app.state.ledger


def require_admin(ledger: TurfLedger, user_id: str) -> UserSchema:
    user = ledger.get_user(user_id)
    if user.role != Role.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def build_ledger() -> TurfLedger:
    db = InMemoryDatabase()
    if os.getenv("SEED_DATA", "1") != "0":
        seed(db)
    return TurfLedger(db)


# ----------------------------------------------------------------------------
# App
# ----------------------------------------------------------------------------
def create_app(ledger: Optional[TurfLedger] = None) -> FastAPI:
    app = FastAPI(title=f"{APP_NAME} API", description="Turf slot booking and approval backend")
    app.state.ledger = ledger if ledger is not None else build_ledger()

    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(LedgerError, ledger_error_handler)

    # ------------------------------------------------------------------------
    # Root & Health
    # ------------------------------------------------------------------------
    @app.get("/")
    def read_root():
        return {"message": f"{APP_NAME} Backend Running"}

    @app.get("/test")
    def test_store(ledger: TurfLedger = Depends(get_ledger)):
        return {
            "backend": "✅ Running",
            "database": "✅ In-memory",
            "collections": ledger.collection_counts(),
        }

    # ------------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------------
    @app.post("/auth/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
    def register(payload: RegisterPayload, ledger: TurfLedger = Depends(get_ledger)):
        return ledger.register_user(payload.name, payload.email, payload.contact_no, payload.dob)

    @app.post("/auth/login", response_model=UserSchema)
    def login(payload: LoginPayload, ledger: TurfLedger = Depends(get_ledger)):
        user = ledger.sign_in_user(payload.email, payload.contact_no)
        if user is None:
            raise HTTPException(status_code=400, detail="Wrong details")
        return user

    @app.get("/users", response_model=List[UserSchema])
    def list_users(role: Optional[Role] = None, ledger: TurfLedger = Depends(get_ledger)):
        return ledger.list_users(role)

    # ------------------------------------------------------------------------
    # Turf Endpoints
    # ------------------------------------------------------------------------
    @app.get("/turfs", response_model=List[TurfSchema])
    def list_turfs(ledger: TurfLedger = Depends(get_ledger)):
        return ledger.list_turfs()

    @app.get("/turfs/{turf_id}", response_model=TurfSchema)
    def get_turf(turf_id: str, ledger: TurfLedger = Depends(get_ledger)):
        return ledger.get_turf(turf_id)

    @app.get("/turfs/{turf_id}/slots", response_model=SlotsOut)
    def get_slots(
        turf_id: str,
        date: str = Query(..., pattern=r"^\d{4}-\d{2}-\d{2}$"),
        ledger: TurfLedger = Depends(get_ledger),
    ):
        return SlotsOut(turf_id=turf_id, date=date, slots=ledger.available_slots(turf_id, date))

    @app.get("/turfs/{turf_id}/reviews", response_model=List[ReviewSchema])
    def list_reviews(turf_id: str, ledger: TurfLedger = Depends(get_ledger)):
        ledger.get_turf(turf_id)
        return ledger.reviews_for_turf(turf_id)

    @app.post("/reviews", response_model=ReviewSchema, status_code=status.HTTP_201_CREATED)
    def add_review(payload: ReviewPayload, ledger: TurfLedger = Depends(get_ledger)):
        ledger.get_turf(payload.turf_id)
        ledger.get_user(payload.user_id)
        return ledger.add_review(payload.turf_id, payload.user_id, payload.rating, payload.comment)

    # ------------------------------------------------------------------------
    # Booking Endpoints
    # ------------------------------------------------------------------------
    @app.post("/bookings", response_model=BookingSchema, status_code=status.HTTP_201_CREATED)
    def create_booking(payload: CreateBookingPayload, ledger: TurfLedger = Depends(get_ledger)):
        return ledger.create_booking(payload.turf_id, payload.date, payload.time_slot, payload.user_id)

    @app.get("/bookings", response_model=List[BookingSchema])
    def list_bookings(
        turf_id: Optional[str] = None,
        user_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
        ledger: TurfLedger = Depends(get_ledger),
    ):
        return ledger.list_bookings(turf_id=turf_id, user_id=user_id, status=status)

    @app.get("/bookings/me", response_model=List[BookingSchema])
    def my_bookings(user_id: str, ledger: TurfLedger = Depends(get_ledger)):
        ledger.get_user(user_id)
        return ledger.player_bookings(user_id)

    # ------------------------------------------------------------------------
    # Admin Dashboard
    # ------------------------------------------------------------------------
    @app.post("/admin/bookings/{booking_id}/status", response_model=BookingSchema)
    def decide_booking(booking_id: str, payload: DecisionPayload, ledger: TurfLedger = Depends(get_ledger)):
        require_admin(ledger, payload.admin_id)
        return ledger.update_booking_status(booking_id, payload.status)

    @app.post("/admin/blocks", response_model=BookingSchema, status_code=status.HTTP_201_CREATED)
    def block_slot(payload: BlockSlotPayload, ledger: TurfLedger = Depends(get_ledger)):
        require_admin(ledger, payload.admin_id)
        booking = ledger.block_slot(payload.turf_id, payload.date, payload.time_slot, payload.admin_id, payload.notes)
        if booking is None:
            raise HTTPException(status_code=409, detail="Slot already blocked")
        return booking

    @app.delete("/admin/blocks")
    def unblock_slot(
        turf_id: str,
        date: str,
        time_slot: str,
        admin_id: str,
        ledger: TurfLedger = Depends(get_ledger),
    ):
        require_admin(ledger, admin_id)
        return {"removed": ledger.unblock_slot(turf_id, date, time_slot)}

    @app.get("/admin/summary", response_model=SummaryOut)
    def admin_summary(admin_id: str, ledger: TurfLedger = Depends(get_ledger)):
        require_admin(ledger, admin_id)
        return SummaryOut(
            counts=ledger.summary(),
            pending_bookings=ledger.pending_bookings(),
            blocked_slots=ledger.blocked_slots(),
            players=ledger.list_users(Role.PLAYER),
        )

    # ------------------------------------------------------------------------
    # Schema exposure
    # ------------------------------------------------------------------------
    @app.get("/schema")
    def get_schema():
        return {
            "turf": TurfSchema.model_json_schema(),
            "user": UserSchema.model_json_schema(),
            "booking": BookingSchema.model_json_schema(),
            "review": ReviewSchema.model_json_schema(),
        }

    return app


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
