from __future__ import annotations
import logging
from typing import List, Optional
from contextlib import asynccontextmanager
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from errors import DuplicateIdError, NotFoundError, StorageFailure, UpstreamError, ValidationError
from schemas import (
    CandidateInfoIn,
    PromptOut,
    RespondIn,
    RespondOut,
    ScreeningIn,
    ScreeningOut,
    SuccessOut,
)
from screening.prompts import SAMPLE_SCREENINGS, build_prompt
from screening.relay import ChatRelay
from screening.store import ScreeningStore, build_engine, seed_samples

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> ScreeningStore:
    return request.app.state.store


def get_relay(request: Request) -> ChatRelay:
    return request.app.state.relay


def _missing(*pairs) -> List[str]:
    return [name for name, value in pairs if value is None or not str(value).strip()]


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
@router.post("/screening", response_model=SuccessOut)
def create_screening(body: ScreeningIn, store: ScreeningStore = Depends(get_store)):
    """Create a screening; the system prompt is built from the job fields."""
    missing = _missing(
        ("id", body.id),
        ("jobTitle", body.job_title),
        ("companyName", body.company_name),
        ("jobDescription", body.job_description),
    )
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")

    if body.prompt and body.prompt.strip():
        prompt = body.prompt
    else:
        prompt = build_prompt(body.job_title, body.company_name, body.job_description)

    try:
        store.create(
            body.id,
            prompt,
            job_title=body.job_title,
            company_name=body.company_name,
            job_description=body.job_description,
            candidate_name=body.candidate_name,
            candidate_email=body.candidate_email,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DuplicateIdError as e:
        raise HTTPException(status_code=500, detail=e.message)
    except StorageFailure:
        raise HTTPException(status_code=500, detail="Failed to create screening")

    logger.info("Created screening %r", body.id)
    return SuccessOut()


@router.get("/screening/{screening_id}", response_model=PromptOut)
def get_screening(screening_id: str, store: ScreeningStore = Depends(get_store)):
    try:
        screening = store.get(screening_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except StorageFailure:
        raise HTTPException(status_code=500, detail="Failed to load screening")
    return PromptOut(prompt=screening.prompt)


@router.post("/screening/{screening_id}/respond", response_model=RespondOut)
def respond_to_screening(
    screening_id: str,
    body: RespondIn,
    store: ScreeningStore = Depends(get_store),
    relay: ChatRelay = Depends(get_relay),
):
    """Relay the conversation so far to the model and return its next message."""
    try:
        screening = store.get(screening_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except StorageFailure:
        raise HTTPException(status_code=500, detail="Failed to load screening")

    history = [m.model_dump(exclude_unset=True) for m in body.messages]
    try:
        reply = relay.respond(screening.prompt, history)
    except UpstreamError:
        raise HTTPException(status_code=500, detail="Something went wrong.")
    return {"reply": reply}


@router.post("/screening/{screening_id}/start", response_model=SuccessOut)
def start_screening(screening_id: str, body: CandidateInfoIn, store: ScreeningStore = Depends(get_store)):
    """Attach the candidate's name and email once the interview begins."""
    missing = _missing(("candidateName", body.candidate_name), ("candidateEmail", body.candidate_email))
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")

    try:
        store.update_candidate_info(screening_id, body.candidate_name, body.candidate_email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except StorageFailure:
        raise HTTPException(status_code=500, detail="Failed to update screening")
    return SuccessOut()


# Unauthenticated; exposes full prompts and candidate contact data
@router.get("/debug/screenings", response_model=List[ScreeningOut])
def list_screenings(limit: Optional[int] = None, store: ScreeningStore = Depends(get_store)):
    if limit is None:
        limit = config.DEBUG_LIST_LIMIT
    if limit <= 0:
        raise HTTPException(status_code=400, detail="limit must be > 0")
    limit = min(limit, config.DEBUG_LIST_LIMIT)

    try:
        return store.list_recent(limit)
    except StorageFailure:
        raise HTTPException(status_code=500, detail="Failed to list screenings")


# -------------------------------------------------------------------
# Error rendering: every failure becomes {"error": ...}
# -------------------------------------------------------------------
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.detail)
    else:
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    message = "Invalid request: " + "; ".join(problems)
    logger.warning("%s %s -> 400: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong."})


# -------------------------------------------------------------------
# Bootstrap
# -------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build missing dependencies, ensure the schema, optionally seed demo prompts."""
    if app.state.store is None:
        logger.info("Using database backend: %s", config.DATABASE_URL.split(":", 1)[0])
        app.state.store = ScreeningStore(build_engine(config.DATABASE_URL))
    if app.state.relay is None:
        if not config.OPENAI_API_KEY:
            logger.warning("OPENAI_API_KEY is not set; model calls will fail")
        app.state.relay = ChatRelay(
            api_key=config.OPENAI_API_KEY,
            model=config.MODEL_NAME,
            api_url=config.OPENAI_API_URL,
            timeout=config.OPENAI_TIMEOUT,
        )

    app.state.store.init_schema()
    if config.SEED_SAMPLE_SCREENINGS:
        seed_samples(app.state.store, SAMPLE_SCREENINGS)

    yield
    logger.info("Application shutting down.")
    app.state.store.dispose()
    app.state.relay.close()


def create_app(store: Optional[ScreeningStore] = None, relay: Optional[ChatRelay] = None) -> FastAPI:
    """Build the API. Store and relay are created from config at startup unless injected."""
    config.setup_logging()

    f_app = FastAPI(title="AI Screening Relay", lifespan=lifespan)
    f_app.state.store = store
    f_app.state.relay = relay

    f_app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    f_app.add_exception_handler(StarletteHTTPException, http_error_handler)
    f_app.add_exception_handler(RequestValidationError, validation_error_handler)
    f_app.add_exception_handler(Exception, unhandled_error_handler)

    f_app.include_router(router)
    return f_app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
