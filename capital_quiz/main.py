from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging
import random
import uuid
from time import perf_counter
from datetime import datetime, timezone
from .config import Settings, settings as default_settings
from .errors import QuizError
from .models import (
	AnswerFeedback,
	HealthResponse,
	HintResult,
	QuestionView,
	QuizResult,
	SuccessResponse,
	StartQuizRequest,
	StartQuizResponse,
	SubmitAnswerRequest,
	UseHintRequest,
)
from .services.dataset import CountryDataset, load_default_dataset
from .services.question_generator import QuestionGenerator
from .services.quiz_engine import QuizEngine
from .state import SessionStore

logger = logging.getLogger("capital_quiz")

def setup_logging(level: str) -> None:
	logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
	logger.setLevel(level)

def _timestamp() -> str:
	return datetime.now(timezone.utc).isoformat()

def _error_body(code: str, message: str) -> dict:
	return {"success": False, "error": {"code": code, "message": message}, "timestamp": _timestamp()}

def _success_body(data) -> dict:
	return {"success": True, "data": data, "metadata": {"timestamp": _timestamp()}}

def get_engine(request: Request) -> QuizEngine:
	return request.app.state.engine

router = APIRouter(prefix="/quiz")

@router.post("/start", response_model=SuccessResponse[StartQuizResponse])
def start_quiz(payload: StartQuizRequest, engine: QuizEngine = Depends(get_engine)):
	session = engine.start_quiz(payload.difficulty, payload.question_quantity)
	return _success_body(StartQuizResponse(
		id=session.id,
		difficulty=session.difficulty,
		question_quantity=session.question_quantity,
		hints_available=session.hints_available,
	))

@router.get("/{session_id}/question", response_model=SuccessResponse[QuestionView])
def get_current_question(session_id: uuid.UUID, engine: QuizEngine = Depends(get_engine)):
	return _success_body(engine.get_current_question(str(session_id)))

@router.post("/{session_id}/answer", response_model=SuccessResponse[AnswerFeedback])
def submit_answer(session_id: uuid.UUID, payload: SubmitAnswerRequest, engine: QuizEngine = Depends(get_engine)):
	return _success_body(engine.submit_answer(str(session_id), payload.question_id, payload.selected_answer, payload.time_spent))

@router.post("/{session_id}/hint", response_model=SuccessResponse[HintResult])
def use_hint(session_id: uuid.UUID, payload: UseHintRequest, engine: QuizEngine = Depends(get_engine)):
	return _success_body(engine.use_hint(str(session_id), payload.question_id, payload.hint_type))

@router.get("/{session_id}/results", response_model=SuccessResponse[QuizResult])
def get_results(session_id: uuid.UUID, engine: QuizEngine = Depends(get_engine)):
	return _success_body(engine.get_results(str(session_id)))

def build_engine(config: Settings, dataset: CountryDataset | None = None, rng: random.Random | None = None) -> QuizEngine:
	store = SessionStore(ttl_minutes=config.session_ttl_minutes, max_sessions=config.max_sessions)
	if rng is None and config.quiz_seed is not None:
		rng = random.Random(config.quiz_seed)
	generator = QuestionGenerator(dataset or load_default_dataset(), rng=rng)
	return QuizEngine(store, generator, initial_hints=config.initial_hints)

def create_app(config: Settings | None = None, engine: QuizEngine | None = None) -> FastAPI:
	config = config or default_settings
	setup_logging(config.log_level)

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		logger.info({
			"event": "api_startup",
			"utc_time": _timestamp(),
			"version": config.app_version,
			"api_prefix": config.api_prefix,
			"initial_hints": config.initial_hints,
			"session_ttl_minutes": config.session_ttl_minutes,
			"max_sessions": config.max_sessions,
			"seeded": config.quiz_seed is not None,
		})
		yield

	app = FastAPI(default_response_class=ORJSONResponse, version=config.app_version, lifespan=lifespan)
	app.state.engine = engine or build_engine(config)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=config.cors_origins,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	@app.middleware("http")
	async def timing_middleware(request: Request, call_next):
		start = perf_counter()
		response = await call_next(request)
		duration_ms = int((perf_counter() - start) * 1000)
		logger.debug({
			"event": "request_timing",
			"method": request.method,
			"path": request.url.path,
			"status_code": response.status_code,
			"duration_ms": duration_ms,
		})
		return response

	@app.exception_handler(QuizError)
	async def quiz_error_handler(request: Request, exc: QuizError):
		logger.debug({"event": "quiz_error", "path": request.url.path, "code": exc.code, "message": exc.message})
		return ORJSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message))

	@app.exception_handler(RequestValidationError)
	async def validation_error_handler(request: Request, exc: RequestValidationError):
		errors = exc.errors()
		message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
		logger.debug({"event": "validation_error", "path": request.url.path, "errors": len(errors)})
		return ORJSONResponse(status_code=400, content=_error_body("VALIDATION_ERROR", message))

	@app.exception_handler(StarletteHTTPException)
	async def http_error_handler(request: Request, exc: StarletteHTTPException):
		code = {404: "NOT_FOUND", 405: "METHOD_NOT_ALLOWED"}.get(exc.status_code, "HTTP_ERROR")
		logger.debug({"event": "http_error", "method": request.method, "path": request.url.path, "status_code": exc.status_code})
		return ORJSONResponse(status_code=exc.status_code, content=_error_body(code, str(exc.detail)), headers=getattr(exc, "headers", None))

	@app.exception_handler(Exception)
	async def unexpected_error_handler(request: Request, exc: Exception):
		logger.exception("unhandled_error", extra={"path": request.url.path})
		return ORJSONResponse(status_code=500, content=_error_body("INTERNAL_SERVER_ERROR", "An unexpected error occurred"))

	@app.get("/health", response_model=HealthResponse)
	def health():
		return HealthResponse(status="healthy", timestamp=_timestamp(), version=config.app_version)

	app.include_router(router, prefix=config.api_prefix)
	return app

app = create_app()
