# src/stacksfit_ai/main.py
from dotenv import load_dotenv
load_dotenv()

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stacksfit_ai.agents.planner_agent import FallbackOrchestrator
from stacksfit_ai.config import Settings, configure_logging, load_settings
from stacksfit_ai.llm.llm_client import GeminiAdapter, OpenAIAdapter
from stacksfit_ai.models import (
    GenerationResult,
    MotivationRequest,
    NutritionRequest,
    ProgressAnalysisRequest,
    WorkoutRequest,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "StacksFit AI Middleware"
SERVICE_VERSION = "1.0.0"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _envelope(result: GenerationResult) -> Dict[str, Any]:
    data = result.to_payload()
    data["generatedAt"] = _now_iso()
    return {"success": True, "data": data}


def build_orchestrator(settings: Settings) -> FallbackOrchestrator:
    return FallbackOrchestrator(primary=OpenAIAdapter(settings), secondary=GeminiAdapter(settings))


def create_app(settings: Optional[Settings] = None, orchestrator: Optional[FallbackOrchestrator] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    orchestrator = orchestrator or build_orchestrator(settings)
    started = time.monotonic()

    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
    app.state.settings = settings
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_failed(request: Request, exc: RequestValidationError):
        details = []
        for err in exc.errors():
            loc = [str(p) for p in err.get("loc", ()) if p != "body"]
            details.append({"field": ".".join(loc), "message": err.get("msg", "")})
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Validation failed", "details": details},
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"success": False, "error": "Internal Server Error"})

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/api/health")
    async def service_health():
        return {
            "status": "healthy",
            "timestamp": _now_iso(),
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "uptime": round(time.monotonic() - started, 3),
        }

    @app.get("/api/ai/smart/health")
    async def smart_health():
        return {"success": True, "data": app.state.orchestrator.health_status()}

    @app.post("/api/ai/smart/workout-plan")
    async def workout_plan(payload: WorkoutRequest):
        """Workout plan via primary -> secondary -> static fallback. Never fails on provider errors."""
        result = await app.state.orchestrator.generate_workout(payload)
        return _envelope(result)

    @app.post("/api/ai/smart/nutrition-plan")
    async def nutrition_plan(payload: NutritionRequest):
        result = await app.state.orchestrator.generate_nutrition(payload)
        return _envelope(result)

    @app.post("/api/ai/smart/progress-analysis")
    async def progress_analysis(payload: ProgressAnalysisRequest):
        result = await app.state.orchestrator.generate_progress_analysis(payload)
        return _envelope(result)

    @app.post("/api/ai/smart/motivation")
    async def motivation(payload: MotivationRequest):
        result = await app.state.orchestrator.generate_motivation(payload)
        return _envelope(result)

    return app


app = create_app()


def serve():
    settings = app.state.settings
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    serve()
