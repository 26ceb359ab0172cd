"""
api/main.py

FastAPI application factory. The rule catalogue and evaluator are built once
and shared by every route through get_evaluator().
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from ..engine import RuleEvaluator, load_catalogue
from .routes import anomalies as anomalies_router
from .routes import evaluate as evaluate_router
from .routes import fleet as fleet_router
from .routes import propensity as propensity_router
from .routes import rules as rules_router
from .routes import scan as scan_router
from .routes import stats as stats_router

logger = logging.getLogger(__name__)

_evaluator: RuleEvaluator | None = None


def set_evaluator(evaluator: RuleEvaluator) -> None:
    global _evaluator
    _evaluator = evaluator


def get_evaluator() -> RuleEvaluator:
    global _evaluator
    if _evaluator is None:
        _evaluator = RuleEvaluator(load_catalogue())
    return _evaluator


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        evaluator = get_evaluator()
        logger.info("FastAPI startup — %d rule(s) loaded", len(evaluator.catalogue))
        yield
        logger.info("FastAPI shutdown")

    app = FastAPI(
        title="Merchant Twin — Failure Diagnosis Engine",
        version="1.0.0",
        description="Rule-based failure diagnosis and risk scoring for M-PESA merchants",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(rules_router.router,      prefix="/api")
    app.include_router(evaluate_router.router,   prefix="/api")
    app.include_router(scan_router.router,       prefix="/api")
    app.include_router(fleet_router.router,      prefix="/api")
    app.include_router(anomalies_router.router,  prefix="/api")
    app.include_router(propensity_router.router, prefix="/api")
    app.include_router(stats_router.router,      prefix="/api")

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "rules": len(get_evaluator().catalogue)}

    return app
