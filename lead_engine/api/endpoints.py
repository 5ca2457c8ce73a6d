"""
FastAPI Endpoints for the Lead Scoring Engine
=============================================
RESTful API for offer/lead ingestion and lead scoring.

Base URL: http://localhost:8000

Endpoints:
- GET  /              - API info
- GET  /health        - Health check
- POST /offer         - Save the offer leads are scored against
- GET  /offer         - Get the active (latest) offer
- POST /leads         - Add leads (JSON list)
- GET  /leads         - List stored leads with their scores
- POST /score         - Score every lead against the latest offer
- GET  /results       - Results of the last scoring run
- GET  /api/stats     - Pipeline statistics
"""

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import FastAPI, HTTPException, Body
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from ..models.schemas import Offer, OfferRequest, LeadProfile
from ..errors import NoOfferError, NoLeadsError, PersistenceError
from ..engine import LeadScoringPipeline
from ..storage import InMemoryLeadStore

logger = logging.getLogger(__name__)


# =============================================================================
# FastAPI App Initialization
# =============================================================================

app = FastAPI(
    title="Lead Scoring Engine API",
    description="""
## Lead Intent Scoring

Scores prospective customers against your offer:

- **Rule layer (0-50)**: role relevance, industry match, data completeness
- **AI layer (0-50)**: buying-intent classification (High / Medium / Low)

### Quick Start:
1. `POST /offer` with your product description
2. `POST /leads` with the prospects to score
3. `POST /score` to run scoring, then `GET /results`
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - Allow all origins for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Storage & Pipeline Initialization
# =============================================================================

# In-memory storage (replace with database in production)
store = InMemoryLeadStore()
pipeline = LeadScoringPipeline(store=store)


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.get("/", tags=["Info"])
async def root():
    """API information and available endpoints"""
    return {
        "service": "Lead Scoring Engine",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "Save Offer": "POST /offer",
            "Add Leads": "POST /leads",
            "Run Scoring": "POST /score",
            "Results": "GET /results",
            "Health": "GET /health",
        },
    }


@app.get("/health", tags=["Info"])
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "llm_configured": pipeline.classifier.configured,
    }


# =============================================================================
# Offer & Lead Endpoints
# =============================================================================

@app.post("/offer", tags=["Offer"])
async def create_offer(request: OfferRequest):
    """Save an offer; the latest one is used for the next scoring run"""
    offer = store.save_offer(Offer(**request.model_dump()))
    return {"status": "ok", "message": "Offer saved.", "offer_id": offer.id}


@app.get("/offer", tags=["Offer"])
async def get_offer():
    """Get the active offer"""
    offer = store.get_latest_offer()
    if offer is None:
        raise HTTPException(status_code=404, detail="No offer found. POST /offer first.")
    return offer


@app.post("/leads", tags=["Leads"])
async def add_leads(leads: List[LeadProfile] = Body(..., description="Leads to add")):
    """Add leads to be scored"""
    stored = store.add_leads(leads)
    return {"status": "ok", "imported": len(stored)}


@app.get("/leads", tags=["Leads"])
async def list_leads():
    """List stored leads with their current scores"""
    leads = store.get_all_leads()
    return {"count": len(leads), "leads": leads}


# =============================================================================
# Scoring Endpoints
# =============================================================================

@app.post("/score", tags=["Scoring"])
async def run_scoring():
    """
    Score every lead against the latest offer.

    Each lead gets a rule score (0-50), an AI score (10/25/30/50) and
    final_score = rule_score + ai_score.
    """
    try:
        run = await pipeline.run_scoring()
    except (NoOfferError, NoLeadsError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Persistence failure",
                "detail": str(e),
                "leads_scored": e.leads_scored,
                "results": [r.model_dump(mode="json") for r in e.results],
            },
        )

    store.save_results(run.results)
    return {
        "status": "ok",
        "leads_scored": run.leads_scored,
        "ai_fallbacks": run.ai_fallbacks,
        "processing_time_ms": run.processing_time_ms,
        "results": run.results,
    }


@app.get("/results", tags=["Scoring"])
async def get_results():
    """Results of the last successful scoring run"""
    results = store.get_results()
    return {"count": len(results), "results": results}


# =============================================================================
# Statistics
# =============================================================================

@app.get("/api/stats", tags=["Info"])
async def get_stats():
    """Get pipeline statistics"""
    return pipeline.get_stats()


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        }
    )
