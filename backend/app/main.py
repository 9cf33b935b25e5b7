"""FastAPI backend application."""
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from backend.app.config import get_settings, load_branding
from backend.app.errors import CampaignCopilotError
from backend.app.logger import logger, LOG_FILE
from backend.app.models import (
    CampaignMetricsInput,
    CustomerAnalysisInput,
    CustomerAnalysisResponse,
    EmailContentInput,
    EmailContentResponse,
    EmailSequenceInput,
    EmailSequenceResponse,
    GeneralAiQueryInput,
    GeneralAiResponse,
    PerformanceAnalysisResponse,
    ProductRecommendationInput,
    ProductRecommendationResponse,
    SendTimeOptimizationInput,
    SendTimeOptimizationResponse,
    TranscribeRequest,
    TranscribeResponse,
)
from backend.agents.marketing_agent import MarketingAgent
from backend.agents.transcriber import VoiceTranscriber, decode_audio

app = FastAPI(
    title="Campaign Copilot API",
    description="AI-assisted email marketing: analysis, content, timing, recommendations and sequences",
    version="0.1.0"
)

# CORS for Streamlit frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global agents (initialized on startup)
marketing_agent = None
transcriber = None


@app.on_event("startup")
async def startup_event():
    """Initialize agents on startup."""
    global marketing_agent, transcriber
    marketing_agent = MarketingAgent()
    transcriber = VoiceTranscriber()
    if not get_settings().ai_configured:
        logger.warning("⚠ No AI provider configured; requests will fail until an API key is set")


@app.exception_handler(CampaignCopilotError)
async def campaign_copilot_error_handler(request: Request, exc: CampaignCopilotError):
    """Return application errors as JSON with their HTTP status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code}
    )


def _run(action: str, operation: str, data):
    if marketing_agent is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    try:
        return getattr(marketing_agent, operation)(data)
    except CampaignCopilotError as e:
        logger.error(f"Error trying to {action}: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Error trying to {action}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"An error occurred while trying to {action}: {str(e)}"
        )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Campaign Copilot API",
        "version": "0.1.0",
        "endpoints": [
            "/assistant",
            "/customers/analyze",
            "/emails/generate",
            "/send-time/optimize",
            "/performance/analyze",
            "/products/recommend",
            "/sequences/generate",
            "/voice/transcribe",
            "/branding",
        ]
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "ai_configured": get_settings().ai_configured}


@app.get("/branding")
async def branding():
    """Branding used by the frontend header, footer and colors."""
    return load_branding().model_dump(by_alias=True)


@app.post("/assistant", response_model=GeneralAiResponse)
def ask_assistant(request: GeneralAiQueryInput):
    """Answer a free-form marketing question."""
    return _run("answer the query", "get_general_response", request)


@app.post("/customers/analyze", response_model=CustomerAnalysisResponse)
def analyze_customers(request: CustomerAnalysisInput):
    """Segment and profile customers from raw text, JSON or CSV data."""
    return _run("analyze customer data", "analyze_customer_data", request)


@app.post("/emails/generate", response_model=EmailContentResponse)
def generate_email(request: EmailContentInput):
    """Generate subject lines, preview text, HTML body and CTAs."""
    return _run("generate email content", "generate_email_content", request)


@app.post("/send-time/optimize", response_model=SendTimeOptimizationResponse)
def optimize_send_time(request: SendTimeOptimizationInput):
    """Recommend optimal send day/time from engagement patterns."""
    return _run("optimize send time", "optimize_send_time", request)


@app.post("/performance/analyze", response_model=PerformanceAnalysisResponse)
def analyze_performance(request: CampaignMetricsInput):
    """Analyze campaign metrics and suggest optimizations."""
    return _run("analyze performance", "analyze_performance", request)


@app.post("/products/recommend", response_model=ProductRecommendationResponse)
def recommend_products(request: ProductRecommendationInput):
    """Recommend products for a customer profile and catalog."""
    return _run("recommend products", "recommend_products", request)


@app.post("/sequences/generate", response_model=EmailSequenceResponse)
def generate_sequence(request: EmailSequenceInput):
    """Build an automated email sequence."""
    return _run("generate email sequence", "generate_email_sequence", request)


@app.post("/voice/transcribe", response_model=TranscribeResponse)
def transcribe_voice(request: TranscribeRequest):
    """Transcribe a recorded voice clip into interim and final segments."""
    if transcriber is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    audio = decode_audio(request.audio_base64)
    return transcriber.transcribe(audio, request.mime_type, request.language)


def main():
    """Main entry point for running the backend server."""
    logger.info("Starting Campaign Copilot API server...")
    logger.info(f"Log file: {LOG_FILE.absolute()}")
    uvicorn.run(
        "backend.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="warning"
    )


if __name__ == "__main__":
    main()
