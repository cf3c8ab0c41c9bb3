"""paperfeed API - search endpoints for arXiv, bioRxiv and medRxiv."""

import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from paperfeed import __version__
from paperfeed.auth import bearer_token, verify_token
from paperfeed.cache import TTLCache
from paperfeed.categories import list_arxiv_categories, list_rxiv_categories
from paperfeed.config import load_settings
from paperfeed.credits import CreditLedger
from paperfeed.detail import DetailLookup
from paperfeed.errors import InvalidRequest
from paperfeed.fetcher import FeedFetcher
from paperfeed.models import PaperSource, SearchOutcome, SearchQuery
from paperfeed.search import SearchService
from paperfeed.simplify import AbstractSimplifier, AbstractUnavailable, NoCreditsRemaining
from paperfeed.sources import default_sources

# ─────────────────────────────────────────────────────────────
# 日志配置
# ─────────────────────────────────────────────────────────────

def setup_api_logging():
    """Configure logging for API process."""
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    log_file = log_dir / "api.log"

    # File handler
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)

    return log_file

# 初始化日志
_log_file = setup_api_logging()
logger = logging.getLogger(__name__)


app = FastAPI(
    title="paperfeed API",
    description="Preprint search across arXiv, bioRxiv and medRxiv",
    version=__version__,
)

# 允许跨域 (网页调用)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─────────────────────────────────────────────────────────────
# 共享服务 (one cache for the whole process)
# ─────────────────────────────────────────────────────────────

settings = load_settings()
feed_cache = TTLCache(ttl=timedelta(hours=settings["cache_ttl_hours"]))
fetcher = FeedFetcher(
    feed_cache,
    timeout=settings["http_timeout"],
    headers={"User-Agent": settings["user_agent"]},
)
sources = default_sources(settings["arxiv_page_size"])
search_service = SearchService(fetcher, sources, default_limit=settings["arxiv_default_limit"])
detail_lookup = DetailLookup(fetcher, sources)
credit_ledger = CreditLedger(settings["credits_file"], settings["max_credits"])


def get_search_service() -> SearchService:
    return search_service


def get_detail_lookup() -> DetailLookup:
    return detail_lookup


def get_credit_ledger() -> CreditLedger:
    return credit_ledger


def get_simplifier(
    lookup: DetailLookup = Depends(get_detail_lookup),
    ledger: CreditLedger = Depends(get_credit_ledger),
) -> AbstractSimplifier:
    return AbstractSimplifier(lookup, ledger)


# ─────────────────────────────────────────────────────────────
# 请求模型
# ─────────────────────────────────────────────────────────────

class PaperSearchRequest(BaseModel):
    """POST body for the search endpoints."""
    categories: Union[list[str], str, None] = None
    category: Union[list[str], str, None] = None
    subfield: Optional[str] = None
    keywords: Union[list[str], str, None] = None
    limit: Optional[int] = None


class CompletionRequest(BaseModel):
    """Abstract simplification request"""
    arxiv_id: Optional[str] = Field(default=None, alias="arxivId")
    doi: Optional[str] = None
    source: Optional[str] = None

    class Config:
        populate_by_name = True


# ─────────────────────────────────────────────────────────────
# 认证依赖
# ─────────────────────────────────────────────────────────────

async def get_current_user(
    authorization: Optional[str] = Header(None),
) -> str:
    """
    认证依赖：从 Authorization header 获取当前用户

    Raises:
        HTTPException 401 如果未认证或 token 无效
    """
    token = bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        user_id = verify_token(token)
    except RuntimeError as e:
        logger.error(f"Token verification unavailable: {e}")
        raise HTTPException(status_code=500, detail="Authentication is not configured")

    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id


# ─────────────────────────────────────────────────────────────
# 工具函数
# ─────────────────────────────────────────────────────────────

def _respond(outcome: SearchOutcome) -> JSONResponse:
    return JSONResponse(
        status_code=int(outcome.status),
        content=outcome.response.model_dump(mode="json", by_alias=True),
    )


async def _run_search(service: SearchService, source: PaperSource, **params) -> JSONResponse:
    """Build the query, run it, and wrap the outcome in the standard envelope."""
    try:
        query = SearchQuery.from_params(**params)
    except ValidationError as e:
        logger.info(f"Rejected {source.value} search params {params}: {e}")
        return _respond(SearchOutcome.invalid("limit must be a non-negative integer"))

    outcome = await service.search(source.value, query)
    return _respond(outcome)


SEARCH_PATHS = {"/api/papers", "/api/biorxiv/papers", "/api/medrxiv/papers"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """搜索接口的参数错误也返回标准 envelope (400), 其他接口保持默认 422"""
    if request.url.path not in SEARCH_PATHS:
        return await request_validation_exception_handler(request, exc)

    messages = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ())]
        field = ".".join(loc[1:]) or (loc[0] if loc else "request")
        messages.append(f"Invalid {field}: {err.get('msg', 'invalid value')}")
    logger.info(f"Rejected {request.url.path} request: {messages}")
    return _respond(SearchOutcome.invalid(*(messages or ["Invalid request"])))


# ─────────────────────────────────────────────────────────────
# API 端点
# ─────────────────────────────────────────────────────────────

@app.get("/api/health")
async def health_check():
    """健康检查"""
    return {
        "service": "paperfeed API",
        "version": __version__,
        "status": "ok",
        "cached_feeds": len(feed_cache),
    }


@app.get("/api/papers")
async def search_arxiv(
    categories: Optional[str] = None,
    subfield: Optional[str] = None,
    keywords: Optional[str] = None,
    limit: Optional[int] = None,
    service: SearchService = Depends(get_search_service),
):
    """
    Search arXiv.

    Args:
        categories: Comma-separated category codes, e.g. "cs.AI,cs.LG"
        keywords: Comma-separated keywords, OR-matched against title + abstract
        limit: Max papers returned (default from settings)
    """
    return await _run_search(
        service, PaperSource.ARXIV,
        categories=categories, subfield=subfield, keywords=keywords, limit=limit,
    )


@app.post("/api/papers")
async def search_arxiv_post(
    body: PaperSearchRequest,
    service: SearchService = Depends(get_search_service),
):
    return await _run_search(service, PaperSource.ARXIV, **body.model_dump())


@app.get("/api/biorxiv/papers")
async def search_biorxiv(
    category: Optional[str] = None,
    keywords: Optional[str] = None,
    limit: Optional[int] = None,
    service: SearchService = Depends(get_search_service),
):
    """Search bioRxiv. ``limit`` is accepted but not applied to matches."""
    return await _run_search(
        service, PaperSource.BIORXIV, category=category, keywords=keywords, limit=limit,
    )


@app.post("/api/biorxiv/papers")
async def search_biorxiv_post(
    body: PaperSearchRequest,
    service: SearchService = Depends(get_search_service),
):
    return await _run_search(service, PaperSource.BIORXIV, **body.model_dump())


@app.get("/api/medrxiv/papers")
async def search_medrxiv(
    category: Optional[str] = None,
    keywords: Optional[str] = None,
    limit: Optional[int] = None,
    service: SearchService = Depends(get_search_service),
):
    """Search medRxiv. ``limit`` is accepted but not applied to matches."""
    return await _run_search(
        service, PaperSource.MEDRXIV, category=category, keywords=keywords, limit=limit,
    )


@app.post("/api/medrxiv/papers")
async def search_medrxiv_post(
    body: PaperSearchRequest,
    service: SearchService = Depends(get_search_service),
):
    return await _run_search(service, PaperSource.MEDRXIV, **body.model_dump())


@app.get("/api/categories")
async def get_arxiv_categories(category: Optional[str] = None):
    """arXiv categories, optionally limited to one group (e.g. "cs")."""
    data = list_arxiv_categories(category)
    if not data:
        detail = f"No results found for category: {category}" if category else "No categories found"
        raise HTTPException(status_code=404, detail=detail)
    return data


@app.get("/api/biorxiv/categories")
async def get_biorxiv_categories():
    return {"categories": list_rxiv_categories("biorxiv"), "errors": []}


@app.get("/api/medrxiv/categories")
async def get_medrxiv_categories():
    return {"categories": list_rxiv_categories("medrxiv"), "errors": []}


@app.get("/api/user/credits")
async def get_user_credits(
    user_id: str = Depends(get_current_user),
    ledger: CreditLedger = Depends(get_credit_ledger),
):
    """Remaining credits; first call creates the user's allowance."""
    return {"credits": ledger.get_credits(user_id)}


@app.post("/api/user/credits")
async def use_user_credit(
    user_id: str = Depends(get_current_user),
    ledger: CreditLedger = Depends(get_credit_ledger),
):
    remaining = ledger.use_credit(user_id)
    if remaining is None:
        raise HTTPException(status_code=403, detail="No credits remaining")
    return {"credits": remaining}


@app.post("/api/completion")
async def simplify_paper_abstract(
    body: CompletionRequest,
    user_id: str = Depends(get_current_user),
    simplifier: AbstractSimplifier = Depends(get_simplifier),
):
    """
    Simplify a paper abstract for a general audience. Costs one credit.

    Only the generated text is returned; credit balances are not exposed.
    """
    try:
        text = await simplifier.run(user_id, arxiv_id=body.arxiv_id, doi=body.doi, source=body.source)
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoCreditsRemaining as e:
        raise HTTPException(status_code=403, detail=str(e))
    except AbstractUnavailable as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"Error simplifying abstract for {user_id}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"text": text}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
