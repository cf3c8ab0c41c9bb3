"""paperfeed - preprint feed search for arXiv, bioRxiv and medRxiv."""

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime, timedelta
from pathlib import Path

from paperfeed.cache import TTLCache
from paperfeed.config import load_settings
from paperfeed.core import save_json
from paperfeed.detail import DetailLookup
from paperfeed.fetcher import FeedFetcher
from paperfeed.models import PaperSource, SearchQuery, SearchStatus
from paperfeed.search import SearchService
from paperfeed.sources import default_sources

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# Logging setup
# ─────────────────────────────────────────────────────────────

def setup_logging():
    """Configure logging to file."""
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    today = datetime.now().strftime("%Y-%m-%d")
    log_file = log_dir / f"{today}.log"

    # File handler (detailed)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S"
    ))

    # Configure root logger
    logging.basicConfig(
        level=logging.INFO,
        handlers=[file_handler]
    )

    return log_file


# ─────────────────────────────────────────────────────────────
# Output formatting
# ─────────────────────────────────────────────────────────────

def print_header(title: str):
    """Print command header."""
    now = datetime.now().strftime("%Y-%m-%d %H:%M")
    print()
    print("=" * 62)
    print(f"  paperfeed - {title}")
    print(f"  {now}")
    print("=" * 62)
    print()


def print_detail(key: str, value, indent: int = 1):
    """Print a detail line."""
    prefix = "|  " * indent
    print(f"{prefix}- {key}: {value}")


def print_papers(papers, top: int):
    """Print the first ``top`` papers, one per line."""
    for i, paper in enumerate(papers[:top], 1):
        title = paper.title[:70] + "..." if len(paper.title) > 70 else paper.title
        print(f"  {i}. {title}")
        print(f"     {paper.link}")
    if len(papers) > top:
        print(f"  ... and {len(papers) - top} more")
    print()


# ─────────────────────────────────────────────────────────────
# Wiring
# ─────────────────────────────────────────────────────────────

def build_services(as_of: date = None):
    """Fetcher, search service and detail lookup sharing one cache."""
    settings = load_settings()
    cache = TTLCache(ttl=timedelta(hours=settings["cache_ttl_hours"]))
    fetcher = FeedFetcher(
        cache,
        timeout=settings["http_timeout"],
        headers={"User-Agent": settings["user_agent"]},
    )
    sources = default_sources(settings["arxiv_page_size"])
    search_kwargs = {"default_limit": settings["arxiv_default_limit"]}
    if as_of is not None:
        search_kwargs["today"] = lambda: as_of
    return (
        SearchService(fetcher, sources, **search_kwargs),
        DetailLookup(fetcher, sources),
    )


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="paperfeed - preprint feed search for arXiv, bioRxiv and medRxiv",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py search arxiv cs.AI,cs.LG -k transformer,diffusion
  python main.py search biorxiv neuroscience -k cortex --date 2025-03-08
  python main.py abstract arxiv 2401.12345
  python main.py serve --port 8000
        """
    )
    sources = [s.value for s in PaperSource]
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search a source's latest feed")
    search.add_argument("source", choices=sources)
    search.add_argument("categories", help="Comma-separated categories (e.g. cs.AI,cs.LG or neuroscience)")
    search.add_argument("-k", "--keywords", default=None, help="Comma-separated keywords (OR)")
    search.add_argument("--subfield", default=None, help="arXiv sub-field appended to bare groups")
    search.add_argument("--limit", type=int, default=None, help="Max arXiv papers returned")
    search.add_argument(
        "--date",
        type=parse_date,
        default=None,
        help="Pretend today is this date (selects weekday/weekend endpoint). Format: YYYY-MM-DD"
    )
    search.add_argument("--top", type=int, default=10, help="Number of papers to print (default: 10)")
    search.add_argument("--output", type=str, default=None, help="Write the full JSON envelope here")

    abstract = sub.add_parser("abstract", help="Print one paper's abstract")
    abstract.add_argument("source", choices=sources)
    abstract.add_argument("identifier", help="arXiv id / abs URL, or bioRxiv/medRxiv DOI")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


# ─────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────

async def cmd_search(args) -> int:
    service, _ = build_services(args.date)
    query = SearchQuery.from_params(
        categories=args.categories,
        keywords=args.keywords,
        limit=args.limit,
        subfield=args.subfield,
    )

    print_header(f"{args.source} search")
    print_detail("Categories", ", ".join(query.category_codes()) or "(none)")
    print_detail("Keywords", ", ".join(query.keywords) or "(all)")

    outcome = await service.search(args.source, query)
    response = outcome.response

    if outcome.status != SearchStatus.OK:
        for err in response.errors:
            print(f"[ERROR] {err}")
        return 1

    print_detail("Total", response.total_results)
    print_detail("Matched", response.matched_results)
    print()
    print_papers(response.papers, args.top)

    if args.output:
        save_json(response.model_dump(mode="json", by_alias=True), args.output)
        print(f"[OK] Saved {args.output}")
    return 0


async def cmd_abstract(args) -> int:
    _, lookup = build_services()
    paper = await lookup.fetch_paper(args.source, args.identifier)
    if paper is None:
        print(f"[ERROR] Paper not found: {args.identifier}")
        return 1

    print(paper.title)
    print(", ".join(paper.authors))
    print(paper.link)
    print()
    print(paper.abstract or "(no abstract)")
    return 0


def cmd_serve(args) -> int:
    import uvicorn
    uvicorn.run("api:app", host=args.host, port=args.port)
    return 0


def run(argv=None) -> int:
    args = parse_args(argv)

    if args.command == "serve":
        return cmd_serve(args)

    log_file = setup_logging()
    logger.info("=" * 60)
    logger.info(f"paperfeed {args.command} started")

    if args.command == "search":
        code = asyncio.run(cmd_search(args))
    else:
        code = asyncio.run(cmd_abstract(args))

    logger.info(f"paperfeed {args.command} finished with code {code}")
    print(f"(log: {log_file})")
    return code


if __name__ == "__main__":
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n\nError: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
