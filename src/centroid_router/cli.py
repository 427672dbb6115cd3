"""
Command-line interface for Centroid Router.

Usage:
  centroid-router build [--data emails.json]
  centroid-router classify "text to route"
  centroid-router classify < email.txt
  centroid-router serve [--host 0.0.0.0] [--port 3000]
"""

import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

import structlog

from centroid_router.config import Settings, settings as default_settings
from centroid_router.core.exceptions import CentroidsUnavailableError, RouterError
from centroid_router.embeddings.exceptions import EmbeddingProviderError
from centroid_router.logging_config import configure_logging
from centroid_router.models.output_models import ClassificationResult
from centroid_router.persistence.training_data import load_training_examples
from centroid_router.service import RoutingService

logger = structlog.get_logger(__name__)


def build_service(settings: Settings) -> RoutingService:
    """Create the routing service for one CLI invocation."""
    return RoutingService.from_settings(settings)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="centroid-router",
        description="Route text to labels by embedding similarity to label centroids",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s build                          # Build centroids from TRAINING_DATA_PATH
  %(prog)s build --data data/emails.json  # Build from another training file
  %(prog)s classify "I was charged twice" # Classify text given as arguments
  %(prog)s classify < email.txt           # Classify text read from stdin
  %(prog)s serve --port 3000              # Run the HTTP API

Environment variables:
- OPENAI_API_KEY=... (required for the openai backend)
- EMBEDDING_BACKEND=openai|ollama
- CENTROIDS_PATH=centroids.json
- CLASSIFICATION_THRESHOLD=0.4
        """
    )
    subparsers = parser.add_subparsers(dest="command")
    
    build_cmd = subparsers.add_parser("build", help="Build centroids from labeled examples")
    build_cmd.add_argument(
        "--data", "-d",
        help="Training JSON file (default: TRAINING_DATA_PATH)"
    )
    
    classify_cmd = subparsers.add_parser("classify", help="Classify text (arguments or stdin)")
    classify_cmd.add_argument(
        "text",
        nargs="*",
        help="Text to classify; read from stdin when omitted"
    )
    classify_cmd.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON"
    )
    
    serve_cmd = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve_cmd.add_argument("--host", help="Bind address (default: HOST)")
    serve_cmd.add_argument("--port", type=int, help="Port (default: PORT)")
    
    return parser


def read_stdin_text() -> str:
    if sys.stdin.isatty():
        print("Paste the email text (end with Ctrl+D):", file=sys.stderr)
    return sys.stdin.read().strip()


def format_result(result: ClassificationResult) -> str:
    return (
        f"Routed to: {result.routed} "
        f"(best={result.best_label}, score={result.best_score:.3f})\n"
        f"Similarities: {json.dumps(result.similarities)}"
    )


async def run_build(service: RoutingService, data_path: str) -> int:
    examples = load_training_examples(data_path)
    try:
        summary = await service.build_with_summary(examples)
    finally:
        await service.close()
    
    print(f"Wrote centroids for labels: {', '.join(summary.labels)}")
    print(
        f"{summary.example_count} examples, dimension {summary.dimension}, "
        f"{summary.duration_ms} ms"
    )
    return 0


async def run_classify(service: RoutingService, text: str, as_json: bool) -> int:
    try:
        result = await service.classify(text)
    finally:
        await service.close()
    
    if as_json:
        print(result.model_dump_json(by_alias=True, indent=2))
    else:
        print(format_result(result))
    return 0


def run_serve(settings: Settings, host: Optional[str], port: Optional[int]) -> int:
    import uvicorn
    
    uvicorn.run(
        "centroid_router.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
    )
    return 0


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    settings = settings or default_settings
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if args.command is None:
        parser.print_help()
        return 0
    
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT, stream=sys.stderr)
    
    if args.command == "serve":
        return run_serve(settings, args.host, args.port)
    
    try:
        service = build_service(settings)
        if args.command == "build":
            return asyncio.run(run_build(service, args.data or settings.TRAINING_DATA_PATH))
        
        text = " ".join(args.text) or read_stdin_text()
        return asyncio.run(run_classify(service, text, args.json))
    
    except CentroidsUnavailableError:
        print("No centroids found. Run: centroid-router build", file=sys.stderr)
        return 1
    except (RouterError, EmbeddingProviderError) as exc:
        logger.error("Command failed", command=args.command, error_type=type(exc).__name__)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def cli() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
