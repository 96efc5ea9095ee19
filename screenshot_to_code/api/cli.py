"""
Command-line adapter for the screenshot-to-code engine.

Architectural role:
- Exposes the generation pipeline to the terminal.
- Starts the HTTP server for local use.
- Delegates all model work to `core.engine.generate_component`.

Commands:
- `generate <image_url> [--model MODEL] [--shadcn]`: print generated code.
- `serve [--host HOST] [--port PORT]`: run the HTTP API with uvicorn.

Error handling strategy:
- Validation errors print the message and exit with status 2.
- Image fetch and inference errors print a one-line message and exit with 1.
- Keyboard interrupts exit with 130 without traceback output.
"""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from screenshot_to_code.api.main import configure_logging, run_server
from screenshot_to_code.core.engine import generate_component
from screenshot_to_code.core.request_types import DEFAULT_BACKEND, Backend, GenerationRequest
from screenshot_to_code.image.client import ImageFetchError
from screenshot_to_code.llm.errors import BackendError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screenshot-to-code",
        description="Turn a website screenshot into a React/Tailwind component",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate code for one screenshot URL")
    generate.add_argument("image_url", help="Publicly reachable screenshot URL")
    generate.add_argument(
        "--model",
        default=DEFAULT_BACKEND.value,
        help=f"Backend: {' | '.join(b.value for b in Backend)} (default: {DEFAULT_BACKEND.value})",
    )
    generate.add_argument("--shadcn", action="store_true", help="Advertise shadcn/ui components")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")

    return parser


def _generate(args) -> int:
    try:
        request = GenerationRequest(model=args.model, image_url=args.image_url, shadcn=args.shadcn)
    except ValidationError as exc:
        print(exc, file=sys.stderr)
        return 2

    try:
        code = asyncio.run(generate_component(request, request_id="cli"))
    except ImageFetchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except BackendError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(code)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        if args.command == "serve":
            run_server(host=args.host, port=args.port, reload=args.reload)
            return 0
        return _generate(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
