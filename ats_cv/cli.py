"""CLI - Command line interface for the Markdown to ATS CV Generator."""

import argparse
import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from . import __version__
from .config import AppConfig, load_config
from .errors import ConfigurationError, CvGenerationError
from .observability import PipelineObserver
from .pipeline import CvGenerator


console = Console()

TEMPLATE_FILE = "template.md"

USAGE_EXAMPLES = [
    "ats-cv generate template.md",
    "ats-cv generate my-cv.md -o john-doe-cv.pdf",
    'ats-cv generate my-cv.md --title "Jane Doe - CV" --no-ats',
    "ats-cv serve --port 8081",
]

COMMANDS = [
    ("ats-cv info", "Show this help message"),
    ("ats-cv generate", "Generate CV from markdown"),
    ("ats-cv serve", "Run the HTTP service"),
]

FEATURES = [
    "ATS-friendly formatting",
    "Professional styling",
    "Clean, readable layout",
    "PDF output optimization",
    "Command-line interface and HTTP API",
]


def print_banner():
    """Print welcome banner."""
    console.print("\n=== Markdown to ATS CV Generator ===", style="bold cyan")
    console.print("Generate professional ATS-friendly CV PDFs from markdown files\n", style="cyan")

    console.print("Usage Examples:", style="yellow")
    for example in USAGE_EXAMPLES:
        console.print(f"  {example}", style="dim")
    console.print()

    console.print("Available Commands:", style="yellow")
    for command, description in COMMANDS:
        console.print(f"  {command:<18} - {description}", style="dim")
    console.print()

    console.print(f"Template file: {TEMPLATE_FILE}", style="green")
    console.print(f"Edit the {TEMPLATE_FILE} file with your information and run the generator.\n", style="dim")


def print_project_info():
    """Print package layout and feature list."""
    layout = """
## Project Structure

| Package | Description |
|---------|-------------|
| `ats_cv.domain` | Markdown parsing, styles, document assembly, ATS normalization |
| `ats_cv.rendering` | Headless browser PDF rendering |
| `ats_cv.web` | HTTP API |
| `ats_cv.cli` | Command line interface |
| `config/config.yaml` | Application configuration |
"""
    console.print(Markdown(layout))
    console.print("Features:", style="yellow")
    for feature in FEATURES:
        console.print(f"  • {feature}", style="dim")
    console.print()


def check_template_file(directory: Path = Path(".")) -> bool:
    """Report whether the working directory has a template to edit."""
    if (directory / TEMPLATE_FILE).exists():
        console.print(f"✓ Template file found: {TEMPLATE_FILE}", style="green")
        console.print("  You can edit this file with your information\n", style="dim")
        return True
    console.print("⚠ Template file not found", style="yellow")
    console.print(f"  Create a {TEMPLATE_FILE} file with your CV content\n", style="dim")
    return False


def show_info(project: bool = False):
    print_banner()
    if project:
        print_project_info()
    check_template_file()
    console.print("Ready to generate your professional CV! 🚀\n", style="cyan")


def resolve_config(config_path) -> AppConfig:
    """Load config, falling back to defaults when the file is missing."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        console.print(f"⚠️ Config file not found: {config_path}", style="yellow")
        console.print("Using default configuration.", style="dim")
        return AppConfig()


def run_generate(args) -> int:
    """Generate a PDF from a markdown file. Returns the process exit code."""
    console.print("\n=== Professional ATS CV Generator ===\n", style="bold cyan")
    try:
        config = resolve_config(args.config)
        generator = CvGenerator(config)
        observer = PipelineObserver(verbose=not args.quiet)
        output = asyncio.run(
            generator.generate_cv_pdf(
                Path(args.input).resolve(),
                Path(args.output).resolve(),
                title=args.title,
                optimize_ats=not args.no_ats,
                observer=observer,
            )
        )
    except CvGenerationError as e:
        console.print(f"❌ {escape(e.message)}", style="red")
        for problem in e.details.get("errors", []):
            console.print(f"  - {escape(problem)}", style="red")
        return 1
    except KeyboardInterrupt:
        console.print("\n⚠️ Interrupted.", style="yellow")
        return 1

    console.print(f"\n✓ CV generation completed successfully! {output}", style="green")
    return 0


def run_serve(args) -> int:
    from .web.app import main as serve

    try:
        config = resolve_config(args.config)
    except ConfigurationError as e:
        console.print(f"❌ {escape(e.message)}", style="red")
        return 1
    serve(config, host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ats-cv",
        description="Markdown to ATS CV Generator - professional ATS-friendly CV PDFs from markdown",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", help="Generate CV from markdown")
    generate.add_argument("input", help="Input markdown file path")
    generate.add_argument(
        "--output", "-o",
        default="cv.pdf",
        help="Output PDF file path (default: cv.pdf)",
    )
    generate.add_argument("--title", help="Document title (default: Professional CV)")
    generate.add_argument(
        "--no-ats",
        action="store_true",
        help="Skip ATS normalization of the generated HTML",
    )
    generate.add_argument(
        "--config", "-c",
        default=None,
        help="Path to configuration file",
    )
    generate.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet mode (minimal output)",
    )

    info = subparsers.add_parser("info", help="Show usage information")
    info.add_argument(
        "--project", "-p",
        action="store_true",
        help="Show project information",
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default=None, help="Bind address (default: from config)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: from config or $PORT)")
    serve.add_argument(
        "--config", "-c",
        default=None,
        help="Path to configuration file",
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.command == "generate":
        return run_generate(args)
    if args.command == "serve":
        return run_serve(args)
    show_info(project=getattr(args, "project", False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
