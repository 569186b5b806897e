"""Command-line interface for codebase-digest."""
import json
import logging
import sys
from typing import Tuple

import click

from . import __version__
from .core.analyzer import CodebaseAnalyzer
from .core.models import AnalysisOutput, AnalyzerConfig
from .utils.console import THEMES, ConsoleManager


def setup_logging(debug: bool) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.WARNING
    format_string = '[%(levelname)s] %(message)s'

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def print_report(console: ConsoleManager, result: AnalysisOutput, debug: bool) -> None:
    """Print tree view, statistics and warnings."""
    console.print("\n[heading]FILE TREE[/heading]")
    console.print(result.tree_view.rstrip("\n"), markup=False)

    console.print_separator()
    console.print_success("ANALYSIS COMPLETE")
    console.print_info_with_heading("FILES FOUND:", f"{result.files.total_count:,}")
    console.print_info_with_heading("FILES PROCESSED:", f"{result.files.processed_count:,}")
    console.print_info_with_heading("TOTAL SIZE:", f"{result.files.total_size:,} bytes")
    console.print_info_with_heading("TOTAL TOKENS:", f"{result.token_count:,}")

    if result.has_errors():
        console.print_warning(f"WARNINGS DETECTED: {len(result.errors)}")
        if debug:
            for error in result.errors[:5]:
                console.print(f"  > {error}", markup=False, style="dim")
            if len(result.errors) > 5:
                console.print(f"  [dim]... +{len(result.errors) - 5} more[/dim]")
    console.print_separator()


@click.command()
@click.argument('directory', required=False, default=None)
@click.option('--ext', '-e', 'extensions', multiple=True,
              help='Relevant file extension, repeatable (replaces the defaults)')
@click.option('--max-file-size', '-m', type=int, help='Maximum file size in bytes (default: 100000)')
@click.option('--max-tokens', '-t', type=int, help='Approximate token budget for the context (default: 100000)')
@click.option('--ignore', '-i', 'ignore_patterns', multiple=True,
              help='Ignore pattern as a regular expression, repeatable (replaces the defaults)')
@click.option('--include-extensionless', is_flag=True, help='Consider files without an extension')
@click.option('--memory-limit', type=float, help='Memory ceiling in MB during assembly (default: 64)')
@click.option('--encoding', 'token_encoding', help='tiktoken encoding for the token count (default: o200k_base)')
@click.option('--context', 'print_context', is_flag=True, help='Write the assembled context to stdout')
@click.option('--json', 'export_json', is_flag=True, help='Write the full output record as JSON to stdout')
@click.option('--no-progress', is_flag=True, help='Disable the progress bar')
@click.option('--theme', type=click.Choice(sorted(THEMES)), default='manhattan', help='Terminal color theme')
@click.option('--debug', is_flag=True, help='Verbose logging and tracebacks')
@click.version_option(__version__)
def main(directory, extensions: Tuple[str, ...], max_file_size, max_tokens,
         ignore_patterns: Tuple[str, ...], include_extensionless: bool, memory_limit,
         token_encoding, print_context: bool, export_json: bool, no_progress: bool,
         theme: str, debug: bool) -> None:
    """
    Build an LLM-ready context from the source files under DIRECTORY.

    DIRECTORY defaults to the current directory (or CODEBASE_DIGEST_DIRECTORY).
    Ignore patterns are unanchored regular expressions matched against both
    the relative path and the file name: "dist" also skips "redistribute.py".

    Examples:

        codebase-digest .

        codebase-digest src -e .py -e .pyi --max-tokens 20000 --context

        codebase-digest . -i node_modules -i '\\.min\\.js$' --json
    """
    console = ConsoleManager(theme=theme)
    setup_logging(debug)

    try:
        config = AnalyzerConfig.from_env(
            directory=directory,
            relevant_extensions=tuple(extensions) or None,
            max_file_size=max_file_size,
            max_tokens=max_tokens,
            ignore_patterns=tuple(ignore_patterns) or None,
            ignore_files_with_no_extension=False if include_extensionless else None,
            memory_limit_mb=memory_limit,
            token_encoding=token_encoding,
            show_progress=not no_progress and not export_json,
        )

        console.print(f"[highlight]> ANALYZING:[/highlight] [path]{config.directory}[/path]")
        analyzer = CodebaseAnalyzer(config)
        result = analyzer.analyze_sync()

        print_report(console, result, debug)

        if export_json:
            click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        elif print_context:
            click.echo(result.context)

    except KeyboardInterrupt:
        console.print_error("PROCESS TERMINATED BY USER")
        sys.exit(1)

    except Exception as e:
        console.print_error(f"CRITICAL ERROR: {e}")
        if debug:
            console.print_exception()
        sys.exit(1)


if __name__ == '__main__':
    main()
