"""bcegate CLI: binary compatibility gate commands."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional

# Configuration failures exit with a different code than a blocking result
EXIT_BLOCKING = 1
EXIT_CONFIGURATION = 2


def _configure_logging(quiet: bool, verbose: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s", stream=sys.stderr)


def main():
    """Main CLI entry point for bcegate commands."""
    try:
        bcegate_version = get_version("bcegate")
    except PackageNotFoundError:
        bcegate_version = "dev"

    parser = argparse.ArgumentParser(
        prog="bcegate",
        description="bcegate: binary compatibility enforcement for build pipelines"
    )
    parser.add_argument("--version", action="version", version=f"bcegate {bcegate_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Classify a comparator diff and fail on blocking incompatibilities",
        parents=[parent_parser]
    )
    check_parser.add_argument(
        "--diff",
        type=Path,
        required=True,
        help="Path to comparator diff JSON"
    )
    check_parser.add_argument(
        "--baseline",
        default=None,
        help="Baseline spec; 'skip' skips the gate"
    )
    check_parser.add_argument(
        "--report-json",
        type=Path,
        default=None,
        help="Write the gate result as canonical JSON to this path"
    )

    # baseline command
    baseline_parser = subparsers.add_parser(
        "baseline",
        help="Resolve old and new file sets to feed the comparator",
        parents=[parent_parser]
    )
    baseline_parser.add_argument(
        "--project",
        type=Path,
        required=True,
        help="Path to project descriptor JSON"
    )
    baseline_parser.add_argument(
        "--repository",
        type=Path,
        required=True,
        help="Path to local artifact repository"
    )
    baseline_parser.add_argument(
        "--baseline",
        default=None,
        help="Baseline spec: skip | version:<v> | artifact:<g>:<a>:<v> | update:<url>"
    )
    baseline_parser.add_argument(
        "--dependencies",
        default=None,
        help="Dependency spec: none | all | include:<c>,... | exclude:<c>,..."
    )
    baseline_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Catalog fetch timeout in seconds"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.quiet, args.verbose)

    if args.command == "check":
        from .api import check
        from .errors import ConfigurationError
        from ._internal.canonical_json import canonical_dumps
        from ._internal.report import render_text_report

        try:
            result = check(Path(args.diff).resolve(), baseline=args.baseline)

            report_out: Optional[Path] = None
            if args.report_json:
                report_out = Path(args.report_json).resolve()
                report_out.parent.mkdir(parents=True, exist_ok=True)
                report_out.write_text(canonical_dumps(result.model_dump(mode="json")) + "\n", encoding="utf-8")

            if not result.ok:
                print(render_text_report(result), file=sys.stderr)
            if not args.quiet:
                for warning in result.warnings:
                    print(f"[WARN] {warning}")
                print(f"  Status: {result.status.value}")
                print(f"  Blocking classes: {len(result.blocking_classes)}")
                if report_out is not None:
                    print(f"  Report: {report_out}")
            if not result.ok:
                sys.exit(EXIT_BLOCKING)
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(EXIT_CONFIGURATION)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    elif args.command == "baseline":
        from .api import resolve_baseline_files
        from .errors import ConfigurationError
        from ._internal.baseline import DEFAULT_BASELINE, DEFAULT_TIMEOUT

        try:
            inputs = resolve_baseline_files(
                Path(args.project).resolve(),
                Path(args.repository).resolve(),
                baseline=args.baseline if args.baseline is not None else DEFAULT_BASELINE,
                dependency_spec=args.dependencies,
                timeout=args.timeout if args.timeout is not None else DEFAULT_TIMEOUT,
            )
            if inputs.skipped:
                if not args.quiet:
                    print(f"[SKIP] {inputs.skipped_reason}")
                sys.exit(0)
            print(f"baseline: {inputs.baseline}")
            for f in inputs.old_files:
                print(f"old: {f}")
            for f in inputs.new_files:
                print(f"new: {f}")
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(EXIT_CONFIGURATION)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
