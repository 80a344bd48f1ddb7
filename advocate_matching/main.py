"""Command-line entry point for the Advocate Matcher."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from pydantic import ValidationError

from advocate_matching.config.environment import EnvironmentConfig
from advocate_matching.config.exceptions import ConfigurationError, format_validation_errors
from advocate_matching.config.loader import load_config
from advocate_matching.config.models import AppConfig, MatchingCriteria
from advocate_matching.domain.models import Advocate
from advocate_matching.logging import get_logger
from advocate_matching.logging.config import configure_logging
from advocate_matching.matching import (
    InvalidCriteriaError,
    MatchingEngine,
    MatchingError,
    build_recommendation_payload,
    build_response_payload,
    format_recommendations,
)
from advocate_matching.records import load_advocates, load_opportunities, load_records

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve logging settings.

    Log level priority: CLI > environment > config file > INFO.
    Log format priority: environment > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override.upper()
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    return app_config, env_config


def build_criteria(base: MatchingCriteria, args: argparse.Namespace) -> MatchingCriteria:
    """Apply CLI criteria overrides on top of the configured defaults."""
    return base.with_overrides(
        max_results=args.max_results,
        min_score=args.min_score,
        include_inactive=True if args.include_inactive else None,
        preferred_regions=args.region or None,
        exclude_advocate_ids=args.exclude or None,
    )


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present, else built-in defaults)",
    )
    common.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    common.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    criteria = argparse.ArgumentParser(add_help=False)
    criteria.add_argument("--max-results", type=int, default=None, help="Maximum recommendations")
    criteria.add_argument("--min-score", type=int, default=None, help="Minimum score to keep")
    criteria.add_argument(
        "--include-inactive", action="store_true", help="Consider advocates that are not active"
    )
    criteria.add_argument(
        "--region", action="append", default=None, help="Preferred region (repeatable)"
    )
    criteria.add_argument(
        "--exclude", action="append", default=None, help="Advocate id to exclude (repeatable)"
    )
    criteria.add_argument(
        "--insights", action="store_true", help="Append confidence and reason insights"
    )

    parser = argparse.ArgumentParser(
        description="Advocate Matcher - recommend customer advocates for sales opportunities"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    match_parser = subparsers.add_parser(
        "match", parents=[common, criteria], help="Recommend advocates for one opportunity"
    )
    match_parser.add_argument("--advocates", type=Path, required=True, help="Advocate record file")
    match_parser.add_argument(
        "--opportunity", type=Path, required=True, help="Opportunity record file"
    )

    batch_parser = subparsers.add_parser(
        "batch", parents=[common, criteria], help="Recommend advocates for several opportunities"
    )
    batch_parser.add_argument("--advocates", type=Path, required=True, help="Advocate record file")
    batch_parser.add_argument(
        "--opportunities", type=Path, required=True, help="Opportunity record file"
    )

    score_parser = subparsers.add_parser(
        "score", parents=[common], help="Score a single advocate against an opportunity"
    )
    score_parser.add_argument("--advocate", type=Path, required=True, help="Advocate record file")
    score_parser.add_argument(
        "--opportunity", type=Path, required=True, help="Opportunity record file"
    )

    return parser


def _single(records: List, path: Path, kind: str):
    if len(records) != 1:
        raise ConfigurationError(
            f"Expected exactly one {kind} in {path}, found {len(records)}",
        )
    return records[0]


def _run(args: argparse.Namespace, app_config: AppConfig) -> str:
    engine = MatchingEngine(app_config.scoring)

    if args.command == "score":
        advocate = _single(
            load_records(args.advocate, Advocate, "advocates", allow_single=True),
            args.advocate,
            "advocate",
        )
        opportunity = _single(load_opportunities(args.opportunity), args.opportunity, "opportunity")
        result = engine.score(advocate, opportunity)
        if args.output == "json":
            return json.dumps(build_recommendation_payload(result), indent=2)
        lines = [
            f"{advocate.display_name} ({advocate.id}) for {opportunity.display_name}: "
            f"score={result.score} confidence={result.confidence.value}"
        ]
        for item in result.breakdown:
            lines.append(f"  {item.dimension.value:<14} {item.score:6.1f}  {item.reason}")
        return "\n".join(lines)

    try:
        criteria = build_criteria(app_config.criteria, args)
    except ValidationError as e:
        raise InvalidCriteriaError(
            "Invalid criteria overrides", errors=format_validation_errors(e)
        ) from e
    advocates = load_advocates(args.advocates)

    if args.command == "match":
        opportunity = _single(load_opportunities(args.opportunity), args.opportunity, "opportunity")
        response = engine.match(advocates, opportunity, criteria)
    else:
        response = engine.batch_match(advocates, load_opportunities(args.opportunities), criteria)

    insights = engine.insights(response.matches) if args.insights else None
    if args.output == "json":
        return json.dumps(build_response_payload(response, insights), indent=2)
    return format_recommendations(response, insights)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the Advocate Matcher CLI.

    Returns:
        Exit code (0 for success, 1 for configuration, record or criteria errors)
    """
    load_dotenv()
    args = _build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        try:
            configure_logging(
                level=env_config.log_level,
                format_type=env_config.log_format,
                environment=env_config.environment,
            )
        except ValueError as e:
            raise ConfigurationError(
                f"Failed to configure logging: {e}",
                suggestions=["Check LOG_LEVEL, LOG_FORMAT and the logging section of the config file"],
            ) from e

        logger.info(
            "Advocate Matcher starting",
            extra={
                "event": "cli.starting",
                "command": args.command,
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
            },
        )

        output = _run(args, app_config)
    except ConfigurationError as e:
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return 1
    except MatchingError as e:
        print(f"Matching error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
