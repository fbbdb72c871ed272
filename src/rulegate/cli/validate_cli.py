"""
Command-line interface for validating and filtering records.

Usage:
    rulegate validate --rules <rules.yaml> --input <data.json> [options]
    rulegate filter --rules <rules.yaml> --input <data.json>
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from rulegate.core.config import EngineSettings
from rulegate.core.context import ValidationContext
from rulegate.core.exceptions import ValidationException
from rulegate.core.rules import RuleConfigLoader, RulesetConfig
from rulegate.observability.logger import get_logger, log_operation, setup_logger
from rulegate.validation import Validation

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CONFIG_ERROR = 2


def load_input(path: Path) -> dict[str, Any]:
    """
    Load an input record from a JSON or YAML file.

    Raises:
        ValueError: If the file does not hold a mapping
    """
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Input file must contain an object, got {type(data).__name__}")
    return data


def build_validation(config: RulesetConfig, lang: str | None) -> Validation:
    """Create a Validation on a private context configured from a ruleset file."""
    context = ValidationContext(EngineSettings.from_env())
    context.set_field_names(config.field_names)
    context.set_error_messages(config.error_messages)

    validation = Validation(lang=lang, context=context)
    validation.validation_rules(config.validation)
    validation.filter_rules(config.filters)
    validation.set_fields_error_messages(config.messages)
    return validation


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def validate_command(args) -> int:
    """
    Execute the validate command.

    Args:
        args: Command-line arguments
    """
    config = RuleConfigLoader(args.rules).load()
    data = load_input(Path(args.input))
    validation = build_validation(config, args.lang)

    with log_operation("Validating input", logger=logger, rules=str(args.rules), input=str(args.input)):
        result = validation.run(data, check_fields=args.check_fields)

    # Mismatch records leave run() returning data but still fail the command
    failed = result is False or bool(validation.errors())

    if args.format == "json":
        _print_json({
            "valid": not failed,
            "data": result if result is not False else None,
            "errors": validation.get_errors(),
            "failures": [failure.model_dump() for failure in validation.errors()],
        })
    elif failed:
        for message in validation.get_readable_errors():
            print(message)
    else:
        _print_json(result)

    return EXIT_INVALID if failed else EXIT_OK


def filter_command(args) -> int:
    """
    Execute the filter command.

    Args:
        args: Command-line arguments
    """
    config = RuleConfigLoader(args.rules).load()
    data = load_input(Path(args.input))
    validation = build_validation(config, args.lang)

    with log_operation("Filtering input", logger=logger, rules=str(args.rules), input=str(args.input)):
        _print_json(validation.filter(data, validation.filter_rules()))

    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rulegate",
        description="Filter and validate records against declarative rulesets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a JSON record
  rulegate validate --rules config/signup.yaml --input data/signup.json

  # Also report input fields that have no rules, as JSON
  rulegate validate --rules config/signup.yaml --input data/signup.json \\
      --check-fields --format json

  # Only apply the filters
  rulegate filter --rules config/signup.yaml --input data/signup.json
        """
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: $LOG_LEVEL or WARNING)"
    )
    parser.add_argument(
        "--log-format",
        default="json",
        choices=["json", "text"],
        help="Log output format (default: json)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Filter then validate a record")
    filter_parser = subparsers.add_parser("filter", help="Only filter a record")

    for sub in (validate_parser, filter_parser):
        sub.add_argument("--rules", required=True, help="Path to ruleset YAML file")
        sub.add_argument("--input", required=True, help="Path to input JSON or YAML file")
        sub.add_argument("--lang", default=None, help="Message language (default: $RULEGATE_LANG or en)")

    validate_parser.add_argument(
        "--check-fields",
        action="store_true",
        help="Report input fields that have no validation rules"
    )
    validate_parser.add_argument(
        "--format",
        default="text",
        choices=["text", "json"],
        help="Output format (default: text)"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logger(level=args.log_level, format_type=args.log_format)

    if not args.command:
        parser.print_help()
        return EXIT_CONFIG_ERROR

    commands = {
        "validate": validate_command,
        "filter": filter_command,
    }

    try:
        return commands[args.command](args)
    except (ValidationException, FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
