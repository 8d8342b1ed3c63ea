#!/usr/bin/env python3
"""
Identity Validator - Main Entry Point.

Command-line access to template-driven extraction and check digit
validation of machine readable identity lines.

Usage:
    Command Line:
        python main.py --template UTO.p --lines "P<UTOERIKSSON<<...<br>L898902C36UTO..."
        python main.py --template CH.id --input scans.txt --output report.json
        python main.py --list

    Python:
        from main import run_validation
        records = run_validation("UTO.p", [mrz])

Author: Identity Validator Team
Version: 1.0.0
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager
from identity_validator import IdentityValidator
from identity_validator.output_handler import OutputHandler, ValidationRecord
from identity_validator.utils.exceptions import (
    ExtractionError,
    IdentityValidatorError,
    MalformedTemplateError,
)
from identity_validator.utils.helpers import validate_file_exists
from identity_validator.utils.logger import ROOT_LOGGER_NAME, get_logger, setup_logger_from_config


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Identity Validator - MRZ extraction and check digit validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Validate one passport zone:
        python main.py -t UTO.p -l "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<<br>L898902C36UTO7408122F1204159ZE184226B<<<<<10"

    Validate a file with one zone per line and write reports:
        python main.py -t CH.id -i scans.txt -o report.json --excel report.xlsx

    List supported documents:
        python main.py --list
        """
    )

    parser.add_argument(
        "--template", "-t",
        type=str,
        default=None,
        help="Template identifier, e.g. CH.id"
    )

    parser.add_argument(
        "--lines", "-l",
        type=str,
        action="append",
        default=[],
        help="Machine readable lines (repeatable)"
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Text file with one machine readable zone per line"
    )

    parser.add_argument(
        "--templates-dir",
        type=str,
        default=None,
        help="Root of a custom template store"
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="List supported document types and exit"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write a JSON report to this file"
    )

    parser.add_argument(
        "--excel",
        type=str,
        default=None,
        help="Write an Excel report to this file"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.DEBUG)
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.setLevel(logging.DEBUG)

    logger.debug(f"Version: {config.get('project.version', '1.0.0')}")
    return config


def read_inputs(args: argparse.Namespace) -> List[str]:
    """
    Collect the machine readable zones to validate.

    Raises:
        FileNotFoundError: If the input file doesn't exist.
    """
    inputs = list(args.lines)

    if args.input:
        if not validate_file_exists(args.input):
            raise FileNotFoundError(f"Input file not found: {args.input}")
        with open(args.input, 'r', encoding='utf-8') as f:
            inputs.extend(line.strip() for line in f if line.strip())

    return inputs


def run_validation(
    template: str,
    inputs: List[str],
    template_path: Optional[str] = None
) -> List[ValidationRecord]:
    """
    Extract and validate every input with one template.

    Inputs that cannot be extracted are recorded with their error
    instead of stopping the batch. A broken template stops it.

    Args:
        template: Template identifier.
        inputs: Machine readable zones.
        template_path: Optional custom template store.

    Returns:
        One ValidationRecord per input.

    Raises:
        TemplateNotFoundError: If the template doesn't exist.
        MalformedTemplateError: If the template is unusable.
    """
    logger = get_logger(__name__)
    validator = IdentityValidator(template, template_path=template_path)
    notation = validator.template.notation

    records = []
    for lines in inputs:
        record = ValidationRecord(lines=lines, notation=notation)

        try:
            validator.add_machine_readable_lines(lines)
        except ExtractionError as e:
            logger.error(f"Could not extract '{lines}': {e}")
            record.add_error(str(e))
            records.append(record)
            continue

        record.document = validator.get_document()
        report = validator.get_validation_report()
        record.is_valid = report.is_valid
        record.errors.extend(report.errors)
        records.append(record)

    logger.info(
        f"Validated {len(records)} input(s): "
        f"{sum(1 for r in records if r.is_valid)} valid"
    )
    return records


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 when every input is valid, 2 when some are not,
        1 for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        if args.list:
            validator = IdentityValidator(template_path=args.templates_dir)
            print(json.dumps(validator.get_supported_types(), indent=2, ensure_ascii=False))
            return 0

        if not args.template:
            logger.error("No template given (use --template or --list)")
            return 1

        inputs = read_inputs(args)
        if not inputs:
            logger.error("No machine readable lines to validate")
            return 1

        records = run_validation(args.template, inputs, args.templates_dir)

        output_handler = OutputHandler(
            json_enabled=args.output is not None,
            excel_enabled=args.excel is not None
        )
        output_handler.save(records, json_path=args.output, excel_path=args.excel)

        if args.output is None:
            print(json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False))

        return 0 if all(r.is_valid for r in records) else 2

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except MalformedTemplateError as e:
        print(f"Template error: {e}", file=sys.stderr)
        return 1

    except IdentityValidatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if "--debug" in sys.argv:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
