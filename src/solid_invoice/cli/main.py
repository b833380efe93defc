"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing and execution
- Integration with the invoice application service
"""
import argparse
import logging
import os
import sys
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from solid_invoice import __version__
from solid_invoice.cli.formatters import format_output
from solid_invoice.domain.core.exceptions import DomainException
from solid_invoice.domain.invoice.value_objects import SaveType
from solid_invoice.infrastructure.logging.logger import get_logger
from solid_invoice.infrastructure.persistence.exceptions import PersistenceError

OUTPUT_FORMATS = ['json', 'yaml', 'table']


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the resource-action structure."""

    # Main parser with global options
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]) or 'solid-invoice',
        description="solid-invoice - Compute book invoices and save them to pluggable media",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s invoices create --book-name "Clean Code" --price 1090 --quantity 1 \\
      --discount-rate 0.1 --tax-rate 0.15 --save-type file
  %(prog)s invoices list --save-type local_database --format table
  %(prog)s invoices show INVOICE_ID --save-type file
  %(prog)s save-types list
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file path')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Override the configured logging level')
    parser.add_argument('--format', choices=OUTPUT_FORMATS, default='json', help='Output format')
    parser.add_argument('--output', help='Output file (default: stdout)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    # Resource subparsers
    subparsers = parser.add_subparsers(dest='resource', help='Available resources')

    # Invoices resource
    invoices_parser = subparsers.add_parser('invoices', help='Create and read invoices')
    invoices_subparsers = invoices_parser.add_subparsers(dest='action', help='Invoice actions')

    # Invoices create
    invoices_create = invoices_subparsers.add_parser('create', help='Create and save an invoice')
    invoices_create.add_argument('--book-name', required=True, help='Book title')
    invoices_create.add_argument('--price', type=float, required=True, help='Unit price')
    invoices_create.add_argument('--quantity', type=int, required=True, help='Number of copies')
    invoices_create.add_argument('--discount-rate', type=float, default=0.0,
                                 help='Discount as a fraction between 0 and 1')
    invoices_create.add_argument('--tax-rate', type=float, default=0.0,
                                 help='Tax as a non-negative fraction')
    invoices_create.add_argument('--save-type',
                                 help=f'Save type (built-in: {", ".join(t.value for t in SaveType)}); '
                                      'defaults to the configured save type')

    # Invoices show
    invoices_show = invoices_subparsers.add_parser('show', help='Show a saved invoice')
    invoices_show.add_argument('invoice_id', help='Invoice ID to show')
    invoices_show.add_argument('--save-type', required=True, help='Save type the invoice was saved with')

    # Invoices list
    invoices_list = invoices_subparsers.add_parser('list', help='List saved invoices')
    invoices_list.add_argument('--save-type', required=True, help='Save type to list invoices from')

    # Save types resource
    save_types_parser = subparsers.add_parser('save-types', help='Inspect registered save types')
    save_types_subparsers = save_types_parser.add_subparsers(dest='action', help='Save type actions')
    save_types_subparsers.add_parser('list', help='List registered save types')

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def handle_create_invoice(args, app) -> Dict[str, Any]:
    service = app.invoice_service
    invoice = service.create_invoice(
        book_name=args.book_name,
        price=args.price,
        quantity=args.quantity,
        discount_rate=args.discount_rate,
        tax_rate=args.tax_rate,
        save_type=args.save_type,
    )
    service.save_invoice(invoice)
    return {"invoice": invoice.to_dict()}


def handle_show_invoice(args, app) -> Dict[str, Any]:
    invoice = app.invoice_service.get_invoice(args.invoice_id, args.save_type)
    return {"invoice": invoice.to_dict()}


def handle_list_invoices(args, app) -> Dict[str, Any]:
    invoices = app.invoice_service.list_invoices(args.save_type)
    return {
        "invoices": [invoice.to_dict() for invoice in invoices],
        "count": len(invoices),
    }


def handle_list_save_types(args, app) -> Dict[str, Any]:
    return {
        "save_types": app.invoice_service.available_save_types(),
        "default_save_type": app.config_manager.get_default_save_type(),
    }


COMMAND_HANDLERS: Dict[Tuple[str, str], Callable[[argparse.Namespace, Any], Dict[str, Any]]] = {
    ('invoices', 'create'): handle_create_invoice,
    ('invoices', 'show'): handle_show_invoice,
    ('invoices', 'list'): handle_list_invoices,
    ('save-types', 'list'): handle_list_save_types,
}


def execute_command(args, app) -> Dict[str, Any]:
    """Execute the appropriate command handler."""
    handler_key = (args.resource, args.action)
    if handler_key not in COMMAND_HANDLERS:
        raise ValueError(f"Unknown command: {args.resource} {args.action}")
    return COMMAND_HANDLERS[handler_key](args, app)


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    try:
        args = parse_args(argv)
        logger = get_logger(__name__)

        # Validate required arguments
        if not args.resource:
            print("Error: No resource specified. Use --help for usage information.")
            sys.exit(1)

        if not args.action:
            print(f"Error: No action specified for {args.resource}. Use --help for usage information.")
            sys.exit(1)

        # Initialize application
        try:
            from solid_invoice.bootstrap import create_application
            app = create_application(args.config)
        except (DomainException, RuntimeError) as e:
            logger.error(f"Failed to initialize application: {e}")
            print(f"Error: {e}")
            sys.exit(1)

        if args.log_level:
            logging.getLogger().setLevel(getattr(logging, args.log_level))

        # Execute command
        try:
            result = execute_command(args, app)
            formatted_output = format_output(result, args.format)

            if args.output:
                with open(args.output, 'w') as f:
                    f.write(formatted_output)
                print(f"Output written to {args.output}")
            else:
                print(formatted_output)

        except (DomainException, PersistenceError, PydanticValidationError) as e:
            logger.error(f"Command failed: {e}")
            print(f"Error: {e}")
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(130)
    except Exception as e:
        get_logger(__name__).error(f"Unexpected error: {e}")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
