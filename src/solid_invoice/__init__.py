"""Solid Invoice - Root Package.

Builds book invoices and persists them through pluggable save strategies.

Key Components:
    - domain: Invoice and Book models, domain exceptions
    - application: Invoice application service
    - infrastructure: Save-type registry, persistence strategies, logging
    - config: Configuration schemas, loading and management
    - cli: Command-line interface

Architecture:
    Persistence media are selected through a save-type registry, so a new
    medium is added by registering a strategy rather than editing existing ones.

Usage:
    >>> solid-invoice invoices create --book-name "Domain-Driven Design" \\
    ...     --price 1090 --quantity 1 --discount-rate 0.1 --tax-rate 0.15
"""

__version__ = "1.0.0"
PACKAGE_NAME = "solid-invoice"

__author__ = "Solid Invoice Maintainers"
__package_name__ = PACKAGE_NAME
