"""
Payment Kernel

Shared infrastructure for the payment reporting engine:
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Injectable clock
- SQLAlchemy persistence of payments, employees and counterparties
- Read-only selectors (payment source, entity name resolution)
"""

__version__ = "0.1.0"
