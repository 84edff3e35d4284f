"""pp-cli — CLI tool for managing Microsoft Power Platform cards."""

from pp_cli.client import PowerPlatformClient
from pp_cli.config import VERSION
from pp_cli.exceptions import (
    ApiError,
    CardLookupError,
    CliError,
    SetupError,
    ValidationError,
)
from pp_cli.remover import CardRemover, RemovalRequest
from pp_cli.types import CardListResult, CardRow, RemoveCardResult

__all__ = [
    "VERSION",
    "PowerPlatformClient",
    "CardRemover",
    "RemovalRequest",
    "ApiError",
    "CardLookupError",
    "CliError",
    "SetupError",
    "ValidationError",
    "CardListResult",
    "CardRow",
    "RemoveCardResult",
]
