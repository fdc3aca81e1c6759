"""Fastly API client package.

Provides a high-level client for managing Fastly configuration resources
including web application firewalls, OWASP settings, gzip rules and
service authorizations.

Example:
    ```python
    from fastly_api import FastlyAPIClient

    client = FastlyAPIClient()

    # Create a gzip rule on a draft version
    client.create_gzip("SU1Z0isxPaozGVKXdv0eY", 3, name="compress-text")

    # Walk every page of service authorizations
    paginator = client.new_list_service_authorizations_paginator(per_page=50)
    while paginator.has_next():
        for authorization in paginator.get_next():
            print(authorization.id, authorization.permission)
    ```
"""

from fastly_api.client import FastlyAPIClient
from fastly_api.exceptions import (
    FastlyAPIError,
    FastlyAuthError,
    FastlyConflictError,
    FastlyDecodeError,
    FastlyMissingFieldError,
    FastlyNotFoundError,
    FastlyNotOKError,
    FastlyRateLimitError,
    FastlyValidationError,
)
from fastly_api.models import (
    OWASP,
    WAF,
    Gzip,
    OWASPUpdate,
    PaginationLinks,
    Permission,
    Rule,
    RuleStatusFilters,
    Ruleset,
    RuleVCL,
    SAService,
    SAUser,
    ServiceAuthorization,
    WAFConfigurationSet,
    WAFRuleStatus,
    WAFRuleStatusesResponse,
)
from fastly_api.paginator import PageOptions, Paginator, PaginatorState
from fastly_api.settings import (
    FastlyAPISettings,
    get_fastly_api_settings,
    reset_settings,
)

__all__ = [
    "OWASP",
    "WAF",
    "FastlyAPIClient",
    "FastlyAPIError",
    "FastlyAPISettings",
    "FastlyAuthError",
    "FastlyConflictError",
    "FastlyDecodeError",
    "FastlyMissingFieldError",
    "FastlyNotFoundError",
    "FastlyNotOKError",
    "FastlyRateLimitError",
    "FastlyValidationError",
    "Gzip",
    "OWASPUpdate",
    "PageOptions",
    "PaginationLinks",
    "Paginator",
    "PaginatorState",
    "Permission",
    "Rule",
    "RuleStatusFilters",
    "RuleVCL",
    "Ruleset",
    "SAService",
    "SAUser",
    "ServiceAuthorization",
    "WAFConfigurationSet",
    "WAFRuleStatus",
    "WAFRuleStatusesResponse",
    "get_fastly_api_settings",
    "reset_settings",
]

__version__ = "0.1.0"
