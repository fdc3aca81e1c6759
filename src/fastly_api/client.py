"""Fastly API client for managing WAF, gzip and authorization resources.

Uses httpx for transport and decodes JSON:API responses into pydantic models.
"""

import json
import logging
from types import TracebackType
from typing import Any, NoReturn
from urllib.parse import quote

import httpx
from pydantic import ValidationError

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
from fastly_api.jsonapi import (
    JSONAPI_MEDIA_TYPE,
    marshal_payload,
    parse_links,
    unmarshal_many_payload,
    unmarshal_payload,
)
from fastly_api.models import (
    OWASP,
    WAF,
    Gzip,
    OWASPUpdate,
    Permission,
    Rule,
    RuleStatusFilters,
    RuleStatusResource,
    Ruleset,
    RuleVCL,
    ServiceAuthorization,
    WAFRuleStatusesResponse,
)
from fastly_api.paginator import PageOptions, Paginator
from fastly_api.settings import FastlyAPISettings, get_fastly_api_settings

logger = logging.getLogger(__name__)


def _require(**fields: Any) -> None:
    """Raise for the first empty required field, in argument order."""
    for name, value in fields.items():
        if not value:
            raise FastlyMissingFieldError(name)


def _escape(segment: str | int) -> str:
    return quote(str(segment), safe="")


def _permission(permission: Permission | str) -> str:
    """Return the wire value of a permission, rejecting unknown levels."""
    try:
        return Permission(permission).value
    except ValueError as e:
        msg = f"Invalid permission '{permission}'"
        raise FastlyValidationError(msg, field="permission") from e


class FastlyAPIClient:
    """Client for Fastly API operations.

    Provides methods for managing firewall objects, OWASP settings, gzip
    rules and service authorizations. Service-scoped methods called with an
    empty ``service_id`` use ``FASTLY_SERVICE_ID`` when it is configured.

    Example:
        ```python
        with FastlyAPIClient() as client:
            wafs = client.list_wafs("SU1Z0isxPaozGVKXdv0eY", 1)

            for authorization in client.new_list_service_authorizations_paginator():
                print(authorization.id)
        ```
    """

    def __init__(
        self,
        settings: FastlyAPISettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the Fastly API client.

        Args:
            settings: Optional settings. If not provided, reads from environment.
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
        """
        self.settings = settings or get_fastly_api_settings()
        self._http = httpx.Client(
            base_url=self.settings.fastly_api_url,
            headers={
                "Fastly-Key": self.settings.get_key_value(),
                "User-Agent": self.settings.user_agent,
                "Accept": "application/json",
            },
            timeout=self.settings.request_timeout,
            transport=transport,
        )

        logger.info("Initialized Fastly API client for %s", self.settings.fastly_api_url)

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> "FastlyAPIClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _service_id(self, service_id: str | None) -> str | None:
        """Return service_id, or the configured default service when empty."""
        return service_id or self.settings.fastly_service_id

    # =========================================================================
    # Transport
    # =========================================================================

    def _handle_api_error(
        self, error: Exception, resource: tuple[str, str] | None = None
    ) -> NoReturn:
        """Convert httpx exceptions to our custom exceptions.

        Args:
            error: Exception raised by httpx.
            resource: ``(type, id)`` of the addressed resource, reported on 404.

        Raises:
            FastlyAuthError: For authentication failures.
            FastlyRateLimitError: For rate limit errors.
            FastlyNotFoundError: For missing resources.
            FastlyConflictError: For conflicting changes.
            FastlyValidationError: For invalid requests.
            FastlyAPIError: For other API errors.
        """
        if isinstance(error, httpx.HTTPStatusError):
            response = error.response
            status = response.status_code
            message, errors, body = self._describe_error(response)

            if status in (401, 403):
                raise FastlyAuthError(
                    message or "Authentication failed. Check your API key.",
                    code=status,
                    errors=errors,
                    response=body,
                ) from error

            if status == 429:
                retry_after = response.headers.get("Retry-After", "")
                raise FastlyRateLimitError(
                    "Rate limit exceeded. Please wait before retrying.",
                    retry_after=int(retry_after) if retry_after.isdigit() else None,
                    code=status,
                ) from error

            if status == 404:
                resource_type, resource_id = resource or (None, None)
                raise FastlyNotFoundError(
                    message or f"Not found: {response.request.url.path}",
                    resource_type=resource_type,
                    resource_id=resource_id,
                    code=status,
                    errors=errors,
                    response=body,
                ) from error

            if status == 409:
                raise FastlyConflictError(
                    message, code=status, errors=errors, response=body
                ) from error

            if status in (400, 422):
                raise FastlyValidationError(
                    message, code=status, errors=errors, response=body
                ) from error

            raise FastlyAPIError(
                message, code=status, errors=errors, response=body
            ) from error

        if isinstance(error, httpx.RequestError):
            msg = f"Connection error: {error}"
            raise FastlyAPIError(msg) from error

        raise FastlyAPIError(str(error)) from error

    @staticmethod
    def _describe_error(
        response: httpx.Response,
    ) -> tuple[str, list[dict[str, Any]], dict[str, Any] | None]:
        """Extract message and details from an error response.

        Fastly answers with either ``{"msg": ..., "detail": ...}`` or a
        JSON:API ``{"errors": [...]}`` document.
        """
        default = f"HTTP {response.status_code} {response.reason_phrase}"
        try:
            body = response.json()
        except ValueError:
            return default, [], None
        if not isinstance(body, dict):
            return default, [], None

        errors = [e for e in body.get("errors") or [] if isinstance(e, dict)]
        if body.get("msg"):
            message = str(body["msg"])
            if body.get("detail"):
                message = f"{message}: {body['detail']}"
        elif errors:
            message = str(errors[0].get("title") or default)
        else:
            message = default
        return message, errors, body

    def _request(
        self,
        method: str,
        path: str,
        resource: tuple[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            self._handle_api_error(e, resource)
        return response

    def _check_link_origin(self, link: str) -> None:
        """Raise unless an absolute link points at the configured API host."""
        target = httpx.URL(link)
        if target.is_relative_url:
            return
        base = httpx.URL(self.settings.fastly_api_url)
        if (target.scheme, target.host, target.port) != (
            base.scheme,
            base.host,
            base.port,
        ):
            msg = f"Refusing to follow a link to another host: {target.host}"
            raise FastlyAPIError(msg)

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        resource: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Issue a GET request.

        Args:
            path: Path relative to the API URL, or an absolute URL.
            params: Query parameters.
            headers: Extra request headers.
            resource: ``(type, id)`` reported by FastlyNotFoundError.

        Returns:
            The successful response, body fully read.

        Raises:
            FastlyAPIError: If the request fails or returns a non-2xx status.
        """
        return self._request(
            "GET", path, resource=resource, params=params, headers=headers
        )

    def post_form(self, path: str, data: dict[str, Any]) -> httpx.Response:
        """Issue a form-encoded POST request, omitting None values."""
        form = {k: v for k, v in data.items() if v is not None}
        return self._request("POST", path, data=form)

    def put_form(
        self,
        path: str,
        data: dict[str, Any],
        resource: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Issue a form-encoded PUT request, omitting None values."""
        form = {k: v for k, v in data.items() if v is not None}
        return self._request("PUT", path, resource=resource, data=form)

    def post_jsonapi(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        """Issue a POST request with a JSON:API document body."""
        return self._request(
            "POST",
            path,
            content=json.dumps(payload),
            headers={"Content-Type": JSONAPI_MEDIA_TYPE, "Accept": JSONAPI_MEDIA_TYPE},
        )

    def patch_jsonapi(
        self,
        path: str,
        payload: dict[str, Any],
        resource: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Issue a PATCH request with a JSON:API document body."""
        return self._request(
            "PATCH",
            path,
            resource=resource,
            content=json.dumps(payload),
            headers={"Content-Type": JSONAPI_MEDIA_TYPE, "Accept": JSONAPI_MEDIA_TYPE},
        )

    def delete(
        self,
        path: str,
        headers: dict[str, str] | None = None,
        resource: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Issue a DELETE request."""
        return self._request("DELETE", path, resource=resource, headers=headers)

    # =========================================================================
    # WAF Operations
    # =========================================================================

    def list_wafs(self, service_id: str, version: int) -> list[WAF]:
        """List the firewall objects of a service version.

        Args:
            service_id: The service identifier.
            version: The service version number.

        Returns:
            List of WAF objects.

        Raises:
            FastlyMissingFieldError: If service_id or version is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version)

        path = f"/service/{_escape(service_id)}/version/{version}/wafs"
        response = self.get(path)
        wafs = unmarshal_many_payload(response.content, WAF)
        logger.debug("Listed %d WAFs for service %s", len(wafs), service_id)
        return wafs

    def create_waf(
        self,
        service_id: str,
        version: int,
        prefetch_condition: str | None = None,
        response: str | None = None,
    ) -> WAF:
        """Create a firewall object.

        Args:
            service_id: The service identifier.
            version: The service version number.
            prefetch_condition: Condition deciding when the firewall runs.
            response: Response object served for blocked requests.

        Returns:
            The created WAF.

        Raises:
            FastlyMissingFieldError: If service_id or version is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version)

        path = f"/service/{_escape(service_id)}/version/{version}/wafs"
        payload = marshal_payload(
            "waf",
            {"prefetch_condition": prefetch_condition, "response": response},
        )
        waf = unmarshal_payload(self.post_jsonapi(path, payload).content, WAF)
        logger.info("Created WAF %s on service %s version %d", waf.id, service_id, version)
        return waf

    def get_waf(self, service_id: str, version: int, waf_id: str) -> WAF:
        """Get a firewall object.

        Args:
            service_id: The service identifier.
            version: The service version number.
            waf_id: The firewall identifier.

        Returns:
            WAF object.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyNotFoundError: If the firewall doesn't exist.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version, waf_id=waf_id)

        path = f"/service/{_escape(service_id)}/version/{version}/wafs/{_escape(waf_id)}"
        response = self.get(path, resource=("waf", waf_id))
        return unmarshal_payload(response.content, WAF)

    def update_waf(
        self,
        service_id: str,
        version: int,
        waf_id: str,
        prefetch_condition: str | None = None,
        response: str | None = None,
    ) -> WAF:
        """Update a firewall object.

        Args:
            service_id: The service identifier.
            version: The service version number.
            waf_id: The firewall identifier.
            prefetch_condition: New prefetch condition name.
            response: New response object name.

        Returns:
            The updated WAF.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version, waf_id=waf_id)

        path = f"/service/{_escape(service_id)}/version/{version}/wafs/{_escape(waf_id)}"
        payload = marshal_payload(
            "waf",
            {"prefetch_condition": prefetch_condition, "response": response},
            resource_id=waf_id,
        )
        reply = self.patch_jsonapi(path, payload, resource=("waf", waf_id))
        waf = unmarshal_payload(reply.content, WAF)
        logger.info("Updated WAF %s", waf_id)
        return waf

    def delete_waf(self, service_id: str, version: int, waf_id: str) -> None:
        """Delete a firewall object.

        Args:
            service_id: The service identifier.
            version: The service version number.
            waf_id: The firewall identifier.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version, waf_id=waf_id)

        path = f"/service/{_escape(service_id)}/version/{version}/wafs/{_escape(waf_id)}"
        self.delete(path, resource=("waf", waf_id))
        logger.info("Deleted WAF %s", waf_id)

    # =========================================================================
    # OWASP Operations
    # =========================================================================

    def get_owasp(self, service_id: str, waf_id: str) -> OWASP:
        """Get the OWASP settings of a firewall object.

        Args:
            service_id: The service identifier.
            waf_id: The firewall identifier.

        Returns:
            OWASP settings.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, waf_id=waf_id)

        path = f"/service/{_escape(service_id)}/wafs/{_escape(waf_id)}/owasp"
        return unmarshal_payload(self.get(path).content, OWASP)

    def create_owasp(self, service_id: str, waf_id: str) -> OWASP:
        """Create OWASP settings for a firewall object.

        Args:
            service_id: The service identifier.
            waf_id: The firewall identifier.

        Returns:
            The created OWASP settings.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, waf_id=waf_id)

        path = f"/service/{_escape(service_id)}/wafs/{_escape(waf_id)}/owasp"
        payload = marshal_payload("owasp", resource_id=waf_id)
        owasp = unmarshal_payload(self.post_jsonapi(path, payload).content, OWASP)
        logger.info("Created OWASP settings %s for WAF %s", owasp.id, waf_id)
        return owasp

    def update_owasp(
        self,
        service_id: str,
        waf_id: str,
        owasp_id: str,
        settings: OWASPUpdate,
    ) -> OWASP:
        """Update the OWASP settings of a firewall object.

        Args:
            service_id: The service identifier.
            waf_id: The firewall identifier.
            owasp_id: The OWASP settings identifier.
            settings: Settings to change; unset fields are left untouched.

        Returns:
            The updated OWASP settings.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, waf_id=waf_id, owasp_id=owasp_id)

        path = f"/service/{_escape(service_id)}/wafs/{_escape(waf_id)}/owasp"
        payload = marshal_payload(
            "owasp", settings.to_api_attributes(), resource_id=owasp_id
        )
        response = self.patch_jsonapi(path, payload, resource=("owasp", owasp_id))
        owasp = unmarshal_payload(response.content, OWASP)
        logger.info("Updated OWASP settings %s for WAF %s", owasp_id, waf_id)
        return owasp

    # =========================================================================
    # Rule Operations
    # =========================================================================

    def list_rules(self) -> list[Rule]:
        """List all WAF rules.

        Returns:
            List of Rule objects.

        Raises:
            FastlyAPIError: If the API request fails.
        """
        rules = unmarshal_many_payload(self.get("/wafs/rules").content, Rule)
        logger.debug("Listed %d WAF rules", len(rules))
        return rules

    def get_rule(self, rule_id: str) -> Rule:
        """Get a WAF rule.

        Args:
            rule_id: The rule identifier.

        Returns:
            Rule object.

        Raises:
            FastlyMissingFieldError: If rule_id is empty.
            FastlyAPIError: If the API request fails.
        """
        _require(rule_id=rule_id)

        path = f"/wafs/rules/{_escape(rule_id)}"
        return unmarshal_payload(self.get(path, resource=("rule", rule_id)).content, Rule)

    def get_rule_vcl(self, rule_id: str) -> RuleVCL:
        """Get the VCL generated for a rule."""
        _require(rule_id=rule_id)

        path = f"/wafs/rules/{_escape(rule_id)}/vcl"
        response = self.get(path, resource=("rule", rule_id))
        return unmarshal_payload(response.content, RuleVCL)

    def get_waf_rule_vcl(self, waf_id: str, rule_id: str) -> RuleVCL:
        """Get the VCL of a rule as configured on a firewall object."""
        _require(waf_id=waf_id, rule_id=rule_id)

        path = f"/wafs/{_escape(waf_id)}/rules/{_escape(rule_id)}/vcl"
        response = self.get(path, resource=("rule", rule_id))
        return unmarshal_payload(response.content, RuleVCL)

    def get_waf_ruleset(self, service_id: str, waf_id: str) -> Ruleset:
        """Get the ruleset VCL of a firewall object.

        Args:
            service_id: The service identifier.
            waf_id: The firewall identifier.

        Returns:
            Ruleset object.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, waf_id=waf_id)

        path = f"/service/{_escape(service_id)}/wafs/{_escape(waf_id)}/ruleset"
        return unmarshal_payload(self.get(path).content, Ruleset)

    def update_waf_ruleset(self, service_id: str, waf_id: str) -> Ruleset:
        """Regenerate and deploy the ruleset of a firewall object.

        Args:
            service_id: The service identifier.
            waf_id: The firewall identifier.

        Returns:
            The updated Ruleset.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, waf_id=waf_id)

        path = f"/service/{_escape(service_id)}/wafs/{_escape(waf_id)}/ruleset"
        payload = marshal_payload("ruleset", resource_id=waf_id)
        ruleset = unmarshal_payload(self.patch_jsonapi(path, payload).content, Ruleset)
        logger.info("Updated ruleset of WAF %s", waf_id)
        return ruleset

    def get_waf_rule_statuses(
        self,
        service_id: str,
        waf_id: str,
        filters: RuleStatusFilters | None = None,
    ) -> WAFRuleStatusesResponse:
        """Get the status of the rules of a firewall object.

        Follows ``next`` links until every page has been read.

        Args:
            service_id: The service identifier.
            waf_id: The firewall identifier.
            filters: Optional filters and paging for the first request.

        Returns:
            All matching rule statuses and the links of the last page read.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If any page request fails, or a next
                link points at another host.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, waf_id=waf_id)

        filters = filters or RuleStatusFilters()
        path = f"/service/{_escape(service_id)}/wafs/{_escape(waf_id)}/rule_statuses"
        result = WAFRuleStatusesResponse()

        # next links already carry the filters
        response = self.get(path, params=filters.to_params())
        while True:
            body = response.content
            result.links = parse_links(body)
            for resource in unmarshal_many_payload(body, RuleStatusResource):
                result.rules.append(resource.simplify())

            if not result.links.next:
                break
            self._check_link_origin(result.links.next)
            logger.debug("Following rule statuses page %s", result.links.next)
            response = self.get(result.links.next)

        logger.debug("Retrieved %d rule statuses for WAF %s", len(result.rules), waf_id)
        return result

    # =========================================================================
    # Gzip Operations
    # =========================================================================

    def list_gzips(self, service_id: str, version: int) -> list[Gzip]:
        """List the gzip rules of a service version.

        Args:
            service_id: The service identifier.
            version: The service version number.

        Returns:
            List of Gzip objects.

        Raises:
            FastlyMissingFieldError: If service_id or version is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version)

        path = f"/service/{_escape(service_id)}/version/{version}/gzip"
        items = self._decode_json(self.get(path))
        if not isinstance(items, list):
            msg = "Expected a list of gzip rules"
            raise FastlyDecodeError(msg)
        gzips = [self._to_gzip(item) for item in items]
        logger.debug("Listed %d gzip rules for service %s", len(gzips), service_id)
        return gzips

    def create_gzip(
        self,
        service_id: str,
        version: int,
        name: str | None = None,
        content_types: str | None = None,
        extensions: str | None = None,
        cache_condition: str | None = None,
    ) -> Gzip:
        """Create a gzip rule.

        Omitted content types and extensions are filled in with Fastly's
        defaults.

        Args:
            service_id: The service identifier.
            version: The service version number.
            name: Rule name.
            content_types: Space-separated content types to compress.
            extensions: Space-separated file extensions to compress.
            cache_condition: Name of the controlling cache condition.

        Returns:
            The created Gzip rule.

        Raises:
            FastlyMissingFieldError: If service_id or version is empty.
            FastlyConflictError: If the name is already used in the version.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version)

        path = f"/service/{_escape(service_id)}/version/{version}/gzip"
        response = self.post_form(
            path,
            {
                "name": name,
                "content_types": content_types,
                "extensions": extensions,
                "cache_condition": cache_condition,
            },
        )
        gzip = self._to_gzip(self._decode_json(response))
        logger.info("Created gzip rule '%s' on service %s", gzip.name, service_id)
        return gzip

    def get_gzip(self, service_id: str, version: int, name: str) -> Gzip:
        """Get a gzip rule by name.

        Args:
            service_id: The service identifier.
            version: The service version number.
            name: Rule name.

        Returns:
            Gzip object.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyNotFoundError: If the rule doesn't exist.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version, name=name)

        path = f"/service/{_escape(service_id)}/version/{version}/gzip/{_escape(name)}"
        response = self.get(path, resource=("gzip", name))
        return self._to_gzip(self._decode_json(response))

    def update_gzip(
        self,
        service_id: str,
        version: int,
        name: str,
        new_name: str | None = None,
        content_types: str | None = None,
        extensions: str | None = None,
        cache_condition: str | None = None,
    ) -> Gzip:
        """Update a gzip rule.

        Args:
            service_id: The service identifier.
            version: The service version number.
            name: Current rule name.
            new_name: New rule name.
            content_types: New content types.
            extensions: New extensions.
            cache_condition: New cache condition name.

        Returns:
            The updated Gzip rule.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version, name=name)

        path = f"/service/{_escape(service_id)}/version/{version}/gzip/{_escape(name)}"
        response = self.put_form(
            path,
            {
                "name": new_name,
                "content_types": content_types,
                "extensions": extensions,
                "cache_condition": cache_condition,
            },
            resource=("gzip", name),
        )
        gzip = self._to_gzip(self._decode_json(response))
        logger.info("Updated gzip rule '%s'", name)
        return gzip

    def delete_gzip(self, service_id: str, version: int, name: str) -> None:
        """Delete a gzip rule.

        Args:
            service_id: The service identifier.
            version: The service version number.
            name: Rule name.

        Raises:
            FastlyMissingFieldError: If any identifier is empty.
            FastlyNotOKError: If Fastly does not confirm the deletion.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, version=version, name=name)

        path = f"/service/{_escape(service_id)}/version/{version}/gzip/{_escape(name)}"
        body = self._decode_json(self.delete(path, resource=("gzip", name)))
        if not isinstance(body, dict) or body.get("status") != "ok":
            msg = f"Deleting gzip rule '{name}' was not confirmed"
            raise FastlyNotOKError(msg, response=body if isinstance(body, dict) else None)
        logger.info("Deleted gzip rule '%s'", name)

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            msg = f"Response body is not valid JSON: {e}"
            raise FastlyDecodeError(msg) from e

    @staticmethod
    def _to_gzip(item: Any) -> Gzip:
        if not isinstance(item, dict):
            msg = "Expected a gzip rule object"
            raise FastlyDecodeError(msg)
        try:
            return Gzip.model_validate(item)
        except ValidationError as e:
            msg = f"Invalid gzip rule: {e}"
            raise FastlyDecodeError(msg, response=item) from e

    # =========================================================================
    # Service Authorization Operations
    # =========================================================================

    def get_service_authorization(self, authorization_id: str) -> ServiceAuthorization:
        """Get a service authorization.

        Args:
            authorization_id: The service authorization identifier.

        Returns:
            ServiceAuthorization object.

        Raises:
            FastlyMissingFieldError: If authorization_id is empty.
            FastlyNotFoundError: If the authorization doesn't exist.
            FastlyAPIError: If the API request fails.
        """
        _require(authorization_id=authorization_id)

        path = f"/service-authorizations/{_escape(authorization_id)}"
        response = self.get(
            path,
            headers={"Accept": JSONAPI_MEDIA_TYPE},
            resource=("service_authorization", authorization_id),
        )
        return unmarshal_payload(response.content, ServiceAuthorization)

    def create_service_authorization(
        self,
        service_id: str,
        user_id: str,
        permission: Permission | str | None = None,
    ) -> ServiceAuthorization:
        """Grant a user a permission on a service.

        Args:
            service_id: The service to grant the permission on.
            user_id: The user receiving the permission.
            permission: A Permission or its value; omitted to use Fastly's default.

        Returns:
            The created ServiceAuthorization.

        Raises:
            FastlyMissingFieldError: If service_id or user_id is empty.
            FastlyValidationError: If permission is not a known level.
            FastlyAPIError: If the API request fails.
        """
        service_id = self._service_id(service_id)
        _require(service_id=service_id, user_id=user_id)

        payload = marshal_payload(
            "service_authorization",
            {"permission": _permission(permission) if permission else None},
            relationships={
                "service": ("service", service_id),
                "user": ("user", user_id),
            },
        )
        response = self.post_jsonapi("/service-authorizations", payload)
        authorization = unmarshal_payload(response.content, ServiceAuthorization)
        logger.info(
            "Created service authorization %s for service %s",
            authorization.id,
            service_id,
        )
        return authorization

    def update_service_authorization(
        self, authorization_id: str, permission: Permission | str
    ) -> ServiceAuthorization:
        """Change the permission of a service authorization.

        Args:
            authorization_id: The service authorization identifier.
            permission: New permission level.

        Returns:
            The updated ServiceAuthorization.

        Raises:
            FastlyMissingFieldError: If authorization_id or permission is empty.
            FastlyValidationError: If permission is not a known level.
            FastlyAPIError: If the API request fails.
        """
        _require(authorization_id=authorization_id, permission=permission)

        path = f"/service-authorizations/{_escape(authorization_id)}"
        payload = marshal_payload(
            "service_authorization",
            {"permission": _permission(permission)},
            resource_id=authorization_id,
        )
        response = self.patch_jsonapi(
            path, payload, resource=("service_authorization", authorization_id)
        )
        authorization = unmarshal_payload(response.content, ServiceAuthorization)
        logger.info("Updated service authorization %s", authorization_id)
        return authorization

    def delete_service_authorization(self, authorization_id: str) -> None:
        """Revoke a service authorization.

        Args:
            authorization_id: The service authorization identifier.

        Raises:
            FastlyMissingFieldError: If authorization_id is empty.
            FastlyAPIError: If the API request fails.
        """
        _require(authorization_id=authorization_id)

        self.delete(
            f"/service-authorizations/{_escape(authorization_id)}",
            resource=("service_authorization", authorization_id),
        )
        logger.info("Deleted service authorization %s", authorization_id)

    def list_service_authorizations(self) -> list[ServiceAuthorization]:
        """List the service authorizations on the first page of results.

        Use :meth:`new_list_service_authorizations_paginator` to read every
        page.

        Returns:
            List of ServiceAuthorization objects.

        Raises:
            FastlyAPIError: If the API request fails.
        """
        response = self.get(
            "/service-authorizations", headers={"Accept": JSONAPI_MEDIA_TYPE}
        )
        return unmarshal_many_payload(response.content, ServiceAuthorization)

    def new_list_service_authorizations_paginator(
        self, per_page: int = 0, page: int = 0
    ) -> Paginator[ServiceAuthorization]:
        """Create a paginator over all service authorizations.

        Args:
            per_page: Page size; zero uses the configured default.
            page: Page to start from; zero starts at the first page.

        Returns:
            A paginator that has not fetched anything yet.
        """
        return Paginator(
            self,
            "/service-authorizations",
            ServiceAuthorization,
            PageOptions(per_page=per_page, page=page),
            default_page_size=self.settings.default_page_size,
        )
