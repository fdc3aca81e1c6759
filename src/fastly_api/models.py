"""Pydantic models for Fastly API responses.

Type-safe models for WAF objects, OWASP settings, rules, gzip rules and
service authorizations. Models decoded from JSON:API documents declare the
resource ``type`` they accept in ``jsonapi_type``.
"""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Permission(str, Enum):
    """Permission levels a service authorization can grant."""

    FULL = "full"
    READ_ONLY = "read_only"
    PURGE_SELECT = "purge_select"
    PURGE_ALL = "purge_all"


class PaginationLinks(BaseModel):
    """Links block of a paginated JSON:API response.

    Attributes:
        first: URL of the first page
        last: URL of the last page
        next: URL of the next page, absent on the last page
    """

    first: str | None = None
    last: str | None = None
    next: str | None = None


class JSONAPIModel(BaseModel):
    """Base for models decoded from JSON:API resource objects."""

    model_config = ConfigDict(extra="ignore")

    jsonapi_type: ClassVar[str] = ""


# =========================================================================
# WAF
# =========================================================================


class WAFConfigurationSet(JSONAPIModel):
    """Configuration set a firewall object is attached to."""

    jsonapi_type: ClassVar[str] = "configuration_set"

    id: str


class WAF(JSONAPIModel):
    """A web application firewall object.

    Attributes:
        id: Firewall identifier
        version: Service version the firewall belongs to
        prefetch_condition: Name of the condition deciding when the WAF runs
        response: Name of the response object used when a request is blocked
        last_push: When the ruleset was last deployed
        configuration_set: Related configuration set
    """

    jsonapi_type: ClassVar[str] = "waf"

    id: str
    version: int = 0
    prefetch_condition: str | None = None
    response: str | None = None
    last_push: str | None = None
    configuration_set: WAFConfigurationSet | None = None


class OWASP(JSONAPIModel):
    """OWASP rule-set settings of a firewall object."""

    jsonapi_type: ClassVar[str] = "owasp"

    id: str
    allowed_http_versions: str | None = None
    allowed_methods: str | None = None
    allowed_request_content_type: str | None = None
    arg_length: int | None = None
    arg_name_length: int | None = None
    combined_file_sizes: int | None = None
    created_at: str | None = None
    critical_anomaly_score: int | None = None
    crs_validate_utf8_encoding: bool | None = None
    error_anomaly_score: int | None = None
    high_risk_country_codes: str | None = None
    http_violation_score_threshold: int | None = None
    inbound_anomaly_score_threshold: int | None = None
    lfi_score_threshold: int | None = None
    max_file_size: int | None = None
    max_num_args: int | None = None
    notice_anomaly_score: int | None = None
    paranoia_level: int | None = None
    php_injection_score_threshold: int | None = None
    rce_score_threshold: int | None = None
    restricted_extensions: str | None = None
    restricted_headers: str | None = None
    rfi_score_threshold: int | None = None
    session_fixation_score_threshold: int | None = None
    sql_injection_score_threshold: int | None = None
    total_arg_length: int | None = None
    updated_at: str | None = None
    warning_anomaly_score: int | None = None
    xss_score_threshold: int | None = None


class OWASPUpdate(BaseModel):
    """Input model for updating OWASP settings.

    Only fields that are set are sent to the API.
    """

    allowed_http_versions: str | None = None
    allowed_methods: str | None = None
    allowed_request_content_type: str | None = None
    arg_length: int | None = None
    arg_name_length: int | None = None
    combined_file_sizes: int | None = None
    critical_anomaly_score: int | None = None
    crs_validate_utf8_encoding: bool | None = None
    error_anomaly_score: int | None = None
    high_risk_country_codes: str | None = None
    http_violation_score_threshold: int | None = None
    inbound_anomaly_score_threshold: int | None = None
    lfi_score_threshold: int | None = None
    max_file_size: int | None = None
    max_num_args: int | None = None
    notice_anomaly_score: int | None = None
    paranoia_level: int | None = None
    php_injection_score_threshold: int | None = None
    rce_score_threshold: int | None = None
    restricted_extensions: str | None = None
    restricted_headers: str | None = None
    rfi_score_threshold: int | None = None
    session_fixation_score_threshold: int | None = None
    sql_injection_score_threshold: int | None = None
    total_arg_length: int | None = None
    warning_anomaly_score: int | None = None
    xss_score_threshold: int | None = None

    def to_api_attributes(self) -> dict[str, Any]:
        """Convert to JSON:API attributes.

        Returns:
            Dictionary of the fields that were set.
        """
        return self.model_dump(exclude_none=True)


# =========================================================================
# Rules
# =========================================================================


class Rule(JSONAPIModel):
    """A WAF rule."""

    jsonapi_type: ClassVar[str] = "rule"

    id: str
    rule_id: str | None = None
    severity: int | None = None
    message: str | None = None


class RuleVCL(JSONAPIModel):
    """VCL generated for a rule."""

    jsonapi_type: ClassVar[str] = "rule_vcl"

    id: str
    vcl: str | None = None


class Ruleset(JSONAPIModel):
    """VCL of all rules deployed on a firewall object."""

    jsonapi_type: ClassVar[str] = "ruleset"

    id: str
    vcl: str | None = None
    last_push: str | None = None


class RuleStatusRule(JSONAPIModel):
    jsonapi_type: ClassVar[str] = "rule"

    # Rule IDs are numeric, every other identifier is a string
    id: int


class RuleStatusWAF(JSONAPIModel):
    jsonapi_type: ClassVar[str] = "waf"

    id: str


class RuleStatusResource(JSONAPIModel):
    """A rule status as sent by Fastly, with rule and waf relationships."""

    jsonapi_type: ClassVar[str] = "rule_status"

    id: str
    status: str | None = None
    rule: RuleStatusRule | None = None
    waf: RuleStatusWAF | None = None

    def simplify(self) -> "WAFRuleStatus":
        """Flatten into a WAFRuleStatus."""
        return WAFRuleStatus(
            rule_id=self.rule.id if self.rule else 0,
            waf_id=self.waf.id if self.waf else "",
            status_id=self.id,
            status=self.status or "",
        )


class WAFRuleStatus(BaseModel):
    """Status of one rule on a firewall object.

    Attributes:
        rule_id: Numeric rule identifier
        waf_id: Firewall identifier
        status_id: Identifier of the status object
        status: Rule status (log, block, disabled)
    """

    rule_id: int
    waf_id: str
    status_id: str
    status: str


class WAFRuleStatusesResponse(BaseModel):
    """Accumulated rule statuses across every page of a listing."""

    rules: list[WAFRuleStatus] = Field(default_factory=list)
    links: PaginationLinks = Field(default_factory=PaginationLinks)


class RuleStatusFilters(BaseModel):
    """Filters for listing rule statuses of a firewall object.

    Zero and empty values are not sent, so a filter cannot match them.

    Attributes:
        status: Filter by rule status
        accuracy: Filter by rule accuracy
        maturity: Filter by rule maturity
        message: Filter by rule message
        revision: Filter by rule revision
        rule_id: Filter by rule ID
        tag_id: Filter by a single tag ID
        tag_name: Filter by a single tag name
        version: Filter by rule version
        tags: Return rules having any of these tag IDs
        max_results: Page size
        page: Page number, starting at 1
    """

    status: str = ""
    accuracy: int = 0
    maturity: int = 0
    message: str = ""
    revision: int = 0
    rule_id: str = ""
    tag_id: int = 0
    tag_name: str = ""
    version: str = ""
    tags: list[int] = Field(default_factory=list)
    max_results: int = 0
    page: int = 0

    def to_params(self) -> dict[str, str]:
        """Convert to query parameters.

        Returns:
            Dictionary of query parameters with unset filters omitted.
        """
        pairings: dict[str, str | int | list[int]] = {
            "filter[status]": self.status,
            "filter[rule][accuracy]": self.accuracy,
            "filter[rule][maturity]": self.maturity,
            "filter[rule][message]": self.message,
            "filter[rule][revision]": self.revision,
            "filter[rule][rule_id]": self.rule_id,
            "filter[rule][tags]": self.tag_id,
            "filter[rule][tags][name]": self.tag_name,
            "filter[rule][version]": self.version,
            "include": self.tags,
            "page[size]": self.max_results,
            "page[number]": self.page,
        }
        params: dict[str, str] = {}
        for key, value in pairings.items():
            if isinstance(value, list):
                if value:
                    params[key] = ",".join(str(v) for v in value)
            elif value:
                params[key] = str(value)
        return params


# =========================================================================
# Gzip
# =========================================================================


class Gzip(BaseModel):
    """A gzip compression rule of a service version.

    Attributes:
        service_id: Service identifier
        service_version: Service version number
        name: Rule name, unique within the version
        content_types: Space-separated content types to compress
        extensions: Space-separated file extensions to compress
        cache_condition: Name of the cache condition controlling the rule
        created_at: When the rule was created
        updated_at: When the rule was last modified
        deleted_at: When the rule was deleted
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    service_id: str | None = None
    service_version: int | None = Field(default=None, alias="version")
    name: str
    content_types: str | None = None
    extensions: str | None = None
    cache_condition: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


# =========================================================================
# Service authorizations
# =========================================================================


class SAUser(JSONAPIModel):
    jsonapi_type: ClassVar[str] = "user"

    id: str


class SAService(JSONAPIModel):
    jsonapi_type: ClassVar[str] = "service"

    id: str


class ServiceAuthorization(JSONAPIModel):
    """Grant of a permission on a service to a user.

    Attributes:
        id: Authorization identifier
        permission: Granted permission level
        created_at: When the grant was created
        updated_at: When the grant was last modified
        deleted_at: When the grant was revoked
        user: The user holding the grant
        service: The service the grant applies to
    """

    jsonapi_type: ClassVar[str] = "service_authorization"

    id: str
    permission: Permission | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    user: SAUser | None = None
    service: SAService | None = None
