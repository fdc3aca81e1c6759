"""Command-line interface for read-only Fastly API queries.

Provides commands to list service authorizations, WAFs, gzip rules and
WAF rule statuses.
"""

import argparse
import json
import logging
import sys

from fastly_api.client import FastlyAPIClient
from fastly_api.exceptions import FastlyAPIError
from fastly_api.models import RuleStatusFilters


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI output.

    Args:
        verbose: Enable debug logging.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def cmd_service_authorizations(args: argparse.Namespace) -> int:
    """List every service authorization, page by page.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code.
    """
    with FastlyAPIClient() as client:
        paginator = client.new_list_service_authorizations_paginator(
            per_page=args.per_page, page=args.page
        )
        authorizations = list(paginator)

    if args.json:
        print(json.dumps([a.model_dump(mode="json") for a in authorizations], indent=2))
    else:
        print(f"\nService authorizations ({len(authorizations)}):")
        print("-" * 60)
        for authorization in authorizations:
            service = authorization.service.id if authorization.service else "-"
            user = authorization.user.id if authorization.user else "-"
            permission = authorization.permission.value if authorization.permission else "-"
            print(f"{authorization.id}  {permission:<13} service={service} user={user}")

    return 0


def cmd_wafs(args: argparse.Namespace) -> int:
    """List the WAFs of a service version.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code.
    """
    with FastlyAPIClient() as client:
        wafs = client.list_wafs(args.service, args.version)

    if args.json:
        print(json.dumps([w.model_dump(mode="json") for w in wafs], indent=2))
    else:
        for waf in wafs:
            print(f"{waf.id}  version={waf.version} last_push={waf.last_push or '-'}")

    return 0


def cmd_gzips(args: argparse.Namespace) -> int:
    """List the gzip rules of a service version."""
    with FastlyAPIClient() as client:
        gzips = client.list_gzips(args.service, args.version)

    if args.json:
        print(json.dumps([g.model_dump(mode="json") for g in gzips], indent=2))
    else:
        for gzip in gzips:
            print(f"{gzip.name}")
            print(f"   Content types: {gzip.content_types or '-'}")
            print(f"   Extensions: {gzip.extensions or '-'}")

    return 0


def cmd_rule_statuses(args: argparse.Namespace) -> int:
    """List the rule statuses of a WAF."""
    filters = RuleStatusFilters(status=args.status or "")
    with FastlyAPIClient() as client:
        result = client.get_waf_rule_statuses(args.service, args.waf, filters)

    if args.json:
        print(json.dumps([r.model_dump() for r in result.rules], indent=2))
    else:
        print(f"\nRule statuses for WAF {args.waf} ({len(result.rules)}):")
        for rule in result.rules:
            print(f"  {rule.rule_id:>8}  {rule.status}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command line arguments.

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Query Fastly configuration resources",
        prog="fastly-api",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sa_parser = subparsers.add_parser(
        "service-authorizations", help="List service authorizations"
    )
    sa_parser.add_argument("--per-page", type=int, default=0, help="Page size")
    sa_parser.add_argument("--page", type=int, default=0, help="Page to start from")
    sa_parser.add_argument("--json", action="store_true", help="Output as JSON")
    sa_parser.set_defaults(func=cmd_service_authorizations)

    wafs_parser = subparsers.add_parser("wafs", help="List WAFs of a service version")
    wafs_parser.add_argument("service", help="Service ID")
    wafs_parser.add_argument("version", type=int, help="Service version")
    wafs_parser.add_argument("--json", action="store_true", help="Output as JSON")
    wafs_parser.set_defaults(func=cmd_wafs)

    gzips_parser = subparsers.add_parser("gzips", help="List gzip rules of a service version")
    gzips_parser.add_argument("service", help="Service ID")
    gzips_parser.add_argument("version", type=int, help="Service version")
    gzips_parser.add_argument("--json", action="store_true", help="Output as JSON")
    gzips_parser.set_defaults(func=cmd_gzips)

    rs_parser = subparsers.add_parser("rule-statuses", help="List rule statuses of a WAF")
    rs_parser.add_argument("service", help="Service ID")
    rs_parser.add_argument("waf", help="WAF ID")
    rs_parser.add_argument("--status", help="Only rules with this status (log, block, disabled)")
    rs_parser.add_argument("--json", action="store_true", help="Output as JSON")
    rs_parser.set_defaults(func=cmd_rule_statuses)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.func(args)
    except FastlyAPIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
