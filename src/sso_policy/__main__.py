"""
SSO Policy Resolver - Entry Point

Diagnostic command: shows which authentication policies apply to a service
under a given configuration.
"""

import argparse
import json
import logging
import sys

from .config import create_default_config, load_config
from .core.auth import (
    AuthenticationTransaction,
    Service,
    UnauthorizedServiceException,
    UsernamePasswordCredential,
)
from .core.bootstrap import build_policy_plan

logger = logging.getLogger(__name__)

EXIT_UNAUTHORIZED = 2


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve the authentication policies for a service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write a starter policy.yaml
  python -m sso_policy --init

  # Show the policies for a service
  python -m sso_policy --config policy.yaml --service https://app.example.org/login

  # Enable debug logging
  python -m sso_policy --service https://app.example.org --debug
"""
    )

    parser.add_argument(
        '--config', '-c',
        help='Path to policy.yaml (default: search working directory)'
    )

    parser.add_argument(
        '--service', '-s',
        help='Service identifier the transaction targets'
    )

    parser.add_argument(
        '--username', '-u',
        default='casuser',
        help='Username of the credential placed on the transaction (default: casuser)'
    )

    parser.add_argument(
        '--init',
        action='store_true',
        help='Write a default policy.yaml and exit'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    if args.init:
        path = create_default_config(args.config)
        print(f"Created {path}")
        return 0

    config = load_config(args.config)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.logging.level,
        format=config.logging.format
    )

    plan = build_policy_plan(config)

    service = Service.of(args.service) if args.service else None
    transaction = AuthenticationTransaction.of(
        service, UsernamePasswordCredential(id=args.username)
    )

    try:
        policies = plan.get_authentication_policies(transaction)
    except UnauthorizedServiceException as e:
        logger.error(f"{e.code}: {e}")
        print(json.dumps({"error": e.code, "message": str(e)}, indent=2))
        return EXIT_UNAUTHORIZED

    print(json.dumps([p.to_dict() for p in policies], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
