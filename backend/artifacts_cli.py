"""
sf-deploy-artifacts - displays the artifacts associated with a specific deployment

Usage:
    sf-deploy-artifacts -i 0Afq000001HKFDO
    sf-deploy-artifacts -i 0Afq000001HKFDO --summary --nocolors
    sf-deploy-artifacts -i 0Afq000001HKFDO --json > deploy.json
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Any, List, Optional, TextIO

from deploy_config import get_config, setup_logging
from deploy_models import PresentationMode, StyleConfig
from report_renderer import render_report
from salesforce_client import fetch_deploy_result, normalize_deployment_id, sf_login_from_config

logger = logging.getLogger(__name__)

EXAMPLES = """examples:
  sf-deploy-artifacts -i DeploymentId
  // displays the artifacts that were associated with a specific deployment
"""


def _deployment_id(value: str) -> str:
    try:
        return normalize_deployment_id(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    cfg = get_config()
    parser = argparse.ArgumentParser(
        prog='sf-deploy-artifacts',
        description='displays the artifacts associated with a specific deployment',
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-i', '--deploymentid', required=True, type=_deployment_id,
                        help='Deployment Identifier ex: 0Afq000001HKFDO')
    parser.add_argument('-s', '--summary', action='store_true', help='Display only summary information')
    parser.add_argument('--nocolors', action='store_true', default=cfg.REPORT_NO_COLORS,
                        help="Don't colorize output")
    parser.add_argument('--noglyphs', action='store_true', default=cfg.REPORT_NO_GLYPHS,
                        help="Don't use glyphs in the output")
    parser.add_argument('--json', action='store_true', help='Print the raw deploy result as JSON')
    parser.add_argument('--config', default=cfg.SF_CONFIG_JSON,
                        help='JSON file with Salesforce credentials (defaults to environment variables)')
    parser.add_argument('--apiversion', default=cfg.SF_API_VERSION, help='Salesforce API version, e.g. 60.0')
    parser.add_argument('--loglevel', default=None, help='Logging level (defaults to LOG_LEVEL or INFO)')
    return parser


def run_report(doc: Any,
               deployment_id: str,
               mode: PresentationMode,
               style: StyleConfig,
               out: TextIO) -> None:
    """Render a deploy result and write it to `out`, one line at a time."""
    for line in render_report(doc, deployment_id, mode, style):
        print(line, file=out)


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.loglevel)
    out = out or sys.stdout

    mode = PresentationMode.from_flags(summary=args.summary, raw=args.json)
    style = StyleConfig.resolve(colors=not args.nocolors, glyphs=not args.noglyphs)

    try:
        sf = sf_login_from_config(args.config, api_version=args.apiversion)
        deploy_result = fetch_deploy_result(sf, args.deploymentid)
    except RuntimeError as e:
        logger.debug("Could not load deployment %s", args.deploymentid, exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    run_report(deploy_result, args.deploymentid, mode, style, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
