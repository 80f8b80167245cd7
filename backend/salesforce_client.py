# salesforce_client.py
from __future__ import annotations
import json, os
from typing import Any, Dict
# Note: We import simple_salesforce inside the functions to avoid import errors at build time.
# Install with: pip install simple-salesforce
import re
import logging

from requests.exceptions import ReadTimeout, ConnectionError, RequestException

from deploy_config import get_config

logger = logging.getLogger(__name__)

# Salesforce record ids: 15 (case-sensitive) or 18 (case-insensitive) characters
_SF_ID_RE = re.compile(r'^[a-zA-Z0-9]{15}(?:[a-zA-Z0-9]{3})?$')


class DeployStatusError(RuntimeError):
    """The deploy status could not be fetched from Salesforce."""


def normalize_deployment_id(value: str) -> str:
    """
    Strip and validate a deployment id such as 0Afq000001HKFDO.
    Raises ValueError for anything that is not a 15/18 character Salesforce id.
    """
    deployment_id = (value or "").strip()
    if not deployment_id:
        raise ValueError("Deployment Identifier is required")
    if not _SF_ID_RE.match(deployment_id):
        raise ValueError(f"Invalid Deployment Identifier: {deployment_id!r}")
    return deployment_id


def _load_credentials(config_json_path: str | None) -> Dict[str, Any]:
    if config_json_path:
        with open(config_json_path, "r", encoding="utf-8") as f:
            return json.load(f)
    return dict(os.environ)


def sf_login_from_config(config_json_path: str | None = None, api_version: str | None = None):
    """
    Log in to Salesforce using either a JSON config file or environment variables.

    A session is reused when SF_INSTANCE_URL and SF_ACCESS_TOKEN are present.
    Otherwise the password flow is used:
    SF_USERNAME, SF_PASSWORD, SF_SECURITY_TOKEN, SF_DOMAIN (defaults 'login').
    """
    config_json_path = config_json_path or get_config().SF_CONFIG_JSON
    api_version = api_version or get_config().SF_API_VERSION
    extra = {"version": api_version} if api_version else {}

    try:
        cfg = _load_credentials(config_json_path)
        from simple_salesforce import Salesforce  # imported here to keep module import lightweight
        if cfg.get("SF_INSTANCE_URL") and cfg.get("SF_ACCESS_TOKEN"):
            logger.info("Using Salesforce session for %s", cfg["SF_INSTANCE_URL"])
            return Salesforce(
                instance_url=cfg["SF_INSTANCE_URL"],
                session_id=cfg["SF_ACCESS_TOKEN"],
                **extra,
            )
        logger.info("Logging in to Salesforce as %s", cfg.get("SF_USERNAME"))
        return Salesforce(
            username=cfg["SF_USERNAME"],
            password=cfg["SF_PASSWORD"],
            security_token=cfg["SF_SECURITY_TOKEN"],
            domain=cfg.get("SF_DOMAIN", "login"),
            **extra,
        )
    except KeyError as ke:
        raise RuntimeError(f"Missing Salesforce credential: {ke}") from ke
    except Exception as e:
        # Bubble up a concise error; full stack trace will be in server logs
        raise RuntimeError(f"Salesforce auth failed: {e}") from e


def fetch_deploy_result(sf, deployment_id: str, include_details: bool = True) -> Dict[str, Any]:
    """
    Return the deploy status document for a deployment:
      {
        "id": "0Afq000001HzQ1qCAF",
        "deployResult": {
          "status": "Failed",
          "numberComponentsTotal": 2206,
          ...
          "details": {
            "componentSuccesses": [...],
            "componentFailures": [...]
          }
        }
      }
    """
    from simple_salesforce.exceptions import SalesforceError

    params = {"includeDetails": "true" if include_details else "false"}
    logger.info("Fetching deploy status for %s (details=%s)", deployment_id, include_details)
    try:
        result = sf.restful(
            f"metadata/deployRequest/{deployment_id}",
            params=params,
            timeout=get_config().SF_TIMEOUT,
        )
    except (ReadTimeout, ConnectionError) as e:
        raise DeployStatusError(f"Salesforce did not respond for {deployment_id}: {e}") from e
    except RequestException as e:
        raise DeployStatusError(f"Deploy status request failed for {deployment_id}: {e}") from e
    except SalesforceError as e:
        raise DeployStatusError(f"Deploy status lookup failed for {deployment_id}: {e}") from e

    if not isinstance(result, dict):
        raise DeployStatusError(f"Unexpected deploy status payload for {deployment_id}: {type(result).__name__}")
    logger.debug("Deploy status keys: %s", sorted(result))
    return result
