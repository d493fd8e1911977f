"""Credential diagnostics for the Auth0 Management API."""

from collections.abc import Mapping
from typing import Any

from ..models.user import ListUsersParams
from ..utils.logging_utils import get_logger
from .cancellation import CancellationToken
from .exceptions import ApiError, ConfigError

logger = get_logger(__name__)

# Upper bound for the whole doctor run, in seconds
DOCTOR_TIMEOUT = 60.0


def doctor(
    test_api: bool = False,
    environ: Mapping[str, str] | None = None,
    timeout: float = DOCTOR_TIMEOUT,
) -> dict[str, Any]:
    """Test that the credentials work and optionally that the API answers.

    Args:
        test_api: Whether to list one user with the obtained token
        environ: Optional environment mapping instead of ``os.environ``
        timeout: Upper bound in seconds for the token and API checks

    Returns:
        Dict[str, Any]: Status information including success status and details
    """
    from ..client import ManagementClient

    result: dict[str, Any] = {
        "success": False,
        "token_obtained": False,
        "api_tested": False,
    }

    try:
        logger.info("Checking Auth0 configuration...", extra={"operation": "doctor"})
        client = ManagementClient.from_env(environ)
        credentials = client.store.credentials
        result["domain"] = credentials.domain
        result["credentials"] = credentials.to_dict()
        result["config"] = client.config.to_dict()
        logger.info(f"  Client ID: {credentials.client_id[:8]}...")
        logger.info(f"  Audience: {credentials.audience}")
    except ConfigError as e:
        logger.error(
            f"Configuration error: {e}",
            extra={"operation": "doctor"},
        )
        result["error"] = str(e)
        result["details"] = "Configuration is invalid"
        return result

    cancel = CancellationToken(timeout=timeout)
    try:
        token = client.token_manager.get_token(cancel)
        result["token_obtained"] = True
        result["scopes"] = token.scopes
        logger.info(
            "  Access token obtained",
            extra={"operation": "doctor", "api_endpoint": "/oauth/token"},
        )
    except ApiError as e:
        logger.error(
            f"Token request failed: {e}",
            extra={"operation": "doctor", "status_code": e.status_code},
        )
        result["error"] = str(e)
        result["error_kind"] = e.kind.value
        result["details"] = "Could not obtain an access token"
        return result

    result["success"] = True
    result["details"] = "Credentials are working correctly"

    if test_api:
        result["api_tested"] = True
        try:
            client.users.list(ListUsersParams(per_page=1), cancel=cancel).first_page()
            result["api_status"] = "success"
            result["details"] = "Credentials and API access are working correctly"
            logger.info("  API access successful", extra={"operation": "doctor"})
        except ApiError as e:
            logger.warning(
                f"  API access test failed: {e}",
                extra={"operation": "doctor", "status_code": e.status_code},
            )
            result["api_status"] = "failed"
            result["error_kind"] = e.kind.value
            result["details"] = f"Token obtained but API access failed: {e}"

    return result
