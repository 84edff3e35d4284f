"""
Environment resolution: map a Power Platform environment to its Dataverse URL.
"""

import urllib.parse

from pp_cli import config
from pp_cli.api import bap_request
from pp_cli.exceptions import ApiError, CliError


def _environment_path(environment, as_admin):
    scope = "scopes/admin/" if as_admin else ""
    return (
        f"/providers/Microsoft.BusinessAppPlatform/{scope}environments/"
        f"{urllib.parse.quote(environment, safe='')}"
        f"?api-version={config.BAP_API_VERSION}"
        "&$select=properties.linkedEnvironmentMetadata.instanceApiUrl"
    )


def get_dynamics_api_url(environment, as_admin=False):
    """Return the Dataverse instance API URL for *environment* (no trailing /).

    Uses the admin scope when *as_admin* is set. Results are cached per
    (environment, as_admin) for the lifetime of the process.
    """
    cache = config._cache.setdefault("dynamics_api_url", {})
    key = (environment, bool(as_admin))
    if key in cache:
        return cache[key]
    try:
        result = bap_request(_environment_path(environment, as_admin))
    except ApiError as e:
        raise ApiError(
            f"The environment '{environment}' could not be retrieved. "
            f"See the inner exception for more details: {e.message}",
            status=e.status,
        ) from e
    props = result.get("properties") if isinstance(result, dict) else None
    linked = props.get("linkedEnvironmentMetadata") if isinstance(props, dict) else None
    url = linked.get("instanceApiUrl") if isinstance(linked, dict) else None
    if not url or not isinstance(url, str):
        raise CliError(
            f"[ERROR] Environment '{environment}' has no linked Dataverse instance "
            "(instanceApiUrl missing)."
        )
    url = url.rstrip("/")
    cache[key] = url
    return url
