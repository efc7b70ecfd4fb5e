"""
Docker Engine API endpoint paths

Only the read-only endpoints a socket proxy typically exposes are listed.
"""


class DockerEndpoints:
    """Docker Engine API endpoint paths"""

    VERSION = "/version"
    CONTAINERS = "/containers/json"

    @staticmethod
    def versioned(path: str, api_version: str | None) -> str:
        """
        Prefix a path with an explicit API version

        Args:
            path: Endpoint path (e.g., "/containers/json")
            api_version: Version like "1.43" or "v1.43", or None for the daemon default

        Returns:
            Path to request (e.g., "/v1.43/containers/json")
        """
        if not api_version:
            return path
        return f"/v{api_version.lstrip('vV')}{path}"
