# Environment variable helpers
import os
from collections.abc import Mapping


def placeholder(var_name: str) -> str:
    """Return the ${VAR} token written into descriptor env values.

    ABOUTME: The MCP client expands the token; promptonomicon never reads the secret

    Examples:
        >>> placeholder("CONTEXT7_API_KEY")
        '${CONTEXT7_API_KEY}'
    """
    return f"${{{var_name}}}"


def env_var_present(var_name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Report whether a variable is set; the value itself is never inspected."""
    if environ is None:
        environ = os.environ
    return var_name in environ
