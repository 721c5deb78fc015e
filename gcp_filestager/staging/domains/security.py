"""Process-wide TLS security properties."""
import logging
import ssl
from typing import Dict, Optional

logger = logging.getLogger(__name__)

TLS_DISABLED_ALGORITHMS = "tls.disabled_algorithms"

_security_properties: Dict[str, str] = {}


def set_security_property(key: str, value: str) -> None:
    _security_properties[key] = value


def get_security_property(key: str) -> Optional[str]:
    return _security_properties.get(key)


def apply_disabled_algorithms(value: str) -> str:
    """
    Set the disabled TLS algorithms for the process.

    The special value "none" clears the list (maps to an empty string).
    Code that builds TLS contexts reads the value back with
    get_security_property(TLS_DISABLED_ALGORITHMS).

    Returns:
        The value actually written
    """
    if value == "none":
        value = ""

    logger.info(f"disabledAlgorithms is set to {value}.")
    set_security_property(TLS_DISABLED_ALGORITHMS, value)

    ciphers = [cipher["name"] for cipher in ssl.create_default_context().get_ciphers()]
    logger.info(f"Supported Cipher Suites: {', '.join(ciphers)}")
    return value
