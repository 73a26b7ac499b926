import re
from typing import List, Optional

from gardisto.analyzer.models import CodeLocation, Diagnostic

SENSITIVE_NAME_PATTERN = re.compile(r'(key|secret|password|token)', re.IGNORECASE)
URL_NAME_PATTERN = re.compile(r'(url|uri|endpoint)', re.IGNORECASE)
PORT_NAME_PATTERN = re.compile(r'^port$', re.IGNORECASE)

# Number() literal grammar: signed decimals and Infinity, unsigned 0x/0o/0b integers
DECIMAL_NUMBER_PATTERN = re.compile(r'[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)')
RADIX_NUMBER_PATTERN = re.compile(r'0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)')

VALID_URL_PROTOCOLS = (
    'http://',
    'https://',
    'mongodb://',
    'mongodb+srv://',
    'postgresql://',
    'mysql://',
    'redis://',
    'amqp://',
    'ws://',
    'wss://',
)


class SecurityHeuristics:
    """
    Shape checks on the values of env variables that are actually set.
    Each rule looks at the variable name and its current value only, never
    at the fallback written in code, and yields at most one warning.
    """

    def check(self, variable: str, current_value: Optional[str],
              location: CodeLocation) -> List[Diagnostic]:
        """Run every rule. Nothing fires for a variable without a value."""
        if current_value is None:
            return []

        warnings = []
        for rule in (self.check_sensitive_name, self.check_url_protocol, self.check_port_number):
            warning = rule(variable, current_value, location)
            if warning is not None:
                warnings.append(warning)
        return warnings

    def check_sensitive_name(self, variable: str, value: str,
                             location: CodeLocation) -> Optional[Diagnostic]:
        """
        Heuristic 1: SensitiveName
        Names containing key/secret/password/token hold credentials.
        """
        if SENSITIVE_NAME_PATTERN.search(variable):
            return Diagnostic.warning(
                variable,
                location,
                f"Environment variable {variable} appears to contain sensitive information. "
                f"Ensure it's properly secured."
            )
        return None

    def check_url_protocol(self, variable: str, value: str,
                           location: CodeLocation) -> Optional[Diagnostic]:
        """
        Heuristic 2: UrlProtocol
        url/uri/endpoint variables must start with a known scheme.
        """
        if URL_NAME_PATTERN.search(variable) and not value.startswith(VALID_URL_PROTOCOLS):
            return Diagnostic.warning(
                variable,
                location,
                f"URL environment variable {variable} should include a valid protocol "
                f"({', '.join(VALID_URL_PROTOCOLS)})."
            )
        return None

    def check_port_number(self, variable: str, value: str,
                          location: CodeLocation) -> Optional[Diagnostic]:
        """
        Heuristic 3: PortNumber
        A variable named exactly PORT (any case) must hold a number.
        """
        if PORT_NAME_PATTERN.match(variable) and not is_numeric(value):
            return Diagnostic.warning(
                variable,
                location,
                f"Port environment variable {variable} should be a number."
            )
        return None


def is_numeric(value: str) -> bool:
    """True when JavaScript's Number(value) would not be NaN (blank excepted)."""
    text = value.strip()
    return bool(DECIMAL_NUMBER_PATTERN.fullmatch(text) or RADIX_NUMBER_PATTERN.fullmatch(text))


_default_heuristics = SecurityHeuristics()


def check_heuristics(variable: str, current_value: Optional[str],
                     location: CodeLocation) -> List[Diagnostic]:
    """Warnings for one variable from the default rule set."""
    return _default_heuristics.check(variable, current_value, location)
