import logging
from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DomainIssue = Literal["wrong_domain", "www_mismatch", "subdomain"]


class DomainValidationResult(BaseModel):
    is_valid: bool
    hostname: Optional[str] = None
    expected_hostname: str = ""
    main_domain: str = ""
    issue: Optional[DomainIssue] = None


def extract_hostname(url: str) -> Optional[str]:
    """
    Returns the lower-cased hostname of an absolute URL, or None for
    relative URLs and values that do not parse.
    """
    if not url:
        return None
    try:
        parsed = urlparse(url.strip())
        if not parsed.scheme or not parsed.netloc:
            return None
        return parsed.hostname or None
    except ValueError:
        return None


def normalize_domain(hostname: str) -> str:
    """Lower-cases and strips a leading 'www.'."""
    host = (hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


class DomainClassifier:
    """
    Classifies URL authorities against the configured canonical authority.

    The base hostname and main domain are computed once from the config that
    built the instance; build a new classifier for a different config.
    """

    def __init__(self, base_url: str, main_domain: Optional[str] = None):
        self.base_url = base_url
        self.expected_hostname = (extract_hostname(base_url) or "").lower()
        if main_domain:
            self.main_domain = normalize_domain(main_domain.strip())
        else:
            self.main_domain = normalize_domain(self.expected_hostname)
        logger.debug("DomainClassifier: expected=%s main=%s", self.expected_hostname, self.main_domain)

    @classmethod
    def from_config(cls, config) -> "DomainClassifier":
        return cls(config.base_url, getattr(config, "main_domain", None))

    def validate(self, url: str) -> DomainValidationResult:
        hostname = extract_hostname(url)
        result = DomainValidationResult(
            is_valid=True,
            hostname=hostname,
            expected_hostname=self.expected_hostname,
            main_domain=self.main_domain,
        )
        # Relative URLs cannot be judged.
        if not hostname:
            return result

        host = hostname.lower()
        if host == self.expected_hostname:
            return result

        stripped = normalize_domain(host)
        expected_stripped = normalize_domain(self.expected_hostname)

        if stripped == expected_stripped and host.startswith("www.") != self.expected_hostname.startswith("www."):
            issue: DomainIssue = "www_mismatch"
        elif self.main_domain and (stripped == self.main_domain or stripped.endswith("." + self.main_domain)) \
                and stripped != expected_stripped:
            issue = "subdomain"
        else:
            issue = "wrong_domain"

        return result.model_copy(update={"is_valid": False, "issue": issue})

    def is_internal_absolute(self, url: str) -> bool:
        """
        Navigation scope for absolute links: the exact base host, or the main
        domain with or without 'www.'. Other subdomains are external.
        """
        hostname = extract_hostname(url)
        if not hostname:
            return False
        host = hostname.lower()
        return host == self.expected_hostname or bool(self.main_domain and normalize_domain(host) == self.main_domain)
