"""nurlcomponents.host
URI hosts as described in RFC 3986 section 3.2.2, RFC 3987 section 3.1 and RFC 6874 section 2.
A host is classified once, when it is parsed, as one of the HostKind members.
"""

import dataclasses
import enum
import ipaddress
import logging

from typing import NamedTuple, Self

from urllib.parse import quote, unquote

import idna

from .abnf import (
    DOMAIN_NAME_PAT,
    GEN_DELIMS_PAT,
    INVALID_HOST_CHARS_PAT,
    IPVFUTURE_PAT,
    NON_ASCII_PAT,
    REG_NAME_PAT,
)
from .codec import capitalize_percent_encodings, filter_component
from .errors import UriSyntaxError
from .ipv4 import IPv4Normalizer

logger = logging.getLogger(__name__)


class HostKind(enum.Enum):
    ABSENT = "absent"
    EMPTY = "empty"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    IP_FUTURE = "ipfuture"
    DOMAIN = "domain"
    REGISTERED_NAME = "registered-name"


_IDNA_EMPTY_LABEL: str = "a non-final domain name label (or the whole domain name) is empty"
_IDNA_LABEL_TOO_LONG: str = "a domain name label is longer than 63 bytes"
_IDNA_DOMAIN_NAME_TOO_LONG: str = "a domain name is longer than 255 bytes in its storage form"
_IDNA_HYPHEN: str = 'a label starts or ends with a hyphen-minus ("-")'
_IDNA_HYPHEN_3_4: str = 'a label contains hyphen-minus ("-") in the third and fourth positions'
_IDNA_LEADING_COMBINING_MARK: str = "a label starts with a combining mark"
_IDNA_NOT_NFC: str = "a label is not in Unicode Normalization Form C"
_IDNA_DISALLOWED: str = "a label or domain name contains disallowed characters"
_IDNA_PUNYCODE: str = 'a label starts with "xn--" but does not contain valid Punycode'
_IDNA_BIDI: str = "a label does not meet the IDNA BiDi requirements (for right-to-left characters)"
_IDNA_CONTEXTJ: str = "a label does not meet the IDNA CONTEXTJ requirements"

# Matched against the lowercased message of the IDNAError, first match wins.
_IDNA_ERROR_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("3rd and 4th", _IDNA_HYPHEN_3_4),
    ("hyphen", _IDNA_HYPHEN),
    ("combining", _IDNA_LEADING_COMBINING_MARK),
    ("normalization form", _IDNA_NOT_NFC),
    ("label too long", _IDNA_LABEL_TOO_LONG),
    ("domain too long", _IDNA_DOMAIN_NAME_TOO_LONG),
    ("empty", _IDNA_EMPTY_LABEL),
    ("a-label", _IDNA_PUNYCODE),
    ("punycode", _IDNA_PUNYCODE),
)


def _idna_error_reason(error: UnicodeError) -> str:
    message: str = str(error).lower()
    if isinstance(error, idna.IDNABidiError):
        return _IDNA_BIDI
    if isinstance(error, idna.InvalidCodepointContext) and "joiner" in message:
        return _IDNA_CONTEXTJ
    if isinstance(error, (idna.InvalidCodepoint, idna.InvalidCodepointContext)):
        return _IDNA_DISALLOWED
    for keyword, reason in _IDNA_ERROR_KEYWORDS:
        if keyword in message:
            return reason
    # Punycode decoding failures surface as a bare UnicodeError on some idna releases.
    if not isinstance(error, idna.IDNAError):
        return _IDNA_PUNYCODE
    return "unknown IDNA conversion error"


def _to_ascii(domain_name: str) -> str:
    """IDNA ToASCII with UTS #46 mapping, BiDi and CONTEXTJ checks.
    The reasons of every failing label are reported together.
    """
    try:
        mapped: str = idna.uts46_remap(domain_name, std3_rules=False, transitional=False)
    except UnicodeError as e:
        raise UriSyntaxError(f"`{domain_name}` is an invalid domain name : {_idna_error_reason(e)}.") from e

    labels: list[str] = mapped.split(".")
    ascii_labels: list[str] = []
    reasons: list[str] = []
    for offset, label in enumerate(labels):
        if len(label) == 0 and offset > 0 and offset == len(labels) - 1:
            ascii_labels.append(label)
            continue
        try:
            ascii_labels.append(idna.alabel(label).decode("ascii"))
        except UnicodeError as e:
            reason: str = _idna_error_reason(e)
            if reason not in reasons:
                reasons.append(reason)

    result: str = ".".join(ascii_labels)
    if len(reasons) == 0 and len(result.removesuffix(".")) > 253:
        reasons.append(_IDNA_DOMAIN_NAME_TOO_LONG)
    if len(reasons) > 0:
        raise UriSyntaxError(f"`{domain_name}` is an invalid domain name : {', '.join(reasons)}.")
    if "%" in result:
        raise UriSyntaxError(f"`{domain_name}` is an invalid domain name.")
    return result


def _to_unicode(domain_name: str) -> str:
    """IDNA ToUnicode, applied to the "xn--" labels only."""
    labels: list[str] = []
    reasons: list[str] = []
    for label in domain_name.split("."):
        if not label.startswith("xn--"):
            labels.append(label)
            continue
        try:
            labels.append(idna.ulabel(label))
        except UnicodeError as e:
            reason: str = _idna_error_reason(e)
            if reason not in reasons:
                reasons.append(reason)
    if len(reasons) > 0:
        raise UriSyntaxError(f"The host `{domain_name}` is invalid : {', '.join(reasons)}.")
    return ".".join(labels)


def _is_valid_domain(hostname: str) -> bool:
    """RFC 1123 section 2.1 host name, at most 253 bytes long (254 with the root label's dot)."""
    max_length: int = 254 if hostname.endswith(".") else 253
    return len(hostname) <= max_length and DOMAIN_NAME_PAT.match(hostname) is not None


def _is_ipv4(host: str) -> bool:
    try:
        ipaddress.IPv4Address(host)
    except ValueError:
        return False
    return True


def _is_ipv6(ip_host: str) -> bool:
    """Validates the content of a bracketed IPv6 host, with its optional RFC 6874 zone identifier.
    Only link-local addresses (fe80::/10) can carry a zone identifier.
    """
    ipv6, percent, zone = ip_host.partition("%")
    try:
        address: ipaddress.IPv6Address = ipaddress.IPv6Address(ipv6)
    except ValueError:
        return False
    if len(percent) == 0:
        return True
    zone = unquote(f"%{zone}")
    return NON_ASCII_PAT.search(zone) is None and GEN_DELIMS_PAT.search(zone) is None and address.is_link_local


class _Classification(NamedTuple):
    kind: HostKind
    host: str | None
    ip_version: str | None = None
    has_zone_identifier: bool = False


def _classify(host: str | None) -> _Classification:
    if host is None:
        return _Classification(HostKind.ABSENT, None)

    if len(host) == 0:
        return _Classification(HostKind.EMPTY, host)

    if _is_ipv4(host):
        return _Classification(HostKind.IPV4, host, "4")

    if host.startswith("[") and host.endswith("]"):
        ip_host: str = host[1:-1]
        if _is_ipv6(ip_host):
            return _Classification(HostKind.IPV6, host, "6", "%" in ip_host)
        m = IPVFUTURE_PAT.match(ip_host)
        if m is not None and m["version"] not in ("4", "6"):
            return _Classification(HostKind.IP_FUTURE, host, m["version"])
        raise UriSyntaxError(f"`{host}` is an invalid IP literal format.")

    # A decoded "%" stays escaped, or the stored host would parse back differently.
    domain_name: str = unquote(host).replace("%", "%25")
    is_ascii: bool = NON_ASCII_PAT.search(domain_name) is None
    if is_ascii:
        domain_name = domain_name.lower()

    if REG_NAME_PAT.match(domain_name) is not None:
        # Raises if an "xn--" label is not valid Punycode.
        _to_unicode(domain_name)
        kind: HostKind = HostKind.DOMAIN if _is_valid_domain(domain_name) else HostKind.REGISTERED_NAME
        return _Classification(kind, domain_name)

    if is_ascii or INVALID_HOST_CHARS_PAT.search(domain_name) is not None:
        raise UriSyntaxError(f"`{host}` is an invalid domain name : the host contains invalid characters.")

    ascii_name: str = _to_ascii(domain_name)
    kind = HostKind.DOMAIN if _is_valid_domain(ascii_name) else HostKind.REGISTERED_NAME
    return _Classification(kind, ascii_name)


def classify_host(host: object) -> HostKind:
    """Tells what kind of host a string is. Raises UriSyntaxError if it is not a host at all."""
    return _classify(filter_component(host)).kind


def parse_host(host: object = None) -> "Host":
    """RFC 3986/3987-compliant host parser.
    Registered names are lowercased and percent-decoded, and internationalized names are stored in their ASCII form.
    e.g. parse_host("DerHausÜberwacher.de").raw_host == "xn--derhausberwacher-pzb.de"
    """
    classification: _Classification = _classify(filter_component(host))
    logger.debug("classified host %r as %s", host, classification.kind.value)
    return Host(
        raw_host=classification.host,
        ip_version=classification.ip_version,
        has_zone_identifier=classification.has_zone_identifier,
        is_domain=classification.kind is HostKind.DOMAIN,
    )


@dataclasses.dataclass(frozen=True)
class Host:
    """A class to hold a URI host. You should not instantiate this directly. Instead use parse_host or one of the new* constructors."""

    raw_host: str | None = None
    ip_version: str | None = None
    has_zone_identifier: bool = False
    is_domain: bool = False

    @classmethod
    def new(cls, host: object = None) -> "Host":
        return parse_host(host)

    @classmethod
    def new_from_ip(cls, ip: str, version: str = "", normalizer: IPv4Normalizer | None = None) -> "Host":
        """Builds a host from a bare IP address.
        IPv6 zone identifiers get percent-encoded, and IPv4 shorthands are normalized.
        """
        if len(version) > 0:
            return parse_host(f"[v{version}.{ip}]")

        if "%" in ip:
            ipv6, _, zone = unquote(ip).partition("%")
            return parse_host(f"[{ipv6}%25{quote(zone, safe='')}]")

        if _is_ipv6(ip):
            return parse_host(f"[{ip}]")

        host: Host = (normalizer if normalizer is not None else IPv4Normalizer()).normalize_host(parse_host(ip))
        if host.is_ipv4():
            return host
        raise UriSyntaxError(f"`{ip}` is an invalid IP Host.")

    @property
    def kind(self: Self) -> HostKind:
        if self.raw_host is None:
            return HostKind.ABSENT
        if self.ip_version == "4":
            return HostKind.IPV4
        if self.ip_version == "6":
            return HostKind.IPV6
        if self.ip_version is not None:
            return HostKind.IP_FUTURE
        if self.is_domain:
            return HostKind.DOMAIN
        if len(self.raw_host) == 0:
            return HostKind.EMPTY
        return HostKind.REGISTERED_NAME

    def value(self: Self) -> str | None:
        return self.raw_host

    def to_ascii(self: Self) -> str | None:
        return self.raw_host

    def to_unicode(self: Self) -> str | None:
        if self.ip_version is not None or self.raw_host is None or "xn--" not in self.raw_host:
            return self.raw_host
        return _to_unicode(self.raw_host)

    def encoded(self: Self) -> str | None:
        """The registered name in its Unicode form, percent-encoded. IP literals are returned as they are.
        e.g. parse_host("bébé.be").encoded() == "b%C3%A9b%C3%A9.be"
        """
        if not self.is_registered_name() or self.raw_host is None or len(self.raw_host) == 0:
            return self.raw_host
        return capitalize_percent_encodings(quote(self.to_unicode() or "", safe="").lower())

    def ip(self: Self) -> str | None:
        """The IP address without its brackets, with a percent-decoded zone identifier and without the IPvFuture version."""
        if self.ip_version is None or self.raw_host is None:
            return None
        if self.ip_version == "4":
            return self.raw_host
        ip: str = self.raw_host[1:-1]
        if self.ip_version != "6":
            return ip.partition(".")[2]
        address, percent, zone = ip.partition("%")
        if len(percent) == 0:
            return address
        return f"{address}%{unquote(zone.removeprefix('25'))}"

    def is_registered_name(self: Self) -> bool:
        """Tells whether the host is a reg-name, domain names included."""
        return self.raw_host is not None and self.ip_version is None

    def is_ip(self: Self) -> bool:
        return self.ip_version is not None

    def is_ipv4(self: Self) -> bool:
        return self.ip_version == "4"

    def is_ipv6(self: Self) -> bool:
        return self.ip_version == "6"

    def is_ip_future(self: Self) -> bool:
        return self.ip_version not in (None, "4", "6")

    def without_zone_identifier(self: Self) -> "Host":
        if not self.has_zone_identifier or self.raw_host is None:
            return self
        return Host.new_from_ip(self.raw_host[1:-1].partition("%")[0])

    def with_content(self: Self, content: object) -> "Host":
        host: Host = parse_host(content)
        if host == self:
            return self
        return host

    def uri_component(self: Self) -> str:
        return str(self)

    def __str__(self: Self) -> str:
        return self.raw_host if self.raw_host is not None else ""
