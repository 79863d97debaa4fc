"""nurlcomponents.abnf
Regular expressions for the RFC 3986, 3987 and 6874 rules that the components validate against,
plus the literal character sets used when percent-encoding them.
"""

import re

# ALPHA = %x41-5A / %x61-7A
ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
HEXDIG: str = rf"(?:{DIGIT}|[A-Fa-f])"

# ucschar = %xA0-D7FF / %xF900-FDCF / %xFDF0-FFEF
#         / %x10000-1FFFD / %x20000-2FFFD / %x30000-3FFFD
#         / %x40000-4FFFD / %x50000-5FFFD / %x60000-6FFFD
#         / %x70000-7FFFD / %x80000-8FFFD / %x90000-9FFFD
#         / %xA0000-AFFFD / %xB0000-BFFFD / %xC0000-CFFFD
#         / %xD0000-DFFFD / %xE1000-EFFFD
UCSCHAR: str = "[\xa0-\ud7ff\uf900-\ufdcf\ufdf0-\uffef\U00010000-\U0001FFFD\U00020000-\U0002FFFD\U00030000-\U0003FFFD\U00040000-\U0004FFFD\U00050000-\U0005FFFD\U00060000-\U0006FFFD\U00070000-\U0007FFFD\U00080000-\U0008FFFD\U00090000-\U0009FFFD\U000A0000-\U000AFFFD\U000B0000-\U000BFFFD\U000C0000-\U000CFFFD\U000D0000-\U000DFFFD\U000E1000-\U000EFFFD]"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED: str = rf"(?:{ALPHA}|{DIGIT}|[-._~])"

# pct-encoded = "%" HEXDIG HEXDIG
PCT_ENCODED: str = rf"%{HEXDIG}{HEXDIG}"

# gen-delims = ":" / "/" / "?" / "#" / "[" / "]" / "@"
GEN_DELIMS: str = r"[:/?#\[\]@]"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
SUB_DELIMS: str = r"[!$&'()*+,;=]"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME: str = rf"{ALPHA}(?:{ALPHA}|{DIGIT}|[+\-.])*"
SCHEME_PAT: re.Pattern[str] = re.compile(rf"\A{SCHEME}\Z")

# port = *DIGIT
PORT_PAT: re.Pattern[str] = re.compile(rf"\A{DIGIT}*\Z")

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
IPVFUTURE_PAT: re.Pattern[str] = re.compile(
    rf"\Av(?P<version>{HEXDIG}+)\.(?P<address>(?:{UNRESERVED}|{SUB_DELIMS}|:)+)\Z"
)

# reg-name = *( unreserved / pct-encoded / sub-delims )
# The "." is left out of the label so that labels can be told apart.
_REG_NAME_LABEL: str = rf"(?:{ALPHA}|{DIGIT}|[-_~]|{PCT_ENCODED}|{SUB_DELIMS})*"
REG_NAME_PAT: re.Pattern[str] = re.compile(rf"\A(?:{_REG_NAME_LABEL}\.)*{_REG_NAME_LABEL}\.?\Z")

# label = let-dig [ [ ldh-str ] let-dig ], from RFC 1034 section 3.5 as relaxed by RFC 1123 section 2.1
_DOMAIN_LABEL: str = r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?"
DOMAIN_NAME_PAT: re.Pattern[str] = re.compile(rf"\A{_DOMAIN_LABEL}(?:\.{_DOMAIN_LABEL}){{0,126}}\.?\Z", re.IGNORECASE)

GEN_DELIMS_PAT: re.Pattern[str] = re.compile(GEN_DELIMS)

# Everything but the printable ASCII range.
NON_ASCII_PAT: re.Pattern[str] = re.compile(r"[^\x20-\x7f]")

# Characters that may never appear in a URI component, even percent-decoded.
INVALID_URI_CHARS_PAT: re.Pattern[str] = re.compile(r"[\x00-\x1f\x7f]")

# gen-delims and the space character are never allowed in a host, whatever its encoding.
INVALID_HOST_CHARS_PAT: re.Pattern[str] = re.compile(r"[:/?#\[\]@ ]")

# The same classes as literal character sets, in the shape urllib.parse.quote expects for `safe`.
GEN_DELIMS_CHARS: str = ":/?#[]@"
SUB_DELIMS_CHARS: str = "!$&'()*+,;="
RESERVED_CHARS: str = GEN_DELIMS_CHARS + SUB_DELIMS_CHARS

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
PCHAR_CHARS: str = SUB_DELIMS_CHARS + ":@"

# path = *( "/" segment )
PATH_CHARS: str = PCHAR_CHARS + "/"

# query = *( pchar / "/" / "?" ), fragment = *( pchar / "/" / "?" )
QUERY_CHARS: str = PCHAR_CHARS + "/?"
FRAGMENT_CHARS: str = QUERY_CHARS

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
USER_CHARS: str = SUB_DELIMS_CHARS
PASSWORD_CHARS: str = SUB_DELIMS_CHARS + ":"
