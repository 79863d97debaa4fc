"""nurlcomponents.ipv4
Normalization of hosts written with the IPv4 shorthands browsers accept
(e.g. "0x7f.1", "3232235521" or "0300.0250.0000.0001"), following the WHATWG URL Standard's IPv4 parser.
"""

import decimal
import logging
import re

from typing import TYPE_CHECKING, Protocol, Self, Sequence

if TYPE_CHECKING:
    from .authority import Authority
    from .host import Host

logger = logging.getLogger(__name__)

Number = int | decimal.Decimal


class Calculator(Protocol):
    """The integer arithmetic the normalizer needs. Implementations must not lose precision above 2**32."""

    def base_convert(self: Self, number: str, base: int) -> Number: ...

    def pow(self: Self, value: Number, exponent: int) -> Number: ...

    def compare(self: Self, value1: Number, value2: Number) -> int: ...

    def multiply(self: Self, value1: Number, value2: Number) -> Number: ...

    def add(self: Self, value1: Number, value2: Number) -> Number: ...

    def sub(self: Self, value1: Number, value2: Number) -> Number: ...

    def div(self: Self, value: Number, base: int) -> Number: ...

    def mod(self: Self, value: Number, base: int) -> Number: ...


class NativeCalculator:
    """Backed by Python's own integers."""

    def base_convert(self: Self, number: str, base: int) -> int:
        return int(number, base=base)

    def pow(self: Self, value: Number, exponent: int) -> int:
        return int(value) ** exponent

    def compare(self: Self, value1: Number, value2: Number) -> int:
        return (value1 > value2) - (value1 < value2)

    def multiply(self: Self, value1: Number, value2: Number) -> int:
        return int(value1) * int(value2)

    def add(self: Self, value1: Number, value2: Number) -> int:
        return int(value1) + int(value2)

    def sub(self: Self, value1: Number, value2: Number) -> int:
        return int(value1) - int(value2)

    def div(self: Self, value: Number, base: int) -> int:
        return int(value) // base

    def mod(self: Self, value: Number, base: int) -> int:
        return int(value) % base


class DecimalCalculator:
    """Backed by decimal.Decimal with an explicit context, for callers that want fixed-precision arithmetic."""

    def __init__(self: Self, precision: int = 40) -> None:
        self._context: decimal.Context = decimal.Context(prec=precision, rounding=decimal.ROUND_FLOOR)

    def base_convert(self: Self, number: str, base: int) -> decimal.Decimal:
        result: decimal.Decimal = decimal.Decimal(0)
        for digit in number:
            result = self._context.add(self._context.multiply(result, base), int(digit, base=base))
        return result

    def pow(self: Self, value: Number, exponent: int) -> decimal.Decimal:
        return self._context.power(decimal.Decimal(value), exponent)

    def compare(self: Self, value1: Number, value2: Number) -> int:
        return int(self._context.compare(decimal.Decimal(value1), decimal.Decimal(value2)))

    def multiply(self: Self, value1: Number, value2: Number) -> decimal.Decimal:
        return self._context.multiply(decimal.Decimal(value1), decimal.Decimal(value2))

    def add(self: Self, value1: Number, value2: Number) -> decimal.Decimal:
        return self._context.add(decimal.Decimal(value1), decimal.Decimal(value2))

    def sub(self: Self, value1: Number, value2: Number) -> decimal.Decimal:
        return self._context.subtract(decimal.Decimal(value1), decimal.Decimal(value2))

    def div(self: Self, value: Number, base: int) -> decimal.Decimal:
        return self._context.divide_int(decimal.Decimal(value), base)

    def mod(self: Self, value: Number, base: int) -> decimal.Decimal:
        return self._context.remainder(decimal.Decimal(value), base)


# Only the alphabet is checked here, parse_label() decides whether a label is a number.
_IPV4_PART: str = r"[0-9A-Fa-fx]*"
_IPV4_HOST_PAT: re.Pattern[str] = re.compile(rf"\A(?:{_IPV4_PART}\.){{0,3}}{_IPV4_PART}\.?\Z")

# Tried in this order; a label that overflows in one base may still be read in the next.
_IPV4_NUMBER_PER_BASE: tuple[tuple[re.Pattern[str], int], ...] = (
    (re.compile(r"\A0x(?P<number>[0-9A-Fa-f]*)\Z"), 16),
    (re.compile(r"\A0(?P<number>[0-7]*)\Z"), 8),
    (re.compile(r"\A(?P<number>[0-9]+)\Z"), 10),
)


class IPv4Normalizer:
    """Turns IPv4 shorthands into dotted-decimal addresses. The arithmetic is delegated to a Calculator."""

    def __init__(self: Self, calculator: Calculator | None = None) -> None:
        self.calculator: Calculator = calculator if calculator is not None else NativeCalculator()
        self._max_ipv4_number: Number = self.calculator.sub(self.calculator.pow(2, 32), 1)

    @classmethod
    def from_native(cls) -> Self:
        return cls(NativeCalculator())

    @classmethod
    def from_decimal(cls) -> Self:
        return cls(DecimalCalculator())

    def parse_label(self: Self, label: str) -> Number | None:
        """Returns the number a host label stands for, or None if it is not a number in [0, 2**32 - 1]."""
        for pattern, base in _IPV4_NUMBER_PER_BASE:
            m: re.Match[str] | None = pattern.match(label)
            if m is None:
                continue
            digits: str = m["number"].lstrip("0")
            if len(digits) == 0:
                return 0
            number: Number = self.calculator.base_convert(digits, base)
            if self.calculator.compare(number, 0) >= 0 and self.calculator.compare(number, self._max_ipv4_number) <= 0:
                return number
        return None

    def combine(self: Self, labels: Sequence[str | Number]) -> str | None:
        """Combines up to four labels into a dotted-decimal address. Labels may be given as strings or as parsed numbers.
        Every label but the last one must fit in a byte; the last one fills the remaining bytes.
        e.g. IPv4Normalizer().combine(["0x7f", "1"]) == "127.0.0.1"
        """
        if len(labels) == 0 or len(labels) > 4:
            return None
        numbers: list[Number] = []
        for label in labels:
            number: Number | None = self.parse_label(label) if isinstance(label, str) else label
            if number is None:
                return None
            numbers.append(number)
        *prefix, ipv4 = numbers
        if self.calculator.compare(ipv4, self.calculator.pow(256, 5 - len(numbers))) >= 0:
            return None
        for offset, number in enumerate(prefix):
            if self.calculator.compare(number, 255) > 0:
                return None
            ipv4 = self.calculator.add(ipv4, self.calculator.multiply(number, self.calculator.pow(256, 3 - offset)))
        return self.long2ip(ipv4)

    def long2ip(self: Self, number: Number) -> str:
        octets: list[str] = []
        for _ in range(4):
            octets.insert(0, str(int(self.calculator.mod(number, 256))))
            number = self.calculator.div(number, 256)
        return ".".join(octets)

    def convert(self: Self, host: str) -> str | None:
        """Returns the dotted-decimal form of host, or None if host is not an IPv4 shorthand."""
        if len(host) == 0 or _IPV4_HOST_PAT.match(host) is None:
            return None
        if host.endswith("."):
            host = host[:-1]
        return self.combine(host.split("."))

    def normalize_host(self: Self, host: "Host") -> "Host":
        """Returns host as an IPv4 host if its domain name is an IPv4 shorthand, and host itself otherwise."""
        if not host.is_domain or host.raw_host is None:
            return host
        ipv4: str | None = self.convert(host.raw_host)
        if ipv4 is None:
            return host
        logger.debug("normalized host %r to IPv4 address %s", host.raw_host, ipv4)
        return host.with_content(ipv4)

    def normalize_authority(self: Self, authority: "Authority") -> "Authority":
        host: "Host" = self.normalize_host(authority.host)
        if host is authority.host:
            return authority
        return authority.with_host(host)
