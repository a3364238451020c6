import ipaddress

from ..errors import InvalidIPRangeError

# Intercepts calls to all IPs, in cluster as well as outside it.
ALL_IP_RANGES = "*"


def parse_cidr(value: str):
    """
    Parse one entry in ``addr/prefix`` form. Host bits may be set, as in
    ``10.0.0.1/8``; a bare address without a prefix, or an IPv6 address
    with a zone (``fe80::1%eth0/64``), is rejected.
    """
    addr, sep, prefix = value.partition("/")
    if not sep or not addr or "%" in addr or not prefix.isdigit():
        raise InvalidIPRangeError(f"invalid CIDR address: {value}", value)
    try:
        return ipaddress.ip_network(value, strict=False)
    except ValueError as e:
        raise InvalidIPRangeError(f"invalid CIDR address: {value}", value) from e


def validate_outbound_ip_ranges(s: str) -> None:
    """Raise InvalidIPRangeError for the first entry of ``s`` that is not a CIDR."""
    if s == ALL_IP_RANGES:
        return
    for cidr in s.split(","):
        parse_cidr(cidr)
