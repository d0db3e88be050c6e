"""Socket address helpers."""


def parse_port(address: str) -> int | None:
    """Extract the port from a local address token.

    Supported forms:
    - "*:3000"            → wildcard bind
    - "127.0.0.1:3000"    → IPv4 literal
    - "[::1]:3000"        → bracketed IPv6 literal
    - ":::22"             → unbracketed IPv6 wildcard (netstat)
    - "127.0.0.53%lo:53"  → address scoped to an interface (ss)

    Args:
        address: Address token as printed by the tool

    Returns:
        Port number, or None if the token has no valid port
    """
    _, sep, port_str = address.rpartition(":")
    if not sep or not port_str.isdecimal():
        return None

    port = int(port_str)
    if not 0 < port <= 65535:
        return None
    return port
