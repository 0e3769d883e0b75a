import re
from podmanveth.config import VethLink
from podmanveth.errors import LinkLookupError


# Header line of a link in `ip link show` output, e.g.
#   42: veth6638cfa@if3: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 ...
# Continuation lines (link/ether ...) start with whitespace and never match.
_link_header = re.compile(
    r"^(?P<index>\d+):\s+(?P<name>[^:@\s]+)(?:@(?P<peer>[^:\s]+))?:\s"
)
_peer_ifindex = re.compile(r"^if(\d+)$")


def parse_link_listing(ip_link_output: str) -> list[VethLink]:
    """
    Decode the output of `ip link show [type veth]` into link records.

    Args:
        ip_link_output: multi-line output, with or without `-o`.

    Returns:
        One VethLink per interface, in listing order. `peer_index` is set
        only when the peer reference has the form `@ifN`.
    """
    links: list[VethLink] = []
    for line in ip_link_output.splitlines():
        match = _link_header.match(line)
        if match is None:
            continue
        peer_index = None
        peer = match.group("peer")
        if peer is not None:
            peer_match = _peer_ifindex.match(peer)
            if peer_match:
                peer_index = int(peer_match.group(1))
        links.append(VethLink(
            index=int(match.group("index")),
            name=match.group("name"),
            peer_index=peer_index))
    return links


def first_peer_index(links: list[VethLink]) -> int | None:
    """
    Peer index of the first link (typically eth0 inside a container).
    None when there is no link or the first one has no `@ifN` peer; later
    links are never consulted.
    """
    if not links:
        return None
    return links[0].peer_index


def find_peer(peer_index: int, host_links: list[VethLink]) -> VethLink:
    """
    Look up the host link whose own index is `peer_index`.
    Raises LinkLookupError unless exactly one link matches.
    """
    matches = [link for link in host_links if link.index == peer_index]
    if len(matches) != 1:
        raise LinkLookupError(peer_index, len(matches))
    return matches[0]
