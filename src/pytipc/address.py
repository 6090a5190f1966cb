""" TIPC addressing. A TIPC *domain* is a 32-bit network address split into
    zone (8 bits), cluster (12 bits) and node (12 bits), written as the
    text Z.C.N; a domain of zero means "anywhere". Services are addressed
    by a :class:`LogicalAddress`, or by a :class:`ServiceRange` when a
    whole interval of instances is meant.

    Everything in this module is a pure function of its arguments except
    :func:`resolve_scope`, which needs to know the local node address and
    gets it from a :class:`pytipc.context.Context`.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from .errors import InvalidAddress, OutOfScope
from .protocol import fields


ZONE_BITS = 8
CLUSTER_BITS = 12
NODE_BITS = 12

MAX_ZONE = (1 << ZONE_BITS) - 1
MAX_CLUSTER = (1 << CLUSTER_BITS) - 1
MAX_NODE = (1 << NODE_BITS) - 1
MAX_U32 = 0xFFFFFFFF

_domain_pattern = re.compile(r'^(\d+)\.(\d+)\.(\d+)$')


class Scope(enum.IntEnum):
    """ Visibility of a published binding. The values are the ones the
        kernel expects in the sockaddr scope field.
    """

    ZONE = fields.ZONE_SCOPE
    CLUSTER = fields.CLUSTER_SCOPE
    NODE = fields.NODE_SCOPE


@dataclass(frozen=True)
class LogicalAddress:
    """ A service instance (*service_type* non-zero) or a socket identity
        (*service_type* zero, *instance* is the port reference and *domain*
        the node hosting the port).
    """

    service_type: int
    instance: int
    domain: int = 0

    @property
    def is_socket(self) -> bool:
        return self.service_type == 0

    def __str__(self) -> str:
        return format_address(self)


@dataclass(frozen=True)
class ServiceRange:
    """ An interval [*lower*, *upper*] of instances of one service type,
        optionally restricted to *domain*.
    """

    service_type: int
    lower: int
    upper: int
    domain: int = 0

    def __post_init__(self):
        if self.lower > self.upper:
            raise InvalidAddress('lower bound %d exceeds upper bound %d' % (self.lower, self.upper))

    def __contains__(self, instance) -> bool:
        return self.lower <= instance <= self.upper

    def __str__(self) -> str:
        return format_range(self.service_type, self.lower, self.upper, self.domain)


def zone(domain: int) -> int:
    return (domain >> (CLUSTER_BITS + NODE_BITS)) & MAX_ZONE


def cluster(domain: int) -> int:
    return (domain >> NODE_BITS) & MAX_CLUSTER


def node(domain: int) -> int:
    return domain & MAX_NODE


def compose(zone: int, cluster: int, node: int) -> int:
    """ Pack the three components into a single domain value. Raises
        :class:`InvalidAddress` if any component is out of range.
    """

    limits = (('zone', zone, MAX_ZONE), ('cluster', cluster, MAX_CLUSTER), ('node', node, MAX_NODE))

    for name, value, maximum in limits:
        if value < 0 or value > maximum:
            raise InvalidAddress('%s %d is outside 0..%d' % (name, value, maximum))

    return (zone << (CLUSTER_BITS + NODE_BITS)) | (cluster << NODE_BITS) | node


def decompose(domain: int) -> tuple:
    return (zone(domain), cluster(domain), node(domain))


def parse_domain(text: str) -> int:
    """ Convert Z.C.N text to a domain value. Raises :class:`InvalidAddress`
        for anything that is not three dot-separated decimal numbers within
        range.
    """

    match = _domain_pattern.match(str(text).strip())
    if match is None:
        raise InvalidAddress('invalid network address %r, syntax: Z.C.N' % (text,))

    z, c, n = (int(group) for group in match.groups())
    return compose(z, c, n)


def format_domain(domain: int) -> str:
    return '%u.%u.%u' % decompose(domain)


def format_address(address: LogicalAddress) -> str:
    """ Render *address* as type:instance:Z.C.N. This is purely
        presentational and never raises.
    """

    domain = address.domain & MAX_U32
    return '%u:%u:%s' % (address.service_type, address.instance, format_domain(domain))


def format_range(service_type: int, lower: int, upper: int, domain: int = 0) -> str:
    return '%u:%u:%u:%s' % (service_type, lower, upper, format_domain(domain & MAX_U32))


def parse_address(text: str) -> LogicalAddress:
    """ Parse type:instance or type:instance:Z.C.N into a
        :class:`LogicalAddress`, as typed on a command line.
    """

    parts = str(text).strip().split(':')

    if len(parts) not in (2, 3):
        raise InvalidAddress('invalid service address %r, syntax: type:instance[:Z.C.N]' % (text,))

    try:
        service_type = int(parts[0])
        instance = int(parts[1])
    except ValueError:
        raise InvalidAddress('invalid service address %r, syntax: type:instance[:Z.C.N]' % (text,))

    for value in (service_type, instance):
        if value < 0 or value > MAX_U32:
            raise InvalidAddress('service address component out of range: %d' % (value))

    if len(parts) == 3:
        domain = parse_domain(parts[2])
    else:
        domain = 0

    return LogicalAddress(service_type, instance, domain)


def resolve_scope(domain: int, context) -> Scope:
    """ Translate a binding *domain* into a :class:`Scope` by comparing it
        against the own node, cluster and zone known to *context*. A domain
        of zero means zone scope. Raises :class:`OutOfScope` if the domain
        is not one of the local node's own domains; nothing should be bound
        in that case.
    """

    if domain == 0:
        return Scope.ZONE

    scope = None

    if domain == context.own_node():
        scope = Scope.NODE
    if domain == context.own_cluster():
        scope = Scope.CLUSTER
    if domain == context.own_zone():
        scope = Scope.ZONE

    if scope is None:
        raise OutOfScope('domain <%s> is outside the scope of node <%s>' % (format_domain(domain), format_domain(context.own_node())))

    return scope


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
