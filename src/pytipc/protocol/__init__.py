"""
pytipc Protocol Layer
=====================

Byte-level encodings used by pytipc, independent of any socket:

fields.py
    Constants from the kernel headers: address types, scopes, topology
    filter bits and event codes, ancillary record types.

subscription.py
    The fixed-size subscription record sent to the topology server.

event.py
    The fixed-size event record received from the topology server, and
    the Published / Withdrawn / Expired model it decodes into.

The protocol layer MUST NOT depend on the transport layer; the transport
and topology packages import from here, never the reverse. Only the
constants are imported eagerly, the record modules depend on
:mod:`pytipc.address` which in turn depends on the constants.
"""

from . import fields


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
