""" TIPC constants, with the values used by <linux/tipc.h>. Nothing here
    depends on the :mod:`socket` module having AF_TIPC support.
"""

AF_TIPC = 30
SOL_TIPC = 271

# Address types

ADDR_MCAST = 1
ADDR_NAMESEQ = 1
ADDR_NAME = 2
ADDR_ID = 3

# Publication scopes

ZONE_SCOPE = 1
CLUSTER_SCOPE = 2
NODE_SCOPE = 3

# A negative scope on bind() withdraws the binding.

WITHDRAW_SCOPE = -1

# Well-known pseudo services

NODE_STATE = 0
TOP_SRV = 1
LINK_STATE = 2

# Topology subscription filter bits

SUB_PORTS = 0x01
SUB_SERVICE = 0x02
SUB_CANCEL = 0x04

WAIT_FOREVER = 0xFFFFFFFF

# Topology event codes

PUBLISHED = 1
WITHDRAWN = 2
SUBSCR_TIMEOUT = 3

# Ancillary data types on receive

ERRINFO = 1
RETDATA = 2
DESTNAME = 3

# Socket options

IMPORTANCE = 127
SRC_DROPPABLE = 128
DEST_DROPPABLE = 129
CONN_TIMEOUT = 130

LOW_IMPORTANCE = 0
MEDIUM_IMPORTANCE = 1
HIGH_IMPORTANCE = 2
CRITICAL_IMPORTANCE = 3

# Error codes carried in ERRINFO

OK = 0
ERR_NO_NAME = 1
ERR_NO_PORT = 2
ERR_NO_NODE = 3
ERR_OVERLOAD = 4
CONN_SHUTDOWN = 5

# ioctl() request for link name lookups, SIOCPROTOPRIVATE.

SIOCGETLINKNAME = 0x89E0
MAX_LINK_NAME = 68

# Largest user payload in a single TIPC message.

MAX_USER_MSG_SIZE = 66000


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
