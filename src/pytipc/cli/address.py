""" The "address" commands: report the local node address.
"""

from .. import context as context_module
from ..cmdline import Command, insert
from . import common


def show(command, arguments, context=None):

    common.no_arguments(arguments)

    if context is None:
        context = context_module.default

    print(common.node_name(context.own_node()))
    return 0


def register(root):

    address = Command('address', description='Local node address')
    address.add(Command('show', show, '', 'Show the network address of this node'))

    insert(root, address)
    return address


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
