""" The "nametable" command: show the bindings of one service type, as
    currently known to the topology server of the local node.
"""

from ..address import MAX_U32, format_domain
from ..cmdline import Command, insert, parse_options
from ..errors import InvalidArguments
from ..topology import TopologyClient
from . import common


header = '%-10s %-10s %-10s %-26s'


def port_name(event):
    return '<%s:%u>' % (format_domain(event.node), event.port.instance)


def show(command, arguments):
    """ Print one row per bound socket matching the requested range.
    """

    options = parse_options(command, arguments)

    if 'type' not in options:
        raise InvalidArguments('the "type" option is required')

    service_type = common.number('type', options['type'])
    lower = common.number('lower', options.get('lower', '0'))
    upper = common.number('upper', options.get('upper', str(MAX_U32)))

    if lower > upper:
        raise InvalidArguments('lower %d exceeds upper %d' % (lower, upper))

    with TopologyClient.connect() as client:
        found = client.snapshot(service_type, lower, upper, all_ports=True)

    found.sort(key=lambda event: (event.found_lower, event.found_upper, event.node, event.port.instance))

    print(header % ('Type', 'Lower', 'Upper', 'Port Identity'))

    for event in found:
        print(header % (service_type, event.found_lower, event.found_upper, port_name(event)))

    return 0


def register(root):

    nametable = Command('nametable', description='Name table')

    showing = nametable.add(Command('show', show, 'type TYPE [OPTIONS]', 'Show bindings of a service type'))
    showing.add_option('type', 'TYPE', 'Service type to show')
    showing.add_option('lower', 'INSTANCE', 'Lowest instance to show, default 0')
    showing.add_option('upper', 'INSTANCE', 'Highest instance to show, default all')

    insert(root, nametable)
    return nametable


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
