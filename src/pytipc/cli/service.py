""" The "service" command: wait for a service to become available.
"""

from .. import config
from ..address import format_address, parse_address
from ..cmdline import Command, insert, parse_options
from ..errors import InvalidAddress, InvalidArguments
from ..topology import wait_for_service
from . import common


def wait(command, arguments):
    """ Exit with status zero once the named service is available, or with
        a non-zero status if the timeout passes first.
    """

    text = arguments.next()

    try:
        service = parse_address(text)
    except InvalidAddress as error:
        raise InvalidArguments(str(error))

    options = parse_options(command, arguments)

    if 'timeout' in options:
        timeout = common.number('timeout', options['timeout'])
    else:
        timeout = config.get('wait')

    if wait_for_service(service, timeout):
        print('%s is available' % (format_address(service)))
        return 0

    print('%s is not available' % (format_address(service)))
    return 1


def register(root):

    service = Command('service', description='Service availability')

    waiting = service.add(Command('wait', wait, 'TYPE:INSTANCE[:Z.C.N] [OPTIONS]', 'Wait for a service to be published'))
    waiting.add_option('timeout', 'MS', 'Give up after this many milliseconds')

    insert(root, service)
    return service


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
