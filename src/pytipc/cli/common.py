""" Helpers shared by the command modules in this package.
"""

from ..address import MAX_U32, format_domain, parse_domain
from ..errors import InvalidAddress, InvalidArguments


def number(key, text, maximum=MAX_U32):
    """ Interpret the value given for option *key* as an unsigned integer;
        hexadecimal values with a 0x prefix are accepted.
    """

    try:
        value = int(text, 0)
    except ValueError:
        raise InvalidArguments('invalid %s value "%s"' % (key, text))

    if value < 0 or value > maximum:
        raise InvalidArguments('%s value %s is outside 0..%d' % (key, text, maximum))

    return value


def domain(key, text):

    try:
        return parse_domain(text)
    except InvalidAddress as error:
        raise InvalidArguments('invalid %s value: %s' % (key, error))


def no_arguments(arguments):

    if len(arguments) > 0:
        raise InvalidArguments('unexpected argument "%s"' % (arguments.current()))


def node_name(value):
    return '<%s>' % (format_domain(value))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
