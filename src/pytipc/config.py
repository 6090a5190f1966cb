""" Runtime settings for pytipc. There is no configuration file; every
    setting has a built-in default that can be overridden with an
    environment variable of the form PYTIPC_<NAME>, for example
    PYTIPC_SNAPSHOT=50.
"""

import os


prefix = 'PYTIPC_'

defaults = dict()
defaults['buffer'] = 66000      # Receive buffer, the largest TIPC payload.
defaults['ancillary'] = 1024    # Room for ERRINFO + RETDATA + DESTNAME.
defaults['snapshot'] = 10       # Expiry, in ms, of snapshot subscriptions.
defaults['wait'] = 5000         # Default service wait timeout, in ms.
defaults['log_level'] = 'WARNING'


def get(name):
    """ Return the current value of the setting *name*. The environment is
        consulted on every call, so tests and long-running callers see
        changes without having to reload anything. Numeric settings are
        converted to integers; a value that does not convert raises a
        ValueError naming the offending variable.
    """

    try:
        default = defaults[name]
    except KeyError:
        raise KeyError('unknown pytipc setting: ' + repr(name))

    variable = prefix + name.upper()
    value = os.environ.get(variable)

    if value is None or value == '':
        return default

    if isinstance(default, int):
        try:
            value = int(value, 0)
        except ValueError:
            raise ValueError('%s must be an integer, not %r' % (variable, value))

        if value < 0:
            raise ValueError('%s must not be negative: %d' % (variable, value))

    return value


def settings():
    """ Return a dictionary of all current settings, keyed by name.
    """

    current = dict()
    for name in defaults.keys():
        current[name] = get(name)

    return current


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
