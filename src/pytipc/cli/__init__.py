""" The pytipc command line tool. The command tree is assembled by
    :func:`build`, one sub-tree per module in this package, and run by
    :func:`main`:

        pytipc [OPTIONS] COMMAND [ARGS]

    Every command word may be abbreviated as long as it stays unambiguous,
    so "pytipc n l" is "pytipc node list".
"""

import argparse
import logging
import os
import sys

from .. import cmdline
from .. import config
from ..errors import TipcError

from . import address
from . import link
from . import nametable
from . import node
from . import service
from . import topology


logger = logging.getLogger(__name__)

modules = (address, link, nametable, node, service, topology)


def build():
    """ Return the list of top level commands.
    """

    root = list()

    for module in modules:
        module.register(root)

    return root


def about(program, root, stream=None):

    if stream is None:
        stream = sys.stderr

    stream.write('Transparent Inter-Process Communication Protocol\n')
    stream.write('Usage: %s [OPTIONS] COMMAND [ARGS]\n' % (program))
    stream.write('\n')
    stream.write('Options:\n')
    stream.write(' -h, --help \t\tPrint help for command\n')
    stream.write(' -v, --verbose \t\tLog debugging information\n')
    stream.write('\n')
    stream.write('Commands:\n')
    cmdline.usage_list(root, stream)


def main(argv=None):
    """ Entry point for the pytipc console script. Returns the process exit
        status: zero on success, one for any failure.
    """

    if argv is None:
        argv = sys.argv

    program = os.path.basename(argv[0])

    # The help flag may appear anywhere on the command line; it applies to
    # whichever command the remaining words end up selecting.

    parser = argparse.ArgumentParser(prog=program, add_help=False)
    parser.add_argument('-h', '--help', action='store_true')
    parser.add_argument('-v', '--verbose', action='store_true')

    options, tokens = parser.parse_known_args(argv[1:])

    if options.verbose:
        level = logging.DEBUG
    else:
        level = config.get('log_level').upper()

    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')

    root = build()

    if len(tokens) == 0:
        about(program, root)
        return 1

    arguments = cmdline.Arguments(program, tokens, help=options.help)

    try:
        status = cmdline.dispatch(root, arguments)
    except TipcError as error:
        logger.error(str(error))
        return 1
    except OSError as error:
        logger.error('%s', error.strerror or error)
        return 1

    if status:
        return 1

    return 0


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
