""" A tree of commands, addressed by words on a command line, with
    abbreviation: any prefix of a command name selects that command, as
    long as no sibling shares the prefix. "pytipc li" is "pytipc link" if
    "link" is the only top level command starting with "li".

    Siblings are kept sorted by name as they are inserted. With the list
    sorted, the only sibling that can also match a prefix that the first
    match has is the next one, so ambiguity is detected by looking at a
    single neighbor. Options (trailing key/value pairs) are matched the
    same way.

    Trees are built once, at startup, by ordinary code; see
    :mod:`pytipc.cli` for the command line tool built on this module.
"""

import logging
import sys

from .errors import Ambiguous, InvalidArguments, NotFound


logger = logging.getLogger(__name__)


class Option:
    """ A key accepted by a command, followed by a value on the command
        line: "priority 5".
    """

    def __init__(self, key, usage='', description=''):

        self.key = key
        self.usage = usage
        self.description = description


    @property
    def name(self):
        return self.key


    def __repr__(self):
        return '<Option %s>' % (self.key)


# end of class Option



class Command:
    """ A node in a command tree. A leaf command has a *handler*, invoked as
        ``handler(command, arguments)``; a command with *children* has no
        handler of its own and dispatches to one of its children instead.
    """

    def __init__(self, name, handler=None, usage=None, description='', children=None):

        if handler is None and children is None:
            children = list()

        self.name = name
        self.handler = handler
        self.usage = usage
        self.description = description
        self.children = children
        self.options = list()


    def __repr__(self):
        return '<Command %s>' % (self.name)


    def add(self, command):
        """ Add *command* as a child of this one and return it, so that
            sub-trees can be built inline.
        """

        if self.children is None:
            raise ValueError("leaf command '%s' cannot have children" % (self.name))

        insert(self.children, command)
        return command


    def add_option(self, key, usage='', description=''):

        option = Option(key, usage, description)
        insert(self.options, option)
        return option


# end of class Command



class Arguments:
    """ The words of a command line and a cursor into them. *program* is
        the name the tool was invoked as, *tokens* the words after any
        global options; *help* is set when help for the selected command
        was requested.
    """

    def __init__(self, program, tokens, help=False):

        self.program = program
        self.tokens = list(tokens)
        self.position = 0
        self.help = help


    def __len__(self):
        return len(self.tokens) - self.position


    def current(self):
        """ Return the word under the cursor, or None if all are consumed.
        """

        try:
            return self.tokens[self.position]
        except IndexError:
            return None


    def next(self):
        """ Consume and return the word under the cursor. Raises
            :class:`InvalidArguments` if there are none left.
        """

        token = self.current()
        if token is None:
            raise InvalidArguments('missing argument')

        self.position += 1
        return token


    def remaining(self):
        return self.tokens[self.position:]


    def consumed(self):
        return self.tokens[:self.position]


    def contains(self, word):
        """ Return True if *word* appears, verbatim, among the words not yet
            consumed.
        """

        return word in self.remaining()


# end of class Arguments



def insert(siblings, node):
    """ Insert *node* in the list *siblings*, which is kept sorted by name:
        before the first sibling whose name sorts after it, or at the end.
    """

    for index, existing in enumerate(siblings):
        if existing.name > node.name:
            siblings.insert(index, node)
            return

    siblings.append(node)


def find(siblings, token):
    """ Return the sibling selected by *token*: the first one whose name
        starts with *token*, unless the sibling after it also starts with
        *token*, in which case the abbreviation is ambiguous and None is
        returned. An exact match always wins. Returns None if nothing
        matches.
    """

    if not token:
        return None

    for index, node in enumerate(siblings):
        if not node.name.startswith(token):
            continue

        if node.name == token:
            return node

        try:
            successor = siblings[index + 1]
        except IndexError:
            return node

        if successor.name.startswith(token):
            return None

        return node

    return None


def lookup(siblings, token):
    """ Same as :func:`find`, but raise :class:`pytipc.errors.Ambiguous` or
        :class:`pytipc.errors.NotFound` instead of returning None.
    """

    found = find(siblings, token)

    if found is not None:
        return found

    matches = [node.name for node in siblings if token and node.name.startswith(token)]

    if len(matches) > 1:
        raise Ambiguous('"%s" is ambiguous: %s' % (token, ', '.join(matches)))

    raise NotFound('unknown bareword "%s"' % (token))


def parse_options(command, arguments):
    """ Consume the remaining words of *arguments* as key/value pairs for
        the options of *command*. Keys may be abbreviated like commands.
        Returns a dictionary mapping each full option key to its literal
        value, in command line order. Raises :class:`InvalidArguments` for
        a key without a value, or a key that does not select exactly one
        option.
    """

    values = dict()

    while len(arguments) > 0:
        key = arguments.next()

        if len(arguments) == 0:
            raise InvalidArguments('option "%s" has no value' % (key))

        value = arguments.next()
        option = find(command.options, key)

        if option is None:
            raise InvalidArguments('unknown option "%s"' % (key))

        values[option.key] = value

    return values


def usage(command, arguments, stream=None):
    """ Print a usage line for *command* as selected by the words consumed
        so far. *command* may be None for a bare command prefix.
    """

    if stream is None:
        stream = sys.stderr

    words = [arguments.program] + arguments.consumed()

    if command is not None and command.usage:
        words.append(command.usage)

    stream.write('Usage: ' + ' '.join(words) + '\n')


def usage_list(siblings, stream=None):
    """ Print one line per command in *siblings*: name, usage, description.
    """

    if stream is None:
        stream = sys.stderr

    for command in siblings:
        if command.usage is None:
            synopsis = '...'
        else:
            synopsis = command.usage

        stream.write(' %-15s %-25s %s\n' % (command.name, synopsis, command.description))


def option_help(command, stream=None):

    if stream is None:
        stream = sys.stderr

    if command.options:
        stream.write('\nOptions:\n')

    for option in command.options:
        stream.write(' %-15s %-25s %s\n' % (option.key, option.usage, option.description))


def help(command, arguments, stream=None):
    """ Print the usage line and options of the leaf *command*.
    """

    usage(command, arguments, stream)
    option_help(command, stream)


def dispatch(siblings, arguments, stream=None):
    """ Select a command from *siblings* by the word under the cursor,
        consume that word, and run the command: descend into its children,
        or invoke its handler with the remaining words. Returns an exit
        status, zero for success.

        A word that selects nothing is reported, along with the commands
        that were possible, and results in a non-zero status. If help was
        requested, a leaf command prints its help instead of running, also
        with a non-zero status. :class:`InvalidArguments` raised by a
        handler causes the command's help to be printed before the
        exception propagates.
    """

    if stream is None:
        stream = sys.stderr

    token = arguments.current()

    if token is None:
        usage(None, arguments, stream)
        usage_list(siblings, stream)
        return 1

    try:
        command = lookup(siblings, token)
    except NotFound as error:
        logger.error(str(error))
        usage(None, arguments, stream)
        usage_list(siblings, stream)
        return 1

    arguments.position += 1

    if command.children is not None:
        return dispatch(command.children, arguments, stream)

    if arguments.help:
        help(command, arguments, stream)
        return 1

    position = arguments.position

    try:
        status = command.handler(command, arguments)
    except InvalidArguments:
        arguments.position = position
        help(command, arguments, stream)
        raise

    if status is None:
        status = 0

    return status


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
