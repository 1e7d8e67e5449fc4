# arena/console.py
"""Line-oriented operator console."""

import logging
import sys

logger = logging.getLogger(__name__)

EXIT_WORDS = {"exit", "quit"}


class Console:
    """Reads operator lines from a stream and dispatches each one.

    One line is one command; the next line is not read until the
    current command has finished.
    """

    def __init__(self, handle, dispatcher, stream=None, prompt="> "):
        self.handle = handle
        self.dispatcher = dispatcher
        self.stream = stream if stream is not None else sys.stdin
        self.prompt = prompt

    @property
    def interactive(self):
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def read_line(self):
        """Return the next line without its newline, or None at EOF."""
        if self.interactive:
            sys.stdout.write(self.prompt)
            sys.stdout.flush()
        line = self.stream.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def handle_line(self, line):
        """Dispatch one line.

        Returns:
            bool: False when the operator asked to leave the console
        """
        if line.strip().lower() in EXIT_WORDS:
            return False
        self.dispatcher.dispatch(line, self.handle)
        return True

    def run(self):
        """Process lines until EOF, an exit word, or Ctrl-C."""
        logger.info("Console ready")
        try:
            while True:
                line = self.read_line()
                if line is None or not self.handle_line(line):
                    break
        except KeyboardInterrupt:
            self.handle.logger.print("")
        logger.info("Console closed")
