"""todotxt — plain-text task lists in the todo.txt format."""

from todotxt.config import VERSION

__version__ = VERSION
