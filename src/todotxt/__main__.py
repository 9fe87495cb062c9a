"""Allow ``python -m todotxt``."""

from todotxt.cli import main

if __name__ == "__main__":
    main()
