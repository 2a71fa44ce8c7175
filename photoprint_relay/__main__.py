"""Entry point for ``python -m photoprint_relay``."""

from .app import main

if __name__ == '__main__':
    main()
