"""Entry point for ``python -m evokit``."""

from evokit import main

if __name__ == "__main__":
    main()
