"""Allow ``python -m popcorn.cli``."""

from .main import main

main()
