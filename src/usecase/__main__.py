"""Allow ``python -m usecase``."""

from usecase.cli import main

main()
