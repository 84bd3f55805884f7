"""Allow running as ``python -m tongate``."""

from tongate.main import main

main()
