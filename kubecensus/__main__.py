"""Allow ``python -m kubecensus``."""

from kubecensus.cli import main

if __name__ == "__main__":
    main()
