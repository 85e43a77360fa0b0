"""
todoctl - run the CLI with ``python -m todoctl``.
"""
from todoctl.cli import main

if __name__ == "__main__":
    main()
