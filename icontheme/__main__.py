"""Entry point for `python -m icontheme`."""

import sys


def main():
    from icontheme.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
