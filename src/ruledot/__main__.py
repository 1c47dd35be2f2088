"""Entry point for 'python -m ruledot' command."""

from ruledot.cli import main

if __name__ == "__main__":
    main()
